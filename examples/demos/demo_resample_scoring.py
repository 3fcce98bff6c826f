import numpy as np
import pandas as pd
import torch

from tunescore import (default_summary, mn_log_loss, multi_class_summary,
                       post_resample, two_class_summary)

generator = torch.Generator().manual_seed(1)
rng = np.random.default_rng(1)

# Step 1) Regression: score a few candidate predictions against one outcome
observed = torch.randn(10, generator=generator)
candidates = torch.randn(10, 5, generator=generator)
for column in range(candidates.shape[1]):
    print(f"candidate {column}:", post_resample(candidates[:, column], observed))

# Step 2) Build a two-class scoring table like a tuning driver would
classes = ["class1", "class2"]
n = 50
two_class = pd.DataFrame(
    {
        "obs": pd.Categorical(rng.choice(classes, n), categories=classes),
        "pred": pd.Categorical(rng.choice(classes, n), categories=classes),
    }
)
two_class["class1"] = rng.uniform(size=n)
two_class["class2"] = 1 - two_class["class1"]

# Step 3) Score it with each summary
print("default:", default_summary(two_class, lev=classes))
print("two class:", two_class_summary(two_class, lev=classes))
print("log loss:", mn_log_loss(two_class, lev=classes))

# Step 4) Three classes with softmax probabilities
classes = ["a", "b", "c"]
logits = torch.randn(n, 3, generator=generator)
probs = torch.softmax(logits, dim=1).numpy()
three_class = pd.DataFrame(
    {
        "obs": pd.Categorical(rng.choice(classes, n), categories=classes),
        "pred": pd.Categorical(
            [classes[i] for i in probs.argmax(axis=1)], categories=classes
        ),
    }
)
for i, label in enumerate(classes):
    three_class[label] = probs[:, i]

# Step 5) Score each resample fold and average, as a tuning driver would
folds = np.array_split(np.arange(n), 5)
fold_results = pd.DataFrame(
    [multi_class_summary(three_class.iloc[idx], lev=classes) for idx in folds]
)
print(fold_results.mean(axis=0))
