import pandas as pd
import pytest

TWO_CLASSES = ["class1", "class2"]
THREE_CLASSES = ["a", "b", "c"]


def make_table(obs, pred, levels, probabilities=None):
    """Build a scoring table with categorical obs/pred and probability columns."""
    data = pd.DataFrame(
        {
            "obs": pd.Categorical(obs, categories=levels),
            "pred": pd.Categorical(pred, categories=levels),
        }
    )
    for label, column in (probabilities or {}).items():
        data[label] = column
    return data


@pytest.fixture
def separated_two_class_data() -> pd.DataFrame:
    """Two classes where every class1 row outranks every class2 row."""
    class1 = [0.9, 0.8, 0.7, 0.3, 0.2, 0.1]
    return make_table(
        obs=["class1"] * 3 + ["class2"] * 3,
        pred=["class1"] * 3 + ["class2"] * 3,
        levels=TWO_CLASSES,
        probabilities={"class1": class1, "class2": [1 - p for p in class1]},
    )


@pytest.fixture
def mixed_two_class_data() -> pd.DataFrame:
    """Two classes, 6 of 8 rows correct, ROC AUC of 14/16.

    Sensitivity, specificity, predictive values and accuracy are all 0.75,
    Kappa is 0.5.
    """
    class1 = [0.9, 0.8, 0.6, 0.4, 0.7, 0.3, 0.2, 0.1]
    return make_table(
        obs=["class1"] * 4 + ["class2"] * 4,
        pred=["class1", "class1", "class1", "class2", "class1", "class2", "class2", "class2"],
        levels=TWO_CLASSES,
        probabilities={"class1": class1, "class2": [1 - p for p in class1]},
    )


@pytest.fixture
def three_class_data() -> pd.DataFrame:
    """Three classes, two of three rows correct per class.

    Every class has TP=2, FN=1, FP=1, TN=5, so accuracy is 2/3 and Kappa 0.5.
    """
    return make_table(
        obs=["a", "a", "a", "b", "b", "b", "c", "c", "c"],
        pred=["a", "a", "b", "b", "b", "c", "c", "c", "a"],
        levels=THREE_CLASSES,
        probabilities={
            "a": [0.8, 0.6, 0.3, 0.1, 0.2, 0.1, 0.1, 0.2, 0.5],
            "b": [0.1, 0.3, 0.5, 0.8, 0.6, 0.3, 0.1, 0.2, 0.2],
            "c": [0.1, 0.1, 0.2, 0.1, 0.2, 0.6, 0.8, 0.6, 0.3],
        },
    )


@pytest.fixture
def unobserved_class_data() -> pd.DataFrame:
    """Three declared classes, but class c is never observed or predicted."""
    return make_table(
        obs=["a", "a", "b", "b"],
        pred=["a", "b", "b", "b"],
        levels=THREE_CLASSES,
        probabilities={
            "a": [0.9, 0.6, 0.2, 0.1],
            "b": [0.1, 0.4, 0.8, 0.9],
            "c": [0.0, 0.0, 0.0, 0.0],
        },
    )


@pytest.fixture
def table_factory():
    """Factory building scoring tables from obs/pred lists."""
    return make_table
