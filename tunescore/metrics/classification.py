# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

"""Classification metrics built on the predicted/observed confusion matrix."""

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

import pandas as pd
import torch
from scipy import stats
from torch import Tensor

from tunescore.metrics.metric_utils import METRIC_FUNCTIONS
from tunescore.outcomes import ClassificationPair, make_pair
from tunescore.utils.data import BY_CLASS_STATS, Task
from tunescore.utils.utils import to_missing


def confusion_matrix(pair: ClassificationPair) -> Tensor:
    """Counts with observed classes in rows and predicted classes in columns."""
    k = pair.num_classes
    if k < 2 or pair.is_empty():
        flat = torch.bincount(pair.obs * k + pair.pred, minlength=k * k)
        return flat.reshape(k, k)
    return METRIC_FUNCTIONS["ConfusionMatrix"](pair.pred, pair.obs, num_classes=k)


def agreement(pair: ClassificationPair) -> Dict[str, Optional[float]]:
    """Overall accuracy and Cohen's Kappa of a classification pair."""
    if pair.is_empty():
        return {"Accuracy": None, "Kappa": None}
    if pair.num_classes < 2:
        # Chance agreement is 1 with a single level, so Kappa is 0/0.
        return {"Accuracy": 1.0, "Kappa": None}

    accuracy = METRIC_FUNCTIONS["Accuracy"](
        pair.pred, pair.obs, num_classes=pair.num_classes, average="micro"
    )
    kappa = METRIC_FUNCTIONS["Kappa"](pair.pred, pair.obs, num_classes=pair.num_classes)
    return {"Accuracy": to_missing(accuracy), "Kappa": to_missing(kappa)}


def _ratio(numerator: Tensor, denominator: Tensor) -> Optional[float]:
    if float(denominator) == 0.0:
        return None
    return to_missing(numerator / denominator)


def sensitivity(pair: ClassificationPair, positive: Any) -> Optional[float]:
    """Share of observed ``positive`` rows predicted as ``positive``."""
    idx = pair.levels.index(positive)
    cm = confusion_matrix(pair)
    return _ratio(cm[idx, idx], cm[idx, :].sum())


def specificity(pair: ClassificationPair, negative: Any) -> Optional[float]:
    """Share of observed ``negative`` rows predicted as ``negative``."""
    return sensitivity(pair, negative)


def precision(pair: ClassificationPair, relevant: Any) -> Optional[float]:
    """Share of rows predicted as ``relevant`` that are observed ``relevant``."""
    idx = pair.levels.index(relevant)
    cm = confusion_matrix(pair)
    return _ratio(cm[idx, idx], cm[:, idx].sum())


def f_measure(
    pair: ClassificationPair, relevant: Any, beta: float = 1.0
) -> Optional[float]:
    """F score combining precision and recall of ``relevant``."""
    prec = precision(pair, relevant)
    rec = sensitivity(pair, relevant)
    if prec is None or rec is None or (beta**2 * prec + rec) == 0:
        return None
    return (1 + beta**2) * prec * rec / (beta**2 * prec + rec)


@dataclass
class ConfusionMatrixStats:
    """Confusion matrix with its overall and one-vs-rest class statistics.

    Attributes
    ----------
    table : pd.DataFrame
        Counts with predicted labels as index and observed labels as columns.
    overall : Dict[str, Optional[float]]
        Accuracy, Kappa, AccuracyLower, AccuracyUpper, AccuracyNull,
        AccuracyPValue and McnemarPValue.
    by_class : pd.DataFrame
        One row per level, one column per statistic in ``BY_CLASS_STATS``.
        Undefined entries are NaN.
    task : Task
        Binary or multiclass, as decided by the number of levels.
    """

    table: pd.DataFrame
    overall: Dict[str, Optional[float]]
    by_class: pd.DataFrame
    task: Task

    @property
    def levels(self) -> Tuple[Any, ...]:
        return tuple(self.by_class.index)

    def class_stats(self) -> Dict[str, Optional[float]]:
        """Class statistics as a flat mapping.

        With two levels these are the statistics of the first level taken as
        the positive class. Otherwise each statistic is averaged over the
        levels and its name gets a ``"Mean "`` prefix.
        """
        if self.task == Task.BINARY:
            row = self.by_class.iloc[0]
            return {name: to_missing(row[name]) for name in BY_CLASS_STATS}
        means = self.by_class.mean(axis=0, skipna=False)
        return {f"Mean {name}": to_missing(means[name]) for name in BY_CLASS_STATS}


def _by_class(cm: Tensor, levels: Sequence[Any]) -> pd.DataFrame:
    cm = cm.to(torch.float64)
    n = cm.sum()
    tp = cm.diagonal()
    fn = cm.sum(dim=1) - tp
    fp = cm.sum(dim=0) - tp
    tn = n - tp - fn - fp

    sens = tp / (tp + fn)
    spec = tn / (tn + fp)
    ppv = tp / (tp + fp)
    npv = tn / (tn + fn)
    columns = {
        "Sensitivity": sens,
        "Specificity": spec,
        "Pos Pred Value": ppv,
        "Neg Pred Value": npv,
        "Precision": ppv,
        "Recall": sens,
        "F1": 2 * ppv * sens / (ppv + sens),
        "Prevalence": (tp + fn) / n,
        "Detection Rate": tp / n,
        "Detection Prevalence": (tp + fp) / n,
        "Balanced Accuracy": (sens + spec) / 2,
    }
    return pd.DataFrame(
        {name: values.numpy() for name, values in columns.items()},
        index=pd.Index(levels, name="Class"),
    )


def _mcnemar_pvalue(cm: Tensor) -> float:
    """McNemar (two classes) or Bowker (more classes) symmetry test p-value."""
    k = cm.shape[0]
    if k < 2:
        return math.nan
    cm = cm.to(torch.float64)
    upper = torch.triu_indices(k, k, offset=1)
    above = cm[upper[0], upper[1]]
    below = cm[upper[1], upper[0]]
    if bool(((above + below) == 0).any()):
        return math.nan
    if k == 2:
        statistic = (float((above - below).abs().sum()) - 1) ** 2 / float((above + below).sum())
    else:
        statistic = float((((above - below) ** 2) / (above + below)).sum())
    df = k * (k - 1) // 2
    return float(stats.chi2.sf(statistic, df))


def _overall(pair: ClassificationPair, cm: Tensor) -> Dict[str, Optional[float]]:
    overall = dict(agreement(pair))
    n = int(cm.sum())
    if n == 0:
        overall.update(
            AccuracyLower=None,
            AccuracyUpper=None,
            AccuracyNull=None,
            AccuracyPValue=None,
            McnemarPValue=None,
        )
        return overall

    correct = int(cm.diagonal().sum())
    null_rate = float(cm.sum(dim=1).max()) / n
    interval = stats.binomtest(correct, n).proportion_ci(
        confidence_level=0.95, method="exact"
    )
    p_value = stats.binomtest(correct, n, p=null_rate, alternative="greater").pvalue
    overall.update(
        AccuracyLower=to_missing(interval.low),
        AccuracyUpper=to_missing(interval.high),
        AccuracyNull=null_rate,
        AccuracyPValue=to_missing(p_value),
        McnemarPValue=to_missing(_mcnemar_pvalue(cm)),
    )
    return overall


def compute_confusion_stats(pair: ClassificationPair) -> ConfusionMatrixStats:
    """Confusion matrix statistics of a classification pair."""
    cm = confusion_matrix(pair)
    table = pd.DataFrame(
        cm.T.numpy(),
        index=pd.Index(pair.levels, name="Prediction"),
        columns=pd.Index(pair.levels, name="Reference"),
    )
    return ConfusionMatrixStats(
        table=table,
        overall=_overall(pair, cm),
        by_class=_by_class(cm, pair.levels),
        task=pair.task,
    )


def confusion_matrix_stats(
    pred: Any, obs: Any, levels: Optional[Sequence[Any]] = None
) -> ConfusionMatrixStats:
    """Cross-tabulate predicted against observed labels and summarise them.

    Parameters
    ----------
    pred : Any
        Predicted class labels.
    obs : Any
        Observed class labels.
    levels : Optional[Sequence[Any]], optional
        Label set, by default the levels of ``obs``. The first level is the
        positive class of a two-class problem.

    Returns
    -------
    ConfusionMatrixStats
        The table plus overall and per-class statistics.

    Raises
    ------
    TypeError
        If ``obs`` is numeric and no ``levels`` are given.
    """
    pair = make_pair(pred, obs, levels)
    if not isinstance(pair, ClassificationPair):
        raise TypeError("confusion_matrix_stats needs categorical observations.")
    return compute_confusion_stats(pair)
