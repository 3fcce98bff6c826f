# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

import torch
import torchmetrics
from torch import Tensor

from tunescore.utils.errors import UndefinedStatistic
from tunescore.utils.utils import to_missing

METRIC_FUNCTIONS = {
    "Accuracy": torchmetrics.functional.classification.multiclass_accuracy,
    "Kappa": torchmetrics.functional.classification.multiclass_cohen_kappa,
    "ConfusionMatrix": torchmetrics.functional.classification.multiclass_confusion_matrix,
    "AUROC": torchmetrics.functional.classification.binary_auroc,
    "AveragePrecision": torchmetrics.functional.classification.binary_average_precision,
    "MSE": torchmetrics.functional.mean_squared_error,
    "Pearson": torchmetrics.functional.pearson_corrcoef,
}


@dataclass(frozen=True)
class ClassResult:
    """Outcome of computing one statistic for one class label.

    Exactly one of ``value`` and ``error`` is set.
    """

    label: Any
    value: Optional[float] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def capture(cls, label: Any, fn: Callable[..., Any], *args: Any) -> "ClassResult":
        """Run ``fn(*args)`` and record either its value or why it is undefined.

        Label lookups (KeyError), invalid inputs (ValueError), torch failures
        (RuntimeError) and degenerate data (UndefinedStatistic) become an
        error entry. A NaN result is treated as undefined as well.
        """
        try:
            value = to_missing(fn(*args))
        except (UndefinedStatistic, KeyError, ValueError, RuntimeError) as e:
            return cls(label=label, error=e)
        if value is None:
            return cls(label=label, error=UndefinedStatistic(f"{label!r}: result is NaN"))
        return cls(label=label, value=value)

    def value_or_missing(self) -> Optional[float]:
        return self.value if self.ok else None


def mean_of_successes(
    results: Sequence[ClassResult],
) -> Tuple[Optional[float], List[Any]]:
    """Average the successful class results.

    Parameters
    ----------
    results : Sequence[ClassResult]
        One result per class label.

    Returns
    -------
    Tuple[Optional[float], List[Any]]
        The mean over successful results (None when none succeeded) and the
        labels that were excluded.
    """
    values = [r.value for r in results if r.ok]
    excluded = [r.label for r in results if not r.ok]
    if not values:
        return None, excluded
    return sum(values) / len(values), excluded


def _check_binary_scores(scores: Tensor, target: Tensor) -> None:
    if scores.numel() == 0:
        raise UndefinedStatistic("no rows to score")
    if bool(scores.isnan().any()):
        raise UndefinedStatistic("scores contain missing values")
    n_events = int(target.sum())
    if n_events == 0 or n_events == target.numel():
        raise UndefinedStatistic("target contains a single class")


def binary_auc(scores: Tensor, target: Tensor) -> float:
    """Area under the ROC curve of ``scores`` for the 0/1 ``target``.

    Raises
    ------
    UndefinedStatistic
        If there are no rows, missing scores, or only one class in ``target``.
    """
    _check_binary_scores(scores, target)
    return float(METRIC_FUNCTIONS["AUROC"](scores, target.long()).item())


def binary_pr_auc(scores: Tensor, target: Tensor) -> float:
    """Area under the precision-recall curve (average precision)."""
    _check_binary_scores(scores, target)
    return float(METRIC_FUNCTIONS["AveragePrecision"](scores, target.long()).item())


def multinomial_log_loss(probs: Tensor, target: Tensor) -> Optional[float]:
    """Mean negative log-likelihood of the observed classes.

    Parameters
    ----------
    probs : Tensor
        (n, k) float tensor of class probabilities, already clamped away
        from 0 and 1.
    target : Tensor
        (n,) integer tensor of column indices of the observed class. Rows
        with -1 have no matching column and contribute zero.

    Returns
    -------
    Optional[float]
        The log-loss, or None when there are no rows.
    """
    n = target.shape[0]
    if n == 0:
        return None
    known = (target >= 0).unsqueeze(1)
    onehot = torch.nn.functional.one_hot(target.clamp(min=0), num_classes=probs.shape[1])
    onehot = onehot.to(probs.dtype) * known
    return to_missing(-(onehot * probs.log()).sum() / n)
