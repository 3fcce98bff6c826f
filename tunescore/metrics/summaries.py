# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

"""Summary functions scoring the predictions of one resample.

Every summary takes the same arguments so it can be handed to a tuning
driver as its scoring callback:

data
    DataFrame with columns ``obs`` and ``pred`` and one probability column
    per class label.
lev
    The class labels; the first one is the event of interest.
model
    Name of the model being tuned. Accepted and ignored.
"""

import logging
from typing import Any, Dict, Optional, Sequence

import pandas as pd
import torch

from tunescore.metrics.classification import (compute_confusion_stats,
                                              f_measure, precision,
                                              sensitivity, specificity)
from tunescore.metrics.metric_utils import (ClassResult, binary_auc,
                                            binary_pr_auc, mean_of_successes,
                                            multinomial_log_loss)
from tunescore.tables import ScoringTable
from tunescore.utils.data import (CLASS_STAT_ORDER, DROPPED_STATS,
                                  LOG_LOSS_EPS, PROBABILITY_STAT_ORDER, Task)
from tunescore.utils.errors import InvalidLabelConfiguration
from tunescore.utils.utils import clean_name, normalize_result

logger = logging.getLogger(__name__)


def _two_labels(table: ScoringTable) -> tuple:
    lev = table.declared_levels()
    if len(lev) != 2:
        raise InvalidLabelConfiguration(
            f"Expected exactly two class labels, got {list(lev)}."
        )
    unknown = [label for label in lev if label not in table.levels]
    if unknown:
        raise InvalidLabelConfiguration(
            f"'lev' should be consistent with the observed levels "
            f"{list(table.levels)}, unknown {unknown}"
        )
    return lev


def two_class_summary(
    data: pd.DataFrame, lev: Optional[Sequence[Any]] = None, model: Any = None
) -> Dict[str, Optional[float]]:
    """Area under the ROC curve, sensitivity and specificity.

    The probability column of the first observed level is the score and that
    level is the event. Sensitivity takes ``lev[0]`` as the positive class,
    specificity takes ``lev[1]`` as the negative class.

    Returns
    -------
    Dict[str, Optional[float]]
        ``{"ROC", "Sens", "Spec"}``.

    Raises
    ------
    InvalidLabelConfiguration
        If the outcome has more than two levels or the predicted levels
        differ from the observed ones.
    """
    table = ScoringTable(data, lev, max_levels=2)
    lev = _two_labels(table)
    pair = table.pair()

    event = table.levels[0]
    roc = ClassResult.capture(
        event, binary_auc, table.probability(event), 1 - table.obs_indicator(lev[1])
    )
    if not roc.ok:
        logger.warning("ROC AUC is undefined: %s", roc.error)

    return normalize_result(
        {
            "ROC": roc.value_or_missing(),
            "Sens": sensitivity(pair, lev[0]),
            "Spec": specificity(pair, lev[1]),
        }
    )


def mn_log_loss(
    data: pd.DataFrame, lev: Optional[Sequence[Any]] = None, model: Any = None
) -> Dict[str, Optional[float]]:
    """Multinomial log-loss, ``-1/n sum_i sum_j y_ij log(p_ij)``.

    Rows with a missing observed label or probability are removed first.
    Probabilities are clamped to ``[LOG_LOSS_EPS, 1 - LOG_LOSS_EPS]`` so a
    zero probability for the observed class gives a large finite loss.

    Returns
    -------
    Dict[str, Optional[float]]
        ``{"logLoss"}``.

    Raises
    ------
    MissingRequiredArgument
        If ``lev`` is None.
    InvalidLabelConfiguration
        If ``lev`` names a missing column or a label that is not an observed
        level.
    """
    table = ScoringTable(data, lev, require_pred=False)
    table.check_probability_columns()
    lev = table.lev

    table = table.complete(["obs", *lev])
    probs = table.probabilities(lev).clamp(LOG_LOSS_EPS, 1 - LOG_LOSS_EPS)
    target = torch.as_tensor(table.obs_codes(lev))
    return {"logLoss": multinomial_log_loss(probs, target)}


def multi_class_summary(
    data: pd.DataFrame, lev: Optional[Sequence[Any]] = None, model: Any = None
) -> Dict[str, Optional[float]]:
    """Overall and class-averaged statistics for any number of classes.

    Computes accuracy and Kappa plus the one-vs-all statistics of the
    confusion matrix. With more than two classes each class statistic is
    averaged over the classes and prefixed with ``Mean_``. When ``data`` has
    a probability column for every label in ``lev``, the log-loss and the
    average of the per-class one-vs-all ROC AUCs are added (``ROC`` for two
    classes, ``Mean_AUC`` otherwise). Classes whose AUC cannot be computed
    are left out of that average.

    The result always has the same names in the same order; a statistic that
    could not be computed is None.

    Raises
    ------
    InvalidLabelConfiguration
        If the predicted levels differ from the observed ones.
    """
    table = ScoringTable(data, lev)
    pair = table.pair()
    binary = pair.task == Task.BINARY
    has_class_probs = table.has_class_probs()

    overall: Dict[str, Any] = {}
    if has_class_probs:
        overall["logLoss"] = mn_log_loss(data, lev, model)["logLoss"]
        aucs = [
            ClassResult.capture(label, _one_vs_all_auc, table, label)
            for label in table.levels
        ]
        mean_auc, excluded = mean_of_successes(aucs)
        if excluded:
            logger.warning(
                "AUC undefined for classes %s, averaging the remaining %d",
                excluded,
                len(aucs) - len(excluded),
            )
        overall["ROC" if binary else "Mean_AUC"] = mean_auc

    cm_stats = compute_confusion_stats(pair)
    stats = {**cm_stats.overall, **overall, **cm_stats.class_stats()}
    stats = {
        clean_name(name): value
        for name, value in stats.items()
        if name not in DROPPED_STATS
    }

    order = list(CLASS_STAT_ORDER)
    if has_class_probs:
        order = list(PROBABILITY_STAT_ORDER) + order
    if binary:
        order = [_binary_name(name) for name in order]
    return normalize_result({name: stats.get(name) for name in order})


def _one_vs_all_auc(table: ScoringTable, label: Any) -> float:
    return binary_auc(table.probability(label), table.obs_indicator(label))


def _binary_name(name: str) -> str:
    if name == "Mean_AUC":
        return "ROC"
    return name[len("Mean_"):] if name.startswith("Mean_") else name


def _relevant_pr_auc(table: ScoringTable, label: Any) -> float:
    return binary_pr_auc(table.probability(label), table.obs_indicator(label))


def pr_summary(
    data: pd.DataFrame, lev: Optional[Sequence[Any]] = None, model: Any = None
) -> Dict[str, Optional[float]]:
    """Precision, recall and F score of the first label, plus PR AUC.

    ``AUC`` is the area under the precision-recall curve of the probability
    column of ``lev[0]`` (computed as average precision).

    Returns
    -------
    Dict[str, Optional[float]]
        ``{"AUC", "Precision", "Recall", "F"}``.

    Raises
    ------
    InvalidLabelConfiguration
        If the outcome has more than two levels or the predicted levels
        differ from the observed ones.
    """
    table = ScoringTable(data, lev, max_levels=2)
    lev = _two_labels(table)
    pair = table.pair()
    relevant = lev[0]

    pr_auc = ClassResult.capture(relevant, _relevant_pr_auc, table, relevant)
    return normalize_result(
        {
            "AUC": pr_auc.value_or_missing(),
            "Precision": precision(pair, relevant),
            "Recall": sensitivity(pair, relevant),
            "F": f_measure(pair, relevant),
        }
    )
