# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

"""Performance of one resample for regression or classification outcomes."""

import logging
from typing import Any, Dict, Optional, Sequence

import pandas as pd

from tunescore.metrics.classification import agreement
from tunescore.metrics.regression import regression_metrics
from tunescore.outcomes import make_pair
from tunescore.utils.data import OutcomeType
from tunescore.utils.utils import is_categorical, normalize_result

logger = logging.getLogger(__name__)


def post_resample(pred: Any, obs: Any) -> Dict[str, Optional[float]]:
    """Compute performance of predictions against observations.

    Positions with a missing prediction are dropped from both vectors. For
    numeric observations the result is ``{"RMSE", "Rsquared"}``, R squared
    being the squared correlation (missing when either vector has fewer than
    two distinct values). For categorical observations the predictions are
    recoded to the observed label set and the result is
    ``{"Accuracy", "Kappa"}``.

    Parameters
    ----------
    pred : Any
        Predicted outcomes.
    obs : Any
        Observed outcomes, aligned with ``pred``.

    Returns
    -------
    Dict[str, Optional[float]]
        Metric name to value; None marks an undefined value.

    Raises
    ------
    ValueError
        If ``pred`` and ``obs`` differ in length.
    """
    pair = make_pair(pred, obs)
    logger.debug("Scoring %d %s rows", len(pair), pair.outcome_type.value)

    if pair.outcome_type == OutcomeType.REGRESSION:
        return normalize_result(regression_metrics(pair))
    elif pair.outcome_type == OutcomeType.CLASSIFICATION:
        return normalize_result(agreement(pair))
    else:
        raise ValueError(f"Unsupported outcome type: {pair.outcome_type}")


def default_summary(
    data: pd.DataFrame, lev: Optional[Sequence[Any]] = None, model: Any = None
) -> Dict[str, Optional[float]]:
    """Default scoring callback, ``post_resample(data["pred"], data["obs"])``.

    Plain (non-categorical) label observations are given the levels ``lev``
    first, so labels outside ``lev`` are not scored.
    """
    obs = data["obs"]
    if lev is not None and is_categorical(obs) and not isinstance(
        obs.dtype, pd.CategoricalDtype
    ):
        obs = obs.where(obs.isin(list(lev)))
        obs = pd.Series(pd.Categorical(obs, categories=list(lev)), index=obs.index)
    return post_resample(data["pred"], obs)
