# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

import logging
from typing import Any, Optional, Sequence

import numpy as np
import torch

from tunescore.outcomes.base import OutcomePair
from tunescore.outcomes.classification import ClassificationPair
from tunescore.outcomes.regression import RegressionPair
from tunescore.utils.utils import (as_series, encode_labels, is_categorical,
                                   levels_of)

logger = logging.getLogger(__name__)


def make_pair(
    pred: Any, obs: Any, levels: Optional[Sequence[Any]] = None
) -> OutcomePair:
    """Build the outcome pair for a predicted/observed vector.

    Positions where ``pred`` is missing are removed from both sides first.
    Passing ``levels`` forces a ClassificationPair. Otherwise the observed
    values decide the branch: categorical or non-numeric observations give a
    ClassificationPair, numeric ones a RegressionPair.

    Parameters
    ----------
    pred : Any
        Predicted outcomes (list, ndarray, Series, Categorical or tensor).
    obs : Any
        Observed outcomes of the same length.
    levels : Optional[Sequence[Any]], optional
        Label set for classification, by default the levels of ``obs``.

    Returns
    -------
    OutcomePair
        A RegressionPair or a ClassificationPair.

    Raises
    ------
    ValueError
        If ``pred`` and ``obs`` differ in length.
    """
    pred = as_series(pred)
    obs = as_series(obs)
    if len(pred) != len(obs):
        raise ValueError(
            f"pred and obs must have the same length, got {len(pred)} and {len(obs)}."
        )

    keep = ~pred.isna().to_numpy()
    if not keep.all():
        logger.debug("Dropping %d rows with a missing prediction", int((~keep).sum()))
    pred = pred[keep].reset_index(drop=True)
    obs = obs[keep].reset_index(drop=True)

    if levels is None and not is_categorical(obs):
        return RegressionPair(
            torch.as_tensor(pred.to_numpy(dtype=np.float64, na_value=np.nan)),
            torch.as_tensor(obs.to_numpy(dtype=np.float64, na_value=np.nan)),
        )

    levels = tuple(levels) if levels is not None else levels_of(obs)
    pred_codes = encode_labels(pred, levels)
    obs_codes = encode_labels(obs, levels)
    known = (pred_codes >= 0) & (obs_codes >= 0)
    if not known.all():
        logger.debug(
            "Dropping %d rows with labels outside %s", int((~known).sum()), levels
        )
    return ClassificationPair(
        torch.as_tensor(pred_codes[known]),
        torch.as_tensor(obs_codes[known]),
        levels,
    )
