# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

"""Regression metrics: root mean squared error and R squared."""

from typing import Any, Dict, Optional

import numpy as np
import torch

from tunescore.metrics.metric_utils import METRIC_FUNCTIONS
from tunescore.outcomes import RegressionPair
from tunescore.utils.utils import as_series, to_missing

R_SQUARED_FORMS = ("corr", "traditional")


def _as_pair(pred: Any, obs: Any, na_rm: bool) -> RegressionPair:
    pred = as_series(pred).to_numpy(dtype=np.float64, na_value=np.nan)
    obs = as_series(obs).to_numpy(dtype=np.float64, na_value=np.nan)
    pair = RegressionPair(torch.as_tensor(pred), torch.as_tensor(obs))
    return pair.complete() if na_rm else pair


def _rmse(pair: RegressionPair) -> Optional[float]:
    if pair.is_empty():
        return None
    mse = METRIC_FUNCTIONS["MSE"](pair.pred, pair.obs)
    return to_missing(torch.sqrt(mse))


def _corr_r_squared(pair: RegressionPair) -> Optional[float]:
    n_pred, n_obs = pair.n_distinct()
    if len(pair) < 2 or n_pred < 2 or n_obs < 2:
        return None
    corr = METRIC_FUNCTIONS["Pearson"](pair.pred, pair.obs)
    return to_missing(corr**2)


def _traditional_r_squared(pair: RegressionPair) -> Optional[float]:
    if pair.is_empty():
        return None
    ss_tot = ((pair.obs - pair.obs.mean()) ** 2).sum()
    if float(ss_tot) == 0.0:
        return None
    ss_res = ((pair.obs - pair.pred) ** 2).sum()
    return to_missing(1 - ss_res / ss_tot)


def regression_metrics(pair: RegressionPair) -> Dict[str, Optional[float]]:
    """RMSE and squared correlation of a regression pair.

    R squared is computed on the pairs where both values are present and is
    missing when either side has fewer than two distinct values.
    """
    if pair.is_empty():
        return {"RMSE": None, "Rsquared": None}
    return {"RMSE": _rmse(pair), "Rsquared": _corr_r_squared(pair.complete())}


def rmse(pred: Any, obs: Any, na_rm: bool = False) -> Optional[float]:
    """Root mean squared error, ``sqrt(mean((pred - obs)^2))``.

    Parameters
    ----------
    pred : Any
        Numeric predictions.
    obs : Any
        Numeric observations.
    na_rm : bool, optional
        Drop pairs with a missing value first, by default False (a missing
        value makes the result missing).

    Returns
    -------
    Optional[float]
        The RMSE, or None when undefined.
    """
    return _rmse(_as_pair(pred, obs, na_rm))


def r_squared(
    pred: Any, obs: Any, form: str = "corr", na_rm: bool = False
) -> Optional[float]:
    """Coefficient of determination.

    Parameters
    ----------
    pred : Any
        Numeric predictions.
    obs : Any
        Numeric observations.
    form : str, optional
        ``"corr"`` for the squared Pearson correlation, ``"traditional"`` for
        ``1 - SS_res / SS_tot``, by default ``"corr"``.
    na_rm : bool, optional
        Drop pairs with a missing value first, by default False.

    Returns
    -------
    Optional[float]
        The R squared value, or None when undefined (zero variance, missing
        values, fewer than two points).

    Raises
    ------
    ValueError
        If ``form`` is not one of the supported forms.
    """
    if form not in R_SQUARED_FORMS:
        raise ValueError(f"form must be one of {R_SQUARED_FORMS}, got {form!r}")
    pair = _as_pair(pred, obs, na_rm)
    if bool(pair.pred.isnan().any() | pair.obs.isnan().any()):
        return None
    if form == "corr":
        return _corr_r_squared(pair)
    return _traditional_r_squared(pair)
