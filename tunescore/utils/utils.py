# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

import math
import re
from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import pandas as pd


def to_missing(value: Any) -> Optional[float]:
    """Convert a metric value to a float, mapping NaN and None to None.

    Parameters
    ----------
    value : Any
        A Python number, numpy scalar or single element tensor.

    Returns
    -------
    Optional[float]
        The value as a float, or None when it is missing or NaN.
    """
    if value is None:
        return None
    value = float(value.item()) if hasattr(value, "item") else float(value)
    if math.isnan(value):
        return None
    return value


def normalize_result(values: Dict[str, Any]) -> Dict[str, Optional[float]]:
    """Return a copy of a metric mapping with every NaN replaced by None."""
    return {name: to_missing(value) for name, value in values.items()}


def clean_name(name: str) -> str:
    """Collapse runs of blanks in a metric name into single underscores."""
    return re.sub(r"[ \t]+", "_", name)


def as_series(values: Any) -> pd.Series:
    """Wrap an array-like (list, ndarray, Categorical, tensor) in a Series."""
    if isinstance(values, pd.Series):
        return values.reset_index(drop=True)
    if hasattr(values, "detach"):
        values = values.detach().cpu().numpy()
    return pd.Series(values)


def is_categorical(values: pd.Series) -> bool:
    """Whether a Series holds class labels rather than numeric outcomes."""
    if isinstance(values.dtype, pd.CategoricalDtype):
        return True
    if pd.api.types.is_bool_dtype(values.dtype):
        return True
    return not pd.api.types.is_numeric_dtype(values.dtype)


def levels_of(values: pd.Series) -> Tuple[Any, ...]:
    """Return the ordered label set of a Series.

    Categorical data keeps its declared categories (including unused ones).
    Anything else gets the sorted unique non-missing values.
    """
    if isinstance(values.dtype, pd.CategoricalDtype):
        return tuple(values.cat.categories)
    return tuple(sorted(values.dropna().unique()))


def encode_labels(values: pd.Series, levels: Sequence[Any]) -> np.ndarray:
    """Integer codes of ``values`` against ``levels``; -1 marks missing or unknown."""
    values = np.asarray(values, dtype=object)
    codes = pd.Index(list(levels)).get_indexer(values)
    codes[pd.isna(values)] = -1
    return codes.astype(np.int64)
