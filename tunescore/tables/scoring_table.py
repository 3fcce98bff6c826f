# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

import copy
import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
import torch
from torch import Tensor

from tunescore.outcomes import ClassificationPair, make_pair
from tunescore.utils.errors import (InvalidLabelConfiguration,
                                    MissingRequiredArgument)
from tunescore.utils.utils import encode_labels, levels_of

logger = logging.getLogger(__name__)


class ScoringTable:
    """Validated view over the scoring table of one resample.

    The table is a DataFrame with an ``obs`` column, usually a ``pred``
    column, and optionally one probability column per class label. Label
    checks happen once, here, so the summary functions can assume a
    consistent label schema.
    """

    def __init__(
        self,
        data: pd.DataFrame,
        lev: Optional[Sequence[Any]] = None,
        max_levels: Optional[int] = None,
        require_pred: bool = True,
    ):
        """Initialize and validate a ScoringTable.

        Parameters
        ----------
        data : pd.DataFrame
            Scoring table with columns ``obs`` and ``pred`` plus class
            probability columns.
        lev : Optional[Sequence[Any]], optional
            Declared class labels, by default None.
        max_levels : Optional[int], optional
            Maximum number of observed levels allowed, by default unlimited.
        require_pred : bool, optional
            If True, ``pred`` must exist and carry the same levels as ``obs``.

        Raises
        ------
        TypeError
            If ``data`` is not a DataFrame.
        KeyError
            If a required column is missing.
        InvalidLabelConfiguration
            If there are too many levels or the predicted levels differ
            from the observed ones.
        """
        if not isinstance(data, pd.DataFrame):
            raise TypeError(f"data must be a pandas.DataFrame, got {type(data)}.")
        if "obs" not in data.columns:
            raise KeyError("data must have an 'obs' column.")

        self.data = data.reset_index(drop=True)
        self.lev = tuple(lev) if lev is not None else None
        self.levels = self._column_levels(self.data["obs"])

        if max_levels is not None and len(self.levels) > max_levels:
            raise InvalidLabelConfiguration(
                f"Your outcome has {len(self.levels)} levels, at most "
                f"{max_levels} are supported by this summary."
            )

        if require_pred:
            if "pred" not in self.data.columns:
                raise KeyError("data must have a 'pred' column.")
            pred_levels = self._column_levels(self.data["pred"], self.levels)
            if pred_levels != self.levels:
                raise InvalidLabelConfiguration(
                    "levels of observed and predicted data do not match: "
                    f"{list(self.levels)} vs {list(pred_levels)}"
                )

    def _column_levels(
        self, column: pd.Series, reference: Optional[Tuple[Any, ...]] = None
    ) -> Tuple[Any, ...]:
        if isinstance(column.dtype, pd.CategoricalDtype):
            return levels_of(column)
        values = levels_of(column)
        # Plain labels inherit the reference level set only when they fit in it.
        if reference is not None:
            return reference if set(values) <= set(reference) else values
        if self.lev is not None:
            return self.lev
        return values

    @property
    def num_classes(self) -> int:
        return len(self.levels)

    def __len__(self) -> int:
        return len(self.data)

    def declared_levels(self) -> Tuple[Any, ...]:
        """Declared labels, falling back to the observed levels."""
        return self.lev if self.lev is not None else self.levels

    def require_lev(self) -> Tuple[Any, ...]:
        """Return ``lev`` or fail when it was not supplied.

        Raises
        ------
        MissingRequiredArgument
            If ``lev`` is None.
        """
        if self.lev is None:
            raise MissingRequiredArgument("'lev' cannot be None")
        return self.lev

    def has_class_probs(self) -> bool:
        """Whether a probability column exists for every declared label."""
        return self.lev is not None and all(
            label in self.data.columns for label in self.lev
        )

    def check_probability_columns(self) -> None:
        """Ensure ``lev`` names probability columns and observed levels.

        Raises
        ------
        MissingRequiredArgument
            If ``lev`` is None.
        InvalidLabelConfiguration
            If a declared label has no column or is not an observed level.
        """
        lev = self.require_lev()
        missing = [label for label in lev if label not in self.data.columns]
        if missing:
            raise InvalidLabelConfiguration(
                f"'data' should have columns consistent with 'lev', missing {missing}"
            )
        unknown = [label for label in lev if label not in self.levels]
        if unknown:
            raise InvalidLabelConfiguration(
                f"'data$obs' should have levels consistent with 'lev', unknown {unknown}"
            )

    def complete(self, columns: Sequence[Any]) -> "ScoringTable":
        """Return a table restricted to rows without missing values in ``columns``."""
        keep = self.data[list(columns)].notna().all(axis=1)
        if not keep.all():
            logger.debug("Dropping %d incomplete rows", int((~keep).sum()))
        table = copy.copy(self)
        table.data = self.data[keep].reset_index(drop=True)
        return table

    def obs_codes(self, levels: Optional[Sequence[Any]] = None) -> np.ndarray:
        """Integer codes of ``obs`` against ``levels`` (default: observed levels)."""
        return encode_labels(self.data["obs"], levels or self.levels)

    def obs_indicator(self, label: Any) -> Tensor:
        """1 where the observed label equals ``label``, else 0."""
        return torch.tensor((self.data["obs"] == label).to_numpy(dtype=np.int64))

    def probabilities(self, labels: Sequence[Any]) -> Tensor:
        """Float64 probability matrix with one column per label, in order."""
        return torch.tensor(
            self.data[list(labels)].to_numpy(dtype=np.float64, na_value=np.nan)
        )

    def probability(self, label: Any) -> Tensor:
        """Float64 probability column of a single label."""
        return torch.tensor(
            self.data[label].to_numpy(dtype=np.float64, na_value=np.nan)
        )

    def pair(self) -> ClassificationPair:
        """Predicted/observed labels as a ClassificationPair on the table levels."""
        return make_pair(self.data["pred"], self.data["obs"], self.levels)
