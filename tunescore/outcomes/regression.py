# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

from torch import Tensor

from tunescore.outcomes.base import OutcomePair
from tunescore.utils.data import OutcomeType


class RegressionPair(OutcomePair):
    """Numeric predictions paired with numeric observations (float64)."""

    outcome_type = OutcomeType.REGRESSION

    def complete(self) -> "RegressionPair":
        """Return the pairs where neither side is NaN."""
        keep = ~(self.pred.isnan() | self.obs.isnan())
        return RegressionPair(self.pred[keep], self.obs[keep])

    def n_distinct(self) -> tuple:
        """Number of distinct predicted and observed values."""
        return (
            int(self.pred.unique().numel()),
            int(self.obs.unique().numel()),
        )
