# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

from typing import Any, Sequence, Tuple

from torch import Tensor

from tunescore.outcomes.base import OutcomePair
from tunescore.utils.data import OutcomeType, Task


class ClassificationPair(OutcomePair):
    """Predicted class labels paired with observed class labels.

    Both sides are stored as integer codes into the shared ``levels`` tuple.
    Only rows where both labels are known are kept, so every code is a valid
    index into ``levels``.
    """

    outcome_type = OutcomeType.CLASSIFICATION

    def __init__(self, pred: Tensor, obs: Tensor, levels: Sequence[Any]):
        """Initialize a ClassificationPair instance.

        Parameters
        ----------
        pred : Tensor
            1D integer tensor of predicted class codes.
        obs : Tensor
            1D integer tensor of observed class codes.
        levels : Sequence[Any]
            Ordered label set the codes index into.
        """
        super().__init__(pred, obs)
        self.levels: Tuple[Any, ...] = tuple(levels)

    @property
    def num_classes(self) -> int:
        return len(self.levels)

    @property
    def task(self) -> Task:
        return Task.BINARY if self.num_classes == 2 else Task.MULTICLASS
