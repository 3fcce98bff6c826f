# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

from torch import Tensor

from tunescore.utils.data import OutcomeType


class OutcomePair:
    """Base class for paired predicted/observed outcomes of one resample.

    Subclasses fix ``outcome_type`` so callers can branch on the tag instead
    of inspecting the values again.
    """

    outcome_type: OutcomeType

    def __init__(self, pred: Tensor, obs: Tensor):
        """Initialize an OutcomePair instance.

        Parameters
        ----------
        pred : Tensor
            1D tensor of predicted outcomes.
        obs : Tensor
            1D tensor of observed outcomes, aligned with ``pred``.
        """
        if pred.shape != obs.shape:
            raise ValueError(
                f"pred and obs must have the same shape, got {tuple(pred.shape)} "
                f"and {tuple(obs.shape)}."
            )
        self.pred = pred
        self.obs = obs

    def __len__(self) -> int:
        return int(self.obs.shape[0])

    def is_empty(self) -> bool:
        return len(self) == 0
