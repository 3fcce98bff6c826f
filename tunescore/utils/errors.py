# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0


class InvalidLabelConfiguration(ValueError):
    """Observed, predicted and probability labels do not form a usable schema."""


class MissingRequiredArgument(ValueError):
    """A required argument (such as ``lev``) was not supplied."""


class UndefinedStatistic(ArithmeticError):
    """A statistic cannot be computed for degenerate input."""
