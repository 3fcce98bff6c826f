"""Validated scoring tables passed to the summary functions."""

from tunescore.tables.scoring_table import ScoringTable

__all__ = ["ScoringTable"]
