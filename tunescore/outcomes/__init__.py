"""Tagged predicted/observed outcome pairs."""

from tunescore.outcomes.base import OutcomePair
from tunescore.outcomes.classification import ClassificationPair
from tunescore.outcomes.factory import make_pair
from tunescore.outcomes.regression import RegressionPair

__all__ = [
    "OutcomePair",
    "ClassificationPair",
    "RegressionPair",
    "make_pair",
]
