"""Constants, enums and small helpers shared across the library."""

from tunescore.utils.data import (BY_CLASS_STATS, CLASS_STAT_ORDER,
                                  DROPPED_STATS, LOG_LOSS_EPS,
                                  PROBABILITY_STAT_ORDER, OutcomeType, Task)
from tunescore.utils.errors import (InvalidLabelConfiguration,
                                    MissingRequiredArgument,
                                    UndefinedStatistic)
from tunescore.utils.utils import (as_series, clean_name, encode_labels,
                                   is_categorical, levels_of,
                                   normalize_result, to_missing)

__all__ = [
    "BY_CLASS_STATS",
    "CLASS_STAT_ORDER",
    "DROPPED_STATS",
    "LOG_LOSS_EPS",
    "PROBABILITY_STAT_ORDER",
    "OutcomeType",
    "Task",
    "InvalidLabelConfiguration",
    "MissingRequiredArgument",
    "UndefinedStatistic",
    "as_series",
    "clean_name",
    "encode_labels",
    "is_categorical",
    "levels_of",
    "normalize_result",
    "to_missing",
]
