"""Performance summaries for scoring predictive models across resamples."""

from tunescore.metrics import (ClassResult, ConfusionMatrixStats,
                               confusion_matrix_stats, default_summary,
                               mean_of_successes, mn_log_loss,
                               multi_class_summary, post_resample, pr_summary,
                               r_squared, rmse, two_class_summary)
from tunescore.utils.errors import (InvalidLabelConfiguration,
                                    MissingRequiredArgument,
                                    UndefinedStatistic)

__version__ = "0.1.0"

__all__ = [
    "post_resample",
    "default_summary",
    "two_class_summary",
    "mn_log_loss",
    "multi_class_summary",
    "pr_summary",
    "rmse",
    "r_squared",
    "confusion_matrix_stats",
    "ConfusionMatrixStats",
    "ClassResult",
    "mean_of_successes",
    "InvalidLabelConfiguration",
    "MissingRequiredArgument",
    "UndefinedStatistic",
]
