"""Performance summaries for scoring model predictions."""

from tunescore.metrics.base import default_summary, post_resample
from tunescore.metrics.classification import (ConfusionMatrixStats,
                                              confusion_matrix_stats)
from tunescore.metrics.metric_utils import (METRIC_FUNCTIONS, ClassResult,
                                            mean_of_successes)
from tunescore.metrics.regression import r_squared, rmse
from tunescore.metrics.summaries import (mn_log_loss, multi_class_summary,
                                         pr_summary, two_class_summary)

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
    "METRIC_FUNCTIONS",
]
