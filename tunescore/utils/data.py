# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

from enum import Enum

# Probabilities are clamped to [LOG_LOSS_EPS, 1 - LOG_LOSS_EPS] before log().
LOG_LOSS_EPS = 1e-15

# Overall statistics removed from the multi-class summary.
DROPPED_STATS = (
    "AccuracyNull",
    "AccuracyLower",
    "AccuracyUpper",
    "AccuracyPValue",
    "McnemarPValue",
    "Mean Prevalence",
    "Mean Detection Prevalence",
)

# Leading order of the multi-class summary.
PROBABILITY_STAT_ORDER = ("logLoss", "Mean_AUC")
CLASS_STAT_ORDER = (
    "Accuracy",
    "Kappa",
    "Mean_Sensitivity",
    "Mean_Specificity",
    "Mean_Pos_Pred_Value",
    "Mean_Neg_Pred_Value",
    "Mean_Detection_Rate",
    "Mean_Balanced_Accuracy",
)

BY_CLASS_STATS = (
    "Sensitivity",
    "Specificity",
    "Pos Pred Value",
    "Neg Pred Value",
    "Precision",
    "Recall",
    "F1",
    "Prevalence",
    "Detection Rate",
    "Detection Prevalence",
    "Balanced Accuracy",
)


class OutcomeType(Enum):
    REGRESSION = "regression"
    CLASSIFICATION = "classification"


class Task(Enum):
    BINARY = "binary"
    MULTICLASS = "multiclass"
