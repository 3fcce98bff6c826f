# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

import math

import pytest
from scipy import stats
from tunescore import ClassResult, confusion_matrix_stats, mean_of_successes
from tunescore.utils import Task, UndefinedStatistic


class TestConfusionMatrixStats:

    OBS = ["x", "x", "x", "x", "y", "y", "y", "y"]
    PRED = ["x", "x", "x", "y", "x", "y", "y", "y"]

    def test_table(self):
        cm = confusion_matrix_stats(self.PRED, self.OBS)
        assert cm.table.index.name == "Prediction"
        assert cm.table.columns.name == "Reference"
        assert cm.table.loc["x", "x"] == 3
        assert cm.table.loc["x", "y"] == 1
        assert cm.table.to_numpy().sum() == 8

    def test_overall(self):
        overall = confusion_matrix_stats(self.PRED, self.OBS).overall
        assert overall["Accuracy"] == pytest.approx(0.75)
        assert overall["Kappa"] == pytest.approx(0.5, abs=1e-6)
        assert overall["AccuracyNull"] == pytest.approx(0.5)
        assert overall["AccuracyLower"] < 0.75 < overall["AccuracyUpper"]
        assert overall["AccuracyPValue"] == pytest.approx(
            stats.binomtest(6, 8, p=0.5, alternative="greater").pvalue
        )
        # one discordant pair each way, continuity corrected
        assert overall["McnemarPValue"] == pytest.approx(stats.chi2.sf(0.5, 1))

    def test_by_class(self):
        by_class = confusion_matrix_stats(self.PRED, self.OBS).by_class
        row = by_class.loc["x"]
        assert row["Sensitivity"] == pytest.approx(0.75)
        assert row["Specificity"] == pytest.approx(0.75)
        assert row["F1"] == pytest.approx(0.75)
        assert row["Prevalence"] == pytest.approx(0.5)
        assert row["Detection Prevalence"] == pytest.approx(0.5)

    def test_two_class_stats_use_first_level(self):
        cm = confusion_matrix_stats(["y", "y", "x"], ["y", "x", "x"], levels=["y", "x"])
        assert cm.task == Task.BINARY
        class_stats = cm.class_stats()
        assert "Sensitivity" in class_stats
        assert class_stats["Sensitivity"] == pytest.approx(1.0)
        assert class_stats["Specificity"] == pytest.approx(0.5)

    def test_multiclass_stats_are_averaged(self):
        cm = confusion_matrix_stats(["a", "b", "c"], ["a", "b", "c"])
        class_stats = cm.class_stats()
        assert class_stats["Mean Sensitivity"] == pytest.approx(1.0)
        assert class_stats["Mean Prevalence"] == pytest.approx(1 / 3)

    def test_single_level_stats_are_averaged(self):
        cm = confusion_matrix_stats(["a", "a"], ["a", "a"])
        assert cm.task == Task.MULTICLASS
        assert cm.class_stats()["Mean Sensitivity"] == pytest.approx(1.0)

    def test_undefined_entries_are_missing(self):
        cm = confusion_matrix_stats(["a", "a"], ["a", "a"], levels=["a", "b", "c"])
        assert math.isnan(cm.by_class.loc["b", "Sensitivity"])
        assert cm.class_stats()["Mean Sensitivity"] is None
        assert cm.overall["McnemarPValue"] is None

    def test_numeric_observations_rejected(self):
        with pytest.raises(TypeError):
            confusion_matrix_stats([1.0, 2.0], [1.0, 2.0])


class TestMeanOfSuccesses:

    def test_failures_are_excluded(self):
        results = [
            ClassResult(label="a", value=0.8),
            ClassResult(label="b", error=UndefinedStatistic("single class")),
            ClassResult(label="c", value=0.6),
        ]
        mean, excluded = mean_of_successes(results)
        assert mean == pytest.approx(0.7)
        assert excluded == ["b"]

    def test_no_successes(self):
        mean, excluded = mean_of_successes([ClassResult(label="a", error=KeyError("a"))])
        assert mean is None
        assert excluded == ["a"]

    def test_capture(self):
        def fails():
            raise UndefinedStatistic("degenerate")

        assert ClassResult.capture("a", lambda: 0.5).value == 0.5
        failed = ClassResult.capture("b", fails)
        assert not failed.ok
        assert failed.value_or_missing() is None
        assert not ClassResult.capture("c", lambda: float("nan")).ok
