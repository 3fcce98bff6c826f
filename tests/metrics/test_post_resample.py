# SPDX-FileCopyrightText: 2025 tunescore contributors
# SPDX-License-Identifier: Apache-2.0

import math

import numpy as np
import pandas as pd
import pytest
import torch
from tunescore import default_summary, post_resample, r_squared, rmse


class TestRegressionPostResample:

    def test_perfect_predictions(self):
        result = post_resample([1, 2, 3], [1, 2, 3])
        assert list(result) == ["RMSE", "Rsquared"]
        assert result["RMSE"] == pytest.approx(0.0)
        assert result["Rsquared"] == pytest.approx(1.0)

    def test_constant_prediction_has_missing_rsquared(self):
        result = post_resample([5, 5, 5], [1, 2, 3])
        # (16 + 9 + 4) / 3
        assert result["RMSE"] == pytest.approx(math.sqrt(29 / 3))
        assert result["Rsquared"] is None

    def test_constant_observation_has_missing_rsquared(self):
        result = post_resample([1.0, 2.0, 3.0], [2.0, 2.0, 2.0])
        assert result["RMSE"] == pytest.approx(math.sqrt(2 / 3))
        assert result["Rsquared"] is None

    def test_missing_predictions_are_dropped(self):
        result = post_resample([1.0, np.nan, 3.0], [1.0, 100.0, 3.0])
        assert result["RMSE"] == pytest.approx(0.0)
        assert result["Rsquared"] == pytest.approx(1.0)

    def test_all_predictions_missing(self):
        result = post_resample([np.nan, np.nan], [1.0, 2.0])
        assert result == {"RMSE": None, "Rsquared": None}

    def test_empty_input(self):
        empty = np.array([], dtype=np.float64)
        assert post_resample(empty, empty) == {"RMSE": None, "Rsquared": None}

    def test_missing_observation_makes_rmse_missing(self):
        result = post_resample([1.0, 2.0, 3.0, 4.0], [1.0, np.nan, 3.0, 5.0])
        assert result["RMSE"] is None
        assert result["Rsquared"] is not None

    def test_bounds_on_noisy_data(self):
        generator = np.random.default_rng(1)
        obs = generator.normal(size=50)
        pred = obs + generator.normal(scale=0.5, size=50)
        result = post_resample(pred, obs)
        assert result["RMSE"] >= 0
        assert 0 <= result["Rsquared"] <= 1

    def test_accepts_tensors_and_series(self):
        result = post_resample(torch.tensor([1.0, 2.0, 4.0]), pd.Series([1.0, 2.0, 3.0]))
        assert result["RMSE"] == pytest.approx(math.sqrt(1 / 3))

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            post_resample([1, 2, 3], [1, 2])


class TestClassificationPostResample:

    def test_identical_labels(self):
        obs = pd.Categorical(["a", "b", "a", "b", "c"])
        result = post_resample(obs, obs)
        assert list(result) == ["Accuracy", "Kappa"]
        assert result["Accuracy"] == pytest.approx(1.0)
        assert result["Kappa"] == pytest.approx(1.0)

    def test_accuracy_and_kappa(self):
        obs = ["x", "x", "x", "x", "y", "y", "y", "y"]
        pred = ["x", "x", "x", "y", "x", "y", "y", "y"]
        result = post_resample(pred, obs)
        assert result["Accuracy"] == pytest.approx(0.75)
        # observed agreement 0.75, chance agreement 0.5
        assert result["Kappa"] == pytest.approx(0.5, abs=1e-6)

    def test_bounds(self):
        obs = ["x", "y", "z", "x", "y", "z"]
        pred = ["y", "z", "x", "x", "z", "y"]
        result = post_resample(pred, obs)
        assert 0 <= result["Accuracy"] <= 1
        assert result["Kappa"] <= 1

    def test_predictions_outside_observed_levels_are_dropped(self):
        result = post_resample(["a", "b", "z"], ["a", "b", "a"])
        assert result["Accuracy"] == pytest.approx(1.0)

    @pytest.mark.filterwarnings("error::DeprecationWarning", "error::FutureWarning")
    def test_unknown_predictions_dropped_without_warnings(self):
        result = post_resample(["a", "b", "z", None], ["a", "b", "a", "b"])
        assert result["Accuracy"] == pytest.approx(1.0)

    def test_missing_predictions_are_dropped(self):
        result = post_resample(["a", None, "b"], ["a", "a", "b"])
        assert result["Accuracy"] == pytest.approx(1.0)

    def test_single_level_kappa_is_missing(self):
        result = post_resample(["a", "a"], ["a", "a"])
        assert result == {"Accuracy": 1.0, "Kappa": None}

    def test_constant_agreement_kappa_is_missing(self):
        obs = pd.Categorical(["a", "a", "a"], categories=["a", "b"])
        result = post_resample(obs, obs)
        assert result["Accuracy"] == pytest.approx(1.0)
        assert result["Kappa"] is None

    def test_empty_input(self):
        empty = pd.Categorical([], categories=["a", "b"])
        assert post_resample(empty, empty) == {"Accuracy": None, "Kappa": None}

    def test_repeated_calls_are_identical(self):
        obs = ["x", "y", "x", "y", "x"]
        pred = ["x", "x", "x", "y", "y"]
        assert post_resample(pred, obs) == post_resample(pred, obs)


class TestDefaultSummary:

    def test_matches_post_resample(self, mixed_two_class_data):
        data = mixed_two_class_data
        assert default_summary(data) == post_resample(data["pred"], data["obs"])

    def test_regression_table(self):
        data = pd.DataFrame({"obs": [1.0, 2.0, 3.0], "pred": [1.0, 2.0, 3.0]})
        result = default_summary(data, lev=None, model="lm")
        assert result["RMSE"] == pytest.approx(0.0)

    @pytest.mark.filterwarnings("error::DeprecationWarning", "error::FutureWarning")
    def test_lev_restricts_plain_labels(self):
        data = pd.DataFrame({"obs": ["a", "b", "c"], "pred": ["a", "b", "a"]})
        result = default_summary(data, lev=["a", "b"])
        assert result["Accuracy"] == pytest.approx(1.0)


class TestRegressionHelpers:

    def test_rmse(self):
        assert rmse([5, 5, 5], [1, 2, 3]) == pytest.approx(math.sqrt(29 / 3))

    def test_rmse_missing_values(self):
        assert rmse([1.0, np.nan], [1.0, 2.0]) is None
        assert rmse([1.0, np.nan], [1.0, 2.0], na_rm=True) == pytest.approx(0.0)

    def test_r_squared_forms(self):
        obs = [1.0, 2.0, 3.0, 4.0]
        pred = [1.5, 2.0, 2.5, 4.0]
        corr = r_squared(pred, obs)
        traditional = r_squared(pred, obs, form="traditional")
        expected_traditional = 1 - (0.25 + 0 + 0.25 + 0) / 5.0
        assert traditional == pytest.approx(expected_traditional)
        assert 0 <= corr <= 1

    def test_r_squared_perfect_fit(self):
        assert r_squared([1, 2, 3], [1, 2, 3], form="traditional") == pytest.approx(1.0)

    def test_r_squared_zero_variance(self):
        assert r_squared([1, 2, 3], [2, 2, 2], form="traditional") is None
        assert r_squared([1, 2, 3], [2, 2, 2]) is None

    def test_r_squared_unknown_form(self):
        with pytest.raises(ValueError):
            r_squared([1, 2], [1, 2], form="adjusted")
