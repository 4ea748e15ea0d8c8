from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

import config
from model_forest import (PREDICTORS, choose_max_features, fit_forest, oob_error_curve,
                          oob_errors, score_forest, split_xy, tune_max_features,
                          variable_importance)

N_TREES = 30


@pytest.fixture(scope="module")
def forest(split):
    train, _ = split
    return fit_forest(train, max_features=3, n_estimators=N_TREES)


def test_predictor_set():
    assert len(PREDICTORS) == 15
    assert "room_price" in PREDICTORS and "meal_plan" in PREDICTORS


def test_forest_settings(forest):
    model = forest.named_steps["model"]
    assert model.n_estimators == N_TREES
    assert model.max_features == 3
    assert model.bootstrap and model.oob_score
    assert model.n_features_in_ == len(PREDICTORS)


def test_oob_errors_match_oob_score(forest, split):
    train, _ = split
    _, y = split_xy(train)
    errors = oob_errors(forest, y)
    assert errors["OOB"] == pytest.approx(1 - forest.named_steps["model"].oob_score_)
    for label in config.LABELS:
        assert 0 <= errors[label] <= 1


def test_fit_is_deterministic(forest, split):
    train, test = split
    again = fit_forest(train, max_features=3, n_estimators=N_TREES)
    X_test, _ = split_xy(test)
    assert (again.predict(X_test) == forest.predict(X_test)).all()


def test_oob_error_curve(forest, split):
    train, _ = split
    curve = oob_error_curve(train, 3, n_estimators=N_TREES, step=10)
    assert list(curve.index) == [10, 20, 30]
    assert list(curve.columns) == ["OOB", "kept", "cancelled"]
    _, y = split_xy(train)
    assert curve.loc[N_TREES, "OOB"] == pytest.approx(oob_errors(forest, y)["OOB"])


def test_oob_error_curve_keeps_last_count(split):
    train, _ = split
    curve = oob_error_curve(train, 2, n_estimators=25, step=10)
    assert list(curve.index) == [10, 20, 25]


def test_tune_max_features(split):
    train, _ = split
    sweep = tune_max_features(train, range(1, 4), n_estimators=N_TREES)
    assert list(sweep.index) == [1, 2, 3]
    assert sweep["OOB"].between(0, 1).all()


def test_choose_max_features_prefers_simplest():
    sweep = pd.DataFrame({"OOB": [0.200, 0.182, 0.180, 0.190]}, index=[1, 2, 3, 4])
    assert choose_max_features(sweep, tolerance=0.005) == 2
    assert choose_max_features(sweep, tolerance=0.0) == 3
    assert choose_max_features(sweep, tolerance=0.05) == 1


def test_score_forest(forest, split):
    _, test = split
    accuracy, matrix = score_forest(forest, test)
    assert matrix.to_numpy().sum() == len(test)
    X_test, y_test = split_xy(test)
    assert accuracy == pytest.approx(np.mean(forest.predict(X_test) == y_test.to_numpy()))


def test_variable_importance(forest, split):
    _, test = split
    importance = variable_importance(forest, test, n_repeats=3)
    assert set(importance.index) == set(PREDICTORS)
    assert list(importance.columns) == ["MeanDecreaseAccuracy", "MeanDecreaseGini"]
    assert importance["MeanDecreaseGini"].sum() == pytest.approx(1.0)
    assert importance["MeanDecreaseGini"].is_monotonic_decreasing
    assert importance.loc["between_time", "MeanDecreaseAccuracy"] > 0


def test_oob_errors_skip_rows_without_votes():
    model = SimpleNamespace(
        classes_=np.array(["cancelled", "kept"]),
        oob_decision_function_=np.array([[0.0, 0.0], [0.2, 0.8], [0.9, 0.1], [0.3, 0.7]]),
    )
    pipe = SimpleNamespace(named_steps={"model": model})
    errors = oob_errors(pipe, ["kept", "kept", "cancelled", "cancelled"])
    assert errors["OOB"] == pytest.approx(1 / 3)
    assert errors["kept"] == 0.0
    assert errors["cancelled"] == pytest.approx(0.5)
