# model_forest.py
import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer
from sklearn.ensemble import RandomForestClassifier
from sklearn.inspection import permutation_importance
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OrdinalEncoder

import config
from data_prep import clean_bookings, load_bookings, sample_and_split
from model_logistic import evaluate

# ColumnTransformer output order
PREDICTORS = config.FOREST_NUMERIC + config.FOREST_CATEGORICAL


def get_preprocessor(num_features, cat_features):
    # One column per categorical predictor, so max_features counts predictors
    return ColumnTransformer([
        ("num", "passthrough", num_features),
        ("cat", OrdinalEncoder(handle_unknown="use_encoded_value", unknown_value=-1), cat_features),
    ])


def split_xy(df):
    return df[PREDICTORS], df[config.TARGET].astype(str)


def build_forest(max_features, n_estimators=config.N_TREES, seed=config.SEED, warm_start=False):
    return Pipeline([
        ("pre", get_preprocessor(config.FOREST_NUMERIC, config.FOREST_CATEGORICAL)),
        ("model", RandomForestClassifier(
            n_estimators=n_estimators,
            max_features=max_features,
            bootstrap=True,
            oob_score=True,
            warm_start=warm_start,
            random_state=seed,
            n_jobs=config.NUM_JOBS,
        )),
    ])


def fit_forest(train, max_features, n_estimators=config.N_TREES, seed=config.SEED):
    X, y = split_xy(train)
    pipe = build_forest(max_features, n_estimators, seed)
    pipe.fit(X, y)
    return pipe


def oob_errors(pipe, y):
    """Overall and per-class out-of-bag error of a fitted forest pipeline."""
    forest = pipe.named_steps["model"]
    votes = forest.oob_decision_function_
    # Rows in every bootstrap sample have no OOB vote
    scored = votes.sum(axis=1) > 0
    y = np.asarray(y)[scored]
    pred = forest.classes_[np.argmax(votes[scored], axis=1)]
    errors = {"OOB": float(np.mean(pred != y))}
    for label in config.LABELS:
        mask = y == label
        errors[label] = float(np.mean(pred[mask] != label)) if mask.any() else np.nan
    return errors


def oob_error_curve(train, max_features, n_estimators=config.N_TREES,
                    step=config.OOB_STEP, seed=config.SEED):
    """OOB errors as trees are added to one warm-started forest."""
    X, y = split_xy(train)
    tree_counts = list(range(step, n_estimators + 1, step))
    if not tree_counts or tree_counts[-1] != n_estimators:
        tree_counts.append(n_estimators)

    pipe = build_forest(max_features, tree_counts[0], seed, warm_start=True)
    rows = []
    for n_trees in tree_counts:
        pipe.set_params(model__n_estimators=n_trees)
        pipe.fit(X, y)
        rows.append({"n_trees": n_trees, **oob_errors(pipe, y)})
    return pd.DataFrame(rows).set_index("n_trees")


def tune_max_features(train, mtry_range=config.MTRY_RANGE,
                      n_estimators=config.N_TREES, seed=config.SEED):
    _, y = split_xy(train)
    rows = []
    for mtry in mtry_range:
        pipe = fit_forest(train, mtry, n_estimators, seed)
        errors = oob_errors(pipe, y)
        print(f"  max_features={mtry}: OOB error {errors['OOB']:.4f}")
        rows.append({"max_features": mtry, **errors})
    return pd.DataFrame(rows).set_index("max_features")


def choose_max_features(sweep, tolerance=config.MTRY_TOLERANCE):
    """Smallest candidate count whose OOB error is within tolerance of the best."""
    best = sweep["OOB"].min()
    return int(sweep.index[sweep["OOB"] <= best + tolerance].min())


def variable_importance(pipe, test, n_repeats=config.PERMUTATION_REPEATS, seed=config.SEED):
    X_test, y_test = split_xy(test)
    perm = permutation_importance(
        pipe, X_test, y_test, scoring="accuracy", n_repeats=n_repeats, random_state=seed
    )
    return pd.DataFrame({
        "MeanDecreaseAccuracy": perm.importances_mean,
        "MeanDecreaseGini": pipe.named_steps["model"].feature_importances_,
    }, index=pd.Index(PREDICTORS, name="predictor")).sort_values("MeanDecreaseGini", ascending=False)


def score_forest(pipe, test):
    X_test, y_test = split_xy(test)
    return evaluate(y_test, pipe.predict(X_test))


if __name__ == "__main__":
    df = clean_bookings(load_bookings())
    train, test = sample_and_split(df)
    sweep = tune_max_features(train)
    mtry = choose_max_features(sweep)
    pipe = fit_forest(train, mtry)
    accuracy, matrix = score_forest(pipe, test)
    print(matrix)
    print(f"Random Forest (max_features={mtry}) accuracy: {accuracy:.4f}")
    print(variable_importance(pipe, test))
