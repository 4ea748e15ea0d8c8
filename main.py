"""
Hotel Booking Cancellation - Analysis Report
This script includes:
- Loading and recoding the reservations table
- Seeded subsample and train/test split
- Logistic regression with odds ratios and confidence intervals
- Welch t-tests and a chi-square test against booking status
- Random forest with out-of-bag tuning of max_features
- Markdown report with diagnostic plots
"""

import warnings

import numpy as np

import config
import eda
from data_prep import clean_bookings, load_bookings, sample_and_split
from model_forest import (choose_max_features, fit_forest, oob_error_curve, oob_errors,
                          score_forest, split_xy, tune_max_features, variable_importance)
from model_logistic import evaluate, fit_logit, odds_ratio_table, predict_status
from report import write_report
from stats_tests import chi_square_test, print_tests, welch_ttests

warnings.filterwarnings('ignore')


def run(data_path=config.DATA_PATH, out_dir=config.OUTPUT_DIR, n_trees=config.N_TREES,
        mtry_range=config.MTRY_RANGE, seed=config.SEED):
    np.random.seed(seed)

    print("=" * 80)
    print("HOTEL BOOKING CANCELLATION - ANALYSIS REPORT")
    print("=" * 80)

    # ============================================================================
    # 1. LOAD DATA
    # ============================================================================
    print("\n[1/7] Loading data...")
    raw = load_bookings(data_path)
    print(f"  Raw shape: {raw.shape}")

    # ============================================================================
    # 2. CLEAN AND RECODE
    # ============================================================================
    print("\n[2/7] Cleaning and recoding...")
    df = clean_bookings(raw)
    missing = eda.missing_value_summary(df)
    negative = eda.negative_value_summary(df)
    outcomes = eda.outcome_summary(df)
    print(outcomes.to_string(float_format=lambda x: f"{x:.4f}"))

    # ============================================================================
    # 3. SAMPLE AND SPLIT
    # ============================================================================
    print("\n[3/7] Sampling and splitting...")
    train, test = sample_and_split(df, seed=seed)
    print(f"  Train: {len(train)}, Test: {len(test)}")

    # ============================================================================
    # 4. LOGISTIC REGRESSION
    # ============================================================================
    print("\n[4/7] Fitting logistic regression...")
    logit = fit_logit(train)
    odds = odds_ratio_table(logit)
    print(odds.to_string(float_format=lambda x: f"{x:.4g}"))
    _, labels = predict_status(logit, test)
    lr_accuracy, lr_confusion = evaluate(test[config.TARGET], labels)
    print(lr_confusion)
    print(f"  Logistic regression accuracy: {lr_accuracy:.4f}")

    # ============================================================================
    # 5. HYPOTHESIS TESTS
    # ============================================================================
    print("\n[5/7] Running hypothesis tests...")
    ttests = welch_ttests(df)
    chi_square = chi_square_test(df)
    print_tests(ttests, chi_square)

    # ============================================================================
    # 6. RANDOM FOREST
    # ============================================================================
    print("\n[6/7] Tuning random forest...")
    sweep = tune_max_features(train, mtry_range, n_trees, seed)
    mtry = choose_max_features(sweep)
    print(f"  Chosen max_features: {mtry}")
    forest = fit_forest(train, mtry, n_trees, seed)
    _, y_train = split_xy(train)
    oob = oob_errors(forest, y_train)
    curve = oob_error_curve(train, mtry, n_trees, seed=seed)
    rf_accuracy, rf_confusion = score_forest(forest, test)
    importance = variable_importance(forest, test, seed=seed)
    print(rf_confusion)
    print(f"  OOB error: {oob['OOB']:.4f}")
    print(f"  Random forest accuracy: {rf_accuracy:.4f}")

    # ============================================================================
    # 7. REPORT
    # ============================================================================
    print("\n[7/7] Writing report...")
    results = {
        "seed": seed,
        "n_rows": len(df),
        "n_missing": int(missing.sum()),
        "n_negative": int(negative.sum()),
        "n_train": len(train),
        "n_test": len(test),
        "outcomes": outcomes,
        "logistic": {"odds_ratios": odds, "accuracy": lr_accuracy, "confusion": lr_confusion},
        "ttests": ttests,
        "chi_square": chi_square,
        "forest": {
            "n_trees": n_trees,
            "sweep": sweep,
            "max_features": mtry,
            "oob_error": oob["OOB"],
            "oob_curve": curve,
            "accuracy": rf_accuracy,
            "confusion": rf_confusion,
            "importance": importance,
        },
    }
    path = write_report(results, out_dir)
    print(f"Report saved to: {path}")
    print("=" * 80)
    return results


if __name__ == "__main__":
    run()
