# eda.py
import pandas as pd

import config
from data_prep import clean_bookings, load_bookings


def missing_value_summary(df):
    missing = df.isnull().sum()
    print("Missing Values:", int(missing.sum()))
    return missing[missing > 0].sort_values(ascending=False)


def negative_value_summary(df, columns=config.NON_NEGATIVE):
    """Count of negative values per column; all zeros on clean data."""
    negative = (df[columns] < 0).sum()
    print("Negative values:", negative.to_dict())
    return negative


def outcome_summary(df):
    """Count and share of kept vs cancelled bookings."""
    counts = df[config.TARGET].value_counts().reindex(config.LABELS, fill_value=0)
    return pd.DataFrame({"n": counts, "share": counts / counts.sum()})


def group_means(df, columns):
    return df.groupby(config.TARGET, observed=False)[columns].mean()


if __name__ == "__main__":
    df = clean_bookings(load_bookings())
    print(missing_value_summary(df))
    print(negative_value_summary(df))
    print(outcome_summary(df))
    print(group_means(df, config.TTEST_COLUMNS))
