# data_prep.py
from pathlib import Path

import pandas as pd
from sklearn.model_selection import train_test_split

import config

READERS = {
    ".csv": pd.read_csv,
    ".xls": pd.read_excel,
    ".xlsx": pd.read_excel,
}


def load_bookings(path=config.DATA_PATH):
    """Read the raw reservations table and check its header set."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    reader = READERS.get(path.suffix.lower())
    if reader is None:
        raise ValueError(f"Unsupported file type: {path.suffix}")
    df = reader(path, na_values=config.NA_VALUES)

    missing = set(config.RENAME) - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns: {sorted(missing)}")
    return df


def basic_info(df):
    print(df.shape)
    print(df.head())
    print(df.describe())
    print("Missing values:", int(df.isnull().sum().sum()))


def convert_price(df, rate=config.EUR_TO_USD):
    """Convert room prices from EUR to USD, once."""
    if df.attrs.get("room_price_currency") == "USD":
        return df
    df = df.copy()
    df["room_price"] = (df["room_price"] * rate).round(2)
    df.attrs["room_price_currency"] = "USD"
    return df


def clean_bookings(df):
    df = df.rename(columns=config.RENAME)
    df["meal_plan"] = pd.Categorical(
        df["meal_plan"].map(config.MEAL_PLANS),
        categories=list(config.MEAL_PLANS.values()),
    )
    df[config.TARGET] = pd.Categorical(
        df[config.TARGET].map(config.STATUS), categories=config.LABELS
    )
    for col in ["room_type", "market_segment"]:
        df[col] = df[col].astype("category")
    return convert_price(df)


def sample_and_split(df, seed=config.SEED, size=config.SAMPLE_SIZE,
                     train_size=config.TRAIN_SIZE):
    """Draw a fixed-size subsample and split it into train and test rows."""
    if size > len(df):
        raise ValueError(f"Cannot sample {size} rows from {len(df)}")
    sample = df.sample(n=size, random_state=seed)
    train, test = train_test_split(sample, train_size=train_size, random_state=seed)
    return train, test


if __name__ == "__main__":
    raw = load_bookings()
    basic_info(raw)
    df = clean_bookings(raw)
    train, test = sample_and_split(df)
    print("Train/Test Split:", train.shape, test.shape)
