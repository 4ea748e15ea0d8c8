import numpy as np
import pandas as pd
import pytest

from data_prep import clean_bookings, sample_and_split


def make_raw_bookings(n=1500, seed=0):
    """Raw reservations with the source headers; cancellation rises with lead time."""
    rng = np.random.default_rng(seed)
    lead = rng.integers(0, 300, n)
    price = rng.gamma(9, 11, n).round(2)
    requests = rng.integers(0, 4, n)
    logit = -1.0 + 0.01 * lead + 0.01 * (price - 100) - 0.8 * requests
    cancelled = rng.random(n) < 1 / (1 + np.exp(-logit))
    return pd.DataFrame({
        "Booking_ID": [f"INN{i:05d}" for i in range(1, n + 1)],
        "no_of_adults": rng.integers(1, 4, n),
        "no_of_children": rng.integers(0, 3, n),
        "no_of_weekend_nights": rng.integers(0, 3, n),
        "no_of_week_nights": rng.integers(0, 6, n),
        # Meal Plan 3 never occurs
        "type_of_meal_plan": rng.choice(["Meal Plan 1", "Not Selected", "Meal Plan 2"], n,
                                        p=[0.75, 0.15, 0.10]),
        "required_car_parking_space": rng.integers(0, 2, n),
        "room_type_reserved": rng.choice(["Room_Type 1", "Room_Type 2", "Room_Type 4"], n),
        "lead_time": lead,
        "arrival_year": rng.choice([2017, 2018], n),
        "arrival_month": rng.integers(1, 13, n),
        "arrival_date": rng.integers(1, 29, n),
        "market_segment_type": rng.choice(["Online", "Offline", "Corporate"], n),
        "repeated_guest": rng.integers(0, 2, n),
        "no_of_previous_cancellations": rng.integers(0, 2, n),
        "no_of_previous_bookings_not_canceled": rng.integers(0, 3, n),
        "avg_price_per_room": price,
        "no_of_special_requests": requests,
        "booking_status": np.where(cancelled, "Canceled", "Not_Canceled"),
    })


@pytest.fixture(scope="session")
def raw_bookings():
    return make_raw_bookings()


@pytest.fixture(scope="session")
def bookings(raw_bookings):
    return clean_bookings(raw_bookings)


@pytest.fixture(scope="session")
def split(bookings):
    return sample_and_split(bookings)


@pytest.fixture(scope="session")
def csv_path(raw_bookings, tmp_path_factory):
    path = tmp_path_factory.mktemp("data") / "Hotel Reservations.csv"
    raw_bookings.to_csv(path, index=False)
    return path
