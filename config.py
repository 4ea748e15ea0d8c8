# config.py
DATA_PATH = "Hotel Reservations.csv"
OUTPUT_DIR = "report"
REPORT_NAME = "report.md"
OOB_PLOT_NAME = "oob_error.png"
IMPORTANCE_PLOT_NAME = "variable_importance.png"

SEED = 123
SAMPLE_SIZE = 1000
TRAIN_SIZE = 0.7
NUM_JOBS = -1  # all CPUs

# Room price is published in euros
EUR_TO_USD = 1.0703
Z_95 = 1.96
THRESHOLD = 0.5

# Random forest
N_TREES = 500
OOB_STEP = 10
MTRY_RANGE = range(1, 7)
MTRY_TOLERANCE = 0.005
PERMUTATION_REPEATS = 10

TARGET = "status"
ID_COL = "booking_id"
NA_VALUES = ["NA"]

RENAME = {
    "Booking_ID": "booking_id",
    "no_of_adults": "adults",
    "no_of_children": "children",
    "no_of_weekend_nights": "weekend_nights",
    "no_of_week_nights": "week_nights",
    "type_of_meal_plan": "meal_plan",
    "required_car_parking_space": "parking",
    "room_type_reserved": "room_type",
    "lead_time": "between_time",
    "arrival_year": "arrival_year",
    "arrival_month": "arrival_month",
    "arrival_date": "arrival_date",
    "market_segment_type": "market_segment",
    "repeated_guest": "repeated_guest",
    "no_of_previous_cancellations": "previous_cancellations",
    "no_of_previous_bookings_not_canceled": "previous_kept",
    "avg_price_per_room": "room_price",
    "no_of_special_requests": "special_requests",
    "booking_status": "status",
}

MEAL_PLANS = {
    "Not Selected": "none",
    "Meal Plan 1": "breakfast-only",
    "Meal Plan 2": "half-set",
    "Meal Plan 3": "full-set",
}

# Reference level first
STATUS = {"Not_Canceled": "kept", "Canceled": "cancelled"}
LABELS = ["kept", "cancelled"]

CATEGORICAL = ["meal_plan", "room_type", "market_segment"]
NON_NEGATIVE = ["between_time", "room_price"]

LOGIT_PREDICTORS = [
    "adults", "weekend_nights", "week_nights", "parking",
    "between_time", "room_price", "special_requests",
]
TTEST_COLUMNS = ["between_time", "room_price", "special_requests"]
CHI_SQUARE_COLUMN = "meal_plan"

FOREST_NUMERIC = [
    "adults", "children", "weekend_nights", "week_nights", "parking",
    "between_time", "arrival_month", "repeated_guest",
    "previous_cancellations", "previous_kept", "room_price", "special_requests",
]
FOREST_CATEGORICAL = ["meal_plan", "room_type", "market_segment"]
