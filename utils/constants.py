APP_NAME = "iExpense"
APP_WIDTH = 900
APP_HEIGHT = 680
DB_FILE = "iexpense.db"

ITEMS_KEY = "Items"                 # app_settings key holding the record collection
DEFAULT_CURRENCY = "USD"
DEFAULT_STORE = "Other"             # decoded records that predate the store field
UNSET_STORE = "Unknown"             # add form saved without a store picked
OTHER_SLICE_KEY = "__other__"
OTHER_SLICE_LABEL = "Other"
TOP_STORES = 8
TREND_POINTS = 12

CURRENCIES = ["USD", "INR", "GBP", "THB"]

CURRENCY_SYMBOLS = {
    "USD": "$",
    "INR": "₹",
    "GBP": "£",
    "THB": "฿",
}

STORE_OPTIONS = [
    "Amazon",
    "Target",
    "Trader Joe's",
    "Starbucks",
    "Chipotle",
    "Uber",
    "Lyft",
    "Apple",
    "Waymo",
    "RTCC",
    "USC Bookstore",
    "Other",
]

DEFAULT_SETTINGS = [
    ("appearance_mode", "system"),
    ("default_currency", DEFAULT_CURRENCY),
    ("date_format", "MM/DD/YYYY"),
]
