"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_BASE_URL = "http://localhost:5000/api"
DEFAULT_API_TIMEOUT = 15
DEFAULT_SESSION_DAYS = 7

# Keys of the persisted client state (token + user snapshot).
AUTH_TOKEN_KEY = "dairy_auth_token"
AUTH_USER_KEY = "dairy_auth_user"

MIN_PASSWORD_LENGTH = 6

CURRENCY_SUFFIX = "so'm"

MONTHS_UZ = (
    "yanvar", "fevral", "mart", "aprel", "may", "iyun",
    "iyul", "avgust", "sentabr", "oktabr", "noyabr", "dekabr",
)
MONTHS_UZ_SHORT = (
    "yan", "fev", "mar", "apr", "may", "iyun",
    "iyul", "avg", "sen", "okt", "noy", "dek",
)

CUSTOMER_TYPES = ("Jismoniy shaxs", "Do'kon", "Restoran", "Ulgurji")
PRODUCT_UNITS = ("litr", "kg", "dona")
