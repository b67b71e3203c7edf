from decouple import config

NINJA_EXTRA = {
    "THROTTLE_RATES": {
        "user": config("THROTTLE_RATE_USER", default="1000/day"),
        "anon": config("THROTTLE_RATE_ANON", default="250/day"),
    },
    "NUM_PROXIES": None,
}

PAGINATION_DEFAULT_LIMIT = 20
PAGINATION_FEATURED_LIMIT = 10
PAGINATION_MAX_LIMIT = 100
