SECRET_KEY = "test-secret"

API_CONFIG = {
    "base_url": "http://api.test/api",
    "token": "test-token",
    "timeout": 5,
    "max_workers": 2,
}

TIMEZONE = "UTC"

ANALYTICS_DAYS = 30

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
