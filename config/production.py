import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:3001/api"),
    "token": os.getenv("API_TOKEN", ""),
    "timeout": float(os.getenv("API_TIMEOUT", "15")),
    "max_workers": int(os.getenv("API_MAX_WORKERS", "5")),
}

TIMEZONE = os.getenv("TIMEZONE", "UTC")

ANALYTICS_DAYS = int(os.getenv("ANALYTICS_DAYS", "30"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
