import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

API_CONFIG = {
    "base_url": os.getenv("API_BASE_URL", "http://localhost:3001/api"),
    "token": os.getenv("API_TOKEN", ""),
    "timeout": float(os.getenv("API_TIMEOUT", "15")),
    "max_workers": int(os.getenv("API_MAX_WORKERS", "5")),
}

# IANA timezone used to bucket submissions into days and to decide "today"
TIMEZONE = os.getenv("TIMEZONE", "UTC")

ANALYTICS_DAYS = int(os.getenv("ANALYTICS_DAYS", "30"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
