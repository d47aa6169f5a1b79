"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_KEY_FORMAT = "%Y-%m-%d"
CYCLE_FORMAT = "%Y-%m"

DEFAULT_ANALYTICS_DAYS = 30
ANALYTICS_PRESET_DAYS = (7, 30)
ANALYTICS_MONTH_PERIOD = "month"
ITEMS_PER_PAGE = 10

MIN_HOURS_WORKED = 0.5
MAX_HOURS_WORKED = 24

DEFAULT_API_TIMEOUT = 15
DEFAULT_API_WORKERS = 5
