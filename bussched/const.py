"""
Constants.
"""

API_BASE_URL = "https://bus-scheduler-backend-production.up.railway.app"

# seconds
REQUEST_TIMEOUT = 10.0

DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24

CARD_DATE_FORMAT = "%d.%m.%Y."
HEADER_DATE_FORMAT = "%d.%m.%Y"
