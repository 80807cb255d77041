"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

BUSINESS_TIMEZONE = "Asia/Hong_Kong"

LUNCH_START = time(12, 30)
LUNCH_END = time(13, 30)

# Billing granularity in minutes (half an hour).
BILLING_INCREMENT_MINUTES = 30

DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 100
WORKLOG_DEFAULT_LIMIT = 25
HOME_DISPLAY_LIMIT = 5
RANKING_SOFT_LIMIT = 5000

MAX_NOTES_LENGTH = 500
