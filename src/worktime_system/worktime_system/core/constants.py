"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time, timedelta, timezone

BUSINESS_TZ = timezone(timedelta(hours=9), name="UTC+09:00")
AUTO_CLOSE_TIME = time(23, 59, 0)

DEFAULT_EXCESSIVE_THRESHOLD_MINUTES = 30
DEFAULT_LOW_TOLERANCE_MINUTES = 0
DEFAULT_SYSTEM_EDITOR_ID = 0
DEFAULT_RECENT_ISSUE_BUSINESS_DAYS = 3

DEVICE_PC = "pc"
DEVICE_ADMIN = "admin"
DEVICE_AUTO_CLOSE = "auto-23:59"
