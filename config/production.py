import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_db"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

EXCESSIVE_THRESHOLD_MINUTES = int(os.getenv("EXCESSIVE_THRESHOLD_MINUTES", "30"))
LOW_TOLERANCE_MINUTES = int(os.getenv("LOW_TOLERANCE_MINUTES", "0"))
RECENT_ISSUE_BUSINESS_DAYS = int(os.getenv("RECENT_ISSUE_BUSINESS_DAYS", "3"))

SYSTEM_EDITOR_ID = int(os.getenv("SYSTEM_EDITOR_ID", "0"))
