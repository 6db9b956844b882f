import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "worktime_db"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Reconciliation: task time above attendance by more than this is "excessive"
EXCESSIVE_THRESHOLD_MINUTES = int(os.getenv("EXCESSIVE_THRESHOLD_MINUTES", "30"))
LOW_TOLERANCE_MINUTES = int(os.getenv("LOW_TOLERANCE_MINUTES", "0"))
RECENT_ISSUE_BUSINESS_DAYS = int(os.getenv("RECENT_ISSUE_BUSINESS_DAYS", "3"))

# editor_id written to audit entries produced by auto-close
SYSTEM_EDITOR_ID = int(os.getenv("SYSTEM_EDITOR_ID", "0"))
