import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "campus_attend"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Used when no academic semester is flagged current.
ATTENDANCE_THRESHOLD_DEFAULT = float(os.getenv("ATTENDANCE_THRESHOLD_DEFAULT", "0.75"))
# Medical leave is tracked but does not count as attended unless enabled.
MEDICAL_COUNTS_AS_PRESENT = bool(int(os.getenv("MEDICAL_COUNTS_AS_PRESENT", "0")))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
