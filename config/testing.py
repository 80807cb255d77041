import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "capsule_production_test"),
}

LUNCH_START = "12:30"
LUNCH_END = "13:30"
RANKING_SOFT_LIMIT = 5000

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
