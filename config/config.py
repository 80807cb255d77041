import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "capsule-production-dev"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "capsule_production")

    # Business rules
    LUNCH_START = os.environ.get("LUNCH_START", "12:30")
    LUNCH_END = os.environ.get("LUNCH_END", "13:30")

    RANKING_SOFT_LIMIT = int(os.environ.get("RANKING_SOFT_LIMIT", "5000"))

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
