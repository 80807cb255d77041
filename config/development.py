from .config import Config, DB_CONFIG  # noqa: F401

SECRET_KEY = Config.SECRET_KEY

LUNCH_START = Config.LUNCH_START
LUNCH_END = Config.LUNCH_END
RANKING_SOFT_LIMIT = Config.RANKING_SOFT_LIMIT

DEBUG = True
LOG_LEVEL = "DEBUG"
