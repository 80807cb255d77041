import os

from .config import Config, DB_CONFIG  # noqa: F401

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

LUNCH_START = Config.LUNCH_START
LUNCH_END = Config.LUNCH_END
RANKING_SOFT_LIMIT = Config.RANKING_SOFT_LIMIT

DEBUG = False
LOG_LEVEL = Config.LOG_LEVEL
