import os

from config.config import CLEANSING_LOG_PREVIEW, DEFAULT_COLUMN_MAPPING, PAYROLL_RULES

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))
