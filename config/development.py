import os

from config.config import CLEANSING_LOG_PREVIEW, DEFAULT_COLUMN_MAPPING, PAYROLL_RULES

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))
