import os


def _float_env(name: str, default: str) -> float:
    return float(os.environ.get(name, default))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "payroll-ledger-dev-key"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_JSON = bool(int(os.environ.get("LOG_JSON", "0")))

    # How many cleansing-log entries accompany a "no usable records" error
    CLEANSING_LOG_PREVIEW = int(os.environ.get("CLEANSING_LOG_PREVIEW", "20"))

    # Headers of the attendance sheet export
    DEFAULT_COLUMN_MAPPING = {
        "name": os.environ.get("MAP_NAME", "Employee_Name"),
        "date": os.environ.get("MAP_DATE", "Date"),
        "check_in": os.environ.get("MAP_CHECK_IN", "Check_In"),
        "check_out": os.environ.get("MAP_CHECK_OUT", "Check_Out"),
        "paid": os.environ.get("MAP_PAID", "Paid"),
        "penalty": os.environ.get("MAP_PENALTY", "Penalty"),
    }

    PAYROLL_RULES = {
        "standard_day_pay": _float_env("PAYROLL_STANDARD_DAY_PAY", "10.0"),
        "ot_hourly_rate": _float_env("PAYROLL_OT_HOURLY_RATE", "1.56"),
        "ot_threshold_hours": _float_env("PAYROLL_OT_THRESHOLD_HOURS", "9"),
        "break_hours": _float_env("PAYROLL_BREAK_HOURS", "1"),
        "fallback_shift_hours": _float_env("PAYROLL_FALLBACK_SHIFT_HOURS", "9"),
    }


SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = Config.LOG_LEVEL
LOG_JSON = Config.LOG_JSON
CLEANSING_LOG_PREVIEW = Config.CLEANSING_LOG_PREVIEW
DEFAULT_COLUMN_MAPPING = Config.DEFAULT_COLUMN_MAPPING
PAYROLL_RULES = Config.PAYROLL_RULES

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
