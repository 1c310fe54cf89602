from config.config import PAYROLL_RULES

SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
LOG_JSON = False

CLEANSING_LOG_PREVIEW = 5

DEFAULT_COLUMN_MAPPING = {
    "name": "Employee_Name",
    "date": "Date",
    "check_in": "Check_In",
    "check_out": "Check_Out",
    "paid": "Paid",
    "penalty": "Penalty",
}
