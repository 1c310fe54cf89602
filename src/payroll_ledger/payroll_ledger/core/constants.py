"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STANDARD_DAY_PAY = 10.0
OT_HOURLY_RATE = 1.56
OT_THRESHOLD_HOURS = 9.0
BREAK_HOURS = 1.0
FALLBACK_SHIFT_HOURS = 9.0

# Shift classification thresholds, in minutes past midnight.
SHIFT_A_CUTOFF_MINUTES = 10 * 60 + 30
SHIFT_C_CUTOFF_MINUTES = 12 * 60 + 30

# (minimum lateness minutes, penalty), highest tier first.
PENALTY_TIERS = (
    (60, 10.0),
    (20, 5.0),
    (10, 3.0),
)

EFFICIENCY_PENALTY_UNIT = 10.0

HEADER_NAME_LITERALS = frozenset({"name", "employee_name"})

DEFAULT_CLEANSING_PREVIEW = 20
NOTE_SEPARATOR = " | "
NOT_AVAILABLE = "N/A"
DISPLAY_DATE_FORMAT = "%d %b %Y"
MONTH_LABEL_FORMAT = "%B %Y"
