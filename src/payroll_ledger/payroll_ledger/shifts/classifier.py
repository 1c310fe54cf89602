from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time

from ..common.datetime_utils import at_time, minute_of_day
from ..core.constants import SHIFT_A_CUTOFF_MINUTES, SHIFT_C_CUTOFF_MINUTES
from ..core.enums import ShiftType
from .model import Shift, ShiftAssignment

THURSDAY = 3
FRIDAY = 4
WEEKEND_EVE_DAYS = frozenset({THURSDAY, FRIDAY})

DEFAULT_SHIFTS = {
    ShiftType.A: Shift(ShiftType.A, time(10, 0)),
    ShiftType.C: Shift(ShiftType.C, time(11, 0)),
    ShiftType.B: Shift(ShiftType.B, time(14, 0), weekend_eve_start_time=time(15, 0)),
}


@dataclass(frozen=True)
class ShiftClassifier:
    """Decide the shift from the arrival's wall-clock minute.

    Before 10:30 is the morning shift (A); 10:30 through 12:30 inclusive is the
    mid-morning shift (C); anything later is the afternoon shift (B), which starts
    an hour later on the weekend eve (Thursday/Friday).
    """

    a_cutoff_minutes: int = SHIFT_A_CUTOFF_MINUTES
    c_cutoff_minutes: int = SHIFT_C_CUTOFF_MINUTES
    shifts: dict = field(default_factory=lambda: dict(DEFAULT_SHIFTS), hash=False)

    def shift_for(self, arrival: datetime) -> Shift:
        m = minute_of_day(arrival)
        if m < self.a_cutoff_minutes:
            return self.shifts[ShiftType.A]
        if m <= self.c_cutoff_minutes:
            return self.shifts[ShiftType.C]
        return self.shifts[ShiftType.B]

    def classify(self, arrival: datetime) -> ShiftAssignment:
        shift = self.shift_for(arrival)
        start = shift.start_time
        if shift.weekend_eve_start_time and arrival.weekday() in WEEKEND_EVE_DAYS:
            start = shift.weekend_eve_start_time
        return ShiftAssignment(shift_type=shift.shift_type, nominal_start=at_time(arrival.date(), start))


_DEFAULT = ShiftClassifier()


def classify_shift(arrival: datetime) -> ShiftAssignment:
    return _DEFAULT.classify(arrival)
