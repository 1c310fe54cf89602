from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.enums import ShiftType


@dataclass(frozen=True)
class Shift:
    """Nominal shift definition."""

    shift_type: ShiftType
    start_time: time
    weekend_eve_start_time: time | None = None


@dataclass(frozen=True)
class ShiftAssignment:
    shift_type: ShiftType
    nominal_start: datetime
