from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime
from typing import Optional

from ..core.constants import (
    BREAK_HOURS,
    DISPLAY_DATE_FORMAT,
    FALLBACK_SHIFT_HOURS,
    MONTH_LABEL_FORMAT,
    OT_HOURLY_RATE,
    OT_THRESHOLD_HOURS,
    STANDARD_DAY_PAY,
)
from ..core.enums import EditKind, ShiftType
from ..ingestion.model import CleansingEntry


@dataclass(frozen=True)
class PayrollRules:
    standard_day_pay: float = STANDARD_DAY_PAY
    ot_hourly_rate: float = OT_HOURLY_RATE
    ot_threshold_hours: float = OT_THRESHOLD_HOURS
    break_hours: float = BREAK_HOURS
    fallback_shift_hours: float = FALLBACK_SHIFT_HOURS

    def to_dict(self) -> dict:
        return asdict(self)


def make_shift_id(name_key: str, work_date: date) -> str:
    return f"{work_date.isoformat()}:{name_key}"


def _clock(moment: Optional[datetime]) -> Optional[str]:
    return moment.strftime("%H:%M") if moment else None


@dataclass(frozen=True)
class ComputedShift:
    """One employee's attendance and pay for one calendar day."""

    shift_id: str
    name: str
    work_date: date
    actual_in: Optional[datetime]
    actual_out: Optional[datetime]
    shift_type: ShiftType
    shift_start: Optional[datetime]
    lateness_minutes: int = 0
    early_minutes: float = 0.0
    work_hours: float = 0.0
    duration_hours: float = 0.0
    ot_hours: float = 0.0
    ot_pay: float = 0.0
    standard_pay: float = 0.0
    attendance_penalty: float = 0.0
    manual_penalty: float = 0.0
    penalty_waiver: float = 0.0
    manual_adjustment: float = 0.0
    net_pay: float = 0.0
    amount_paid: float = 0.0
    balance_remaining: float = 0.0
    adjustment_note: Optional[str] = None
    is_placeholder: bool = False

    @property
    def effective_penalty(self) -> float:
        return self.attendance_penalty - self.penalty_waiver

    @property
    def is_waived(self) -> bool:
        return self.penalty_waiver > 0

    @property
    def is_worked(self) -> bool:
        return self.net_pay != 0 or self.work_hours > 0

    @property
    def month_key(self) -> tuple[int, int]:
        return (self.work_date.year, self.work_date.month)

    def with_derived_pay(self) -> "ComputedShift":
        """Re-derive net pay and balance from the pay components."""
        net_pay = (
            self.standard_pay
            + self.ot_pay
            - (self.attendance_penalty - self.penalty_waiver)
            - self.manual_penalty
            - self.manual_adjustment
        )
        return replace(self, net_pay=net_pay, balance_remaining=net_pay - self.amount_paid)

    def to_dict(self) -> dict:
        return {
            "id": self.shift_id,
            "name": self.name,
            "date": self.work_date.isoformat(),
            "actual_in": self.actual_in.isoformat() if self.actual_in else None,
            "actual_out": self.actual_out.isoformat() if self.actual_out else None,
            "arrival": _clock(self.actual_in),
            "departure": _clock(self.actual_out),
            "shift_type": self.shift_type.value,
            "shift_start": self.shift_start.isoformat() if self.shift_start else None,
            "lateness_minutes": self.lateness_minutes,
            "early_minutes": self.early_minutes,
            "work_hours": self.work_hours,
            "duration_hours": self.duration_hours,
            "ot_hours": self.ot_hours,
            "ot_pay": self.ot_pay,
            "standard_pay": self.standard_pay,
            "attendance_penalty": self.attendance_penalty,
            "manual_penalty": self.manual_penalty,
            "penalty_waiver": self.penalty_waiver,
            "manual_adjustment": self.manual_adjustment,
            "net_pay": self.net_pay,
            "amount_paid": self.amount_paid,
            "balance_remaining": self.balance_remaining,
            "adjustment_note": self.adjustment_note,
            "is_placeholder": self.is_placeholder,
        }


@dataclass(frozen=True)
class ManagerEdit:
    """A recorded manager action, replayable over freshly computed shifts."""

    kind: EditKind
    shift_id: str
    amount: Optional[float] = None
    reason: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ManagerEdit":
        if not isinstance(data, dict):
            raise ValueError(f"edit must be an object, got {type(data).__name__}")
        amount = data.get("amount")
        if amount is not None and amount != "":
            if isinstance(amount, bool) or not isinstance(amount, (int, float, str)):
                raise ValueError(f"amount must be a number: {amount!r}")
            amount = float(amount)
            if not math.isfinite(amount):
                raise ValueError(f"amount must be finite: {amount}")
        else:
            amount = None
        return cls(
            kind=EditKind(str(data.get("kind", "")).upper()),
            shift_id=str(data.get("shift_id") or data.get("id") or ""),
            amount=amount,
            reason=data.get("reason"),
            note=data.get("note"),
        )


@dataclass(frozen=True)
class ShiftFilter:
    employee: Optional[str] = None
    month: Optional[tuple[int, int]] = None
    search: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None

    def matches(self, shift: ComputedShift) -> bool:
        if self.employee and shift.name.lower() != self.employee.strip().lower():
            return False
        if self.month and shift.month_key != tuple(self.month):
            return False
        if self.search:
            needle = self.search.strip().lower()
            if needle not in shift.name.lower() and needle not in shift.work_date.isoformat():
                return False
        if self.start and shift.work_date < self.start:
            return False
        if self.end and shift.work_date > self.end:
            return False
        return True


@dataclass(frozen=True)
class ShiftCounts:
    A: int = 0
    B: int = 0
    C: int = 0

    def to_dict(self) -> dict:
        return {"A": self.A, "B": self.B, "C": self.C}


@dataclass(frozen=True)
class EmployeeSummary:
    name: str
    work_days: int
    shift_counts: ShiftCounts
    total_standard_pay: float
    total_ot_pay: float
    total_attendance_penalties: float
    total_manual_penalties: float
    total_manual_adjustments: float
    total_penalty_waivers: float
    net_salary: float
    amount_paid: float
    net_remaining: float
    penalty_free_days: int
    rank: int = 0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["shift_counts"] = self.shift_counts.to_dict()
        return data


@dataclass(frozen=True)
class MonthlyStat:
    year: int
    month: int
    days_worked: int
    standard_pay: float
    ot_pay: float
    penalties: float
    net_pay: float
    total_paid: float

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime(MONTH_LABEL_FORMAT)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["label"] = self.label
        return data


@dataclass(frozen=True)
class RankedName:
    name: str
    value: float


@dataclass(frozen=True)
class StrategicInsights:
    most_reliable: RankedName
    top_late_offender: RankedName
    penalty_recovery_rate: float
    total_ot_hours: float
    shift_usage: dict
    perfect_attendance_staff: tuple[str, ...]
    total_future_liability: float
    total_late_events: int = 0
    total_early_events: int = 0

    def to_dict(self) -> dict:
        return {
            "most_reliable": {"name": self.most_reliable.name, "penalty_free_days": int(self.most_reliable.value)},
            "top_late_offender": {
                "name": self.top_late_offender.name,
                "total_attendance_penalties": self.top_late_offender.value,
            },
            "penalty_recovery_rate": self.penalty_recovery_rate,
            "total_ot_hours": self.total_ot_hours,
            "shift_usage": dict(self.shift_usage),
            "perfect_attendance_staff": list(self.perfect_attendance_staff),
            "total_future_liability": self.total_future_liability,
            "total_late_events": self.total_late_events,
            "total_early_events": self.total_early_events,
        }


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date

    @property
    def start_label(self) -> str:
        return self.start.strftime(DISPLAY_DATE_FORMAT)

    @property
    def end_label(self) -> str:
        return self.end.strftime(DISPLAY_DATE_FORMAT)

    def to_dict(self) -> dict:
        return {
            "start": self.start_label,
            "end": self.end_label,
            "start_iso": self.start.isoformat(),
            "end_iso": self.end.isoformat(),
        }


@dataclass(frozen=True)
class PayrollTotals:
    standard_owed: float = 0.0
    ot_payout: float = 0.0
    penalties: float = 0.0
    manual_penalties: float = 0.0
    manual_adjustments: float = 0.0
    penalty_waivers: float = 0.0
    net_owed: float = 0.0
    paid_disbursed: float = 0.0
    remaining_balance: float = 0.0
    days_worked: int = 0
    lateness_minutes: int = 0


@dataclass(frozen=True)
class PayrollResult:
    """Immutable snapshot handed to renderers, exporters and the narrative audit."""

    summaries: tuple[EmployeeSummary, ...]
    monthly_stats: tuple[MonthlyStat, ...]
    insights: StrategicInsights
    totals: PayrollTotals
    efficiency_score: float
    shifts: tuple[ComputedShift, ...]
    cleansing_log: tuple[CleansingEntry, ...] = field(default_factory=tuple)
    date_range: Optional[DateRange] = None
    available_months: tuple[tuple[int, int], ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "summaries": [s.to_dict() for s in self.summaries],
            "monthly_stats": [m.to_dict() for m in self.monthly_stats],
            "insights": self.insights.to_dict(),
            "totals": asdict(self.totals),
            "efficiency_score": self.efficiency_score,
            "shifts": [s.to_dict() for s in self.shifts],
            "cleansing_log": [c.to_dict() for c in self.cleansing_log],
            "date_range": self.date_range.to_dict() if self.date_range else None,
            "available_months": [
                {"year": y, "month": m, "label": date(y, m, 1).strftime(MONTH_LABEL_FORMAT)}
                for y, m in self.available_months
            ],
        }
