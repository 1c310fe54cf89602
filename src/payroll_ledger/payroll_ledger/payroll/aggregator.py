"""Fold computed shifts into employee summaries, monthly stats and insights.

Groups iterate in first-seen order over the (already sorted) shift list, so
ranking and report order are reproducible for a fixed input. Insight ties are
broken alphabetically.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Sequence

from ..core.constants import NOT_AVAILABLE
from ..core.enums import ShiftType
from ..ingestion.grouper import name_key
from .model import (
    ComputedShift,
    EmployeeSummary,
    MonthlyStat,
    RankedName,
    ShiftCounts,
    StrategicInsights,
)

LATE_EVENT_MINUTES = 10
EARLY_EVENT_MINUTES = 15


@dataclass
class _EmployeeAccumulator:
    name: str
    work_days: int = 0
    shift_counts: dict = field(default_factory=lambda: {t: 0 for t in ShiftType})
    standard: float = 0.0
    ot: float = 0.0
    penalties: float = 0.0
    manual_penalties: float = 0.0
    adjustments: float = 0.0
    waivers: float = 0.0
    net: float = 0.0
    paid: float = 0.0
    remaining: float = 0.0
    penalty_free_days: int = 0

    def add(self, shift: ComputedShift) -> None:
        if shift.is_worked:
            self.work_days += 1
            self.shift_counts[shift.shift_type] += 1
            if shift.attendance_penalty == 0:
                self.penalty_free_days += 1
        self.standard += shift.standard_pay
        self.ot += shift.ot_pay
        self.penalties += shift.attendance_penalty
        self.manual_penalties += shift.manual_penalty
        self.adjustments += shift.manual_adjustment
        self.waivers += shift.penalty_waiver
        self.net += shift.net_pay
        self.paid += shift.amount_paid
        self.remaining += shift.balance_remaining

    def freeze(self, rank: int) -> EmployeeSummary:
        return EmployeeSummary(
            name=self.name,
            work_days=self.work_days,
            shift_counts=ShiftCounts(**{t.value: n for t, n in self.shift_counts.items()}),
            total_standard_pay=self.standard,
            total_ot_pay=self.ot,
            total_attendance_penalties=self.penalties,
            total_manual_penalties=self.manual_penalties,
            total_manual_adjustments=self.adjustments,
            total_penalty_waivers=self.waivers,
            net_salary=self.net,
            amount_paid=self.paid,
            net_remaining=self.remaining,
            penalty_free_days=self.penalty_free_days,
            rank=rank,
        )


@dataclass
class _MonthAccumulator:
    year: int
    month: int
    days_worked: int = 0
    standard: float = 0.0
    ot: float = 0.0
    penalties: float = 0.0
    net: float = 0.0
    paid: float = 0.0

    def add(self, shift: ComputedShift) -> None:
        if shift.is_worked:
            self.days_worked += 1
        self.standard += shift.standard_pay
        self.ot += shift.ot_pay
        self.penalties += shift.effective_penalty
        self.net += shift.net_pay
        self.paid += shift.amount_paid

    def freeze(self) -> MonthlyStat:
        return MonthlyStat(
            year=self.year,
            month=self.month,
            days_worked=self.days_worked,
            standard_pay=self.standard,
            ot_pay=self.ot,
            penalties=self.penalties,
            net_pay=self.net,
            total_paid=self.paid,
        )


@dataclass(frozen=True)
class Aggregates:
    summaries: list[EmployeeSummary]
    monthly_stats: list[MonthlyStat]
    insights: StrategicInsights


def summarize_employees(shifts: Sequence[ComputedShift]) -> list[EmployeeSummary]:
    accumulators: dict[str, _EmployeeAccumulator] = {}
    for shift in shifts:
        key = name_key(shift.name)
        acc = accumulators.get(key)
        if acc is None:
            acc = _EmployeeAccumulator(name=shift.name)
            accumulators[key] = acc
        acc.add(shift)

    ordered = sorted(accumulators.values(), key=lambda a: a.net, reverse=True)
    return [acc.freeze(rank=i) for i, acc in enumerate(ordered, start=1)]


def summarize_months(shifts: Sequence[ComputedShift]) -> list[MonthlyStat]:
    accumulators: dict[tuple[int, int], _MonthAccumulator] = {}
    for shift in shifts:
        acc = accumulators.get(shift.month_key)
        if acc is None:
            acc = _MonthAccumulator(*shift.month_key)
            accumulators[shift.month_key] = acc
        acc.add(shift)
    return [acc.freeze() for acc in accumulators.values()]


def _leader(summaries: Sequence[EmployeeSummary], attr: str) -> RankedName:
    """Highest value wins; ties go to the alphabetically first name."""
    if not summaries:
        return RankedName(NOT_AVAILABLE, 0)
    best = min(summaries, key=lambda s: (-getattr(s, attr), s.name.casefold(), s.name))
    return RankedName(best.name, getattr(best, attr))


def derive_insights(
    shifts: Sequence[ComputedShift],
    summaries: Sequence[EmployeeSummary],
    *,
    today: date,
) -> StrategicInsights:
    worked = [s for s in shifts if s.is_worked]
    effective_penalties = sum(s.effective_penalty for s in shifts)
    ot_pay = sum(s.ot_pay for s in shifts)
    denominator = effective_penalties + ot_pay

    usage = {t.value: 0.0 for t in ShiftType}
    if worked:
        for t in ShiftType:
            usage[t.value] = sum(1 for s in worked if s.shift_type == t) / len(worked)

    return StrategicInsights(
        most_reliable=_leader(summaries, "penalty_free_days"),
        top_late_offender=_leader(summaries, "total_attendance_penalties"),
        penalty_recovery_rate=effective_penalties / denominator if denominator else 0.0,
        total_ot_hours=sum(s.ot_hours for s in shifts),
        shift_usage=usage,
        perfect_attendance_staff=tuple(
            s.name for s in summaries if s.total_attendance_penalties == 0 and s.work_days > 0
        ),
        total_future_liability=sum(s.net_pay for s in shifts if s.work_date > today),
        total_late_events=sum(1 for s in shifts if s.lateness_minutes >= LATE_EVENT_MINUTES),
        total_early_events=sum(1 for s in worked if s.early_minutes > EARLY_EVENT_MINUTES),
    )


def aggregate(shifts: Sequence[ComputedShift], *, today: date) -> Aggregates:
    summaries = summarize_employees(shifts)
    return Aggregates(
        summaries=summaries,
        monthly_stats=summarize_months(shifts),
        insights=derive_insights(shifts, summaries, today=today),
    )
