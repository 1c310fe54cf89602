from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import EFFICIENCY_PENALTY_UNIT
from ..core.enums import CleansingKind
from ..core.exceptions import NoUsableRecordsError, ValidationError
from ..ingestion.grouper import group_rows, to_punch_rows
from ..ingestion.model import CleansingEntry, ColumnMapping, DayGroup
from .adjustments import replay_edits
from .aggregator import aggregate
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import ComputedShift, DateRange, ManagerEdit, PayrollResult, PayrollTotals, ShiftFilter

logger = logging.getLogger(__name__)


def sort_shifts(shifts: Iterable[ComputedShift]) -> list[ComputedShift]:
    return sorted(shifts, key=lambda s: (s.work_date, s.name.casefold(), s.name))


def available_months(shifts: Iterable[ComputedShift]) -> list[tuple[int, int]]:
    return sorted({s.month_key for s in shifts})


def _timing_entries(group: DayGroup, shift: ComputedShift) -> list[CleansingEntry]:
    row = group.row_numbers[0] if group.row_numbers else None
    label = f"{group.display_name} on {group.work_date.isoformat()}"
    if shift.is_placeholder:
        return [CleansingEntry(CleansingKind.TIME_INTERPOLATION, f"{label}: no usable check-in, recorded without pay.", row)]
    if not group.check_outs:
        return [CleansingEntry(CleansingKind.TIME_INTERPOLATION, f"{label}: no check-out, assumed default shift length.", row)]
    if shift.actual_out.date() > shift.work_date:
        return [CleansingEntry(CleansingKind.MIDNIGHT_ADJUST, f"{label}: check-out before check-in, moved to next day.", row)]
    return []


class PayrollLedgerService:
    """Raw rows in, immutable payroll ledger out.

    Every call is a full recomputation: rows are regrouped, shifts recomputed, the
    manager edit history replayed, filters applied, then everything is aggregated.
    """

    def __init__(self, *, calculator: Optional[PayrollCalculator] = None):
        self._calculator = calculator or StandardPayrollCalculator()

    def compute_shifts(
        self,
        rows: Sequence[Mapping[str, object]],
        mapping: ColumnMapping,
    ) -> tuple[list[ComputedShift], list[CleansingEntry]]:
        if not rows:
            raise ValidationError("Dataset contains no records")

        outcome = group_rows(to_punch_rows(rows, mapping))
        log = list(outcome.cleansing_log)
        shifts: list[ComputedShift] = []
        for group in outcome.groups:
            shift = self._calculator.compute(group)
            log.extend(_timing_entries(group, shift))
            shifts.append(shift)

        if not shifts:
            raise NoUsableRecordsError("No valid attendance logs found. Verify the column mapping.", log)
        return sort_shifts(shifts), log

    def build_ledger(
        self,
        rows: Sequence[Mapping[str, object]],
        mapping: ColumnMapping,
        *,
        edits: Iterable[ManagerEdit] = (),
        shift_filter: Optional[ShiftFilter] = None,
        today: Optional[date] = None,
    ) -> PayrollResult:
        shifts, log = self.compute_shifts(rows, mapping)
        shifts = replay_edits(shifts, edits)
        result = self.assemble(shifts, log, shift_filter=shift_filter, today=today)
        logger.info(
            "ledger built: %d rows, %d shifts, %d cleansing entries",
            len(rows), len(result.shifts), len(log),
            extra={"row_count": len(rows), "shift_count": len(result.shifts), "cleansing_count": len(log)},
        )
        return result

    def assemble(
        self,
        shifts: Sequence[ComputedShift],
        cleansing_log: Sequence[CleansingEntry] = (),
        *,
        shift_filter: Optional[ShiftFilter] = None,
        today: Optional[date] = None,
    ) -> PayrollResult:
        today = today or now_local().date()
        months = available_months(shifts)
        selected = sort_shifts(s for s in shifts if shift_filter is None or shift_filter.matches(s))
        aggregates = aggregate(selected, today=today)

        summaries = aggregates.summaries
        effective_penalties = sum(s.effective_penalty for s in selected)
        days_worked = sum(1 for s in selected if s.is_worked)
        totals = PayrollTotals(
            standard_owed=sum(s.total_standard_pay for s in summaries),
            ot_payout=sum(s.total_ot_pay for s in summaries),
            penalties=sum(s.total_attendance_penalties for s in summaries),
            manual_penalties=sum(s.total_manual_penalties for s in summaries),
            manual_adjustments=sum(s.total_manual_adjustments for s in summaries),
            penalty_waivers=sum(s.total_penalty_waivers for s in summaries),
            net_owed=sum(s.net_salary for s in summaries),
            paid_disbursed=sum(s.amount_paid for s in summaries),
            remaining_balance=sum(s.net_remaining for s in summaries),
            days_worked=days_worked,
            lateness_minutes=sum(s.lateness_minutes for s in selected),
        )
        efficiency = 1 - effective_penalties / ((days_worked * EFFICIENCY_PENALTY_UNIT) or 1)

        date_range = DateRange(selected[0].work_date, selected[-1].work_date) if selected else None
        return PayrollResult(
            summaries=tuple(summaries),
            monthly_stats=tuple(aggregates.monthly_stats),
            insights=aggregates.insights,
            totals=totals,
            efficiency_score=efficiency,
            shifts=tuple(selected),
            cleansing_log=tuple(cleansing_log),
            date_range=date_range,
            available_months=tuple(months),
        )
