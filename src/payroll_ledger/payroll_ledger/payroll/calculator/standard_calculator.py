from __future__ import annotations

from datetime import timedelta
from typing import Optional

from .base import PayrollCalculator
from ...common.datetime_utils import at_time, hours_between, whole_minutes_between
from ...core.constants import PENALTY_TIERS
from ...core.enums import ShiftType
from ...ingestion.model import DayGroup
from ...shifts.classifier import ShiftClassifier
from ..model import ComputedShift, PayrollRules, make_shift_id


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: flat day pay, OT past the threshold, tiered lateness penalty.

    A day with no usable check-in becomes a placeholder with no pay of its own;
    only the paid amount and any manual penalty carry through.
    """

    def __init__(self, rules: Optional[PayrollRules] = None, *, classifier: Optional[ShiftClassifier] = None):
        self._rules = rules or PayrollRules()
        self._classifier = classifier or ShiftClassifier()

    @property
    def rules(self) -> PayrollRules:
        return self._rules

    def attendance_penalty(self, lateness_minutes: int) -> float:
        for threshold, penalty in PENALTY_TIERS:
            if lateness_minutes >= threshold:
                return penalty
        return 0.0

    def compute(self, group: DayGroup) -> ComputedShift:
        if not group.check_ins:
            return self.placeholder(group)

        r = self._rules
        actual_in = min(at_time(group.work_date, t) for t in group.check_ins)
        if group.check_outs:
            actual_out = max(at_time(group.work_date, t) for t in group.check_outs)
        else:
            actual_out = actual_in + timedelta(hours=r.fallback_shift_hours)
        if actual_out < actual_in:
            actual_out += timedelta(days=1)

        assignment = self._classifier.classify(actual_in)
        lateness = max(0, whole_minutes_between(actual_in, assignment.nominal_start))
        work_hours = hours_between(actual_out, actual_in)
        ot_hours = max(0.0, work_hours - r.ot_threshold_hours)

        shift = ComputedShift(
            shift_id=make_shift_id(group.name_key, group.work_date),
            name=group.display_name,
            work_date=group.work_date,
            actual_in=actual_in,
            actual_out=actual_out,
            shift_type=assignment.shift_type,
            shift_start=assignment.nominal_start,
            lateness_minutes=lateness,
            early_minutes=max(0.0, (r.ot_threshold_hours - work_hours) * 60),
            work_hours=work_hours,
            duration_hours=max(0.0, work_hours - r.break_hours),
            ot_hours=ot_hours,
            ot_pay=ot_hours * r.ot_hourly_rate,
            standard_pay=r.standard_day_pay,
            attendance_penalty=self.attendance_penalty(lateness),
            manual_penalty=group.manual_penalty,
            amount_paid=group.amount_paid,
        )
        return shift.with_derived_pay()

    def placeholder(self, group: DayGroup) -> ComputedShift:
        shift = ComputedShift(
            shift_id=make_shift_id(group.name_key, group.work_date),
            name=group.display_name,
            work_date=group.work_date,
            actual_in=None,
            actual_out=None,
            shift_type=ShiftType.A,
            shift_start=None,
            manual_penalty=group.manual_penalty,
            amount_paid=group.amount_paid,
            is_placeholder=True,
        )
        return shift.with_derived_pay()
