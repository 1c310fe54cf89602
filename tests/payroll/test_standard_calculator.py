from datetime import date, datetime, time

import pytest

from src.payroll_ledger.payroll_ledger.core.enums import ShiftType
from src.payroll_ledger.payroll_ledger.ingestion.model import DayGroup
from src.payroll_ledger.payroll_ledger.payroll.calculator.standard_calculator import StandardPayrollCalculator
from src.payroll_ledger.payroll_ledger.payroll.model import PayrollRules


def make_group(day, check_ins=(), check_outs=(), paid=0.0, manual_penalty=0.0):
    return DayGroup(
        name_key="rana",
        display_name="Rana",
        work_date=day,
        row_numbers=[1],
        check_ins=list(check_ins),
        check_outs=list(check_outs),
        amount_paid=paid,
        manual_penalty=manual_penalty,
    )


def assert_invariants(shift):
    expected_net = (
        shift.standard_pay
        + shift.ot_pay
        - (shift.attendance_penalty - shift.penalty_waiver)
        - shift.manual_penalty
        - shift.manual_adjustment
    )
    assert shift.net_pay == expected_net
    assert shift.balance_remaining == shift.net_pay - shift.amount_paid
    assert shift.lateness_minutes >= 0
    assert shift.attendance_penalty >= 0
    assert shift.ot_hours >= 0
    assert shift.duration_hours >= 0


@pytest.mark.parametrize(
    "minutes, penalty",
    [(0, 0), (9, 0), (10, 3), (19, 3), (20, 5), (59, 5), (60, 10), (240, 10)],
)
def test_penalty_tiers(minutes, penalty):
    assert StandardPayrollCalculator().attendance_penalty(minutes) == penalty


def test_penalty_is_monotonic():
    calc = StandardPayrollCalculator()
    penalties = [calc.attendance_penalty(m) for m in range(0, 180)]

    assert penalties == sorted(penalties)


def test_mid_morning_arrival_before_nominal_start_has_no_lateness():
    shift = StandardPayrollCalculator().compute(make_group(date(2025, 1, 6), [time(10, 40)], [time(20, 0)]))

    assert shift.shift_type == ShiftType.C
    assert shift.shift_start == datetime(2025, 1, 6, 11, 0)
    assert shift.lateness_minutes == 0
    assert shift.work_hours == pytest.approx(9.3333, abs=1e-3)
    assert shift.ot_hours == pytest.approx(0.3333, abs=1e-3)
    assert shift.ot_pay == pytest.approx(0.52, abs=1e-3)
    assert shift.net_pay == pytest.approx(10.52, abs=1e-3)
    assert shift.duration_hours == pytest.approx(8.3333, abs=1e-3)
    assert_invariants(shift)


def test_thursday_afternoon_uses_later_start():
    thursday = date(2025, 1, 2)
    shift = StandardPayrollCalculator().compute(make_group(thursday, [time(15, 10)], [time(23, 0)]))

    assert shift.shift_type == ShiftType.B
    assert shift.shift_start == datetime(2025, 1, 2, 15, 0)
    assert shift.lateness_minutes == 10
    assert shift.attendance_penalty == 3
    assert shift.work_hours == pytest.approx(7.8333, abs=1e-3)
    assert shift.ot_hours == 0
    assert shift.net_pay == pytest.approx(7.0)
    assert_invariants(shift)


def test_missing_checkout_falls_back_to_default_length():
    shift = StandardPayrollCalculator().compute(make_group(date(2025, 1, 6), [time(11, 5)]))

    assert shift.actual_out == datetime(2025, 1, 6, 20, 5)
    assert shift.work_hours == pytest.approx(9.0)
    assert shift.shift_type == ShiftType.C
    assert shift.lateness_minutes == 5
    assert shift.attendance_penalty == 0
    assert shift.net_pay == pytest.approx(10.0)


def test_overnight_checkout_rolls_to_next_day():
    shift = StandardPayrollCalculator().compute(make_group(date(2025, 1, 6), [time(14, 0)], [time(1, 0)]))

    assert shift.actual_out == datetime(2025, 1, 7, 1, 0)
    assert shift.work_hours == pytest.approx(11.0)
    assert shift.ot_pay == pytest.approx(2 * 1.56)


def test_multiple_punches_use_earliest_in_latest_out():
    shift = StandardPayrollCalculator().compute(
        make_group(date(2025, 1, 6), [time(10, 40), time(9, 55)], [time(14, 0), time(19, 55)])
    )

    assert shift.actual_in == datetime(2025, 1, 6, 9, 55)
    assert shift.actual_out == datetime(2025, 1, 6, 19, 55)
    assert shift.shift_type == ShiftType.A
    assert shift.work_hours == pytest.approx(10.0)


def test_paid_and_manual_penalty_flow_into_net_and_balance():
    shift = StandardPayrollCalculator().compute(
        make_group(date(2025, 1, 6), [time(10, 25)], [time(19, 0)], paid=4.0, manual_penalty=2.0)
    )

    assert shift.attendance_penalty == 5
    assert shift.net_pay == pytest.approx(10 - 5 - 2)
    assert shift.balance_remaining == pytest.approx(3 - 4)
    assert_invariants(shift)


def test_day_without_checkin_becomes_placeholder():
    shift = StandardPayrollCalculator().compute(make_group(date(2025, 1, 6), check_outs=[time(18, 0)], paid=6.0))

    assert shift.is_placeholder
    assert shift.actual_in is None
    assert shift.shift_type == ShiftType.A
    assert shift.standard_pay == 0
    assert shift.work_hours == 0
    assert shift.net_pay == 0
    assert shift.balance_remaining == -6.0
    assert not shift.is_worked
    assert_invariants(shift)


def test_rules_can_be_overridden():
    calc = StandardPayrollCalculator(PayrollRules(standard_day_pay=20.0, ot_hourly_rate=2.0, ot_threshold_hours=8.0))
    shift = calc.compute(make_group(date(2025, 1, 6), [time(9, 0)], [time(19, 0)]))

    assert shift.ot_hours == pytest.approx(2.0)
    assert shift.net_pay == pytest.approx(24.0)


def test_shift_id_is_stable():
    calc = StandardPayrollCalculator()
    first = calc.compute(make_group(date(2025, 1, 6), [time(9, 0)]))
    second = calc.compute(make_group(date(2025, 1, 6), [time(9, 30)]))

    assert first.shift_id == second.shift_id == "2025-01-06:rana"
