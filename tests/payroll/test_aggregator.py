from datetime import date, datetime

import pytest

from src.payroll_ledger.payroll_ledger.core.enums import ShiftType
from src.payroll_ledger.payroll_ledger.payroll.adjustments import apply_manual_adjustment
from src.payroll_ledger.payroll_ledger.payroll.aggregator import aggregate, summarize_employees, summarize_months
from src.payroll_ledger.payroll_ledger.payroll.model import ComputedShift

TODAY = date(2025, 1, 15)


def shift(name, day, *, shift_type=ShiftType.A, penalty=0.0, waiver=0.0, ot_pay=0.0, ot_hours=0.0,
          work_hours=9.0, paid=0.0, standard=10.0, lateness=0, early=0.0):
    return ComputedShift(
        shift_id=f"{day.isoformat()}:{name.lower()}",
        name=name,
        work_date=day,
        actual_in=datetime(day.year, day.month, day.day, 10, 0),
        actual_out=datetime(day.year, day.month, day.day, 19, 0),
        shift_type=shift_type,
        shift_start=datetime(day.year, day.month, day.day, 10, 0),
        lateness_minutes=lateness,
        early_minutes=early,
        work_hours=work_hours,
        ot_hours=ot_hours,
        ot_pay=ot_pay,
        standard_pay=standard,
        attendance_penalty=penalty,
        penalty_waiver=waiver,
        amount_paid=paid,
    ).with_derived_pay()


def placeholder(name, day, paid=0.0, manual_penalty=0.0):
    return ComputedShift(
        shift_id=f"{day.isoformat()}:{name.lower()}",
        name=name,
        work_date=day,
        actual_in=None,
        actual_out=None,
        shift_type=ShiftType.A,
        shift_start=None,
        amount_paid=paid,
        manual_penalty=manual_penalty,
        is_placeholder=True,
    ).with_derived_pay()


def test_employee_summary_counts_only_worked_days():
    shifts = [
        shift("Omar", date(2025, 1, 6), shift_type=ShiftType.C, penalty=3, lateness=12),
        shift("Omar", date(2025, 1, 7), shift_type=ShiftType.B),
        placeholder("omar", date(2025, 1, 8), paid=4.0),
    ]

    [summary] = summarize_employees(shifts)

    assert summary.name == "Omar"
    assert summary.work_days == 2
    assert summary.shift_counts.to_dict() == {"A": 0, "B": 1, "C": 1}
    assert summary.penalty_free_days == 1
    assert summary.total_attendance_penalties == 3
    assert summary.net_salary == pytest.approx(17.0)
    assert summary.amount_paid == pytest.approx(4.0)
    assert summary.net_remaining == pytest.approx(13.0)
    assert summary.rank == 1


def test_rank_by_net_salary_with_stable_ties():
    shifts = [
        shift("Zaid", date(2025, 1, 6)),
        shift("Amal", date(2025, 1, 6)),
        shift("Omar", date(2025, 1, 6), ot_pay=1.0),
    ]

    summaries = summarize_employees(shifts)

    assert [(s.name, s.rank) for s in summaries] == [("Omar", 1), ("Zaid", 2), ("Amal", 3)]


def test_monthly_stats_group_by_year_and_month():
    shifts = [
        shift("Omar", date(2024, 12, 31), penalty=5, waiver=5),
        shift("Omar", date(2025, 1, 6), penalty=3),
        shift("Amal", date(2025, 1, 7), paid=2.0),
        placeholder("Amal", date(2025, 1, 8)),
    ]

    stats = summarize_months(shifts)

    assert [(m.year, m.month, m.label) for m in stats] == [(2024, 12, "December 2024"), (2025, 1, "January 2025")]
    assert stats[0].penalties == 0
    assert stats[1].days_worked == 2
    assert stats[1].penalties == 3
    assert stats[1].net_pay == pytest.approx(17.0)
    assert stats[1].total_paid == pytest.approx(2.0)


def test_insights():
    shifts = [
        shift("Omar", date(2025, 1, 6), penalty=5, lateness=25, shift_type=ShiftType.A),
        shift("Omar", date(2025, 1, 20), shift_type=ShiftType.B, ot_pay=1.56, ot_hours=1.0),
        shift("Amal", date(2025, 1, 6), shift_type=ShiftType.C),
        shift("Amal", date(2025, 1, 16), shift_type=ShiftType.C),
        placeholder("Zaid", date(2025, 1, 6)),
    ]

    insights = aggregate(shifts, today=TODAY).insights

    assert insights.most_reliable.name == "Amal"
    assert insights.most_reliable.value == 2
    assert insights.top_late_offender.name == "Omar"
    assert insights.top_late_offender.value == 5
    assert insights.penalty_recovery_rate == pytest.approx(5 / (5 + 1.56))
    assert insights.total_ot_hours == pytest.approx(1.0)
    assert insights.shift_usage == pytest.approx({"A": 0.25, "B": 0.25, "C": 0.5})
    assert insights.perfect_attendance_staff == ("Amal",)
    assert insights.total_future_liability == pytest.approx(11.56 + 10.0)
    assert insights.total_late_events == 1


def test_insight_ties_break_alphabetically():
    shifts = [
        shift("Zaid", date(2025, 1, 6), penalty=3),
        shift("amal", date(2025, 1, 6), penalty=3),
    ]

    insights = aggregate(shifts, today=TODAY).insights

    assert insights.most_reliable.name == "amal"
    assert insights.top_late_offender.name == "amal"


def test_insights_on_empty_input():
    insights = aggregate([], today=TODAY).insights

    assert insights.most_reliable.name == "N/A"
    assert insights.top_late_offender.value == 0
    assert insights.penalty_recovery_rate == 0
    assert insights.shift_usage == {"A": 0.0, "B": 0.0, "C": 0.0}


def test_placeholder_with_manual_penalty_counts_as_worked_day():
    shifts = [
        shift("Amal", date(2025, 1, 6)),
        placeholder("Zaid", date(2025, 1, 6), manual_penalty=2.0),
        placeholder("Zaid", date(2025, 1, 7)),
    ]

    result = aggregate(shifts, today=TODAY)
    zaid = next(s for s in result.summaries if s.name == "Zaid")

    assert zaid.work_days == 1
    assert zaid.shift_counts.to_dict() == {"A": 1, "B": 0, "C": 0}
    assert zaid.penalty_free_days == 1
    assert zaid.net_salary == pytest.approx(-2.0)
    assert zaid.rank == 2
    assert result.insights.perfect_attendance_staff == ("Amal", "Zaid")
    assert result.insights.shift_usage == pytest.approx({"A": 1.0, "B": 0.0, "C": 0.0})


def test_adjusted_placeholder_counts_as_worked_day():
    credited = apply_manual_adjustment(placeholder("Lina", date(2025, 1, 6)), -3.0, "Cash advance returned")

    [summary] = summarize_employees([credited, placeholder("Lina", date(2025, 1, 7))])

    assert credited.net_pay == pytest.approx(3.0)
    assert summary.work_days == 1
    assert summary.shift_counts.A == 1
    assert summary.penalty_free_days == 1


def test_early_events_count_worked_days_past_threshold():
    shifts = [
        shift("Omar", date(2025, 1, 6), work_hours=8.0, early=60.0),
        shift("Amal", date(2025, 1, 6), work_hours=8.75, early=15.0),
        shift("Amal", date(2025, 1, 7), work_hours=8.5, early=30.0),
        placeholder("Zaid", date(2025, 1, 6)),
    ]

    insights = aggregate(shifts, today=TODAY).insights

    assert insights.total_early_events == 2
