from datetime import date, time

import pytest

from src.payroll_ledger.payroll_ledger.common.parsing import (
    parse_currency,
    parse_freeform_date,
    parse_freeform_time,
    try_parse_date,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2025-01-06", date(2025, 1, 6)),
        ('"2025-01-06"', date(2025, 1, 6)),
        ("2025-01-06T08:15:00", date(2025, 1, 6)),
        ("06/01/2025", date(2025, 1, 6)),
        ("6/1/2025", date(2025, 1, 6)),
        ("12/25/2025", date(2025, 12, 25)),
        ("06-01-2025", date(2025, 1, 6)),
        ("06.01.2025", date(2025, 1, 6)),
        ("January 6, 2025", date(2025, 1, 6)),
        ("Jan 6, 2025", date(2025, 1, 6)),
        ("2025/01/06", date(2025, 1, 6)),
        ("6 1 2025", date(2025, 1, 6)),
    ],
)
def test_parse_freeform_date_accepts_known_shapes(text, expected):
    assert parse_freeform_date(text) == expected


@pytest.mark.parametrize("text", ["", "   ", None, "N/A", "31/31/2025", "yesterday", "2025-13"])
def test_parse_freeform_date_returns_none_for_garbage(text):
    assert parse_freeform_date(text) is None


def test_try_parse_date_reports_reason():
    result = try_parse_date("N/A")

    assert not result.ok
    assert "N/A" in result.reason


def test_old_years_rejected_by_format_list_fall_through_to_split():
    # strptime accepts year 1999, the format list does not; the split fallback does.
    assert parse_freeform_date("06/01/1999") == date(1999, 1, 6)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("10:40", time(10, 40)),
        ("10.40", time(10, 40)),
        ("08:05:30", time(8, 5, 30)),
        ("3:10 PM", time(15, 10)),
        ("3:10pm", time(15, 10)),
        ("12:15 AM", time(0, 15)),
        ("12:15 PM", time(12, 15)),
        ("Check in at 9:02", time(9, 2)),
    ],
)
def test_parse_freeform_time(text, expected):
    assert parse_freeform_time(text) == expected


@pytest.mark.parametrize("text", ["", None, "late", "25:70", "-"])
def test_parse_freeform_time_returns_none(text):
    assert parse_freeform_time(text) is None


@pytest.mark.parametrize(
    "value, expected",
    [
        ("1,250.50", 1250.5),
        ("10 JD", 10.0),
        ("-3", -3.0),
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("1.2.3", 0.0),
        (7, 7.0),
    ],
)
def test_parse_currency(value, expected):
    assert parse_currency(value) == expected
