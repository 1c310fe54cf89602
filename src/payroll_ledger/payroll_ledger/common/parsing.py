"""Free-text parsing for attendance exports.

Dates, clock times and money amounts arrive in whatever shape the biometric device
or the spreadsheet author chose. Every parser here is total: it never raises, and
signals "nothing usable" with ``None`` (dates, times) or ``0.0`` (money).

Only explicit formats are accepted. Nothing depends on the process locale apart
from the English month names used by ``%B``/``%b``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

DATE_FORMATS = (
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%B %d, %Y",
    "%b %d, %Y",
)

MIN_FORMAT_YEAR = 2000
YEAR_PART_THRESHOLD = 1000

_TIME_RE = re.compile(r"(\d{1,2})[:.](\d{1,2})(?:[:.](\d{1,2}))?\s*(AM|PM)?", re.IGNORECASE)
_DATE_SPLIT_RE = re.compile(r"[-/.\s,]+")
_CURRENCY_STRIP_RE = re.compile(r"[^\d.\-]")


@dataclass(frozen=True)
class DateParseResult:
    value: Optional[date] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.value is not None


def _clean(text) -> str:
    cleaned = str(text or "").strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in {'"', "'"}:
        cleaned = cleaned[1:-1].strip()
    return cleaned


def _parse_iso(cleaned: str) -> Optional[date]:
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(cleaned).date()
    except ValueError:
        return None


def _parse_formats(cleaned: str) -> Optional[date]:
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue
        if parsed.year > MIN_FORMAT_YEAR:
            return parsed
    return None


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _parse_parts(cleaned: str) -> Optional[date]:
    parts = [p for p in _DATE_SPLIT_RE.split(cleaned) if p]
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return None

    p0, p1, p2 = (int(p) for p in parts)
    if p0 > YEAR_PART_THRESHOLD:
        return _safe_date(p0, p1, p2)
    if p2 > YEAR_PART_THRESHOLD:
        return _safe_date(p2, p1, p0) or _safe_date(p2, p0, p1)
    return None


def try_parse_date(text) -> DateParseResult:
    """Parse a free-form calendar date, reporting why it failed when it does."""
    cleaned = _clean(text)
    if not cleaned:
        return DateParseResult(reason="empty date")

    for attempt in (_parse_iso, _parse_formats, _parse_parts):
        parsed = attempt(cleaned)
        if parsed is not None:
            return DateParseResult(value=parsed)
    return DateParseResult(reason=f'unrecognized date "{cleaned}"')


def parse_freeform_date(text) -> Optional[date]:
    return try_parse_date(text).value


def parse_freeform_time(text) -> Optional[time]:
    """Extract ``H[:.]M[[:.]S] [AM|PM]`` from text, converting 12-hour clocks.

    Out-of-range components (``25:70``) are treated as unparseable.
    """
    cleaned = str(text or "").strip()
    if not cleaned:
        return None

    match = _TIME_RE.search(cleaned)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    seconds = int(match.group(3)) if match.group(3) else 0
    marker = (match.group(4) or "").upper()
    if marker == "PM" and hours < 12:
        hours += 12
    if marker == "AM" and hours == 12:
        hours = 0

    try:
        return time(hours, minutes, seconds)
    except ValueError:
        return None


def parse_currency(value) -> float:
    """Parse a money cell like ``"1,250.50 JD"``; anything unusable counts as 0."""
    cleaned = _CURRENCY_STRIP_RE.sub("", str(value or "").replace(",", ""))
    if not cleaned:
        return 0.0
    try:
        return float(cleaned)
    except ValueError:
        return 0.0
