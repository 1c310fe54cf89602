from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Mapping, Optional

from ..common.validators import optional_text, require_non_empty
from ..core.enums import CleansingKind


@dataclass(frozen=True)
class ColumnMapping:
    """Which spreadsheet header carries each logical field."""

    name: str
    date: str
    check_in: str
    check_out: str
    paid: str
    penalty: Optional[str] = None

    def __post_init__(self):
        for field_name in ("name", "date", "check_in", "check_out", "paid"):
            object.__setattr__(self, field_name, require_non_empty(getattr(self, field_name), field_name))
        object.__setattr__(self, "penalty", optional_text(self.penalty))

    @classmethod
    def from_dict(cls, data: Mapping[str, str]) -> "ColumnMapping":
        return cls(
            name=data.get("name", ""),
            date=data.get("date", ""),
            check_in=data.get("check_in") or data.get("checkIn", ""),
            check_out=data.get("check_out") or data.get("checkOut", ""),
            paid=data.get("paid", ""),
            penalty=data.get("penalty"),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "date": self.date,
            "check_in": self.check_in,
            "check_out": self.check_out,
            "paid": self.paid,
            "penalty": self.penalty,
        }

    def apply(self, raw: Mapping[str, object], row_number: int) -> "PunchRow":
        """Translate one raw row into a typed record; the only place headers are looked up."""
        cells = {str(k).strip(): v for k, v in raw.items() if k is not None}

        def cell(header: Optional[str]) -> str:
            if not header:
                return ""
            value = cells.get(header)
            return "" if value is None else str(value).strip()

        return PunchRow(
            row_number=row_number,
            name=cell(self.name),
            date_text=cell(self.date),
            check_in_text=cell(self.check_in),
            check_out_text=cell(self.check_out),
            paid_text=cell(self.paid),
            penalty_text=cell(self.penalty),
        )


@dataclass(frozen=True)
class PunchRow:
    """Typed attendance row (1-based row number, trimmed cell text)."""

    row_number: int
    name: str
    date_text: str
    check_in_text: str = ""
    check_out_text: str = ""
    paid_text: str = ""
    penalty_text: str = ""


@dataclass(frozen=True)
class CleansingEntry:
    kind: CleansingKind
    message: str
    row_number: Optional[int] = None

    def to_dict(self) -> dict:
        return {"type": self.kind.value, "message": self.message, "row": self.row_number}


@dataclass
class DayGroup:
    """All rows for one (employee, calendar day), before pay is computed."""

    name_key: str
    display_name: str
    work_date: date
    row_numbers: list[int] = field(default_factory=list)
    check_ins: list[time] = field(default_factory=list)
    check_outs: list[time] = field(default_factory=list)
    amount_paid: float = 0.0
    manual_penalty: float = 0.0
