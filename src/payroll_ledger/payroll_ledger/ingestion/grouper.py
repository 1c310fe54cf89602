"""Normalize raw attendance rows and group them per (employee, calendar day)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

from ..common.parsing import parse_currency, parse_freeform_time, try_parse_date
from ..common.validators import collapse_whitespace
from ..core.constants import HEADER_NAME_LITERALS
from ..core.enums import CleansingKind
from .model import CleansingEntry, ColumnMapping, DayGroup, PunchRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupingOutcome:
    groups: list[DayGroup]
    cleansing_log: list[CleansingEntry]


def name_key(name: str) -> str:
    return collapse_whitespace(name).lower()


def to_punch_rows(rows: Iterable[Mapping[str, object]], mapping: ColumnMapping) -> list[PunchRow]:
    return [mapping.apply(raw, row_number) for row_number, raw in enumerate(rows, start=1)]


def group_rows(rows: Sequence[PunchRow]) -> GroupingOutcome:
    groups: dict[tuple[str, str], DayGroup] = {}
    log: list[CleansingEntry] = []

    for row in rows:
        display_name = collapse_whitespace(row.name)
        if not display_name:
            log.append(
                CleansingEntry(
                    CleansingKind.NAME_NORMALIZATION,
                    f"Row {row.row_number}: missing employee name, row skipped.",
                    row.row_number,
                )
            )
            continue
        if display_name.lower() in HEADER_NAME_LITERALS:
            log.append(
                CleansingEntry(
                    CleansingKind.HEADER_FIX,
                    f'Row {row.row_number}: repeated header row "{display_name}" skipped.',
                    row.row_number,
                )
            )
            continue

        parsed = try_parse_date(row.date_text)
        if not parsed.ok:
            logger.debug("row %d dropped: %s", row.row_number, parsed.reason)
            log.append(
                CleansingEntry(
                    CleansingKind.HEADER_FIX,
                    f'Row {row.row_number}: Could not parse date "{row.date_text}".',
                    row.row_number,
                )
            )
            continue

        key = (name_key(display_name), parsed.value.isoformat())
        group = groups.get(key)
        if group is None:
            group = DayGroup(name_key=key[0], display_name=display_name, work_date=parsed.value)
            groups[key] = group

        group.row_numbers.append(row.row_number)
        check_in = parse_freeform_time(row.check_in_text)
        if check_in is not None:
            group.check_ins.append(check_in)
        check_out = parse_freeform_time(row.check_out_text)
        if check_out is not None:
            group.check_outs.append(check_out)
        group.amount_paid += parse_currency(row.paid_text)
        group.manual_penalty += parse_currency(row.penalty_text)

    return GroupingOutcome(groups=list(groups.values()), cleansing_log=log)


def merge_raw_rows(
    existing: Sequence[Mapping[str, object]],
    incoming: Sequence[Mapping[str, object]],
    mapping: ColumnMapping,
) -> list[Mapping[str, object]]:
    """Append a new export onto a previous one (used by scripts/export_ledger.py).

    Rows are de-duplicated by (lowercased name, raw date text); a later row replaces
    an earlier one in place. Rows without a name or date cannot be keyed and are dropped.
    """
    merged: dict[tuple[str, str], Mapping[str, object]] = {}
    for raw in [*existing, *incoming]:
        row = mapping.apply(raw, 0)
        if not row.name or not row.date_text:
            continue
        merged[(row.name.lower(), row.date_text)] = raw
    return list(merged.values())
