"""Build a payroll ledger from an attendance CSV and write it as CSV or XLSX.

Usage: python scripts/export_ledger.py attendance.csv [later.csv ...] ledger.xlsx

Later exports are appended onto earlier ones; a row for the same employee and date
replaces the earlier row.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pandas as pd

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_ledger.payroll_ledger.container import build_container
from src.payroll_ledger.payroll_ledger.core.exceptions import NoUsableRecordsError
from src.payroll_ledger.payroll_ledger.export.exporter import to_csv, to_xlsx_bytes
from src.payroll_ledger.payroll_ledger.ingestion.grouper import merge_raw_rows


def main(argv: list[str]) -> None:
    if len(argv) < 2:
        raise SystemExit("Usage: export_ledger.py <attendance.csv> [later.csv ...] <ledger.csv|ledger.xlsx>")
    sources, target = [Path(a) for a in argv[:-1]], Path(argv[-1])

    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)

    rows = []
    for source in sources:
        incoming = pd.read_csv(source, dtype=str, keep_default_na=False).to_dict(orient="records")
        rows = merge_raw_rows(rows, incoming, container.default_mapping) if rows else incoming
    try:
        result = container.ledger_service.build_ledger(rows, container.default_mapping)
    except NoUsableRecordsError as e:
        for entry in e.cleansing_log[: container.cleansing_preview]:
            print(f"  {entry.kind.value}: {entry.message}")
        raise SystemExit(str(e))

    if target.suffix.lower() == ".xlsx":
        target.write_bytes(to_xlsx_bytes(result))
    else:
        target.write_text(to_csv(result), encoding="utf-8-sig")
    print(f"OK: {len(result.shifts)} shifts, {len(result.cleansing_log)} cleansing entries -> {target}")


if __name__ == "__main__":
    main(sys.argv[1:])
