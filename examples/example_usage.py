"""Example: use the service layer directly (no Flask).

Builds a ledger from a few in-memory rows, edits it interactively through a ShiftLedger,
replays the recorded edits on a fresh build, and prints the CSV export.
"""

import importlib

from config import get_settings_module

from src.payroll_ledger.payroll_ledger.container import build_container
from src.payroll_ledger.payroll_ledger.export.exporter import to_csv
from src.payroll_ledger.payroll_ledger.payroll.adjustments import ShiftLedger

ROWS = [
    {"Employee_Name": "Rana Haddad", "Date": "2025-01-06", "Check_In": "10:40", "Check_Out": "20:00", "Paid": "5"},
    {"Employee_Name": "Omar Saleh", "Date": "02/01/2025", "Check_In": "3:10 PM", "Check_Out": "11:00 PM", "Paid": ""},
    {"Employee_Name": "Omar Saleh", "Date": "06/01/2025", "Check_In": "10:25", "Check_Out": "", "Paid": "10"},
    {"Employee_Name": "Employee_Name", "Date": "Date", "Check_In": "Check_In", "Check_Out": "Check_Out"},
]


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings=settings)
    service = container.ledger_service

    first = service.build_ledger(ROWS, container.default_mapping)
    ledger = ShiftLedger(first.shifts)
    late = next(s for s in ledger.shifts() if s.attendance_penalty > 0)
    ledger.toggle_waiver(late.shift_id)
    ledger.adjust(late.shift_id, 1.5, "Left till open")

    result = service.build_ledger(ROWS, container.default_mapping, edits=ledger.history)

    print(to_csv(result))
    for entry in result.cleansing_log:
        print(entry.kind.value, entry.message)


if __name__ == "__main__":
    main()
