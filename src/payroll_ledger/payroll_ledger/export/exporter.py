"""Tabular export of the detailed shift list (CSV text or an Excel workbook)."""

from __future__ import annotations

import io

import pandas as pd

from ..payroll.model import PayrollResult

EXPORT_COLUMNS = [
    "Employee",
    "Date",
    "Arrival",
    "Departure",
    "Hours Worked",
    "Lateness (min)",
    "Penalty",
    "Standard Pay",
    "OT Pay",
    "Net Pay",
    "Paid",
    "Remaining",
    "Notes",
]

NUMERIC_COLUMNS = [
    "Hours Worked",
    "Lateness (min)",
    "Penalty",
    "Standard Pay",
    "OT Pay",
    "Net Pay",
    "Paid",
    "Remaining",
]

TOTAL_LABEL = "TOTAL"


def to_dataframe(result: PayrollResult) -> pd.DataFrame:
    """One row per shift plus a trailing totals row.

    The penalty column is the effective penalty (after any waiver).
    """
    records = [
        {
            "Employee": s.name,
            "Date": s.work_date.isoformat(),
            "Arrival": s.actual_in.strftime("%H:%M") if s.actual_in else "",
            "Departure": s.actual_out.strftime("%H:%M") if s.actual_out else "",
            "Hours Worked": round(s.work_hours, 2),
            "Lateness (min)": s.lateness_minutes,
            "Penalty": round(s.effective_penalty, 2),
            "Standard Pay": round(s.standard_pay, 2),
            "OT Pay": round(s.ot_pay, 2),
            "Net Pay": round(s.net_pay, 2),
            "Paid": round(s.amount_paid, 2),
            "Remaining": round(s.balance_remaining, 2),
            "Notes": s.adjustment_note or "",
        }
        for s in result.shifts
    ]
    df = pd.DataFrame(records, columns=EXPORT_COLUMNS)

    totals = {col: "" for col in EXPORT_COLUMNS}
    totals["Employee"] = TOTAL_LABEL
    for col in NUMERIC_COLUMNS:
        totals[col] = round(float(df[col].sum()), 2) if not df.empty else 0
    totals["Lateness (min)"] = int(df["Lateness (min)"].sum()) if not df.empty else 0

    return pd.concat([df, pd.DataFrame([totals], columns=EXPORT_COLUMNS)], ignore_index=True)


def to_csv(result: PayrollResult, *, delimiter: str = ",") -> str:
    return to_dataframe(result).to_csv(index=False, sep=delimiter)


def to_xlsx_bytes(result: PayrollResult, *, sheet_name: str = "Payroll Ledger") -> bytes:
    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        to_dataframe(result).to_excel(writer, index=False, sheet_name=sheet_name)
    return out.getvalue()
