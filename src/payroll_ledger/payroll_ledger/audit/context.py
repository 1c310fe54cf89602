"""Prompt context for the external narrative audit.

Only aggregate totals and insights leave the ledger; per-row data never does.
"""

from __future__ import annotations

from ..core.constants import PENALTY_TIERS
from ..payroll.model import PayrollResult, PayrollRules


def build_audit_context(result: PayrollResult, rules: PayrollRules | None = None) -> dict:
    rules = rules or PayrollRules()
    insights = result.insights
    return {
        "rules": rules.to_dict(),
        "penalty_tiers": [{"min_lateness_minutes": m, "penalty": p} for m, p in PENALTY_TIERS],
        "employees": len(result.summaries),
        "total_days_worked": result.totals.days_worked,
        "total_ot_payout": round(result.totals.ot_payout, 2),
        "total_penalties": round(result.totals.penalties, 2),
        "total_penalty_waivers": round(result.totals.penalty_waivers, 2),
        "total_net_owed": round(result.totals.net_owed, 2),
        "total_remaining_balance": round(result.totals.remaining_balance, 2),
        "total_ot_hours": round(insights.total_ot_hours, 1),
        "efficiency_score": round(result.efficiency_score, 4),
        "shift_usage": {k: round(v, 4) for k, v in insights.shift_usage.items()},
        "most_reliable": insights.most_reliable.name,
        "top_late_offender": insights.top_late_offender.name,
        "penalty_recovery_rate": round(insights.penalty_recovery_rate, 4),
        "future_liability": round(insights.total_future_liability, 2),
        "date_range": result.date_range.to_dict() if result.date_range else None,
    }


def build_audit_prompt(context: dict) -> str:
    rules = context["rules"]
    tiers = ", ".join(
        f"{t['min_lateness_minutes']}m+ ({t['penalty']:g})" for t in reversed(context["penalty_tiers"])
    )
    return f"""
Persona: Senior Payroll Data Engineer.
Task: Audit this payroll dataset (Shift Logic + Overtime Engine).

Processing Rules:
- Base: {rules['standard_day_pay']:g} per worked day.
- Overtime: >{rules['ot_threshold_hours']:g} hours work = +{rules['ot_hourly_rate']:g}/hr.
- Shift A: <10:30 arrival (10:00 start).
- Shift C: 10:30-12:30 arrival (11:00 start).
- Shift B: >12:30 arrival (14:00 start, 15:00 Thu/Fri).
- Penalties: {tiers}.

Executive Summary:
- Employees: {context['employees']}
- Days worked: {context['total_days_worked']}
- Total OT Payout: {context['total_ot_payout']:.2f}
- Total Penalties: {context['total_penalties']:.2f}
- Total Net Payout: {context['total_net_owed']:.2f}
- Overtime Hours: {context['total_ot_hours']:.1f}
- Efficiency Score: {context['efficiency_score']:.2%}

Please analyze:
1. Overtime trends: Is OT clustered around specific individuals?
2. Shift C Frequency: Are employees avoiding Shift A for the softer 11:00 start?
3. Financial Leakage: Impact of penalties vs. OT costs.
4. Compliance: Verify the weekend-eve shift B transition logic.

Markdown format with tables where appropriate.
""".strip()
