from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .audit.service import AuditService, NarrativeGenerator
from .core.constants import DEFAULT_CLEANSING_PREVIEW
from .ingestion.model import ColumnMapping
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.model import PayrollRules
from .payroll.service import PayrollLedgerService


@dataclass(frozen=True)
class Container:
    rules: PayrollRules
    default_mapping: ColumnMapping
    cleansing_preview: int

    ledger_service: PayrollLedgerService
    audit_service: AuditService


def build_container(*, settings: ModuleType, generator: Optional[NarrativeGenerator] = None) -> Container:
    rules = PayrollRules(**dict(getattr(settings, "PAYROLL_RULES", {})))
    default_mapping = ColumnMapping.from_dict(getattr(settings, "DEFAULT_COLUMN_MAPPING"))
    cleansing_preview = int(getattr(settings, "CLEANSING_LOG_PREVIEW", DEFAULT_CLEANSING_PREVIEW))

    ledger_service = PayrollLedgerService(calculator=StandardPayrollCalculator(rules))
    audit_service = AuditService(generator, rules=rules)

    return Container(
        rules=rules,
        default_mapping=default_mapping,
        cleansing_preview=cleansing_preview,
        ledger_service=ledger_service,
        audit_service=audit_service,
    )
