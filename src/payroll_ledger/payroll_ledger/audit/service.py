from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..payroll.model import PayrollResult, PayrollRules
from .context import build_audit_context, build_audit_prompt

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "Audit Engine Offline."
EMPTY_MESSAGE = "Audit generation failed."


class NarrativeGenerator(Protocol):
    def generate(self, prompt: str) -> str:
        raise NotImplementedError


class AuditService:
    """Hands the ledger's aggregate context to an external narrative generator.

    The ledger is already computed when this runs; a failing generator only
    degrades the narrative to a fixed message.
    """

    def __init__(self, generator: Optional[NarrativeGenerator] = None, *, rules: Optional[PayrollRules] = None):
        self._generator = generator
        self._rules = rules or PayrollRules()

    def build_context(self, result: PayrollResult) -> dict:
        return build_audit_context(result, self._rules)

    def generate_report(self, result: PayrollResult) -> str:
        if self._generator is None:
            return OFFLINE_MESSAGE

        prompt = build_audit_prompt(self.build_context(result))
        try:
            text = self._generator.generate(prompt)
        except Exception:
            logger.exception("narrative generator failed")
            return OFFLINE_MESSAGE
        return text or EMPTY_MESSAGE
