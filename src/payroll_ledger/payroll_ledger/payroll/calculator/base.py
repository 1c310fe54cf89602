from __future__ import annotations

from abc import ABC, abstractmethod

from ...ingestion.model import DayGroup
from ..model import ComputedShift


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def attendance_penalty(self, lateness_minutes: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def compute(self, group: DayGroup) -> ComputedShift:
        raise NotImplementedError
