"""Manager actions on computed shifts.

Every action is a pure function returning a replaced record, with net pay and
balance re-derived from the pay components. Missing or blank inputs leave the
shift untouched.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from ..common.validators import optional_text
from ..core.constants import NOTE_SEPARATOR
from ..core.enums import EditKind
from ..core.exceptions import ValidationError
from .model import ComputedShift, ManagerEdit

logger = logging.getLogger(__name__)


def toggle_penalty_waiver(shift: ComputedShift) -> ComputedShift:
    waiver = 0.0 if shift.is_waived else shift.attendance_penalty
    if waiver == shift.penalty_waiver:
        return shift
    return replace(shift, penalty_waiver=waiver).with_derived_pay()


def apply_manual_adjustment(shift: ComputedShift, amount: Optional[float], reason: Optional[str]) -> ComputedShift:
    """Add a signed deduction (positive) or credit (negative) with a mandatory reason."""
    reason = optional_text(reason)
    if not amount or not math.isfinite(amount) or reason is None:
        return shift

    note = reason if not shift.adjustment_note else f"{shift.adjustment_note}{NOTE_SEPARATOR}{reason}"
    return replace(
        shift,
        manual_adjustment=shift.manual_adjustment + float(amount),
        adjustment_note=note,
    ).with_derived_pay()


def set_adjustment_note(shift: ComputedShift, note: Optional[str]) -> ComputedShift:
    note = optional_text(note)
    if note is None:
        return shift
    return replace(shift, adjustment_note=note)


def apply_edit(shift: ComputedShift, edit: ManagerEdit) -> ComputedShift:
    if edit.kind == EditKind.TOGGLE_WAIVER:
        return toggle_penalty_waiver(shift)
    if edit.kind == EditKind.ADJUST:
        return apply_manual_adjustment(shift, edit.amount, edit.reason)
    if edit.kind == EditKind.NOTE:
        return set_adjustment_note(shift, edit.note)
    raise ValidationError(f"Unsupported edit: {edit.kind}")


def replay_edits(shifts: Sequence[ComputedShift], edits: Iterable[ManagerEdit]) -> list[ComputedShift]:
    """Re-apply an edit history, in order, over freshly computed shifts."""
    by_id = {s.shift_id: s for s in shifts}
    for edit in edits:
        current = by_id.get(edit.shift_id)
        if current is None:
            logger.warning(
                "edit %s skipped: unknown shift %s", edit.kind.value, edit.shift_id,
                extra={"shift_id": edit.shift_id},
            )
            continue
        by_id[edit.shift_id] = apply_edit(current, edit)
    return [by_id[s.shift_id] for s in shifts]


class ShiftLedger:
    """In-memory shift list for interactive hosts embedding the ledger (see examples/example_usage.py).

    Edits on the same shift id are serialized and applied as whole-record
    replacements. Applied edits are kept so a later full recomputation can replay them.
    """

    def __init__(self, shifts: Sequence[ComputedShift]):
        self._order = [s.shift_id for s in shifts]
        self._shifts = {s.shift_id: s for s in shifts}
        self._history: list[ManagerEdit] = []
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, shift_id: str) -> threading.Lock:
        with self._guard:
            return self._locks.setdefault(shift_id, threading.Lock())

    def get(self, shift_id: str) -> ComputedShift:
        shift = self._shifts.get(shift_id)
        if shift is None:
            raise ValidationError(f"Shift not found: {shift_id}")
        return shift

    def shifts(self) -> list[ComputedShift]:
        return [self._shifts[i] for i in self._order]

    @property
    def history(self) -> tuple[ManagerEdit, ...]:
        with self._guard:
            return tuple(self._history)

    def apply(self, edit: ManagerEdit) -> ComputedShift:
        with self._lock_for(edit.shift_id):
            before = self.get(edit.shift_id)
            after = apply_edit(before, edit)
            if after is before:
                return before
            self._shifts[edit.shift_id] = after
            with self._guard:
                self._history.append(edit)
            return after

    def toggle_waiver(self, shift_id: str) -> ComputedShift:
        return self.apply(ManagerEdit(EditKind.TOGGLE_WAIVER, shift_id))

    def adjust(self, shift_id: str, amount: Optional[float], reason: Optional[str]) -> ComputedShift:
        return self.apply(ManagerEdit(EditKind.ADJUST, shift_id, amount=amount, reason=reason))

    def annotate(self, shift_id: str, note: Optional[str]) -> ComputedShift:
        return self.apply(ManagerEdit(EditKind.NOTE, shift_id, note=note))
