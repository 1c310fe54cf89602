from __future__ import annotations

from enum import Enum


class ShiftType(str, Enum):
    """Nominal shift categories, decided from the arrival time."""

    A = "A"
    B = "B"
    C = "C"


class CleansingKind(str, Enum):
    """What the normalizer did to (or about) a raw row."""

    HEADER_FIX = "HEADER_FIX"
    NAME_NORMALIZATION = "NAME_NORMALIZATION"
    TIME_INTERPOLATION = "TIME_INTERPOLATION"
    MIDNIGHT_ADJUST = "MIDNIGHT_ADJUST"


class EditKind(str, Enum):
    """Manager actions that can be replayed over computed shifts."""

    TOGGLE_WAIVER = "TOGGLE_WAIVER"
    ADJUST = "ADJUST"
    NOTE = "NOTE"
