from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NoUsableRecordsError(DomainError):
    """Raised when every raw row was dropped and no shift could be computed.

    Carries the cleansing log so callers can explain which rows failed and why.
    """

    def __init__(self, message: str, cleansing_log=()):
        super().__init__(message)
        self.cleansing_log = tuple(cleansing_log)
