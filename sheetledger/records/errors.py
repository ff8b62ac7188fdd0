"""
Domain exceptions for the ledger.

Every error raised by the record stores and the bookkeeping service derives
from ``LedgerError``. The HTTP layer maps each subclass to a status code via
the ``status_code`` attribute, so new error kinds only need a class here.
"""

from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    """Base exception for ledger errors."""

    status_code = 500
    default_message = "Ledger operation failed"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None) -> None:
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(LedgerError):
    """Raised when a payload is missing required fields or holds invalid values."""

    status_code = 400
    default_message = "Invalid request payload"


class NotFoundError(LedgerError):
    """Raised when a record identifier does not exist."""

    status_code = 404
    default_message = "Record not found"


class StoreError(LedgerError):
    """Raised when the persistence layer fails."""

    status_code = 500
    default_message = "Record store failure"
