"""Mini README: Ledger records, payload validation and error types.

Sales and expenses are plain dataclasses so stores and reports can share
them without depending on the web layer. Payload validation uses pydantic
drafts and surfaces failures as ``ValidationError`` from ``errors``.
"""

from .errors import LedgerError, NotFoundError, StoreError, ValidationError
from .models import (
    Expense,
    ExpenseDraft,
    ExpenseType,
    Sale,
    SaleDraft,
    compute_price_per_sheet,
    default_description,
    parse_expense_payload,
    parse_sale_payload,
    parse_timestamp,
)

__all__ = [
    "Expense",
    "ExpenseDraft",
    "ExpenseType",
    "LedgerError",
    "NotFoundError",
    "Sale",
    "SaleDraft",
    "StoreError",
    "ValidationError",
    "compute_price_per_sheet",
    "default_description",
    "parse_expense_payload",
    "parse_sale_payload",
    "parse_timestamp",
]
