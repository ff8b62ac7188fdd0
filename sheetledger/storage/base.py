"""Mini README: Abstract record store shared by every persistence backend.

Structure:
    * RecordStore - async interface for Sale and Expense persistence.

Implementations must raise ``NotFoundError`` for unknown identifiers and
``StoreError`` when the backend itself fails. Listing methods return records
ordered by ``date`` descending and apply an inclusive ``[start, end]``
filter when both bounds are supplied.
"""

from __future__ import annotations

import abc
from datetime import datetime, timezone
from typing import List, Optional

from ..records import Expense, ExpenseDraft, ExpenseType, Sale, SaleDraft


def utcnow() -> datetime:
    """Return the current instant as an aware UTC timestamp."""

    return datetime.now(timezone.utc)


class RecordStore(abc.ABC):
    """Persistence contract for sales and expenses."""

    backend_name: str = "abstract"

    async def open(self) -> None:
        """Prepare the backend before the first request."""

    async def close(self) -> None:
        """Release backend resources on shutdown."""

    @abc.abstractmethod
    async def insert_sale(self, draft: SaleDraft) -> Sale:
        """Persist a new sale and return it."""

    @abc.abstractmethod
    async def get_sale(self, sale_id: str) -> Sale:
        """Fetch a sale by identifier."""

    @abc.abstractmethod
    async def update_sale(self, sale_id: str, draft: SaleDraft) -> Sale:
        """Replace the mutable fields of a sale and return the new state."""

    @abc.abstractmethod
    async def delete_sale(self, sale_id: str) -> Sale:
        """Remove a sale and return its last snapshot."""

    @abc.abstractmethod
    async def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Sale]:
        """Return sales, newest first, optionally within ``[start, end]``."""

    @abc.abstractmethod
    async def insert_expense(self, draft: ExpenseDraft) -> Expense:
        """Persist a new expense and return it."""

    @abc.abstractmethod
    async def get_expense(self, expense_id: str) -> Expense:
        """Fetch an expense by identifier."""

    @abc.abstractmethod
    async def update_expense(self, expense_id: str, draft: ExpenseDraft) -> Expense:
        """Replace the mutable fields of an expense and return the new state."""

    @abc.abstractmethod
    async def delete_expense(self, expense_id: str) -> Expense:
        """Remove an expense and return its last snapshot."""

    @abc.abstractmethod
    async def list_expenses(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        expense_type: Optional[ExpenseType] = None,
    ) -> List[Expense]:
        """Return expenses, newest first, optionally filtered by range and type."""
