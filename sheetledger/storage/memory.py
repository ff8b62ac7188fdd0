"""Mini README: In-memory record store.

Structure:
    * MemoryRecordStore - dictionary backed implementation of ``RecordStore``.

The store keeps sales and expenses in process memory, assigning sequential
identifiers such as ``sale_0001``. It is the default backend when no MongoDB
URI is configured and the one used throughout the tests. Data does not
survive a restart.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional, TypeVar

from ..logging_utils import get_logger
from ..records import Expense, ExpenseDraft, ExpenseType, NotFoundError, Sale, SaleDraft
from .base import RecordStore, utcnow

LOGGER = get_logger(__name__)

RecordT = TypeVar("RecordT", Sale, Expense)


def _within(value: datetime, start: Optional[datetime], end: Optional[datetime]) -> bool:
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def _newest_first(records: Iterable[RecordT]) -> List[RecordT]:
    return sorted(records, key=lambda record: record.date, reverse=True)


class MemoryRecordStore(RecordStore):
    """Keep ledger records in dictionaries keyed by identifier."""

    backend_name = "memory"

    def __init__(
        self,
        sales: Optional[Iterable[Sale]] = None,
        expenses: Optional[Iterable[Expense]] = None,
    ) -> None:
        self._sales: Dict[str, Sale] = {}
        self._expenses: Dict[str, Expense] = {}
        self._sequence = 0
        for sale in sales or ():
            self._sales[sale.sale_id] = sale
            self._track(sale.sale_id)
        for expense in expenses or ():
            self._expenses[expense.expense_id] = expense
            self._track(expense.expense_id)
        LOGGER.debug(
            "Memory store initialised with %s sales and %s expenses",
            len(self._sales),
            len(self._expenses),
        )

    def _track(self, record_id: str) -> None:
        """Keep generated identifiers clear of preloaded ones."""

        suffix = record_id.rsplit("_", 1)[-1]
        if suffix.isdigit():
            self._sequence = max(self._sequence, int(suffix))

    def _next_id(self, prefix: str) -> str:
        """Generate a unique, human readable identifier."""

        self._sequence += 1
        return f"{prefix}_{self._sequence:04d}"

    async def insert_sale(self, draft: SaleDraft) -> Sale:
        now = utcnow()
        sale = Sale(
            sale_id=self._next_id("sale"),
            date=draft.date or now,
            sheets_sold=draft.sheets_sold,
            total_revenue=draft.total_revenue,
            price_per_sheet=draft.price_per_sheet,
            created_at=now,
            updated_at=now,
        )
        self._sales[sale.sale_id] = sale
        return sale

    async def get_sale(self, sale_id: str) -> Sale:
        if sale_id not in self._sales:
            raise NotFoundError("Sale not found")
        return self._sales[sale_id]

    async def update_sale(self, sale_id: str, draft: SaleDraft) -> Sale:
        existing = await self.get_sale(sale_id)
        updated = replace(
            existing,
            date=draft.date or existing.date,
            sheets_sold=draft.sheets_sold,
            total_revenue=draft.total_revenue,
            price_per_sheet=draft.price_per_sheet,
            updated_at=utcnow(),
        )
        self._sales[sale_id] = updated
        return updated

    async def delete_sale(self, sale_id: str) -> Sale:
        if sale_id not in self._sales:
            raise NotFoundError("Sale not found")
        return self._sales.pop(sale_id)

    async def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Sale]:
        return _newest_first(
            sale for sale in self._sales.values() if _within(sale.date, start, end)
        )

    async def insert_expense(self, draft: ExpenseDraft) -> Expense:
        now = utcnow()
        expense = Expense(
            expense_id=self._next_id("expense"),
            date=draft.date or now,
            expense_type=draft.expense_type,
            amount=draft.amount,
            description=draft.description_or_default(),
            created_at=now,
            updated_at=now,
        )
        self._expenses[expense.expense_id] = expense
        return expense

    async def get_expense(self, expense_id: str) -> Expense:
        if expense_id not in self._expenses:
            raise NotFoundError("Expense not found")
        return self._expenses[expense_id]

    async def update_expense(self, expense_id: str, draft: ExpenseDraft) -> Expense:
        existing = await self.get_expense(expense_id)
        updated = replace(
            existing,
            date=draft.date or existing.date,
            expense_type=draft.expense_type,
            amount=draft.amount,
            description=existing.description if draft.description is None else draft.description,
            updated_at=utcnow(),
        )
        self._expenses[expense_id] = updated
        return updated

    async def delete_expense(self, expense_id: str) -> Expense:
        if expense_id not in self._expenses:
            raise NotFoundError("Expense not found")
        return self._expenses.pop(expense_id)

    async def list_expenses(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        expense_type: Optional[ExpenseType] = None,
    ) -> List[Expense]:
        return _newest_first(
            expense
            for expense in self._expenses.values()
            if _within(expense.date, start, end)
            and (expense_type is None or expense.expense_type is expense_type)
        )
