"""Mini README: Bookkeeping service exposing the ledger operations.

Structure:
    * TransactionKind - selector for the combined transactions listing.
    * BookkeepingService - create/update/delete for sales and expenses, the
      combined listing and the period summary, all over one ``RecordStore``.

The service validates raw payloads into drafts before touching the store,
logs the outcome of every write and wraps unexpected failures in a
``StoreError`` whose message names the operation that failed. Validation and
not-found errors pass through unchanged.
"""

from __future__ import annotations

from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from ..logging_utils import get_logger
from ..records import (
    Expense,
    NotFoundError,
    Sale,
    StoreError,
    ValidationError,
    parse_expense_payload,
    parse_sale_payload,
    parse_timestamp,
)
from ..reporting import PRODUCTION_COST_PER_SHEET, FinancialSummary, build_summary
from ..storage import RecordStore

LOGGER = get_logger(__name__)


class TransactionKind(str, Enum):
    """Which record kinds the transactions listing returns."""

    SALES = "sales"
    EXPENSES = "expenses"
    ALL = "all"

    @classmethod
    def lookup(cls, value: Optional[str]) -> "TransactionKind":
        """Return the matching kind; anything unrecognised lists both."""

        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL


@contextmanager
def _operation(failure_message: str) -> Iterator[None]:
    """Re-raise unexpected failures as ``StoreError`` with a contextual message."""

    try:
        yield
    except (ValidationError, NotFoundError):
        raise
    except StoreError as error:
        raise StoreError(failure_message, detail=error.detail or error.message) from error
    except Exception as error:
        LOGGER.exception(failure_message)
        raise StoreError(failure_message, detail=str(error)) from error


class BookkeepingService:
    """Coordinate validation, persistence and reporting for the ledger."""

    def __init__(
        self,
        store: RecordStore,
        *,
        cost_per_sheet: float = PRODUCTION_COST_PER_SHEET,
    ) -> None:
        self.store = store
        self.cost_per_sheet = cost_per_sheet

    async def create_sale(self, payload: Any) -> Sale:
        draft = parse_sale_payload(payload)
        with _operation("Error saving sale data"):
            sale = await self.store.insert_sale(draft)
        LOGGER.info(
            "Recorded sale %s: %s sheets for %.2f", sale.sale_id, sale.sheets_sold, sale.total_revenue
        )
        return sale

    async def update_sale(self, sale_id: str, payload: Any) -> Sale:
        draft = parse_sale_payload(payload)
        try:
            with _operation("Error updating sale"):
                sale = await self.store.update_sale(sale_id, draft)
        except NotFoundError:
            LOGGER.warning("Update requested for unknown sale %s", sale_id)
            raise
        LOGGER.info("Updated sale %s", sale_id)
        return sale

    async def delete_sale(self, sale_id: str) -> Sale:
        try:
            with _operation("Error deleting sale"):
                sale = await self.store.delete_sale(sale_id)
        except NotFoundError:
            LOGGER.warning("Delete requested for unknown sale %s", sale_id)
            raise
        LOGGER.info("Deleted sale %s", sale_id)
        return sale

    async def create_expense(self, payload: Any) -> Expense:
        draft = parse_expense_payload(payload)
        with _operation("Error saving expense data"):
            expense = await self.store.insert_expense(draft)
        LOGGER.info(
            "Recorded %s expense %s for %.2f",
            expense.expense_type.value,
            expense.expense_id,
            expense.amount,
        )
        return expense

    async def update_expense(self, expense_id: str, payload: Any) -> Expense:
        draft = parse_expense_payload(payload)
        try:
            with _operation("Error updating expense"):
                expense = await self.store.update_expense(expense_id, draft)
        except NotFoundError:
            LOGGER.warning("Update requested for unknown expense %s", expense_id)
            raise
        LOGGER.info("Updated expense %s", expense_id)
        return expense

    async def delete_expense(self, expense_id: str) -> Expense:
        try:
            with _operation("Error deleting expense"):
                expense = await self.store.delete_expense(expense_id)
        except NotFoundError:
            LOGGER.warning("Delete requested for unknown expense %s", expense_id)
            raise
        LOGGER.info("Deleted expense %s", expense_id)
        return expense

    async def list_transactions(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        kind: Optional[str] = None,
    ) -> Dict[str, List[Dict[str, object]]]:
        """Return sales and/or expenses, newest first.

        The date filter only applies when both ``start_date`` and
        ``end_date`` are given; a single bound is ignored.
        """

        start = end = None
        if start_date and end_date:
            start = parse_timestamp(start_date)
            end = parse_timestamp(end_date)
        selected = TransactionKind.lookup(kind)

        result: Dict[str, List[Dict[str, object]]] = {}
        with _operation("Error fetching transactions"):
            if selected is not TransactionKind.EXPENSES:
                sales = await self.store.list_sales(start, end)
                result["sales"] = [sale.as_dict() for sale in sales]
            if selected is not TransactionKind.SALES:
                expenses = await self.store.list_expenses(start, end)
                result["expenses"] = [expense.as_dict() for expense in expenses]
        return result

    async def summary(self, period: Optional[str]) -> FinancialSummary:
        with _operation("Error generating summary"):
            return await build_summary(self.store, period, cost_per_sheet=self.cost_per_sheet)
