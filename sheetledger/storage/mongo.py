"""Mini README: MongoDB record store built on pymongo's asyncio client.

Structure:
    * MongoRecordStore - ``RecordStore`` backed by ``sales``/``expenses`` collections.
    * sale_from_document / expense_from_document - map stored documents to records.

Documents use snake_case field names and ``ObjectId`` primary keys that are
exposed to callers as hex strings. Identifiers that are not valid ObjectIds
can never match a document and are reported as ``NotFoundError`` without a
round trip. Any ``PyMongoError`` is re-raised as ``StoreError``.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Mapping, Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, AsyncMongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from ..logging_utils import get_logger
from ..records import (
    Expense,
    ExpenseDraft,
    ExpenseType,
    NotFoundError,
    Sale,
    SaleDraft,
    StoreError,
)
from .base import RecordStore, utcnow

LOGGER = get_logger(__name__)

SALES_COLLECTION = "sales"
EXPENSES_COLLECTION = "expenses"


def sale_from_document(document: Mapping[str, Any]) -> Sale:
    """Build a ``Sale`` from a stored MongoDB document."""

    return Sale(
        sale_id=str(document["_id"]),
        date=document["date"],
        sheets_sold=int(document["sheets_sold"]),
        total_revenue=float(document["total_revenue"]),
        price_per_sheet=float(document["price_per_sheet"]),
        created_at=document["created_at"],
        updated_at=document["updated_at"],
    )


def expense_from_document(document: Mapping[str, Any]) -> Expense:
    """Build an ``Expense`` from a stored MongoDB document."""

    return Expense(
        expense_id=str(document["_id"]),
        date=document["date"],
        expense_type=ExpenseType.from_str(document["type"]),
        amount=float(document["amount"]),
        description=document.get("description") or "",
        created_at=document["created_at"],
        updated_at=document["updated_at"],
    )


def _object_id(record_id: str, missing_message: str) -> ObjectId:
    if not ObjectId.is_valid(record_id):
        raise NotFoundError(missing_message)
    return ObjectId(record_id)


def _date_filter(start: Optional[datetime], end: Optional[datetime]) -> Dict[str, Any]:
    bounds: Dict[str, Any] = {}
    if start is not None:
        bounds["$gte"] = start
    if end is not None:
        bounds["$lte"] = end
    return {"date": bounds} if bounds else {}


@contextmanager
def _backend_errors(action: str) -> Iterator[None]:
    """Translate driver failures into ``StoreError``."""

    try:
        yield
    except PyMongoError as error:
        LOGGER.error("MongoDB failure while %s: %s", action, error)
        raise StoreError(f"MongoDB failure while {action}", detail=str(error)) from error


class MongoRecordStore(RecordStore):
    """Persist ledger records in MongoDB."""

    backend_name = "mongodb"

    def __init__(self, uri: str, database: str, *, client: Optional[AsyncMongoClient] = None) -> None:
        self._client = client or AsyncMongoClient(uri, tz_aware=True)
        self._database = self._client[database]
        self._sales = self._database[SALES_COLLECTION]
        self._expenses = self._database[EXPENSES_COLLECTION]

    async def open(self) -> None:
        with _backend_errors("creating indexes"):
            await self._sales.create_index([("date", DESCENDING)])
            await self._expenses.create_index([("date", DESCENDING)])
            await self._expenses.create_index([("type", ASCENDING), ("date", DESCENDING)])
        LOGGER.info("Connected to MongoDB database '%s'", self._database.name)

    async def close(self) -> None:
        await self._client.close()
        LOGGER.info("MongoDB connection closed")

    async def insert_sale(self, draft: SaleDraft) -> Sale:
        now = utcnow()
        document = {
            "date": draft.date or now,
            "sheets_sold": draft.sheets_sold,
            "total_revenue": draft.total_revenue,
            "price_per_sheet": draft.price_per_sheet,
            "created_at": now,
            "updated_at": now,
        }
        with _backend_errors("inserting a sale"):
            result = await self._sales.insert_one(document)
        document["_id"] = result.inserted_id
        return sale_from_document(document)

    async def get_sale(self, sale_id: str) -> Sale:
        object_id = _object_id(sale_id, "Sale not found")
        with _backend_errors("fetching a sale"):
            document = await self._sales.find_one({"_id": object_id})
        if document is None:
            raise NotFoundError("Sale not found")
        return sale_from_document(document)

    async def update_sale(self, sale_id: str, draft: SaleDraft) -> Sale:
        object_id = _object_id(sale_id, "Sale not found")
        changes: Dict[str, Any] = {
            "sheets_sold": draft.sheets_sold,
            "total_revenue": draft.total_revenue,
            "price_per_sheet": draft.price_per_sheet,
            "updated_at": utcnow(),
        }
        if draft.date is not None:
            changes["date"] = draft.date
        with _backend_errors("updating a sale"):
            document = await self._sales.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            raise NotFoundError("Sale not found")
        return sale_from_document(document)

    async def delete_sale(self, sale_id: str) -> Sale:
        object_id = _object_id(sale_id, "Sale not found")
        with _backend_errors("deleting a sale"):
            document = await self._sales.find_one_and_delete({"_id": object_id})
        if document is None:
            raise NotFoundError("Sale not found")
        return sale_from_document(document)

    async def list_sales(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Sale]:
        with _backend_errors("listing sales"):
            cursor = self._sales.find(_date_filter(start, end)).sort("date", DESCENDING)
            documents = await cursor.to_list()
        return [sale_from_document(document) for document in documents]

    async def insert_expense(self, draft: ExpenseDraft) -> Expense:
        now = utcnow()
        document = {
            "date": draft.date or now,
            "type": draft.expense_type.value,
            "amount": draft.amount,
            "description": draft.description_or_default(),
            "created_at": now,
            "updated_at": now,
        }
        with _backend_errors("inserting an expense"):
            result = await self._expenses.insert_one(document)
        document["_id"] = result.inserted_id
        return expense_from_document(document)

    async def get_expense(self, expense_id: str) -> Expense:
        object_id = _object_id(expense_id, "Expense not found")
        with _backend_errors("fetching an expense"):
            document = await self._expenses.find_one({"_id": object_id})
        if document is None:
            raise NotFoundError("Expense not found")
        return expense_from_document(document)

    async def update_expense(self, expense_id: str, draft: ExpenseDraft) -> Expense:
        object_id = _object_id(expense_id, "Expense not found")
        changes: Dict[str, Any] = {
            "type": draft.expense_type.value,
            "amount": draft.amount,
            "updated_at": utcnow(),
        }
        if draft.date is not None:
            changes["date"] = draft.date
        if draft.description is not None:
            changes["description"] = draft.description
        with _backend_errors("updating an expense"):
            document = await self._expenses.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        if document is None:
            raise NotFoundError("Expense not found")
        return expense_from_document(document)

    async def delete_expense(self, expense_id: str) -> Expense:
        object_id = _object_id(expense_id, "Expense not found")
        with _backend_errors("deleting an expense"):
            document = await self._expenses.find_one_and_delete({"_id": object_id})
        if document is None:
            raise NotFoundError("Expense not found")
        return expense_from_document(document)

    async def list_expenses(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        expense_type: Optional[ExpenseType] = None,
    ) -> List[Expense]:
        query = _date_filter(start, end)
        if expense_type is not None:
            query["type"] = expense_type.value
        with _backend_errors("listing expenses"):
            cursor = self._expenses.find(query).sort("date", DESCENDING)
            documents = await cursor.to_list()
        return [expense_from_document(document) for document in documents]
