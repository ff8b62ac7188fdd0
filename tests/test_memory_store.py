"""Mini README: Tests for the in-memory record store.

Structure:
    * inserts - identifiers, default dates and derived fields.
    * listing - newest-first ordering, date windows and type filters.
    * updates/deletes - not-found handling and preserved optional fields.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from sheetledger.records import ExpenseType, NotFoundError, parse_expense_payload, parse_sale_payload
from sheetledger.storage import MemoryRecordStore

pytestmark = pytest.mark.anyio


def _sale(sheets: int, revenue: float, date: str | None = None):
    payload = {"sheetsSold": sheets, "totalRevenue": revenue}
    if date:
        payload["date"] = date
    return parse_sale_payload(payload)


def _expense(kind: str, amount: float, date: str | None = None, description: str | None = None):
    payload = {"type": kind, "amount": amount}
    if date:
        payload["date"] = date
    if description is not None:
        payload["description"] = description
    return parse_expense_payload(payload)


async def test_insert_sale_assigns_identifier_and_defaults() -> None:
    store = MemoryRecordStore()

    sale = await store.insert_sale(_sale(10, 500))

    assert sale.sale_id == "sale_0001"
    assert sale.price_per_sheet == pytest.approx(50.0)
    assert sale.date == sale.created_at == sale.updated_at
    assert await store.get_sale(sale.sale_id) is sale


async def test_insert_expense_defaults_description() -> None:
    store = MemoryRecordStore()

    expense = await store.insert_expense(_expense("other", 12))

    assert expense.expense_id.startswith("expense_")
    assert expense.description == "other expense"


async def test_list_sales_orders_newest_first_within_window() -> None:
    store = MemoryRecordStore()
    await store.insert_sale(_sale(1, 40, "2024-01-05T09:00:00"))
    await store.insert_sale(_sale(2, 80, "2024-03-05T09:00:00"))
    await store.insert_sale(_sale(3, 120, "2024-02-05T09:00:00"))

    everything = await store.list_sales()
    february_onwards = await store.list_sales(
        datetime(2024, 2, 1).astimezone(), datetime(2024, 3, 31).astimezone()
    )

    assert [sale.sheets_sold for sale in everything] == [2, 3, 1]
    assert [sale.sheets_sold for sale in february_onwards] == [2, 3]


async def test_list_expenses_filters_by_type() -> None:
    store = MemoryRecordStore()
    await store.insert_expense(_expense("petrol", 30, "2024-01-02T10:00:00"))
    await store.insert_expense(_expense("other", 5, "2024-01-03T10:00:00"))
    await store.insert_expense(_expense("petrol", 20, "2024-01-04T10:00:00"))

    petrol = await store.list_expenses(expense_type=ExpenseType.PETROL)

    assert [expense.amount for expense in petrol] == [20, 30]
    assert len(await store.list_expenses()) == 3


async def test_update_sale_recomputes_price_and_keeps_date() -> None:
    store = MemoryRecordStore()
    original = await store.insert_sale(_sale(10, 500, "2024-01-05T09:00:00"))

    updated = await store.update_sale(original.sale_id, _sale(20, 500))

    assert updated.price_per_sheet == pytest.approx(25.0)
    assert updated.date == original.date
    assert updated.created_at == original.created_at
    assert updated.updated_at >= original.updated_at


async def test_update_expense_without_description_keeps_existing() -> None:
    store = MemoryRecordStore()
    original = await store.insert_expense(_expense("petrol", 30, description="Van fuel"))

    updated = await store.update_expense(original.expense_id, _expense("other", 35))

    assert updated.description == "Van fuel"
    assert updated.expense_type is ExpenseType.OTHER
    assert updated.amount == pytest.approx(35)


async def test_update_unknown_expense_leaves_store_unchanged() -> None:
    store = MemoryRecordStore()
    existing = await store.insert_expense(_expense("petrol", 30))

    with pytest.raises(NotFoundError):
        await store.update_expense("expense_9999", _expense("other", 1))

    assert await store.list_expenses() == [existing]


async def test_delete_twice_raises_not_found() -> None:
    store = MemoryRecordStore()
    sale = await store.insert_sale(_sale(1, 40))

    deleted = await store.delete_sale(sale.sale_id)

    assert deleted.sale_id == sale.sale_id
    with pytest.raises(NotFoundError):
        await store.delete_sale(sale.sale_id)


async def test_generated_ids_skip_preloaded_records() -> None:
    seeded = MemoryRecordStore()
    sale = await seeded.insert_sale(_sale(1, 40))

    store = MemoryRecordStore(sales=[sale])
    fresh = await store.insert_sale(_sale(2, 80))

    assert fresh.sale_id == "sale_0002"
