"""Mini README: Tests for period financial summaries.

These tests seed an in-memory store and check the aggregated revenue,
production cost, expense breakdown and profit figures.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from sheetledger.records import parse_expense_payload, parse_sale_payload
from sheetledger.reporting import build_summary, profit_margin
from sheetledger.storage import MemoryRecordStore

pytestmark = pytest.mark.anyio


async def test_summary_matches_reference_scenario() -> None:
    store = MemoryRecordStore()
    await store.insert_sale(parse_sale_payload({"sheetsSold": 10, "totalRevenue": 500}))
    await store.insert_expense(parse_expense_payload({"type": "petrol", "amount": 30}))

    summary = await build_summary(store, "all")

    assert summary.total_sheets == 10
    assert summary.total_revenue == pytest.approx(500)
    assert summary.total_production_cost == pytest.approx(430)
    assert summary.total_petrol == pytest.approx(30)
    assert summary.total_other_expenses == 0
    assert summary.total_expenses == pytest.approx(30)
    assert summary.expense_count == 1
    assert summary.avg_price_per_sheet == pytest.approx(50.0)
    assert summary.net_profit == pytest.approx(40)
    assert summary.profit_margin == pytest.approx(8.0)


async def test_summary_without_sales_reports_zero_margin() -> None:
    store = MemoryRecordStore()
    await store.insert_expense(parse_expense_payload({"type": "other", "amount": 25}))

    summary = await build_summary(store, "month")

    assert summary.total_revenue == 0
    assert summary.profit_margin == 0
    assert summary.avg_price_per_sheet == 0
    assert summary.net_profit == pytest.approx(-25)


async def test_summary_today_excludes_yesterday() -> None:
    store = MemoryRecordStore()
    yesterday = datetime.now().astimezone() - timedelta(days=1)
    await store.insert_sale(
        parse_sale_payload({"date": yesterday.isoformat(), "sheetsSold": 5, "totalRevenue": 250})
    )
    await store.insert_sale(parse_sale_payload({"sheetsSold": 2, "totalRevenue": 120}))

    summary = await build_summary(store, "today")

    assert summary.total_sheets == 2
    assert summary.total_revenue == pytest.approx(120)


async def test_summary_breaks_down_expenses_and_averages_prices() -> None:
    store = MemoryRecordStore()
    await store.insert_sale(parse_sale_payload({"sheetsSold": 3, "totalRevenue": 100}))
    await store.insert_sale(parse_sale_payload({"sheetsSold": 1, "totalRevenue": 50}))
    await store.insert_expense(parse_expense_payload({"type": "petrol", "amount": 10}))
    await store.insert_expense(parse_expense_payload({"type": "petrol", "amount": 15}))
    await store.insert_expense(parse_expense_payload({"type": "other", "amount": 7.5}))

    summary = await build_summary(store, "unknown-period", cost_per_sheet=10)

    assert summary.total_production_cost == pytest.approx(40)
    assert summary.total_petrol == pytest.approx(25)
    assert summary.total_other_expenses == pytest.approx(7.5)
    assert summary.total_expenses == pytest.approx(32.5)
    assert summary.expense_count == 3
    assert summary.avg_price_per_sheet == pytest.approx(41.67)
    assert summary.net_profit == pytest.approx(150 - 40 - 32.5)
    assert summary.profit_margin == pytest.approx(51.67)


def test_profit_margin_rounds_to_two_places() -> None:
    assert profit_margin(1, 3) == pytest.approx(33.33)
    assert profit_margin(10, 0) == 0
