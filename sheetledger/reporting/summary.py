"""Mini README: Period financial summaries.

Structure:
    * PRODUCTION_COST_PER_SHEET - default manufacturing cost of one sheet.
    * FinancialSummary - flat report with JSON export.
    * build_summary - aggregate a store's records for a period keyword.

Net profit subtracts production cost and the total of all expenses from
revenue. Petrol and other expenses are reported separately for detail only;
they are already part of ``total_expenses``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from ..logging_utils import get_logger
from ..records import ExpenseType
from ..storage import RecordStore
from .periods import resolve

LOGGER = get_logger(__name__)

PRODUCTION_COST_PER_SHEET = 43


@dataclass(slots=True)
class FinancialSummary:
    """Aggregated sales and expense figures for one period."""

    total_sheets: int = 0
    total_revenue: float = 0
    total_production_cost: float = 0
    total_petrol: float = 0
    total_other_expenses: float = 0
    total_expenses: float = 0
    expense_count: int = 0
    avg_price_per_sheet: float = 0
    net_profit: float = 0
    profit_margin: float = 0

    def as_dict(self) -> Dict[str, object]:
        return {
            "totalSheets": self.total_sheets,
            "totalRevenue": self.total_revenue,
            "totalProductionCost": self.total_production_cost,
            "totalPetrol": self.total_petrol,
            "totalOtherExpenses": self.total_other_expenses,
            "totalExpenses": self.total_expenses,
            "expenseCount": self.expense_count,
            "avgPricePerSheet": self.avg_price_per_sheet,
            "netProfit": self.net_profit,
            "profitMargin": self.profit_margin,
        }


def profit_margin(net_profit: float, total_revenue: float) -> float:
    """Net profit as a percentage of revenue, 0 when there is no revenue."""

    if total_revenue == 0:
        return 0
    return round(net_profit / total_revenue * 100, 2)


async def build_summary(
    store: RecordStore,
    period: Optional[str],
    *,
    now: Optional[datetime] = None,
    cost_per_sheet: float = PRODUCTION_COST_PER_SHEET,
) -> FinancialSummary:
    """Summarise sales and expenses recorded within ``period``."""

    window = resolve(period, now=now)
    sales, expenses, petrol, other = await asyncio.gather(
        store.list_sales(window.start, window.end),
        store.list_expenses(window.start, window.end),
        store.list_expenses(window.start, window.end, ExpenseType.PETROL),
        store.list_expenses(window.start, window.end, ExpenseType.OTHER),
    )

    summary = FinancialSummary()
    summary.total_sheets = sum(sale.sheets_sold for sale in sales)
    summary.total_revenue = sum(sale.total_revenue for sale in sales)
    summary.total_production_cost = sum(sale.sheets_sold * cost_per_sheet for sale in sales)
    if sales:
        average = sum(sale.price_per_sheet for sale in sales) / len(sales)
        summary.avg_price_per_sheet = round(average, 2)

    summary.total_expenses = sum(expense.amount for expense in expenses)
    summary.expense_count = len(expenses)
    summary.total_petrol = sum(expense.amount for expense in petrol)
    summary.total_other_expenses = sum(expense.amount for expense in other)

    summary.net_profit = (
        summary.total_revenue - summary.total_production_cost - summary.total_expenses
    )
    summary.profit_margin = profit_margin(summary.net_profit, summary.total_revenue)
    LOGGER.debug(
        "Summary for period=%s (%s -> %s): %s sales, %s expenses",
        period,
        window.start.isoformat(),
        window.end.isoformat(),
        len(sales),
        len(expenses),
    )
    return summary
