"""Mini README: Reporting helpers for period based financial summaries.

``periods`` turns keywords such as ``week`` into date ranges and ``summary``
aggregates a record store over that range into revenue, cost and profit
figures.
"""

from .periods import DateRange, Period, resolve
from .summary import PRODUCTION_COST_PER_SHEET, FinancialSummary, build_summary, profit_margin

__all__ = [
    "DateRange",
    "FinancialSummary",
    "PRODUCTION_COST_PER_SHEET",
    "Period",
    "build_summary",
    "profit_margin",
    "resolve",
]
