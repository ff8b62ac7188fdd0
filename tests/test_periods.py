"""Mini README: Tests for reporting period resolution.

A fixed Wednesday afternoon is used as "now" so every boundary can be
asserted exactly in the local time zone.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from sheetledger.reporting import Period, resolve
from sheetledger.reporting.periods import EPOCH

NOW = datetime(2024, 6, 12, 15, 30).astimezone()


def test_today_covers_the_whole_calendar_day() -> None:
    window = resolve("today", now=NOW)

    assert window.start == datetime(2024, 6, 12).astimezone()
    assert window.end == datetime(2024, 6, 12, 23, 59, 59, 999000).astimezone()
    assert not window.contains(NOW - timedelta(days=1))
    assert window.contains(NOW)


def test_week_starts_on_most_recent_sunday() -> None:
    window = resolve("week", now=NOW)

    assert window.start == datetime(2024, 6, 9).astimezone()
    assert window.end == NOW


def test_week_on_a_sunday_starts_that_day() -> None:
    sunday = datetime(2024, 6, 9, 8, 0).astimezone()

    assert resolve("week", now=sunday).start == datetime(2024, 6, 9).astimezone()


def test_month_and_year_start_at_local_midnight() -> None:
    assert resolve("month", now=NOW).start == datetime(2024, 6, 1).astimezone()
    assert resolve("year", now=NOW).start == datetime(2024, 1, 1).astimezone()
    assert resolve("year", now=NOW).end == NOW


@pytest.mark.parametrize("period", ["all", "decade", "", None])
def test_unknown_periods_fall_back_to_all_time(period) -> None:
    window = resolve(period, now=NOW)

    assert window.start == EPOCH
    assert window.end == NOW


def test_period_lookup_ignores_case() -> None:
    assert Period.lookup(" Month ") is Period.MONTH
    assert Period.lookup("fortnight") is Period.ALL
