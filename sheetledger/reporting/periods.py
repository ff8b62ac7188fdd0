"""Mini README: Map reporting period keywords to date ranges.

Structure:
    * Period - enum of recognised keywords.
    * DateRange - inclusive ``[start, end]`` pair of aware timestamps.
    * resolve - pure function turning a keyword into a ``DateRange``.

Boundaries are computed in the server's local time zone. Weeks start on
Sunday. Unknown or missing keywords fall back to the all-time range rather
than raising, so ``?period=decade`` reports everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

EPOCH = datetime.fromtimestamp(0, tz=timezone.utc)


class Period(str, Enum):
    """Reporting periods understood by ``resolve``."""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"

    @classmethod
    def lookup(cls, value: Optional[str]) -> "Period":
        """Return the matching period, defaulting to ``ALL``."""

        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.ALL


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive reporting window."""

    start: datetime
    end: datetime

    def contains(self, value: datetime) -> bool:
        return self.start <= value <= self.end


def _local_midnight(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day).astimezone()


def resolve(period: Optional[str], now: Optional[datetime] = None) -> DateRange:
    """Return the date range covered by ``period`` relative to ``now``."""

    current = (now or datetime.now()).astimezone()
    keyword = Period.lookup(period)

    if keyword is Period.TODAY:
        start = _local_midnight(current.year, current.month, current.day)
        end = datetime(current.year, current.month, current.day, 23, 59, 59, 999000).astimezone()
        return DateRange(start, end)
    if keyword is Period.WEEK:
        # weekday() counts from Monday; shift so Sunday is day zero.
        sunday = current - timedelta(days=(current.weekday() + 1) % 7)
        return DateRange(_local_midnight(sunday.year, sunday.month, sunday.day), current)
    if keyword is Period.MONTH:
        return DateRange(_local_midnight(current.year, current.month, 1), current)
    if keyword is Period.YEAR:
        return DateRange(_local_midnight(current.year, 1, 1), current)
    return DateRange(EPOCH, current)
