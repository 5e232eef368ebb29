"""
periods.py
Billing periods, overdue window and timestamp display.

"Now" comes from a Clock passed by the caller so the rules can be exercised
against any date. Without one, the host clock is used.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Protocol

from models import MONTHS, OVERDUE_FROM_DAY, YEAR_SPAN, BillingPeriod


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    def today(self) -> date:
        return date.today()


@dataclass(frozen=True)
class FixedClock:
    day: date

    def today(self) -> date:
        return self.day


def _today(clock: Clock | None) -> date:
    return (clock or SystemClock()).today()


def current_month(clock: Clock | None = None) -> str:
    return MONTHS[_today(clock).month - 1]


def current_year(clock: Clock | None = None) -> int:
    return _today(clock).year


def current_period(clock: Clock | None = None) -> BillingPeriod:
    today = _today(clock)
    return BillingPeriod(MONTHS[today.month - 1], today.year)


def all_months() -> list[str]:
    return list(MONTHS)


def year_range(clock: Clock | None = None) -> list[int]:
    year = current_year(clock)
    return list(range(year - YEAR_SPAN, year + YEAR_SPAN + 1))


def is_overdue_period(clock: Clock | None = None) -> bool:
    """
    True from the 6th of the month onward; the first five days are grace.
    """
    return _today(clock).day >= OVERDUE_FROM_DAY


def should_show_overdue_notice(is_paid: bool, clock: Clock | None = None) -> bool:
    return is_overdue_period(clock) and not is_paid


def is_current_period_overdue(month: str, year: int, clock: Clock | None = None) -> bool:
    """
    Whether the selected (month, year) is the running period and its
    grace days are over. Past periods are reported by the backend instead.
    """
    period = current_period(clock)
    return month == period.month and int(year) == period.year and is_overdue_period(clock)


# ---------- Timestamp display ----------

def _from_nanos(timestamp_ns: int) -> datetime:
    # Backend times are nanoseconds since the epoch
    return datetime.fromtimestamp(timestamp_ns // 1_000_000 / 1000, tz=timezone.utc)


def format_date(timestamp_ns: int) -> str:
    """e.g. 'Jun 5, 2025'"""
    dt = _from_nanos(timestamp_ns)
    return f"{dt:%b} {dt.day}, {dt.year}"


def format_datetime(timestamp_ns: int) -> str:
    """e.g. 'Jun 5, 2025, 02:30 PM'"""
    dt = _from_nanos(timestamp_ns)
    return f"{dt:%b} {dt.day}, {dt.year}, {dt:%I:%M %p}"
