"""Mini README: Ownership cost arithmetic.

Structure:
    * parse_purchase_date - coerce ISO strings and datetimes to a ``date``.
    * days_since_purchase - whole days elapsed since a purchase date.
    * daily_cost - price spread across the days of ownership.

A purchase date is read as midnight UTC of that calendar day, and elapsed
time is rounded up to whole days. A product bought earlier today therefore
counts as one day of ownership, while a future-dated purchase yields zero or
a negative count and a daily cost of zero.
"""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union

SECONDS_PER_DAY = 24 * 60 * 60

DateLike = Union[date, datetime, str]


def parse_purchase_date(value: DateLike) -> date:
    """Return the calendar date for ISO strings or date/datetime instances."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value.strip())
    raise ValueError("Purchase dates must be ISO strings or date/datetime instances.")


def days_since_purchase(purchase_date: DateLike, now: Optional[datetime] = None) -> int:
    """Return ``ceil(now - purchase_date)`` in days."""

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    purchased_at = datetime.combine(
        parse_purchase_date(purchase_date), time.min, tzinfo=timezone.utc
    )
    elapsed = (now - purchased_at).total_seconds()
    return math.ceil(elapsed / SECONDS_PER_DAY)


def daily_cost(price: float, days: int) -> float:
    """Return ``price / days``, or ``0.0`` when no full day has elapsed."""

    if days <= 0:
        return 0.0
    return float(price) / days
