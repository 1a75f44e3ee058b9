"""Utility functions for the prepayment calculator.

This module provides helpers for parsing user input into Python data types,
for calendar arithmetic on ``datetime.date`` values (adding months and
counting whole months between two dates) and for rounding money to cents.
"""

from __future__ import annotations

import calendar
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, getcontext

from .errors import InvalidParameter

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

CENTS = Decimal("0.01")


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to two fractional digits (half up)."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM`` into a ``date``.

    A missing day component means the first day of the month.

    Raises
    ------
    InvalidParameter
        If the string is not a valid date.
    """
    try:
        parts = value.strip().split("-")
        if len(parts) == 2:
            parts.append("1")
        if len(parts) != 3:
            raise ValueError
        year, month, day = (int(p) for p in parts)
        return date(year, month, day)
    except (ValueError, AttributeError) as exc:
        raise InvalidParameter("date", f"invalid date string: {value!r}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def months_between(start: date, end: date) -> int:
    """Return the number of whole months from ``start`` to ``end``.

    Partial months are truncated toward zero, so the result is negative when
    ``end`` precedes ``start`` by at least one full month. A month counts as
    complete once ``add_months(start, n)`` does not pass ``end``.
    """
    if end < start:
        return -months_between(end, start)
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if add_months(start, months) > end:
        months -= 1
    return months


def decimal_from_str(value: str) -> Decimal:
    """Convert a numeric string into a ``Decimal``.

    The function strips any commas and handles both integer and float-like
    strings. It raises ``InvalidParameter`` if conversion fails.
    """
    try:
        cleaned = value.replace(",", "").strip()
        result = Decimal(cleaned)
    except (InvalidOperation, AttributeError) as exc:
        raise InvalidParameter("amount", f"invalid numeric value: {value!r}") from exc
    if not result.is_finite():
        raise InvalidParameter("amount", f"invalid numeric value: {value!r}")
    return result
