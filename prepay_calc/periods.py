"""Mapping between calendar dates and repayment periods.

The schedule engine only ever deals with 1-based period indices. Everything
that needs a calendar (labelling periods and locating the prepayment event)
goes through a ``PeriodCalendar`` so the engine can be exercised with a fake
calendar in tests.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Protocol

from .data_models import LoanParameters
from .utils import add_months, months_between

logger = logging.getLogger(__name__)


class PeriodCalendar(Protocol):
    def months_between(self, start: date, end: date) -> int:
        ...

    def label(self, index: int) -> str:
        ...


class MonthCalendar:
    """Monthly periods anchored at the first repayment date.

    Without an anchor, periods are labelled ``Month 1``, ``Month 2``...
    With one, they are labelled by the year and month they fall in.
    """

    def __init__(self, first_period_date: Optional[date] = None) -> None:
        self.first_period_date = first_period_date

    def months_between(self, start: date, end: date) -> int:
        return months_between(start, end)

    def date_of(self, index: int) -> Optional[date]:
        if self.first_period_date is None:
            return None
        return add_months(self.first_period_date, index - 1)

    def label(self, index: int) -> str:
        period_date = self.date_of(index)
        if period_date is None:
            return f"Month {index}"
        return period_date.strftime("%Y-%m")


def resolve_prepayment_period(params: LoanParameters, calendar: PeriodCalendar) -> int:
    """Return the period index in which the prepayment falls.

    The result is 0 when the parameters do not describe a prepayment event
    (no amount, or either date missing). It is *not* range checked: an index
    outside ``[1, term_months]`` is returned as is so the caller can tell an
    out-of-range event apart from no event at all.
    """
    if not params.has_prepayment:
        return 0
    index = calendar.months_between(params.first_period_date, params.prepayment_date) + 1
    logger.debug(
        "Prepayment on %s falls in period %d (first period %s)",
        params.prepayment_date,
        index,
        params.first_period_date,
    )
    return index
