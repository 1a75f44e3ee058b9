"""Data models for the prepayment calculator.

This module defines dataclasses representing the entities used by the
calculator: the loan parameters supplied by the caller, the individual period
records of a schedule, whole schedules, and the side-by-side comparison of a
baseline schedule with a prepayment schedule. All of them are frozen so a
calculation result can be shared freely once it has been produced.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Tuple

from .errors import InvalidParameter

ZERO = Decimal("0")


class AmortizationMethod(str, Enum):
    """The two amortization conventions supported by the engine."""

    EQUAL_PRINCIPAL = "equal-principal"
    EQUAL_INSTALLMENT = "equal-installment"

    @classmethod
    def parse(cls, value) -> "AmortizationMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower().replace("_", "-"))
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise InvalidParameter("method", f"must be one of {choices}; got {value!r}") from None


class PrepaymentStatus(str, Enum):
    """Outcome of the prepayment event for one schedule."""

    NONE = "none"
    APPLIED = "applied"
    CLAMPED = "clamped"
    OUT_OF_RANGE = "out-of-range"


class ScheduleTag(str, Enum):
    """Which schedule a merged record comes from."""

    ORIGINAL = "original"
    PREPAYMENT = "prepayment"


def _as_decimal(name: str, value) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise InvalidParameter(name, f"must be a number; got {value!r}")
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise InvalidParameter(name, f"must be a number; got {value!r}") from None
    if not result.is_finite():
        raise InvalidParameter(name, f"must be finite; got {value!r}")
    return result


@dataclass(frozen=True)
class LoanParameters:
    """Inputs of a single calculation.

    Attributes
    ----------
    principal: Decimal
        Amount borrowed, in base currency units.
    annual_rate: Decimal
        Nominal annual interest rate in percent (3.5 means 3.5 %/year).
    term_months: int
        Total number of monthly periods.
    method: AmortizationMethod
        Equal principal or equal installment.
    first_period_date: date, optional
        Date of the first repayment. Without it periods are labelled by
        ordinal only and no prepayment event can be located.
    prepayment_date: date, optional
        Date of the single lump-sum prepayment.
    prepayment_amount: Decimal
        Size of the lump sum. Zero means no event.

    Numeric fields accept anything ``Decimal`` can parse and are normalized
    on construction; invalid values raise ``InvalidParameter``.
    """

    principal: Decimal
    annual_rate: Decimal
    term_months: int
    method: AmortizationMethod = AmortizationMethod.EQUAL_PRINCIPAL
    first_period_date: Optional[date] = None
    prepayment_date: Optional[date] = None
    prepayment_amount: Decimal = ZERO

    def __post_init__(self) -> None:
        principal = _as_decimal("principal", self.principal)
        if principal <= 0:
            raise InvalidParameter("principal", f"must be positive; got {principal}")
        rate = _as_decimal("annual_rate", self.annual_rate)
        if rate < 0:
            raise InvalidParameter("annual_rate", f"must not be negative; got {rate}")
        if isinstance(self.term_months, bool) or not isinstance(self.term_months, int):
            raise InvalidParameter("term_months", f"must be an integer; got {self.term_months!r}")
        if self.term_months <= 0:
            raise InvalidParameter("term_months", f"must be positive; got {self.term_months}")
        amount = ZERO if self.prepayment_amount is None else _as_decimal(
            "prepayment_amount", self.prepayment_amount
        )
        if amount < 0:
            raise InvalidParameter("prepayment_amount", f"must not be negative; got {amount}")
        for name in ("first_period_date", "prepayment_date"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, date):
                raise InvalidParameter(name, f"must be a date; got {value!r}")

        object.__setattr__(self, "principal", principal)
        object.__setattr__(self, "annual_rate", rate)
        object.__setattr__(self, "method", AmortizationMethod.parse(self.method))
        object.__setattr__(self, "prepayment_amount", amount)

    @property
    def has_prepayment(self) -> bool:
        """True when every piece needed to place a prepayment event is present."""
        return (
            self.first_period_date is not None
            and self.prepayment_date is not None
            and self.prepayment_amount > 0
        )

    def without_prepayment(self) -> "LoanParameters":
        """Return a copy of these parameters with the prepayment removed."""
        return LoanParameters(
            principal=self.principal,
            annual_rate=self.annual_rate,
            term_months=self.term_months,
            method=self.method,
            first_period_date=self.first_period_date,
            prepayment_date=None,
            prepayment_amount=ZERO,
        )


@dataclass(frozen=True)
class PeriodRecord:
    """One month of a schedule.

    Values are rounded to cents when the record is emitted; the engine keeps
    the running balance at full precision. ``prepayment`` holds the lump sum
    applied in this period (zero unless ``is_prepayment_period``).
    """

    index: int
    label: str
    payment: Decimal
    interest: Decimal
    principal: Decimal
    remaining_principal: Decimal
    is_prepayment_period: bool = False
    prepayment: Decimal = ZERO


@dataclass(frozen=True)
class ScheduleResult:
    """An ordered schedule plus the outcome of its prepayment event.

    ``prepayment_period`` is the period the event was applied in, 0 when no
    event was applied. Totals are sums of the rounded record values.
    """

    records: Tuple[PeriodRecord, ...]
    method: AmortizationMethod
    prepayment_status: PrepaymentStatus = PrepaymentStatus.NONE
    prepayment_period: int = 0

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __getitem__(self, item):
        return self.records[item]

    @property
    def periods(self) -> int:
        return len(self.records)

    @property
    def total_interest(self) -> Decimal:
        return sum((r.interest for r in self.records), ZERO)

    @property
    def total_payment(self) -> Decimal:
        return sum((r.payment for r in self.records), ZERO)

    @property
    def total_principal(self) -> Decimal:
        return sum((r.principal for r in self.records), ZERO)

    @property
    def total_prepayment(self) -> Decimal:
        return sum((r.prepayment for r in self.records), ZERO)

    @property
    def initial_payment(self) -> Decimal:
        return self.records[0].payment if self.records else ZERO

    @property
    def final_label(self) -> str:
        return self.records[-1].label if self.records else ""


@dataclass(frozen=True)
class MergedRecord:
    """A period record tagged with the schedule it came from."""

    tag: ScheduleTag
    record: PeriodRecord


@dataclass(frozen=True)
class ComparisonResult:
    """Baseline and prepayment schedules with their interleaved records."""

    baseline: ScheduleResult
    with_prepayment: ScheduleResult
    merged: Tuple[MergedRecord, ...] = field(default_factory=tuple)

    @property
    def interest_saved(self) -> Decimal:
        return self.baseline.total_interest - self.with_prepayment.total_interest

    @property
    def months_saved(self) -> int:
        return self.baseline.periods - self.with_prepayment.periods
