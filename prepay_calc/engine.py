"""Core calculation engine for the prepayment calculator.

This module builds month-by-month amortization schedules for equal-principal
and equal-installment loans, optionally applying a single lump-sum
prepayment. When the prepayment fires, the outstanding balance is reduced
before that period's interest is computed and the payment plan is recomputed
over the months left until the original maturity date.

The running balance is kept at full ``Decimal`` precision; values are only
rounded to cents when a ``PeriodRecord`` is emitted.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Tuple

from .data_models import LoanParameters, PeriodRecord, PrepaymentStatus, ScheduleResult, ZERO
from .payments import calculator_for, period_rate
from .periods import MonthCalendar, PeriodCalendar, resolve_prepayment_period
from .utils import quantize_money

logger = logging.getLogger(__name__)

# Residual balances below half a cent are rounding noise.
HALF_CENT = Decimal("0.005")


def _locate_prepayment(params: LoanParameters, calendar: PeriodCalendar) -> Tuple[int, PrepaymentStatus]:
    """Return ``(event_period, status)`` for the prepayment described by ``params``."""
    if not params.has_prepayment:
        return 0, PrepaymentStatus.NONE
    index = resolve_prepayment_period(params, calendar)
    if 1 <= index <= params.term_months:
        return index, PrepaymentStatus.NONE
    logger.warning(
        "Prepayment on %s resolves to period %d, outside 1..%d; ignoring it",
        params.prepayment_date,
        index,
        params.term_months,
    )
    return 0, PrepaymentStatus.OUT_OF_RANGE


def build_schedule(
    params: LoanParameters,
    *,
    calendar: Optional[PeriodCalendar] = None,
) -> ScheduleResult:
    """Compute the amortization schedule for a loan.

    Parameters
    ----------
    params: LoanParameters
        The loan to amortize.
    calendar: PeriodCalendar, optional
        Maps dates to periods and labels periods. Defaults to a
        ``MonthCalendar`` anchored at ``params.first_period_date``.

    Returns
    -------
    ScheduleResult
        At most ``term_months`` records; the schedule stops as soon as the
        balance reaches zero.
    """
    if calendar is None:
        calendar = MonthCalendar(params.first_period_date)
    term = params.term_months
    rate = period_rate(params.annual_rate)
    calculator = calculator_for(params.method)

    event_period, status = _locate_prepayment(params, calendar)

    balance = params.principal
    plan = calculator.plan(balance, rate, term)
    records: List[PeriodRecord] = []

    for index in range(1, term + 1):
        applied = ZERO
        is_event = index == event_period
        if is_event:
            applied = min(params.prepayment_amount, balance)
            if applied < params.prepayment_amount:
                status = PrepaymentStatus.CLAMPED
                logger.warning(
                    "Prepayment of %s exceeds the outstanding balance %s in period %d; "
                    "clamping it to the balance",
                    params.prepayment_amount,
                    quantize_money(balance),
                    index,
                )
            else:
                status = PrepaymentStatus.APPLIED
                logger.info("Applying prepayment of %s in period %d", applied, index)
            balance -= applied
            # Keep the original maturity: re-amortize over the months left.
            remaining_months = term - (index - 1)
            plan = calculator.plan(balance, rate, remaining_months)
            logger.debug(
                "Recomputed %s plan over %d months: %s",
                plan.method.value,
                remaining_months,
                plan.amount,
            )

        interest = balance * rate
        principal_portion, payment = plan.split(interest)
        if index == term or principal_portion > balance:
            # Final period (or overshoot): pay off exactly what is left.
            principal_portion = balance
            payment = principal_portion + interest

        balance = max(ZERO, balance - principal_portion)
        if balance < HALF_CENT:
            balance = ZERO

        records.append(
            PeriodRecord(
                index=index,
                label=calendar.label(index),
                payment=quantize_money(payment),
                interest=quantize_money(interest),
                principal=quantize_money(principal_portion),
                remaining_principal=quantize_money(balance),
                is_prepayment_period=is_event,
                prepayment=quantize_money(applied),
            )
        )
        if balance == 0:
            break

    return ScheduleResult(
        records=tuple(records),
        method=params.method,
        prepayment_status=status,
        prepayment_period=event_period,
    )
