"""Rate conversion and payment plans for both amortization methods.

A payment plan is the scalar the engine commits to until the next
recomputation (loan origination or the prepayment event): the fixed
installment for equal-installment loans, the fixed principal portion for
equal-principal loans. ``PaymentPlan.split`` turns that scalar plus the
period's interest into the principal portion and the total payment.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Tuple

from .data_models import AmortizationMethod

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = Decimal(12)


def period_rate(annual_rate: Decimal) -> Decimal:
    """Convert an annual rate in percent to a monthly decimal rate."""
    return Decimal(annual_rate) / Decimal(100) / MONTHS_PER_YEAR


@dataclass(frozen=True)
class PaymentPlan:
    """The amount committed for every period until the next recomputation."""

    method: AmortizationMethod
    amount: Decimal

    def split(self, interest: Decimal) -> Tuple[Decimal, Decimal]:
        """Return ``(principal_portion, payment)`` for a period."""
        if self.method is AmortizationMethod.EQUAL_INSTALLMENT:
            return self.amount - interest, self.amount
        return self.amount, self.amount + interest


class PaymentCalculator(ABC):
    """Computes the payment plan for one amortization method."""

    method: AmortizationMethod

    @abstractmethod
    def amount(self, principal: Decimal, rate: Decimal, remaining_months: int) -> Decimal:
        """Return the committed per-period amount."""

    def plan(self, principal: Decimal, rate: Decimal, remaining_months: int) -> PaymentPlan:
        """Return the plan for ``principal`` repaid over ``remaining_months``."""
        if remaining_months <= 0:
            raise ValueError("Remaining term must be positive")
        return PaymentPlan(self.method, self.amount(principal, rate, remaining_months))


class EqualInstallmentCalculator(PaymentCalculator):
    """Fixed total payment, from the annuity formula.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, or too
    small for ``(1 + i)^n`` to differ from 1 at the decimal precision, the
    payment simplifies to ``P / n``.
    """

    method = AmortizationMethod.EQUAL_INSTALLMENT

    def amount(self, principal: Decimal, rate: Decimal, remaining_months: int) -> Decimal:
        factor = (1 + rate) ** remaining_months
        if rate == 0 or factor == 1:
            logger.debug("Interest rate %s is negligible, using straight-line installment", rate)
            return principal / Decimal(remaining_months)
        return principal * (rate * factor) / (factor - 1)


class EqualPrincipalCalculator(PaymentCalculator):
    """Fixed principal portion; the payment shrinks with the interest."""

    method = AmortizationMethod.EQUAL_PRINCIPAL

    def amount(self, principal: Decimal, rate: Decimal, remaining_months: int) -> Decimal:
        return principal / Decimal(remaining_months)


_CALCULATORS: Dict[AmortizationMethod, PaymentCalculator] = {
    AmortizationMethod.EQUAL_INSTALLMENT: EqualInstallmentCalculator(),
    AmortizationMethod.EQUAL_PRINCIPAL: EqualPrincipalCalculator(),
}


def calculator_for(method: AmortizationMethod) -> PaymentCalculator:
    """Return the calculator implementing ``method``."""
    return _CALCULATORS[AmortizationMethod.parse(method)]
