from decimal import Decimal

import pytest

from prepay_calc.data_models import AmortizationMethod
from prepay_calc.payments import (
    EqualInstallmentCalculator,
    EqualPrincipalCalculator,
    PaymentPlan,
    calculator_for,
    period_rate,
)
from prepay_calc.utils import quantize_money


class TestPeriodRate:
    def test_percent_to_monthly_decimal(self):
        assert period_rate(Decimal("6")) == Decimal("0.005")

    def test_zero(self):
        assert period_rate(Decimal("0")) == 0


class TestEqualInstallment:
    def test_standard_mortgage(self):
        """1,000,000 at 3.5 % over 30 years."""
        amount = EqualInstallmentCalculator().amount(Decimal("1000000"), period_rate(Decimal("3.5")), 360)
        assert quantize_money(amount) == Decimal("4490.45")

    def test_one_year_loan(self):
        amount = EqualInstallmentCalculator().amount(Decimal("10000"), Decimal("0.005"), 12)
        assert quantize_money(amount) == Decimal("860.66")

    def test_zero_rate_is_straight_line(self):
        amount = EqualInstallmentCalculator().amount(Decimal("120000"), Decimal("0"), 120)
        assert amount == Decimal("1000")

    def test_rate_below_precision_is_straight_line(self):
        rate = period_rate(Decimal("1e-27"))
        assert rate > 0
        amount = EqualInstallmentCalculator().amount(Decimal("120000"), rate, 120)
        assert amount == Decimal("1000")

    def test_plan_split(self):
        plan = PaymentPlan(AmortizationMethod.EQUAL_INSTALLMENT, Decimal("500"))
        assert plan.split(Decimal("120")) == (Decimal("380"), Decimal("500"))


class TestEqualPrincipal:
    def test_fixed_principal(self):
        amount = EqualPrincipalCalculator().amount(Decimal("1000000"), period_rate(Decimal("3.5")), 360)
        assert quantize_money(amount) == Decimal("2777.78")

    def test_plan_split(self):
        plan = PaymentPlan(AmortizationMethod.EQUAL_PRINCIPAL, Decimal("500"))
        assert plan.split(Decimal("120")) == (Decimal("500"), Decimal("620"))


class TestCalculatorFor:
    def test_dispatch(self):
        assert isinstance(calculator_for(AmortizationMethod.EQUAL_INSTALLMENT), EqualInstallmentCalculator)
        assert isinstance(calculator_for(AmortizationMethod.EQUAL_PRINCIPAL), EqualPrincipalCalculator)

    def test_plan_carries_method(self):
        plan = calculator_for(AmortizationMethod.EQUAL_PRINCIPAL).plan(Decimal("1200"), Decimal("0.01"), 12)
        assert plan == PaymentPlan(AmortizationMethod.EQUAL_PRINCIPAL, Decimal("100"))

    def test_plan_needs_remaining_months(self):
        with pytest.raises(ValueError):
            calculator_for(AmortizationMethod.EQUAL_INSTALLMENT).plan(Decimal("1000"), Decimal("0.01"), 0)
