"""Shared loan fixtures.

Fixture loan: 1,000,000 at 3.5 % over 360 months, first payment 2024-01-01,
prepayment of 100,000 on 2025-01-01 (period 13).
"""

from datetime import date
from decimal import Decimal

import pytest

from prepay_calc.data_models import AmortizationMethod, LoanParameters


@pytest.fixture
def equal_principal_loan() -> LoanParameters:
    return LoanParameters(
        principal=Decimal("1000000"),
        annual_rate=Decimal("3.5"),
        term_months=360,
        method=AmortizationMethod.EQUAL_PRINCIPAL,
    )


@pytest.fixture
def equal_installment_prepayment() -> LoanParameters:
    return LoanParameters(
        principal=Decimal("1000000"),
        annual_rate=Decimal("3.5"),
        term_months=360,
        method=AmortizationMethod.EQUAL_INSTALLMENT,
        first_period_date=date(2024, 1, 1),
        prepayment_date=date(2025, 1, 1),
        prepayment_amount=Decimal("100000"),
    )


@pytest.fixture
def small_loan() -> LoanParameters:
    """10,000 at 6 % over a year; first payment 2024-01-15."""
    return LoanParameters(
        principal=Decimal("10000"),
        annual_rate=Decimal("6"),
        term_months=12,
        method=AmortizationMethod.EQUAL_INSTALLMENT,
        first_period_date=date(2024, 1, 15),
    )
