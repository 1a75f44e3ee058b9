from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

import pytest

from prepay_calc import data_models, formatter, main, payments
from prepay_calc.data_models import AmortizationMethod, LoanParameters
from prepay_calc.errors import InvalidParameter, PrepayCalcError


def _params(**overrides) -> LoanParameters:
    values = dict(principal=Decimal("100000"), annual_rate=Decimal("4"), term_months=120)
    values.update(overrides)
    return LoanParameters(**values)


class TestLoanParameters:
    def test_coerces_numbers_to_decimal(self):
        params = _params(principal=250000, annual_rate="3.25", prepayment_amount=1000.5)
        assert params.principal == Decimal("250000")
        assert params.annual_rate == Decimal("3.25")
        assert params.prepayment_amount == Decimal("1000.5")

    def test_method_from_string(self):
        assert _params(method="equal-installment").method is AmortizationMethod.EQUAL_INSTALLMENT
        assert _params(method="EQUAL_PRINCIPAL").method is AmortizationMethod.EQUAL_PRINCIPAL

    def test_defaults(self):
        params = _params()
        assert params.method is AmortizationMethod.EQUAL_PRINCIPAL
        assert params.prepayment_amount == Decimal("0")
        assert not params.has_prepayment

    @pytest.mark.parametrize(
        "field, value",
        [
            ("principal", 0),
            ("principal", -1),
            ("principal", "lots"),
            ("term_months", 0),
            ("term_months", 12.0),
            ("term_months", True),
            ("annual_rate", -0.1),
            ("annual_rate", None),
            ("prepayment_amount", -5),
            ("method", "interest-only"),
            ("first_period_date", "2024-01-01"),
        ],
    )
    def test_rejects_invalid(self, field, value):
        with pytest.raises(InvalidParameter) as excinfo:
            _params(**{field: value})
        assert excinfo.value.field == field

    def test_invalid_parameter_is_a_value_error(self):
        with pytest.raises(ValueError):
            _params(principal=0)
        assert issubclass(InvalidParameter, PrepayCalcError)

    def test_zero_rate_is_valid(self):
        assert _params(annual_rate=0).annual_rate == 0

    def test_none_prepayment_amount_means_zero(self):
        assert _params(prepayment_amount=None).prepayment_amount == Decimal("0")

    def test_has_prepayment_needs_dates_and_amount(self):
        first = date(2024, 1, 1)
        when = date(2024, 6, 1)
        assert _params(first_period_date=first, prepayment_date=when, prepayment_amount=1).has_prepayment
        assert not _params(prepayment_date=when, prepayment_amount=1).has_prepayment
        assert not _params(first_period_date=first, prepayment_amount=1).has_prepayment
        assert not _params(first_period_date=first, prepayment_date=when).has_prepayment

    def test_without_prepayment(self):
        params = _params(
            first_period_date=date(2024, 1, 1),
            prepayment_date=date(2024, 6, 1),
            prepayment_amount=1000,
        )
        baseline = params.without_prepayment()
        assert not baseline.has_prepayment
        assert baseline.first_period_date == params.first_period_date
        assert baseline.principal == params.principal

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            _params().principal = Decimal("1")


@pytest.mark.parametrize(
    "obj",
    [
        data_models.ScheduleTag,
        data_models.ScheduleResult,
        data_models.ComparisonResult,
        payments.PaymentPlan,
        payments.PaymentCalculator,
        payments.calculator_for,
        formatter.money,
        formatter.record_to_dict,
        formatter.summary_to_dict,
        formatter.schedule_to_dict,
        formatter.comparison_to_dict,
        main.build_parameters_from_options,
        main.export_to_json,
    ],
    ids=lambda obj: obj.__qualname__,
)
def test_public_api_is_documented(obj):
    doc = obj.__doc__ or ""
    assert doc.strip()
    # dataclasses fill in a signature when no docstring is written
    assert not doc.startswith(f"{obj.__name__}(")
