from dataclasses import replace
from datetime import date
from decimal import Decimal

from prepay_calc.comparison import compare
from prepay_calc.formatter import (
    chart_series,
    comparison_to_dict,
    money,
    print_comparison,
    print_merged,
    print_summary,
    schedule_to_dict,
)


def _prepaid(small_loan):
    return compare(replace(small_loan, prepayment_date=date(2024, 6, 15), prepayment_amount=Decimal("20000")))


def test_money_groups_thousands():
    assert money(Decimal("1234567.891")) == "1,234,567.89"


class TestChartSeries:
    def test_pairs_by_label(self, small_loan):
        series = chart_series(_prepaid(small_loan))
        assert len(series) == 12
        assert series[0]["label"] == "2024-01"
        assert series[0]["original"] == series[0]["prepayment"]
        assert series[5]["prepayment"] == 0.0
        assert series[6]["prepayment"] is None
        assert series[11]["original"] == 0.0


class TestSerialization:
    def test_comparison_to_dict(self, small_loan):
        data = comparison_to_dict(_prepaid(small_loan))
        assert data["months_saved"] == 6
        assert data["with_prepayment"]["summary"]["prepayment_status"] == "clamped"
        assert data["with_prepayment"]["summary"]["prepayment_period"] == 6
        assert [row["type"] for row in data["merged"][:2]] == ["original", "prepayment"]
        assert len(data["chart"]) == 12

    def test_schedule_to_dict(self, small_loan):
        data = schedule_to_dict(compare(small_loan).baseline)
        assert data["summary"]["periods"] == 12
        assert data["summary"]["method"] == "equal-installment"
        assert data["schedule"][0]["payment"] == 860.66
        assert data["schedule"][-1]["remaining_principal"] == 0.0


class TestPrinting:
    def test_print_summary(self, small_loan, capsys):
        print_summary(compare(small_loan).baseline)
        out = capsys.readouterr().out
        assert "Periods            : 12" in out
        assert "First payment      : 860.66" in out

    def test_print_comparison_and_merged(self, small_loan, capsys):
        result = _prepaid(small_loan)
        print_comparison(result)
        print_merged(result.merged)
        out = capsys.readouterr().out
        assert "Term reduction     : 6 months" in out
        assert "prepayment*" in out
