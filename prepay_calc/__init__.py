"""Loan amortization schedules with a single lump-sum prepayment."""

from .comparison import compare
from .data_models import AmortizationMethod, LoanParameters
from .engine import build_schedule
from .errors import InvalidParameter, PrepayCalcError

__all__ = [
    "AmortizationMethod",
    "InvalidParameter",
    "LoanParameters",
    "PrepayCalcError",
    "build_schedule",
    "compare",
]
