"""Command-line interface for the prepayment calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute a single amortization schedule or compare the
original schedule with the one produced by a lump-sum prepayment. Results can
be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

import click

from .comparison import compare as compare_schedules
from .data_models import AmortizationMethod, LoanParameters, ScheduleResult
from .engine import build_schedule
from .errors import PrepayCalcError
from .formatter import (
    comparison_to_dict,
    print_chart,
    print_comparison,
    print_merged,
    print_schedule,
    print_summary,
    schedule_to_dict,
)
from .utils import decimal_from_str, parse_date

AMOUNT_SUFFIXES = {
    "k": Decimal("1000"),
    "w": Decimal("10000"),  # ten-thousand units
    "m": Decimal("1000000"),
}


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000") and shorthand with ``k``/``w``/``m``
    suffixes (e.g., "500k" meaning 500_000, "100w" meaning 1_000_000).
    """
    value = value.strip().lower().replace(",", "")
    factor = Decimal("1")
    if value and value[-1] in AMOUNT_SUFFIXES:
        factor = AMOUNT_SUFFIXES[value[-1]]
        value = value[:-1]
    try:
        return decimal_from_str(value) * factor
    except PrepayCalcError:
        raise click.BadParameter(f"Invalid amount: {value}")


def build_parameters_from_options(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    method: str,
    first_date: Optional[str],
    prepayment_date: Optional[str],
    prepayment_amount: Optional[str],
) -> LoanParameters:
    """Convert raw command-line option values into ``LoanParameters``."""
    if term is None and years is None:
        raise click.UsageError("Either --term or --years is required")
    if term is not None and years is not None:
        raise click.UsageError("Use only one of --term and --years")
    term_months = term if term is not None else years * 12
    try:
        return LoanParameters(
            principal=parse_amount(principal),
            annual_rate=Decimal(str(rate)),
            term_months=term_months,
            method=AmortizationMethod.parse(method),
            first_period_date=parse_date(first_date) if first_date else None,
            prepayment_date=parse_date(prepayment_date) if prepayment_date else None,
            prepayment_amount=parse_amount(prepayment_amount) if prepayment_amount else Decimal("0"),
        )
    except PrepayCalcError as exc:
        raise click.BadParameter(str(exc))


def loan_options(func: Callable) -> Callable:
    """Attach the loan parameter options shared by every command."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount (suffixes k, w, m allowed)"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", type=int, help="Loan term in months"),
        click.option("--years", "-y", "years", type=int, help="Loan term in years"),
        click.option(
            "--method",
            "method",
            type=click.Choice([m.value for m in AmortizationMethod]),
            default=AmortizationMethod.EQUAL_PRINCIPAL.value,
            help="Amortization method",
        ),
        click.option("--first-date", "-s", "first_date", help="First payment date (YYYY-MM-DD or YYYY-MM)"),
        click.option("--prepayment-date", "prepayment_date", help="Prepayment date (YYYY-MM-DD or YYYY-MM)"),
        click.option("--prepayment-amount", "prepayment_amount", help="Lump-sum prepayment amount"),
        click.option("--max-rows", "max_rows", type=int, default=120, show_default=True, help="Rows printed to the terminal"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def export_schedule_to_csv(path: Path, schedule: ScheduleResult) -> None:
    """Export schedule records to a CSV file."""
    header = [
        "Period",
        "Label",
        "Payment",
        "Interest",
        "Principal",
        "Prepayment",
        "Remaining_Principal",
        "Prepayment_Period",
    ]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for r in schedule.records:
            writer.writerow(
                [
                    r.index,
                    r.label,
                    f"{r.payment:.2f}",
                    f"{r.interest:.2f}",
                    f"{r.principal:.2f}",
                    f"{r.prepayment:.2f}",
                    f"{r.remaining_principal:.2f}",
                    r.is_prepayment_period,
                ]
            )


def export_to_json(path: Path, data: dict) -> None:
    """Export a schedule or comparison dictionary to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A command-line loan calculator modelling a lump-sum prepayment."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    method: str,
    first_date: Optional[str],
    prepayment_date: Optional[str],
    prepayment_amount: Optional[str],
    max_rows: int,
    output: Optional[str],
) -> None:
    """Compute and print one amortization schedule.

    The prepayment is applied when --prepayment-date and
    --prepayment-amount are given together with --first-date.
    """
    params = build_parameters_from_options(
        principal, rate, term, years, method, first_date, prepayment_date, prepayment_amount
    )
    result = build_schedule(params)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, schedule_to_dict(result))
        elif path.suffix.lower() == ".csv":
            export_schedule_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return
    print_summary(result)
    if len(result) > max_rows:
        click.echo(f"Schedule has {len(result)} rows; showing first {max_rows} rows.")
    print_schedule(result.records[:max_rows])


@cli.command()
@loan_options
@click.option("--chart", "chart", is_flag=True, help="Print the remaining balance series instead of the table")
@click.option("--output", "output", type=str, help="Output file path (.json)")
def compare(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    method: str,
    first_date: Optional[str],
    prepayment_date: Optional[str],
    prepayment_amount: Optional[str],
    max_rows: int,
    chart: bool,
    output: Optional[str],
) -> None:
    """Compare the original schedule with the prepayment schedule.

    Example:

        prepay-calc compare -p 100w -r 3.5 -y 30 --method equal-installment
        -s 2024-01-01 --prepayment-date 2025-01-01 --prepayment-amount 10w
    """
    params = build_parameters_from_options(
        principal, rate, term, years, method, first_date, prepayment_date, prepayment_amount
    )
    result = compare_schedules(params)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Comparison export must use .json extension")
        export_to_json(path, comparison_to_dict(result))
        click.echo(f"Comparison exported to {path}")
        return
    print_summary(result.baseline, title="Original schedule")
    print_summary(result.with_prepayment, title="Prepayment schedule")
    print_comparison(result)
    if chart:
        print_chart(result)
        return
    merged = result.merged
    if len(merged) > max_rows:
        click.echo(f"Comparison has {len(merged)} rows; showing first {max_rows} rows.")
    print_merged(merged[:max_rows])


if __name__ == "__main__":
    cli()
