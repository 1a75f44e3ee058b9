"""Output helpers for the prepayment calculator.

This module renders schedules, summaries and comparisons as plain text
tables and converts them into JSON-serialisable structures for exports and
charts. Amounts are shown with two fractional digits and thousands grouping;
locale specific formatting is left to richer front ends.
"""

from __future__ import annotations

from decimal import Decimal
from itertools import zip_longest
from typing import Any, Dict, Iterable, List

from .data_models import ComparisonResult, MergedRecord, PeriodRecord, ScheduleResult


def money(value: Decimal) -> str:
    """Format an amount with two decimals and thousands grouping."""
    return f"{value:,.2f}"


def record_to_dict(record: PeriodRecord) -> Dict[str, Any]:
    """Convert a period record into a JSON-serialisable dictionary."""
    return {
        "index": record.index,
        "label": record.label,
        "payment": float(record.payment),
        "interest": float(record.interest),
        "principal": float(record.principal),
        "remaining_principal": float(record.remaining_principal),
        "prepayment": float(record.prepayment),
        "is_prepayment_period": record.is_prepayment_period,
    }


def summary_to_dict(schedule: ScheduleResult) -> Dict[str, Any]:
    """Return the headline figures of a schedule as a dictionary."""
    return {
        "method": schedule.method.value,
        "periods": schedule.periods,
        "initial_payment": float(schedule.initial_payment),
        "total_payment": float(schedule.total_payment),
        "total_interest": float(schedule.total_interest),
        "total_prepayment": float(schedule.total_prepayment),
        "final_period": schedule.final_label,
        "prepayment_status": schedule.prepayment_status.value,
        "prepayment_period": schedule.prepayment_period,
    }


def schedule_to_dict(schedule: ScheduleResult) -> Dict[str, Any]:
    """Return a schedule summary together with all of its records."""
    return {
        "summary": summary_to_dict(schedule),
        "schedule": [record_to_dict(r) for r in schedule.records],
    }


def chart_series(comparison: ComparisonResult) -> List[Dict[str, Any]]:
    """Pair the remaining balance of both schedules by period label.

    A value is ``None`` once its schedule has ended.
    """
    series = []
    for original, prepaid in zip_longest(comparison.baseline.records, comparison.with_prepayment.records):
        anchor = original or prepaid
        series.append(
            {
                "label": anchor.label,
                "original": float(original.remaining_principal) if original else None,
                "prepayment": float(prepaid.remaining_principal) if prepaid else None,
            }
        )
    return series


def comparison_to_dict(comparison: ComparisonResult) -> Dict[str, Any]:
    """Serialise both schedules, the merged table, the savings and the chart."""
    return {
        "baseline": schedule_to_dict(comparison.baseline),
        "with_prepayment": schedule_to_dict(comparison.with_prepayment),
        "merged": [dict(record_to_dict(m.record), type=m.tag.value) for m in comparison.merged],
        "interest_saved": float(comparison.interest_saved),
        "months_saved": comparison.months_saved,
        "chart": chart_series(comparison),
    }


def print_summary(schedule: ScheduleResult, title: str = "Summary") -> None:
    """Print the headline figures of a schedule in a human-readable format."""
    print(title)
    print("-" * 72)
    print(f"Method             : {schedule.method.value}")
    print(f"Periods            : {schedule.periods}")
    print(f"First payment      : {money(schedule.initial_payment)}")
    print(f"Total paid         : {money(schedule.total_payment)}")
    print(f"Total interest     : {money(schedule.total_interest)}")
    if schedule.total_prepayment:
        print(f"Prepayment         : {money(schedule.total_prepayment)}")
        print(f"Prepayment period  : {schedule.prepayment_period}")
    print(f"Prepayment status  : {schedule.prepayment_status.value}")
    print(f"Final period       : {schedule.final_label}")
    print("-" * 72)


def _row(record: PeriodRecord) -> List[str]:
    return [
        str(record.index),
        record.label,
        money(record.payment),
        money(record.interest),
        money(record.principal),
        money(record.prepayment),
        money(record.remaining_principal),
    ]


def print_schedule(records: Iterable[PeriodRecord]) -> None:
    """Print schedule records as a tab separated table.

    The prepayment period is flagged with ``*`` in the last column.
    """
    headers = ["Period", "Label", "Payment", "Interest", "Principal", "Prepay", "Remaining", ""]
    print("\t".join(headers))
    for record in records:
        row = _row(record)
        row.append("*" if record.is_prepayment_period else "")
        print("\t".join(row))


def print_merged(merged: Iterable[MergedRecord]) -> None:
    """Print a merged comparison table, one row per schedule per period."""
    headers = ["Period", "Label", "Type", "Payment", "Interest", "Principal", "Prepay", "Remaining"]
    print("\t".join(headers))
    for item in merged:
        row = _row(item.record)
        row.insert(2, item.tag.value + ("*" if item.record.is_prepayment_period else ""))
        print("\t".join(row))


def print_comparison(comparison: ComparisonResult) -> None:
    """Print both schedules' summaries side by side with the savings.

    A negative difference means the prepayment schedule is cheaper or
    shorter.
    """
    baseline = comparison.baseline
    prepaid = comparison.with_prepayment
    print("Comparison")
    print("=" * 72)
    print(f"{'Metric':20s} {'Original':>15s} {'Prepayment':>15s} {'Difference':>15s}")
    rows = [
        ("total_payment", baseline.total_payment, prepaid.total_payment + prepaid.total_prepayment),
        ("total_interest", baseline.total_interest, prepaid.total_interest),
    ]
    for key, v1, v2 in rows:
        print(f"{key:20s} {v1:15,.2f} {v2:15,.2f} {v2 - v1:15,.2f}")
    print(f"{'periods':20s} {baseline.periods:15d} {prepaid.periods:15d} {prepaid.periods - baseline.periods:15d}")
    print("=" * 72)
    print(f"Interest saved     : {money(comparison.interest_saved)}")
    if comparison.months_saved:
        print(f"Term reduction     : {comparison.months_saved} months")


def print_chart(comparison: ComparisonResult) -> None:
    """Print the remaining-balance series of both schedules."""
    print(f"{'Label':12s} {'Original':>15s} {'Prepayment':>15s}")
    for point in chart_series(comparison):
        original = "" if point["original"] is None else f"{point['original']:,.2f}"
        prepaid = "" if point["prepayment"] is None else f"{point['prepayment']:,.2f}"
        print(f"{point['label']:12s} {original:>15s} {prepaid:>15s}")
