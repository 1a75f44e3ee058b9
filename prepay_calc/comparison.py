"""Baseline versus prepayment comparison.

``compare`` runs the schedule engine twice for the same loan (once ignoring
the prepayment, once applying it) and interleaves the two results period by
period for side-by-side display.
"""

from __future__ import annotations

import logging
from itertools import zip_longest
from typing import List, Optional

from .data_models import ComparisonResult, LoanParameters, MergedRecord, ScheduleResult, ScheduleTag
from .engine import build_schedule
from .periods import PeriodCalendar

logger = logging.getLogger(__name__)


def merge_schedules(baseline: ScheduleResult, with_prepayment: ScheduleResult) -> List[MergedRecord]:
    """Interleave two schedules period by period.

    Each baseline record is followed by the prepayment record of the same
    period. Once the shorter schedule runs out, the remaining records of the
    longer one follow on their own.
    """
    merged: List[MergedRecord] = []
    for original, prepaid in zip_longest(baseline.records, with_prepayment.records):
        if original is not None:
            merged.append(MergedRecord(ScheduleTag.ORIGINAL, original))
        if prepaid is not None:
            merged.append(MergedRecord(ScheduleTag.PREPAYMENT, prepaid))
    return merged


def compare(params: LoanParameters, *, calendar: Optional[PeriodCalendar] = None) -> ComparisonResult:
    """Compute the baseline and prepayment schedules for ``params``."""
    baseline = build_schedule(params.without_prepayment(), calendar=calendar)
    with_prepayment = build_schedule(params, calendar=calendar)
    result = ComparisonResult(
        baseline=baseline,
        with_prepayment=with_prepayment,
        merged=tuple(merge_schedules(baseline, with_prepayment)),
    )
    logger.debug(
        "Compared %d baseline periods with %d prepayment periods (prepayment %s)",
        baseline.periods,
        with_prepayment.periods,
        with_prepayment.prepayment_status.value,
    )
    return result
