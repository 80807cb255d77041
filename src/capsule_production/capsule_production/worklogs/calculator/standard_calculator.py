from __future__ import annotations

from datetime import date, time
from decimal import Decimal

from ...common.datetime_utils import minutes_of_day
from ...core.constants import BILLING_INCREMENT_MINUTES, LUNCH_END, LUNCH_START
from ..model import WorkUnitResult
from .base import WorkUnitCalculator


def lunch_overlap_minutes(start_time: time, end_time: time, *, lunch_start: time = LUNCH_START, lunch_end: time = LUNCH_END) -> int:
    """Minutes of the shift span that fall inside the lunch window."""
    overlap = min(minutes_of_day(end_time), minutes_of_day(lunch_end)) - max(
        minutes_of_day(start_time), minutes_of_day(lunch_start)
    )
    return max(overlap, 0)


def billable_hours(effective_minutes: int) -> Decimal:
    """Round worked minutes up to the next half hour, expressed in hours.

    0 minutes stays 0.
    """
    increments = -(-max(int(effective_minutes), 0) // BILLING_INCREMENT_MINUTES)
    return Decimal(increments * BILLING_INCREMENT_MINUTES) / Decimal(60)


class StandardWorkUnitCalculator(WorkUnitCalculator):
    """Standard rule: (end - start) - lunch overlap, rounded up to 0.5h, times headcount."""

    def __init__(self, *, lunch_start: time = LUNCH_START, lunch_end: time = LUNCH_END):
        self._lunch_start = lunch_start
        self._lunch_end = lunch_end

    def effective_minutes(self, start_time: time, end_time: time) -> int:
        raw = minutes_of_day(end_time) - minutes_of_day(start_time)
        raw -= lunch_overlap_minutes(start_time, end_time, lunch_start=self._lunch_start, lunch_end=self._lunch_end)
        return max(raw, 0)

    def calculate(self, *, work_date: date, start_time: time, end_time: time, headcount: int) -> WorkUnitResult:
        # work_date only anchors the business time zone; times are local wall-clock.
        minutes = self.effective_minutes(start_time, end_time)
        return WorkUnitResult(
            effective_minutes=minutes,
            work_units=billable_hours(minutes) * int(headcount),
        )
