from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, time

from ..model import ShiftEntry, WorkUnitResult


class WorkUnitCalculator(ABC):
    """Calculator interface (Strategy Pattern for labor billing)."""

    @abstractmethod
    def calculate(self, *, work_date: date, start_time: time, end_time: time, headcount: int) -> WorkUnitResult:
        raise NotImplementedError

    def for_entry(self, entry: ShiftEntry) -> WorkUnitResult:
        return self.calculate(
            work_date=entry.work_date,
            start_time=entry.start_time,
            end_time=entry.end_time,
            headcount=entry.headcount,
        )
