from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from .calculator.base import WorkUnitCalculator
from .calculator.standard_calculator import StandardWorkUnitCalculator
from .model import ShiftEntry, WorkUnitResult


class WorklogAggregator:
    """Sums work units across one order's shift entries.

    Entries carrying cached values are summed as stored; the rest are
    computed on the fly. Duplicates are summed twice.
    """

    def __init__(self, calculator: Optional[WorkUnitCalculator] = None):
        self._calculator = calculator or StandardWorkUnitCalculator()

    def result_for(self, entry: ShiftEntry) -> WorkUnitResult:
        if entry.work_units is not None and entry.effective_minutes is not None:
            return WorkUnitResult(effective_minutes=int(entry.effective_minutes), work_units=Decimal(entry.work_units))
        return self._calculator.for_entry(entry)

    def total_work_units(self, entries: Iterable[ShiftEntry]) -> Decimal:
        return sum((self.result_for(e).work_units for e in entries), Decimal(0))

    def total_effective_minutes(self, entries: Iterable[ShiftEntry]) -> int:
        return sum(self.result_for(e).effective_minutes for e in entries)
