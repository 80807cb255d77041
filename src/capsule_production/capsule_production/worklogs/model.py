from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class WorkUnitResult:
    """Derived output of the calculator; cached alongside the shift entry."""

    effective_minutes: int
    work_units: Decimal


@dataclass(frozen=True)
class ShiftEntry:
    """Domain entity: one day's worked shift logged against an order."""

    worklog_id: Optional[int]
    order_id: int
    work_date: date
    start_time: time
    end_time: time
    headcount: int
    notes: Optional[str] = None
    effective_minutes: Optional[int] = None
    work_units: Optional[Decimal] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ShiftEntryInput:
    """Validated form payload, safe to hand to the calculator."""

    work_date: date
    start_time: time
    end_time: time
    headcount: int
    notes: Optional[str] = None


@dataclass(frozen=True)
class WorklogRow:
    """Read-model for list screens and export: entry plus its order's names."""

    entry: ShiftEntry
    product_name: Optional[str]
    customer_name: Optional[str]


@dataclass(frozen=True)
class WorklogQuery:
    """Explicit filter/sort/paging parameters for the worklog list."""

    order_keyword: Optional[str] = None
    notes_keyword: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    sort_order: str = "desc"
    page: int = 1
    limit: int = 25
