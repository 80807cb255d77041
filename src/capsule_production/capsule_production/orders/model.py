from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from ..core.enums import ProductionStatus, SortOrder
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..worklogs.model import ShiftEntry


@dataclass(frozen=True)
class ProductionOrder:
    """Domain entity: a capsule production order (fields the engine reads).

    Dates come from storage and may occasionally be malformed strings; the
    prioritizer tolerates that.
    """

    order_id: int
    customer_name: str
    product_name: str
    production_quantity: int
    created_at: Union[datetime, str, None]
    completion_date: Union[date, str, None] = None
    worklogs: tuple[ShiftEntry, ...] = ()
    created_by: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return bool(self.completion_date)

    @property
    def has_worklog(self) -> bool:
        return len(self.worklogs) > 0


@dataclass(frozen=True)
class RankedOrder:
    """Order annotated with derived status and totals."""

    order: ProductionOrder
    status: ProductionStatus
    total_work_units: Decimal
    total_effective_minutes: int = 0
    sort_date: Optional[datetime] = None
    degraded: bool = False


@dataclass(frozen=True)
class OrderQuery:
    """Explicit filter/sort/paging parameters for the order list."""

    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = DEFAULT_PAGE_LIMIT
    customer_name: Optional[str] = None
    product_name: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    is_completed: Optional[bool] = None
