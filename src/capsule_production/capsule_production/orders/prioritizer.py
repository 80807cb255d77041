from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import EPOCH, to_business_datetime
from ..common.pagination import Page, paginate
from ..core.enums import ProductionStatus, SortOrder
from ..core.exceptions import DegradedOrderingWarning
from ..worklogs.aggregator import WorklogAggregator
from .model import ProductionOrder, RankedOrder

logger = logging.getLogger(__name__)

STATUS_PRIORITY: dict[ProductionStatus, int] = {
    ProductionStatus.IN_PROGRESS: 0,
    ProductionStatus.NOT_STARTED: 1,
    ProductionStatus.COMPLETED: 2,
}


def classify_status(*, has_worklog: bool, is_completed: bool) -> ProductionStatus:
    """Completion wins over logged work."""
    if is_completed:
        return ProductionStatus.COMPLETED
    if has_worklog:
        return ProductionStatus.IN_PROGRESS
    return ProductionStatus.NOT_STARTED


def order_status(order: ProductionOrder) -> ProductionStatus:
    return classify_status(has_worklog=order.has_worklog, is_completed=order.is_completed)


class OrderPrioritizer:
    """Ranks orders into production priority and windows the result.

    Status groups always come in the order inProgress, notStarted,
    completed. Within a group, completed orders sort by completion date and
    the others by creation date, in the requested direction. Ties keep input
    order. A missing or unparsable date sorts as the epoch.
    """

    def __init__(self, aggregator: Optional[WorklogAggregator] = None):
        self._aggregator = aggregator or WorklogAggregator()

    def annotate(self, order: ProductionOrder) -> RankedOrder:
        status = order_status(order)
        raw = order.completion_date if status == ProductionStatus.COMPLETED else order.created_at
        sort_date = to_business_datetime(raw)
        return RankedOrder(
            order=order,
            status=status,
            total_work_units=self._aggregator.total_work_units(order.worklogs),
            total_effective_minutes=self._aggregator.total_effective_minutes(order.worklogs),
            sort_date=sort_date,
            degraded=sort_date is None,
        )

    def rank(self, orders: Iterable[ProductionOrder], sort_order: SortOrder = SortOrder.DESC) -> list[RankedOrder]:
        ranked = [self.annotate(o) for o in orders]

        degraded = [r.order.order_id for r in ranked if r.degraded]
        if degraded:
            warning = DegradedOrderingWarning(f"orders {degraded} have no usable sort date, placed at epoch")
            logger.warning("%s: %s", type(warning).__name__, warning, extra={"ordering_warning": warning})

        # Two stable passes: secondary date in the requested direction, then status ascending.
        ranked.sort(key=_sort_timestamp, reverse=SortOrder(sort_order) == SortOrder.DESC)
        ranked.sort(key=lambda r: STATUS_PRIORITY[r.status])

        logger.debug("Ranked %d orders (sort_order=%s)", len(ranked), SortOrder(sort_order).value)
        return ranked

    def rank_page(
        self,
        orders: Iterable[ProductionOrder],
        *,
        sort_order: SortOrder = SortOrder.DESC,
        page: int = 1,
        limit: int = 10,
    ) -> Page[RankedOrder]:
        """Sort globally first, then take the page window."""
        return paginate(self.rank(orders, sort_order), page=page, limit=limit)


def _sort_timestamp(r: RankedOrder) -> float:
    value: datetime = r.sort_date or EPOCH
    return value.timestamp()
