from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.datetime_utils import to_business_date, to_business_datetime
from ..common.pagination import Page, paginate
from ..common.query_params import parse_bool, parse_date, parse_limit, parse_page, parse_sort_order, parse_text
from ..core.constants import DEFAULT_PAGE_LIMIT, HOME_DISPLAY_LIMIT, RANKING_SOFT_LIMIT
from ..core.enums import SortOrder
from ..core.exceptions import NotFoundError
from ..worklogs.model import WorklogQuery, WorklogRow
from ..worklogs.repository import WorklogRepository
from ..worklogs.service import entry_to_api
from .model import OrderQuery, RankedOrder
from .prioritizer import OrderPrioritizer
from .repository import OrderRepository

logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "created_date",
    "customer_name",
    "product_name",
    "production_quantity",
    "completion_date",
    "status",
    "total_work_units",
]


@dataclass(frozen=True)
class HomeSummary:
    orders: list[RankedOrder]
    worklogs: list[WorklogRow]


def parse_order_query(params: Mapping[str, Any]) -> OrderQuery:
    return OrderQuery(
        sort_order=parse_sort_order(params),
        page=parse_page(params),
        limit=parse_limit(params, default=DEFAULT_PAGE_LIMIT),
        customer_name=parse_text(params, "customerName"),
        product_name=parse_text(params, "productName"),
        date_from=parse_date(params, "dateFrom"),
        date_to=parse_date(params, "dateTo"),
        is_completed=parse_bool(params, "isCompleted"),
    )


class OrderService:
    """Order list, detail, home summary and export over one ranking engine."""

    def __init__(
        self,
        orders: OrderRepository,
        worklogs: Optional[WorklogRepository] = None,
        *,
        prioritizer: Optional[OrderPrioritizer] = None,
        ranking_soft_limit: int = RANKING_SOFT_LIMIT,
    ):
        self._orders = orders
        self._worklogs = worklogs
        self._prioritizer = prioritizer or OrderPrioritizer()
        self._ranking_soft_limit = int(ranking_soft_limit)

    def _ranked(self, query: OrderQuery) -> list[RankedOrder]:
        candidates = self._orders.list_candidates(
            customer_name=query.customer_name,
            product_name=query.product_name,
            date_from=query.date_from,
            date_to=query.date_to,
            is_completed=query.is_completed,
        )
        # Status priority is not a stored column: the full filtered set is ranked in memory.
        if len(candidates) > self._ranking_soft_limit:
            logger.warning(
                "Ranking %d orders in memory (soft limit %d); consider a stored status rank",
                len(candidates),
                self._ranking_soft_limit,
            )
        return self._prioritizer.rank(candidates, query.sort_order)

    def list_orders(self, query: OrderQuery) -> Page[RankedOrder]:
        return paginate(self._ranked(query), page=query.page, limit=query.limit)

    def get_order(self, order_id: int) -> RankedOrder:
        order = self._orders.get_by_id(int(order_id))
        if not order:
            raise NotFoundError("Order not found")
        return self._prioritizer.annotate(order)

    def home_summary(self, *, limit: int = HOME_DISPLAY_LIMIT) -> HomeSummary:
        top = self.list_orders(OrderQuery(sort_order=SortOrder.DESC, page=1, limit=limit)).items
        recent: list[WorklogRow] = []
        if self._worklogs is not None:
            recent = list(self._worklogs.search(WorklogQuery(sort_order="desc"), offset=0, limit=limit))
        return HomeSummary(orders=top, worklogs=recent)

    def export_rows(self, query: OrderQuery) -> list[dict]:
        rows = []
        for r in self._ranked(query):
            created = to_business_date(r.order.created_at)
            completed = to_business_date(r.order.completion_date)
            rows.append(
                {
                    "created_date": created.strftime("%Y-%m-%d") if created else "",
                    "customer_name": r.order.customer_name,
                    "product_name": r.order.product_name,
                    "production_quantity": r.order.production_quantity,
                    "completion_date": completed.strftime("%Y-%m-%d") if completed else "",
                    "status": r.status.value,
                    "total_work_units": f"{r.total_work_units:.1f}",
                }
            )
        return rows


def to_api(ranked: RankedOrder, *, include_worklogs: bool = False) -> dict:
    order = ranked.order
    created = to_business_datetime(order.created_at)
    completed = to_business_date(order.completion_date)
    data = {
        "id": order.order_id,
        "customerName": order.customer_name,
        "productName": order.product_name,
        "productionQuantity": order.production_quantity,
        "createdAt": created.isoformat() if created else None,
        "completionDate": completed.strftime("%Y-%m-%d") if completed else None,
        "createdBy": order.created_by,
        "status": ranked.status.value,
        "totalWorkUnits": float(ranked.total_work_units),
        "worklogCount": len(order.worklogs),
    }
    if include_worklogs:
        data["totalEffectiveMinutes"] = ranked.total_effective_minutes
        data["worklogs"] = [
            entry_to_api(e) for e in sorted(order.worklogs, key=lambda e: (e.work_date, e.start_time))
        ]
    return data
