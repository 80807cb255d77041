from __future__ import annotations

import logging
from datetime import date, datetime, time
from decimal import Decimal

import pytest

from src.capsule_production.capsule_production.core.enums import ProductionStatus, SortOrder
from src.capsule_production.capsule_production.core.exceptions import InvalidQueryError, NotFoundError
from src.capsule_production.capsule_production.orders.model import OrderQuery
from src.capsule_production.capsule_production.orders.service import OrderService, parse_order_query, to_api
from tests.fakes import InMemoryOrders, InMemoryStore, InMemoryWorklogs, make_entry, make_order


def _store():
    return InMemoryStore(
        [
            make_order(1, customer_name="Alpha", created_at=datetime(2025, 1, 1), completion_date=date(2025, 1, 10)),
            make_order(2, customer_name="Beta", created_at=datetime(2025, 1, 2)),
            make_order(
                3,
                customer_name="Alpha",
                created_at=datetime(2025, 1, 3),
                worklogs=(
                    make_entry(3, worklog_id=10, work_date=date(2025, 1, 4), headcount=2),
                    make_entry(3, worklog_id=11, work_date=date(2025, 1, 3), start=time(13, 0), end=time(14, 0)),
                ),
            ),
            make_order(4, customer_name="Gamma", created_at=datetime(2025, 1, 4)),
        ]
    )


def test_list_orders_ranks_then_windows():
    store = _store()
    svc = OrderService(InMemoryOrders(store))

    page = svc.list_orders(OrderQuery(sort_order=SortOrder.DESC, page=1, limit=2))

    assert [r.order.order_id for r in page.items] == [3, 4]
    assert page.items[0].status == ProductionStatus.IN_PROGRESS
    assert page.items[0].total_work_units == Decimal("14.5")
    assert page.meta() == {"page": 1, "limit": 2, "total": 4, "totalPages": 2}

    second = svc.list_orders(OrderQuery(sort_order=SortOrder.DESC, page=2, limit=2))
    assert [r.order.order_id for r in second.items] == [2, 1]


def test_list_orders_forwards_filters():
    orders = InMemoryOrders(_store())
    svc = OrderService(orders)

    page = svc.list_orders(OrderQuery(customer_name="alpha", is_completed=False))

    assert orders.last_args["customer_name"] == "alpha"
    assert orders.last_args["is_completed"] is False
    assert [r.order.order_id for r in page.items] == [3]
    assert page.total == 1


def test_get_order_annotates_totals():
    svc = OrderService(InMemoryOrders(_store()))

    ranked = svc.get_order(3)

    assert ranked.status == ProductionStatus.IN_PROGRESS
    assert ranked.total_effective_minutes == 420 + 30
    data = to_api(ranked, include_worklogs=True)
    assert data["totalWorkUnits"] == 14.5
    assert [w["id"] for w in data["worklogs"]] == [11, 10]


def test_get_order_missing():
    with pytest.raises(NotFoundError):
        OrderService(InMemoryOrders(_store())).get_order(42)


def test_home_summary_uses_priority_order_and_recent_worklogs():
    store = _store()
    svc = OrderService(InMemoryOrders(store), InMemoryWorklogs(store))

    summary = svc.home_summary(limit=3)

    assert [r.order.order_id for r in summary.orders] == [3, 4, 2]
    assert [w.entry.worklog_id for w in summary.worklogs] == [10, 11]


def test_export_rows_cover_all_orders_in_priority_order():
    svc = OrderService(InMemoryOrders(_store()))

    rows = svc.export_rows(OrderQuery(limit=1))

    assert [r["status"] for r in rows] == ["inProgress", "notStarted", "notStarted", "completed"]
    assert rows[0]["total_work_units"] == "14.5"
    assert rows[-1]["completion_date"] == "2025-01-10"
    assert rows[-1]["created_date"] == "2025-01-01"


def test_large_candidate_set_logs_warning(caplog):
    store = InMemoryStore([make_order(i, created_at=datetime(2025, 1, 1)) for i in range(1, 6)])
    svc = OrderService(InMemoryOrders(store), ranking_soft_limit=3)

    with caplog.at_level(logging.WARNING):
        page = svc.list_orders(OrderQuery(limit=2))

    assert page.total == 5
    assert "soft limit 3" in caplog.text


def test_parse_order_query_defaults_and_values():
    assert parse_order_query({}) == OrderQuery()

    query = parse_order_query(
        {"sortOrder": "ASC", "page": "3", "limit": "20", "customerName": " Alpha ", "isCompleted": "true", "dateFrom": "2025-01-01"}
    )

    assert query.sort_order == SortOrder.ASC
    assert query.page == 3
    assert query.limit == 20
    assert query.customer_name == "Alpha"
    assert query.is_completed is True
    assert query.date_from == date(2025, 1, 1)


@pytest.mark.parametrize(
    "params",
    [
        {"page": "0"},
        {"limit": "101"},
        {"limit": "abc"},
        {"sortOrder": "sideways"},
        {"isCompleted": "maybe"},
        {"dateTo": "01/02/2025"},
    ],
)
def test_parse_order_query_rejects_bad_params(params):
    with pytest.raises(InvalidQueryError):
        parse_order_query(params)
