from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern
from ..worklogs.model import ShiftEntry
from ..worklogs.mysql_worklog_repository import row_to_entry
from .model import ProductionOrder
from .repository import OrderRepository

_COLUMNS = """
    o.order_id, o.customer_name, o.product_name, o.production_quantity,
    o.completion_date, o.created_at, o.created_by
"""


class MySQLOrderRepository(OrderRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, order_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM production_orders WHERE order_id=%s", (int(order_id),))
            return fetchone(cur) is not None

    def get_by_id(self, order_id: int) -> Optional[ProductionOrder]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM production_orders o WHERE o.order_id=%s", (int(order_id),))
            r = fetchone(cur)
            if not r:
                return None
            worklogs = self._worklogs_for(cur, [int(r["order_id"])])
            return self._to_order(r, worklogs.get(int(r["order_id"]), []))

    def list_candidates(
        self,
        *,
        customer_name: Optional[str] = None,
        product_name: Optional[str] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        is_completed: Optional[bool] = None,
    ) -> Sequence[ProductionOrder]:
        clauses = ["1=1"]
        params: list[Any] = []

        if customer_name:
            clauses.append("LOWER(o.customer_name) LIKE LOWER(%s)")
            params.append(like_pattern(customer_name))
        if product_name:
            clauses.append("LOWER(o.product_name) LIKE LOWER(%s)")
            params.append(like_pattern(product_name))
        if date_from:
            clauses.append("o.created_at >= %s")
            params.append(datetime.combine(date_from, time.min))
        if date_to:
            clauses.append("o.created_at < %s")
            params.append(datetime.combine(date_to + timedelta(days=1), time.min))
        if is_completed is True:
            clauses.append("o.completion_date IS NOT NULL")
        elif is_completed is False:
            clauses.append("o.completion_date IS NULL")

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM production_orders o WHERE {where}", tuple(params))
            rows = fetchall(cur)
            worklogs = self._worklogs_for(cur, [int(r["order_id"]) for r in rows])
            return [self._to_order(r, worklogs.get(int(r["order_id"]), [])) for r in rows]

    @staticmethod
    def _worklogs_for(cur, order_ids: list[int]) -> dict[int, list[ShiftEntry]]:
        grouped: dict[int, list[ShiftEntry]] = defaultdict(list)
        if not order_ids:
            return grouped

        placeholders = ",".join(["%s"] * len(order_ids))
        cur.execute(
            f"""
            SELECT w.worklog_id, w.order_id, w.work_date, w.start_time, w.end_time, w.headcount, w.notes,
                   w.effective_minutes, w.calculated_work_units, w.created_at
            FROM order_worklogs w
            WHERE w.order_id IN ({placeholders})
            ORDER BY w.work_date ASC, w.start_time ASC, w.worklog_id ASC
            """,
            tuple(order_ids),
        )
        for r in fetchall(cur):
            entry = row_to_entry(r)
            grouped[entry.order_id].append(entry)
        return grouped

    @staticmethod
    def _to_order(r: dict, worklogs: list[ShiftEntry]) -> ProductionOrder:
        return ProductionOrder(
            order_id=int(r["order_id"]),
            customer_name=r["customer_name"],
            product_name=r.get("product_name") or "",
            production_quantity=int(r.get("production_quantity") or 0),
            created_at=r.get("created_at"),
            completion_date=r.get("completion_date"),
            worklogs=tuple(worklogs),
            created_by=r.get("created_by"),
        )
