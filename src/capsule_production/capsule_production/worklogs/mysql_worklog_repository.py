from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import SortOrder
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, like_pattern, normalize_mysql_time, to_decimal
from .model import ShiftEntry, ShiftEntryInput, WorklogQuery, WorklogRow, WorkUnitResult
from .repository import WorklogRepository

_COLUMNS = """
    w.worklog_id, w.order_id, w.work_date, w.start_time, w.end_time, w.headcount, w.notes,
    w.effective_minutes, w.calculated_work_units, w.created_at
"""


def row_to_entry(r: dict) -> ShiftEntry:
    return ShiftEntry(
        worklog_id=int(r["worklog_id"]),
        order_id=int(r["order_id"]),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        headcount=int(r["headcount"]),
        notes=r.get("notes"),
        effective_minutes=int(r["effective_minutes"]) if r.get("effective_minutes") is not None else None,
        work_units=to_decimal(r.get("calculated_work_units")),
        created_at=r.get("created_at"),
    )


class MySQLWorklogRepository(WorklogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worklog_id: int) -> Optional[ShiftEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM order_worklogs w WHERE w.worklog_id=%s", (int(worklog_id),))
            r = fetchone(cur)
            return row_to_entry(r) if r else None

    def create(self, *, order_id: int, entry: ShiftEntryInput, result: WorkUnitResult) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO order_worklogs(
                    order_id, work_date, start_time, end_time, headcount, notes,
                    effective_minutes, calculated_work_units
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(order_id),
                    entry.work_date,
                    entry.start_time,
                    entry.end_time,
                    entry.headcount,
                    entry.notes,
                    result.effective_minutes,
                    result.work_units,
                ),
            )
            return int(cur.lastrowid)

    def update(self, *, worklog_id: int, entry: ShiftEntryInput, result: WorkUnitResult) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE order_worklogs
                SET work_date=%s, start_time=%s, end_time=%s, headcount=%s, notes=%s,
                    effective_minutes=%s, calculated_work_units=%s
                WHERE worklog_id=%s
                """,
                (
                    entry.work_date,
                    entry.start_time,
                    entry.end_time,
                    entry.headcount,
                    entry.notes,
                    result.effective_minutes,
                    result.work_units,
                    int(worklog_id),
                ),
            )
            return cur.rowcount > 0

    def delete(self, *, worklog_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM order_worklogs WHERE worklog_id=%s", (int(worklog_id),))
            return cur.rowcount > 0

    @staticmethod
    def _where(query: WorklogQuery) -> tuple[str, list[Any]]:
        clauses = ["1=1"]
        params: list[Any] = []

        if query.order_keyword:
            clauses.append("(LOWER(o.product_name) LIKE LOWER(%s) OR LOWER(o.customer_name) LIKE LOWER(%s))")
            pattern = like_pattern(query.order_keyword)
            params.extend([pattern, pattern])
        if query.notes_keyword:
            clauses.append("LOWER(w.notes) LIKE LOWER(%s)")
            params.append(like_pattern(query.notes_keyword))
        if query.date_from:
            clauses.append("w.work_date >= %s")
            params.append(query.date_from)
        if query.date_to:
            clauses.append("w.work_date <= %s")
            params.append(query.date_to)

        return " AND ".join(clauses), params

    def search(
        self,
        query: WorklogQuery,
        *,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Sequence[WorklogRow]:
        where, params = self._where(query)
        direction = "ASC" if SortOrder(query.sort_order) == SortOrder.ASC else "DESC"
        sql = f"""
            SELECT {_COLUMNS}, o.product_name, o.customer_name
            FROM order_worklogs w
            LEFT JOIN production_orders o ON o.order_id = w.order_id
            WHERE {where}
            ORDER BY w.work_date {direction}, w.start_time {direction}, w.worklog_id {direction}
        """
        if limit is not None:
            sql += " LIMIT %s OFFSET %s"
            params.extend([int(limit), int(offset or 0)])

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                WorklogRow(entry=row_to_entry(r), product_name=r.get("product_name"), customer_name=r.get("customer_name"))
                for r in fetchall(cur)
            ]

    def count(self, query: WorklogQuery) -> int:
        where, params = self._where(query)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(*) AS total
                FROM order_worklogs w
                LEFT JOIN production_orders o ON o.order_id = w.order_id
                WHERE {where}
                """,
                tuple(params),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
