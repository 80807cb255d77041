from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..common.datetime_utils import minutes_of_day
from ..common.pagination import Page, page_offset, total_pages
from ..common.query_params import parse_date, parse_limit, parse_page, parse_sort_order, parse_text
from ..common.validators import require_clock_time, require_date, require_max_length, require_positive_int
from ..core.constants import MAX_NOTES_LENGTH, WORKLOG_DEFAULT_LIMIT
from ..core.exceptions import InvalidShiftEntryError, NotFoundError, ValidationError
from ..orders.repository import OrderRepository
from .calculator.base import WorkUnitCalculator
from .calculator.standard_calculator import StandardWorkUnitCalculator
from .model import ShiftEntry, ShiftEntryInput, WorklogQuery, WorklogRow, WorkUnitResult
from .repository import WorklogRepository

logger = logging.getLogger(__name__)

EXPORT_HEADERS = ["work_date", "product_name", "customer_name", "start_time", "end_time", "headcount", "work_units", "notes"]


def validate_entry(form: Mapping[str, Any]) -> ShiftEntryInput:
    """Validate a shift entry form before it reaches the calculator.

    Shifts crossing midnight (end <= start) are rejected.
    """
    if not isinstance(form, Mapping):
        raise InvalidShiftEntryError("Shift entry must be an object with workDate, startTime, endTime and headcount")

    try:
        work_date = require_date(form.get("workDate"), "workDate")
        start_time = require_clock_time(form.get("startTime"), "startTime")
        end_time = require_clock_time(form.get("endTime"), "endTime")
        headcount = require_positive_int(form.get("headcount"), "headcount")
        notes = str(form.get("notes") or "").strip() or None
        require_max_length(notes, "notes", MAX_NOTES_LENGTH)
    except ValidationError as e:
        raise InvalidShiftEntryError(str(e)) from e

    if minutes_of_day(end_time) <= minutes_of_day(start_time):
        raise InvalidShiftEntryError("endTime must be after startTime on the same day")

    return ShiftEntryInput(work_date=work_date, start_time=start_time, end_time=end_time, headcount=headcount, notes=notes)


def parse_worklog_query(params: Mapping[str, Any]) -> WorklogQuery:
    return WorklogQuery(
        order_keyword=parse_text(params, "orderKeyword"),
        notes_keyword=parse_text(params, "notesKeyword"),
        date_from=parse_date(params, "dateFrom"),
        date_to=parse_date(params, "dateTo"),
        sort_order=parse_sort_order(params).value,
        page=parse_page(params),
        limit=parse_limit(params, default=WORKLOG_DEFAULT_LIMIT),
    )


class WorklogService:
    def __init__(
        self,
        worklogs: WorklogRepository,
        orders: OrderRepository,
        *,
        calculator: Optional[WorkUnitCalculator] = None,
    ):
        self._worklogs = worklogs
        self._orders = orders
        self._calculator = calculator or StandardWorkUnitCalculator()

    def _calculate(self, entry: ShiftEntryInput) -> WorkUnitResult:
        return self._calculator.calculate(
            work_date=entry.work_date,
            start_time=entry.start_time,
            end_time=entry.end_time,
            headcount=entry.headcount,
        )

    def preview(self, form: Mapping[str, Any]) -> WorkUnitResult:
        return self._calculate(validate_entry(form))

    def create(self, *, order_id: int, form: Mapping[str, Any]) -> ShiftEntry:
        if not self._orders.exists(int(order_id)):
            raise NotFoundError("Order not found")

        entry = validate_entry(form)
        result = self._calculate(entry)
        worklog_id = self._worklogs.create(order_id=int(order_id), entry=entry, result=result)
        logger.info(
            "Logged worklog %s for order %s: %s min, %s units",
            worklog_id,
            order_id,
            result.effective_minutes,
            result.work_units,
        )
        return self._stored(worklog_id, order_id=int(order_id), entry=entry, result=result)

    def update(self, *, worklog_id: int, form: Mapping[str, Any]) -> ShiftEntry:
        current = self._worklogs.get_by_id(int(worklog_id))
        if not current:
            raise NotFoundError("Worklog not found")

        entry = validate_entry(form)
        result = self._calculate(entry)
        if not self._worklogs.update(worklog_id=int(worklog_id), entry=entry, result=result):
            raise NotFoundError("Worklog not found")
        logger.info("Updated worklog %s: %s units", worklog_id, result.work_units)
        return self._stored(int(worklog_id), order_id=current.order_id, entry=entry, result=result)

    def delete(self, *, worklog_id: int) -> None:
        if not self._worklogs.delete(worklog_id=int(worklog_id)):
            raise NotFoundError("Worklog not found")
        logger.info("Deleted worklog %s", worklog_id)

    @staticmethod
    def _stored(worklog_id: int, *, order_id: int, entry: ShiftEntryInput, result: WorkUnitResult) -> ShiftEntry:
        return ShiftEntry(
            worklog_id=int(worklog_id),
            order_id=order_id,
            work_date=entry.work_date,
            start_time=entry.start_time,
            end_time=entry.end_time,
            headcount=entry.headcount,
            notes=entry.notes,
            effective_minutes=result.effective_minutes,
            work_units=result.work_units,
        )

    def list_worklogs(self, query: WorklogQuery) -> Page[WorklogRow]:
        # A single-column sort, so the window is pushed down to storage.
        total = self._worklogs.count(query)
        rows = self._worklogs.search(query, offset=page_offset(query.page, query.limit), limit=query.limit)
        return Page(
            items=list(rows),
            page=query.page,
            limit=query.limit,
            total=total,
            total_pages=total_pages(total, query.limit),
        )

    def export_rows(self, query: WorklogQuery) -> list[dict]:
        rows = []
        for row in self._worklogs.search(query):
            e = row.entry
            units = e.work_units if e.work_units is not None else self._calculator.for_entry(e).work_units
            rows.append(
                {
                    "work_date": e.work_date.strftime("%Y-%m-%d"),
                    "product_name": row.product_name or "-",
                    "customer_name": row.customer_name or "-",
                    "start_time": e.start_time.strftime("%H:%M"),
                    "end_time": e.end_time.strftime("%H:%M"),
                    "headcount": e.headcount,
                    "work_units": f"{units:.1f}",
                    "notes": e.notes or "",
                }
            )
        return rows


def entry_to_api(entry: ShiftEntry) -> dict:
    return {
        "id": entry.worklog_id,
        "orderId": entry.order_id,
        "workDate": entry.work_date.strftime("%Y-%m-%d"),
        "startTime": entry.start_time.strftime("%H:%M"),
        "endTime": entry.end_time.strftime("%H:%M"),
        "headcount": entry.headcount,
        "notes": entry.notes,
        "effectiveMinutes": entry.effective_minutes,
        "calculatedWorkUnits": float(entry.work_units) if entry.work_units is not None else None,
    }


def row_to_api(row: WorklogRow) -> dict:
    data = entry_to_api(row.entry)
    data["order"] = {"productName": row.product_name, "customerName": row.customer_name}
    return data
