from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import format_work_date, now_local
from ..common.http import json_error, json_success, write_csv_response
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from ..worklogs.service import row_to_api
from .service import EXPORT_HEADERS, parse_order_query, to_api

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/orders", methods=["GET"], endpoint="api_orders")
    def list_orders():
        try:
            query = parse_order_query(request.args)
            page = container.order_service.list_orders(query)
        except ValidationError as e:
            return json_error(400, code="ORDER_QUERY_INVALID", message=str(e))
        except Exception:
            logger.exception("Failed to load orders")
            return json_error(500, code="ORDER_FETCH_FAILED", message="Failed to load orders")

        return json_success({"orders": [to_api(r) for r in page.items], "pagination": page.meta()})

    @app.route("/api/orders/<int:order_id>", methods=["GET"], endpoint="api_order_detail")
    def order_detail(order_id: int):
        try:
            ranked = container.order_service.get_order(order_id)
        except NotFoundError as e:
            return json_error(404, code="ORDER_NOT_FOUND", message=str(e))
        except Exception:
            logger.exception("Failed to load order %s", order_id)
            return json_error(500, code="ORDER_FETCH_FAILED", message="Failed to load order")

        return json_success(to_api(ranked, include_worklogs=True))

    @app.route("/api/home/summary", methods=["GET"], endpoint="api_home_summary")
    def home_summary():
        try:
            summary = container.order_service.home_summary()
        except Exception:
            logger.exception("Failed to load home summary")
            return json_error(500, code="SUMMARY_FETCH_FAILED", message="Failed to load summary")

        worklogs = []
        for row in summary.worklogs:
            data = row_to_api(row)
            data["workDateLabel"] = format_work_date(row.entry.work_date)
            worklogs.append(data)
        return json_success({"orders": [to_api(r) for r in summary.orders], "worklogs": worklogs})

    @app.route("/api/orders/export.csv", methods=["GET"], endpoint="api_orders_export")
    def export_orders():
        try:
            rows = container.order_service.export_rows(parse_order_query(request.args))
        except ValidationError as e:
            return json_error(400, code="ORDER_QUERY_INVALID", message=str(e))
        except Exception:
            logger.exception("Failed to export orders")
            return json_error(500, code="ORDER_EXPORT_FAILED", message="Failed to export orders")

        filename = f"production-orders-{now_local().strftime('%Y%m%d')}.csv"
        return write_csv_response(app, rows=rows, fieldnames=EXPORT_HEADERS, filename=filename)
