from __future__ import annotations

import logging

from flask import Flask, request

from ..common.datetime_utils import now_local
from ..common.http import json_error, json_success, write_csv_response
from ..core.exceptions import NotFoundError, ValidationError
from ..container import Container
from .service import EXPORT_HEADERS, entry_to_api, parse_worklog_query, row_to_api

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _form() -> dict:
        return request.get_json(silent=True) or request.form.to_dict()

    @app.route("/api/worklogs", methods=["GET"], endpoint="api_worklogs")
    def list_worklogs():
        try:
            page = container.worklog_service.list_worklogs(parse_worklog_query(request.args))
        except ValidationError as e:
            return json_error(400, code="WORKLOG_QUERY_INVALID", message=str(e))
        except Exception:
            logger.exception("Failed to load worklogs")
            return json_error(500, code="WORKLOG_FETCH_FAILED", message="Failed to load worklogs")

        return json_success({"worklogs": [row_to_api(r) for r in page.items], "pagination": page.meta()})

    @app.route("/api/worklogs/preview", methods=["POST"], endpoint="api_worklog_preview")
    def preview():
        try:
            result = container.worklog_service.preview(_form())
        except ValidationError as e:
            return json_error(400, code="WORKLOG_INVALID", message=str(e))

        return json_success(
            {"effectiveMinutes": result.effective_minutes, "calculatedWorkUnits": float(result.work_units)}
        )

    @app.route("/api/orders/<int:order_id>/worklogs", methods=["POST"], endpoint="api_worklog_create")
    def create(order_id: int):
        try:
            entry = container.worklog_service.create(order_id=order_id, form=_form())
        except ValidationError as e:
            return json_error(400, code="WORKLOG_INVALID", message=str(e))
        except NotFoundError as e:
            return json_error(404, code="ORDER_NOT_FOUND", message=str(e))
        except Exception:
            logger.exception("Failed to create worklog for order %s", order_id)
            return json_error(500, code="WORKLOG_SAVE_FAILED", message="Failed to save worklog")

        return json_success(entry_to_api(entry), 201)

    @app.route("/api/worklogs/<int:worklog_id>", methods=["PUT"], endpoint="api_worklog_update")
    def update(worklog_id: int):
        try:
            entry = container.worklog_service.update(worklog_id=worklog_id, form=_form())
        except ValidationError as e:
            return json_error(400, code="WORKLOG_INVALID", message=str(e))
        except NotFoundError as e:
            return json_error(404, code="WORKLOG_NOT_FOUND", message=str(e))
        except Exception:
            logger.exception("Failed to update worklog %s", worklog_id)
            return json_error(500, code="WORKLOG_SAVE_FAILED", message="Failed to save worklog")

        return json_success(entry_to_api(entry))

    @app.route("/api/worklogs/<int:worklog_id>", methods=["DELETE"], endpoint="api_worklog_delete")
    def delete(worklog_id: int):
        try:
            container.worklog_service.delete(worklog_id=worklog_id)
        except NotFoundError as e:
            return json_error(404, code="WORKLOG_NOT_FOUND", message=str(e))
        except Exception:
            logger.exception("Failed to delete worklog %s", worklog_id)
            return json_error(500, code="WORKLOG_DELETE_FAILED", message="Failed to delete worklog")

        return json_success({"id": worklog_id})

    @app.route("/api/worklogs/export.csv", methods=["GET"], endpoint="api_worklogs_export")
    def export_worklogs():
        try:
            rows = container.worklog_service.export_rows(parse_worklog_query(request.args))
        except ValidationError as e:
            return json_error(400, code="WORKLOG_QUERY_INVALID", message=str(e))
        except Exception:
            logger.exception("Failed to export worklogs")
            return json_error(500, code="WORKLOG_EXPORT_FAILED", message="Failed to export worklogs")

        filename = f"worklogs-{now_local().strftime('%Y%m%d')}.csv"
        return write_csv_response(app, rows=rows, fieldnames=EXPORT_HEADERS, filename=filename)
