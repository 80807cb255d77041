from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Sequence

from flask import Flask, jsonify


def json_success(data: Any, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def json_error(status: int, *, code: str, message: str):
    return jsonify({"success": False, "error": {"code": code, "message": message}}), status


def write_csv_response(app: Flask, *, rows: Iterable[dict], fieldnames: Sequence[str], filename: str):
    """Write rows to a CSV attachment (UTF-8 with BOM for spreadsheet apps)."""

    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=list(fieldnames))
    writer.writeheader()
    for row in rows:
        writer.writerow(row)

    return app.response_class(
        out.getvalue().encode("utf-8-sig"),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
