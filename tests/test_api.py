from __future__ import annotations

from datetime import date, datetime

import pytest

from src.capsule_production.capsule_production.container import build_services
from src.capsule_production.capsule_production.main import create_app
from tests.fakes import InMemoryOrders, InMemoryStore, InMemoryWorklogs, make_entry, make_order


@pytest.fixture
def store():
    return InMemoryStore(
        [
            make_order(1, product_name="Probiotic", created_at=datetime(2025, 1, 2), worklogs=(make_entry(1, worklog_id=1),)),
            make_order(2, product_name="Vitamin C", created_at=datetime(2025, 1, 3)),
            make_order(3, product_name="Fish Oil", created_at=datetime(2024, 12, 1), completion_date=date(2025, 1, 1)),
        ]
    )


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(orders_repo=InMemoryOrders(store), worklogs_repo=InMemoryWorklogs(store))
    app = create_app(container)
    return app.test_client()


def test_order_list_returns_priority_page(client):
    resp = client.get("/api/orders?sortOrder=asc&page=1&limit=2")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert [o["id"] for o in body["data"]["orders"]] == [1, 2]
    assert [o["status"] for o in body["data"]["orders"]] == ["inProgress", "notStarted"]
    assert body["data"]["orders"][0]["totalWorkUnits"] == 7.0
    assert body["data"]["pagination"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}


def test_order_list_rejects_bad_query(client):
    resp = client.get("/api/orders?limit=0")

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "ORDER_QUERY_INVALID"


def test_order_detail_and_missing(client):
    ok = client.get("/api/orders/1")
    missing = client.get("/api/orders/404")

    assert ok.status_code == 200
    assert ok.get_json()["data"]["worklogs"][0]["startTime"] == "09:00"
    assert missing.status_code == 404


def test_preview_calculates_without_saving(client, store):
    resp = client.post(
        "/api/worklogs/preview",
        json={"workDate": "2025-01-06", "startTime": "12:00", "endTime": "13:00", "headcount": 4},
    )

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"effectiveMinutes": 30, "calculatedWorkUnits": 2.0}
    assert len(store.worklogs) == 1


def test_create_worklog_moves_order_into_progress(client):
    resp = client.post(
        "/api/orders/2/worklogs",
        json={"workDate": "2025-01-06", "startTime": "08:30", "endTime": "12:00", "headcount": 2},
    )

    assert resp.status_code == 201
    assert resp.get_json()["data"]["calculatedWorkUnits"] == 7.0

    detail = client.get("/api/orders/2").get_json()["data"]
    assert detail["status"] == "inProgress"
    assert detail["totalEffectiveMinutes"] == 210


def test_create_worklog_validation_error(client):
    resp = client.post(
        "/api/orders/2/worklogs",
        json={"workDate": "2025-01-06", "startTime": "22:00", "endTime": "06:00", "headcount": 1},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "WORKLOG_INVALID"


@pytest.mark.parametrize(
    "method, url",
    [
        ("post", "/api/orders/2/worklogs"),
        ("put", "/api/worklogs/1"),
        ("post", "/api/worklogs/preview"),
    ],
)
def test_worklog_routes_reject_non_object_json(client, store, method, url):
    before = len(store.worklogs)

    resp = getattr(client, method)(url, json=["x"])

    assert resp.status_code == 400
    assert resp.get_json()["error"]["code"] == "WORKLOG_INVALID"
    assert len(store.worklogs) == before


def test_update_and_delete_worklog(client, store):
    resp = client.put(
        "/api/worklogs/1",
        json={"workDate": "2025-01-07", "startTime": "13:00", "endTime": "14:00", "headcount": 1},
    )
    assert resp.status_code == 200
    assert store.worklogs[1].effective_minutes == 30

    assert client.delete("/api/worklogs/1").status_code == 200
    assert client.delete("/api/worklogs/1").status_code == 404


def test_home_summary(client):
    body = client.get("/api/home/summary").get_json()["data"]

    assert [o["id"] for o in body["orders"]] == [1, 2, 3]
    assert body["worklogs"][0]["workDateLabel"] == "2025/01/06 (Mon)"


def test_worklog_list_and_csv_export(client):
    listing = client.get("/api/worklogs?orderKeyword=probiotic").get_json()["data"]
    assert [w["id"] for w in listing["worklogs"]] == [1]
    assert listing["pagination"]["total"] == 1

    resp = client.get("/api/worklogs/export.csv")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0] == "work_date,product_name,customer_name,start_time,end_time,headcount,work_units,notes"
    assert "2025-01-06,Probiotic" in text


def test_order_csv_export(client):
    resp = client.get("/api/orders/export.csv")

    lines = resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("created_date,customer_name")
    assert len(lines) == 4
    assert lines[-1].endswith(",completed,0.0")
