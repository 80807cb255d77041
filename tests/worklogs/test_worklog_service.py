from __future__ import annotations

from datetime import date, time
from decimal import Decimal

import pytest

from src.capsule_production.capsule_production.core.exceptions import InvalidShiftEntryError, NotFoundError
from src.capsule_production.capsule_production.worklogs.calculator.standard_calculator import StandardWorkUnitCalculator
from src.capsule_production.capsule_production.worklogs.model import WorklogQuery
from src.capsule_production.capsule_production.worklogs.service import WorklogService, validate_entry
from tests.fakes import InMemoryOrders, InMemoryStore, InMemoryWorklogs, make_entry, make_order


def _form(**overrides):
    form = {"workDate": "2025-01-06", "startTime": "09:00", "endTime": "17:00", "headcount": "2", "notes": "  filling  "}
    form.update(overrides)
    return form


def _service(store: InMemoryStore) -> WorklogService:
    return WorklogService(InMemoryWorklogs(store), InMemoryOrders(store))


def test_validate_entry_parses_form():
    entry = validate_entry(_form())

    assert entry.work_date == date(2025, 1, 6)
    assert entry.start_time == time(9, 0)
    assert entry.end_time == time(17, 0)
    assert entry.headcount == 2
    assert entry.notes == "filling"


@pytest.mark.parametrize(
    "overrides",
    [
        {"workDate": "2025-13-01"},
        {"workDate": ""},
        {"startTime": "9am"},
        {"endTime": "25:00"},
        {"startTime": "17:00", "endTime": "09:00"},
        {"startTime": "22:00", "endTime": "02:00"},
        {"startTime": "09:00", "endTime": "09:00"},
        {"headcount": "0"},
        {"headcount": "-3"},
        {"headcount": "two"},
        {"headcount": True},
        {"notes": "x" * 501},
    ],
)
def test_validate_entry_rejects_bad_input(overrides):
    with pytest.raises(InvalidShiftEntryError):
        validate_entry(_form(**overrides))


@pytest.mark.parametrize("form", [["x"], "2025-01-06", 42, None])
def test_validate_entry_rejects_non_mapping_form(form):
    with pytest.raises(InvalidShiftEntryError):
        validate_entry(form)


def test_preview_does_not_persist():
    store = InMemoryStore([make_order(1)])

    result = _service(store).preview(_form())

    assert result.effective_minutes == 420
    assert result.work_units == Decimal("14")
    assert store.worklogs == {}


def test_create_stores_calculated_values():
    store = InMemoryStore([make_order(1)])

    entry = _service(store).create(order_id=1, form=_form())

    stored = store.worklogs[entry.worklog_id]
    assert stored.effective_minutes == 420
    assert stored.work_units == Decimal("14")
    assert StandardWorkUnitCalculator().for_entry(stored).work_units == stored.work_units


def test_create_for_unknown_order_fails():
    with pytest.raises(NotFoundError):
        _service(InMemoryStore()).create(order_id=99, form=_form())


def test_invalid_entry_never_reaches_storage():
    store = InMemoryStore([make_order(1)])

    with pytest.raises(InvalidShiftEntryError):
        _service(store).create(order_id=1, form=_form(endTime="08:00"))

    assert store.worklogs == {}


def test_update_recalculates():
    store = InMemoryStore([make_order(1, worklogs=(make_entry(1, worklog_id=5),))])

    updated = _service(store).update(worklog_id=5, form=_form(startTime="13:00", endTime="14:00", headcount="3"))

    assert updated.order_id == 1
    assert store.worklogs[5].effective_minutes == 30
    assert store.worklogs[5].work_units == Decimal("1.5")


def test_update_and_delete_missing_worklog():
    svc = _service(InMemoryStore())

    with pytest.raises(NotFoundError):
        svc.update(worklog_id=1, form=_form())
    with pytest.raises(NotFoundError):
        svc.delete(worklog_id=1)


def test_list_worklogs_paginates_by_work_date():
    entries = [make_entry(1, worklog_id=i, work_date=date(2025, 1, i)) for i in range(1, 6)]
    store = InMemoryStore([make_order(1, worklogs=entries)])

    page = _service(store).list_worklogs(WorklogQuery(sort_order="desc", page=2, limit=2))

    assert [r.entry.work_date.day for r in page.items] == [3, 2]
    assert page.meta() == {"page": 2, "limit": 2, "total": 5, "totalPages": 3}


def test_list_worklogs_filters_by_order_keyword_and_notes():
    store = InMemoryStore(
        [
            make_order(1, product_name="Fish Oil", worklogs=(make_entry(1, worklog_id=1, notes="Machine A"),)),
            make_order(2, product_name="Vitamin C", worklogs=(make_entry(2, worklog_id=2, notes="machine b"),)),
        ]
    )
    svc = _service(store)

    assert [r.entry.worklog_id for r in svc.list_worklogs(WorklogQuery(order_keyword="fish")).items] == [1]
    assert [r.entry.worklog_id for r in svc.list_worklogs(WorklogQuery(notes_keyword="MACHINE B")).items] == [2]


def test_export_rows_include_every_match():
    entries = [make_entry(1, worklog_id=i, work_date=date(2025, 1, i), headcount=2) for i in range(1, 31)]
    store = InMemoryStore([make_order(1, customer_name="Alpha", product_name="Probiotic", worklogs=entries)])

    rows = _service(store).export_rows(WorklogQuery(sort_order="asc", limit=5))

    assert len(rows) == 30
    assert rows[0] == {
        "work_date": "2025-01-01",
        "product_name": "Probiotic",
        "customer_name": "Alpha",
        "start_time": "09:00",
        "end_time": "17:00",
        "headcount": 2,
        "work_units": "14.0",
        "notes": "",
    }
