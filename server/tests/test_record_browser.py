from __future__ import annotations

import csv
import io
from datetime import datetime

import pytest

from parishdesk.services.browser import (
    MONTH_NAMES,
    BrowserConfigError,
    ComputedColumn,
    Debouncer,
    FieldColumn,
    RecordBrowser,
    export_headers,
    matches_query,
)

COLUMNS = [
    FieldColumn("name"),
    FieldColumn("status", "Status"),
    ComputedColumn(title="Actions", render=lambda record: ["approve"]),
]


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _fixed_today() -> datetime:
    return datetime(2026, 10, 19, 12, 0, 0)


def _records(count: int) -> list[dict]:
    return [
        {
            "id": f"r{index:03d}",
            "name": f"Parishioner {index}",
            "status": "approved" if index % 3 == 0 else "pending",
            "dateTimeStamp": f"2026-{(index % 12) + 1:02d}-10T08:00:00.000Z",
        }
        for index in range(count)
    ]


def _browser(records, **kwargs) -> RecordBrowser:
    kwargs.setdefault("today", _fixed_today)
    kwargs.setdefault("clock", FakeClock())
    return RecordBrowser(records, COLUMNS, **kwargs)


def test_default_view_is_newest_first_first_page():
    records = _records(25)
    browser = _browser(records)

    visible = browser.visible_records()

    assert [record["id"] for record in visible] == [f"r{index:03d}" for index in range(24, 14, -1)]
    assert browser.page_size == 10
    assert browser.page_count() == 3


def test_same_state_gives_same_view():
    records = _records(30)
    first = _browser(records)
    second = _browser(records)
    for browser in (first, second):
        browser.apply_search_now("pending")
        browser.set_page_size(15)
        browser.set_page(2)

    assert first.visible_records() == second.visible_records()
    assert first.rows() == second.rows()


def test_input_list_is_not_mutated():
    records = _records(5)
    snapshot = [dict(record) for record in records]
    browser = _browser(records)
    browser.apply_search_now("Parishioner 1")
    browser.visible_records()

    assert records == snapshot


def test_search_is_case_insensitive_substring_of_serialized_record():
    records = _records(12)
    browser = _browser(records)

    browser.apply_search_now("PARISHIONER 11")
    assert [record["id"] for record in browser.visible_records()] == ["r011"]

    browser.apply_search_now('"status":"approved"')
    assert {record["status"] for record in browser.filtered_records()} == {"approved"}


def test_search_waits_for_debounce_window():
    clock = FakeClock()
    browser = _browser(_records(20), clock=clock)

    browser.search("Parishioner 7")
    assert browser.search_pending
    assert browser.total_filtered() == 20

    clock.advance(0.5)
    browser.search("Parishioner 17")
    clock.advance(0.5)
    assert browser.query == ""

    clock.advance(0.4)
    assert browser.query == "Parishioner 17"
    assert not browser.search_pending
    assert [record["id"] for record in browser.visible_records()] == ["r017"]


def test_debouncer_flush_and_cancel():
    clock = FakeClock()
    debouncer = Debouncer(0.8, clock)

    debouncer.set("abc")
    debouncer.cancel()
    clock.advance(1)
    assert debouncer.value == ""

    debouncer.set("xyz")
    debouncer.flush()
    assert debouncer.value == "xyz"
    assert not debouncer.pending


def test_page_size_change_resets_page():
    browser = _browser(_records(45))
    browser.set_page(3)

    browser.set_page_size(20)

    assert browser.page == 1
    assert len(browser.visible_records()) == 20


def test_unsupported_page_size_is_rejected():
    browser = _browser(_records(3))
    with pytest.raises(ValueError):
        browser.set_page_size(25)
    with pytest.raises(ValueError):
        browser.set_page(0)


def test_page_past_the_end_is_empty():
    browser = _browser(_records(5))
    browser.set_page(4)
    assert browser.visible_records() == []


def test_month_filters_are_disjoint_and_cover_dated_records():
    records = _records(36) + [
        {"id": "old", "name": "Last year", "dateTimeStamp": "2025-03-10T08:00:00.000Z"},
        {"id": "undated", "name": "No timestamp"},
    ]
    browser = _browser(records)
    seen: list[str] = []

    for month in MONTH_NAMES:
        browser.set_month(month)
        ids = [record["id"] for record in browser.filtered_records()]
        assert len(ids) == 3
        seen.extend(ids)

    assert len(seen) == len(set(seen)) == 36
    assert "old" not in seen
    assert "undated" not in seen

    browser.set_month("All")
    assert browser.total_filtered() == 38


def test_month_filter_falls_back_to_created_field():
    records = [{"id": "a", "created": "2026-02-14T10:00:00Z"}, {"id": "b", "dateTimeStamp": "not a date"}]
    browser = _browser(records)

    browser.set_month("February")

    assert [record["id"] for record in browser.filtered_records()] == ["a"]


def test_month_filter_can_be_disabled():
    browser = _browser(_records(3), show_month_filter=False)
    with pytest.raises(BrowserConfigError):
        browser.set_month("March")
    with pytest.raises(ValueError):
        _browser(_records(3)).set_month("Smarch")


def test_malformed_records_do_not_break_the_view():
    records = [None, "loose string", {"name": "Ok"}, 42]
    browser = RecordBrowser(records, [FieldColumn("name")], today=_fixed_today)

    browser.apply_search_now("ok")
    assert browser.visible_records() == [{"name": "Ok"}]

    browser.apply_search_now("")
    assert browser.rows() == [[None], ["Ok"], [None], [None]]

    browser.set_month("May")
    assert browser.visible_records() == []


def test_csv_export_contains_every_record_and_skips_actions():
    records = _records(37)
    browser = _browser(records, title="Baptism Appointments")
    browser.apply_search_now("Parishioner 3")
    browser.set_page(2)

    export = browser.export_csv()

    rows = list(csv.reader(io.StringIO(export.content)))
    assert export.filename == "Baptism Appointments.csv"
    assert rows[0] == ["name", "status"]
    assert len(rows) == 38
    assert rows[1] == ["Parishioner 0", "approved"]
    assert export.row_count == 37


def test_csv_export_defaults_filename_and_serializes_nested_values():
    records = [{"name": "A", "status": {"stage": 1}}, {"name": None}]
    export = _browser(records).export_csv()

    rows = list(csv.reader(io.StringIO(export.content)))
    assert export.filename == "data.csv"
    assert rows[1] == ["A", '{"stage":1}']
    assert rows[2] == ["", ""]


def test_csv_export_without_columns_fails():
    browser = RecordBrowser(_records(2), [], today=_fixed_today)
    with pytest.raises(BrowserConfigError):
        browser.export_csv()


def test_export_headers_use_accessor_then_title():
    columns = [
        FieldColumn("name", "Name"),
        ComputedColumn(title="Status", render=str, accessor="status"),
        ComputedColumn(title="Badge", render=str),
        ComputedColumn(title="actions", render=str),
    ]
    assert export_headers(columns) == ["name", "status", "Badge"]


def test_selection_requires_delete_hook():
    browser = _browser(_records(3))
    with pytest.raises(BrowserConfigError):
        browser.select(browser.visible_records())


def test_delete_selected_hands_records_to_callback_and_clears():
    deleted: list[list[dict]] = []
    records = _records(4)
    browser = _browser(records, on_delete_records=deleted.append)

    assert browser.delete_label() == "Select records to delete"
    browser.select(records[:2])
    browser.select(records[:1])
    assert browser.delete_label() == "Delete 2 records"

    browser.deselect(records[1:2])
    assert browser.delete_label() == "Delete 1 record"

    removed = browser.delete_selected()
    assert removed == [records[0]]
    assert deleted == [[records[0]]]
    assert browser.selected_records == []


def test_new_record_list_clears_selection():
    records = _records(3)
    browser = _browser(records, on_delete_records=lambda chosen: None)
    browser.select(records)

    browser.set_records(records)
    assert len(browser.selected_records) == 3

    browser.set_records(list(records))
    assert browser.selected_records == []


def test_matches_query_blank_matches_everything():
    assert matches_query({"a": 1}, "   ")
    assert matches_query(None, "null")


def test_csv_export_writes_booleans_in_lowercase():
    records = [{"read": True, "fromAdmin": False, "n": 1.5}]
    browser = RecordBrowser(records, [FieldColumn("read"), FieldColumn("fromAdmin"), FieldColumn("n")], today=_fixed_today)

    rows = list(csv.reader(io.StringIO(browser.export_csv().content)))

    assert rows == [["read", "fromAdmin", "n"], ["true", "false", "1.5"]]
