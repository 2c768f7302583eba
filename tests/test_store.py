# tests/test_store.py

import pytest

from evaluation_api.errors import TableNotFound, WriteError

HEADER = ["Center", "Week", "Day", "Period", "Instructor1", "Instructor2"]


def test_create_and_scan_table(store):
    store.create_table("instructors", HEADER, [["A", "1", "Mon", "AM", "X", ""]])

    assert store.has_table("instructors")
    assert store.scan("instructors") == [HEADER, ["A", "1", "Mon", "AM", "X", ""]]


def test_create_existing_table_fails(store):
    store.create_table("instructors", HEADER)

    with pytest.raises(WriteError):
        store.create_table("instructors", HEADER)


def test_scan_missing_table(store):
    assert not store.has_table("nope")
    with pytest.raises(TableNotFound):
        store.scan("nope")


def test_append_returns_sheet_row_numbers(store):
    store.create_table("evaluation", ["Timestamp", "Comment"])

    assert store.append("evaluation", ["t1", "first"]) == 2
    assert store.append("evaluation", ["t2", "second"]) == 3
    assert store.scan("evaluation")[1:] == [["t1", "first"], ["t2", "second"]]


def test_append_to_missing_table(store):
    with pytest.raises(TableNotFound):
        store.append("evaluation", ["t1"])


def test_replace_body_keeps_header(store):
    store.create_table("instructors", HEADER, [["A", "1", "Mon", "AM", "X", ""], ["B", "1", "Mon", "AM", "Y", ""]])

    written = store.replace_body("instructors", [["C", "2", "Tue", "PM", "Z", "W"]])

    assert written == 1
    assert store.scan("instructors") == [HEADER, ["C", "2", "Tue", "PM", "Z", "W"]]


def test_replace_body_failed_insert_leaves_table_empty(store):
    store.create_table("instructors", HEADER, [["A", "1", "Mon", "AM", "X", ""]])

    with pytest.raises(WriteError):
        store.replace_body("instructors", [["C", "2", "Tue", "PM", object(), ""]])

    assert store.scan("instructors") == [HEADER]


def test_clear_body(store):
    store.create_table("evaluation", ["Timestamp"], [["t1"], ["t2"]])

    assert store.clear_body("evaluation") == 2
    assert store.scan("evaluation") == [["Timestamp"]]


def test_describe_counts_header_as_a_row(store):
    store.create_table("instructors", HEADER, [["A", "1", "Mon", "AM", "X", ""]])
    store.create_table("evaluation", ["Timestamp", "Comment"])

    info = store.describe()

    assert info["name"] == "Test Store"
    tables = {t["name"]: t for t in info["tables"]}
    assert tables["instructors"] == {"name": "instructors", "rows": 2, "columns": 6}
    assert tables["evaluation"] == {"name": "evaluation", "rows": 1, "columns": 2}
