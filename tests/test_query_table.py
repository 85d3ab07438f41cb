"""Tests for flattening query results."""

from datetime import datetime, timedelta, timezone

from cromwell_api.query_table import QueryTable, flatten_record, parse_timestamp


def test_parse_timestamp_drops_offset_and_fraction():
    ts = parse_timestamp("2015-11-01T07:45:52.123-05:00")
    assert ts == datetime(2015, 11, 1, 7, 45, 52, tzinfo=timezone.utc)


def test_parse_timestamp_bad_values():
    assert parse_timestamp(None) is None
    assert parse_timestamp("yesterday") is None


def test_heterogeneous_records_union_columns():
    records = [
        {"id": "a", "name": "wf", "status": "Running", "start": "2015-11-01T07:45:52.000-05:00"},
        {"id": "b", "status": "Succeeded", "submission": "2015-11-01T07:00:00.000-05:00"},
        {"id": "c", "name": "wf2", "end": "2015-11-01T09:00:00.000-05:00"},
    ]
    table = QueryTable.from_records(records)

    assert len(table) == 3
    assert table.columns == ["id", "name", "status", "start", "submission", "end", "duration"]
    assert table["name"] == ["wf", None, "wf2"]
    assert table[1]["submission"] == "2015-11-01T07:00:00.000-05:00"
    assert table["duration"] == [None, None, None]


def test_duration_one_hour():
    table = QueryTable.from_records([
        {"id": "a", "start": "2015-11-01T07:45:52.000-05:00", "end": "2015-11-01T08:45:52.000-05:00"},
    ])
    assert table["duration"][0] == timedelta(seconds=3600)
    assert table["start"][0].tzinfo == timezone.utc


def test_missing_start_end_columns_added():
    table = QueryTable.from_records([{"id": "a"}])
    assert table[0] == {"id": "a", "start": None, "end": None, "duration": None}


def test_empty_results():
    table = QueryTable.from_records([])
    assert len(table) == 0
    assert table.columns == ["start", "end", "duration"]
    assert QueryTable.from_records(None).rows == []


def test_nested_records_are_flattened():
    assert flatten_record({"id": "a", "labels": {"project": "x", "run": {"n": 1}}, "empty": {}}) == {
        "id": "a",
        "labels.project": "x",
        "labels.run.n": 1,
        "empty": {},
    }



def test_membership_checks_columns():
    table = QueryTable.from_records([{"id": "a", "status": "Running"}])
    assert "id" in table
    assert "duration" in table
    assert "name" not in table
    assert {"id": "a"} not in table


def test_to_records_plain_values():
    table = QueryTable.from_records([
        {"id": "a", "start": "2015-11-01T07:45:52.000-05:00", "end": "2015-11-01T08:45:52.000-05:00"},
    ])
    record = table.to_records()[0]
    assert record["start"] == "2015-11-01T07:45:52+00:00"
    assert record["duration"] == 3600.0
