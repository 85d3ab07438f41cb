# query_table.py - flatten workflow query records into a table
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, Iterator, List, Optional, Union

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
TIMESTAMP_COLUMNS = ("start", "end")
DURATION_COLUMN = "duration"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a Cromwell timestamp such as ``2015-11-01T07:45:52.000-05:00``.

    Only the first 19 characters are read, so fractional seconds and the UTC
    offset are dropped and the wall-clock value is taken as UTC. Returns
    None for missing or unparseable values.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    try:
        parsed = datetime.strptime(str(value)[:19], TIMESTAMP_FORMAT)
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def flatten_record(record: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    # nested objects become dotted columns: {"labels": {"a": 1}} -> {"labels.a": 1}
    flat: Dict[str, Any] = {}
    for key, value in record.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            flat.update(flatten_record(value, prefix=f"{name}."))
        else:
            flat[name] = value
    return flat


class QueryTable:
    """Rows of workflow query results sharing one column set."""

    def __init__(self, columns: List[str], rows: List[Dict[str, Any]]):
        self.columns = list(columns)
        self.rows = [{c: row.get(c) for c in self.columns} for row in rows]

    @classmethod
    def from_records(cls, records: Optional[Iterable[Dict[str, Any]]]) -> "QueryTable":
        """
        Build a table from heterogeneous JSON records.

        Columns are the union of the record fields in first-seen order and a
        field missing from a record is None in that row. ``start`` and
        ``end`` are always present and parsed with ``parse_timestamp``;
        ``duration`` is ``end - start`` or None when either is missing.
        """
        flat_rows = [flatten_record(r) for r in (records or [])]
        columns: List[str] = []
        for row in flat_rows:
            for key in row:
                if key not in columns:
                    columns.append(key)
        for name in TIMESTAMP_COLUMNS + (DURATION_COLUMN,):
            if name not in columns:
                columns.append(name)

        for row in flat_rows:
            for name in TIMESTAMP_COLUMNS:
                row[name] = parse_timestamp(row.get(name))
            start, end = row["start"], row["end"]
            row[DURATION_COLUMN] = end - start if start is not None and end is not None else None
        return cls(columns, flat_rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self.rows)

    def __getitem__(self, key: Union[int, str]):
        if isinstance(key, str):
            if key not in self.columns:
                raise KeyError(key)
            return [row[key] for row in self.rows]
        return self.rows[key]

    def __contains__(self, column: object) -> bool:
        return column in self.columns

    def __repr__(self) -> str:
        return f"QueryTable(rows={len(self.rows)}, columns={self.columns!r})"

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows as plain dicts; datetimes become ISO strings and durations seconds."""
        return [{k: _plain(v) for k, v in row.items()} for row in self.rows]


def _plain(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    return value
