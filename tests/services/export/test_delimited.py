from __future__ import annotations

import csv
import io

from donorcheck.services.export.delimited import to_delimited_text


def test_empty_dataset_is_empty_string() -> None:
    assert to_delimited_text([]) == ""


def test_basic_serialization_uses_first_row_header_order() -> None:
    rows = [{"b": "1", "a": "2"}, {"a": "4", "b": "3"}]
    assert to_delimited_text(rows) == "b,a\n1,2\n3,4"


def test_quoting() -> None:
    rows = [{"name": "Doe, Jane", "note": 'say "hi"', "plain": "x"}]
    assert to_delimited_text(rows) == 'name,note,plain\n"Doe, Jane","say ""hi""",x'


def test_round_trip_through_csv_reader() -> None:
    rows = [
        {"email": "a@x.com", "note": 'He said "ok", then left', "amount": "1000.5"},
        {"email": "b@x.com", "note": "", "amount": "2"},
    ]
    parsed = list(csv.DictReader(io.StringIO(to_delimited_text(rows))))
    assert parsed == rows
