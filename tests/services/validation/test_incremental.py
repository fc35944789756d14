from __future__ import annotations

from donorcheck.domain.errors import ErrorCategory
from donorcheck.services.validation.incremental import validate_cell


ROWS = [
    {"email": "a@x.com", "amount": "10", "date": "2024-01-01", "donor_id": "1"},
    {"email": "b@x.com", "amount": "5", "date": "2024-01-02", "donor_id": "2"},
    {"email": "c@x.com", "amount": "7", "date": "2024-01-03", "donor_id": "3"},
]


def _edited(index: int, field: str, value: str) -> list[dict[str, str]]:
    rows = [dict(r) for r in ROWS]
    rows[index][field] = value
    return rows


def test_valid_edit() -> None:
    rows = _edited(1, "amount", "$20")
    res = validate_cell("amount", "$20", 1, rows, rows[1])
    assert res.is_valid
    assert res.error is None


def test_format_errors() -> None:
    rows = _edited(1, "email", "nobody")
    res = validate_cell("email", "nobody", 1, rows, rows[1])
    assert not res.is_valid
    assert res.error is not None
    assert res.error.category is ErrorCategory.EMAIL
    assert res.error.row_number == 3

    rows = _edited(0, "date", "2024/01/01")
    res = validate_cell("date", "2024/01/01", 0, rows, rows[0])
    assert res.error is not None and res.error.category is ErrorCategory.DATE

    rows = _edited(0, "amount", "0")
    res = validate_cell("amount", "0", 0, rows, rows[0])
    assert res.error is not None and res.error.category is ErrorCategory.DONATION


def test_duplicate_against_later_row() -> None:
    # Edited row comes before the row it duplicates
    rows = _edited(0, "email", "C@X.COM")
    res = validate_cell("email", "C@X.COM", 0, rows, rows[0])
    assert not res.is_valid
    assert res.error is not None
    assert res.error.category is ErrorCategory.DUPLICATE
    assert res.error.message == "Duplicate email (also in row 4)"


def test_duplicate_donor_id() -> None:
    rows = _edited(2, "donor_id", "1")
    res = validate_cell("donor_id", "1", 2, rows, rows[2])
    assert res.error is not None
    assert res.error.message == "Duplicate donor ID (also in row 2)"


def test_same_row_does_not_count_as_duplicate() -> None:
    rows = _edited(1, "email", "b@x.com")
    assert validate_cell("email", "b@x.com", 1, rows, rows[1]).is_valid


def test_empty_donor_id_and_unknown_field_are_valid() -> None:
    rows = _edited(1, "donor_id", "")
    assert validate_cell("donor_id", "", 1, rows, rows[1]).is_valid
    assert validate_cell("notes", "anything", 1, ROWS, ROWS[1]).is_valid


def test_does_not_mutate_rows() -> None:
    rows = _edited(0, "email", "b@x.com")
    snapshot = [dict(r) for r in rows]
    validate_cell("email", "b@x.com", 0, rows, rows[0])
    assert rows == snapshot
