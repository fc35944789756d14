from __future__ import annotations

from donorcheck.domain.errors import ErrorCategory, ValidationError
from donorcheck.services.autofix.engine import DetailedChange, UnresolvedIssue
from donorcheck.services.export.cleaning import (
    changes_to_rows,
    clean_for_export,
    error_summary,
    group_unresolved_by_reason,
    invalid_rows,
    unresolved_to_rows,
)
from donorcheck.services.validation.dataset import validate_dataset


ROWS = [
    {"email": " a@x.com ", "Date": "3/4/2024", "notes": " keep "},
    {"email": "bad", "Date": "2024-01-01", "notes": ""},
    {"email": "c@x.com", "Date": "2024-01-02", "notes": "x"},
]


def test_clean_for_export_filters_trims_and_normalizes_dates() -> None:
    res = validate_dataset(ROWS)
    assert res.invalid_row_indices == frozenset({1})
    cleaned = clean_for_export(ROWS, res.invalid_row_indices)
    assert cleaned == [
        {"email": "a@x.com", "Date": "2024-03-04", "notes": "keep"},
        {"email": "c@x.com", "Date": "2024-01-02", "notes": "x"},
    ]
    assert ROWS[0]["email"] == " a@x.com "


def test_invalid_rows_unmodified() -> None:
    assert invalid_rows(ROWS, {1}) == [ROWS[1]]
    assert invalid_rows(ROWS, set()) == []


def test_error_summary() -> None:
    errs = [
        ValidationError(2, ErrorCategory.EMAIL, "email", "", "m"),
        ValidationError(3, ErrorCategory.DUPLICATE, "email", "a@x", "m"),
        ValidationError(3, ErrorCategory.DUPLICATE, "id", "1", "m"),
    ]
    assert error_summary(errs) == {"email": 1, "donation": 0, "date": 0, "duplicate": 2}
    assert error_summary([]) == {"email": 0, "donation": 0, "date": 0, "duplicate": 0}


def test_group_unresolved_by_reason_keeps_first_seen_order() -> None:
    issues = [
        UnresolvedIssue(2, "date", "x", "Unparsable date format"),
        UnresolvedIssue(3, "email", "y", "Invalid email (missing @)"),
        UnresolvedIssue(4, "date", "z", "Unparsable date format"),
    ]
    grouped = group_unresolved_by_reason(issues)
    assert list(grouped) == ["Unparsable date format", "Invalid email (missing @)"]
    assert [i.row_number for i in grouped["Unparsable date format"]] == [2, 4]


def test_logs_as_rows() -> None:
    changes = [DetailedChange(2, "state", "ohio", "OH", "State converted to abbreviation")]
    assert changes_to_rows(changes) == [
        {
            "row_number": "2",
            "field": "state",
            "before": "ohio",
            "after": "OH",
            "fix_type": "State converted to abbreviation",
        }
    ]
    issues = [UnresolvedIssue(5, "email", "bob", "Invalid email (missing @)")]
    assert unresolved_to_rows(issues)[0]["row_number"] == "5"
