from __future__ import annotations

from donorcheck.services.autofix.columns import standardize_column_names


def test_renames_loose_headers_and_keeps_values() -> None:
    rows = [{"Email Address": "a@x.com", "First Name": "ann", "notes": "hi"}]
    out, count = standardize_column_names(rows)
    assert count == 2
    assert out == [{"email": "a@x.com", "first_name": "ann", "notes": "hi"}]
    # input untouched
    assert "Email Address" in rows[0]


def test_nothing_to_rename() -> None:
    rows = [{"email": "a@x.com"}]
    out, count = standardize_column_names(rows)
    assert count == 0
    assert out == rows
    assert out[0] is not rows[0]


def test_does_not_collapse_onto_existing_column() -> None:
    rows = [{"amount": "5", "donation_amount": "10"}]
    out, count = standardize_column_names(rows)
    assert count == 0
    assert out == [{"amount": "5", "donation_amount": "10"}]


def test_first_variant_claims_canonical_name() -> None:
    rows = [{"id": "1", "Donor ID": "A"}]
    out, count = standardize_column_names(rows)
    assert count == 1
    assert out == [{"donor_id": "1", "Donor ID": "A"}]


def test_empty_dataset() -> None:
    assert standardize_column_names([]) == ([], 0)
