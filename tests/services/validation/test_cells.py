from __future__ import annotations

from donorcheck.services.validation.cells import (
    is_valid_date,
    is_valid_donation,
    is_valid_email,
    normalize_date,
)


def test_is_valid_email_is_permissive() -> None:
    assert is_valid_email("a@b")
    assert is_valid_email("@")
    assert not is_valid_email("")
    assert not is_valid_email("   ")
    assert not is_valid_email("john.example.com")


def test_is_valid_donation() -> None:
    assert is_valid_donation("10")
    assert is_valid_donation("$1,250.50")
    assert is_valid_donation(" $ 5 ")
    assert not is_valid_donation("0")
    assert not is_valid_donation("0.00")
    assert not is_valid_donation("-$50.00")
    assert not is_valid_donation("abc")
    assert not is_valid_donation("")
    assert not is_valid_donation("inf")
    assert not is_valid_donation("nan")


def test_is_valid_date_accepted_shapes() -> None:
    assert is_valid_date("2024-03-04")
    assert is_valid_date("3/4/2024")
    assert is_valid_date("03/04/2024")
    assert is_valid_date("2/29/2024")


def test_is_valid_date_rejects_rollover_and_other_shapes() -> None:
    assert not is_valid_date("2023-02-29")
    assert not is_valid_date("2024-13-01")
    assert not is_valid_date("13/05/2024")
    assert not is_valid_date("04-03-2024")
    assert not is_valid_date("2024/03/04")
    assert not is_valid_date("2024-3-4")
    assert not is_valid_date("２０２４-０１-０１")
    assert not is_valid_date("١/٢/٢٠٢٤")
    assert not is_valid_date("")


def test_normalize_date() -> None:
    assert normalize_date("2024-03-04") == "2024-03-04"
    assert normalize_date("3/4/2024") == "2024-03-04"
    assert normalize_date("12/25/2020") == "2020-12-25"
    assert normalize_date("04-03-2024") == "04-03-2024"
    assert normalize_date("") == ""
