from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain.errors import ErrorCategory, ValidationError
from ...domain.schema_defs import HEADER_ROW_OFFSET
from ...types import Row
from .cells import is_valid_date, is_valid_donation, is_valid_email
from .dataset import (
    DATE_MESSAGE,
    DONATION_MESSAGE,
    EMAIL_MESSAGE,
    duplicate_donor_id_message,
    duplicate_email_message,
)
from .fields import FieldRole, classify_field, fields_with_role


@dataclass(frozen=True)
class CellValidationResult:
    is_valid: bool
    error: Optional[ValidationError] = None


_VALID = CellValidationResult(is_valid=True)


def _find_other_match(
    rows: Sequence[Row], row_index: int, role: FieldRole, needle: str
) -> Optional[int]:
    """Index of the first other row holding ``needle`` in any column of ``role``."""
    for idx, r in enumerate(rows):
        if idx == row_index:
            continue
        for f in fields_with_role(r.keys(), role):
            v = r[f]
            if v and v.lower() == needle:
                return idx
    return None


def validate_cell(
    field: str,
    value: str,
    row_index: int,
    rows: Sequence[Row],
    row_data: Optional[Row] = None,
) -> CellValidationResult:
    """Advisory check of one edited cell against the rest of the dataset.

    ``rows`` is the dataset after the edit. Duplicates are searched in every
    other row, before and after ``row_index``, so the reported row may differ
    from what a full ``validate_dataset`` pass reports; that pass stays
    authoritative. ``row_data`` is the edited row as the host holds it; every
    rule here looks at a single cell so it is not consulted.
    """
    row_num = row_index + HEADER_ROW_OFFSET
    role = classify_field(field)

    if role is FieldRole.EMAIL:
        if not is_valid_email(value):
            return CellValidationResult(
                False, ValidationError(row_num, ErrorCategory.EMAIL, field, value, EMAIL_MESSAGE)
            )
        dup = _find_other_match(rows, row_index, role, value.lower())
        if dup is not None:
            return CellValidationResult(
                False,
                ValidationError(
                    row_num,
                    ErrorCategory.DUPLICATE,
                    field,
                    value,
                    duplicate_email_message(dup + HEADER_ROW_OFFSET),
                ),
            )
        return _VALID

    if role is FieldRole.DONATION_AMOUNT:
        if not is_valid_donation(value):
            return CellValidationResult(
                False,
                ValidationError(row_num, ErrorCategory.DONATION, field, value, DONATION_MESSAGE),
            )
        return _VALID

    if role is FieldRole.DATE:
        if not is_valid_date(value):
            return CellValidationResult(
                False, ValidationError(row_num, ErrorCategory.DATE, field, value, DATE_MESSAGE)
            )
        return _VALID

    if role is FieldRole.DONOR_ID and value:
        dup = _find_other_match(rows, row_index, role, value.lower())
        if dup is not None:
            return CellValidationResult(
                False,
                ValidationError(
                    row_num,
                    ErrorCategory.DUPLICATE,
                    field,
                    value,
                    duplicate_donor_id_message(dup + HEADER_ROW_OFFSET),
                ),
            )

    # Roles without a rule are not applicable here
    return _VALID
