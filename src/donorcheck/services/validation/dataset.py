from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Mapping, MutableMapping, Optional, Sequence, Tuple

from ...domain.errors import ErrorCategory, ValidationError
from ...domain.schema_defs import HEADER_ROW_OFFSET
from ...types import CellKey, Row
from .cells import is_valid_date, is_valid_donation, is_valid_email
from .fields import FieldRole, fields_with_role


EMAIL_MESSAGE = "Invalid or missing email"
DONATION_MESSAGE = "Invalid donation amount (must be a number > 0)"
DATE_MESSAGE = "Invalid or missing date (use YYYY-MM-DD or MM/DD/YYYY)"


def duplicate_email_message(first_row: int) -> str:
    return f"Duplicate email (also in row {first_row})"


def duplicate_donor_id_message(first_row: int) -> str:
    return f"Duplicate donor ID (also in row {first_row})"


def cell_key(row_index: int, field_name: str) -> CellKey:
    return (row_index, field_name)


@dataclass(frozen=True)
class ValidationResult:
    total_rows: int
    valid_rows: int
    errors: Tuple[ValidationError, ...]
    invalid_row_indices: FrozenSet[int]
    cell_errors: Mapping[CellKey, ValidationError] = field(default_factory=dict)

    def error_for(self, row_index: int, field_name: str) -> Optional[ValidationError]:
        return self.cell_errors.get(cell_key(row_index, field_name))

    def is_row_valid(self, row_index: int) -> bool:
        return row_index not in self.invalid_row_indices


def _index_cell_errors(errors: Sequence[ValidationError]) -> Dict[CellKey, ValidationError]:
    index: Dict[CellKey, ValidationError] = {}
    for err in errors:
        # Last error recorded for a cell wins
        index[cell_key(err.row_index, err.field)] = err
    return index


def validate_dataset(rows: Sequence[Row]) -> ValidationResult:
    """Validate every row and detect cross-row duplicates.

    Rows are scanned top to bottom. Within a row the email columns are checked
    first, then donation, date and donor-id columns, each group in table order.
    The first occurrence of an email or donor id (case-insensitive) owns the
    value; later occurrences are reported as duplicates of it. Malformed emails
    are reported as email errors and never become an owner.
    """
    errors: List[ValidationError] = []
    invalid: set[int] = set()
    seen_emails: MutableMapping[str, int] = {}
    seen_donor_ids: MutableMapping[str, int] = {}

    def _record(index: int, err: ValidationError) -> None:
        errors.append(err)
        invalid.add(index)

    for index, row in enumerate(rows):
        row_num = index + HEADER_ROW_OFFSET
        columns = list(row.keys())

        for f in fields_with_role(columns, FieldRole.EMAIL):
            email = row[f]
            if not is_valid_email(email):
                _record(
                    index, ValidationError(row_num, ErrorCategory.EMAIL, f, email, EMAIL_MESSAGE)
                )
                continue
            key = email.lower()
            if key in seen_emails:
                _record(
                    index,
                    ValidationError(
                        row_num,
                        ErrorCategory.DUPLICATE,
                        f,
                        email,
                        duplicate_email_message(seen_emails[key]),
                    ),
                )
            else:
                seen_emails[key] = row_num

        for f in fields_with_role(columns, FieldRole.DONATION_AMOUNT):
            amount = row[f]
            if not is_valid_donation(amount):
                _record(
                    index,
                    ValidationError(row_num, ErrorCategory.DONATION, f, amount, DONATION_MESSAGE),
                )

        for f in fields_with_role(columns, FieldRole.DATE):
            value = row[f]
            if not is_valid_date(value):
                _record(index, ValidationError(row_num, ErrorCategory.DATE, f, value, DATE_MESSAGE))

        for f in fields_with_role(columns, FieldRole.DONOR_ID):
            donor_id = row[f]
            if not donor_id:
                continue
            key = donor_id.lower()
            if key in seen_donor_ids:
                _record(
                    index,
                    ValidationError(
                        row_num,
                        ErrorCategory.DUPLICATE,
                        f,
                        donor_id,
                        duplicate_donor_id_message(seen_donor_ids[key]),
                    ),
                )
            else:
                seen_donor_ids[key] = row_num

    return ValidationResult(
        total_rows=len(rows),
        valid_rows=len(rows) - len(invalid),
        errors=tuple(errors),
        invalid_row_indices=frozenset(invalid),
        cell_errors=_index_cell_errors(errors),
    )
