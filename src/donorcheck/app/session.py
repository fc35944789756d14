from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import FrozenSet, Mapping, Optional, Sequence, Tuple

from ..services.autofix.engine import AutoFixOptions, AutoFixResult, auto_fix
from ..services.validation.dataset import ValidationResult, cell_key, validate_dataset
from ..services.validation.incremental import CellValidationResult, validate_cell
from ..types import CellKey, Dataset, Row


def _copy_rows(rows: Sequence[Row]) -> Dataset:
    return [dict(r) for r in rows]


@dataclass(frozen=True)
class Session:
    """Immutable snapshot of one editing session.

    Every transition below returns a new Session; the host keeps older ones if
    it wants a longer history than the single auto-fix undo kept here.
    """

    original_rows: Dataset
    rows: Dataset
    validation: ValidationResult
    edited_cells: Mapping[CellKey, str] = field(default_factory=dict)
    corrected_cells: FrozenSet[CellKey] = frozenset()
    pre_autofix_rows: Optional[Dataset] = None

    @property
    def has_auto_fix(self) -> bool:
        return self.pre_autofix_rows is not None

    def is_edited(self, row_index: int, field_name: str) -> bool:
        return cell_key(row_index, field_name) in self.edited_cells

    def is_corrected(self, row_index: int, field_name: str) -> bool:
        return cell_key(row_index, field_name) in self.corrected_cells


class EditStatus(str, Enum):
    UNCHANGED = "unchanged"
    CORRECTED = "corrected"  # cell had an error and the new value passes
    UPDATED = "updated"  # new value passes, there was no error to clear
    INVALID = "invalid"


@dataclass(frozen=True)
class EditOutcome:
    session: Session
    status: EditStatus
    cell_result: Optional[CellValidationResult] = None


def open_session(rows: Sequence[Row]) -> Session:
    original = _copy_rows(rows)
    current = _copy_rows(rows)
    return Session(original_rows=original, rows=current, validation=validate_dataset(current))


def edit_cell(session: Session, row_index: int, field_name: str, new_value: str) -> EditOutcome:
    """Apply one cell edit and revalidate.

    The incremental check decides the status; the stored report always comes
    from a full pass over the updated rows. A row index out of range or a
    column the row does not have leaves the session as it is.
    """
    if not 0 <= row_index < len(session.rows):
        return EditOutcome(session=session, status=EditStatus.UNCHANGED)
    row = session.rows[row_index]
    if field_name not in row or row[field_name] == new_value:
        return EditOutcome(session=session, status=EditStatus.UNCHANGED)

    rows = list(session.rows)
    rows[row_index] = {**rows[row_index], field_name: new_value}

    cell_res = validate_cell(field_name, new_value, row_index, rows, rows[row_index])

    key = cell_key(row_index, field_name)
    edited = {**session.edited_cells, key: new_value}
    corrected = session.corrected_cells
    if not cell_res.is_valid:
        status = EditStatus.INVALID
    elif key in session.validation.cell_errors:
        corrected = corrected | {key}
        status = EditStatus.CORRECTED
    else:
        status = EditStatus.UPDATED

    new_session = replace(
        session,
        rows=rows,
        validation=validate_dataset(rows),
        edited_cells=edited,
        corrected_cells=corrected,
    )
    return EditOutcome(session=new_session, status=status, cell_result=cell_res)


def reset_changes(session: Session) -> Session:
    """Back to the uploaded rows with edit tracking cleared."""
    if not session.edited_cells:
        return session
    rows = _copy_rows(session.original_rows)
    return replace(
        session,
        rows=rows,
        validation=validate_dataset(rows),
        edited_cells={},
        corrected_cells=frozenset(),
        pre_autofix_rows=None,
    )


def apply_auto_fix(session: Session, options: AutoFixOptions) -> Tuple[Session, AutoFixResult]:
    result = auto_fix(session.rows, options)
    rows = _copy_rows(result.cleaned_data)
    new_session = replace(
        session,
        rows=rows,
        validation=validate_dataset(rows),
        pre_autofix_rows=_copy_rows(session.rows),
    )
    return new_session, result


def undo_auto_fix(session: Session) -> Session:
    if session.pre_autofix_rows is None:
        return session
    rows = _copy_rows(session.pre_autofix_rows)
    return replace(session, rows=rows, validation=validate_dataset(rows), pre_autofix_rows=None)
