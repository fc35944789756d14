from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..types import Row
from .export.cleaning import error_summary
from .validation.dataset import ValidationResult, validate_dataset
from .validation.incremental import CellValidationResult, validate_cell


class ValidateService:
    """Logs around the pure dataset and cell validators."""

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def validate(self, rows: Sequence[Row]) -> ValidationResult:
        result = validate_dataset(rows)
        self.logger.info(
            "Validated dataset",
            extra={
                "rows": result.total_rows,
                "valid_rows": result.valid_rows,
                "invalid_rows": len(result.invalid_row_indices),
                "errors": dict(error_summary(result.errors)),
            },
        )
        return result

    def validate_cell(
        self,
        field: str,
        value: str,
        row_index: int,
        rows: Sequence[Row],
        row_data: Optional[Row] = None,
    ) -> CellValidationResult:
        res = validate_cell(field, value, row_index, rows, row_data)
        if not res.is_valid and res.error is not None:
            self.logger.debug(
                "Cell failed validation",
                extra={"row": res.error.row_number, "field": field, "reason": res.error.message},
            )
        return res

    def log_errors(self, result: ValidationResult, max_errors: int = 50) -> None:
        """Warn about the first ``max_errors`` errors, one line each."""
        if not result.errors:
            return
        shown = result.errors[:max_errors]
        self.logger.warning(
            f"{len(result.errors)} validation errors in {len(result.invalid_row_indices)} rows"
            f" (showing first {len(shown)})"
        )
        for err in shown:
            self.logger.warning(f"  Row {err.row_number} [{err.field}] {err.message}: '{err.value}'")
