from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .schema_defs import HEADER_ROW_OFFSET


class ErrorCategory(str, Enum):
    EMAIL = "email"
    DONATION = "donation"
    DATE = "date"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class ValidationError:
    row_number: int  # display row: index + HEADER_ROW_OFFSET
    category: ErrorCategory
    field: str
    value: str
    message: str

    @property
    def row_index(self) -> int:
        return self.row_number - HEADER_ROW_OFFSET


class TableReadError(Exception):
    """Raised when an input table cannot be decoded into rows."""


class UnsupportedFileError(TableReadError):
    pass
