from __future__ import annotations

from collections import Counter
from dataclasses import asdict
from typing import AbstractSet, Dict, Iterable, List, Sequence

from ...domain.errors import ErrorCategory, ValidationError
from ...types import Dataset, ErrorSummary, Row
from ..autofix.engine import DetailedChange, UnresolvedIssue
from ..validation.cells import normalize_date
from ..validation.fields import FieldRole, classify_field


def clean_for_export(rows: Sequence[Row], invalid_row_indices: AbstractSet[int]) -> Dataset:
    """Valid rows only, every cell trimmed and date columns as YYYY-MM-DD where possible."""
    out: Dataset = []
    for index, row in enumerate(rows):
        if index in invalid_row_indices:
            continue
        cleaned: Row = {}
        for key, value in row.items():
            v = value.strip()
            if classify_field(key) is FieldRole.DATE:
                v = normalize_date(v)
            cleaned[key] = v
        out.append(cleaned)
    return out


def invalid_rows(rows: Sequence[Row], invalid_row_indices: AbstractSet[int]) -> Dataset:
    return [dict(row) for index, row in enumerate(rows) if index in invalid_row_indices]


def error_summary(errors: Iterable[ValidationError]) -> ErrorSummary:
    counts = Counter(err.category for err in errors)
    return {
        "email": counts[ErrorCategory.EMAIL],
        "donation": counts[ErrorCategory.DONATION],
        "date": counts[ErrorCategory.DATE],
        "duplicate": counts[ErrorCategory.DUPLICATE],
    }


def group_unresolved_by_reason(
    issues: Iterable[UnresolvedIssue],
) -> Dict[str, List[UnresolvedIssue]]:
    """Group issues by identical reason text, keeping first-seen order."""
    grouped: Dict[str, List[UnresolvedIssue]] = {}
    for issue in issues:
        grouped.setdefault(issue.reason, []).append(issue)
    return grouped


def changes_to_rows(changes: Iterable[DetailedChange]) -> Dataset:
    return [{k: str(v) for k, v in asdict(c).items()} for c in changes]


def unresolved_to_rows(issues: Iterable[UnresolvedIssue]) -> Dataset:
    return [{k: str(v) for k, v in asdict(i).items()} for i in issues]
