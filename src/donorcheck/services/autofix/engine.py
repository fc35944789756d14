from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ...domain.schema_defs import (
    AUTOFIX_CURRENCY_FIELDS,
    AUTOFIX_DATE_FIELDS,
    HEADER_ROW_OFFSET,
)
from ...types import Dataset, Row
from .columns import standardize_column_names
from .fixers import (
    AutoFixOptions,
    ChangeKind,
    FixResult,
    fix_currency,
    fix_date,
    fix_email,
    fix_name,
    fix_state,
)


@dataclass(frozen=True)
class AutoFixChangeLog:
    columns_renamed: int = 0
    names_corrected: int = 0
    emails_lowercased: int = 0
    emails_corrected: int = 0
    dates_normalized: int = 0
    whitespace_removed: int = 0
    states_normalized: int = 0
    currency_normalized: int = 0
    negative_amounts_flipped: int = 0

    @property
    def total(self) -> int:
        return sum(getattr(self, kind.value) for kind in ChangeKind)


@dataclass(frozen=True)
class DetailedChange:
    row_number: int
    field: str
    before: str
    after: str
    fix_type: str


@dataclass(frozen=True)
class UnresolvedIssue:
    row_number: int
    field: str
    value: str
    reason: str


@dataclass(frozen=True)
class AutoFixResult:
    cleaned_data: Dataset
    change_log: AutoFixChangeLog
    total_issues_fixed: int
    detailed_changes: Tuple[DetailedChange, ...]
    unresolved_issues: Tuple[UnresolvedIssue, ...]


class _FixPass:
    """Accumulates counters, changes and unresolved issues for one auto-fix run."""

    def __init__(self) -> None:
        self.counts: Counter[ChangeKind] = Counter()
        self.changes: List[DetailedChange] = []
        self.unresolved: List[UnresolvedIssue] = []

    def apply(
        self, row_num: int, field: str, raw: str, current: str, result: FixResult
    ) -> str:
        if result.fixed and result.kind is not None:
            self.counts[result.kind] += 1
            self.changes.append(
                DetailedChange(row_num, field, raw, result.value, result.reason or "")
            )
            return result.value
        if result.reason:
            self.unresolved.append(UnresolvedIssue(row_num, field, raw, result.reason))
        return current

    def fix_row(self, row: Row, row_num: int, options: AutoFixOptions) -> Row:
        out: Row = {}
        for key, raw in row.items():
            value = raw
            lower_key = key.lower()

            if value and value.strip() != value:
                trimmed = value.strip()
                self.counts[ChangeKind.WHITESPACE_REMOVED] += 1
                self.changes.append(
                    DetailedChange(row_num, key, value, trimmed, "Whitespace removed")
                )
                value = trimmed

            if value and "name" in lower_key and "username" not in lower_key:
                value = self.apply(row_num, key, raw, value, fix_name(value))

            if value and "email" in lower_key:
                value = self.apply(row_num, key, raw, value, fix_email(value))

            if value and lower_key in AUTOFIX_DATE_FIELDS:
                value = self.apply(
                    row_num, key, raw, value, fix_date(value, options.try_ambiguous_date_swaps)
                )

            if value and lower_key in AUTOFIX_CURRENCY_FIELDS:
                value = self.apply(row_num, key, raw, value, fix_currency(value, options))

            if value and lower_key == "state":
                value = self.apply(row_num, key, raw, value, fix_state(value))

            out[key] = value
        return out


def auto_fix(rows: Sequence[Row], options: AutoFixOptions | None = None) -> AutoFixResult:
    """Run one auto-fix pass over ``rows``; the input is never modified.

    Headers are standardized first, then each cell goes through the rule
    cascade trim -> name case -> email -> date -> currency -> state. For a fixed
    ``options`` a second pass over ``cleaned_data`` changes nothing.
    """
    opts = options or AutoFixOptions()
    renamed_rows, renamed_count = standardize_column_names(rows)

    fix_pass = _FixPass()
    fix_pass.counts[ChangeKind.COLUMN_RENAMED] = renamed_count
    cleaned = [
        fix_pass.fix_row(row, index + HEADER_ROW_OFFSET, opts)
        for index, row in enumerate(renamed_rows)
    ]

    change_log = AutoFixChangeLog(**{kind.value: fix_pass.counts[kind] for kind in ChangeKind})
    return AutoFixResult(
        cleaned_data=cleaned,
        change_log=change_log,
        total_issues_fixed=change_log.total,
        detailed_changes=tuple(fix_pass.changes),
        unresolved_issues=tuple(fix_pass.unresolved),
    )
