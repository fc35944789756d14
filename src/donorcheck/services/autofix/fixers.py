from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...domain.schema_defs import (
    EMAIL_DOMAIN_TYPOS,
    FIX_YEAR_MAX,
    FIX_YEAR_MIN,
    STATE_ABBREVIATIONS,
)
from ...utils.normalize import format_number, parse_decimal, strip_currency_formatting, title_case
from ..validation.cells import is_calendar_date


class ChangeKind(str, Enum):
    """Change-log bucket a successful fix is counted in."""

    COLUMN_RENAMED = "columns_renamed"
    NAME_CORRECTED = "names_corrected"
    EMAIL_LOWERCASED = "emails_lowercased"
    EMAIL_CORRECTED = "emails_corrected"
    DATE_NORMALIZED = "dates_normalized"
    WHITESPACE_REMOVED = "whitespace_removed"
    STATE_NORMALIZED = "states_normalized"
    CURRENCY_NORMALIZED = "currency_normalized"
    NEGATIVE_FLIPPED = "negative_amounts_flipped"


@dataclass(frozen=True)
class FixResult:
    """Outcome of one fixer on one value.

    fixed=True: ``value`` replaces the cell and ``kind``/``reason`` describe it.
    fixed=False with a reason: a defect was seen but left alone (unresolved).
    fixed=False without a reason: nothing to do.
    """

    value: str
    fixed: bool = False
    reason: Optional[str] = None
    kind: Optional[ChangeKind] = None


@dataclass(frozen=True)
class AutoFixOptions:
    flip_negative_amounts: bool = False
    treat_zero_amounts_invalid: bool = False
    try_ambiguous_date_swaps: bool = False


REASON_EMAIL_MISSING_AT = "Invalid email (missing @)"
REASON_EMAIL_FORMAT = "Invalid email format"
REASON_DATE_VALUES = "Invalid date values"
REASON_DATE_UNPARSABLE = "Unparsable date format"
REASON_DATE_EMPTY = "Empty date value"
REASON_CURRENCY_FORMAT = "Invalid currency format"
REASON_ZERO_AMOUNT = "Zero amount treated as invalid"


def fix_name(value: str) -> FixResult:
    if not value:
        return FixResult(value)
    titled = title_case(value)
    if titled == value:
        return FixResult(value)
    return FixResult(titled, True, "Name capitalized", ChangeKind.NAME_CORRECTED)


def fix_email(value: str) -> FixResult:
    if not value:
        return FixResult(value)

    normalized = value.strip().lower()
    changed = normalized != value

    if "@" not in normalized:
        return FixResult(value, reason=REASON_EMAIL_MISSING_AT)

    parts = normalized.split("@")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        return FixResult(value, reason=REASON_EMAIL_FORMAT)

    local, domain = parts
    correct = EMAIL_DOMAIN_TYPOS.get(domain)
    if correct is not None:
        return FixResult(
            f"{local}@{correct}",
            True,
            f"Corrected typo: {domain} -> {correct}",
            ChangeKind.EMAIL_CORRECTED,
        )
    if changed:
        return FixResult(normalized, True, "Lowercased and trimmed", ChangeKind.EMAIL_LOWERCASED)
    return FixResult(value)


def is_fixable_date(year: int, month: int, day: int) -> bool:
    return FIX_YEAR_MIN <= year <= FIX_YEAR_MAX and is_calendar_date(year, month, day)


def _iso(year: int, month: int, day: int) -> str:
    return f"{year:04d}-{month:02d}-{day:02d}"


_FIX_ISO_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)

# (pattern, label, positions of year/month/day in the match groups)
_DATE_SHAPES = (
    (re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})", re.ASCII), "MDY", (3, 1, 2)),
    (re.compile(r"(\d{4})/(\d{1,2})/(\d{1,2})", re.ASCII), "YMD", (1, 2, 3)),
    (re.compile(r"(\d{1,2})-(\d{1,2})-(\d{4})", re.ASCII), "DMY", (3, 2, 1)),
)


def fix_date(value: str, try_ambiguous_swaps: bool = False) -> FixResult:
    """Normalize a date to YYYY-MM-DD.

    Accepts YYYY-MM-DD (kept as-is when valid), M/D/YYYY, YYYY/M/D and
    D-M-YYYY. With ``try_ambiguous_swaps`` an M/D/YYYY value whose month is
    out of range is retried as D/M/YYYY.
    """
    if not value or not value.strip():
        return FixResult(value, reason=REASON_DATE_EMPTY)

    trimmed = value.strip()

    m = _FIX_ISO_RE.fullmatch(trimmed)
    if m:
        y, mo, d = int(m.group(1)), int(m.group(2)), int(m.group(3))
        if is_fixable_date(y, mo, d):
            return FixResult(trimmed)
        return FixResult(value, reason=REASON_DATE_VALUES)

    for pattern, label, (yi, mi, di) in _DATE_SHAPES:
        m = pattern.fullmatch(trimmed)
        if not m:
            continue
        y, mo, d = int(m.group(yi)), int(m.group(mi)), int(m.group(di))
        if is_fixable_date(y, mo, d):
            return FixResult(
                _iso(y, mo, d), True, f"Normalized from {label} format", ChangeKind.DATE_NORMALIZED
            )
        if try_ambiguous_swaps and label == "MDY" and is_fixable_date(y, d, mo):
            return FixResult(
                _iso(y, d, mo),
                True,
                "Normalized with ambiguous date swap (DD/MM)",
                ChangeKind.DATE_NORMALIZED,
            )

    return FixResult(value, reason=REASON_DATE_UNPARSABLE)


def fix_currency(value: str, options: AutoFixOptions) -> FixResult:
    if not value:
        return FixResult(value)

    cleaned = strip_currency_formatting(value)
    num = parse_decimal(cleaned)
    if num is None:
        return FixResult(value, reason=REASON_CURRENCY_FORMAT)

    if options.treat_zero_amounts_invalid and num == 0:
        return FixResult(value, reason=REASON_ZERO_AMOUNT)

    if options.flip_negative_amounts and num < 0:
        return FixResult(
            format_number(abs(num)),
            True,
            "Flipped negative amount to positive",
            ChangeKind.NEGATIVE_FLIPPED,
        )

    if cleaned != value:
        return FixResult(
            format_number(num),
            True,
            "Removed currency symbols and formatting",
            ChangeKind.CURRENCY_NORMALIZED,
        )
    return FixResult(value)


_STATE_CODE_RE = re.compile(r"[A-Z]{2}")


def fix_state(value: str) -> FixResult:
    """Full US state name -> two-letter code; anything unrecognized is left alone."""
    if not value:
        return FixResult(value)
    trimmed = value.strip()
    if _STATE_CODE_RE.fullmatch(trimmed):
        return FixResult(value)
    abbreviation = STATE_ABBREVIATIONS.get(trimmed.lower())
    if abbreviation is None:
        return FixResult(value)
    return FixResult(
        abbreviation, True, "State converted to abbreviation", ChangeKind.STATE_NORMALIZED
    )
