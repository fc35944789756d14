from __future__ import annotations

import re
from datetime import date

from ...utils.normalize import parse_decimal, strip_currency_formatting


_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)
_US_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})", re.ASCII)


def is_calendar_date(year: int, month: int, day: int) -> bool:
    """True when the parts name a real day (Feb 30 does not roll over into March)."""
    try:
        date(year, month, day)
    except ValueError:
        return False
    return True


def is_valid_email(value: str) -> bool:
    if not value or not value.strip():
        return False
    return "@" in value


def is_valid_donation(value: str) -> bool:
    if not value or not value.strip():
        return False
    num = parse_decimal(strip_currency_formatting(value))
    return num is not None and num > 0


def is_valid_date(value: str) -> bool:
    """Accepts YYYY-MM-DD or M/D/YYYY only."""
    if not value or not value.strip():
        return False

    m = _ISO_DATE_RE.fullmatch(value)
    if m:
        return is_calendar_date(int(m.group(1)), int(m.group(2)), int(m.group(3)))

    m = _US_DATE_RE.fullmatch(value)
    if m:
        return is_calendar_date(int(m.group(3)), int(m.group(1)), int(m.group(2)))

    return False


def normalize_date(value: str) -> str:
    """Reformat M/D/YYYY to YYYY-MM-DD; every other shape is returned unchanged."""
    if not value or _ISO_DATE_RE.fullmatch(value):
        return value
    m = _US_DATE_RE.fullmatch(value)
    if m:
        month, day, year = m.groups()
        return f"{year}-{int(month):02d}-{int(day):02d}"
    return value
