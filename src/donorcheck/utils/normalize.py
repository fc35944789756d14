from __future__ import annotations

import math
import re
from typing import Optional


_CURRENCY_NOISE_RE = re.compile(r"[$,\s]")
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def normalize_header(value: str) -> str:
    """Lowercase and trim a column header for alias lookup."""
    return value.strip().lower()


def _capitalize(token: str) -> str:
    first = token[:1].upper()
    if len(first) != 1:
        return token
    return first + token[1:]


def title_case(value: str) -> str:
    """Lowercase, then capitalize the first letter of each space-separated token.

    Runs of spaces are kept as-is (empty tokens stay empty). A first letter
    whose uppercase form is more than one character ("ß") is left lowercase.
    """
    return " ".join(_capitalize(tok) for tok in value.lower().split(" "))


def strip_currency_formatting(value: str) -> str:
    """Remove dollar signs, thousands separators and all whitespace."""
    return _CURRENCY_NOISE_RE.sub("", value)


def parse_decimal(value: str) -> Optional[float]:
    """Parse a plain decimal literal; None for anything else (including inf/nan)."""
    if not _DECIMAL_RE.fullmatch(value):
        return None
    num = float(value)
    # Exponents past the float range overflow to inf
    return num if math.isfinite(num) else None


def format_number(num: float) -> str:
    """Render a number in its shortest form: 50.0 -> '50', 1000.50 -> '1000.5'."""
    if num == 0:
        return "0"
    if num.is_integer() and abs(num) < 1e21:
        return str(int(num))
    return repr(num)
