from __future__ import annotations

from typing import Sequence

from ...types import Row


def _escape(value: str) -> str:
    if "," in value or '"' in value:
        return '"' + value.replace('"', '""') + '"'
    return value


def to_delimited_text(rows: Sequence[Row]) -> str:
    """Serialize rows as comma-separated text.

    The header is taken from the first row; every row is written in that
    column order. An empty dataset yields "" (no header line either).
    """
    if not rows:
        return ""
    headers = list(rows[0].keys())
    lines = [",".join(_escape(h) for h in headers)]
    for row in rows:
        lines.append(",".join(_escape(row.get(h) or "") for h in headers))
    return "\n".join(lines)
