from __future__ import annotations

from typing import List, Sequence, Tuple

from ...types import Dataset, Row
from ..validation.fields import standardize_column_name


def standardize_column_names(rows: Sequence[Row]) -> Tuple[Dataset, int]:
    """Rename loose header variants to canonical names.

    Headers come from the first row. A header is left alone when its canonical
    name is already a header (or was claimed by an earlier rename), so two
    columns never collapse into one. Returns (rows, renamed_count); rows are
    rebuilt only when something was renamed.
    """
    if not rows:
        return [], 0

    original: List[str] = list(rows[0].keys())
    taken = set(original)
    renamed: List[str] = []
    for header in original:
        canonical = standardize_column_name(header)
        if canonical != header and canonical not in taken:
            taken.add(canonical)
            renamed.append(canonical)
        else:
            renamed.append(header)

    count = sum(1 for old, new in zip(original, renamed) if old != new)
    if count == 0:
        return [dict(r) for r in rows], 0

    out: Dataset = []
    for row in rows:
        out.append({new: row.get(old, "") for old, new in zip(original, renamed)})
    return out, count
