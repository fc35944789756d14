from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Mapping

from ...domain.schema_defs import (
    COLUMN_NAME_ALIASES,
    DATE_FIELDS,
    DONATION_FIELDS,
    DONOR_ID_FIELDS,
    EMAIL_FIELDS,
    STATE_FIELDS,
)
from ...utils.normalize import normalize_header


class FieldRole(str, Enum):
    EMAIL = "email"
    DONATION_AMOUNT = "donation_amount"
    DATE = "date"
    DONOR_ID = "donor_id"
    STATE = "state"
    NAME = "name"
    GENERIC = "generic"


_ROLE_BY_ALIAS: Mapping[str, FieldRole] = {
    **{alias: FieldRole.EMAIL for alias in EMAIL_FIELDS},
    **{alias: FieldRole.DONATION_AMOUNT for alias in DONATION_FIELDS},
    **{alias: FieldRole.DATE for alias in DATE_FIELDS},
    **{alias: FieldRole.DONOR_ID for alias in DONOR_ID_FIELDS},
    **{alias: FieldRole.STATE for alias in STATE_FIELDS},
}

VALIDATED_ROLES = (
    FieldRole.EMAIL,
    FieldRole.DONATION_AMOUNT,
    FieldRole.DATE,
    FieldRole.DONOR_ID,
)


def classify_field(name: str) -> FieldRole:
    """Map a column name to its semantic role (exact, case-insensitive aliases)."""
    key = name.lower()
    role = _ROLE_BY_ALIAS.get(key)
    if role is not None:
        return role
    if "name" in key and "username" not in key:
        return FieldRole.NAME
    return FieldRole.GENERIC


def fields_with_role(columns: Iterable[str], role: FieldRole) -> List[str]:
    """Columns (in table order) that classify as ``role``."""
    return [c for c in columns if classify_field(c) is role]


def standardize_column_name(name: str) -> str:
    """Canonical header for a loose variant ("E-mail" -> "email"); unknown names pass through."""
    return COLUMN_NAME_ALIASES.get(normalize_header(name), name)
