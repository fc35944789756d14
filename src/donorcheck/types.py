from __future__ import annotations

from typing import Dict, List, Tuple, TypedDict


Row = Dict[str, str]
Dataset = List[Row]
CellKey = Tuple[int, str]


class ErrorSummary(TypedDict):
    email: int
    donation: int
    date: int
    duplicate: int


class ManifestInput(TypedDict):
    path: str
    sha256: str


class ManifestOptions(TypedDict):
    auto_fix: bool
    flip_negative_amounts: bool
    treat_zero_amounts_invalid: bool
    try_ambiguous_date_swaps: bool
    strict_fail: bool
    output_format: str


class ManifestTotals(TypedDict):
    total_rows: int
    valid_rows: int
    invalid_rows: int
    issues_fixed: int
    unresolved_issues: int
    errors: ErrorSummary


class ManifestEnvironment(TypedDict):
    python: str
    platform: str
    pandas: str


class Manifest(TypedDict):
    pipeline_version: str
    started_at: str
    finished_at: str
    input: ManifestInput
    options: ManifestOptions
    totals: ManifestTotals
    environment: ManifestEnvironment


class ConfigOverrides(TypedDict, total=False):
    pipeline_version: str
    auto_fix: bool
    flip_negative_amounts: bool
    treat_zero_amounts_invalid: bool
    try_ambiguous_date_swaps: bool
    strict_fail: bool
    max_errors: int
    output_format: str


class YamlConfig(TypedDict, total=False):
    pipeline_version: str
    auto_fix: bool
    flip_negative_amounts: bool
    treat_zero_amounts_invalid: bool
    try_ambiguous_date_swaps: bool
    strict_fail: bool
    max_errors: int
    output_format: str
