from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, cast

from .services.autofix.engine import AutoFixOptions
from .types import ConfigOverrides, YamlConfig


_BOOL_KEYS = (
    "auto_fix",
    "flip_negative_amounts",
    "treat_zero_amounts_invalid",
    "try_ambiguous_date_swaps",
    "strict_fail",
)


@dataclass(frozen=True)
class Config:
    pipeline_version: str = "v1.0"
    auto_fix: bool = False
    flip_negative_amounts: bool = False
    treat_zero_amounts_invalid: bool = False
    try_ambiguous_date_swaps: bool = False
    # Exit non-zero when invalid rows remain after the run
    strict_fail: bool = False
    max_errors: int = 50
    # Export format for the row sets: 'csv' (default) or 'xlsx'
    output_format: str = "csv"

    def autofix_options(self) -> AutoFixOptions:
        return AutoFixOptions(
            flip_negative_amounts=self.flip_negative_amounts,
            treat_zero_amounts_invalid=self.treat_zero_amounts_invalid,
            try_ambiguous_date_swaps=self.try_ambiguous_date_swaps,
        )


def load_config(path: Optional[Path], overrides: Optional[ConfigOverrides] = None) -> Config:
    import yaml

    data: YamlConfig = {}

    # Always load configs/config.yaml if it exists
    default_config = Path("configs/config.yaml")
    if default_config.exists():
        raw = yaml.safe_load(default_config.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            data.update(cast(YamlConfig, raw))

    # Then load custom config if provided (overrides default)
    if path is not None and path.exists():
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if isinstance(raw, dict):
            data.update(cast(YamlConfig, raw))

    # Finally apply CLI overrides
    if overrides:
        data.update(cast(YamlConfig, {k: v for k, v in overrides.items() if v is not None}))

    # Coerce booleans from strings if needed (Windows/CLI friendliness)
    for key in _BOOL_KEYS:
        if key in data:
            val = data.get(key)
            if isinstance(val, str):
                data[key] = val.strip().lower() in {"1", "true", "yes", "y"}

    output_format = str(data.get("output_format", "csv")).strip().lower()
    if output_format not in {"csv", "xlsx"}:
        raise ValueError(f"Unsupported output_format '{output_format}' (expected csv or xlsx)")

    defaults = Config()
    return Config(
        pipeline_version=str(data.get("pipeline_version", defaults.pipeline_version)),
        auto_fix=bool(data.get("auto_fix", defaults.auto_fix)),
        flip_negative_amounts=bool(
            data.get("flip_negative_amounts", defaults.flip_negative_amounts)
        ),
        treat_zero_amounts_invalid=bool(
            data.get("treat_zero_amounts_invalid", defaults.treat_zero_amounts_invalid)
        ),
        try_ambiguous_date_swaps=bool(
            data.get("try_ambiguous_date_swaps", defaults.try_ambiguous_date_swaps)
        ),
        strict_fail=bool(data.get("strict_fail", defaults.strict_fail)),
        max_errors=int(data.get("max_errors", defaults.max_errors)),
        output_format=output_format,
    )
