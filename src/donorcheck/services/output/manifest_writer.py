from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pandas as pd

from ...config import Config
from ...types import Manifest, ManifestEnvironment, ManifestOptions, ManifestTotals
from ..autofix.engine import AutoFixResult
from ..export.cleaning import error_summary
from ..validation.dataset import ValidationResult
from .utils import sha256_file


def write_manifest(
    *,
    run_dir: Path,
    input_path: Path,
    started_at: str,
    finished_at: str,
    cfg: Config,
    validation: ValidationResult,
    fix_result: Optional[AutoFixResult],
    logger: logging.Logger,
) -> Path:
    import platform
    import sys
    import yaml

    options: ManifestOptions = {
        "auto_fix": cfg.auto_fix,
        "flip_negative_amounts": cfg.flip_negative_amounts,
        "treat_zero_amounts_invalid": cfg.treat_zero_amounts_invalid,
        "try_ambiguous_date_swaps": cfg.try_ambiguous_date_swaps,
        "strict_fail": cfg.strict_fail,
        "output_format": cfg.output_format,
    }

    totals: ManifestTotals = {
        "total_rows": validation.total_rows,
        "valid_rows": validation.valid_rows,
        "invalid_rows": len(validation.invalid_row_indices),
        "issues_fixed": fix_result.total_issues_fixed if fix_result else 0,
        "unresolved_issues": len(fix_result.unresolved_issues) if fix_result else 0,
        "errors": error_summary(validation.errors),
    }

    env: ManifestEnvironment = {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "pandas": pd.__version__,
    }

    manifest: Manifest = {
        "pipeline_version": cfg.pipeline_version,
        "started_at": started_at,
        "finished_at": finished_at,
        "input": {"path": str(input_path), "sha256": sha256_file(input_path)},
        "options": options,
        "totals": totals,
        "environment": env,
    }

    out_path = run_dir / "run_manifest.yaml"
    logger.info("Writing run_manifest.yaml", extra={"path": str(out_path)})
    with out_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(dict(manifest), f, sort_keys=False, allow_unicode=True)
    return out_path
