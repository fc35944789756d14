from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Sequence

from ..config import Config
from ..domain.errors import TableReadError
from ..services.autofix.engine import AutoFixResult
from ..services.export.cleaning import (
    changes_to_rows,
    clean_for_export,
    invalid_rows,
    unresolved_to_rows,
)
from ..services.output.manifest_writer import write_manifest
from ..types import Row
from .container import Container
from .run_manager import start_run


EXIT_OK = 0
EXIT_INVALID_ROWS = 1
EXIT_READ_ERROR = 2
EXIT_UNEXPECTED = 3


def _now() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class Orchestrator:
    container: Container
    cfg: Config
    logger: logging.Logger

    def run(self, input_path: Path, out_dir: Path) -> int:
        """
        Pipeline: read table -> validate -> optional auto-fix + revalidate ->
        write cleaned / full / error-report row sets and a run manifest.
        """
        run_ctx = start_run(out_dir)
        started = _now()

        try:
            rows = self.container.io.read(input_path)
            if not rows:
                self.logger.warning("Input has no data rows")

            validation = self.container.validate.validate(rows)
            fix_result: Optional[AutoFixResult] = None

            if self.cfg.auto_fix:
                before_invalid = len(validation.invalid_row_indices)
                fix_result = self.container.autofix.run(rows, self.cfg.autofix_options())
                rows = fix_result.cleaned_data
                validation = self.container.validate.validate(rows)
                self.logger.info(
                    f"Invalid rows: {before_invalid} before auto-fix, "
                    f"{len(validation.invalid_row_indices)} after"
                )

            self.container.validate.log_errors(validation, self.cfg.max_errors)

            products: Dict[str, Sequence[Row]] = {
                "cleaned": clean_for_export(rows, validation.invalid_row_indices),
                "full_updated": rows,
            }
            if validation.invalid_row_indices:
                products["error_report"] = invalid_rows(rows, validation.invalid_row_indices)
            if fix_result is not None:
                products["autofix_changes"] = changes_to_rows(fix_result.detailed_changes)
                products["autofix_unresolved"] = unresolved_to_rows(fix_result.unresolved_issues)

            self._write_products(products, input_path.stem, run_ctx.run_dir)

            write_manifest(
                run_dir=run_ctx.run_dir,
                input_path=input_path,
                started_at=started,
                finished_at=_now(),
                cfg=self.cfg,
                validation=validation,
                fix_result=fix_result,
                logger=self.logger,
            )

            self.logger.info(
                f"{validation.valid_rows} of {validation.total_rows} rows valid",
                extra={"run_dir": str(run_ctx.run_dir)},
            )
            if self.cfg.strict_fail and validation.invalid_row_indices:
                self.logger.error("Run FAILED: invalid rows remain (strict mode)")
                return EXIT_INVALID_ROWS
            return EXIT_OK

        except TableReadError as e:
            self.logger.error(f"Could not read input: {e}", extra={"path": str(input_path)})
            return EXIT_READ_ERROR
        except Exception as e:
            self.logger.error(f"Pipeline failed: {e}", exc_info=True)
            return EXIT_UNEXPECTED

    def _write_products(
        self, products: Dict[str, Sequence[Row]], stem: str, run_dir: Path
    ) -> None:
        io = self.container.io
        if self.cfg.output_format == "xlsx":
            # Sheet names double as table names, so no spaces
            sheets = {name.title().replace("_", ""): rs for name, rs in products.items()}
            io.write_workbook(sheets, run_dir / f"{stem}_checked.xlsx")
            return
        for name, rs in products.items():
            if name.startswith("autofix_"):
                io.write_rows(rs, run_dir / f"{name}.csv")
            else:
                io.write_rows(rs, run_dir / f"{name}_{stem}.csv")
