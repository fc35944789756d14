from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Sequence

from ..types import Row
from .autofix.engine import AutoFixOptions, AutoFixResult, auto_fix
from .export.cleaning import group_unresolved_by_reason


class AutoFixService:
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def run(self, rows: Sequence[Row], options: AutoFixOptions) -> AutoFixResult:
        self.logger.info("Running auto-fix", extra={"rows": len(rows), **asdict(options)})
        result = auto_fix(rows, options)
        self.logger.info(
            f"Auto-fix complete - {result.total_issues_fixed} issues corrected",
            extra={k: v for k, v in asdict(result.change_log).items() if v},
        )
        if result.unresolved_issues:
            self.logger.warning(
                f"{len(result.unresolved_issues)} issues require manual review"
            )
            for reason, issues in group_unresolved_by_reason(result.unresolved_issues).items():
                rows_txt = ", ".join(str(i.row_number) for i in issues[:5])
                self.logger.warning(f"  {reason} ({len(issues)}): rows {rows_txt}")
        return result
