from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..utils.logging_setup import LogFiles, setup_logging


@dataclass(frozen=True)
class RunContext:
    run_id: str
    run_dir: Path
    logs: LogFiles


def new_run_id() -> str:
    # Microseconds keep back-to-back runs in separate directories
    return datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")


def start_run(out_dir: Path, base_logger_name: str = "donorcheck") -> RunContext:
    run_id = new_run_id()
    run_dir = out_dir / run_id
    logs = setup_logging(run_dir)
    logging.getLogger(base_logger_name).info("Run started", extra={"path": str(run_dir)})
    return RunContext(run_id=run_id, run_dir=run_dir, logs=logs)
