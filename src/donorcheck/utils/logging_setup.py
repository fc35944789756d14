from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from rich.logging import RichHandler


# Attributes every LogRecord carries; anything else came in through ``extra=``
_RECORD_KEYS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
    "run_id",
}

# Extras worth echoing on the console; the JSON log keeps all of them
_CONSOLE_KEYS = ("row", "field", "rows", "invalid_rows", "path")


@dataclass(frozen=True)
class LogFiles:
    human: Path
    jsonl: Path


def record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_KEYS}


class RunIdFilter(logging.Filter):
    """Stamps every record with the run directory name."""

    def __init__(self, run_id: str) -> None:
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id
        return True


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "run_id": getattr(record, "run_id", None),
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        payload.update(record_extras(record))
        return json.dumps(payload, ensure_ascii=False, default=str)


class ConsoleFormatter(logging.Formatter):
    """Message plus a short ``key=value`` tail for the extras listed in _CONSOLE_KEYS."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = record_extras(record)
        tail = " ".join(f"{k}={extras[k]}" for k in _CONSOLE_KEYS if k in extras)
        return f"{base} [{tail}]" if tail else base


def setup_logging(run_dir: Path, level: int = logging.INFO, console: bool = True) -> LogFiles:
    run_dir.mkdir(parents=True, exist_ok=True)
    files = LogFiles(human=run_dir / "run.log", jsonl=run_dir / "logs.jsonl")
    run_filter = RunIdFilter(run_dir.name)

    root = logging.getLogger()
    root.setLevel(level)
    # Repeated runs in one process must not stack handlers
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    human_handler = logging.FileHandler(files.human, encoding="utf-8")
    human_handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)-7s | %(name)s | %(message)s")
    )
    json_handler = logging.FileHandler(files.jsonl, encoding="utf-8")
    json_handler.setFormatter(JsonLineFormatter())

    handlers: list[logging.Handler] = [human_handler, json_handler]
    if console:
        rich_handler = RichHandler(
            markup=False,
            show_path=False,
            rich_tracebacks=True,
            log_time_format="%H:%M:%S",
        )
        rich_handler.setFormatter(ConsoleFormatter("%(message)s"))
        handlers.append(rich_handler)

    for h in handlers:
        h.setLevel(level)
        h.addFilter(run_filter)
        root.addHandler(h)

    return files
