from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .app.container import build_container
from .app.orchestrator import EXIT_UNEXPECTED, Orchestrator
from .config import Config, load_config
from .types import ConfigOverrides


def _make_orchestrator(cfg: Config) -> Orchestrator:
    container = build_container("donorcheck")
    return Orchestrator(container=container, cfg=cfg, logger=logging.getLogger("donorcheck.main"))


def run_pipeline(input_path: Path, out_dir: Path, cfg: Config | None = None) -> int:
    orch = _make_orchestrator(cfg or Config())
    return orch.run(input_path, out_dir)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Validate and clean donor/contact tables")
    ap.add_argument("--input", required=True, type=Path, help="Path to a .csv, .xlsx or .xls file")
    ap.add_argument(
        "--out", required=False, type=Path, default=Path("runs"), help="Output base dir"
    )
    ap.add_argument("--config", required=False, type=Path, help="Optional YAML config file")
    ap.add_argument(
        "--auto-fix",
        action="store_true",
        default=None,
        help="Run the auto-fix pass before exporting",
    )
    ap.add_argument(
        "--flip-negatives",
        action="store_true",
        default=None,
        help="Auto-fix: turn negative amounts positive",
    )
    ap.add_argument(
        "--zero-invalid",
        action="store_true",
        default=None,
        help="Auto-fix: report zero amounts as unresolved",
    )
    ap.add_argument(
        "--swap-dates",
        action="store_true",
        default=None,
        help="Auto-fix: retry impossible M/D/YYYY dates as D/M/YYYY",
    )
    ap.add_argument(
        "--format",
        required=False,
        choices=["csv", "xlsx"],
        default=None,
        help="Output format for exported row sets (default from config)",
    )
    ap.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Exit with code 1 when invalid rows remain",
    )
    ap.add_argument(
        "--max-errors", required=False, type=int, default=None, help="Max errors to show in logs"
    )
    args = ap.parse_args(argv)

    overrides: ConfigOverrides = {}
    # Optional overrides only when provided
    if args.auto_fix:
        overrides["auto_fix"] = True
    if args.flip_negatives:
        overrides["flip_negative_amounts"] = True
    if args.zero_invalid:
        overrides["treat_zero_amounts_invalid"] = True
    if args.swap_dates:
        overrides["try_ambiguous_date_swaps"] = True
    if args.strict:
        overrides["strict_fail"] = True
    if args.format:
        overrides["output_format"] = args.format
    if args.max_errors is not None:
        overrides["max_errors"] = int(args.max_errors)
    cfg = load_config(args.config, overrides=overrides)

    try:
        return run_pipeline(args.input, args.out, cfg)
    except Exception as exc:  # pragma: no cover
        logging.basicConfig(level=logging.ERROR)
        logging.exception("Unhandled exception: %s", exc)
        return EXIT_UNEXPECTED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
