"""Command line entry point: collect kinetics at motif occurrence windows."""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Sequence
from typing import Any

from ipdwindow.config import ExpansionMode, OutputFormat, RunConfig
from ipdwindow.errors import IpdWindowError
from ipdwindow.pipeline import collect_window_kinetics
from ipdwindow.tables.registry import build_default_backend_registry

logger = logging.getLogger("ipdwindow.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Collect kinetics info at specified regions")
    parser.add_argument(
        "--kinetics",
        "-k",
        help="Kinetics CSV or HDF5 file generated by PacBio ipdSummary",
    )
    parser.add_argument(
        "--backend",
        choices=build_default_backend_registry().available(),
        help="Kinetics backend; inferred from the file suffix when omitted",
    )
    parser.add_argument(
        "--occ",
        help=(
            "File listing motif occurrences or target bases. Each row has chromosome name, "
            "0-based start position and strand, without a header line"
        ),
    )
    parser.add_argument(
        "--occ-width",
        type=int,
        help="Length of the motif or target region including the start position",
    )
    parser.add_argument(
        "--extend",
        type=int,
        help="Length of an extended region for each end of a target region",
    )
    parser.add_argument("--output", "-o", help="Output CSV path")
    parser.add_argument(
        "--format",
        choices=[item.value for item in OutputFormat],
        help="Output column layout (default: rich)",
    )
    parser.add_argument(
        "--mode",
        choices=[item.value for item in ExpansionMode],
        help="Window expansion strategy (default: strand_respecting)",
    )
    parser.add_argument(
        "--occ-delimiter",
        help="Field delimiter of the occurrence file (default: single space)",
    )
    parser.add_argument("--config", help="Optional JSON run config; flags override its values")
    parser.add_argument(
        "--no-consistency-checks",
        action="store_true",
        help="Skip key-count and stored-index invariant checks",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> RunConfig:
    overrides: dict[str, Any] = {
        "kinetics": args.kinetics,
        "backend": args.backend,
        "occ": args.occ,
        "occ_width": args.occ_width,
        "extend": args.extend,
        "output": args.output,
        "format": args.format,
        "mode": args.mode,
        "occ_delimiter": args.occ_delimiter,
        "consistency_checks": False if args.no_consistency_checks else None,
    }
    if args.config:
        return RunConfig.from_json(args.config, **overrides)
    return RunConfig.from_mapping({key: value for key, value in overrides.items() if value is not None})


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = build_config(args)
        logger.info(
            "Collecting kinetics from %s for %s (width=%d, extension=%d)",
            config.kinetics_path,
            config.occurrence_path,
            config.window.width,
            config.window.extension,
        )
        report = collect_window_kinetics(config)
    except IpdWindowError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    payload = {
        "output": str(config.output_path),
        "occurrences": report.occurrence_count,
        "rows": report.row_count,
        "missing_rows": report.missing_count,
        "chromosomes": report.chromosomes,
    }
    logger.info("Run summary: %s", json.dumps(payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
