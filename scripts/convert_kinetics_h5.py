#!/usr/bin/env python3
"""Convert an ipdSummary kinetics CSV into the per-chromosome HDF5 layout."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from ipdwindow.convert import convert_csv_to_h5  # noqa: E402
from ipdwindow.errors import IpdWindowError  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert kinetics CSV to HDF5")
    parser.add_argument("--kinetics", "-k", required=True, help="ipdSummary CSV path")
    parser.add_argument("--output", "-o", required=True, help="Output HDF5 path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("ipdwindow.convert.script")

    try:
        chromosomes = convert_csv_to_h5(args.kinetics, args.output)
    except IpdWindowError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1

    logger.info("Wrote %d chromosome groups to %s", len(chromosomes), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
