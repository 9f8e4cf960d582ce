"""Configuration contracts for window kinetics collection runs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

from ipdwindow.errors import InputFormatError, RegionOverflowError
from ipdwindow.models import INT64_MAX


class OutputFormat(str, Enum):
    """Column layout of the output table."""

    RICH = "rich"
    SIMPLE = "simple"


class ExpansionMode(str, Enum):
    """How the window key sequence is constructed for minus-strand targets."""

    STRAND_RESPECTING = "strand_respecting"
    STRAND_AGNOSTIC = "strand_agnostic"


RICH_OUTPUT_COLUMNS: tuple[str, ...] = (
    "position",
    "strand",
    "value",
    "label",
    "src",
    "base",
    "score",
    "tErr",
    "modelPrediction",
    "ipdRatio",
    "coverage",
    "ref_chr",
    "ref_position",
    "ref_strand",
    "region",
)

SIMPLE_OUTPUT_COLUMNS: tuple[str, ...] = RICH_OUTPUT_COLUMNS[:5]


def output_columns(output_format: OutputFormat) -> tuple[str, ...]:
    return SIMPLE_OUTPUT_COLUMNS if output_format is OutputFormat.SIMPLE else RICH_OUTPUT_COLUMNS


@dataclass(frozen=True)
class WindowSpec:
    """Target width plus the extension applied to each end.

    The total window spans ``2 * extension + width`` bases; construction
    fails with :class:`RegionOverflowError` when that does not fit in int64.
    """

    width: int
    extension: int

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise InputFormatError(f"Window width must be an integer: {self.width!r}")
        if isinstance(self.extension, bool) or not isinstance(self.extension, int):
            raise InputFormatError(f"Extension length must be an integer: {self.extension!r}")
        if self.width < 1:
            raise InputFormatError(f"Window width must be at least 1: {self.width}")
        if self.extension < 0:
            raise InputFormatError(f"Extension length must not be negative: {self.extension}")
        self.check_region_overflow()

    def check_region_overflow(self) -> None:
        """Reject width/extension combinations whose window length overflows int64."""

        doubled = self.extension * 2
        if doubled > INT64_MAX or doubled + self.width > INT64_MAX:
            raise RegionOverflowError(
                f"Total region length exceeds int64 (width={self.width}, extension={self.extension})"
            )

    @property
    def up(self) -> int:
        return self.extension

    @property
    def down(self) -> int:
        return self.extension + self.width - 1

    @property
    def length(self) -> int:
        return 2 * self.extension + self.width

    @property
    def expected_keys(self) -> int:
        """Number of keys a single expanded window must contain."""

        return self.length * 2


@dataclass(frozen=True)
class RunConfig:
    """Everything needed to run one collection batch."""

    kinetics_path: Path
    occurrence_path: Path
    output_path: Path
    window: WindowSpec
    backend: str | None = None
    output_format: OutputFormat = OutputFormat.RICH
    expansion_mode: ExpansionMode = ExpansionMode.STRAND_RESPECTING
    check_consistency: bool = True
    occurrence_delimiter: str = " "

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RunConfig":
        """Build a config from a JSON-style mapping.

        Keys mirror the CLI flags: ``kinetics``, ``occ``, ``output``,
        ``occ_width``, ``extend`` are required.
        """

        missing = [
            name
            for name in ("kinetics", "occ", "output", "occ_width", "extend")
            if payload.get(name) is None
        ]
        if missing:
            raise InputFormatError(f"Run config is missing required keys: {', '.join(missing)}")

        try:
            output_format = OutputFormat(payload.get("format", OutputFormat.RICH.value))
            expansion_mode = ExpansionMode(
                payload.get("mode", ExpansionMode.STRAND_RESPECTING.value)
            )
        except ValueError as exc:
            raise InputFormatError(str(exc)) from None

        return cls(
            kinetics_path=Path(payload["kinetics"]),
            occurrence_path=Path(payload["occ"]),
            output_path=Path(payload["output"]),
            window=WindowSpec(width=payload["occ_width"], extension=payload["extend"]),
            backend=payload.get("backend"),
            output_format=output_format,
            expansion_mode=expansion_mode,
            check_consistency=bool(payload.get("consistency_checks", True)),
            occurrence_delimiter=str(payload.get("occ_delimiter", " ")),
        )

    @classmethod
    def from_json(cls, path: str | Path, **overrides: Any) -> "RunConfig":
        """Load a JSON run config; non-``None`` overrides replace file values."""

        payload = json.loads(Path(path).read_text())
        if not isinstance(payload, dict):
            raise InputFormatError(f"Run config must be a JSON object: {path}")
        payload.update({key: value for key, value in overrides.items() if value is not None})
        return cls.from_mapping(payload)

