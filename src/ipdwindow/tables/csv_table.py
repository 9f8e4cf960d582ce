"""Row-indexed kinetics table built from an ipdSummary CSV file."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pandas as pd

from ipdwindow.errors import InputFormatError
from ipdwindow.models import CoordinateKey, KineticsRecord, Strand, to_float32
from ipdwindow.tables.base import KineticsTable

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: tuple[str, ...] = (
    "refName",
    "tpl",
    "strand",
    "score",
    "tMean",
    "tErr",
    "modelPrediction",
    "ipdRatio",
    "coverage",
)

OPTIONAL_COLUMNS: tuple[str, ...] = ("base", "frac", "fracLow", "fracUp")

# Parsed from text so fractional values are rejected instead of truncated.
INTEGER_COLUMNS: tuple[str, ...] = ("tpl", "strand", "score", "coverage")


def optional_float32(value: Any) -> float | None:
    if value is None or pd.isna(value):
        return None
    number = float(value)
    return to_float32(number) if math.isfinite(number) else None


class CsvKineticsTable(KineticsTable):
    """Hold every row of a kinetics CSV in a dict keyed by coordinate."""

    name = "csv"

    def __init__(self, *, csv_path: str | Path, chunksize: int = 500_000) -> None:
        self.csv_path = Path(csv_path)
        self.chunksize = chunksize
        self._records: dict[CoordinateKey, KineticsRecord] = {}
        self._load()

    def __len__(self) -> int:
        return len(self._records)

    def lookup(self, key: CoordinateKey) -> KineticsRecord:
        record = self._records.get(key)
        if record is None or record.coverage == 0:
            return KineticsRecord.missing()
        return record

    def items(self) -> Iterator[tuple[CoordinateKey, KineticsRecord]]:
        return iter(self._records.items())

    def _load(self) -> None:
        wanted = set(REQUIRED_COLUMNS) | set(OPTIONAL_COLUMNS)
        try:
            frame_iter = pd.read_csv(
                self.csv_path,
                usecols=lambda c: c in wanted,
                dtype={"refName": str, "base": str, **dict.fromkeys(INTEGER_COLUMNS, str)},
                keep_default_na=False,
                na_values={"frac": [""], "fracLow": [""], "fracUp": [""]},
                chunksize=self.chunksize,
            )
        except pd.errors.EmptyDataError:
            raise InputFormatError(f"{self.csv_path}: kinetics file is empty") from None
        except OSError as exc:
            raise InputFormatError(f"{self.csv_path}: cannot read kinetics file: {exc}") from None

        line_offset = 2
        try:
            for frame in frame_iter:
                missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
                if missing:
                    raise InputFormatError(
                        f"{self.csv_path}: missing required columns: {', '.join(missing)}"
                    )
                for line, row in enumerate(frame.itertuples(index=False), start=line_offset):
                    key, record = self._parse_row(row, line)
                    self._records[key] = record
                line_offset += len(frame)
        except pd.errors.ParserError as exc:
            raise InputFormatError(f"{self.csv_path}: {exc}") from None

        logger.info("Loaded %d kinetics rows from %s", len(self._records), self.csv_path)

    def _parse_row(self, row: Any, line: int) -> tuple[CoordinateKey, KineticsRecord]:
        try:
            ref_name = str(row.refName)
            if not ref_name:
                raise ValueError("empty refName")
            key = CoordinateKey(ref_name, int(str(row.tpl)), Strand.from_code(str(row.strand)))
            record = KineticsRecord(
                base=self._to_base(getattr(row, "base", None)),
                score=self._to_count(row.score),
                t_mean=to_float32(row.tMean),
                t_err=to_float32(row.tErr),
                model_prediction=to_float32(row.modelPrediction),
                ipd_ratio=to_float32(row.ipdRatio),
                coverage=self._to_count(row.coverage),
                frac=optional_float32(getattr(row, "frac", None)),
                frac_low=optional_float32(getattr(row, "fracLow", None)),
                frac_up=optional_float32(getattr(row, "fracUp", None)),
            )
        except (TypeError, ValueError) as exc:
            raise InputFormatError(f"{self.csv_path}:{line}: malformed kinetics row: {exc}") from None
        return key, record

    @staticmethod
    def _to_base(value: Any) -> str | None:
        if value is None or pd.isna(value):
            return None
        cleaned = str(value).strip()
        if not cleaned:
            return None
        if len(cleaned) != 1:
            raise ValueError(f"base must be a single character: {cleaned!r}")
        return cleaned

    @staticmethod
    def _to_count(value: Any) -> int:
        count = int(str(value))
        if count < 0:
            raise ValueError(f"negative count: {count}")
        return count
