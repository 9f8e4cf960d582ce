"""Reader for headerless motif occurrence lists (``.merged_occ`` files)."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pandas as pd

from ipdwindow.errors import InputFormatError
from ipdwindow.models import Occurrence


class OccurrenceReader:
    """Yield occurrences in file order.

    Each row holds a chromosome name, a 0-based left-most start position and
    a strand character, separated by ``delimiter``. Extra trailing columns
    are ignored.
    """

    def __init__(
        self,
        *,
        occ_path: str | Path,
        delimiter: str = " ",
        chunksize: int = 100_000,
    ) -> None:
        if not Path(occ_path).is_file():
            raise InputFormatError(f"Occurrence file not found: {occ_path}")
        self.occ_path = Path(occ_path)
        self.delimiter = delimiter
        self.chunksize = chunksize

    def __iter__(self) -> Iterator[Occurrence]:
        return self.read()

    def read(self) -> Iterator[Occurrence]:
        try:
            frame_iter = pd.read_csv(
                self.occ_path,
                sep=self.delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                chunksize=self.chunksize,
            )
        except pd.errors.EmptyDataError:
            return
        except OSError as exc:
            raise InputFormatError(f"{self.occ_path}: cannot read occurrence file: {exc}") from None

        line_offset = 1
        try:
            for frame in frame_iter:
                if frame.shape[1] < 3:
                    raise InputFormatError(
                        f"{self.occ_path}: expected 3 columns (chromosome, start, strand), "
                        f"found {frame.shape[1]}"
                    )
                for line, row in enumerate(frame.itertuples(index=False), start=line_offset):
                    yield self._parse_row(row, line)
                line_offset += len(frame)
        except pd.errors.EmptyDataError:
            return
        except pd.errors.ParserError as exc:
            raise InputFormatError(f"{self.occ_path}: {exc}") from None

    def _parse_row(self, row: Any, line: int) -> Occurrence:
        ref_name = self._to_string(row[0])
        start = self._to_string(row[1])
        strand = self._to_string(row[2])
        if ref_name is None or start is None or strand is None:
            raise InputFormatError(f"{self.occ_path}:{line}: missing required field")

        try:
            start_value = int(start)
        except ValueError:
            raise InputFormatError(
                f"{self.occ_path}:{line}: start position is not an integer: {start!r}"
            ) from None

        if strand not in {"+", "-"}:
            raise InputFormatError(f"{self.occ_path}:{line}: unexpected strand char: {strand!r}")

        return Occurrence(ref_name=ref_name, start=start_value, strand=strand)

    @staticmethod
    def _to_string(value: Any) -> str | None:
        if value is None or pd.isna(value):
            return None
        cleaned = str(value).strip()
        return cleaned or None
