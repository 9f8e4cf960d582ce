"""Streaming CSV writer for window kinetics rows."""

from __future__ import annotations

import csv
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

import numpy as np

from ipdwindow.config import OutputFormat, output_columns
from ipdwindow.models import WindowRow
from ipdwindow.writers.base import RowWriter


def format_cell(value: Any) -> Any:
    """Render a cell the way the kinetics source stores it.

    Floats are float32 values and are written with their shortest float32
    text; a missing base becomes an empty cell.
    """

    if value is None:
        return ""
    if isinstance(value, float):
        return str(np.float32(value))
    return value


class CsvRowWriter(RowWriter):
    """Write rows to a CSV file as they arrive, flushing after each batch."""

    def __init__(
        self,
        *,
        output_path: str | Path,
        output_format: OutputFormat = OutputFormat.RICH,
    ) -> None:
        self.output_path = Path(output_path)
        self.output_format = output_format
        self.columns = output_columns(output_format)
        self._stream: TextIO | None = None
        self._writer: Any = None
        self._header_written = False

    def _open(self) -> Any:
        if self._writer is None:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._stream = self.output_path.open("w", newline="")
            self._writer = csv.writer(self._stream)
        return self._writer

    def write_header(self) -> None:
        if self._header_written:
            return
        self._open().writerow(self.columns)
        self._header_written = True

    def write_rows(self, rows: Iterable[WindowRow]) -> int:
        self.write_header()
        writer = self._open()
        count = 0
        for row in rows:
            payload = row.to_simple_row() if self.output_format is OutputFormat.SIMPLE else row.to_row()
            writer.writerow([format_cell(payload[column]) for column in self.columns])
            count += 1
        if self._stream is not None:
            self._stream.flush()
        return count

    def close(self) -> None:
        if self._stream is None:
            return
        self._stream.close()
        self._stream = None
        self._writer = None
