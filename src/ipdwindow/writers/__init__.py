"""Output writers for window kinetics rows."""

from .base import RowWriter
from .csv_writer import CsvRowWriter, format_cell

__all__ = ["RowWriter", "CsvRowWriter", "format_cell"]
