"""Kinetics lookup table backends."""

from .base import KineticsTable
from .csv_table import CsvKineticsTable
from .h5_table import H5KineticsTable, record_index
from .registry import (
    KineticsBackend,
    KineticsBackendRegistry,
    build_default_backend_registry,
    infer_backend,
    open_kinetics_table,
)

__all__ = [
    "KineticsTable",
    "CsvKineticsTable",
    "H5KineticsTable",
    "KineticsBackend",
    "KineticsBackendRegistry",
    "build_default_backend_registry",
    "infer_backend",
    "open_kinetics_table",
    "record_index",
]
