"""Window kinetics collection primitives.

This package extracts fixed-width windows of PacBio ipdSummary kinetics
around motif occurrences and labels every base by window part and strand.
"""

from .assembler import RowAssembler, WindowPart, create_label, create_region
from .config import (
    RICH_OUTPUT_COLUMNS,
    SIMPLE_OUTPUT_COLUMNS,
    ExpansionMode,
    OutputFormat,
    RunConfig,
    WindowSpec,
)
from .errors import (
    ConsistencyError,
    InputFormatError,
    IpdWindowError,
    PositionOverflowError,
    RegionOverflowError,
)
from .models import CoordinateKey, KineticsRecord, Occurrence, Strand, WindowRow
from .occurrences import OccurrenceReader
from .pipeline import OccurrencePipeline, PipelineRunReport, collect_window_kinetics
from .tables import (
    CsvKineticsTable,
    H5KineticsTable,
    KineticsBackendRegistry,
    KineticsTable,
    build_default_backend_registry,
    open_kinetics_table,
)
from .window import WindowExpander, expand_window, extend, extend_without_strand
from .writers import CsvRowWriter, RowWriter

__all__ = [
    "CoordinateKey",
    "KineticsRecord",
    "Occurrence",
    "Strand",
    "WindowRow",
    "RICH_OUTPUT_COLUMNS",
    "SIMPLE_OUTPUT_COLUMNS",
    "ExpansionMode",
    "OutputFormat",
    "RunConfig",
    "WindowSpec",
    "IpdWindowError",
    "InputFormatError",
    "PositionOverflowError",
    "RegionOverflowError",
    "ConsistencyError",
    "WindowExpander",
    "expand_window",
    "extend",
    "extend_without_strand",
    "RowAssembler",
    "WindowPart",
    "create_label",
    "create_region",
    "KineticsTable",
    "CsvKineticsTable",
    "H5KineticsTable",
    "KineticsBackendRegistry",
    "build_default_backend_registry",
    "open_kinetics_table",
    "OccurrenceReader",
    "RowWriter",
    "CsvRowWriter",
    "OccurrencePipeline",
    "PipelineRunReport",
    "collect_window_kinetics",
]
