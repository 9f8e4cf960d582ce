"""Occurrence pipeline: expand, look up, label and stream window rows."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ipdwindow.assembler import RowAssembler, count_missing
from ipdwindow.config import ExpansionMode, RunConfig, WindowSpec
from ipdwindow.models import CoordinateKey, Occurrence
from ipdwindow.occurrences import OccurrenceReader
from ipdwindow.tables.base import KineticsTable
from ipdwindow.tables.registry import open_kinetics_table
from ipdwindow.window import WindowExpander
from ipdwindow.writers.base import RowWriter
from ipdwindow.writers.csv_writer import CsvRowWriter

logger = logging.getLogger(__name__)


@dataclass
class PipelineRunReport:
    """Execution summary for a collection run."""

    occurrence_count: int = 0
    row_count: int = 0
    missing_count: int = 0
    chromosomes: list[str] = field(default_factory=list)


class OccurrencePipeline:
    """Process occurrences one at a time, writing each window as it is built."""

    def __init__(
        self,
        *,
        table: KineticsTable,
        occurrences: Iterable[Occurrence],
        writer: RowWriter,
        spec: WindowSpec,
        mode: ExpansionMode = ExpansionMode.STRAND_RESPECTING,
        check_consistency: bool = True,
    ) -> None:
        self.table = table
        self.occurrences = occurrences
        self.writer = writer
        self.spec = spec
        self.expander = WindowExpander(spec, mode, check_consistency=check_consistency)
        self.assembler = RowAssembler(spec)

    def run(self) -> PipelineRunReport:
        report = PipelineRunReport()
        self.writer.write_header()

        for src, occurrence in enumerate(self.occurrences, start=1):
            key = CoordinateKey.from_occurrence(occurrence)
            keys = self.expander.expand(key)
            rows = self.assembler.assemble_all(src, keys, self.table)

            report.row_count += self.writer.write_rows(rows)
            report.missing_count += count_missing(rows)
            report.occurrence_count = src
            if key.ref_name not in report.chromosomes:
                report.chromosomes.append(key.ref_name)

        logger.info(
            "Wrote %d rows for %d occurrences (%d without kinetics data)",
            report.row_count,
            report.occurrence_count,
            report.missing_count,
        )
        return report


def collect_window_kinetics(config: RunConfig) -> PipelineRunReport:
    """Run a full batch described by ``config``.

    The region-overflow check runs before any input is opened.
    """

    config.window.check_region_overflow()
    reader = OccurrenceReader(
        occ_path=config.occurrence_path,
        delimiter=config.occurrence_delimiter,
    )

    with open_kinetics_table(
        config.kinetics_path,
        config.backend,
        check_consistency=config.check_consistency,
    ) as table, CsvRowWriter(
        output_path=config.output_path,
        output_format=config.output_format,
    ) as writer:
        return OccurrencePipeline(
            table=table,
            occurrences=reader,
            writer=writer,
            spec=config.window,
            mode=config.expansion_mode,
            check_consistency=config.check_consistency,
        ).run()
