"""Labeling of window offsets and assembly of output rows."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from enum import Enum

from ipdwindow.config import WindowSpec
from ipdwindow.errors import ConsistencyError
from ipdwindow.models import CoordinateKey, Strand, WindowRow
from ipdwindow.tables.base import KineticsTable


class WindowPart(str, Enum):
    """Part of a window an offset falls in, keyed by its label code."""

    UPSTREAM = "s"
    TARGET = "m"
    DOWNSTREAM = "e"

    @property
    def region(self) -> str:
        return _REGION_NAMES[self]


_REGION_NAMES = {
    WindowPart.UPSTREAM: "Upstream",
    WindowPart.TARGET: "Target",
    WindowPart.DOWNSTREAM: "Downstream",
}


def window_part(position: int, region_width: int, region_extension: int) -> WindowPart:
    """Classify a 1-based window offset."""

    if position <= 0:
        raise ConsistencyError(f"Position ({position}) is smaller than 1")
    if position <= region_extension:
        return WindowPart.UPSTREAM
    if position <= region_extension + region_width:
        return WindowPart.TARGET
    if position <= 2 * region_extension + region_width:
        return WindowPart.DOWNSTREAM
    raise ConsistencyError(f"Position ({position}) is larger than the target region length")


def relative_position(
    position: int, part: WindowPart, region_width: int, region_extension: int
) -> int:
    if part is WindowPart.UPSTREAM:
        return position
    if part is WindowPart.TARGET:
        return position - region_extension
    return position - region_extension - region_width


def create_label(position: int, region_width: int, region_extension: int, strand: str) -> str:
    """Build labels such as ``s3p`` or ``m12m``."""

    part = window_part(position, region_width, region_extension)
    try:
        strand_code = Strand.from_char(strand).label_code
    except ValueError:
        raise ConsistencyError(f"Unknown strand: {strand!r}") from None
    offset = relative_position(position, part, region_width, region_extension)
    return f"{part.value}{offset}{strand_code}"


def create_region(position: int, region_width: int, region_extension: int) -> str:
    return window_part(position, region_width, region_extension).region


class RowAssembler:
    """Join expanded window keys with kinetics values into output rows."""

    def __init__(self, spec: WindowSpec) -> None:
        self.spec = spec

    def assemble(
        self,
        src: int,
        keys: Sequence[CoordinateKey],
        table: KineticsTable,
    ) -> Iterator[WindowRow]:
        """Yield one row per key; ``src`` is the 1-based occurrence index."""

        width = self.spec.width
        extension = self.spec.extension
        for index, key in enumerate(keys):
            position = index // 2 + 1
            strand = "+" if index % 2 == 0 else "-"
            yield WindowRow(
                position=position,
                strand=strand,
                label=create_label(position, width, extension, strand),
                src=src,
                region=create_region(position, width, extension),
                key=key,
                record=table.lookup(key),
            )

    def assemble_all(
        self,
        src: int,
        keys: Sequence[CoordinateKey],
        table: KineticsTable,
    ) -> list[WindowRow]:
        return list(self.assemble(src, keys, table))


def count_missing(rows: Iterable[WindowRow]) -> int:
    return sum(1 for row in rows if row.record.is_missing())
