"""In-memory data models for window kinetics collection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import numpy as np

from ipdwindow.errors import InputFormatError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def to_float32(value: Any) -> float:
    """Round through float32, the storage width of ipdSummary values."""

    return float(np.float32(value))


class Strand(IntEnum):
    """Binary strand code used by ipdSummary outputs."""

    PLUS = 0
    MINUS = 1

    @classmethod
    def from_char(cls, value: str) -> "Strand":
        if value == "+":
            return cls.PLUS
        if value == "-":
            return cls.MINUS
        raise InputFormatError(f"Unexpected strand char: {value!r}")

    @classmethod
    def from_code(cls, value: Any) -> "Strand":
        if isinstance(value, (float, np.floating)) and not float(value).is_integer():
            raise InputFormatError(f"Unexpected strand number: {value!r}")
        try:
            code = int(value)
        except (TypeError, ValueError):
            raise InputFormatError(f"Unexpected strand number: {value!r}") from None
        if code == 0:
            return cls.PLUS
        if code == 1:
            return cls.MINUS
        raise InputFormatError(f"Unexpected strand number: {code}")

    def opposite(self) -> "Strand":
        return Strand.MINUS if self is Strand.PLUS else Strand.PLUS

    @property
    def char(self) -> str:
        return "+" if self is Strand.PLUS else "-"

    @property
    def label_code(self) -> str:
        return "p" if self is Strand.PLUS else "m"


@dataclass(frozen=True)
class CoordinateKey:
    """Lookup identity of one base on one strand.

    ``tpl`` is 1-based, matching the ``tpl`` column of ipdSummary.
    """

    ref_name: str
    tpl: int
    strand: Strand

    def opposite(self) -> "CoordinateKey":
        """Return the same position on the other strand."""

        return CoordinateKey(self.ref_name, self.tpl, self.strand.opposite())

    @classmethod
    def from_occurrence(cls, occurrence: "Occurrence") -> "CoordinateKey":
        """Key of the left-most target base; see :meth:`Occurrence.to_key`."""

        return occurrence.to_key()


@dataclass(frozen=True)
class KineticsRecord:
    """Per-base kinetics measurement.

    The ``frac`` fields are ``None`` when the source has no modification
    fraction estimate for the base; that is distinct from an estimate of zero.
    """

    base: str | None = None
    score: int = 0
    t_mean: float = 0.0
    t_err: float = 0.0
    model_prediction: float = 0.0
    ipd_ratio: float = 0.0
    coverage: int = 0
    frac: float | None = None
    frac_low: float | None = None
    frac_up: float | None = None

    @classmethod
    def missing(cls) -> "KineticsRecord":
        """Record reported for coordinates without kinetics data."""

        return MISSING_RECORD

    def is_missing(self) -> bool:
        return self == MISSING_RECORD


MISSING_RECORD = KineticsRecord()


@dataclass(frozen=True)
class Occurrence:
    """One requested target, as listed in a ``.merged_occ`` file.

    ``start`` is the 0-based left-most position regardless of strand.
    """

    ref_name: str
    start: int
    strand: str

    def to_key(self) -> CoordinateKey:
        """Convert into a 1-based, strand-coded lookup key."""

        if not INT64_MIN <= self.start < INT64_MAX:
            raise InputFormatError(f"Occurrence start out of int64 range: {self.start}")
        return CoordinateKey(self.ref_name, self.start + 1, Strand.from_char(self.strand))


@dataclass(frozen=True)
class WindowRow:
    """One output row: a single base on a single strand inside a window."""

    position: int
    strand: str
    label: str
    src: int
    region: str
    key: CoordinateKey
    record: KineticsRecord

    @property
    def value(self) -> float:
        return self.record.t_mean

    def to_row(self) -> dict[str, Any]:
        """Serialize into the rich column layout."""

        return {
            "position": self.position,
            "strand": self.strand,
            "value": self.value,
            "label": self.label,
            "src": self.src,
            "base": self.record.base,
            "score": self.record.score,
            "tErr": self.record.t_err,
            "modelPrediction": self.record.model_prediction,
            "ipdRatio": self.record.ipd_ratio,
            "coverage": self.record.coverage,
            "ref_chr": self.key.ref_name,
            "ref_position": self.key.tpl,
            "ref_strand": int(self.key.strand),
            "region": self.region,
        }

    def to_simple_row(self) -> dict[str, Any]:
        """Serialize into the compact five-column layout."""

        return {
            "position": self.position,
            "strand": self.strand,
            "value": self.value,
            "label": self.label,
            "src": self.src,
        }
