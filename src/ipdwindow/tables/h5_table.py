"""Columnar kinetics table backed by a per-chromosome HDF5 container."""

from __future__ import annotations

import logging
import math
from collections import OrderedDict
from pathlib import Path

import h5py
import numpy as np

from ipdwindow.errors import ConsistencyError, InputFormatError
from ipdwindow.models import CoordinateKey, KineticsRecord, to_float32
from ipdwindow.tables.base import KineticsTable

logger = logging.getLogger(__name__)

REQUIRED_DATASETS: tuple[str, ...] = (
    "tpl",
    "strand",
    "score",
    "tMean",
    "tErr",
    "modelPrediction",
    "ipdRatio",
    "coverage",
)

OPTIONAL_DATASETS: tuple[str, ...] = ("base", "frac", "fracLow", "fracUp")

ChromosomeArrays = dict[str, np.ndarray]


def record_index(key: CoordinateKey) -> int:
    """Offset of ``key`` in the interleaved per-chromosome arrays."""

    return (key.tpl - 1) * 2 + int(key.strand)


class H5KineticsTable(KineticsTable):
    """Look up kinetics in an HDF5 file with one group per chromosome.

    Each group holds parallel datasets where the record for a 1-based
    ``tpl`` on ``strand`` sits at ``(tpl - 1) * 2 + strand``. Chromosome
    arrays are read on first access and only ``max_cached_refs`` of them
    are kept in memory at a time.
    """

    name = "hdf5"

    def __init__(
        self,
        *,
        h5_path: str | Path,
        check_consistency: bool = True,
        max_cached_refs: int = 1,
    ) -> None:
        if max_cached_refs < 1:
            raise ValueError("max_cached_refs must be at least 1")
        self.h5_path = Path(h5_path)
        self.check_consistency = check_consistency
        self.max_cached_refs = max_cached_refs
        try:
            self._file = h5py.File(self.h5_path, "r")
        except OSError as exc:
            raise InputFormatError(f"{self.h5_path}: cannot open HDF5 kinetics file: {exc}") from None
        self._cache: OrderedDict[str, ChromosomeArrays | None] = OrderedDict()

    def ref_names(self) -> list[str]:
        return sorted(name for name, item in self._file.items() if isinstance(item, h5py.Group))

    def close(self) -> None:
        self._cache.clear()
        if self._file.id.valid:
            self._file.close()

    def lookup(self, key: CoordinateKey) -> KineticsRecord:
        arrays = self._arrays_for(key.ref_name)
        if arrays is None or key.tpl < 1:
            return KineticsRecord.missing()

        index = record_index(key)
        coverage = arrays["coverage"]
        if index >= coverage.shape[0]:
            return KineticsRecord.missing()

        depth = int(coverage[index])
        if depth == 0:
            return KineticsRecord.missing()

        if self.check_consistency:
            stored_tpl = int(arrays["tpl"][index])
            stored_strand = int(arrays["strand"][index])
            if stored_tpl != key.tpl or stored_strand != int(key.strand):
                raise ConsistencyError(
                    f"{self.h5_path}: record at index {index} of {key.ref_name} is "
                    f"tpl={stored_tpl} strand={stored_strand}, expected "
                    f"tpl={key.tpl} strand={int(key.strand)}"
                )

        return KineticsRecord(
            base=self._base_at(arrays, index),
            score=int(arrays["score"][index]),
            t_mean=to_float32(arrays["tMean"][index]),
            t_err=to_float32(arrays["tErr"][index]),
            model_prediction=to_float32(arrays["modelPrediction"][index]),
            ipd_ratio=to_float32(arrays["ipdRatio"][index]),
            coverage=depth,
            frac=self._fraction_at(arrays, "frac", index),
            frac_low=self._fraction_at(arrays, "fracLow", index),
            frac_up=self._fraction_at(arrays, "fracUp", index),
        )

    def _arrays_for(self, ref_name: str) -> ChromosomeArrays | None:
        if ref_name in self._cache:
            self._cache.move_to_end(ref_name)
            return self._cache[ref_name]

        arrays = self._load_group(ref_name)
        self._cache[ref_name] = arrays
        while len(self._cache) > self.max_cached_refs:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug("Released kinetics arrays for %s", evicted)
        return arrays

    def _load_group(self, ref_name: str) -> ChromosomeArrays | None:
        group = self._file.get(ref_name)
        if not isinstance(group, h5py.Group):
            logger.warning("Chromosome %s is not present in %s", ref_name, self.h5_path)
            return None

        missing = [name for name in REQUIRED_DATASETS if name not in group]
        if missing:
            raise InputFormatError(
                f"{self.h5_path}: group {ref_name} lacks datasets: {', '.join(missing)}"
            )

        arrays: ChromosomeArrays = {}
        for name in REQUIRED_DATASETS + OPTIONAL_DATASETS:
            if name in group:
                arrays[name] = group[name][()]

        length = arrays["coverage"].shape[0]
        uneven = [name for name, values in arrays.items() if values.shape[0] != length]
        if uneven:
            raise InputFormatError(
                f"{self.h5_path}: group {ref_name} has datasets of unequal length: {', '.join(uneven)}"
            )

        logger.info("Loaded %d kinetics slots for %s from %s", length, ref_name, self.h5_path)
        return arrays

    @staticmethod
    def _base_at(arrays: ChromosomeArrays, index: int) -> str | None:
        if "base" not in arrays:
            return None
        raw = arrays["base"][index]
        if isinstance(raw, bytes):
            raw = raw.decode("ascii")
        text = str(raw).strip()
        return text or None

    @staticmethod
    def _fraction_at(arrays: ChromosomeArrays, name: str, index: int) -> float | None:
        if name not in arrays:
            return None
        value = float(arrays[name][index])
        return to_float32(value) if math.isfinite(value) else None

