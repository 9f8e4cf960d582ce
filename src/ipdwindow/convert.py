"""Write kinetics records into the per-chromosome HDF5 layout."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path

import h5py
import numpy as np

from ipdwindow.errors import InputFormatError
from ipdwindow.models import CoordinateKey, KineticsRecord
from ipdwindow.tables.csv_table import CsvKineticsTable
from ipdwindow.tables.h5_table import record_index

logger = logging.getLogger(__name__)


def _empty_arrays(length: int) -> dict[str, np.ndarray]:
    slots = np.arange(length, dtype=np.int64)
    return {
        "tpl": slots // 2 + 1,
        "strand": (slots % 2).astype(np.uint8),
        "base": np.zeros(length, dtype="S1"),
        "score": np.zeros(length, dtype=np.uint32),
        "tMean": np.zeros(length, dtype=np.float32),
        "tErr": np.zeros(length, dtype=np.float32),
        "modelPrediction": np.zeros(length, dtype=np.float32),
        "ipdRatio": np.zeros(length, dtype=np.float32),
        "coverage": np.zeros(length, dtype=np.uint32),
        "frac": np.full(length, np.nan, dtype=np.float32),
        "fracLow": np.full(length, np.nan, dtype=np.float32),
        "fracUp": np.full(length, np.nan, dtype=np.float32),
    }


def _nan_if_none(value: float | None) -> float:
    return np.nan if value is None else value


def write_kinetics_h5(
    entries: Iterable[tuple[CoordinateKey, KineticsRecord]],
    h5_path: str | Path,
) -> list[str]:
    """Write ``entries`` to ``h5_path`` and return the chromosome names written."""

    by_ref: dict[str, list[tuple[CoordinateKey, KineticsRecord]]] = defaultdict(list)
    for key, record in entries:
        if key.tpl < 1:
            raise InputFormatError(f"Cannot store position {key.tpl} of {key.ref_name}; tpl must be >= 1")
        by_ref[key.ref_name].append((key, record))

    h5_path = Path(h5_path)
    h5_path.parent.mkdir(parents=True, exist_ok=True)
    with h5py.File(h5_path, "w") as handle:
        for ref_name, items in by_ref.items():
            length = max(key.tpl for key, _ in items) * 2
            arrays = _empty_arrays(length)
            for key, record in items:
                index = record_index(key)
                arrays["base"][index] = (record.base or "").encode("ascii")
                arrays["score"][index] = record.score
                arrays["tMean"][index] = record.t_mean
                arrays["tErr"][index] = record.t_err
                arrays["modelPrediction"][index] = record.model_prediction
                arrays["ipdRatio"][index] = record.ipd_ratio
                arrays["coverage"][index] = record.coverage
                arrays["frac"][index] = _nan_if_none(record.frac)
                arrays["fracLow"][index] = _nan_if_none(record.frac_low)
                arrays["fracUp"][index] = _nan_if_none(record.frac_up)

            group = handle.create_group(ref_name)
            for name, values in arrays.items():
                group.create_dataset(name, data=values)
            logger.info("Wrote %d kinetics slots for %s", length, ref_name)

    return list(by_ref)


def convert_csv_to_h5(csv_path: str | Path, h5_path: str | Path) -> list[str]:
    """Convert an ipdSummary CSV into the columnar HDF5 layout."""

    table = CsvKineticsTable(csv_path=csv_path)
    return write_kinetics_h5(table.items(), h5_path)
