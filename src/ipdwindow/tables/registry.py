"""Registry of kinetics table backends keyed by source type."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ipdwindow.errors import InputFormatError
from ipdwindow.tables.base import KineticsTable
from ipdwindow.tables.csv_table import CsvKineticsTable
from ipdwindow.tables.h5_table import H5KineticsTable

logger = logging.getLogger(__name__)

TableFactory = Callable[..., KineticsTable]

HDF5_SUFFIXES: tuple[str, ...] = (".h5", ".hdf5", ".hdf")


@dataclass(frozen=True)
class KineticsBackend:
    """A table factory plus the file suffixes that select it."""

    name: str
    factory: TableFactory
    suffixes: tuple[str, ...] = ()


class KineticsBackendRegistry:
    """Map backend names and kinetics file suffixes to table constructors.

    Each factory is called with the kinetics path as its only positional
    argument plus any backend-specific keyword options. Files whose suffix no
    backend claims fall back to ``default``.
    """

    def __init__(self, default: str = CsvKineticsTable.name) -> None:
        self.default = default
        self._backends: dict[str, KineticsBackend] = {}

    def register(self, name: str, factory: TableFactory, *, suffixes: tuple[str, ...] = ()) -> None:
        backend = KineticsBackend(
            name=name.strip().lower(),
            factory=factory,
            suffixes=tuple(suffix.lower() for suffix in suffixes),
        )
        if not backend.name:
            raise ValueError("Kinetics backend name cannot be empty")
        if backend.name in self._backends:
            raise ValueError(f"Kinetics backend registered twice: {name}")
        claimed = {suffix for other in self._backends.values() for suffix in other.suffixes}
        clashes = sorted(claimed.intersection(backend.suffixes))
        if clashes:
            raise ValueError(f"Suffixes already claimed by another backend: {', '.join(clashes)}")
        self._backends[backend.name] = backend

    def backend_for(self, path: str | Path) -> str:
        """Name of the backend that reads ``path``, chosen by its suffix."""

        suffix = Path(path).suffix.lower()
        for backend in self._backends.values():
            if suffix in backend.suffixes:
                return backend.name
        return self.default

    def create(self, name: str, path: str | Path, **kwargs: Any) -> KineticsTable:
        backend = self._backends.get(name.strip().lower())
        if backend is None:
            raise InputFormatError(
                f"No kinetics backend named {name!r} for {path}; "
                f"choose one of: {', '.join(self.available())}"
            )
        return backend.factory(path, **kwargs)

    def available(self) -> list[str]:
        return sorted(self._backends)


def _open_csv(path: str | Path, **kwargs: Any) -> KineticsTable:
    # The row-indexed table has no stored-index invariant to check.
    kwargs.pop("check_consistency", None)
    return CsvKineticsTable(csv_path=path, **kwargs)


def _open_h5(path: str | Path, **kwargs: Any) -> KineticsTable:
    return H5KineticsTable(h5_path=path, **kwargs)


def build_default_backend_registry() -> KineticsBackendRegistry:
    """Create a registry preloaded with the CSV and HDF5 backends."""

    registry = KineticsBackendRegistry(default=CsvKineticsTable.name)
    registry.register(CsvKineticsTable.name, _open_csv, suffixes=(".csv",))
    registry.register(H5KineticsTable.name, _open_h5, suffixes=HDF5_SUFFIXES)
    return registry


def infer_backend(path: str | Path) -> str:
    """Pick a backend name from the kinetics file suffix."""

    return build_default_backend_registry().backend_for(path)


def open_kinetics_table(
    path: str | Path,
    backend: str | None = None,
    *,
    registry: KineticsBackendRegistry | None = None,
    **kwargs: Any,
) -> KineticsTable:
    """Open ``path`` with ``backend``, inferring it from the suffix when unset."""

    registry = registry or build_default_backend_registry()
    name = backend or registry.backend_for(path)
    logger.info("Opening kinetics source %s with %s backend", path, name)
    return registry.create(name, path, **kwargs)
