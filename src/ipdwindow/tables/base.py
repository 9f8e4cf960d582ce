"""Base interface for kinetics lookup tables."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ipdwindow.models import CoordinateKey, KineticsRecord


class KineticsTable(ABC):
    """Read-only map from coordinate keys to kinetics records.

    ``lookup`` is total: coordinates without data, including whole
    chromosomes absent from the source, resolve to
    :meth:`KineticsRecord.missing`.
    """

    name: str

    @abstractmethod
    def lookup(self, key: CoordinateKey) -> KineticsRecord:
        """Return the record stored for ``key`` or the missing record."""

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, CoordinateKey):
            return False
        return not self.lookup(key).is_missing()

    def close(self) -> None:
        """Release file handles held by the backend."""

    def __enter__(self) -> "KineticsTable":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
