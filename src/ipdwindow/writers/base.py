"""Writer interface for window kinetics outputs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ipdwindow.models import WindowRow


class RowWriter(ABC):
    """Streams output rows into a consumer-facing artifact."""

    @abstractmethod
    def write_header(self) -> None:
        """Write the header; must happen even when no rows follow."""

    @abstractmethod
    def write_rows(self, rows: Iterable[WindowRow]) -> int:
        """Write rows and return how many were written."""

    def close(self) -> None:
        """Flush and release the output target."""

    def __enter__(self) -> "RowWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
