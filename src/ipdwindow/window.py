"""Expansion of a target key into the ordered keys of its window."""

from __future__ import annotations

import logging

from ipdwindow.config import ExpansionMode, WindowSpec
from ipdwindow.errors import ConsistencyError, PositionOverflowError
from ipdwindow.models import INT64_MAX, INT64_MIN, CoordinateKey, Strand

logger = logging.getLogger(__name__)


def _checked_sub(tpl: int, length: int) -> int:
    result = tpl - length
    if result < INT64_MIN or result > INT64_MAX:
        raise PositionOverflowError(tpl, length)
    return result


def _checked_add(tpl: int, length: int) -> int:
    result = tpl + length
    if result < INT64_MIN or result > INT64_MAX:
        raise PositionOverflowError(tpl, length)
    return result


def _both_strands(ref_name: str, positions: range, first: Strand) -> list[CoordinateKey]:
    second = first.opposite()
    keys: list[CoordinateKey] = []
    for tpl in positions:
        keys.append(CoordinateKey(ref_name, tpl, first))
        keys.append(CoordinateKey(ref_name, tpl, second))
    return keys


def extend(key: CoordinateKey, up: int, down: int) -> list[CoordinateKey]:
    """Extend ``key`` respecting its strand.

    For a minus-strand key ``up`` and ``down`` are swapped and the keys are
    produced from the highest position down, minus strand before plus at each
    position, which is the exact reverse of :func:`extend_without_strand`.
    """

    if key.strand is Strand.PLUS:
        left = _checked_sub(key.tpl, up)
        right = _checked_add(key.tpl, down)
        return _both_strands(key.ref_name, range(left, right + 1), Strand.PLUS)

    left = _checked_sub(key.tpl, down)
    right = _checked_add(key.tpl, up)
    return _both_strands(key.ref_name, range(right, left - 1, -1), Strand.MINUS)


def extend_without_strand(key: CoordinateKey, up: int, down: int) -> list[CoordinateKey]:
    """Extend ``key`` in increasing position order, ignoring its strand."""

    left = _checked_sub(key.tpl, up)
    right = _checked_add(key.tpl, down)
    return _both_strands(key.ref_name, range(left, right + 1), Strand.PLUS)


def expand_window(
    key: CoordinateKey,
    up: int,
    down: int,
    mode: ExpansionMode = ExpansionMode.STRAND_RESPECTING,
) -> list[CoordinateKey]:
    """Return the window keys of a target in upstream-to-downstream order.

    ``key`` is the left-most base of the target regardless of strand. In
    strand-respecting mode a minus-strand target is re-anchored on its 5' end
    (``tpl + down - up``) before :func:`extend`; the strand-agnostic mode builds
    the increasing range and reverses it. Both yield identical sequences.
    """

    if mode is ExpansionMode.STRAND_RESPECTING:
        if key.strand is Strand.MINUS:
            # Overflow is reported for the left-most base in both modes.
            _checked_sub(key.tpl, up)
            _checked_add(key.tpl, down)
            key = CoordinateKey(key.ref_name, key.tpl + down - up, key.strand)
        return extend(key, up, down)

    keys = extend_without_strand(key, up, down)
    if key.strand is Strand.MINUS:
        keys.reverse()
    return keys


class WindowExpander:
    """Expand occurrence keys for a fixed window and check the key count."""

    def __init__(
        self,
        spec: WindowSpec,
        mode: ExpansionMode = ExpansionMode.STRAND_RESPECTING,
        *,
        check_consistency: bool = True,
    ) -> None:
        self.spec = spec
        self.mode = mode
        self.check_consistency = check_consistency

    def expand(self, key: CoordinateKey) -> list[CoordinateKey]:
        keys = expand_window(key, self.spec.up, self.spec.down, self.mode)
        if self.check_consistency and len(keys) != self.spec.expected_keys:
            raise ConsistencyError(
                f"Unexpected length of results for a motif occ at {key.ref_name}:{key.tpl}: "
                f"{len(keys)} keys, expected {self.spec.expected_keys}"
            )
        logger.debug(
            "Expanded %s:%d(%s) into %d keys", key.ref_name, key.tpl, key.strand.char, len(keys)
        )
        return keys
