import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from ipdwindow.config import ExpansionMode, WindowSpec  # noqa: E402
from ipdwindow.errors import ConsistencyError, PositionOverflowError  # noqa: E402
from ipdwindow.models import INT64_MAX, INT64_MIN, CoordinateKey, Strand  # noqa: E402
from ipdwindow.window import (  # noqa: E402
    WindowExpander,
    expand_window,
    extend,
    extend_without_strand,
)


def _key(tpl: int, strand: int) -> CoordinateKey:
    return CoordinateKey("chrX", tpl, Strand(strand))


def test_extend_plus_strand_orders_by_increasing_position() -> None:
    result = extend(_key(100, 0), 1, 2)

    assert result == [
        _key(99, 0),
        _key(99, 1),
        _key(100, 0),
        _key(100, 1),
        _key(101, 0),
        _key(101, 1),
        _key(102, 0),
        _key(102, 1),
    ]


def test_extend_minus_strand_swaps_lengths_and_reverses() -> None:
    result = extend(_key(100, 1), 1, 2)

    assert result == [
        _key(101, 1),
        _key(101, 0),
        _key(100, 1),
        _key(100, 0),
        _key(99, 1),
        _key(99, 0),
        _key(98, 1),
        _key(98, 0),
    ]


@pytest.mark.parametrize("strand", [0, 1])
def test_extend_without_strand_ignores_target_strand(strand: int) -> None:
    result = extend_without_strand(_key(100, strand), 1, 2)

    assert [(key.tpl, int(key.strand)) for key in result] == [
        (99, 0),
        (99, 1),
        (100, 0),
        (100, 1),
        (101, 0),
        (101, 1),
        (102, 0),
        (102, 1),
    ]


@pytest.mark.parametrize("tpl", [1, 2, 100, 5_000_000])
@pytest.mark.parametrize("up,down", [(0, 0), (1, 2), (3, 0), (0, 4), (10, 17)])
def test_strand_respecting_matches_strand_agnostic(tpl: int, up: int, down: int) -> None:
    plus = _key(tpl, 0)
    minus = _key(tpl, 1)

    assert extend(plus, up, down) == extend_without_strand(plus, up, down)
    assert extend(minus, down, up) == list(reversed(extend_without_strand(minus, up, down)))
    for key in (plus, minus):
        assert expand_window(key, up, down, ExpansionMode.STRAND_RESPECTING) == expand_window(
            key, up, down, ExpansionMode.STRAND_AGNOSTIC
        )


@pytest.mark.parametrize("width", [1, 2, 5, 13])
@pytest.mark.parametrize("extension", [0, 1, 4, 20])
@pytest.mark.parametrize("strand", [0, 1])
def test_expander_yields_two_keys_per_window_position(width: int, extension: int, strand: int) -> None:
    spec = WindowSpec(width=width, extension=extension)

    keys = WindowExpander(spec).expand(_key(1_000, strand))

    assert len(keys) == (2 * extension + width) * 2
    assert len(set(keys)) == len(keys)
    assert [int(key.strand) for key in keys[:2]] == [strand, 1 - strand]


def test_minus_strand_window_upstream_is_higher_position() -> None:
    spec = WindowSpec(width=3, extension=2)

    keys = WindowExpander(spec).expand(_key(100, 1))

    positions = [key.tpl for key in keys[::2]]
    assert positions == [104, 103, 102, 101, 100, 99, 98]


def test_extension_below_int64_minimum_is_fatal() -> None:
    with pytest.raises(PositionOverflowError) as excinfo:
        extend(_key(INT64_MIN + 1, 0), 2, 0)

    assert excinfo.value.tpl == INT64_MIN + 1
    assert excinfo.value.extension == 2


def test_extension_above_int64_maximum_is_fatal() -> None:
    with pytest.raises(PositionOverflowError) as excinfo:
        extend_without_strand(_key(INT64_MAX - 1, 1), 0, 5)

    assert excinfo.value.extension == 5
    assert "extension length: 5" in str(excinfo.value)


def test_expander_rejects_unexpected_key_count(monkeypatch) -> None:
    spec = WindowSpec(width=1, extension=1)
    monkeypatch.setattr(
        "ipdwindow.window.expand_window",
        lambda key, up, down, mode: [key],
    )

    with pytest.raises(ConsistencyError):
        WindowExpander(spec).expand(_key(10, 0))

    assert WindowExpander(spec, check_consistency=False).expand(_key(10, 0)) == [_key(10, 0)]


@pytest.mark.parametrize("mode", list(ExpansionMode))
def test_minus_strand_overflow_names_the_target_position(mode: ExpansionMode) -> None:
    key = _key(INT64_MAX - 4, 1)

    with pytest.raises(PositionOverflowError) as excinfo:
        expand_window(key, 10, 12, mode)

    assert excinfo.value.tpl == INT64_MAX - 4
    assert excinfo.value.extension == 12


@pytest.mark.parametrize("mode", list(ExpansionMode))
def test_minus_strand_underflow_names_the_target_position(mode: ExpansionMode) -> None:
    key = _key(INT64_MIN + 3, 1)

    with pytest.raises(PositionOverflowError) as excinfo:
        expand_window(key, 5, 1, mode)

    assert excinfo.value.tpl == INT64_MIN + 3
    assert excinfo.value.extension == 5
