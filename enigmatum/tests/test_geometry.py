from __future__ import annotations

import pytest

from enigmatum.geometry import Bounds, InvalidBounds, compare_axis, round_half_up


def test_round_half_up_breaks_ties_upward() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(-0.5) == 0
    assert round_half_up(199.4999) == 199


def test_compare_axis_uses_rounded_units() -> None:
    assert compare_axis(200.0, 200.0000001) == 0
    assert compare_axis(200.0, 199.2) == -1
    assert compare_axis(200.0, 200.6) == 1


def test_scaled_shrinks_about_center() -> None:
    bounds = Bounds.from_size(400, 400)
    assert bounds.scaled(1.0) is bounds
    assert bounds.scaled(0.5) == Bounds(100, 100, 300, 300)


@pytest.mark.parametrize("size", [(1, 1), (2, 2), (3, 1)])
def test_scaled_never_collapses_a_drawable_rect(size) -> None:
    ring = Bounds.from_size(*size).scaled(0.25)
    assert ring.width >= 1 and ring.height >= 1
    ring.require_valid()


def test_scaled_degenerate_rect_stays_degenerate() -> None:
    with pytest.raises(InvalidBounds):
        Bounds.from_size(0, 400).scaled(0.5).require_valid()
