from __future__ import annotations

import pytest

from enigmatum.geometry import Bounds, InvalidBounds
from enigmatum.interval_set import IntervalSetId, build_interval_sets
from enigmatum.layout_cache import DEFAULT_MARK_PADDING, MarkLayoutCache, place_mark
from enigmatum.metrics import BoundingBox

DAY = build_interval_sets()[IntervalSetId.DAY_HOURS]
BOUNDS = Bounds.from_size(400, 400)


def _by_label(marks):
    return {mark.label: mark for mark in marks}


def test_end_to_end_zero_mark_sits_above_center(metrics) -> None:
    cache = MarkLayoutCache()
    marks = cache.get_or_build(IntervalSetId.DAY_HOURS, BOUNDS, DAY.labels, 14.0, metrics)

    zero = _by_label(marks)["0"]
    assert zero.angle_index == 18
    assert zero.radial_x == pytest.approx(200.0)
    assert zero.radial_y == pytest.approx(0.0, abs=1e-9)
    assert (zero.side_x, zero.side_y) == (0, -1)
    # Centred horizontally, padded outward (upward) vertically.
    assert zero.x == pytest.approx(190.0)
    assert zero.y == pytest.approx(0.0 + 5.0 - DEFAULT_MARK_PADDING)
    assert zero.bounding_box == BoundingBox(20.0, 10.0)


def test_marks_on_bisector_get_no_horizontal_padding(metrics) -> None:
    marks = _by_label(MarkLayoutCache().get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics))
    for label in ("0", "12"):
        mark = marks[label]
        assert mark.side_x == 0
        assert mark.x - mark.radial_x == pytest.approx(-10.0)


def test_quadrant_padding_pushes_outward(metrics) -> None:
    marks = _by_label(MarkLayoutCache().get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics))
    right = marks["6"]
    assert (right.side_x, right.side_y) == (1, 0)
    assert right.x == pytest.approx(400.0 - 10.0 + 20.0)
    assert right.y == pytest.approx(205.0)
    left = marks["18"]
    assert left.side_x == -1
    assert left.x == pytest.approx(0.0 - 10.0 - 20.0)
    bottom = marks["12"]
    assert bottom.side_y == 1
    assert bottom.y == pytest.approx(400.0 + 5.0 + 20.0)


def test_placement_is_deterministic() -> None:
    box = BoundingBox(12.0, 8.0)
    first = place_mark("3", 5, 24, BOUNDS, box)
    second = place_mark("3", 5, 24, BOUNDS, box)
    assert first == second


def test_identical_requests_rebuild_once(metrics, measurer) -> None:
    cache = MarkLayoutCache()
    first = cache.get_or_build(IntervalSetId.DAY_HOURS, BOUNDS, DAY.labels, 14.0, metrics)
    second = cache.get_or_build(IntervalSetId.DAY_HOURS, BOUNDS, DAY.labels, 14.0, metrics)

    assert second is first
    assert cache.stats["rebuilds"] == 1
    assert cache.stats["cache_hit"] == 1
    assert len(measurer.calls) == 24


def test_bounds_change_forces_single_rebuild(metrics) -> None:
    cache = MarkLayoutCache()
    cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics)
    resized = Bounds.from_size(401, 400)
    moved = cache.get_or_build("day", resized, DAY.labels, 14.0, metrics)
    again = cache.get_or_build("day", resized, DAY.labels, 14.0, metrics)

    assert cache.stats["rebuilds"] == 2
    assert again is moved
    assert cache.entry("day").bounds_signature == resized.signature


def test_font_size_or_labels_change_rebuilds(metrics) -> None:
    cache = MarkLayoutCache()
    cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics)
    cache.get_or_build("day", BOUNDS, DAY.labels, 16.0, metrics)
    cache.get_or_build("day", BOUNDS, list(DAY.labels), 16.0, metrics)
    assert cache.stats["rebuilds"] == 2
    cache.get_or_build("day", BOUNDS, ("a", "b"), 16.0, metrics)
    assert cache.stats["rebuilds"] == 3


def test_sets_do_not_share_entries(metrics) -> None:
    cache = MarkLayoutCache()
    cache.get_or_build(IntervalSetId.MINUTES, BOUNDS, ("0", "1"), 9.0, metrics)
    cache.get_or_build(IntervalSetId.SECONDS, BOUNDS, ("0", "1"), 9.0, metrics)
    assert cache.stats["rebuilds"] == 2
    assert cache.entry(IntervalSetId.MINUTES) is not cache.entry(IntervalSetId.SECONDS)


def test_empty_labels_yield_empty_layout(metrics) -> None:
    assert MarkLayoutCache().get_or_build("empty", BOUNDS, (), 14.0, metrics) == ()


def test_single_label_placed_at_angle_zero(metrics) -> None:
    (mark,) = MarkLayoutCache().get_or_build("one", BOUNDS, ("12",), 14.0, metrics)
    assert mark.angle_index == 0
    assert mark.radial_x == pytest.approx(400.0)
    assert mark.radial_y == pytest.approx(200.0)


def test_unmeasurable_label_omitted_and_recorded(make_metrics, caplog) -> None:
    _fake, failing_metrics = make_metrics(failing={"7"})
    cache = MarkLayoutCache()
    with caplog.at_level("WARNING", logger="Enigmatum.Face.Layout"):
        marks = cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, failing_metrics)

    assert len(marks) == 23
    assert "7" not in _by_label(marks)
    entry = cache.entry("day")
    assert len(entry.diagnostics) == 1
    assert "'7'" in entry.diagnostics[0]
    assert cache.stats["omitted"] == 1
    assert any("Omitting mark" in record.getMessage() for record in caplog.records)


def test_invalid_bounds_keep_previous_entry(metrics) -> None:
    cache = MarkLayoutCache()
    cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics)
    previous = cache.entry("day")

    with pytest.raises(InvalidBounds):
        cache.get_or_build("day", Bounds.from_size(0, 400), DAY.labels, 14.0, metrics)

    assert cache.entry("day") is previous
    assert cache.stats["rebuilds"] == 1


def test_invalidate_drops_entries(metrics) -> None:
    cache = MarkLayoutCache()
    cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics)
    cache.invalidate("font change")
    assert cache.entry("day") is None
    assert cache.stats["cache_reset"] == 1
    cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics)
    assert cache.stats["rebuilds"] == 2


def test_custom_padding_applied(metrics) -> None:
    marks = _by_label(MarkLayoutCache(padding=5.0).get_or_build("day", BOUNDS, DAY.labels, 14.0, metrics))
    assert marks["0"].y == pytest.approx(0.0)


def test_omitted_mark_restored_once_measurer_recovers(make_metrics) -> None:
    fake, flaky_metrics = make_metrics(failing={"7"})
    cache = MarkLayoutCache()
    first = cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, flaky_metrics)
    assert len(first) == 23
    assert not cache.entry("day").complete

    fake.failing.clear()
    recovered = cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, flaky_metrics)
    again = cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, flaky_metrics)

    assert len(recovered) == 24
    assert "7" in _by_label(recovered)
    assert again is recovered
    assert cache.entry("day").complete
    assert cache.stats["rebuilds"] == 2
    assert cache.stats["cache_hit"] == 1


def test_rebuild_placing_nothing_keeps_previous_entry(make_metrics) -> None:
    fake, flaky_metrics = make_metrics()
    cache = MarkLayoutCache()
    cache.get_or_build("day", BOUNDS, DAY.labels, 14.0, flaky_metrics)
    previous = cache.entry("day")

    fake.failing.update(DAY.labels)
    resized = Bounds.from_size(401, 400)
    assert cache.get_or_build("day", resized, DAY.labels, 14.0, flaky_metrics) == ()
    assert cache.entry("day") is previous
    assert cache.stats["rebuild_failed"] == 1

    fake.failing.clear()
    marks = cache.get_or_build("day", resized, DAY.labels, 14.0, flaky_metrics)
    assert len(marks) == 24
    assert cache.entry("day").bounds_signature == resized.signature
