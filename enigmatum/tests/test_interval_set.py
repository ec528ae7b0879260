from __future__ import annotations

import pytest

from enigmatum.angle_mapper import InvalidIntervalCount
from enigmatum.interval_set import (
    DAY_HOUR_LABELS,
    NIGHT_HOUR_LABELS,
    IntervalSet,
    IntervalSetId,
    build_interval_sets,
    rotate_left,
)


def test_rotate_left_moves_quarter_to_front() -> None:
    assert rotate_left(["a", "b", "c", "d"], 1) == ("b", "c", "d", "a")
    assert rotate_left([], 3) == ()


def test_hour_sets_rotated_by_a_quarter() -> None:
    sets = build_interval_sets()
    day = sets[IntervalSetId.DAY_HOURS]
    assert day.total == 24
    assert day.rotation == 6
    assert day.labels[0] == "6"
    assert day.labels[18] == "0"
    assert day.index_of(0) == 18


def test_day_and_night_share_count_and_rotation() -> None:
    sets = build_interval_sets()
    day = sets[IntervalSetId.DAY_HOURS]
    night = sets[IntervalSetId.NIGHT_HOURS]
    assert night.total == day.total
    assert night.rotation == day.rotation
    assert night.labels != day.labels
    assert night.labels[night.index_of(0)] == "24"
    assert NIGHT_HOUR_LABELS[1:] == DAY_HOUR_LABELS[1:]


def test_minute_and_second_sets_start_at_twelve() -> None:
    sets = build_interval_sets()
    for set_id in (IntervalSetId.MINUTES, IntervalSetId.SECONDS):
        ring = sets[set_id]
        assert ring.total == 60
        assert ring.rotation == 15
        assert ring.labels[45] == "0"
        assert ring.labels[0] == "15"


def test_empty_set_cannot_be_built() -> None:
    with pytest.raises(InvalidIntervalCount):
        IntervalSet.build(IntervalSetId.MINUTES, [])
