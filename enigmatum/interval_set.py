"""Fixed label sequences for each ring of the dial."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Sequence, Tuple

from enigmatum.angle_mapper import require_interval_count


class IntervalSetId(str, Enum):
    DAY_HOURS = "day_hours"
    NIGHT_HOURS = "night_hours"
    MINUTES = "minutes"
    SECONDS = "seconds"


def rotate_left(labels: Sequence[str], steps: int) -> Tuple[str, ...]:
    """Rotate so the element at ``steps`` becomes the first element."""

    if not labels:
        return ()
    shift = steps % len(labels)
    return tuple(labels[shift:]) + tuple(labels[:shift])


@dataclass(frozen=True)
class IntervalSet:
    """Ordered ring labels, pre-rotated so the first logical label sits at 12 o'clock.

    Canvas angle 0 points at 3 o'clock, so the natural sequence is rotated left
    by a quarter of its length: the label that belongs at 3 o'clock becomes
    index 0 and the first logical label ends up three quarters of the way round.
    """

    set_id: IntervalSetId
    labels: Tuple[str, ...]
    rotation: int

    @classmethod
    def build(cls, set_id: IntervalSetId, natural_labels: Sequence[str]) -> "IntervalSet":
        count = require_interval_count(len(natural_labels))
        rotation = count // 4
        return cls(set_id=set_id, labels=rotate_left(natural_labels, rotation), rotation=rotation)

    @property
    def total(self) -> int:
        return len(self.labels)

    def index_of(self, natural_index: int) -> int:
        """Map a position in the natural sequence to its rotated angle index."""

        return (natural_index - self.rotation) % self.total


HOURS_PER_RING = 24
MINUTES_PER_RING = 60
SECONDS_PER_RING = 60

DAY_HOUR_LABELS: Tuple[str, ...] = tuple(str(hour) for hour in range(HOURS_PER_RING))
# The night ring shows midnight as 24.
NIGHT_HOUR_LABELS: Tuple[str, ...] = ("24",) + tuple(str(hour) for hour in range(1, HOURS_PER_RING))
MINUTE_LABELS: Tuple[str, ...] = tuple(str(minute) for minute in range(MINUTES_PER_RING))
SECOND_LABELS: Tuple[str, ...] = tuple(str(second) for second in range(SECONDS_PER_RING))


def build_interval_sets() -> Dict[IntervalSetId, IntervalSet]:
    return {
        IntervalSetId.DAY_HOURS: IntervalSet.build(IntervalSetId.DAY_HOURS, DAY_HOUR_LABELS),
        IntervalSetId.NIGHT_HOURS: IntervalSet.build(IntervalSetId.NIGHT_HOURS, NIGHT_HOUR_LABELS),
        IntervalSetId.MINUTES: IntervalSet.build(IntervalSetId.MINUTES, MINUTE_LABELS),
        IntervalSetId.SECONDS: IntervalSet.build(IntervalSetId.SECONDS, SECOND_LABELS),
    }
