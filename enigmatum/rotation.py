"""Wall-clock time to hand rotation."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from enigmatum.hands import Hand

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400
SECONDS_PER_HALF_DAY = SECONDS_PER_DAY // 2


@dataclass(frozen=True)
class FrameTime:
    """Per-frame timestamp fields consumed by the face."""

    hour_of_day: int
    minute_of_hour: int
    second_of_minute: int
    second_of_day: int

    @classmethod
    def from_datetime(cls, value: datetime) -> "FrameTime":
        return cls(
            hour_of_day=value.hour,
            minute_of_hour=value.minute,
            second_of_minute=value.second,
            second_of_day=value.hour * SECONDS_PER_HOUR + value.minute * SECONDS_PER_MINUTE + value.second,
        )

    @classmethod
    def from_second_of_day(cls, second_of_day: int) -> "FrameTime":
        seconds = int(second_of_day) % SECONDS_PER_DAY
        return cls(
            hour_of_day=seconds // SECONDS_PER_HOUR,
            minute_of_hour=(seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE,
            second_of_minute=seconds % SECONDS_PER_MINUTE,
            second_of_day=seconds,
        )


def system_now(tz: Optional[object] = None) -> FrameTime:
    return FrameTime.from_datetime(datetime.now(tz))  # type: ignore[arg-type]


class TimeToRotation:
    """Maps a timestamp to per-hand rotation in degrees, clockwise from 12 o'clock.

    The hour hand steps once per whole hour (15 degrees on a 24-hour dial, 30 on
    a 12-hour dial). ``smooth_hours`` switches it to a continuous sweep driven
    by the second of the day.
    """

    def __init__(self, *, smooth_hours: bool = False) -> None:
        self.smooth_hours = smooth_hours

    def rotation_degrees(self, timestamp: FrameTime, hand: Hand, use_24_hour_hours: bool) -> float:
        if hand is Hand.SECOND:
            degrees = (timestamp.second_of_day % SECONDS_PER_MINUTE) * 360.0 / SECONDS_PER_MINUTE
        elif hand is Hand.MINUTE:
            degrees = (timestamp.second_of_day % SECONDS_PER_HOUR) * 360.0 / SECONDS_PER_HOUR
        elif self.smooth_hours:
            period = SECONDS_PER_DAY if use_24_hour_hours else SECONDS_PER_HALF_DAY
            degrees = (timestamp.second_of_day % period) * 360.0 / period
        elif use_24_hour_hours:
            degrees = timestamp.hour_of_day * 15.0
        else:
            degrees = timestamp.hour_of_day * 30.0
        return degrees % 360.0


def rotation_degrees(timestamp: FrameTime, hand: Hand, use_24_hour_hours: bool) -> float:
    return TimeToRotation().rotation_degrees(timestamp, hand, use_24_hour_hours)
