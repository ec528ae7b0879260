"""Per-frame decisions: which rings and hands to draw, and where."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from enigmatum.geometry import Bounds, InvalidBounds, Point
from enigmatum.hands import ClockHandGeometry, Hand, HandPolygon, HandSet
from enigmatum.interval_set import IntervalSet, IntervalSetId, build_interval_sets
from enigmatum.layout_cache import MarkLayoutCache, PlacedMark
from enigmatum.metrics import MarkMetrics
from enigmatum.rotation import FrameTime, TimeToRotation
from enigmatum.settings import DevSettings, FaceSettings
from enigmatum.style import DisplayStyle, StyleChannel, StyleRegistration

_LOGGER = logging.getLogger("Enigmatum.Face.Coordinator")


class DrawMode(str, Enum):
    INTERACTIVE = "interactive"
    AMBIENT = "ambient"


class RingId(str, Enum):
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"


_INTERACTIVE_RINGS: Tuple[RingId, ...] = (RingId.HOURS, RingId.MINUTES, RingId.SECONDS)
_AMBIENT_RINGS: Tuple[RingId, ...] = (RingId.HOURS,)
_INTERACTIVE_HANDS: Tuple[Hand, ...] = (Hand.HOUR, Hand.MINUTE, Hand.SECOND)
_AMBIENT_HANDS: Tuple[Hand, ...] = (Hand.HOUR, Hand.MINUTE)


@dataclass(frozen=True)
class RingPlan:
    ring: RingId
    set_id: IntervalSetId
    point_size: float
    marks: Tuple[PlacedMark, ...]


@dataclass(frozen=True)
class HandPlan:
    hand: Hand
    degrees: float
    polygon: HandPolygon
    filled: bool


@dataclass(frozen=True)
class FramePlan:
    bounds: Bounds
    draw_mode: DrawMode
    style: DisplayStyle
    rings: Tuple[RingPlan, ...] = ()
    hands: Tuple[HandPlan, ...] = ()
    skipped: bool = False
    skip_reason: Optional[str] = None

    @property
    def center(self) -> Point:
        return self.bounds.exact_center()

    @property
    def ambient(self) -> bool:
        return self.draw_mode is DrawMode.AMBIENT


def active_hour_set(style: DisplayStyle) -> IntervalSetId:
    return IntervalSetId.NIGHT_HOURS if style.is_night_period else IntervalSetId.DAY_HOURS


def is_ambient(draw_mode: DrawMode) -> bool:
    return draw_mode is DrawMode.AMBIENT


class RenderCoordinator:
    """Owns the layout and hand caches and turns one frame's inputs into a FramePlan.

    Frames are computed one at a time by the caller's render loop. Style updates
    published on the channel take effect at the start of the next frame.
    """

    def __init__(
        self,
        metrics: MarkMetrics,
        settings: Optional[FaceSettings] = None,
        dev_settings: Optional[DevSettings] = None,
        style_channel: Optional[StyleChannel] = None,
    ) -> None:
        self._settings = settings or FaceSettings()
        self._dev_settings = dev_settings or DevSettings()
        self._metrics = metrics
        self._style_channel = style_channel or StyleChannel(
            DisplayStyle(use_24_hour_hours=self._settings.display_twenty_four_hours)
        )
        self._interval_sets: Dict[IntervalSetId, IntervalSet] = build_interval_sets()
        self._layout_cache = MarkLayoutCache(
            self._settings.mark_padding, log_rebuilds=self._dev_settings.log_cache_rebuilds
        )
        self._hand_geometry = ClockHandGeometry()
        self._rotation = TimeToRotation(smooth_hours=self._settings.smooth_hour_hand)
        self._frame_in_flight = False
        self._frames_built = 0
        self._frames_skipped = 0
        self._last_skip_signature: Optional[Tuple[int, int, int, int]] = None

    @property
    def settings(self) -> FaceSettings:
        return self._settings

    @property
    def dev_settings(self) -> DevSettings:
        return self._dev_settings

    @property
    def style_channel(self) -> StyleChannel:
        return self._style_channel

    @property
    def layout_cache(self) -> MarkLayoutCache:
        return self._layout_cache

    @property
    def hand_geometry(self) -> ClockHandGeometry:
        return self._hand_geometry

    @property
    def frame_stats(self) -> Dict[str, int]:
        return {"built": self._frames_built, "skipped": self._frames_skipped}

    def interval_set(self, set_id: IntervalSetId) -> IntervalSet:
        return self._interval_sets[set_id]

    def attach_style_source(self, register: StyleRegistration) -> object:
        return self._style_channel.subscribe(register)

    def begin_frame(self) -> DisplayStyle:
        return self._style_channel.consume()

    def rings_for(self, draw_mode: DrawMode) -> Tuple[RingId, ...]:
        return _AMBIENT_RINGS if is_ambient(draw_mode) else _INTERACTIVE_RINGS

    def hands_visible(self, draw_mode: DrawMode) -> Tuple[Hand, ...]:
        return _AMBIENT_HANDS if is_ambient(draw_mode) else _INTERACTIVE_HANDS

    def set_id_for(self, ring_id: RingId, style: DisplayStyle) -> IntervalSetId:
        if ring_id is RingId.HOURS:
            return active_hour_set(style)
        if ring_id is RingId.MINUTES:
            return IntervalSetId.MINUTES
        return IntervalSetId.SECONDS

    def ring_bounds(self, ring_id: RingId, bounds: Bounds) -> Bounds:
        return bounds.scaled(self._settings.ring_scale(ring_id.value))

    def layout_for(self, ring_id: RingId, bounds: Bounds, style: DisplayStyle) -> Tuple[PlacedMark, ...]:
        set_id = self.set_id_for(ring_id, style)
        return self._layout_cache.get_or_build(
            set_id,
            self.ring_bounds(ring_id, bounds),
            self._interval_sets[set_id].labels,
            self._settings.point_size_for(ring_id.value),
            self._metrics,
        )

    def hands_for(self, bounds: Bounds) -> HandSet:
        return self._hand_geometry.get_or_build(bounds)

    def hand_rotation(self, hand: Hand, timestamp: FrameTime, style: DisplayStyle) -> float:
        return self._rotation.rotation_degrees(timestamp, hand, style.use_24_hour_hours)

    def build_frame(
        self,
        bounds: Bounds,
        timestamp: FrameTime,
        draw_mode: DrawMode = DrawMode.INTERACTIVE,
    ) -> FramePlan:
        assert not self._frame_in_flight, "build_frame re-entered while another frame is in flight"
        self._frame_in_flight = True
        try:
            style = self.begin_frame().for_hour(timestamp.hour_of_day)
            try:
                rings = tuple(
                    RingPlan(
                        ring=ring_id,
                        set_id=self.set_id_for(ring_id, style),
                        point_size=self._settings.point_size_for(ring_id.value),
                        marks=self.layout_for(ring_id, bounds, style),
                    )
                    for ring_id in self.rings_for(draw_mode)
                )
                hand_set = self.hands_for(bounds)
            except InvalidBounds as exc:
                return self._skip_frame(bounds, draw_mode, style, exc)

            filled = not is_ambient(draw_mode)
            hands = tuple(
                HandPlan(
                    hand=hand,
                    degrees=self.hand_rotation(hand, timestamp, style),
                    polygon=hand_set.get(hand),
                    filled=filled,
                )
                for hand in self.hands_visible(draw_mode)
            )
            self._frames_built += 1
            self._last_skip_signature = None
            if self._dev_settings.trace_frames:
                _LOGGER.debug(
                    "Frame %d: mode=%s style=%s rings=%s hands=%s",
                    self._frames_built,
                    draw_mode.value,
                    style,
                    ",".join(f"{plan.set_id.value}:{len(plan.marks)}" for plan in rings),
                    ",".join(f"{plan.hand.value}@{plan.degrees:.1f}" for plan in hands),
                )
            return FramePlan(bounds=bounds, draw_mode=draw_mode, style=style, rings=rings, hands=hands)
        finally:
            self._frame_in_flight = False

    def _skip_frame(
        self, bounds: Bounds, draw_mode: DrawMode, style: DisplayStyle, exc: InvalidBounds
    ) -> FramePlan:
        self._frames_skipped += 1
        if self._last_skip_signature != bounds.signature:
            self._last_skip_signature = bounds.signature
            _LOGGER.warning("Skipping frame drawing: %s", exc)
        return FramePlan(bounds=bounds, draw_mode=draw_mode, style=style, skipped=True, skip_reason=str(exc))
