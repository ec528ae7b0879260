"""Cached radial placement of dial marks, rebuilt only when its inputs change."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Hashable, Optional, Sequence, Tuple

from enigmatum.angle_mapper import angle_of
from enigmatum.geometry import Bounds, compare_axis
from enigmatum.metrics import BoundingBox, MarkMetrics, MetricsUnavailable

_LOGGER = logging.getLogger("Enigmatum.Face.Layout")

DEFAULT_MARK_PADDING = 20.0

BoundsSignature = Tuple[int, int, int, int]
MetricsSignature = Tuple[float, Tuple[str, ...], Tuple[str, ...]]


@dataclass(frozen=True)
class PlacedMark:
    label: str
    angle_index: int
    x: float
    y: float
    bounding_box: BoundingBox
    radial_x: float = 0.0
    radial_y: float = 0.0
    side_x: int = 0
    side_y: int = 0


@dataclass(frozen=True)
class LayoutCacheEntry:
    bounds_signature: BoundsSignature
    metrics_signature: MetricsSignature
    placed_marks: Tuple[PlacedMark, ...]
    diagnostics: Tuple[str, ...] = ()

    @property
    def complete(self) -> bool:
        return not self.diagnostics

    def matches(self, bounds_signature: BoundsSignature, metrics_signature: MetricsSignature) -> bool:
        # Incomplete entries never match so omitted marks are measured again next frame.
        return (
            self.complete
            and self.bounds_signature == bounds_signature
            and self.metrics_signature == metrics_signature
        )


def place_mark(
    label: str,
    index: int,
    total: int,
    bounds: Bounds,
    box: BoundingBox,
    padding: float = DEFAULT_MARK_PADDING,
) -> PlacedMark:
    """Place one label on the circle inscribed in ``bounds``.

    The draw origin is the text baseline-left corner. Along each axis the label
    is centred on the radial point, then pushed away from the dial centre by
    ``padding`` unless the point sits exactly on that axis' bisector.
    """

    radius = min(bounds.width, bounds.height) / 2.0
    center = bounds.exact_center()
    angle = angle_of(index, total)
    raw_x = center.x + radius * math.cos(angle)
    raw_y = center.y + radius * math.sin(angle)
    side_x = compare_axis(center.x, raw_x)
    side_y = compare_axis(center.y, raw_y)
    x_offset = -box.half_width + padding * side_x
    y_offset = box.half_height + padding * side_y
    return PlacedMark(
        label=label,
        angle_index=index,
        x=raw_x + x_offset,
        y=raw_y + y_offset,
        bounding_box=box,
        radial_x=raw_x,
        radial_y=raw_y,
        side_x=side_x,
        side_y=side_y,
    )


class MarkLayoutCache:
    """Owns one cache entry per mark set.

    Entries are replaced wholesale when the surface bounds or the metrics
    fingerprint (point size, labels, measurer context) differ from the request;
    otherwise the stored tuple is returned as-is.
    """

    def __init__(self, padding: float = DEFAULT_MARK_PADDING, *, log_rebuilds: bool = False) -> None:
        self._padding = float(padding)
        self._log_rebuilds = log_rebuilds
        self._entries: Dict[Hashable, LayoutCacheEntry] = {}
        self._stats: Dict[str, int] = {"calls": 0}

    @property
    def padding(self) -> float:
        return self._padding

    @property
    def stats(self) -> Dict[str, int]:
        return dict(self._stats)

    def entry(self, set_id: Hashable) -> Optional[LayoutCacheEntry]:
        return self._entries.get(set_id)

    def invalidate(self, reason: Optional[str] = None) -> None:
        self._entries.clear()
        self._bump("cache_reset")
        if reason:
            _LOGGER.debug("Layout cache invalidated (%s)", reason)

    def get_or_build(
        self,
        set_id: Hashable,
        bounds: Bounds,
        labels: Sequence[str],
        point_size: float,
        metrics: MarkMetrics,
    ) -> Tuple[PlacedMark, ...]:
        self._bump("calls")
        bounds.require_valid()
        labels_key = labels if isinstance(labels, tuple) else tuple(labels)
        metrics_signature: MetricsSignature = (float(point_size), labels_key, metrics.context)
        current = self._entries.get(set_id)
        if current is not None and current.matches(bounds.signature, metrics_signature):
            self._bump("cache_hit")
            return current.placed_marks

        self._bump("cache_miss")
        entry = self._build(bounds, labels_key, float(point_size), metrics, metrics_signature)
        self._bump("rebuilds")
        if labels_key and not entry.placed_marks and current is not None:
            self._bump("rebuild_failed")
            _LOGGER.warning(
                "No marks placed for %s; keeping previous layout for %s",
                getattr(set_id, "value", set_id),
                current.bounds_signature,
            )
            return entry.placed_marks
        self._entries[set_id] = entry
        if self._log_rebuilds:
            _LOGGER.debug(
                "Rebuilt layout for %s: bounds=%dx%d marks=%d omitted=%d point_size=%.1f",
                getattr(set_id, "value", set_id),
                bounds.width,
                bounds.height,
                len(entry.placed_marks),
                len(entry.diagnostics),
                point_size,
            )
        return entry.placed_marks

    def _build(
        self,
        bounds: Bounds,
        labels: Tuple[str, ...],
        point_size: float,
        metrics: MarkMetrics,
        metrics_signature: MetricsSignature,
    ) -> LayoutCacheEntry:
        total = len(labels)
        placed: list[PlacedMark] = []
        diagnostics: list[str] = []
        for index, label in enumerate(labels):
            try:
                box = metrics.measure(label, point_size)
            except MetricsUnavailable as exc:
                diagnostics.append(str(exc))
                self._bump("omitted")
                _LOGGER.warning("Omitting mark %r at index %d: %s", label, index, exc.reason)
                continue
            placed.append(place_mark(label, index, total, bounds, box, self._padding))
        return LayoutCacheEntry(
            bounds_signature=bounds.signature,
            metrics_signature=metrics_signature,
            placed_marks=tuple(placed),
            diagnostics=tuple(diagnostics),
        )

    def _bump(self, key: str) -> None:
        self._stats[key] = self._stats.get(key, 0) + 1
