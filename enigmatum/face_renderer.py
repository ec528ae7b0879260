from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, Tuple

from enigmatum.coordinator import DrawMode, FramePlan
from enigmatum.hands import Hand, rotate_path

RADIAL_MARKER_OFFSET = 5


class FacePainterAdapter:
    def fill_background(self, draw_mode: DrawMode) -> None: ...
    def draw_text(self, x: float, y: float, text: str, point_size: float, draw_mode: DrawMode) -> None: ...
    def draw_polygon(self, points: Sequence[Tuple[float, float]], hand: Hand, *, filled: bool, draw_mode: DrawMode) -> None: ...
    def draw_point_marker(self, x: float, y: float) -> None: ...


def render_frame(
    adapter: FacePainterAdapter,
    plan: FramePlan,
    *,
    radial_markers: bool = False,
    trace: Optional[Callable[[str, Mapping[str, Any]], None]] = None,
) -> int:
    """Issue the draw calls for ``plan`` and return how many primitives were drawn."""

    adapter.fill_background(plan.draw_mode)
    if plan.skipped:
        return 0

    drawn = 0
    for ring in plan.rings:
        for mark in ring.marks:
            adapter.draw_text(mark.x, mark.y, mark.label, ring.point_size, plan.draw_mode)
            drawn += 1
            if radial_markers:
                adapter.draw_point_marker(
                    mark.radial_x + mark.side_x * RADIAL_MARKER_OFFSET,
                    mark.radial_y + mark.side_y * RADIAL_MARKER_OFFSET,
                )

    pivot = plan.center
    for hand_plan in plan.hands:
        rotated = rotate_path(hand_plan.polygon.path, hand_plan.degrees, pivot)
        adapter.draw_polygon(
            [(point.x, point.y) for point in rotated],
            hand_plan.hand,
            filled=hand_plan.filled,
            draw_mode=plan.draw_mode,
        )
        drawn += 1

    if trace:
        trace("render_frame:done", {"primitives": drawn, "mode": plan.draw_mode.value})
    return drawn
