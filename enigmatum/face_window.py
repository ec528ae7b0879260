"""Qt widget hosting the watch face render loop."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QRectF, QTimer
from PyQt6.QtGui import QPainter, QPaintEvent
from PyQt6.QtWidgets import QWidget

from enigmatum.coordinator import DrawMode, FramePlan, RenderCoordinator
from enigmatum.face_renderer import render_frame
from enigmatum.geometry import Bounds
from enigmatum.qt_painter import FacePalette, QtFacePainterAdapter
from enigmatum.rotation import FrameTime, system_now

_LOGGER = logging.getLogger("Enigmatum.Face.Window")


class WatchFaceWindow(QWidget):
    """Repaints on a fixed timer; each paint builds and draws one frame plan."""

    def __init__(
        self,
        coordinator: RenderCoordinator,
        *,
        clock: Callable[[], FrameTime] = system_now,
        palette: Optional[FacePalette] = None,
        draw_mode: DrawMode = DrawMode.INTERACTIVE,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._coordinator = coordinator
        self._clock = clock
        self._palette = palette or FacePalette()
        self._draw_mode = draw_mode
        self._last_plan: Optional[FramePlan] = None
        self._paint_failures = 0
        self._timer = QTimer(self)
        self._timer.setInterval(coordinator.settings.frame_interval_ms)
        self._timer.timeout.connect(self.update)
        self.setWindowTitle("Enigmatum")

    @property
    def last_plan(self) -> Optional[FramePlan]:
        return self._last_plan

    @property
    def paint_failures(self) -> int:
        return self._paint_failures

    def start(self) -> None:
        self._timer.start()
        _LOGGER.debug("Frame timer started (%d ms)", self._timer.interval())

    def stop(self) -> None:
        self._timer.stop()

    def set_draw_mode(self, draw_mode: DrawMode) -> None:
        if draw_mode == self._draw_mode:
            return
        _LOGGER.info("Draw mode %s -> %s", self._draw_mode.value, draw_mode.value)
        self._draw_mode = draw_mode
        self.update()

    def surface_bounds(self) -> Bounds:
        rect = self.rect()
        return Bounds(rect.left(), rect.top(), rect.left() + rect.width(), rect.top() + rect.height())

    def paintEvent(self, event: QPaintEvent) -> None:  # noqa: N802 - Qt override
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            plan = self._coordinator.build_frame(self.surface_bounds(), self._clock(), self._draw_mode)
            adapter = QtFacePainterAdapter(
                painter,
                QRectF(self.rect()),
                font_family=self._coordinator.settings.font_family,
                palette=self._palette,
            )
            render_frame(adapter, plan, radial_markers=self._coordinator.dev_settings.radial_point_markers)
            self._last_plan = plan
        except Exception:
            self._paint_failures += 1
            _LOGGER.exception("Frame paint failed; next tick will retry")
        finally:
            painter.end()
