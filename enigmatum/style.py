"""Display style snapshots and their hand-off into the frame loop."""
from __future__ import annotations

import logging
import queue
from dataclasses import dataclass, replace
from typing import Any, Callable, Mapping, Optional

from enigmatum.settings import coerce_bool

_LOGGER = logging.getLogger("Enigmatum.Face.Style")

DISPLAY_TWENTY_FOUR_HOURS_SETTING = "display_twenty_four_hours"
NIGHT_PERIOD_START_HOUR = 13


@dataclass(frozen=True)
class DisplayStyle:
    use_24_hour_hours: bool = False
    is_night_period: bool = False

    @classmethod
    def from_user_style(
        cls, payload: Mapping[str, Any], fallback: Optional["DisplayStyle"] = None
    ) -> "DisplayStyle":
        """Apply the recognised user-style settings on top of ``fallback``."""

        base = fallback or cls()
        raw = payload.get(DISPLAY_TWENTY_FOUR_HOURS_SETTING)
        if raw is None:
            return base
        return replace(base, use_24_hour_hours=coerce_bool(raw, base.use_24_hour_hours))

    def for_hour(self, hour_of_day: int) -> "DisplayStyle":
        night = is_night_hour(hour_of_day)
        if night == self.is_night_period:
            return self
        return replace(self, is_night_period=night)


def is_night_hour(hour_of_day: int) -> bool:
    return hour_of_day >= NIGHT_PERIOD_START_HOUR


StyleListener = Callable[[Mapping[str, Any]], None]
StyleRegistration = Callable[[StyleListener], Any]


class StyleChannel:
    """Carries style snapshots from the settings source to the next frame.

    ``publish`` may be called from any thread. ``consume`` is called once at the
    start of a frame and swaps in the newest snapshot, so a frame never sees a
    style change half way through.
    """

    def __init__(self, initial: Optional[DisplayStyle] = None, maxsize: int = 32) -> None:
        self._current = initial or DisplayStyle()
        self._pending: "queue.Queue[DisplayStyle]" = queue.Queue(maxsize=maxsize)
        self._latest_published = self._current

    @property
    def current(self) -> DisplayStyle:
        return self._current

    def publish(self, style: DisplayStyle) -> None:
        self._latest_published = style
        try:
            self._pending.put_nowait(style)
        except queue.Full:
            # Only the newest snapshot matters; drop the backlog and keep this one.
            self._drain()
            self._pending.put_nowait(style)

    def publish_user_style(self, payload: Mapping[str, Any]) -> None:
        style = DisplayStyle.from_user_style(payload, self._latest_published)
        _LOGGER.debug("User style update: %s -> %s", dict(payload), style)
        if style != self._latest_published:
            self.publish(style)

    def subscribe(self, register: StyleRegistration) -> Any:
        """Register ``publish_user_style`` with an external settings source."""

        return register(self.publish_user_style)

    def consume(self) -> DisplayStyle:
        newest = self._drain()
        if newest is not None and newest != self._current:
            _LOGGER.info("Display style changed: %s", newest)
            self._current = newest
        return self._current

    def _drain(self) -> Optional[DisplayStyle]:
        newest: Optional[DisplayStyle] = None
        while True:
            try:
                newest = self._pending.get_nowait()
            except queue.Empty:
                return newest
