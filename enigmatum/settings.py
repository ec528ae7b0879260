"""Configuration loading for the watch face."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from enigmatum.version import __version__, is_dev_build

_LOGGER = logging.getLogger("Enigmatum.Face")

DEV_MODE_ENABLED = is_dev_build(__version__)
FACE_SETTINGS_FILENAME = "face_settings.json"
DEV_SETTINGS_FILENAME = "dev_settings.json"
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20
FRAME_INTERVAL_MIN_MS = 16
FRAME_INTERVAL_MAX_MS = 1000


def _default_ring_scales() -> Dict[str, float]:
    return {"hours": 1.0, "minutes": 0.5, "seconds": 0.25}


@dataclass(frozen=True)
class FaceSettings:
    font_family: str = "Sans Serif"
    hour_mark_point_size: float = 14.0
    minute_mark_point_size: float = 9.0
    second_mark_point_size: float = 7.0
    mark_padding: float = 20.0
    ring_scales: Mapping[str, float] = field(default_factory=_default_ring_scales)
    frame_interval_ms: int = 16
    smooth_hour_hand: bool = False
    display_twenty_four_hours: bool = False
    log_retention: int = 5

    def point_size_for(self, ring: str) -> float:
        if ring == "minutes":
            return self.minute_mark_point_size
        if ring == "seconds":
            return self.second_mark_point_size
        return self.hour_mark_point_size

    def ring_scale(self, ring: str) -> float:
        return float(self.ring_scales.get(ring, _default_ring_scales().get(ring, 1.0)))


@dataclass(frozen=True)
class DevSettings:
    radial_point_markers: bool = False
    log_cache_rebuilds: bool = False
    trace_frames: bool = False


def _read_json_object(path: Path) -> Optional[Dict[str, Any]]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return None
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        _LOGGER.warning("Ignoring malformed settings file %s: %s", path, exc)
        return None
    if not isinstance(data, dict):
        _LOGGER.warning("Ignoring settings file %s: expected a JSON object", path)
        return None
    return data


def _coerce_float(raw: Any, fallback: float, *, minimum: float = 0.0) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(value):
        return fallback
    return max(minimum, value)


def coerce_bool(value: Any, fallback: bool) -> bool:
    """Interpret JSON and user-style toggles; unrecognised values keep ``fallback``."""

    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if value is None:
        return fallback
    token = str(value).strip().lower()
    if token in {"1", "true", "yes", "on"}:
        return True
    if token in {"0", "false", "no", "off"}:
        return False
    return fallback


def _coerce_int(raw: Any, fallback: int, *, minimum: int, maximum: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return fallback
    return max(minimum, min(maximum, value))


def _coerce_ring_scales(raw: Any) -> Dict[str, float]:
    scales = _default_ring_scales()
    if not isinstance(raw, dict):
        return scales
    for ring in scales:
        if ring in raw:
            value = _coerce_float(raw[ring], scales[ring])
            if 0.0 < value <= 1.0:
                scales[ring] = value
    return scales


def load_face_settings(path: Path) -> FaceSettings:
    """Read face_settings.json, falling back to defaults for anything missing or invalid."""

    defaults = FaceSettings()
    data = _read_json_object(path)
    if data is None:
        return defaults

    family = data.get("font_family")
    font_family = family.strip() if isinstance(family, str) and family.strip() else defaults.font_family

    return FaceSettings(
        font_family=font_family,
        hour_mark_point_size=_coerce_float(data.get("hour_mark_point_size"), defaults.hour_mark_point_size, minimum=1.0),
        minute_mark_point_size=_coerce_float(
            data.get("minute_mark_point_size"), defaults.minute_mark_point_size, minimum=1.0
        ),
        second_mark_point_size=_coerce_float(
            data.get("second_mark_point_size"), defaults.second_mark_point_size, minimum=1.0
        ),
        mark_padding=_coerce_float(data.get("mark_padding"), defaults.mark_padding),
        ring_scales=_coerce_ring_scales(data.get("ring_scales")),
        frame_interval_ms=_coerce_int(
            data.get("frame_interval_ms"),
            defaults.frame_interval_ms,
            minimum=FRAME_INTERVAL_MIN_MS,
            maximum=FRAME_INTERVAL_MAX_MS,
        ),
        smooth_hour_hand=coerce_bool(data.get("smooth_hour_hand"), defaults.smooth_hour_hand),
        display_twenty_four_hours=coerce_bool(
            data.get("display_twenty_four_hours"), defaults.display_twenty_four_hours
        ),
        log_retention=_coerce_int(
            data.get("log_retention"), defaults.log_retention, minimum=LOG_RETENTION_MIN, maximum=LOG_RETENTION_MAX
        ),
    )


def load_dev_settings(path: Path, *, enabled: Optional[bool] = None) -> DevSettings:
    """Load dev-mode-only flags; release builds always get the defaults."""

    active = DEV_MODE_ENABLED if enabled is None else enabled
    if not active:
        return DevSettings()
    data = _read_json_object(path) or {}
    return DevSettings(
        radial_point_markers=coerce_bool(data.get("radial_point_markers"), False),
        log_cache_rebuilds=coerce_bool(data.get("log_cache_rebuilds"), False),
        trace_frames=coerce_bool(data.get("trace_frames"), False),
    )
