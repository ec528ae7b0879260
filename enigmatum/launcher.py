from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Optional, Tuple

from PyQt6.QtWidgets import QApplication

from enigmatum.coordinator import DrawMode, RenderCoordinator
from enigmatum.face_window import WatchFaceWindow
from enigmatum.logging_utils import configure_face_logging
from enigmatum.metrics import MarkMetrics
from enigmatum.qt_painter import QtTextMeasurer
from enigmatum.settings import (
    DEV_MODE_ENABLED,
    DEV_SETTINGS_FILENAME,
    FACE_SETTINGS_FILENAME,
    load_dev_settings,
    load_face_settings,
)
from enigmatum.style import DisplayStyle, StyleChannel
from enigmatum.version import DEV_MODE_ENV_VAR, __version__

CONFIG_DIR_ENV_VAR = "ENIGMATUM_CONFIG_DIR"
DEFAULT_SIZE = (454, 454)


def resolve_settings_path(args_path: Optional[str], filename: str = FACE_SETTINGS_FILENAME) -> Path:
    if args_path:
        return Path(args_path).expanduser().resolve()
    env_override = os.getenv(CONFIG_DIR_ENV_VAR)
    if env_override:
        return (Path(env_override).expanduser() / filename).resolve()
    return (Path.cwd() / filename).resolve()


def parse_size(value: str) -> Tuple[int, int]:
    token = value.lower().replace(" ", "")
    width_text, sep, height_text = token.partition("x")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}")
    try:
        width = int(width_text)
        height = int(height_text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from exc
    if width <= 0 or height <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {value!r}")
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Enigmatum analog watch face")
    parser.add_argument("--settings", help=f"Path to {FACE_SETTINGS_FILENAME}")
    parser.add_argument("--dev-settings", help=f"Path to {DEV_SETTINGS_FILENAME} (dev mode only)")
    parser.add_argument(
        "--twenty-four-hours",
        action="store_true",
        default=None,
        help="Use the 24-hour hour hand convention regardless of settings",
    )
    parser.add_argument("--ambient", action="store_true", help="Start in the low-power ambient draw mode")
    parser.add_argument("--size", type=parse_size, default=DEFAULT_SIZE, help="Window size as WIDTHxHEIGHT")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings_path = resolve_settings_path(args.settings)
    settings = load_face_settings(settings_path)
    dev_settings = load_dev_settings(resolve_settings_path(args.dev_settings, DEV_SETTINGS_FILENAME))
    logger = configure_face_logging(dev_mode=DEV_MODE_ENABLED, retention=settings.log_retention)
    if not DEV_MODE_ENABLED:
        logger.debug("dev_settings.json ignored (release mode). Export %s=1 to enable dev toggles.", DEV_MODE_ENV_VAR)

    logger.info("Starting watch face %s (pid=%s)", __version__, os.getpid())
    logger.debug(
        "Loaded settings from %s: family=%s padding=%.1f frame_interval=%dms smooth_hours=%s",
        settings_path,
        settings.font_family,
        settings.mark_padding,
        settings.frame_interval_ms,
        settings.smooth_hour_hand,
    )

    use_24 = settings.display_twenty_four_hours if args.twenty_four_hours is None else True
    channel = StyleChannel(DisplayStyle(use_24_hour_hours=use_24))

    app = QApplication(sys.argv)
    coordinator = RenderCoordinator(
        MarkMetrics(QtTextMeasurer(), settings.font_family),
        settings,
        dev_settings,
        style_channel=channel,
    )
    window = WatchFaceWindow(
        coordinator,
        draw_mode=DrawMode.AMBIENT if args.ambient else DrawMode.INTERACTIVE,
    )
    width, height = args.size
    window.resize(width, height)
    window.show()
    window.start()

    exit_code = app.exec()
    window.stop()
    logger.info(
        "Watch face exiting with code %s (frames=%s layout=%s)",
        exit_code,
        coordinator.frame_stats,
        coordinator.layout_cache.stats,
    )
    return int(exit_code)
