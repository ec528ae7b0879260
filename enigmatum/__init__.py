"""Analog watch face engine: radial mark layout, hand geometry and frame planning."""
from __future__ import annotations

from enigmatum.version import __version__

__all__ = ["__version__"]
