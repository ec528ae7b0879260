"""Version metadata and dev-mode detection for the watch face."""
from __future__ import annotations

import os
from typing import Optional

__version__ = "0.3.0"

DEV_MODE_ENV_VAR = "ENIGMATUM_DEV_MODE"


def is_dev_build(version: Optional[str] = None) -> bool:
    """Return True when the env override or a ``-dev`` version enables dev mode."""

    value = os.getenv(DEV_MODE_ENV_VAR)
    if value is not None:
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off"}:
            return False
    candidate = __version__ if version is None else version
    return "-dev" in str(candidate or "").lower()
