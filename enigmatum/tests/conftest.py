from __future__ import annotations

import os
from typing import Iterable, List, Optional, Tuple

import pytest

from enigmatum.metrics import BoundingBox, MarkMetrics


def pytest_configure(config):
    config.addinivalue_line("markers", "pyqt_required: needs a PyQt6 application (set PYQT_TESTS=1)")


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


class FakeMeasurer:
    """Returns a fixed box for every label and records each call."""

    def __init__(self, width: float = 20.0, height: float = 10.0, failing: Iterable[str] = ()) -> None:
        self.width = width
        self.height = height
        self.failing = set(failing)
        self.calls: List[Tuple[str, float, str]] = []

    def __call__(self, text: str, point_size: float, font_family: str) -> BoundingBox:
        self.calls.append((text, point_size, font_family))
        if text in self.failing:
            raise RuntimeError(f"no glyph for {text}")
        return BoundingBox(width=self.width, height=self.height)


@pytest.fixture
def measurer() -> FakeMeasurer:
    return FakeMeasurer()


@pytest.fixture
def metrics(measurer: FakeMeasurer) -> MarkMetrics:
    return MarkMetrics(measurer, font_family="TestFont")


@pytest.fixture
def make_metrics():
    def _factory(failing: Optional[Iterable[str]] = None, **kwargs) -> Tuple[FakeMeasurer, MarkMetrics]:
        fake = FakeMeasurer(failing=failing or (), **kwargs)
        return fake, MarkMetrics(fake, font_family="TestFont")

    return _factory
