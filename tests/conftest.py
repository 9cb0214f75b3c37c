from __future__ import annotations

import pytest

from facemask.config_manager import ConfigManager
from facemask.detectors import Detection, Point

from fakes import FakeDetector, FakeLandmarkLocator, FakePupilLocator


@pytest.fixture
def config(tmp_path) -> ConfigManager:
    return ConfigManager(str(tmp_path / "missing.json"))


@pytest.fixture
def reference_face() -> Detection:
    return Detection(100, 100, 80, 10.0)


@pytest.fixture
def fakes(reference_face):
    detector = FakeDetector([reference_face])
    pupils = FakePupilLocator(Point(94, 86, 20.0), Point(94, 114, 20.0))
    landmarks = FakeLandmarkLocator({False: Point(130, 90, 6.0), True: Point(128, 110, 6.0)})
    return detector, pupils, landmarks
