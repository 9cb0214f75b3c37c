from __future__ import annotations

from typing import Dict, List

import numpy as np

from facemask.detectors import Detection, Point


class FakeDetector:
    def __init__(self, detections: List[Detection]) -> None:
        self.detections = detections
        self.calls = []

    def detect(self, gray, params):
        self.calls.append(params)
        return list(self.detections)


class FakePupilLocator:
    def __init__(self, left: Point, right: Point) -> None:
        self.left = left
        self.right = right
        self.windows = []

    def locate(self, window, gray, angle=0.0):
        self.windows.append(window)
        return self.left if len(self.windows) % 2 == 1 else self.right


class FakeLandmarkLocator:
    def __init__(self, points: Dict[bool, Point]) -> None:
        self.points = points
        self.calls = []

    def locate(self, left_eye, right_eye, gray, perturbations, flip=False):
        self.calls.append((left_eye, right_eye, perturbations, flip))
        return self.points[flip]


def opaque_mask(width: int, height: int, value: int = 255) -> np.ndarray:
    mask = np.full((height, width, 4), value, dtype=np.uint8)
    mask[:, :, 3] = 255
    return mask
