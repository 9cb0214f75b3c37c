"""Pupil localization inside a coarse eye-search window."""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..detectors.haar import load_cascade
from ..detectors.types import Point, SearchWindow
from .voting import PerturbationVoter, crop_region, nearest_box


class PupilLocator:
    """Snap the window onto the eye cascade's nearest hit, then vote for the pupil."""

    def __init__(self, cascade_path: str, voter: Optional[PerturbationVoter] = None) -> None:
        self.cascade_path = cascade_path
        self._cascade = load_cascade(cascade_path)
        self.voter = voter or PerturbationVoter()

    def locate(self, window: SearchWindow, gray: np.ndarray, angle: float = 0.0) -> Point:
        row, col = float(window.row), float(window.col)

        snapped = self._snap_to_eye(gray, row, col, window.scale)
        if snapped is not None:
            row, col = snapped

        return self.voter.vote(gray, row, col, window.scale, window.perturbations, angle)

    def _snap_to_eye(self, gray: np.ndarray, row: float, col: float, scale: float):
        size = scale * 2.0
        region = crop_region(gray, col, row, size, size)
        if region is None:
            return None

        patch, left, top = region
        min_side = max(int(scale * 0.4), 8)
        if patch.shape[0] < min_side or patch.shape[1] < min_side:
            return None

        boxes = self._cascade.detectMultiScale(
            patch,
            scaleFactor=1.1,
            minNeighbors=3,
            minSize=(min_side, min_side),
        )
        box = nearest_box(boxes, col - left, row - top)
        if box is None:
            return None

        x, y, w, h = box
        return top + y + h / 2.0, left + x + w / 2.0
