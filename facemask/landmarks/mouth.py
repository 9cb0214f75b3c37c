"""Mouth-corner landmark derived from a pupil pair."""

from __future__ import annotations

import math
import os
from typing import Dict, Optional

import numpy as np

from ..detectors.haar import load_cascade
from ..detectors.types import Point
from .voting import PerturbationVoter, crop_region, nearest_box


def read_cascade_dir(directory: str, names: Dict[str, str]) -> Dict[str, object]:
    """Load every named cascade from ``directory``. Raises ``ModelLoadError``."""
    return {key: load_cascade(os.path.join(directory, filename)) for key, filename in names.items()}


class MouthCornerLocator:
    """
    Locate the left (``flip=False``) or right (``flip=True``) mouth corner.

    The search is anchored on the eye pair: the mouth sits about one
    inter-ocular distance below the mid-eye point along the face's own
    vertical axis. A mouth cascade hit in the lower face refines the anchor
    to the box edge before perturbation voting.
    """

    mouth_drop = 1.05
    corner_spread = 0.42
    window_ratio = 0.3

    def __init__(self, cascades: Dict[str, object], voter: Optional[PerturbationVoter] = None) -> None:
        self._cascade = cascades["mouth"]
        self.voter = voter or PerturbationVoter()

    def locate(
        self,
        left_eye: Point,
        right_eye: Point,
        gray: np.ndarray,
        perturbations: int,
        flip: bool = False,
    ) -> Point:
        if left_eye.is_degenerate or right_eye.is_degenerate:
            return Point()

        d_col = float(right_eye.col - left_eye.col)
        d_row = float(right_eye.row - left_eye.row)
        dist = math.hypot(d_col, d_row)
        if dist == 0:
            return Point()

        # unit vector along the eye line and its downward normal, in (x, y)
        ux, uy = d_col / dist, d_row / dist
        nx, ny = -uy, ux
        side = 1.0 if flip else -1.0

        mid_x = (left_eye.col + right_eye.col) / 2.0
        mid_y = (left_eye.row + right_eye.row) / 2.0
        mouth_x = mid_x + nx * self.mouth_drop * dist
        mouth_y = mid_y + ny * self.mouth_drop * dist

        corner_x = mouth_x + ux * side * self.corner_spread * dist
        corner_y = mouth_y + uy * side * self.corner_spread * dist

        box = self._find_mouth(gray, mouth_x, mouth_y, dist)
        if box is not None:
            x, y, w, h = box
            corner_x = x + w if flip else x
            corner_y = y + h / 2.0

        return self.voter.vote(gray, corner_y, corner_x, self.window_ratio * dist, perturbations)

    def _find_mouth(self, gray: np.ndarray, cx: float, cy: float, dist: float):
        region = crop_region(gray, cx, cy, 2.0 * dist, 1.2 * dist)
        if region is None:
            return None

        patch, left, top = region
        min_w = max(int(0.5 * dist), 8)
        min_h = max(int(0.25 * dist), 4)
        if patch.shape[1] < min_w or patch.shape[0] < min_h:
            return None

        boxes = self._cascade.detectMultiScale(
            patch,
            scaleFactor=1.1,
            minNeighbors=5,
            minSize=(min_w, min_h),
        )
        box = nearest_box(boxes, cx - left, cy - top)
        if box is None:
            return None

        x, y, w, h = box
        return left + x, top + y, w, h
