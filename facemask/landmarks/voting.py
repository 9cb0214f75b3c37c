"""Seed-stable perturbation voting used by the pupil and landmark locators."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from ..detectors.types import Point


class PerturbationVoter:
    """
    Refine a coarse location by sampling jittered copies of its window.

    Each perturbed window votes for its darkest (blurred) pixel and the
    per-axis median of the votes is returned. A fresh generator seeded with
    ``seed`` is created on every call, so a given request always produces
    the same answer regardless of what ran before it.
    """

    def __init__(
        self,
        *,
        seed: int = 0,
        offset_jitter: float = 0.075,
        scale_jitter: float = 0.075,
    ) -> None:
        self.seed = seed
        self.offset_jitter = offset_jitter
        self.scale_jitter = scale_jitter

    def vote(
        self,
        gray: np.ndarray,
        row: float,
        col: float,
        scale: float,
        perturbations: int,
        angle: float = 0.0,
    ) -> Point:
        if gray is None or gray.size == 0 or scale <= 0:
            return Point()

        rng = np.random.default_rng(self.seed)
        cos_a = math.cos(angle * 2.0 * math.pi)
        sin_a = math.sin(angle * 2.0 * math.pi)

        votes: List[Tuple[int, int]] = []
        for _ in range(max(int(perturbations), 1)):
            d_row = rng.uniform(-self.offset_jitter, self.offset_jitter) * scale
            d_col = rng.uniform(-self.offset_jitter, self.offset_jitter) * scale
            s = scale * rng.uniform(1.0 - self.scale_jitter, 1.0 + self.scale_jitter)

            r = row + d_row * cos_a - d_col * sin_a
            c = col + d_row * sin_a + d_col * cos_a

            vote = self._darkest_point(gray, r, c, s)
            if vote is not None:
                votes.append(vote)

        if not votes:
            return Point()

        rows = np.array([v[0] for v in votes], dtype=np.float64)
        cols = np.array([v[1] for v in votes], dtype=np.float64)
        return Point(
            row=int(round(float(np.median(rows)))),
            col=int(round(float(np.median(cols)))),
            scale=float(scale),
        )

    @staticmethod
    def _darkest_point(gray: np.ndarray, row: float, col: float, scale: float) -> Optional[Tuple[int, int]]:
        img_h, img_w = gray.shape[:2]
        half = max(int(scale / 2), 1)

        top = max(int(round(row)) - half, 0)
        left = max(int(round(col)) - half, 0)
        bottom = min(int(round(row)) + half + 1, img_h)
        right = min(int(round(col)) + half + 1, img_w)
        if bottom <= top or right <= left:
            return None

        patch = gray[top:bottom, left:right]
        ksize = max(3, (half // 2) | 1)
        blurred = cv2.GaussianBlur(patch, (ksize, ksize), 0)
        _, _, min_loc, _ = cv2.minMaxLoc(blurred)
        return top + min_loc[1], left + min_loc[0]


def nearest_box(
    boxes: Sequence[Sequence[int]],
    cx: float,
    cy: float,
) -> Optional[Tuple[int, int, int, int]]:
    """Box whose center lies closest to ``(cx, cy)``, or None."""
    best = None
    best_dist = float("inf")
    for x, y, w, h in boxes:
        dist = (x + w / 2.0 - cx) ** 2 + (y + h / 2.0 - cy) ** 2
        if dist < best_dist:
            best_dist = dist
            best = (int(x), int(y), int(w), int(h))
    return best


def crop_region(gray: np.ndarray, cx: float, cy: float, width: float, height: float):
    """Clip an axis-aligned region to the image. Returns (patch, left, top) or None."""
    img_h, img_w = gray.shape[:2]
    left = max(int(cx - width / 2), 0)
    top = max(int(cy - height / 2), 0)
    right = min(int(cx + width / 2), img_w)
    bottom = min(int(cy + height / 2), img_h)
    if right - left < 2 or bottom - top < 2:
        return None
    return gray[top:bottom, left:right], left, top
