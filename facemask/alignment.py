#!/usr/bin/env python3
"""
Mask Alignment Module
Turns a face box and a mouth-corner pair into the overlay transform

Created: 2025
"""

import math
from typing import Tuple

from .detectors.types import AlignmentTransform, Detection, Point


def _trunc_div2(value: int) -> int:
    """Halve an int rounding toward zero."""
    return int(value / 2)


def lean_angle(p1: Point, p2: Point) -> float:
    """
    Lean of the landmark pair in the rotate step's normalized unit
    Args:
        p1: Left landmark point
        p2: Right landmark point
    Returns:
        0.0 for a level pair, the value handed to the rotation as degrees
    """
    return 1 - (math.atan2(float(p2.col - p1.col), float(p2.row - p1.row)) * 180 / math.pi / 90)


class MaskAligner:
    """Compute scale, rotation and placement of the mask for each face of a run.

    ``scale`` is carried from face to face. When the mask already fits inside
    a face box the previous face's scale is reused, and before any face has
    set it the scale is 0.0, which collapses the overlay to nothing.
    """

    def __init__(
        self,
        mask_size: Tuple[int, int],
        coverage: float = 0.75,
        horizontal_correction: float = 1.0,
    ):
        """
        Args:
            mask_size: Natural (width, height) of the mask asset
            coverage: Fraction of the face-box footprint the mask spans
            horizontal_correction: Multiplier on the half-width used for origin_x
        """
        self.dx, self.dy = int(mask_size[0]), int(mask_size[1])
        self.coverage = coverage
        self.horizontal_correction = horizontal_correction
        self.scale = 0.0

    def update_scale(self, face_scale: int) -> float:
        if face_scale < self.dx or face_scale < self.dy:
            if self.dx > self.dy:
                self.scale = float(face_scale) / float(self.dx)
            else:
                self.scale = float(face_scale) / float(self.dy)
        return self.scale

    def align(self, face: Detection, p1: Point, p2: Point) -> AlignmentTransform:
        angle = lean_angle(p1, p2)
        scale = self.update_scale(face.scale)

        width = float(self.dx) * scale * self.coverage
        height = float(self.dy) * scale * self.coverage

        origin_x = face.col - int(width / 2 * self.horizontal_correction)
        origin_y = p1.row + _trunc_div2(p1.row - p2.row) - int(height / 2)

        return AlignmentTransform(
            angle=angle,
            width=width,
            height=height,
            origin_x=origin_x,
            origin_y=origin_y,
        )
