"""Shared detection data structures used across the mask pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Detection:
    """Square face box centered on (row, col) with side ``scale``."""

    row: int
    col: int
    scale: int
    score: float = 0.0

    @property
    def rect(self) -> tuple:
        """Top-left based ``(x, y, w, h)`` box."""
        half = self.scale // 2
        return (self.col - half, self.row - half, self.scale, self.scale)


@dataclass(frozen=True)
class DetectionParams:
    """Scan parameters handed to a detection source."""

    min_size: int = 20
    max_size: int = 1000
    shift_factor: float = 0.1
    scale_factor: float = 1.1
    angle: float = 0.0


@dataclass
class SearchWindow:
    """Coarse window a locator refines into a single point."""

    row: int
    col: int
    scale: float
    perturbations: int = 63


@dataclass(frozen=True)
class Point:
    """Located point. ``row == col == 0`` means nothing was found."""

    row: int = 0
    col: int = 0
    scale: float = 0.0

    @property
    def is_degenerate(self) -> bool:
        return self.row <= 0 or self.col <= 0


@dataclass(frozen=True)
class AlignmentTransform:
    angle: float
    width: float
    height: float
    origin_x: int
    origin_y: int


@dataclass
class FaceResult:
    """Per-face record kept for diagnostics."""

    detection: Detection
    left_eye: Optional[Point] = None
    right_eye: Optional[Point] = None
    p1: Optional[Point] = None
    p2: Optional[Point] = None
    transform: Optional[AlignmentTransform] = None

    @property
    def overlaid(self) -> bool:
        return self.transform is not None
