"""Resample, rotate and alpha-draw the mask asset onto the canvas."""

from __future__ import annotations

from typing import Optional, Tuple

import cv2
import numpy as np

from .detectors.types import AlignmentTransform


def _target_size(src_w: int, src_h: int, width: int, height: int) -> Optional[Tuple[int, int]]:
    if width <= 0 and height <= 0:
        return None
    if width <= 0:
        width = int(round(float(src_w) * float(height) / float(src_h)))
    elif height <= 0:
        height = int(round(float(src_h) * float(width) / float(src_w)))
    if width <= 0 or height <= 0:
        return None
    return width, height


def resize_lanczos(image: np.ndarray, width: int, height: int) -> Optional[np.ndarray]:
    """Lanczos resample. A zero dimension keeps the aspect ratio; both zero gives None."""
    src_h, src_w = image.shape[:2]
    if src_w == 0 or src_h == 0:
        return None

    size = _target_size(src_w, src_h, int(width), int(height))
    if size is None:
        return None
    if size == (src_w, src_h):
        return image.copy()
    return cv2.resize(image, size, interpolation=cv2.INTER_LANCZOS4)


def rotate_transparent(image: np.ndarray, degrees: float) -> np.ndarray:
    """Rotate counter-clockwise about the center onto a canvas holding the whole result."""
    if degrees == 0:
        return image.copy()

    h, w = image.shape[:2]
    matrix = cv2.getRotationMatrix2D((w / 2.0, h / 2.0), degrees, 1.0)

    cos = abs(matrix[0, 0])
    sin = abs(matrix[0, 1])
    new_w = int(np.ceil(h * sin + w * cos - 1e-9))
    new_h = int(np.ceil(h * cos + w * sin - 1e-9))
    matrix[0, 2] += new_w / 2.0 - w / 2.0
    matrix[1, 2] += new_h / 2.0 - h / 2.0

    return cv2.warpAffine(
        image,
        matrix,
        (new_w, new_h),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(0, 0, 0, 0),
    )


def draw_image(canvas: np.ndarray, overlay: np.ndarray, x: int, y: int) -> None:
    """Source-over blend a BGRA overlay into a BGR canvas, top-left at (x, y). In place."""
    canvas_h, canvas_w = canvas.shape[:2]
    over_h, over_w = overlay.shape[:2]

    left = max(x, 0)
    top = max(y, 0)
    right = min(x + over_w, canvas_w)
    bottom = min(y + over_h, canvas_h)
    if right <= left or bottom <= top:
        return

    src = overlay[top - y : bottom - y, left - x : right - x]
    alpha = src[:, :, 3:4].astype(np.float32) / 255.0
    region = canvas[top:bottom, left:right].astype(np.float32)

    blended = src[:, :, :3].astype(np.float32) * alpha + region * (1.0 - alpha)
    canvas[top:bottom, left:right] = np.clip(np.round(blended), 0, 255).astype(canvas.dtype)


class Compositor:
    """Applies one AlignmentTransform of a cached mask to the shared canvas."""

    def __init__(self, mask: np.ndarray) -> None:
        self.mask = mask

    def apply(self, canvas: np.ndarray, transform: AlignmentTransform) -> bool:
        resized = resize_lanczos(self.mask, int(transform.width), int(transform.height))
        if resized is None:
            return False

        aligned = rotate_transparent(resized, transform.angle)
        draw_image(canvas, aligned, transform.origin_x, transform.origin_y)
        return True
