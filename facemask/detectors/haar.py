"""Haar cascade detection source backed by OpenCV's cascade scanner."""

from __future__ import annotations

import os
from typing import List, Optional

import cv2
import numpy as np

from ..errors import ModelLoadError
from .types import Detection, DetectionParams


def resolve_model_path(path: str, base_dir: Optional[str] = None) -> str:
    """Resolve a cascade file name against ``base_dir`` and OpenCV's bundled cascades."""
    if os.path.isabs(path) or os.path.exists(path):
        return path
    if base_dir:
        candidate = os.path.join(base_dir, path)
        if os.path.exists(candidate):
            return candidate
    return os.path.join(cv2.data.haarcascades, path)


def load_cascade(path: str) -> cv2.CascadeClassifier:
    """Read and unpack a cascade file. Raises ``ModelLoadError`` on failure."""
    if not os.path.isfile(path):
        raise ModelLoadError(f"Cascade file not found: {path}")

    # the OpenCV bindings surface parse failures as SystemError wrapping cv2.error
    cascade = cv2.CascadeClassifier()
    try:
        loaded = cascade.load(path)
    except (cv2.error, SystemError) as exc:
        raise ModelLoadError(f"Could not unpack cascade file {path}: {exc}") from exc
    if not loaded or cascade.empty():
        raise ModelLoadError(f"Could not unpack cascade file: {path}")
    return cascade


def rotate_gray(gray: np.ndarray, angle: float):
    """
    Rotate a grayscale buffer by ``angle`` turns (1.0 = 2*pi) onto an expanded canvas.
    Returns:
        (rotated image, 2x3 matrix mapping rotated coordinates back to the source)
    """
    h, w = gray.shape[:2]
    degrees = angle * 360.0
    matrix = cv2.getRotationMatrix2D((w / 2.0, h / 2.0), degrees, 1.0)

    cos = abs(matrix[0, 0])
    sin = abs(matrix[0, 1])
    new_w = int(round(h * sin + w * cos))
    new_h = int(round(h * cos + w * sin))
    matrix[0, 2] += new_w / 2.0 - w / 2.0
    matrix[1, 2] += new_h / 2.0 - h / 2.0

    rotated = cv2.warpAffine(gray, matrix, (new_w, new_h), flags=cv2.INTER_LINEAR, borderValue=0)
    return rotated, cv2.invertAffineTransform(matrix)


class HaarFaceDetector:
    """
    Run a frontal-face Haar cascade and return every raw candidate window.

    Candidates are not grouped here; the reject-level weight of each window is
    reported as its score so that the clusterer can accumulate evidence. The
    shift factor is accepted for interface parity but OpenCV picks its own
    scan step per scale.
    """

    def __init__(self, cascade_path: str) -> None:
        self.cascade_path = cascade_path
        self._cascade = load_cascade(cascade_path)

    def detect(self, gray: np.ndarray, params: DetectionParams) -> List[Detection]:
        if gray is None or gray.size == 0:
            return []

        inverse = None
        scan = gray
        if params.angle:
            scan, inverse = rotate_gray(gray, params.angle)

        min_size = max(int(params.min_size), 1)
        max_size = max(int(params.max_size), min_size)

        boxes, _, weights = self._cascade.detectMultiScale3(
            scan,
            scaleFactor=params.scale_factor,
            minNeighbors=0,
            minSize=(min_size, min_size),
            maxSize=(max_size, max_size),
            outputRejectLevels=True,
        )

        detections: List[Detection] = []
        for (x, y, w, h), weight in zip(boxes, np.asarray(weights).reshape(-1)):
            cx = x + w / 2.0
            cy = y + h / 2.0
            if inverse is not None:
                cx, cy = inverse @ np.array([cx, cy, 1.0])
            detections.append(
                Detection(
                    row=int(round(cy)),
                    col=int(round(cx)),
                    scale=int(max(w, h)),
                    score=float(weight),
                )
            )

        return detections
