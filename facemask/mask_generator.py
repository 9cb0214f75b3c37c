#!/usr/bin/env python3
"""
Face Mask Generator Module
Detects faces, locates pupils and mouth corners, and draws an aligned
mask over every face that passes the quality threshold

Created: 2025
"""

import sys
from typing import List, Optional, Tuple

import cv2
import numpy as np

from .alignment import MaskAligner
from .compositor import Compositor
from .config_manager import ConfigManager
from .detectors import (
    Detection,
    DetectionParams,
    FaceResult,
    HaarFaceDetector,
    SearchWindow,
    cluster_detections,
    resolve_model_path,
)
from .image_io import load_image, load_mask, save_image, to_grayscale
from .landmarks import MouthCornerLocator, PerturbationVoter, PupilLocator, read_cascade_dir

FACE_BOX_COLOR = (0, 0, 255)
EYE_MARKER_COLOR = (0, 255, 255)
LANDMARK_MARKER_COLOR = (255, 0, 255)


class FaceMaskGenerator:
    """Run the detection-to-overlay pipeline over a single photograph"""

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        detector=None,
        pupil_locator=None,
        landmark_locator=None,
        mask: Optional[np.ndarray] = None,
    ):
        """
        Initialize the generator. Collaborators not passed in are built from
        the configured cascade files, which raises ``ModelLoadError`` when a
        file is missing or cannot be unpacked.
        Args:
            config: Configuration manager (defaults when omitted)
            detector: Object with ``detect(gray, params) -> List[Detection]``
            pupil_locator: Object with ``locate(window, gray, angle) -> Point``
            landmark_locator: Object with ``locate(left, right, gray, perturbations, flip) -> Point``
            mask: Pre-decoded BGRA mask, skipping the asset read
        """
        self.config = config or ConfigManager()
        self.params = DetectionParams(
            min_size=int(self.config.get("detection.min_size", 20)),
            max_size=int(self.config.get("detection.max_size", 1000)),
            shift_factor=float(self.config.get("detection.shift_factor", 0.1)),
            scale_factor=float(self.config.get("detection.scale_factor", 1.1)),
            angle=float(self.config.get("detection.angle", 0.0)),
        )
        self.iou_threshold = float(self.config.get("detection.iou_threshold", 0.2))
        self.quality_threshold = float(self.config.get("quality_threshold", 5.0))
        self.perturbations = int(self.config.get("perturbations", 63))
        self.show_markers = bool(self.config.get("show_markers", False))

        voter = None
        if pupil_locator is None or landmark_locator is None:
            voter = PerturbationVoter(seed=int(self.config.get("perturb_seed", 0)))

        if detector is None:
            detector = HaarFaceDetector(resolve_model_path(self.config.get("models.face_cascade")))
        if pupil_locator is None:
            pupil_locator = PupilLocator(resolve_model_path(self.config.get("models.eye_cascade")), voter)
        if landmark_locator is None:
            landmark_dir = self.config.get("models.landmark_dir") or cv2.data.haarcascades
            cascades = read_cascade_dir(landmark_dir, self.config.get("models.landmark_cascades", {}))
            landmark_locator = MouthCornerLocator(cascades, voter)

        self.detector = detector
        self.pupil_locator = pupil_locator
        self.landmark_locator = landmark_locator
        self._mask = mask

    @property
    def mask(self) -> np.ndarray:
        """Mask asset, read once and reused for every face"""
        if self._mask is None:
            self._mask = load_mask(self.config.get("mask.path"))
        return self._mask

    def detect_faces(self, gray: np.ndarray) -> List[Detection]:
        """
        Run the detection source and cluster its raw candidates
        Args:
            gray: Grayscale image
        Returns:
            Clustered detections, including those below the quality threshold
        """
        raw = self.detector.detect(gray, self.params)
        return cluster_detections(raw, self.iou_threshold)

    def eye_windows(self, face: Detection) -> Tuple[SearchWindow, SearchWindow]:
        row_off = float(self.config.get("eye_offsets.row", 0.075))
        left_off = float(self.config.get("eye_offsets.left_col", 0.175))
        right_off = float(self.config.get("eye_offsets.right_col", 0.185))
        scale = float(self.config.get("eye_offsets.scale", 0.25)) * face.scale

        row = face.row - int(row_off * face.scale)
        left = SearchWindow(row, face.col - int(left_off * face.scale), scale, self.perturbations)
        right = SearchWindow(row, face.col + int(right_off * face.scale), scale, self.perturbations)
        return left, right

    def locate_landmarks(self, gray: np.ndarray, face: Detection) -> FaceResult:
        left_window, right_window = self.eye_windows(face)
        left_eye = self.pupil_locator.locate(left_window, gray, self.params.angle)
        right_eye = self.pupil_locator.locate(right_window, gray, self.params.angle)

        p1 = self.landmark_locator.locate(left_eye, right_eye, gray, self.perturbations, False)
        p2 = self.landmark_locator.locate(left_eye, right_eye, gray, self.perturbations, True)

        return FaceResult(detection=face, left_eye=left_eye, right_eye=right_eye, p1=p1, p2=p2)

    def generate(self, image: np.ndarray) -> Tuple[np.ndarray, List[FaceResult]]:
        """
        Draw the mask over every qualifying face
        Args:
            image: BGR source image (left untouched)
        Returns:
            (canvas, per-face results in detection order)
        """
        canvas = image.copy()
        gray = to_grayscale(image)
        faces = self.detect_faces(gray)

        results: List[FaceResult] = []
        aligner = None
        compositor = None

        for face in faces:
            if face.score <= self.quality_threshold:
                results.append(FaceResult(detection=face))
                continue

            if aligner is None:
                mask_h, mask_w = self.mask.shape[:2]
                aligner = MaskAligner(
                    (mask_w, mask_h),
                    coverage=float(self.config.get("mask.coverage", 0.75)),
                    horizontal_correction=float(self.config.get("mask.horizontal_correction", 1.0)),
                )
                compositor = Compositor(self.mask)

            result = self.locate_landmarks(gray, face)
            self._warn_degenerate(result)

            result.transform = aligner.align(face, result.p1, result.p2)
            compositor.apply(canvas, result.transform)

            if self.show_markers:
                self._draw_markers(canvas, result)
            results.append(result)

        return canvas, results

    def run(self, source: str, destination: str) -> List[FaceResult]:
        """Read ``source``, draw the masks and write ``destination``"""
        image = load_image(source)
        canvas, results = self.generate(image)
        save_image(destination, canvas, int(self.config.get("output.jpeg_quality", 100)))
        return results

    @staticmethod
    def _warn_degenerate(result: FaceResult) -> None:
        named = (("left eye", result.left_eye), ("right eye", result.right_eye), ("p1", result.p1), ("p2", result.p2))
        missing = [name for name, point in named if point is None or point.is_degenerate]
        if missing:
            face = result.detection
            print(
                f"\n⚠️  Face at ({face.row}, {face.col}): {', '.join(missing)} not found, overlay may be misplaced",
                file=sys.stderr,
            )

    @staticmethod
    def _draw_markers(canvas: np.ndarray, result: FaceResult) -> None:
        x, y, w, h = result.detection.rect
        cv2.rectangle(canvas, (x, y), (x + w, y + h), FACE_BOX_COLOR, 2)

        for point, color in (
            (result.left_eye, EYE_MARKER_COLOR),
            (result.right_eye, EYE_MARKER_COLOR),
            (result.p1, LANDMARK_MARKER_COLOR),
            (result.p2, LANDMARK_MARKER_COLOR),
        ):
            if point is None or point.is_degenerate:
                continue
            radius = max(int(point.scale * 0.15), 1)
            cv2.circle(canvas, (point.col, point.row), radius, color, -1)
