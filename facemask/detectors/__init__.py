"""Face detection source and detection clustering."""

from .cluster import calc_iou, cluster_detections
from .haar import HaarFaceDetector, load_cascade, resolve_model_path
from .types import AlignmentTransform, Detection, DetectionParams, FaceResult, Point, SearchWindow

__all__ = [
    "AlignmentTransform",
    "Detection",
    "DetectionParams",
    "FaceResult",
    "HaarFaceDetector",
    "Point",
    "SearchWindow",
    "calc_iou",
    "cluster_detections",
    "load_cascade",
    "resolve_model_path",
]
