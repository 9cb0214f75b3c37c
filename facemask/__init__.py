#!/usr/bin/env python3
"""
Face Mask Generator
Init file for the facemask package

Created: 2025
"""

from .alignment import MaskAligner, lean_angle
from .compositor import Compositor
from .config_manager import ConfigManager
from .detectors import Detection, HaarFaceDetector, Point, cluster_detections
from .mask_generator import FaceMaskGenerator

__version__ = "1.0.0"
__author__ = "Face Mask Python Team"

__all__ = [
    'Compositor',
    'ConfigManager',
    'Detection',
    'FaceMaskGenerator',
    'HaarFaceDetector',
    'MaskAligner',
    'Point',
    'cluster_detections',
    'lean_angle',
]
