"""Image decode/encode helpers for source photos, the mask asset and the output."""

from __future__ import annotations

import os
from typing import Tuple

import cv2
import numpy as np

from .errors import ImageReadError, ImageWriteError, MaskAssetError, UnsupportedFormatError

SUPPORTED_OUTPUT_FORMATS: Tuple[str, ...] = (".jpg", ".jpeg", ".png")
DEFAULT_JPEG_QUALITY = 100


def output_extension(path: str) -> str:
    """Lower-cased extension of ``path``. Raises if it is not a supported output format."""
    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_OUTPUT_FORMATS:
        raise UnsupportedFormatError(f"Output file type not supported: {ext or '<none>'}")
    return ext


def to_uint8(image: np.ndarray) -> np.ndarray:
    """Scale a 16-bit or float raster down to 8 bits per channel."""
    if image.dtype == np.uint8:
        return image
    if image.dtype == np.uint16:
        return (image // 257).astype(np.uint8)
    if np.issubdtype(image.dtype, np.floating):
        return np.clip(np.rint(image * 255.0), 0, 255).astype(np.uint8)
    return cv2.convertScaleAbs(image)


def load_image(path: str) -> np.ndarray:
    """Decode a source image as a 3-channel BGR canvas."""
    if not os.path.isfile(path):
        raise ImageReadError(f"Source image not found: {path}")

    # IMREAD_COLOR yields 8-bit BGR whatever the stored depth or channel count
    image = cv2.imread(path, cv2.IMREAD_COLOR)
    if image is None:
        raise ImageReadError(f"Could not decode source image: {path}")
    return image


def load_mask(path: str) -> np.ndarray:
    """Decode the mask asset as BGRA. A mask without alpha is treated as fully opaque."""
    if not os.path.isfile(path):
        raise MaskAssetError(f"Mask asset not found: {path}")

    mask = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    if mask is None:
        raise MaskAssetError(f"Could not decode mask asset: {path}")

    mask = to_uint8(mask)
    if mask.ndim == 2:
        mask = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGRA)
    elif mask.shape[2] == 3:
        mask = cv2.cvtColor(mask, cv2.COLOR_BGR2BGRA)
    return mask


def to_grayscale(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def save_image(path: str, image: np.ndarray, jpeg_quality: int = DEFAULT_JPEG_QUALITY) -> None:
    """Encode the canvas by extension: JPEG at ``jpeg_quality`` or PNG."""
    ext = output_extension(path)

    if ext in (".jpg", ".jpeg"):
        params = [cv2.IMWRITE_JPEG_QUALITY, int(jpeg_quality)]
    else:
        params = []

    ok, buffer = cv2.imencode(ext, image, params)
    if not ok:
        raise ImageWriteError(f"Could not encode output image: {path}")

    try:
        with open(path, "wb") as fh:
            fh.write(buffer.tobytes())
    except OSError as exc:
        raise ImageWriteError(f"Could not open output file {path}: {exc}") from exc
