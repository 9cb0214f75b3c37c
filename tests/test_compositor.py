from __future__ import annotations

import numpy as np

from facemask.compositor import Compositor, draw_image, resize_lanczos, rotate_transparent
from facemask.detectors import AlignmentTransform


def _opaque_mask(width: int, height: int, value: int = 255) -> np.ndarray:
    mask = np.full((height, width, 4), value, dtype=np.uint8)
    mask[:, :, 3] = 255
    return mask


def test_resize_to_requested_size() -> None:
    resized = resize_lanczos(_opaque_mask(200, 100), 60, 30)
    assert resized.shape == (30, 60, 4)


def test_resize_with_both_dimensions_zero_gives_nothing() -> None:
    assert resize_lanczos(_opaque_mask(200, 100), 0, 0) is None


def test_resize_with_one_zero_dimension_keeps_aspect() -> None:
    assert resize_lanczos(_opaque_mask(200, 100), 60, 0).shape == (30, 60, 4)
    assert resize_lanczos(_opaque_mask(200, 100), 0, 50).shape == (50, 100, 4)


def test_rotate_by_zero_is_a_copy() -> None:
    mask = _opaque_mask(20, 10)
    rotated = rotate_transparent(mask, 0.0)
    assert rotated.shape == mask.shape
    assert rotated is not mask


def test_rotate_quarter_turn_swaps_dimensions() -> None:
    rotated = rotate_transparent(_opaque_mask(20, 10), 90.0)
    assert rotated.shape == (20, 10, 4)


def test_rotate_fills_exposed_corners_with_transparency() -> None:
    rotated = rotate_transparent(_opaque_mask(40, 40), 45.0)
    assert rotated.shape[0] > 40 and rotated.shape[1] > 40
    assert rotated[0, 0, 3] == 0
    assert rotated[-1, -1, 3] == 0
    center = rotated.shape[0] // 2
    assert rotated[center, center, 3] == 255


def test_draw_opaque_overlay_replaces_pixels() -> None:
    canvas = np.zeros((50, 50, 3), dtype=np.uint8)
    draw_image(canvas, _opaque_mask(10, 10, 200), 5, 5)
    assert (canvas[5:15, 5:15] == 200).all()
    assert (canvas[:5] == 0).all()
    assert (canvas[15:] == 0).all()


def test_draw_transparent_overlay_leaves_canvas_untouched() -> None:
    canvas = np.full((50, 50, 3), 17, dtype=np.uint8)
    overlay = _opaque_mask(10, 10, 200)
    overlay[:, :, 3] = 0
    draw_image(canvas, overlay, 5, 5)
    assert (canvas == 17).all()


def test_draw_blends_partial_alpha() -> None:
    canvas = np.zeros((10, 10, 3), dtype=np.uint8)
    overlay = _opaque_mask(10, 10, 255)
    overlay[:, :, 3] = 128
    draw_image(canvas, overlay, 0, 0)
    assert (canvas == 128).all()


def test_draw_clips_at_canvas_edges() -> None:
    canvas = np.zeros((20, 20, 3), dtype=np.uint8)
    draw_image(canvas, _opaque_mask(10, 10, 99), -5, 15)
    assert canvas.shape == (20, 20, 3)
    assert (canvas[15:20, 0:5] == 99).all()
    assert (canvas[:15] == 0).all()


def test_draw_entirely_outside_is_a_no_op() -> None:
    canvas = np.zeros((20, 20, 3), dtype=np.uint8)
    draw_image(canvas, _opaque_mask(10, 10, 99), 30, 30)
    assert (canvas == 0).all()


def test_compositor_skips_collapsed_transform() -> None:
    canvas = np.zeros((20, 20, 3), dtype=np.uint8)
    applied = Compositor(_opaque_mask(50, 50)).apply(canvas, AlignmentTransform(0.0, 0.0, 0.0, 5, 5))
    assert applied is False
    assert (canvas == 0).all()


def test_compositor_draws_resized_mask_at_origin() -> None:
    canvas = np.zeros((100, 100, 3), dtype=np.uint8)
    applied = Compositor(_opaque_mask(200, 200, 240)).apply(canvas, AlignmentTransform(0.0, 30.0, 30.0, 10, 20))
    assert applied is True
    assert (np.abs(canvas[25:45, 15:35].astype(int) - 240) <= 1).all()
    assert (canvas[:20] == 0).all()
    assert (canvas[:, :10] == 0).all()
