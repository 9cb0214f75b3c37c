from __future__ import annotations

import math

import pytest

from facemask.alignment import MaskAligner, lean_angle
from facemask.detectors import Detection, Point


def test_reference_face_transform() -> None:
    aligner = MaskAligner((200, 200))
    face = Detection(100, 100, 80, 10.0)
    p1 = Point(130, 90)
    p2 = Point(128, 110)

    transform = aligner.align(face, p1, p2)

    assert aligner.scale == pytest.approx(0.4)
    assert transform.width == pytest.approx(60.0)
    assert transform.height == pytest.approx(60.0)
    assert transform.origin_x == 70
    assert transform.origin_y == 101
    expected = 1 - math.atan2(20, -2) * 180 / math.pi / 90
    assert transform.angle == pytest.approx(expected)


def test_level_landmarks_need_no_rotation() -> None:
    assert lean_angle(Point(130, 90), Point(130, 110)) == pytest.approx(0.0)


def test_swapping_landmarks_shifts_angle_by_two() -> None:
    p1 = Point(130, 90)
    p2 = Point(128, 110)
    # atan2(-x, -y) == atan2(x, y) - 180 degrees for x > 0
    assert lean_angle(p2, p1) - lean_angle(p1, p2) == pytest.approx(2.0)


def test_taller_mask_scales_by_height() -> None:
    aligner = MaskAligner((100, 200))
    transform = aligner.align(Detection(100, 100, 80, 10.0), Point(130, 90), Point(130, 110))
    assert aligner.scale == pytest.approx(0.4)
    assert transform.width == pytest.approx(30.0)
    assert transform.height == pytest.approx(60.0)


def test_fitting_mask_on_first_face_collapses_to_zero() -> None:
    aligner = MaskAligner((50, 40))
    transform = aligner.align(Detection(100, 100, 80, 10.0), Point(130, 90), Point(130, 110))
    assert transform.width == 0.0
    assert transform.height == 0.0
    assert transform.origin_x == 100
    assert transform.origin_y == 130


def test_fitting_mask_reuses_previous_face_scale() -> None:
    aligner = MaskAligner((50, 40))
    aligner.align(Detection(100, 100, 40, 10.0), Point(110, 90), Point(110, 110))
    assert aligner.scale == pytest.approx(0.8)

    transform = aligner.align(Detection(200, 200, 100, 10.0), Point(230, 180), Point(230, 220))
    assert aligner.scale == pytest.approx(0.8)
    assert transform.width == pytest.approx(30.0)
    assert transform.height == pytest.approx(24.0)


def test_horizontal_correction_scales_half_width() -> None:
    aligner = MaskAligner((200, 200), horizontal_correction=0.8)
    transform = aligner.align(Detection(100, 100, 80, 10.0), Point(130, 90), Point(128, 110))
    assert transform.origin_x == 76


def test_vertical_offset_truncates_toward_zero() -> None:
    aligner = MaskAligner((200, 200))
    transform = aligner.align(Detection(100, 100, 80, 10.0), Point(128, 90), Point(131, 110))
    # (128 - 131) / 2 truncates to -1, not -2
    assert transform.origin_y == 128 - 1 - 30


def test_degenerate_points_still_give_a_transform() -> None:
    aligner = MaskAligner((200, 200))
    transform = aligner.align(Detection(100, 100, 80, 10.0), Point(), Point())
    assert transform.angle == pytest.approx(1.0)
    assert transform.origin_y == -30
