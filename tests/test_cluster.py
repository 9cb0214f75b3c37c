from __future__ import annotations

import itertools

import numpy as np
import pytest

from facemask.detectors import Detection, calc_iou, cluster_detections


def test_iou_of_identical_boxes_is_one() -> None:
    det = Detection(100, 100, 80, 1.0)
    assert calc_iou(det, det) == pytest.approx(1.0)


def test_iou_of_disjoint_boxes_is_zero() -> None:
    assert calc_iou(Detection(50, 50, 40), Detection(200, 200, 40)) == 0.0


def test_iou_of_half_shifted_boxes() -> None:
    # 80x80 boxes shifted by 40 columns: overlap 80*40, union 2*6400 - 3200
    assert calc_iou(Detection(100, 100, 80), Detection(100, 140, 80)) == pytest.approx(3200 / 9600)


def test_empty_input_gives_empty_output() -> None:
    assert cluster_detections([], 0.2) == []


def test_overlapping_candidates_merge_into_one_cluster() -> None:
    raw = [
        Detection(100, 100, 80, 2.0),
        Detection(102, 98, 80, 3.0),
        Detection(101, 101, 84, 1.5),
    ]

    clusters = cluster_detections(raw, 0.2)

    assert clusters == [Detection(101, 99, 81, 6.5)]


def test_separate_faces_stay_separate_and_are_ordered_by_score() -> None:
    raw = [
        Detection(100, 100, 60, 2.0),
        Detection(101, 100, 60, 2.0),
        Detection(300, 300, 60, 4.0),
        Detection(302, 301, 60, 5.0),
    ]

    clusters = cluster_detections(raw, 0.2)

    assert len(clusters) == 2
    assert clusters[0].score == pytest.approx(9.0)
    assert clusters[1].score == pytest.approx(4.0)
    assert clusters[0].row > 290 and clusters[1].row < 110


def test_clusters_never_overlap_above_threshold() -> None:
    rng = np.random.default_rng(7)
    for threshold in (0.1, 0.2, 0.4):
        raw = [
            Detection(
                int(rng.integers(40, 200)),
                int(rng.integers(40, 200)),
                int(rng.integers(20, 90)),
                float(rng.uniform(0.1, 3.0)),
            )
            for _ in range(60)
        ]

        clusters = cluster_detections(raw, threshold)

        assert 0 < len(clusters) <= len(raw)
        for a, b in itertools.combinations(clusters, 2):
            assert calc_iou(a, b) <= threshold


def test_clustering_does_not_mutate_input() -> None:
    raw = [Detection(10, 10, 10, 1.0), Detection(11, 10, 10, 2.0)]
    snapshot = list(raw)
    cluster_detections(raw, 0.2)
    assert raw == snapshot
