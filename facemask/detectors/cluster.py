"""Merging of overlapping raw detections into a de-duplicated face list."""

from __future__ import annotations

from typing import List, Sequence

from .types import Detection


def calc_iou(det1: Detection, det2: Detection) -> float:
    """Intersection over union of two square, center-based boxes."""
    r1, c1, s1 = float(det1.row), float(det1.col), float(det1.scale)
    r2, c2, s2 = float(det2.row), float(det2.col), float(det2.scale)

    over_row = max(0.0, min(r1 + s1 / 2, r2 + s2 / 2) - max(r1 - s1 / 2, r2 - s2 / 2))
    over_col = max(0.0, min(c1 + s1 / 2, c2 + s2 / 2) - max(c1 - s1 / 2, c2 - s2 / 2))
    inter = over_row * over_col

    union = s1 * s1 + s2 * s2 - inter
    if union <= 0:
        return 0.0
    return inter / union


def cluster_detections(detections: Sequence[Detection], iou_threshold: float = 0.2) -> List[Detection]:
    """
    Cluster raw detections.
    Args:
        detections: Raw candidates, possibly overlapping
        iou_threshold: Candidates overlapping a cluster seed above this join it
    Returns:
        Clusters ordered by accumulated score, no two overlapping above the threshold
    """
    if not detections:
        return []

    ordered = sorted(detections, key=lambda d: d.score, reverse=True)
    assigned = [False] * len(ordered)
    clusters: List[Detection] = []

    for i, seed in enumerate(ordered):
        if assigned[i]:
            continue

        rows = cols = scales = n = 0
        score = 0.0
        for j in range(i, len(ordered)):
            if assigned[j]:
                continue
            if j != i and calc_iou(seed, ordered[j]) <= iou_threshold:
                continue
            assigned[j] = True
            rows += ordered[j].row
            cols += ordered[j].col
            scales += ordered[j].scale
            score += ordered[j].score
            n += 1

        clusters.append(Detection(rows // n, cols // n, scales // n, score))

    return _suppress(clusters, iou_threshold)


def _suppress(clusters: List[Detection], iou_threshold: float) -> List[Detection]:
    # Averaging can pull two clusters back over the threshold.
    picked: List[Detection] = []
    for cluster in sorted(clusters, key=lambda d: d.score, reverse=True):
        if all(calc_iou(cluster, kept) <= iou_threshold for kept in picked):
            picked.append(cluster)
    return picked
