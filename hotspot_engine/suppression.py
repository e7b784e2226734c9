from typing import List, Sequence

import numpy as np

from .config import SUPPRESSION_IOU_THRESHOLD
from .models import Hotspot


def iou(box_a: Sequence[float], box_b: Sequence[float]) -> float:
    """
    Intersection-over-Union of two [left, top, right, bottom] boxes.

    The union is floored at 1 so zero-area boxes never divide by zero.
    """
    ious = _iou_against(np.asarray(box_a, dtype=float), np.asarray([box_b], dtype=float))
    return float(ious[0])


def _iou_against(box: np.ndarray, others: np.ndarray) -> np.ndarray:
    xx1 = np.maximum(box[0], others[:, 0])
    yy1 = np.maximum(box[1], others[:, 1])
    xx2 = np.minimum(box[2], others[:, 2])
    yy2 = np.minimum(box[3], others[:, 3])

    w = np.maximum(0.0, xx2 - xx1)
    h = np.maximum(0.0, yy2 - yy1)
    intersection = w * h

    area = (box[2] - box[0]) * (box[3] - box[1])
    other_areas = (others[:, 2] - others[:, 0]) * (others[:, 3] - others[:, 1])
    union = np.maximum(area + other_areas - intersection, 1.0)
    return intersection / union


def suppress_overlaps(candidates: List[Hotspot],
                      iou_thresh: float = SUPPRESSION_IOU_THRESHOLD) -> List[Hotspot]:
    """
    Greedy non-maximum suppression in upstream order.

    Unlike confidence-sorted NMS, candidates are visited in the order given:
    a candidate is dropped when its IoU with any already accepted box exceeds
    ``iou_thresh``, so earlier entries always win ties.

    Args:
        candidates: Hotspots in upstream priority order
        iou_thresh: IoU above which a later candidate is considered a duplicate

    Returns:
        Accepted hotspots, in the order they were accepted
    """
    chosen: List[Hotspot] = []
    chosen_boxes: List[List[float]] = []

    for candidate in candidates:
        box = candidate.box()
        if chosen_boxes:
            overlaps = _iou_against(np.asarray(box, dtype=float), np.asarray(chosen_boxes, dtype=float))
            if np.any(overlaps > iou_thresh):
                continue
        chosen.append(candidate)
        chosen_boxes.append(box)

    return chosen
