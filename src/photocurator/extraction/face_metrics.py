"""Face-specific metric calculations.

Provides EAR (Eye Aspect Ratio) for eye openness and lip-contour metrics
for smile intensity and symmetry. Landmark points use normalized
coordinates with y growing upwards.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from photocurator.shared.constants import EAR, SMILE

logger = logging.getLogger(__name__)


def euclidean_distance(point1: np.ndarray, point2: np.ndarray) -> float:
    """Calculate Euclidean distance between two points."""
    return float(np.linalg.norm(point1 - point2))


def calculate_ear(eye_landmarks: Sequence[Tuple[float, float]]) -> Optional[float]:
    """
    Calculate Eye Aspect Ratio (EAR) for an eye contour of any length.

    EAR = (||p2-p6|| + ||p3-p5||) / (2 * ||p1-p4||)

    The contour is mapped onto the 6-point model: p1/p4 are the leftmost and
    rightmost points, p2/p3 the two topmost of the rest and p6/p5 the two
    bottommost, each pair ordered left to right.

    Args:
        eye_landmarks: Sequence of (x, y) points around the eye

    Returns:
        EAR value, or None when there are fewer than 6 points or the eye
        corners are too close together to measure.
    """
    if eye_landmarks is None or len(eye_landmarks) < EAR.MIN_POINTS:
        return None

    points = np.asarray(eye_landmarks, dtype=float)

    by_x = np.argsort(points[:, 0], kind="stable")
    outer_corner = points[by_x[0]]
    inner_corner = points[by_x[-1]]

    rest = points[by_x[1:-1]]
    by_y = rest[np.argsort(rest[:, 1], kind="stable")]
    top = by_y[-2:]
    bottom = by_y[:2]
    top = top[np.argsort(top[:, 0], kind="stable")]
    bottom = bottom[np.argsort(bottom[:, 0], kind="stable")]

    horizontal_dist = euclidean_distance(outer_corner, inner_corner)
    if horizontal_dist < EAR.MIN_HORIZONTAL_DISTANCE:
        logger.debug("EAR skipped: horizontal distance too small (%.5f)", horizontal_dist)
        return None

    vertical_dist1 = euclidean_distance(top[0], bottom[0])  # p2 to p6
    vertical_dist2 = euclidean_distance(top[1], bottom[1])  # p3 to p5

    ear = (vertical_dist1 + vertical_dist2) / (2.0 * horizontal_dist)
    logger.debug(
        "EAR: points=%d, v1=%.4f, v2=%.4f, h=%.4f, ear=%.4f",
        len(points), vertical_dist1, vertical_dist2, horizontal_dist, ear,
    )
    return float(ear)


def adaptive_ear_threshold(
    average_ear: float,
    bands: Sequence[Tuple[float, float]],
    floor: float,
) -> float:
    """Pick the open/closed threshold for a face from its average EAR.

    Bands are (lower bound, threshold) pairs checked in order; the first band
    whose lower bound the average exceeds wins. Below every band, ``floor``.
    """
    for lower_bound, threshold in bands:
        if average_ear > lower_bound:
            return threshold
    return floor


def calculate_lip_curvature(lip_points: Sequence[Tuple[float, float]], scale: float) -> float:
    """Smile intensity from how far the mouth corners sit above the lip center."""
    left = lip_points[SMILE.LEFT_CORNER]
    right = lip_points[SMILE.RIGHT_CORNER]
    top = lip_points[SMILE.TOP_CENTER]
    bottom = lip_points[SMILE.BOTTOM_CENTER]

    center_y = (top[1] + bottom[1]) / 2.0
    corner_y = (left[1] + right[1]) / 2.0
    return max(0.0, min(1.0, (corner_y - center_y) * scale))


def calculate_lip_symmetry(lip_points: Sequence[Tuple[float, float]]) -> float:
    """Smile naturalness: 1 minus the relative width difference of the mouth halves."""
    left = lip_points[SMILE.LEFT_CORNER]
    right = lip_points[SMILE.RIGHT_CORNER]
    center = lip_points[SMILE.TOP_CENTER]

    left_width = abs(left[0] - center[0])
    right_width = abs(right[0] - center[0])
    widest = max(left_width, right_width)
    if widest == 0:
        return SMILE.NEUTRAL_NATURALNESS

    symmetry = 1.0 - abs(left_width - right_width) / widest
    return max(0.0, min(1.0, symmetry))
