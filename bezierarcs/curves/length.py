"""Segment and curve length estimation."""

import logging

import numpy as np
from scipy.integrate import quad

from ..config import MIN_SEGMENT_NUM_POINTS, RESOLUTION_TO_NUM_POINTS_FACTOR
from ..core.models import AnchorPoint, Curve
from .evaluator import VectorLike, evaluate_point, evaluate_tangent

logger = logging.getLogger(__name__)


def approximate_segment_length(
    p1: VectorLike,
    p1_handle2: VectorLike,
    p2: VectorLike,
    p2_handle1: VectorLike,
    num_points: int = 10,
) -> float:
    """Approximate segment length as a polyline through ``num_points + 1`` samples.

    The polyline never exceeds the true arc length and converges to it as
    ``num_points`` grows.

    Args:
        p1: Start anchor position
        p1_handle2: Absolute position of the start anchor's outgoing handle
        p2: End anchor position
        p2_handle1: Absolute position of the end anchor's incoming handle
        num_points: Number of polyline pieces

    Returns:
        Polyline length (always >= 0)
    """
    if num_points < 1:
        raise ValueError("num_points must be at least 1")

    samples = np.array(
        [
            evaluate_point(p1, p1_handle2, p2, p2_handle1, i / num_points)
            for i in range(num_points + 1)
        ]
    )
    return float(np.sum(np.linalg.norm(np.diff(samples, axis=0), axis=1)))


def num_points_for_resolution(
    p1: VectorLike,
    p1_handle2: VectorLike,
    p2: VectorLike,
    p2_handle1: VectorLike,
    resolution: float,
) -> int:
    """Number of interpolation pieces giving ``resolution`` samples per unit length.

    A crude length estimate is taken first so that the sample count follows
    the segment's physical size (its handles included), not a flat
    per-segment constant.
    """
    coarse_length = approximate_segment_length(
        p1, p1_handle2, p2, p2_handle1, RESOLUTION_TO_NUM_POINTS_FACTOR
    )
    return max(MIN_SEGMENT_NUM_POINTS, int(round(coarse_length * resolution)))


def segment_num_points(p1: AnchorPoint, p2: AnchorPoint, resolution: float) -> int:
    """Resolution-derived sample count for the segment between two anchors."""
    return num_points_for_resolution(
        p1.position, p1.handle2_position, p2.position, p2.handle1_position, resolution
    )


def segment_length(p1: AnchorPoint, p2: AnchorPoint, resolution: float) -> float:
    """Length of the segment between two anchors at the given resolution."""
    num_points = segment_num_points(p1, p2, resolution)
    return approximate_segment_length(
        p1.position, p1.handle2_position, p2.position, p2.handle1_position, num_points
    )


def compute_curve_length(curve: Curve) -> float:
    """Sum of segment lengths in curve order, closing segment included."""
    curve.require_valid_topology()
    return sum(segment_length(a, b, curve.resolution) for a, b in curve.segments())


def curve_length(curve: Curve) -> float:
    """Cached curve length.

    Recomputes only when the curve is dirty or no length was stored yet;
    otherwise returns the stored value without touching the geometry.
    """
    with curve.cache_lock:
        cached = curve.cached_length
        if curve.dirty or cached is None:
            revision = curve.revision
            value = compute_curve_length(curve)
            if curve.store_length(value, revision):
                logger.debug(
                    f"Recomputed length of curve {curve.name!r}: {value:.6f} "
                    f"({curve.segment_count} segments)"
                )
            else:
                logger.debug(f"Curve {curve.name!r} edited during length computation")
            return value
        return cached


def integrated_segment_length(
    p1: VectorLike,
    p1_handle2: VectorLike,
    p2: VectorLike,
    p2_handle1: VectorLike,
) -> float:
    """Reference arc length by numerically integrating the tangent norm."""

    def speed(t: float) -> float:
        return float(np.linalg.norm(evaluate_tangent(p1, p1_handle2, p2, p2_handle1, t)))

    value, _ = quad(speed, 0.0, 1.0, limit=200)
    return float(value)
