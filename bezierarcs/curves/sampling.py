"""Resolution-driven interpolation of segments and whole curves."""

from typing import Optional

import numpy as np
from numpy.typing import NDArray

from ..core.models import AnchorPoint, Curve
from .evaluator import interpolate
from .length import segment_num_points


def interpolate_segment(
    p1: AnchorPoint, p2: AnchorPoint, resolution: float
) -> NDArray[np.float64]:
    """Interpolate a segment with a sample count derived from its length."""
    num_points = segment_num_points(p1, p2, resolution)
    return interpolate(
        p1.position, p1.handle2_position, p2.position, p2.handle1_position, num_points
    )


def interpolate_curve(
    curve: Curve, resolution: Optional[float] = None
) -> NDArray[np.float64]:
    """Interpolate every segment of a curve into one (N, 3) array.

    Anchors shared by consecutive segments appear once.

    Args:
        curve: Curve to interpolate
        resolution: Samples per unit length (defaults to the curve's resolution)

    Returns:
        Array of positions in curve order
    """
    curve.require_valid_topology()
    resolution = resolution or curve.resolution

    chunks = []
    for index, (a, b) in enumerate(curve.segments()):
        points = interpolate_segment(a, b, resolution)
        chunks.append(points if index == 0 else points[1:])
    return np.vstack(chunks)
