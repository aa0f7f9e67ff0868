"""Bezier segment evaluation: positions and tangents.

A segment runs from anchor ``p1`` to anchor ``p2`` and is shaped by the
outgoing handle of ``p1`` and the incoming handle of ``p2`` (both given as
absolute positions). The curve degree follows from which handles are in use:

- both handles offset from their anchors: cubic Bezier (p1, h1, h2, p2)
- one handle offset: quadratic Bezier with that handle as control point
- no handle offset: straight line

A handle counts as "in use" only if its position differs exactly from its
anchor; there is no epsilon.
"""

import math
from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from ..core.models import AnchorPoint, HandleStyle

VectorLike = Union[Sequence[float], NDArray[np.float64]]


def _vec(value: VectorLike) -> NDArray[np.float64]:
    return np.asarray(value, dtype=np.float64)


def clamp01(t: float) -> float:
    """Clamp a parameter value to [0, 1]."""
    return min(1.0, max(0.0, float(t)))


def curve_degree(
    p1: VectorLike, p1_handle2: VectorLike, p2: VectorLike, p2_handle1: VectorLike
) -> int:
    """Degree of the segment implied by its handles (1, 2 or 3)."""
    leading = not np.array_equal(_vec(p1_handle2), _vec(p1))
    trailing = not np.array_equal(_vec(p2_handle1), _vec(p2))
    return 1 + int(leading) + int(trailing)


def linear_point(p1: VectorLike, p2: VectorLike, t: float) -> NDArray[np.float64]:
    """Point at ``t`` on the line from ``p1`` to ``p2`` (a plain lerp)."""
    a = _vec(p1)
    return a + (_vec(p2) - a) * t


def quadratic_point(
    p1: VectorLike, p2: VectorLike, p3: VectorLike, t: float
) -> NDArray[np.float64]:
    """Point at ``t`` on a quadratic Bezier curve."""
    t = clamp01(t)
    u = 1.0 - t
    return u * u * _vec(p1) + 2.0 * u * t * _vec(p2) + t * t * _vec(p3)


def cubic_point(
    p1: VectorLike, p2: VectorLike, p3: VectorLike, p4: VectorLike, t: float
) -> NDArray[np.float64]:
    """Point at ``t`` on a cubic Bezier curve.

    B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3
    """
    t = clamp01(t)
    u = 1.0 - t
    return (
        u**3 * _vec(p1)
        + 3.0 * u**2 * t * _vec(p2)
        + 3.0 * u * t**2 * _vec(p3)
        + t**3 * _vec(p4)
    )


def cubic_tangent(
    a: VectorLike, b: VectorLike, c: VectorLike, d: VectorLike, t: float
) -> NDArray[np.float64]:
    """Derivative of a cubic Bezier curve at ``t``.

    With C1 = d - 3c + 3b - a, C2 = 3c - 6b + 3a and C3 = 3b - 3a the
    derivative is 3*C1*t^2 + 2*C2*t + C3.
    """
    a, b, c, d = _vec(a), _vec(b), _vec(c), _vec(d)
    c1 = d - 3.0 * c + 3.0 * b - a
    c2 = 3.0 * c - 6.0 * b + 3.0 * a
    c3 = 3.0 * b - 3.0 * a
    return 3.0 * c1 * t * t + 2.0 * c2 * t + c3


def quadratic_tangent(
    a: VectorLike, b: VectorLike, c: VectorLike, t: float
) -> NDArray[np.float64]:
    """Derivative of a quadratic Bezier curve at ``t``."""
    a, b, c = _vec(a), _vec(b), _vec(c)
    return 2.0 * (1.0 - t) * (b - a) + 2.0 * t * (c - b)


def evaluate_point(
    p1: VectorLike,
    p1_handle2: VectorLike,
    p2: VectorLike,
    p2_handle1: VectorLike,
    t: float,
) -> NDArray[np.float64]:
    """Position at local ``t`` on a segment, degree inferred from the handles.

    Args:
        p1: Start anchor position
        p1_handle2: Absolute position of the start anchor's outgoing handle
        p2: End anchor position
        p2_handle1: Absolute position of the end anchor's incoming handle
        t: Local parameter, clamped to [0, 1]

    Returns:
        Position as a numpy array
    """
    t = clamp01(t)
    a, b, c, d = _vec(p1), _vec(p1_handle2), _vec(p2_handle1), _vec(p2)

    if not np.array_equal(b, a):
        if not np.array_equal(c, d):
            return cubic_point(a, b, c, d, t)
        return quadratic_point(a, b, d, t)
    if not np.array_equal(c, d):
        return quadratic_point(a, c, d, t)
    return linear_point(a, d, t)


def evaluate_tangent(
    p1: VectorLike,
    p1_handle2: VectorLike,
    p2: VectorLike,
    p2_handle1: VectorLike,
    t: float,
) -> NDArray[np.float64]:
    """Derivative at local ``t`` of the degree-inferred segment (not normalized)."""
    t = clamp01(t)
    a, b, c, d = _vec(p1), _vec(p1_handle2), _vec(p2_handle1), _vec(p2)

    if not np.array_equal(b, a):
        if not np.array_equal(c, d):
            return cubic_tangent(a, b, c, d, t)
        return quadratic_tangent(a, b, d, t)
    if not np.array_equal(c, d):
        return quadratic_tangent(a, c, d, t)
    return d - a


def binomial_coefficient(i: int, n: int) -> int:
    """Number of ways to choose ``i`` items out of ``n``."""
    return math.factorial(n) // (math.factorial(i) * math.factorial(n - i))


def bezier_point(t: float, control_points: Sequence[VectorLike]) -> NDArray[np.float64]:
    """Point at ``t`` on a Bezier curve of arbitrary order.

    Uses the Bernstein expansion
    sum_{i=0..n} C(n, i) * t^(n-i) * (1-t)^i * P[n-i].
    """
    if len(control_points) == 0:
        raise ValueError("At least one control point is required")

    t = clamp01(t)
    order = len(control_points) - 1
    point = np.zeros_like(_vec(control_points[0]))

    for i in range(order + 1):
        weight = binomial_coefficient(i, order) * t ** (order - i) * (1.0 - t) ** i
        point = point + weight * _vec(control_points[order - i])

    return point


def segment_point(p1: AnchorPoint, p2: AnchorPoint, t: float) -> NDArray[np.float64]:
    """Position at local ``t`` on the segment between two anchors."""
    return evaluate_point(p1.position, p1.handle2_position, p2.position, p2.handle1_position, t)


def segment_tangent(p1: AnchorPoint, p2: AnchorPoint, t: float) -> NDArray[np.float64]:
    """Tangent at local ``t`` on the segment between two anchors.

    Segments between two handle-less anchors return the normalized straight
    line direction, so adjacent straight segments have matching tangents.
    """
    if p1.handle_style == HandleStyle.NONE and p2.handle_style == HandleStyle.NONE:
        direction = _vec(p2.position) - _vec(p1.position)
        norm = float(np.linalg.norm(direction))
        if norm == 0.0:
            return np.zeros(3, dtype=np.float64)
        return direction / norm

    return evaluate_tangent(p1.position, p1.handle2_position, p2.position, p2.handle1_position, t)


def interpolate(
    p1: VectorLike,
    p1_handle2: VectorLike,
    p2: VectorLike,
    p2_handle1: VectorLike,
    num_points: int,
) -> NDArray[np.float64]:
    """Evaluate ``num_points + 1`` evenly spaced positions from ``p1`` to ``p2``.

    The first and last rows are exactly ``p1`` and ``p2``.
    """
    if num_points < 1:
        raise ValueError("num_points must be at least 1")

    points = np.empty((num_points + 1, 3), dtype=np.float64)
    points[0] = _vec(p1)
    points[-1] = _vec(p2)
    for i in range(1, num_points):
        points[i] = evaluate_point(p1, p1_handle2, p2, p2_handle1, i / num_points)
    return points
