"""Three-point circle fitting on the projection plane."""

import math
from typing import Callable, NamedTuple, Sequence, Tuple

from ..config import COLLINEAR_TOLERANCE
from ..core.exceptions import InvalidArcFit
from ..core.models import Point2D

TWO_PI = 2 * math.pi


class CircleFit(NamedTuple):
    """Circle through three points plus the points' angles around it."""

    center: Point2D
    radius: float
    start_angle: float  # Smaller bounding angle of the arc (radians)
    end_angle: float  # Larger bounding angle of the arc (radians)
    clockwise: bool  # True if the points run from end_angle to start_angle


def line_line_intersection_2d(
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
    p4: Sequence[float],
) -> Point2D:
    """Intersect the line through p1, p2 with the line through p3, p4.

    Raises:
        InvalidArcFit: If the lines are parallel
    """
    x1, y1 = p1[0], p1[1]
    x2, y2 = p2[0], p2[1]
    x3, y3 = p3[0], p3[1]
    x4, y4 = p4[0], p4[1]

    d = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if d == 0:
        raise InvalidArcFit([p1, p2, p3, p4])

    a = x1 * y2 - y1 * x2
    b = x3 * y4 - y3 * x4
    nx = a * (x3 - x4) - (x1 - x2) * b
    ny = a * (y3 - y4) - (y1 - y2) * b
    return (nx / d, ny / d)


def order_arc_angles(start: float, mid: float, end: float) -> Tuple[float, float, bool]:
    """Order the angles of three points so the arc spans them without a jump.

    Angles come from ``atan2`` and so lie in (-pi, pi]. The result is a pair
    ``(low, high)`` with ``high > low`` that contains ``mid`` on the arc, plus
    a flag telling whether the points are traversed from high to low.
    """
    if start < end:
        if start <= mid <= end:
            return start, end, False
        return end, start + TWO_PI, True
    if end < mid < start:
        return end, start, True
    return start, end + TWO_PI, False


def fit_circle(
    p1: Sequence[float],
    p2: Sequence[float],
    p3: Sequence[float],
    tolerance: float = COLLINEAR_TOLERANCE,
) -> CircleFit:
    """Fit the unique circle through three 2D points.

    The center is the intersection of the perpendicular bisectors of the
    chords p1-p2 and p2-p3.

    Args:
        p1: First point (start of the arc)
        p2: Middle point
        p3: Last point (end of the arc)
        tolerance: Relative collinearity tolerance

    Returns:
        CircleFit with center, radius and ordered angles

    Raises:
        InvalidArcFit: If the points are collinear or coincident
    """
    dx1, dy1 = p2[0] - p1[0], p2[1] - p1[1]
    dx2, dy2 = p3[0] - p2[0], p3[1] - p2[1]

    cross = dx1 * dy2 - dy1 * dx2
    if abs(cross) <= tolerance * math.hypot(dx1, dy1) * math.hypot(dx2, dy2):
        raise InvalidArcFit([p1, p2, p3])

    # chord midpoints and their quarter-turned offsets
    mx1, my1 = (p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2
    mx2, my2 = (p2[0] + p3[0]) / 2, (p2[1] + p3[1]) / 2
    center = line_line_intersection_2d(
        (mx1, my1), (mx1 - dy1, my1 + dx1), (mx2, my2), (mx2 - dy2, my2 + dx2)
    )

    radius = math.hypot(p1[0] - center[0], p1[1] - center[1])
    if not (radius > 0 and math.isfinite(radius)):
        raise InvalidArcFit([p1, p2, p3])

    s = math.atan2(p1[1] - center[1], p1[0] - center[0])
    m = math.atan2(p2[1] - center[1], p2[0] - center[0])
    e = math.atan2(p3[1] - center[1], p3[0] - center[0])
    start_angle, end_angle, clockwise = order_arc_angles(s, m, e)

    return CircleFit(center, radius, start_angle, end_angle, clockwise)


def fit_error(
    sample: Callable[[float], Point2D],
    center: Sequence[float],
    start_point: Sequence[float],
    t_start: float,
    t_end: float,
) -> float:
    """Deviation of the curve from a circle over ``[t_start, t_end]``.

    Two probes at a quarter of the span from each end are compared with the
    radius measured to the start point. A true circular arc gives zero.

    Args:
        sample: Function mapping a curve parameter to a 2D point
        center: Circle center
        start_point: Curve point at ``t_start``
        t_start: Window start parameter
        t_end: Window end parameter

    Returns:
        Sum of the absolute radial deviations of the two probes
    """
    quarter = (t_end - t_start) / 4
    probe1 = sample(t_start + quarter)
    probe2 = sample(t_end - quarter)

    reference = math.hypot(start_point[0] - center[0], start_point[1] - center[1])
    d1 = math.hypot(probe1[0] - center[0], probe1[1] - center[1])
    d2 = math.hypot(probe2[0] - center[0], probe2[1] - center[1])
    return abs(d1 - reference) + abs(d2 - reference)


def unwrap_angle(angle: float, reference: float) -> float:
    """Shift ``angle`` by whole turns into ``[reference, reference + 2*pi)``."""
    return reference + (angle - reference) % TWO_PI
