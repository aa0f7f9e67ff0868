"""Error types raised by curve evaluation and arc approximation."""

from typing import List, Optional, Sequence


class BezierArcsError(Exception):
    """Base class for recoverable curve processing errors."""


class InvalidCurveTopology(BezierArcsError, ValueError):
    """Curve has too few anchor points to define a segment."""

    def __init__(self, point_count: int, closed: bool = False) -> None:
        self.point_count = point_count
        self.closed = closed
        kind = "closed curve" if closed else "curve"
        super().__init__(
            f"A {kind} needs at least 2 anchor points, got {point_count}"
        )


class PointNotFound(BezierArcsError, LookupError):
    """Global parameter could not be mapped to a segment."""

    def __init__(self, t: float, attempts: int) -> None:
        self.t = t
        self.attempts = attempts
        super().__init__(
            f"Could not locate a segment for global t={t} after {attempts} attempts"
        )


class InvalidArcFit(BezierArcsError, ValueError):
    """Three sample points are collinear (or coincident) and define no circle."""

    def __init__(self, points: Optional[Sequence[Sequence[float]]] = None) -> None:
        self.points = [tuple(p) for p in points] if points is not None else []
        super().__init__(f"Cannot fit a circle through collinear points {self.points}")


class ApproximationDidNotConverge(BezierArcsError, RuntimeError):
    """Arc search for a window exceeded its iteration budget."""

    def __init__(
        self,
        t_start: float,
        iterations: int,
        partial_arcs: Optional[List] = None,
    ) -> None:
        self.t_start = t_start
        self.iterations = iterations
        self.partial_arcs = list(partial_arcs or [])
        super().__init__(
            f"Arc approximation did not converge for window starting at "
            f"t={t_start:.6f} after {iterations} iterations "
            f"({len(self.partial_arcs)} arcs committed)"
        )
