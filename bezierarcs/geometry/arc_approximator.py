"""Approximation of Bezier curves by contiguous circular arcs."""

import logging
import math
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from ..config import ARC_APPROXIMATION, PLANE_AXES
from ..core.exceptions import ApproximationDidNotConverge, InvalidArcFit, PointNotFound
from ..core.models import Arc, Curve, Point2D
from ..curves.parametrizer import GlobalParametrizer
from .circle import TWO_PI, fit_circle, fit_error, unwrap_angle

logger = logging.getLogger(__name__)


class WindowDiagnostic(NamedTuple):
    """Search statistics for one arc window."""

    t_start: float
    t_end: float
    iterations: int
    invalid_fits: int  # collinear samples treated as a bad window
    converged: bool


@dataclass
class ApproximationResult:
    """Result of approximating a curve by arcs."""

    arcs: List[Arc]
    success: bool
    message: str = ""
    diagnostics: List[WindowDiagnostic] = field(default_factory=list)
    error_threshold: float = 0.0

    @property
    def arc_count(self) -> int:
        """Number of committed arcs."""
        return len(self.arcs)

    @property
    def total_length(self) -> float:
        """Sum of the arc lengths."""
        return sum(arc.length for arc in self.arcs)

    @property
    def max_fit_error(self) -> float:
        """Largest measured fit error among the arcs."""
        return max((arc.fit_error for arc in self.arcs), default=0.0)


class ArcApproximator:
    """Convert a curve into circular arcs within a fit error budget.

    Each arc is found by a binary search over the end parameter of a window
    whose start is held fixed: a window that fits grows by half its span, a
    window that does not fit shrinks to its midpoint. The search stops at the
    first good-to-bad transition and keeps the last good arc, then restarts
    from that arc's end until the curve end is reached.
    """

    def __init__(
        self,
        error_threshold: Optional[float] = None,
        min_error: Optional[float] = None,
        max_iterations: Optional[int] = None,
        max_arcs: Optional[int] = None,
        plane: Optional[str] = None,
        strict: bool = False,
    ):
        """Initialize arc approximator.

        Args:
            error_threshold: Default fit error budget (curve units)
            min_error: Floor applied to every threshold
            max_iterations: Binary search steps allowed per window
            max_arcs: Maximum number of arcs before giving up
            plane: Fitting plane ("xz", "xy" or "yz")
            strict: Raise instead of returning a partial result
        """
        self.error_threshold = (
            error_threshold
            if error_threshold is not None
            else ARC_APPROXIMATION["error_threshold"]
        )
        self.min_error = (
            min_error if min_error is not None else ARC_APPROXIMATION["min_error"]
        )
        self.max_iterations = max_iterations or ARC_APPROXIMATION["max_iterations"]
        self.max_arcs = max_arcs or ARC_APPROXIMATION["max_arcs"]
        self.plane = plane or ARC_APPROXIMATION["plane"]
        self.strict = strict

        if self.plane not in PLANE_AXES:
            raise ValueError(
                f"Unknown plane {self.plane!r}, expected one of {sorted(PLANE_AXES)}"
            )

    def approximate(
        self, curve: Curve, error_threshold: Optional[float] = None
    ) -> ApproximationResult:
        """Approximate ``curve`` by arcs.

        Args:
            curve: Curve to approximate (at least 2 anchors)
            error_threshold: Fit error budget, defaults to the instance value

        Returns:
            ApproximationResult; arcs are contiguous in parameter space and
            cover [0, 1] when ``success`` is True

        Raises:
            InvalidCurveTopology: If the curve has fewer than 2 anchors
            ApproximationDidNotConverge: In strict mode, if a window fails
            PointNotFound: In strict mode, if a sample cannot be located
        """
        if error_threshold is None:
            error_threshold = self.error_threshold
        threshold = max(self.min_error, error_threshold)
        parametrizer = GlobalParametrizer(curve)
        u_axis, v_axis = PLANE_AXES[self.plane]

        def sample(t: float) -> Point2D:
            point = parametrizer.point_at(t)
            return (float(point[u_axis]), float(point[v_axis]))

        arcs: List[Arc] = []
        diagnostics: List[WindowDiagnostic] = []
        t_start = 0.0

        try:
            while t_start < 1:
                if len(arcs) >= self.max_arcs:
                    raise ApproximationDidNotConverge(t_start, self.max_arcs, arcs)

                arc = self._find_arc(sample, t_start, threshold, diagnostics)
                arcs.append(arc)
                t_start = arc.t_end
        except ApproximationDidNotConverge as e:
            e.partial_arcs = list(arcs)
            logger.warning(f"Arc approximation stopped: {e}")
            if self.strict:
                raise
            return ApproximationResult(
                arcs=arcs,
                success=False,
                message=str(e),
                diagnostics=diagnostics,
                error_threshold=threshold,
            )
        except PointNotFound as e:
            logger.warning(f"Arc approximation stopped, curve sample failed: {e}")
            if self.strict:
                raise
            return ApproximationResult(
                arcs=arcs,
                success=False,
                message=str(e),
                diagnostics=diagnostics,
                error_threshold=threshold,
            )

        logger.debug(
            f"Approximated curve {curve.name!r} with {len(arcs)} arcs "
            f"(threshold {threshold})"
        )
        return ApproximationResult(
            arcs=arcs,
            success=True,
            message=f"Approximated with {len(arcs)} arcs",
            diagnostics=diagnostics,
            error_threshold=threshold,
        )

    def _find_arc(
        self,
        sample,
        t_start: float,
        threshold: float,
        diagnostics: List[WindowDiagnostic],
    ) -> Arc:
        """Binary search for the widest good arc starting at ``t_start``."""
        t_end = 1.0
        start_point = sample(t_start)
        arc: Optional[Arc] = None
        curr_good = False
        invalid_fits = 0

        for step in range(1, self.max_iterations + 1):
            prev_good = curr_good
            prev_arc = arc
            t_mid = (t_start + t_end) / 2

            try:
                fit = fit_circle(start_point, sample(t_mid), sample(t_end))
            except InvalidArcFit:
                invalid_fits += 1
                arc = None
                curr_good = False
            else:
                error = fit_error(sample, fit.center, start_point, t_start, t_end)
                arc = Arc(
                    center=fit.center,
                    start_angle=fit.start_angle,
                    end_angle=fit.end_angle,
                    radius=fit.radius,
                    t_start=t_start,
                    t_end=t_end,
                    fit_error=error,
                    clockwise=fit.clockwise,
                )
                curr_good = error <= threshold

            if prev_good and not curr_good and prev_arc is not None:
                self._record(diagnostics, t_start, prev_arc.t_end, step, invalid_fits)
                return prev_arc

            if curr_good and arc is not None:
                if t_end >= 1:
                    capped = self._cap_arc(arc, sample)
                    self._record(diagnostics, t_start, 1.0, step, invalid_fits)
                    return capped
                t_end += (t_end - t_start) / 2
            else:
                t_end = t_mid

        diagnostics.append(
            WindowDiagnostic(t_start, t_end, self.max_iterations, invalid_fits, False)
        )
        raise ApproximationDidNotConverge(t_start, self.max_iterations)

    @staticmethod
    def _record(
        diagnostics: List[WindowDiagnostic],
        t_start: float,
        t_end: float,
        iterations: int,
        invalid_fits: int,
    ) -> None:
        diagnostics.append(WindowDiagnostic(t_start, t_end, iterations, invalid_fits, True))
        logger.debug(
            f"Arc window [{t_start:.6f}, {t_end:.6f}] found in {iterations} steps"
        )

    @staticmethod
    def _cap_arc(arc: Arc, sample) -> Arc:
        """Clamp an arc to end at t = 1.

        If the window reached beyond t = 1, the bounding angle at the curve
        end is recomputed from the true end point.
        """
        if arc.t_end <= 1:
            return arc

        end = sample(1.0)
        angle = math.atan2(end[1] - arc.center[1], end[0] - arc.center[0])
        if arc.clockwise:
            # traversal ends at start_angle, keep it within a turn below end_angle
            start_angle = arc.end_angle - ((arc.end_angle - angle) % TWO_PI)
            return Arc(
                center=arc.center,
                start_angle=start_angle,
                end_angle=arc.end_angle,
                radius=arc.radius,
                t_start=arc.t_start,
                t_end=1.0,
                fit_error=arc.fit_error,
                clockwise=True,
            )
        return Arc(
            center=arc.center,
            start_angle=arc.start_angle,
            end_angle=unwrap_angle(angle, arc.start_angle),
            radius=arc.radius,
            t_start=arc.t_start,
            t_end=1.0,
            fit_error=arc.fit_error,
            clockwise=False,
        )


def approximate_arcs(curve: Curve, error_threshold: Optional[float] = None) -> List[Arc]:
    """Approximate ``curve`` by arcs, raising on any failure."""
    return ArcApproximator(strict=True).approximate(curve, error_threshold).arcs
