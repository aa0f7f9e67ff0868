"""Validation of arc approximations against their source curve."""

import math
from dataclasses import dataclass
from typing import List, Optional

from shapely.geometry import LineString

from ..config import ARC_APPROXIMATION, PLANE_AXES, VALIDATION_TOLERANCES
from ..core.models import Arc, Curve
from ..curves.sampling import interpolate_curve


@dataclass
class ValidationIssue:
    """Represents a validation issue found in an arc approximation."""

    arc_index: int  # -1 for issues concerning the whole approximation
    issue_type: str
    severity: str  # "error", "warning", "info"
    message: str
    value: Optional[float] = None
    limit: Optional[float] = None


@dataclass
class ValidationResult:
    """Result of approximation validation."""

    is_valid: bool
    issues: List[ValidationIssue]
    total_errors: int
    total_warnings: int
    max_deviation: Optional[float] = None

    def add_issue(self, issue: ValidationIssue) -> None:
        """Add a validation issue."""
        self.issues.append(issue)
        if issue.severity == "error":
            self.total_errors += 1
            self.is_valid = False
        elif issue.severity == "warning":
            self.total_warnings += 1

    def get_summary(self) -> str:
        """Get validation summary."""
        if self.is_valid:
            return f"Validation passed with {self.total_warnings} warnings"
        else:
            return f"Validation failed: {self.total_errors} errors, {self.total_warnings} warnings"


class ApproximationValidator:
    """Check that a list of arcs is a sound approximation of a curve."""

    def __init__(
        self,
        error_threshold: Optional[float] = None,
        deviation_tolerance: Optional[float] = None,
        contiguity_tolerance: Optional[float] = None,
        arc_polyline_segments: Optional[int] = None,
        plane: Optional[str] = None,
    ):
        """Initialize approximation validator.

        Args:
            error_threshold: Max fit error per arc
            deviation_tolerance: Max Hausdorff distance between curve and arcs
            contiguity_tolerance: Allowed gap between consecutive arc parameters
            arc_polyline_segments: Chords used to polygonize each arc
            plane: Projection plane the arcs were fitted on
        """
        self.error_threshold = (
            error_threshold
            if error_threshold is not None
            else ARC_APPROXIMATION["error_threshold"]
        )
        self.deviation_tolerance = (
            deviation_tolerance
            if deviation_tolerance is not None
            else VALIDATION_TOLERANCES["deviation_tolerance"]
        )
        self.contiguity_tolerance = (
            contiguity_tolerance
            if contiguity_tolerance is not None
            else VALIDATION_TOLERANCES["contiguity_tolerance"]
        )
        self.arc_polyline_segments = (
            arc_polyline_segments or VALIDATION_TOLERANCES["arc_polyline_segments"]
        )
        self.plane = plane or ARC_APPROXIMATION["plane"]

    def validate(self, arcs: List[Arc], curve: Optional[Curve] = None) -> ValidationResult:
        """Validate arcs, and their deviation from ``curve`` when given.

        Args:
            arcs: Arcs in curve order
            curve: Source curve for the deviation check

        Returns:
            ValidationResult with all issues found
        """
        result = ValidationResult(
            is_valid=True, issues=[], total_errors=0, total_warnings=0
        )

        if not arcs:
            result.add_issue(
                ValidationIssue(
                    arc_index=-1,
                    issue_type="no_arcs",
                    severity="error",
                    message="Approximation contains no arcs",
                )
            )
            return result

        self._validate_coverage(arcs, result)
        for i, arc in enumerate(arcs):
            self._validate_arc(arc, i, i == len(arcs) - 1, result)
        self._validate_contiguity(arcs, result)

        if curve is not None:
            self._validate_deviation(arcs, curve, result)

        return result

    def _validate_coverage(self, arcs: List[Arc], result: ValidationResult) -> None:
        """Arcs must start at t = 0 and end at t = 1."""
        if arcs[0].t_start != 0:
            result.add_issue(
                ValidationIssue(
                    arc_index=0,
                    issue_type="coverage_start",
                    severity="error",
                    message=f"First arc starts at t={arcs[0].t_start:.6f}, not 0",
                    value=arcs[0].t_start,
                    limit=0.0,
                )
            )
        if arcs[-1].t_end != 1:
            result.add_issue(
                ValidationIssue(
                    arc_index=len(arcs) - 1,
                    issue_type="coverage_end",
                    severity="error",
                    message=f"Last arc ends at t={arcs[-1].t_end:.6f}, not 1",
                    value=arcs[-1].t_end,
                    limit=1.0,
                )
            )

    def _validate_arc(
        self, arc: Arc, index: int, is_last: bool, result: ValidationResult
    ) -> None:
        """Validate a single arc."""
        if arc.end_angle < arc.start_angle:
            result.add_issue(
                ValidationIssue(
                    arc_index=index,
                    issue_type="angle_order",
                    severity="error",
                    message="Arc end angle precedes its start angle",
                    value=arc.sweep,
                    limit=0.0,
                )
            )
        elif arc.sweep > 2 * math.pi:
            result.add_issue(
                ValidationIssue(
                    arc_index=index,
                    issue_type="sweep_too_large",
                    severity="warning",
                    message=f"Arc sweeps {math.degrees(arc.sweep):.1f} degrees",
                    value=arc.sweep,
                    limit=2 * math.pi,
                )
            )

        if arc.fit_error > self.error_threshold:
            # the last arc is capped at t = 1 and not refitted
            result.add_issue(
                ValidationIssue(
                    arc_index=index,
                    issue_type="fit_error",
                    severity="warning" if is_last else "error",
                    message=f"Fit error {arc.fit_error:.4f} exceeds threshold",
                    value=arc.fit_error,
                    limit=self.error_threshold,
                )
            )

    def _validate_contiguity(self, arcs: List[Arc], result: ValidationResult) -> None:
        """Consecutive arcs must share their parameter endpoints."""
        for i in range(len(arcs) - 1):
            gap = abs(arcs[i + 1].t_start - arcs[i].t_end)
            if gap > self.contiguity_tolerance:
                result.add_issue(
                    ValidationIssue(
                        arc_index=i,
                        issue_type="parameter_gap",
                        severity="error",
                        message=f"Gap of {gap:.2e} in t between arcs {i} and {i + 1}",
                        value=gap,
                        limit=self.contiguity_tolerance,
                    )
                )

    def _validate_deviation(
        self, arcs: List[Arc], curve: Curve, result: ValidationResult
    ) -> None:
        """Compare the projected curve with the arcs' polylines."""
        u_axis, v_axis = PLANE_AXES[self.plane]
        curve_points = [(p[u_axis], p[v_axis]) for p in interpolate_curve(curve)]

        arc_points = []
        for arc in arcs:
            polyline = arc.polyline(self.arc_polyline_segments)
            arc_points.extend(polyline if not arc_points else polyline[1:])

        deviation = LineString(curve_points).hausdorff_distance(LineString(arc_points))
        result.max_deviation = deviation

        if deviation > self.deviation_tolerance:
            result.add_issue(
                ValidationIssue(
                    arc_index=-1,
                    issue_type="deviation",
                    severity="error",
                    message=f"Arcs deviate {deviation:.4f} from the curve",
                    value=deviation,
                    limit=self.deviation_tolerance,
                )
            )
        else:
            result.add_issue(
                ValidationIssue(
                    arc_index=-1,
                    issue_type="deviation",
                    severity="info",
                    message=f"Maximum deviation {deviation:.4f}",
                    value=deviation,
                )
            )
