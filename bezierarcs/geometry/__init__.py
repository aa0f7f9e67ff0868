"""Geometry module for circle fitting and arc approximation."""

from .arc_approximator import (
    ApproximationResult,
    ArcApproximator,
    WindowDiagnostic,
    approximate_arcs,
)
from .circle import CircleFit, fit_circle, fit_error, line_line_intersection_2d, order_arc_angles
from .validator import ApproximationValidator, ValidationIssue, ValidationResult

__all__ = [
    "ArcApproximator",
    "ApproximationResult",
    "WindowDiagnostic",
    "approximate_arcs",
    "CircleFit",
    "fit_circle",
    "fit_error",
    "line_line_intersection_2d",
    "order_arc_angles",
    "ApproximationValidator",
    "ValidationIssue",
    "ValidationResult",
]
