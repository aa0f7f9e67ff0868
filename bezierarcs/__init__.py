"""Bezier arcs - Bezier curve evaluation and circular arc approximation."""

__version__ = "0.1.0"

# Core models
from .core.exceptions import (
    ApproximationDidNotConverge,
    BezierArcsError,
    InvalidArcFit,
    InvalidCurveTopology,
    PointNotFound,
)
from .core.models import AnchorPoint, Arc, Curve, HandleStyle

# Main algorithms
from .curves import GlobalParametrizer, curve_length, point_at_global_t, tangent_at_global_t
from .geometry import ApproximationResult, ArcApproximator, approximate_arcs

__all__ = [
    "AnchorPoint",
    "Arc",
    "Curve",
    "HandleStyle",
    "GlobalParametrizer",
    "curve_length",
    "point_at_global_t",
    "tangent_at_global_t",
    "ArcApproximator",
    "ApproximationResult",
    "approximate_arcs",
    "BezierArcsError",
    "InvalidCurveTopology",
    "PointNotFound",
    "InvalidArcFit",
    "ApproximationDidNotConverge",
]
