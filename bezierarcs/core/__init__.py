"""Core module for Bezier curve modelling."""

from .exceptions import (
    ApproximationDidNotConverge,
    BezierArcsError,
    InvalidArcFit,
    InvalidCurveTopology,
    PointNotFound,
)
from .models import Arc, AnchorPoint, Curve, HandleStyle

__all__ = [
    "AnchorPoint",
    "Arc",
    "Curve",
    "HandleStyle",
    "BezierArcsError",
    "InvalidCurveTopology",
    "PointNotFound",
    "InvalidArcFit",
    "ApproximationDidNotConverge",
]
