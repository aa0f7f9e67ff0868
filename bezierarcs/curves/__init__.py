"""Bezier curve evaluation, length estimation and global parametrization."""

from .evaluator import (
    bezier_point,
    binomial_coefficient,
    cubic_point,
    cubic_tangent,
    curve_degree,
    evaluate_point,
    evaluate_tangent,
    interpolate,
    linear_point,
    quadratic_point,
    segment_point,
    segment_tangent,
)
from .length import (
    approximate_segment_length,
    compute_curve_length,
    curve_length,
    integrated_segment_length,
    num_points_for_resolution,
    segment_length,
)
from .migration import migrate_resolution, shortest_segment_length, upgrade_curve
from .parametrizer import (
    GlobalParametrizer,
    SegmentLocation,
    point_at_global_t,
    tangent_at_global_t,
)
from .sampling import interpolate_curve, interpolate_segment

__all__ = [
    "evaluate_point",
    "evaluate_tangent",
    "curve_degree",
    "bezier_point",
    "binomial_coefficient",
    "cubic_point",
    "cubic_tangent",
    "quadratic_point",
    "linear_point",
    "segment_point",
    "segment_tangent",
    "interpolate",
    "interpolate_segment",
    "interpolate_curve",
    "approximate_segment_length",
    "num_points_for_resolution",
    "segment_length",
    "compute_curve_length",
    "curve_length",
    "integrated_segment_length",
    "GlobalParametrizer",
    "SegmentLocation",
    "point_at_global_t",
    "tangent_at_global_t",
    "migrate_resolution",
    "shortest_segment_length",
    "upgrade_curve",
]
