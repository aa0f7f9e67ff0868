"""Configuration settings for bezierarcs."""

# Curve defaults
DEFAULT_RESOLUTION = 5.0  # interpolated points per unit of curve length
RESOLUTION_TO_NUM_POINTS_FACTOR = 3  # coarse probe used to size a segment's sampling
MIN_SEGMENT_NUM_POINTS = 2  # at least a start/end pair per segment

# Stored curve schema
CURRENT_SCHEMA_VERSION = 2  # version 2 stores resolution per unit length
MIGRATION_PROBE_NUM_POINTS = 5  # coarse probe used when upgrading version 1 curves

# Global parameter lookup (global t -> segment, local t)
PARAMETRIZATION = {
    "base_num_points": 10,  # initial coarse samples per segment
    "num_points_increment": 10,  # added after every failed pass
    "max_attempts": 10,  # passes before giving up with PointNotFound
    "boundary_tolerance": 5e-6,  # treat "equals" as "exceeds" at segment boundaries
}

# Circular arc approximation
ARC_APPROXIMATION = {
    "error_threshold": 0.5,  # default fit error budget (curve units)
    "min_error": 0.1,  # thresholds are floored to this value
    "max_iterations": 100,  # binary search steps per arc window
    "max_arcs": 10000,  # hard stop for the outer loop
    "plane": "xz",  # fitting plane, the remaining axis is dropped
}

# Approximation validation
VALIDATION_TOLERANCES = {
    "deviation_tolerance": 1.0,  # max Hausdorff distance curve <-> arcs
    "arc_polyline_segments": 32,  # chords used to polygonize each arc
    "contiguity_tolerance": 0.0,  # arcs must share parameter endpoints exactly
}

# Projection planes: indices of the kept axes (u, v)
PLANE_AXES = {
    "xz": (0, 2),
    "xy": (0, 1),
    "yz": (1, 2),
}

# Three-point circle fit: chords whose cross product is below this fraction
# of their length product are treated as collinear
COLLINEAR_TOLERANCE = 1e-12
