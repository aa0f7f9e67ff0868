"""Upgrade of stored curves whose resolution predates per-unit-length sampling.

Version 1 curves stored a flat number of interpolation points per segment.
Version 2 stores points per unit of length. The conversion keeps the old
density on the shortest segment, which is the densest the old curve ever was.
"""

import logging

from ..config import CURRENT_SCHEMA_VERSION, MIGRATION_PROBE_NUM_POINTS
from ..core.models import Curve
from .length import approximate_segment_length

logger = logging.getLogger(__name__)


def migrate_resolution(old_resolution: float, shortest_segment_length: float) -> float:
    """Convert a per-segment sample count to samples per unit length.

    Args:
        old_resolution: Samples per segment (version 1 semantics)
        shortest_segment_length: Length of the curve's shortest segment

    Returns:
        Samples per unit length (version 2 semantics)
    """
    if not shortest_segment_length > 0:
        raise ValueError("Shortest segment length must be positive")
    return old_resolution / shortest_segment_length


def shortest_segment_length(
    curve: Curve, num_points: int = MIGRATION_PROBE_NUM_POINTS
) -> float:
    """Shortest non-degenerate open segment of ``curve`` using a coarse probe.

    The closing segment of a closed curve is not considered, matching how
    version 1 curves were measured. Zero-length segments are skipped.
    """
    curve.require_valid_topology()

    lengths = [
        approximate_segment_length(
            curve[i].position,
            curve[i].handle2_position,
            curve[i + 1].position,
            curve[i + 1].handle1_position,
            num_points,
        )
        for i in range(curve.point_count - 1)
    ]
    positive = [length for length in lengths if length > 0]
    if not positive:
        raise ValueError("Curve has no segment with positive length")
    return min(positive)


def upgrade_curve(curve: Curve) -> bool:
    """Upgrade a stored curve to the current schema version in place.

    Returns:
        True if the curve was migrated, False if it was already current
    """
    if curve.version >= CURRENT_SCHEMA_VERSION:
        return False

    logger.info(f"Adapting curve resolution value for {curve.name!r}")

    old_resolution = curve.resolution
    new_resolution = migrate_resolution(old_resolution, shortest_segment_length(curve))
    logger.info(f"Old resolution: {old_resolution}, new resolution: {new_resolution}")

    curve.resolution = new_resolution
    curve.version = CURRENT_SCHEMA_VERSION
    return True
