"""Mapping of a curve-global parameter to a segment and local parameter."""

import logging
from typing import Dict, List, NamedTuple, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from ..config import PARAMETRIZATION
from ..core.exceptions import PointNotFound
from ..core.models import AnchorPoint, Curve
from .evaluator import segment_point, segment_tangent
from .length import approximate_segment_length

logger = logging.getLogger(__name__)


class SegmentLocation(NamedTuple):
    """Segment containing a global parameter value."""

    index: int  # Segment index in curve order (closing segment last)
    start: AnchorPoint  # Anchor at the start of the segment
    end: AnchorPoint  # Anchor at the end of the segment
    local_t: float  # Parameter within the segment, in [0, 1]


class GlobalParametrizer:
    """Answer "point/tangent at global t" queries for a curve.

    The global parameter runs from 0 at the first anchor to 1 at the end of
    the curve, proportional to arc length. Segment boundaries come from
    coarse length estimates; when a pass cannot place ``t`` the sample count
    is raised and the search repeated, up to a bounded number of attempts.
    """

    def __init__(
        self,
        curve: Curve,
        base_num_points: Optional[int] = None,
        num_points_increment: Optional[int] = None,
        max_attempts: Optional[int] = None,
        boundary_tolerance: Optional[float] = None,
    ) -> None:
        """Initialize parametrizer.

        Args:
            curve: Curve to parametrize (needs at least 2 anchors)
            base_num_points: Coarse samples per segment on the first pass
            num_points_increment: Samples added after each failed pass
            max_attempts: Passes before raising PointNotFound
            boundary_tolerance: Distance at which t counts as reaching a boundary
        """
        curve.require_valid_topology()
        self.curve = curve
        self.base_num_points = base_num_points or PARAMETRIZATION["base_num_points"]
        self.num_points_increment = (
            num_points_increment or PARAMETRIZATION["num_points_increment"]
        )
        self.max_attempts = max_attempts or PARAMETRIZATION["max_attempts"]
        self.boundary_tolerance = (
            boundary_tolerance
            if boundary_tolerance is not None
            else PARAMETRIZATION["boundary_tolerance"]
        )
        self._lengths_cache: Dict[Tuple[int, int], List[float]] = {}

    def _segment_lengths(self, num_points: int) -> List[float]:
        """Coarse segment lengths, cached per curve revision and sample count."""
        key = (self.curve.revision, num_points)
        lengths = self._lengths_cache.get(key)
        if lengths is None:
            if any(k[0] != self.curve.revision for k in self._lengths_cache):
                self._lengths_cache.clear()
            lengths = [
                approximate_segment_length(
                    a.position, a.handle2_position, b.position, b.handle1_position, num_points
                )
                for a, b in self.curve.segments()
            ]
            self._lengths_cache[key] = lengths
        return lengths

    def locate(self, t: float) -> SegmentLocation:
        """Find the segment and local parameter for global ``t``.

        Raises:
            InvalidCurveTopology: If the curve lost its segments since construction
            PointNotFound: If no pass could place ``t``
        """
        self.curve.require_valid_topology()
        segments = self.curve.segments()

        if t <= 0:
            first, second = segments[0]
            return SegmentLocation(0, first, second, 0.0)
        if t >= 1:
            last_index = len(segments) - 1
            start, end = segments[last_index]
            return SegmentLocation(last_index, start, end, 1.0)

        num_points = self.base_num_points
        for attempt in range(1, self.max_attempts + 1):
            location = self._search_pass(t, segments, num_points)
            if location is not None:
                return location

            logger.debug(
                f"Pass {attempt} with {num_points} samples could not place t={t}"
            )
            num_points += self.num_points_increment

        raise PointNotFound(t, self.max_attempts)

    def _search_pass(
        self,
        t: float,
        segments: List[Tuple[AnchorPoint, AnchorPoint]],
        num_points: int,
    ) -> Optional[SegmentLocation]:
        lengths = self._segment_lengths(num_points)
        total = sum(lengths)
        if not total > 0:
            return None

        cumulative = 0.0
        for index, ((start, end), length) in enumerate(zip(segments, lengths)):
            fraction = length / total
            boundary = cumulative + fraction

            if boundary > t or abs(t - boundary) < self.boundary_tolerance:
                local_t = (t - cumulative) / fraction if fraction > 0 else 0.0
                return SegmentLocation(index, start, end, min(1.0, max(0.0, local_t)))

            cumulative = boundary

        return None

    def point_at(self, t: float) -> NDArray[np.float64]:
        """Position at global ``t``."""
        location = self.locate(t)
        return segment_point(location.start, location.end, location.local_t)

    def tangent_at(self, t: float) -> NDArray[np.float64]:
        """Tangent at global ``t``."""
        location = self.locate(t)
        return segment_tangent(location.start, location.end, location.local_t)


def point_at_global_t(curve: Curve, t: float) -> NDArray[np.float64]:
    """Position at global ``t`` on ``curve``."""
    return GlobalParametrizer(curve).point_at(t)


def tangent_at_global_t(curve: Curve, t: float) -> NDArray[np.float64]:
    """Tangent at global ``t`` on ``curve``."""
    return GlobalParametrizer(curve).tangent_at(t)
