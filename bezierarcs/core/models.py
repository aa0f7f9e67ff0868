"""Core data models for Bezier curves and their circular arc approximations."""

import math
import threading
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..config import CURRENT_SCHEMA_VERSION, DEFAULT_RESOLUTION
from .exceptions import InvalidCurveTopology

Vector3 = Tuple[float, float, float]
Point2D = Tuple[float, float]

ZERO_VECTOR: Vector3 = (0.0, 0.0, 0.0)


def _as_vector3(value: Sequence[float], name: str = "vector") -> Vector3:
    """Convert a 3-element sequence to a tuple of floats."""
    values = tuple(float(v) for v in value)
    if len(values) != 3:
        raise ValueError(f"{name} must have exactly 3 components, got {len(values)}")
    return (values[0], values[1], values[2])


def _negate(vector: Vector3) -> Vector3:
    return (-vector[0], -vector[1], -vector[2])


def _add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def _is_zero(vector: Vector3) -> bool:
    return vector == ZERO_VECTOR


class HandleStyle(str, Enum):
    """Handle styles of an anchor point."""

    NONE = "none"  # no handles, the curve passes straight through
    FREE = "free"  # handle1 and handle2 are independent
    CONNECTED = "connected"  # handle2 always mirrors handle1


@dataclass(frozen=True)
class AnchorPoint:
    """Anchor point of a Bezier curve.

    Handles are offsets relative to ``position``. ``handle1`` shapes the
    segment arriving at this anchor, ``handle2`` the segment leaving it.
    Instances are immutable; the ``with_*`` methods return updated copies
    and keep the handle style invariants intact.
    """

    position: Vector3
    handle1: Vector3 = ZERO_VECTOR
    handle2: Vector3 = ZERO_VECTOR
    handle_style: HandleStyle = HandleStyle.NONE

    def __post_init__(self) -> None:
        """Normalize vectors and validate the handle style invariants."""
        object.__setattr__(self, "position", _as_vector3(self.position, "position"))
        object.__setattr__(self, "handle1", _as_vector3(self.handle1, "handle1"))
        object.__setattr__(self, "handle2", _as_vector3(self.handle2, "handle2"))
        object.__setattr__(self, "handle_style", HandleStyle(self.handle_style))

        if self.handle_style == HandleStyle.NONE:
            if not (_is_zero(self.handle1) and _is_zero(self.handle2)):
                raise ValueError("Handle style 'none' requires zero handles")
        elif self.handle_style == HandleStyle.CONNECTED:
            if self.handle2 != _negate(self.handle1):
                raise ValueError(
                    "Connected handles must be opposite (handle2 == -handle1)"
                )

    @classmethod
    def connected(cls, position: Sequence[float], handle1: Sequence[float]) -> "AnchorPoint":
        """Create an anchor with connected handles from its incoming handle."""
        h1 = _as_vector3(handle1, "handle1")
        return cls(position, h1, _negate(h1), HandleStyle.CONNECTED)

    @property
    def handle1_position(self) -> Vector3:
        """Absolute position of the incoming handle."""
        return _add(self.position, self.handle1)

    @property
    def handle2_position(self) -> Vector3:
        """Absolute position of the outgoing handle."""
        return _add(self.position, self.handle2)

    def with_position(self, position: Sequence[float]) -> "AnchorPoint":
        """Return a copy moved to ``position`` (handles move along)."""
        return replace(self, position=_as_vector3(position, "position"))

    def with_handle1(self, handle1: Sequence[float]) -> "AnchorPoint":
        """Return a copy with a new incoming handle."""
        h1 = _as_vector3(handle1, "handle1")
        if self.handle_style == HandleStyle.NONE:
            raise ValueError("Cannot set handles on an anchor with handle style 'none'")
        if self.handle_style == HandleStyle.CONNECTED:
            return replace(self, handle1=h1, handle2=_negate(h1))
        return replace(self, handle1=h1)

    def with_handle2(self, handle2: Sequence[float]) -> "AnchorPoint":
        """Return a copy with a new outgoing handle."""
        h2 = _as_vector3(handle2, "handle2")
        if self.handle_style == HandleStyle.NONE:
            raise ValueError("Cannot set handles on an anchor with handle style 'none'")
        if self.handle_style == HandleStyle.CONNECTED:
            return replace(self, handle1=_negate(h2), handle2=h2)
        return replace(self, handle2=h2)

    def with_style(self, handle_style: HandleStyle) -> "AnchorPoint":
        """Return a copy using ``handle_style``, adjusting handles to match."""
        style = HandleStyle(handle_style)
        if style == HandleStyle.NONE:
            return AnchorPoint(self.position, ZERO_VECTOR, ZERO_VECTOR, style)
        if style == HandleStyle.CONNECTED:
            return AnchorPoint(self.position, self.handle1, _negate(self.handle1), style)
        return AnchorPoint(self.position, self.handle1, self.handle2, style)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the anchor to a plain dictionary."""
        return {
            "position": list(self.position),
            "handle1": list(self.handle1),
            "handle2": list(self.handle2),
            "handle_style": self.handle_style.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnchorPoint":
        """Create an anchor from a dictionary produced by ``to_dict``."""
        return cls(
            position=data["position"],
            handle1=data.get("handle1", ZERO_VECTOR),
            handle2=data.get("handle2", ZERO_VECTOR),
            handle_style=HandleStyle(data.get("handle_style", HandleStyle.NONE.value)),
        )


Segment = Tuple[AnchorPoint, AnchorPoint]


class Curve:
    """Piecewise Bezier curve made of an ordered sequence of anchor points.

    The curve owns its anchors by index. Every structural or geometric edit
    goes through a method of this class and marks the curve dirty, which
    invalidates the cached length.
    """

    def __init__(
        self,
        points: Optional[Iterable[AnchorPoint]] = None,
        closed: bool = False,
        resolution: float = DEFAULT_RESOLUTION,
        version: int = CURRENT_SCHEMA_VERSION,
        name: str = "",
    ) -> None:
        """Initialize curve.

        Args:
            points: Anchor points in curve order
            closed: Whether a closing segment joins the last anchor to the first
            resolution: Interpolation samples per unit of curve length
            version: Schema version of the stored resolution value
            name: Optional curve name used in reports
        """
        self._points: List[AnchorPoint] = []
        for point in points or []:
            self._points.append(self._check_point(point))
        self._closed = bool(closed)
        self._resolution = self._check_resolution(resolution)
        self.version = int(version)
        self.name = name

        self._dirty = True
        self._length: Optional[float] = None
        self._revision = 0
        self._cache_lock = threading.RLock()

    @staticmethod
    def _check_point(point: AnchorPoint) -> AnchorPoint:
        if not isinstance(point, AnchorPoint):
            raise TypeError(f"Expected AnchorPoint, got {type(point).__name__}")
        return point

    @staticmethod
    def _check_resolution(resolution: float) -> float:
        value = float(resolution)
        if not value > 0 or math.isinf(value):
            raise ValueError("Curve resolution must be a positive finite number")
        return value

    def _touch(self) -> None:
        with self._cache_lock:
            self._dirty = True
            self._revision += 1

    # ------------------------------------------------------------------
    # Flags and cached state
    # ------------------------------------------------------------------

    @property
    def closed(self) -> bool:
        """Whether the curve includes a segment from the last anchor to the first."""
        return self._closed

    @closed.setter
    def closed(self, value: bool) -> None:
        if self._closed == bool(value):
            return
        self._closed = bool(value)
        self._touch()

    @property
    def resolution(self) -> float:
        """Interpolation samples per unit of curve length."""
        return self._resolution

    @resolution.setter
    def resolution(self, value: float) -> None:
        value = self._check_resolution(value)
        if self._resolution == value:
            return
        self._resolution = value
        self._touch()

    @property
    def dirty(self) -> bool:
        """True when the cached length is stale."""
        return self._dirty

    @property
    def revision(self) -> int:
        """Counter incremented by every edit; lets callers key their own caches."""
        return self._revision

    @property
    def cached_length(self) -> Optional[float]:
        """Last stored length, or None if never computed."""
        return self._length

    @property
    def cache_lock(self) -> "threading.RLock":
        """Lock guarding the length cache fill."""
        return self._cache_lock

    def store_length(self, value: float, revision: Optional[int] = None) -> bool:
        """Store a freshly computed length and mark the curve clean.

        When ``revision`` is given and the curve was edited since, the value is
        stale: it is dropped and the curve stays dirty.

        Returns:
            True if the value was stored
        """
        with self._cache_lock:
            if revision is not None and revision != self._revision:
                return False
            self._length = float(value)
            self._dirty = False
            return True

    def set_dirty(self) -> None:
        """Force the next length read to recompute."""
        self._touch()

    @property
    def length(self) -> float:
        """Approximate curve length, recomputed only when dirty."""
        from ..curves.length import curve_length

        return curve_length(self)

    def recompute_length(self) -> float:
        """Eagerly recompute and cache the length."""
        from ..curves.length import curve_length

        with self._cache_lock:
            self._dirty = True
            return curve_length(self)

    # ------------------------------------------------------------------
    # Sequence access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> AnchorPoint:
        return self._points[index]

    def __iter__(self) -> Iterator[AnchorPoint]:
        return iter(self._points)

    def __repr__(self) -> str:
        return (
            f"Curve(name={self.name!r}, points={len(self._points)}, "
            f"closed={self._closed}, resolution={self._resolution})"
        )

    @property
    def point_count(self) -> int:
        """Number of anchor points (handles not included)."""
        return len(self._points)

    def anchor_points(self) -> List[AnchorPoint]:
        """Copy of the anchor point list."""
        return list(self._points)

    def last(self) -> AnchorPoint:
        """Last anchor point."""
        return self._points[-1]

    def index_of(self, point: AnchorPoint) -> int:
        """Index of ``point`` in this curve (identity match), or -1."""
        for index, candidate in enumerate(self._points):
            if candidate is point:
                return index
        return -1

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def add_point(self, point: AnchorPoint) -> AnchorPoint:
        """Append an anchor point to the end of the curve."""
        self._points.append(self._check_point(point))
        self._touch()
        return point

    def add_point_at(self, position: Sequence[float]) -> AnchorPoint:
        """Append a handle-less anchor at ``position``."""
        return self.add_point(AnchorPoint(position))

    def add_point_behind(self, position: Sequence[float]) -> AnchorPoint:
        """Prepend a handle-less anchor at ``position``."""
        return self.insert_point(0, AnchorPoint(position))

    def insert_point(self, index: int, point: AnchorPoint) -> AnchorPoint:
        """Insert an anchor point before ``index``."""
        self._points.insert(index, self._check_point(point))
        self._touch()
        return point

    def insert_point_at(self, index: int, position: Sequence[float]) -> AnchorPoint:
        """Insert a handle-less anchor at ``position`` before ``index``."""
        return self.insert_point(index, AnchorPoint(position))

    def remove_point(self, index: int) -> AnchorPoint:
        """Remove and return the anchor at ``index``."""
        point = self._points.pop(index)
        self._touch()
        return point

    def replace_point(self, index: int, point: AnchorPoint) -> AnchorPoint:
        """Replace the anchor at ``index``."""
        self._points[index] = self._check_point(point)
        self._touch()
        return point

    def move_point(self, index: int, position: Sequence[float]) -> AnchorPoint:
        """Move the anchor at ``index`` to ``position``."""
        return self.replace_point(index, self._points[index].with_position(position))

    def set_handle1(self, index: int, handle1: Sequence[float]) -> AnchorPoint:
        """Set the incoming handle of the anchor at ``index``."""
        return self.replace_point(index, self._points[index].with_handle1(handle1))

    def set_handle2(self, index: int, handle2: Sequence[float]) -> AnchorPoint:
        """Set the outgoing handle of the anchor at ``index``."""
        return self.replace_point(index, self._points[index].with_handle2(handle2))

    def set_handle_style(self, index: int, handle_style: HandleStyle) -> AnchorPoint:
        """Change the handle style of the anchor at ``index``."""
        return self.replace_point(index, self._points[index].with_style(handle_style))

    # ------------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------------

    def require_valid_topology(self) -> None:
        """Raise InvalidCurveTopology unless the curve defines at least one segment."""
        if len(self._points) < 2:
            raise InvalidCurveTopology(len(self._points), self._closed)

    @property
    def segment_count(self) -> int:
        """Number of segments, including the closing one."""
        if len(self._points) < 2:
            return 0
        return len(self._points) if self._closed else len(self._points) - 1

    def segments(self) -> List[Segment]:
        """Anchor pairs in curve order, closing pair last when closed."""
        pairs = [
            (self._points[i], self._points[i + 1]) for i in range(len(self._points) - 1)
        ]
        if self._closed and len(self._points) >= 2:
            pairs.append((self._points[-1], self._points[0]))
        return pairs

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Convert the curve to a plain dictionary."""
        return {
            "name": self.name,
            "closed": self._closed,
            "resolution": self._resolution,
            "version": self.version,
            "points": [point.to_dict() for point in self._points],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Curve":
        """Create a curve from a dictionary.

        A mapping without a ``version`` key predates per-unit-length
        resolution and is read as version 1.
        """
        return cls(
            points=[AnchorPoint.from_dict(p) for p in data.get("points", [])],
            closed=data.get("closed", False),
            resolution=data.get("resolution", DEFAULT_RESOLUTION),
            version=data.get("version", 1),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class Arc:
    """Circular arc approximating the curve over ``[t_start, t_end]``.

    Angles are in radians around ``center`` on the fitting plane with
    ``end_angle > start_angle``. When ``clockwise`` is True the curve runs
    from ``end_angle`` back to ``start_angle``.
    """

    center: Point2D
    start_angle: float
    end_angle: float
    radius: float
    t_start: float
    t_end: float
    fit_error: float = 0.0
    clockwise: bool = False

    def __post_init__(self) -> None:
        """Validate arc parameters."""
        if not (self.radius > 0 and math.isfinite(self.radius)):
            raise ValueError("Arc radius must be positive and finite")
        if self.t_end < self.t_start:
            raise ValueError("Arc t_end must not precede t_start")
        object.__setattr__(
            self, "center", (float(self.center[0]), float(self.center[1]))
        )

    @property
    def sweep(self) -> float:
        """Angular span in radians."""
        return self.end_angle - self.start_angle

    @property
    def length(self) -> float:
        """Arc length."""
        return abs(self.radius * (self.end_angle - self.start_angle))

    def point_at_angle(self, angle: float) -> Point2D:
        """Point on the arc's circle at ``angle``."""
        return (
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        )

    @property
    def start_point(self) -> Point2D:
        """Point where the curve enters the arc."""
        return self.point_at_angle(self.end_angle if self.clockwise else self.start_angle)

    @property
    def end_point(self) -> Point2D:
        """Point where the curve leaves the arc."""
        return self.point_at_angle(self.start_angle if self.clockwise else self.end_angle)

    @property
    def midpoint(self) -> Point2D:
        """Point halfway along the arc."""
        return self.point_at_angle((self.start_angle + self.end_angle) / 2)

    def polyline(self, segments: int = 32) -> List[Point2D]:
        """Polygonize the arc in curve traversal order."""
        if segments < 1:
            raise ValueError("Arc polyline needs at least one segment")
        step = self.sweep / segments
        points = [self.point_at_angle(self.start_angle + i * step) for i in range(segments + 1)]
        if self.clockwise:
            points.reverse()
        return points

    def to_dict(self) -> Dict[str, Any]:
        """Convert the arc to a plain dictionary."""
        return {
            "center": list(self.center),
            "start_angle": self.start_angle,
            "end_angle": self.end_angle,
            "radius": self.radius,
            "t_start": self.t_start,
            "t_end": self.t_end,
            "fit_error": self.fit_error,
            "clockwise": self.clockwise,
            "length": self.length,
        }
