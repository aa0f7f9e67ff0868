"""Unit tests for the arc approximation algorithm."""

import math

import pytest

from bezierarcs.core.exceptions import ApproximationDidNotConverge
from bezierarcs.core.models import AnchorPoint, Curve, HandleStyle
from bezierarcs.curves.parametrizer import point_at_global_t
from bezierarcs.geometry.arc_approximator import ArcApproximator, approximate_arcs


def assert_contiguous(arcs):
    assert arcs[0].t_start == 0.0
    assert arcs[-1].t_end == 1.0
    for current, following in zip(arcs, arcs[1:]):
        assert current.t_end == following.t_start


class TestQuarterCircle:
    """Test a curve that is (nearly) a true circular arc."""

    def test_single_arc(self, quarter_circle_curve):
        """Test a quarter circle becomes one arc of radius 1."""
        arcs = approximate_arcs(quarter_circle_curve, 0.1)

        assert len(arcs) == 1
        arc = arcs[0]
        assert arc.radius == pytest.approx(1.0, abs=0.01)
        assert arc.center == pytest.approx((0.0, 0.0), abs=0.01)
        assert arc.fit_error == pytest.approx(0.0, abs=1e-3)
        assert (arc.t_start, arc.t_end) == (0.0, 1.0)

    def test_angles(self, quarter_circle_curve):
        """Test the arc spans 0 to 90 degrees counter-clockwise in XZ."""
        arc = approximate_arcs(quarter_circle_curve, 0.1)[0]
        assert arc.start_angle == pytest.approx(0.0, abs=1e-6)
        assert arc.end_angle == pytest.approx(math.pi / 2, abs=1e-6)
        assert not arc.clockwise

    def test_reversed_curve_is_clockwise(self):
        """Test traversal direction is recorded, angles stay ordered."""
        k = 0.5522847498
        curve = Curve(
            [
                AnchorPoint((0, 0, 1), handle2=(k, 0, 0), handle_style=HandleStyle.FREE),
                AnchorPoint((1, 0, 0), handle1=(0, 0, k), handle_style=HandleStyle.FREE),
            ]
        )
        arc = approximate_arcs(curve, 0.1)[0]
        assert arc.clockwise
        assert arc.end_angle > arc.start_angle
        assert arc.start_point == pytest.approx((0.0, 1.0), abs=1e-6)
        assert arc.end_point == pytest.approx((1.0, 0.0), abs=1e-6)


class TestMultipleArcs:
    """Test curves needing several arcs."""

    def test_arcs_are_contiguous(self, s_curve):
        """Test arcs share parameter endpoints and cover [0, 1]."""
        result = ArcApproximator().approximate(s_curve, 0.1)

        assert result.success
        assert len(result.arcs) > 1
        assert_contiguous(result.arcs)

    def test_fit_errors_within_threshold(self, s_curve):
        """Test every arc meets the error budget."""
        result = ArcApproximator().approximate(s_curve, 0.1)
        assert all(arc.fit_error <= 0.1 for arc in result.arcs)
        assert result.max_fit_error <= 0.1

    def test_arc_ends_lie_on_curve(self, s_curve):
        """Test each arc starts at the curve point of its t_start."""
        result = ArcApproximator().approximate(s_curve, 0.1)
        for arc in result.arcs:
            expected = point_at_global_t(s_curve, arc.t_start)
            tolerance = 1e-6 * max(1.0, arc.radius)
            assert arc.start_point == pytest.approx(
                (expected[0], expected[2]), abs=tolerance
            )

    def test_tighter_threshold_needs_more_arcs(self, s_curve):
        """Test a larger error budget never needs more arcs."""
        loose = ArcApproximator(min_error=0.01).approximate(s_curve, 1.0)
        tight = ArcApproximator(min_error=0.01).approximate(s_curve, 0.01)
        assert len(tight.arcs) >= len(loose.arcs)

    def test_closed_curve(self):
        """Test a closed curve is approximated around its closing segment."""
        k = 0.5522847498
        curve = Curve(
            [
                AnchorPoint.connected((1, 0, 0), (0, 0, -k)),
                AnchorPoint.connected((0, 0, 1), (k, 0, 0)),
                AnchorPoint.connected((-1, 0, 0), (0, 0, k)),
                AnchorPoint.connected((0, 0, -1), (-k, 0, 0)),
            ],
            closed=True,
        )
        result = ArcApproximator().approximate(curve, 0.1)

        assert result.success
        assert_contiguous(result.arcs)
        assert all(arc.radius == pytest.approx(1.0, abs=0.01) for arc in result.arcs)
        assert sum(arc.sweep for arc in result.arcs) == pytest.approx(2 * math.pi, abs=0.01)


class TestThresholds:
    """Test error threshold handling."""

    def test_threshold_is_floored(self, s_curve):
        """Test thresholds below the minimum are raised to it."""
        result = ArcApproximator().approximate(s_curve, 1e-9)
        assert result.error_threshold == pytest.approx(0.1)

    def test_zero_threshold_is_floored(self, s_curve):
        """Test an explicit zero threshold is floored, not replaced by the default."""
        result = ArcApproximator().approximate(s_curve, 0.0)
        assert result.error_threshold == pytest.approx(0.1)

        result = ArcApproximator(error_threshold=0.0).approximate(s_curve)
        assert result.error_threshold == pytest.approx(0.1)

    def test_default_threshold(self, s_curve):
        """Test the configured default is used when none is given."""
        result = ArcApproximator().approximate(s_curve)
        assert result.error_threshold == pytest.approx(0.5)

    def test_unknown_plane(self):
        """Test the plane must be one of the known projections."""
        with pytest.raises(ValueError, match="Unknown plane"):
            ArcApproximator(plane="xw")

    def test_xy_plane(self):
        """Test fitting in another plane."""
        k = 0.5522847498
        curve = Curve(
            [
                AnchorPoint((1, 0, 7), handle2=(0, k, 0), handle_style=HandleStyle.FREE),
                AnchorPoint((0, 1, 7), handle1=(k, 0, 0), handle_style=HandleStyle.FREE),
            ]
        )
        arcs = ArcApproximator(plane="xy", strict=True).approximate(curve, 0.1).arcs
        assert len(arcs) == 1
        assert arcs[0].radius == pytest.approx(1.0, abs=0.01)


class TestFailures:
    """Test degenerate input and bounded failure."""

    def test_straight_curve_returns_partial_result(self, collinear_curve):
        """Test collinear samples never fit and the window aborts."""
        result = ArcApproximator().approximate(collinear_curve, 0.1)

        assert not result.success
        assert result.arcs == []
        assert "did not converge" in result.message
        diagnostic = result.diagnostics[-1]
        assert not diagnostic.converged
        assert diagnostic.invalid_fits > 0

    def test_strict_mode_raises(self, collinear_curve):
        """Test strict mode surfaces the non-convergence."""
        with pytest.raises(ApproximationDidNotConverge) as exc_info:
            approximate_arcs(collinear_curve, 0.1)
        assert exc_info.value.partial_arcs == []
        assert exc_info.value.t_start == 0.0

    def test_arc_limit_keeps_partial_arcs(self, s_curve):
        """Test hitting the arc limit returns the arcs committed so far."""
        result = ArcApproximator(max_arcs=1).approximate(s_curve, 0.1)

        assert not result.success
        assert len(result.arcs) == 1
        assert result.arcs[0].t_start == 0.0

    def test_iteration_cap_is_bounded(self, collinear_curve):
        """Test the per-window search stops at the configured cap."""
        result = ArcApproximator(max_iterations=5).approximate(collinear_curve, 0.1)
        assert result.diagnostics[-1].iterations == 5
