"""Unit tests for three-point circle fitting."""

import math

import pytest

from bezierarcs.core.exceptions import InvalidArcFit
from bezierarcs.geometry.circle import (
    fit_circle,
    fit_error,
    line_line_intersection_2d,
    order_arc_angles,
    unwrap_angle,
)


class TestLineIntersection:
    """Test 2D line intersection."""

    def test_crossing_diagonals(self):
        """Test the diagonals of the unit square meet at its center."""
        point = line_line_intersection_2d((0, 0), (1, 1), (0, 1), (1, 0))
        assert point == pytest.approx((0.5, 0.5))

    def test_parallel_lines(self):
        """Test parallel lines have no intersection."""
        with pytest.raises(InvalidArcFit):
            line_line_intersection_2d((0, 0), (1, 0), (0, 1), (1, 1))


class TestFitCircle:
    """Test circle fitting through three points."""

    def test_unit_circle_counter_clockwise(self):
        """Test points running counter-clockwise around the origin."""
        fit = fit_circle((1, 0), (0, 1), (-1, 0))
        assert fit.center == pytest.approx((0.0, 0.0))
        assert fit.radius == pytest.approx(1.0)
        assert fit.start_angle == pytest.approx(0.0)
        assert fit.end_angle == pytest.approx(math.pi)
        assert not fit.clockwise

    def test_unit_circle_clockwise(self):
        """Test points running clockwise keep end > start and set the flag."""
        fit = fit_circle((-1, 0), (0, 1), (1, 0))
        assert fit.start_angle == pytest.approx(0.0)
        assert fit.end_angle == pytest.approx(math.pi)
        assert fit.clockwise

    def test_offset_circle(self):
        """Test a circle away from the origin."""
        fit = fit_circle((5, 2), (3, 4), (1, 2))
        assert fit.center == pytest.approx((3.0, 2.0))
        assert fit.radius == pytest.approx(2.0)

    def test_arc_across_branch_cut(self):
        """Test an arc through the -x axis does not wrap the long way round."""
        r = math.sqrt(0.5)
        fit = fit_circle((-r, r), (-1, 0), (-r, -r))
        assert fit.end_angle > fit.start_angle
        assert fit.end_angle - fit.start_angle == pytest.approx(math.pi / 2)
        assert not fit.clockwise

    @pytest.mark.parametrize(
        "points",
        [
            ((0, 0), (1, 0), (2, 0)),
            ((0, 0), (1, 1), (3, 3)),
            ((1, 1), (1, 1), (2, 5)),
        ],
    )
    def test_collinear_points_are_invalid(self, points):
        """Test collinear or coincident points raise instead of a fake radius."""
        with pytest.raises(InvalidArcFit, match="collinear"):
            fit_circle(*points)


class TestOrderArcAngles:
    """Test angle ordering."""

    def test_increasing_with_mid_inside(self):
        """Test plain counter-clockwise order."""
        assert order_arc_angles(0.0, 0.5, 1.0) == (0.0, 1.0, False)

    def test_increasing_with_mid_outside(self):
        """Test the arc goes the other way round."""
        low, high, clockwise = order_arc_angles(0.0, 2.0, 1.0)
        assert (low, high) == pytest.approx((1.0, 2 * math.pi))
        assert clockwise

    def test_decreasing_with_mid_inside(self):
        """Test plain clockwise order."""
        assert order_arc_angles(1.0, 0.5, 0.0) == (0.0, 1.0, True)

    def test_decreasing_with_mid_outside(self):
        """Test counter-clockwise across the branch cut."""
        low, high, clockwise = order_arc_angles(3.0, -3.1, -3.0)
        assert low == 3.0
        assert high == pytest.approx(-3.0 + 2 * math.pi)
        assert not clockwise

    def test_unwrap_angle(self):
        """Test angles are shifted into the turn above the reference."""
        assert unwrap_angle(-math.pi / 2, 0.0) == pytest.approx(1.5 * math.pi)
        assert unwrap_angle(0.5, 0.0) == pytest.approx(0.5)


class TestFitError:
    """Test the probe-based fit error."""

    def test_true_circle_has_zero_error(self):
        """Test a circular parametrization gives zero error."""

        def sample(t):
            return (math.cos(t * math.pi), math.sin(t * math.pi))

        assert fit_error(sample, (0.0, 0.0), sample(0.0), 0.0, 1.0) == pytest.approx(0.0)

    def test_deviation_is_summed(self):
        """Test both probe deviations are added."""

        def sample(t):
            # radius 1 at the ends, 1.5 at the probes
            return (1.5, 0.0) if t in (0.25, 0.75) else (1.0, 0.0)

        assert fit_error(sample, (0.0, 0.0), (1.0, 0.0), 0.0, 1.0) == pytest.approx(1.0)
