"""Unit tests for Bezier segment evaluation."""

import numpy as np
import pytest

from bezierarcs.core.models import AnchorPoint, HandleStyle
from bezierarcs.curves.evaluator import (
    bezier_point,
    binomial_coefficient,
    cubic_point,
    cubic_tangent,
    curve_degree,
    evaluate_point,
    evaluate_tangent,
    interpolate,
    linear_point,
    segment_point,
    segment_tangent,
)

P0 = (0.0, 0.0, 0.0)
P1 = (1.0, 0.0, 2.0)
P2 = (3.0, 0.0, 2.0)
P3 = (4.0, 0.0, 0.0)


class TestDegreeInference:
    """Test degree selection from the handles."""

    def test_degrees(self):
        """Test each handle combination maps to a degree."""
        assert curve_degree(P0, P1, P3, P2) == 3
        assert curve_degree(P0, P1, P3, P3) == 2
        assert curve_degree(P0, P0, P3, P2) == 2
        assert curve_degree(P0, P0, P3, P3) == 1

    def test_near_zero_handle_is_still_in_use(self):
        """Test degree collapse uses exact equality."""
        assert curve_degree(P0, (1e-12, 0.0, 0.0), P3, P3) == 2

    def test_linear_segment(self):
        """Test handle-less segments are straight lines."""
        point = evaluate_point(P0, P0, P3, P3, 0.25)
        assert point == pytest.approx([1.0, 0.0, 0.0])

    def test_quadratic_with_leading_handle(self):
        """Test a single outgoing handle gives a quadratic curve."""
        point = evaluate_point(P0, (2.0, 0.0, 2.0), P3, P3, 0.5)
        # 0.25*P0 + 0.5*H + 0.25*P3
        assert point == pytest.approx([2.0, 0.0, 1.0])

    def test_quadratic_with_trailing_handle(self):
        """Test a single incoming handle gives a quadratic curve."""
        point = evaluate_point(P0, P0, P3, (2.0, 0.0, 2.0), 0.5)
        assert point == pytest.approx([2.0, 0.0, 1.0])


class TestCubic:
    """Test cubic evaluation."""

    @pytest.mark.parametrize("t, expected", [(0.0, P0), (1.0, P3)])
    def test_endpoints_are_exact(self, t, expected):
        """Test t=0 and t=1 return the anchors exactly."""
        assert np.array_equal(cubic_point(P0, P1, P2, P3, t), np.array(expected))

    def test_midpoint(self):
        """Test the midpoint of a symmetric cubic."""
        # (P0 + 3*P1 + 3*P2 + P3) / 8
        assert cubic_point(P0, P1, P2, P3, 0.5) == pytest.approx([2.0, 0.0, 1.5])

    def test_parameter_is_clamped(self):
        """Test parameters outside [0, 1] are clamped."""
        assert evaluate_point(P0, P1, P3, P2, 1.5) == pytest.approx(list(P3))
        assert evaluate_point(P0, P1, P3, P2, -0.5) == pytest.approx(list(P0))

    def test_tangent_at_ends(self):
        """Test the derivative at the ends points along the handles."""
        assert cubic_tangent(P0, P1, P2, P3, 0.0) == pytest.approx([3.0, 0.0, 6.0])
        assert cubic_tangent(P0, P1, P2, P3, 1.0) == pytest.approx([3.0, 0.0, -6.0])

    def test_tangent_matches_finite_difference(self):
        """Test the analytic derivative against a central difference."""
        h = 1e-6
        numeric = (
            evaluate_point(P0, P1, P3, P2, 0.3 + h) - evaluate_point(P0, P1, P3, P2, 0.3 - h)
        ) / (2 * h)
        assert evaluate_tangent(P0, P1, P3, P2, 0.3) == pytest.approx(numeric, rel=1e-5)

    def test_quadratic_tangent_is_degree_aware(self):
        """Test quadratic segments use the quadratic derivative."""
        handle = (2.0, 0.0, 2.0)
        assert evaluate_tangent(P0, handle, P3, P3, 0.0) == pytest.approx([4.0, 0.0, 4.0])

    def test_linear_tangent(self):
        """Test straight segments have a constant derivative."""
        assert evaluate_tangent(P0, P0, P3, P3, 0.7) == pytest.approx([4.0, 0.0, 0.0])


class TestGenericBezier:
    """Test the arbitrary-order Bezier formula."""

    def test_binomial_coefficient(self):
        """Test binomial coefficients."""
        assert [binomial_coefficient(i, 3) for i in range(4)] == [1, 3, 3, 1]
        assert binomial_coefficient(2, 5) == 10

    @pytest.mark.parametrize("t", [0.0, 0.2, 0.5, 0.9, 1.0])
    def test_order_three_matches_cubic(self, t):
        """Test the generic formula agrees with the cubic form."""
        assert bezier_point(t, [P0, P1, P2, P3]) == pytest.approx(
            cubic_point(P0, P1, P2, P3, t)
        )

    def test_order_one_matches_lerp(self):
        """Test the generic formula agrees with linear interpolation."""
        assert bezier_point(0.3, [P0, P3]) == pytest.approx(linear_point(P0, P3, 0.3))

    def test_requires_control_points(self):
        """Test an empty control point list is rejected."""
        with pytest.raises(ValueError, match="control point"):
            bezier_point(0.5, [])


class TestInterpolate:
    """Test segment interpolation."""

    def test_sample_count_and_endpoints(self):
        """Test interpolation returns n+1 samples with exact ends."""
        points = interpolate(P0, P1, P3, P2, 8)
        assert points.shape == (9, 3)
        assert np.array_equal(points[0], np.array(P0))
        assert np.array_equal(points[-1], np.array(P3))

    def test_samples_are_evenly_spaced_in_t(self):
        """Test interior samples follow the local parameter."""
        points = interpolate(P0, P1, P3, P2, 4)
        assert points[2] == pytest.approx(cubic_point(P0, P1, P2, P3, 0.5))

    def test_invalid_sample_count(self):
        """Test at least one piece is required."""
        with pytest.raises(ValueError, match="num_points"):
            interpolate(P0, P1, P3, P2, 0)


class TestSegmentHelpers:
    """Test anchor-based evaluation."""

    def test_segment_point_uses_handles(self):
        """Test segments read handle2 of the start and handle1 of the end."""
        a = AnchorPoint(P0, handle2=(1.0, 0.0, 2.0), handle_style=HandleStyle.FREE)
        b = AnchorPoint(P3, handle1=(-1.0, 0.0, 2.0), handle_style=HandleStyle.FREE)
        assert segment_point(a, b, 0.5) == pytest.approx([2.0, 0.0, 1.5])

    def test_straight_segment_tangent_is_normalized(self):
        """Test handle-less segments return a unit direction."""
        tangent = segment_tangent(AnchorPoint(P0), AnchorPoint(P3), 0.4)
        assert tangent == pytest.approx([1.0, 0.0, 0.0])

    def test_zero_length_straight_segment(self):
        """Test coincident handle-less anchors give a zero tangent."""
        tangent = segment_tangent(AnchorPoint(P0), AnchorPoint(P0), 0.5)
        assert tangent == pytest.approx([0.0, 0.0, 0.0])
