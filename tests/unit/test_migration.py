"""Unit tests for legacy resolution migration."""

import pytest

from bezierarcs.config import CURRENT_SCHEMA_VERSION
from bezierarcs.core.models import AnchorPoint, Curve
from bezierarcs.curves.migration import (
    migrate_resolution,
    shortest_segment_length,
    upgrade_curve,
)
from bezierarcs.io.curve_reader import curve_from_mapping


class TestMigrateResolution:
    """Test the resolution conversion formula."""

    def test_samples_per_segment_to_per_unit_length(self):
        """Test 30 samples over a shortest segment of 2.0 gives 15 per unit."""
        assert migrate_resolution(30, 2.0) == pytest.approx(15.0)

    @pytest.mark.parametrize("shortest", [0.0, -1.0])
    def test_rejects_non_positive_length(self, shortest):
        """Test a degenerate shortest segment is rejected."""
        with pytest.raises(ValueError, match="must be positive"):
            migrate_resolution(30, shortest)


class TestShortestSegment:
    """Test shortest segment measurement."""

    def test_ignores_closing_segment(self):
        """Test the closing segment of a closed curve is not measured."""
        curve = Curve(
            [AnchorPoint((0, 0, 0)), AnchorPoint((3, 0, 0)), AnchorPoint((3, 0, 0.5))],
            closed=True,
        )
        assert shortest_segment_length(curve) == pytest.approx(0.5)

        curve = Curve(
            [AnchorPoint((0, 0, 0)), AnchorPoint((3, 0, 0)), AnchorPoint((0.5, 0, 0))],
            closed=True,
        )
        assert shortest_segment_length(curve) == pytest.approx(2.5)

    def test_skips_zero_length_segments(self):
        """Test coincident anchors do not count as the shortest segment."""
        curve = Curve(
            [AnchorPoint((0, 0, 0)), AnchorPoint((0, 0, 0)), AnchorPoint((2, 0, 0))]
        )
        assert shortest_segment_length(curve) == pytest.approx(2.0)

    def test_all_zero_length(self):
        """Test a curve without measurable segments is rejected."""
        curve = Curve([AnchorPoint((1, 0, 0)), AnchorPoint((1, 0, 0))])
        with pytest.raises(ValueError, match="positive length"):
            shortest_segment_length(curve)


class TestUpgradeCurve:
    """Test the one-time curve upgrade."""

    def test_upgrades_once(self, legacy_curve_data):
        """Test a version 1 curve is migrated and then left alone."""
        curve = Curve.from_dict(legacy_curve_data)

        assert upgrade_curve(curve) is True
        assert curve.resolution == pytest.approx(15.0)
        assert curve.version == CURRENT_SCHEMA_VERSION

        assert upgrade_curve(curve) is False
        assert curve.resolution == pytest.approx(15.0)

    def test_current_curve_is_untouched(self, collinear_curve):
        """Test curves at the current version keep their resolution."""
        resolution = collinear_curve.resolution
        assert upgrade_curve(collinear_curve) is False
        assert collinear_curve.resolution == resolution

    def test_loading_legacy_mapping_upgrades(self, legacy_curve_data):
        """Test the reader runs the migration on load."""
        curve = curve_from_mapping(legacy_curve_data)
        assert curve.version == CURRENT_SCHEMA_VERSION
        assert curve.resolution == pytest.approx(15.0)

    def test_loading_current_mapping_keeps_resolution(self, legacy_curve_data):
        """Test mappings at the current version are not migrated."""
        legacy_curve_data["version"] = CURRENT_SCHEMA_VERSION
        curve = curve_from_mapping(legacy_curve_data)
        assert curve.resolution == pytest.approx(30.0)
