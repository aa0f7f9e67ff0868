"""Pytest configuration and fixtures."""

import json
from pathlib import Path

import pytest

from bezierarcs.core.models import AnchorPoint, Curve, HandleStyle

# Handle length that makes a cubic Bezier match a unit quarter circle at t = 0.5
KAPPA = 0.5522847498


@pytest.fixture
def quarter_circle_curve() -> Curve:
    """Return a single cubic segment tracing a unit quarter circle in the XZ plane."""
    return Curve(
        [
            AnchorPoint((1.0, 0.0, 0.0), handle2=(0.0, 0.0, KAPPA), handle_style=HandleStyle.FREE),
            AnchorPoint((0.0, 0.0, 1.0), handle1=(KAPPA, 0.0, 0.0), handle_style=HandleStyle.FREE),
        ],
        name="quarter",
    )


@pytest.fixture
def collinear_curve() -> Curve:
    """Return three collinear handle-less anchors."""
    return Curve(
        [
            AnchorPoint((0.0, 0.0, 0.0)),
            AnchorPoint((1.0, 0.0, 0.0)),
            AnchorPoint((2.0, 0.0, 0.0)),
        ],
        name="line",
    )


@pytest.fixture
def closed_square() -> Curve:
    """Return a closed unit square made of straight segments."""
    return Curve(
        [
            AnchorPoint((0.0, 0.0, 0.0)),
            AnchorPoint((1.0, 0.0, 0.0)),
            AnchorPoint((1.0, 0.0, 1.0)),
            AnchorPoint((0.0, 0.0, 1.0)),
        ],
        closed=True,
        name="square",
    )


@pytest.fixture
def s_curve() -> Curve:
    """Return a cubic S-shaped segment with an inflection at t = 0.5."""
    return Curve(
        [
            AnchorPoint((0.0, 0.0, 0.0), handle2=(2.0, 0.0, 0.0), handle_style=HandleStyle.FREE),
            AnchorPoint((4.0, 0.0, 4.0), handle1=(-2.0, 0.0, 0.0), handle_style=HandleStyle.FREE),
        ],
        name="s-curve",
    )


@pytest.fixture
def legacy_curve_data() -> dict:
    """Return a stored curve without a version key (per-segment resolution)."""
    return {
        "name": "legacy",
        "closed": False,
        "resolution": 30,
        "points": [
            {"position": [0.0, 0.0, 0.0]},
            {"position": [2.0, 0.0, 0.0]},
            {"position": [5.0, 0.0, 0.0]},
        ],
    }


@pytest.fixture
def curve_file(tmp_path: Path, quarter_circle_curve: Curve) -> Path:
    """Write the quarter circle curve to a JSON file and return its path."""
    path = tmp_path / "quarter.json"
    path.write_text(json.dumps(quarter_circle_curve.to_dict()), encoding="utf-8")
    return path
