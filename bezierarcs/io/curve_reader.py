"""Curve file reading and writing (JSON)."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.models import Curve
from ..curves.migration import upgrade_curve

logger = logging.getLogger(__name__)


def curve_from_mapping(data: Dict[str, Any], name: Optional[str] = None) -> Curve:
    """Build a curve from a stored mapping, upgrading old resolution values.

    Args:
        data: Mapping with ``closed``, ``resolution``, ``version`` and ``points``
        name: Name to use when the mapping carries none

    Returns:
        Curve at the current schema version
    """
    if not isinstance(data, dict):
        raise ValueError(f"Curve data must be a mapping, got {type(data).__name__}")
    if "points" not in data:
        raise ValueError("Curve data has no 'points' entry")

    try:
        curve = Curve.from_dict(data)
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed curve data: {e}")

    if not curve.name and name:
        curve.name = name

    if upgrade_curve(curve):
        logger.info(f"Upgraded curve {curve.name!r} to version {curve.version}")
    return curve


class CurveReader:
    """JSON file reader for stored curves."""

    def __init__(self, file_path: Path) -> None:
        """Initialize curve reader.

        Args:
            file_path: Path to JSON file
        """
        self.file_path = Path(file_path)
        self.data: Optional[Dict[str, Any]] = None

    def load(self) -> None:
        """Load JSON file."""
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                self.data = json.load(f)
            logger.info(f"Loaded curve file: {self.file_path}")
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to load curve file {self.file_path}: {e}")

    def create_curve(self) -> Curve:
        """Create a curve from the loaded data."""
        if self.data is None:
            self.load()
        if self.data is None:
            raise ValueError(f"Curve file {self.file_path} contains no curve data")
        return curve_from_mapping(self.data, name=self.file_path.stem)


def load_curve(file_path: Path) -> Curve:
    """Convenience function to load a curve from a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Curve object (named after the file when the data carries no name)
    """
    reader = CurveReader(file_path)
    reader.load()
    return reader.create_curve()


def save_curve(curve: Curve, file_path: Path) -> None:
    """Write a curve to a JSON file at the current schema version."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(curve.to_dict(), f, indent=2)
        logger.info(f"Saved curve file: {file_path}")
    except OSError as e:
        raise ValueError(f"Failed to save curve file {file_path}: {e}")
