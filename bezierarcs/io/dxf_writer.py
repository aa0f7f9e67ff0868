"""DXF file writing functionality."""

import logging
import math
from pathlib import Path
from typing import List, Optional

import ezdxf
from ezdxf.layouts import Modelspace

from ..config import ARC_APPROXIMATION, PLANE_AXES
from ..core.models import Arc, Curve
from ..curves.sampling import interpolate_curve

logger = logging.getLogger(__name__)


class DXFWriter:
    """DXF file writer for curves and their arc approximations."""

    def __init__(self, dxf_version: str = "R2010", plane: Optional[str] = None) -> None:
        """Initialize DXF writer.

        Args:
            dxf_version: DXF version to use (default R2010 for compatibility)
            plane: Projection plane used for curve geometry
        """
        self.plane = plane or ARC_APPROXIMATION["plane"]
        if self.plane not in PLANE_AXES:
            raise ValueError(f"Unknown plane {self.plane!r}")
        self.doc = ezdxf.new(dxf_version)
        self.msp: Modelspace = self.doc.modelspace()
        self._setup_layers()

    def _setup_layers(self) -> None:
        """Setup standard layers for curve output."""
        layers_config = {
            "CURVE": {"color": 7, "linetype": "CONTINUOUS"},  # White
            "ARCS": {"color": 1, "linetype": "CONTINUOUS"},  # Red
            "ARC_CENTERS": {"color": 4, "linetype": "CONTINUOUS"},  # Cyan
            "ANCHORS": {"color": 5, "linetype": "CONTINUOUS"},  # Blue
        }

        for layer_name, properties in layers_config.items():
            layer = self.doc.layers.add(layer_name)
            layer.color = properties["color"]
            layer.linetype = properties["linetype"]

        logger.info(f"Created {len(layers_config)} standard layers")

    def _project(self, point) -> tuple:
        u_axis, v_axis = PLANE_AXES[self.plane]
        return (float(point[u_axis]), float(point[v_axis]))

    def write_curve(
        self, curve: Curve, layer_name: str = "CURVE", resolution: Optional[float] = None
    ) -> None:
        """Write the interpolated curve as a lightweight polyline.

        Args:
            curve: Curve to write
            layer_name: Layer name for curve geometry
            resolution: Samples per unit length (defaults to the curve's own)
        """
        points = [self._project(p) for p in interpolate_curve(curve, resolution)]
        polyline = self.msp.add_lwpolyline(points)
        polyline.dxf.layer = layer_name

        logger.info(f"Wrote curve polyline with {len(points)} vertices to {layer_name}")

    def write_arcs(
        self,
        arcs: List[Arc],
        layer_name: str = "ARCS",
        include_centers: bool = False,
        marker_size: float = 0.05,
    ) -> None:
        """Write arcs as DXF ARC entities.

        DXF arcs run counter-clockwise from start to end angle, which is the
        stored angle order regardless of traversal direction.

        Args:
            arcs: Arcs to write
            layer_name: Layer name for arcs
            include_centers: Whether to mark each arc center
            marker_size: Radius of the center markers
        """
        for arc in arcs:
            self.msp.add_arc(
                center=arc.center,
                radius=arc.radius,
                start_angle=math.degrees(arc.start_angle),
                end_angle=math.degrees(arc.end_angle),
                dxfattribs={"layer": layer_name},
            )
            if include_centers:
                self.msp.add_circle(
                    center=arc.center,
                    radius=marker_size,
                    dxfattribs={"layer": "ARC_CENTERS"},
                )

        logger.info(f"Wrote {len(arcs)} arcs to layer {layer_name}")

    def write_anchor_markers(
        self, curve: Curve, layer_name: str = "ANCHORS", marker_size: float = 0.1
    ) -> None:
        """Write circle markers at the curve's anchor points.

        Args:
            curve: Curve whose anchors are marked
            layer_name: Layer name for anchor markers
            marker_size: Radius of the markers
        """
        for anchor in curve:
            self.msp.add_circle(
                center=self._project(anchor.position),
                radius=marker_size,
                dxfattribs={"layer": layer_name},
            )

        logger.info(f"Added {curve.point_count} anchor markers")

    def save(self, file_path: Path) -> None:
        """Save DXF file to disk.

        Args:
            file_path: Output file path
        """
        try:
            self.doc.saveas(str(file_path))
            logger.info(f"Saved DXF file: {file_path}")
        except Exception as e:
            raise ValueError(f"Failed to save DXF file {file_path}: {e}")


def export_arcs_to_dxf(
    curve: Curve,
    arcs: List[Arc],
    file_path: Path,
    plane: Optional[str] = None,
    include_anchors: bool = True,
    include_centers: bool = False,
) -> None:
    """Convenience function to export a curve and its arcs to a DXF file.

    Args:
        curve: Source curve
        arcs: Arc approximation of the curve
        file_path: Output file path
        plane: Projection plane the arcs were fitted on
        include_anchors: Whether to include anchor markers
        include_centers: Whether to include arc center markers
    """
    writer = DXFWriter(plane=plane)

    writer.write_curve(curve)
    writer.write_arcs(arcs, include_centers=include_centers)

    if include_anchors:
        writer.write_anchor_markers(curve)

    writer.save(file_path)
