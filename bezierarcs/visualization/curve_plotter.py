"""Curve and arc approximation plotting."""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import matplotlib.patches as patches
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from ..config import ARC_APPROXIMATION, PLANE_AXES
from ..core.models import Arc, Curve, HandleStyle
from ..curves.sampling import interpolate_curve


@dataclass
class RenderConfig:
    """Options for a single plot call."""

    draw_curve: bool = True
    draw_interpolated_points: bool = False
    draw_anchors: bool = True
    draw_handles: bool = True
    draw_arcs: bool = True
    draw_arc_centers: bool = False
    plane: str = ARC_APPROXIMATION["plane"]
    resolution: Optional[float] = None  # defaults to the curve's resolution
    figsize: Tuple[float, float] = (11.69, 8.27)
    title: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate render options."""
        if self.plane not in PLANE_AXES:
            raise ValueError(f"Unknown plane {self.plane!r}")


class CurvePlotter:
    """Plotter for Bezier curves and their arc approximations."""

    def __init__(self, config: Optional[RenderConfig] = None):
        """Initialize plotter.

        Args:
            config: Default render options
        """
        self.config = config or RenderConfig()
        self.colors = {
            "curve": "#2E86AB",  # Blue
            "points": "#333333",  # Dark gray
            "anchors": "#592E83",  # Dark purple
            "handles": "#F18F01",  # Orange
            "arcs": ["#C73E1D", "#3B9C3B", "#1F4E9C", "#D4A017", "#A23B72", "#17A2B8"],
            "centers": "#777777",  # Gray
        }

    def _project(self, point: Sequence[float], plane: str) -> Tuple[float, float]:
        u_axis, v_axis = PLANE_AXES[plane]
        return (float(point[u_axis]), float(point[v_axis]))

    def create_figure(self, config: RenderConfig) -> Tuple[Figure, Axes]:
        """Create matplotlib figure and axes."""
        fig, ax = plt.subplots(figsize=config.figsize)
        ax.set_aspect("equal")
        ax.grid(True, alpha=0.3)
        ax.set_xlabel(config.plane[0].upper(), fontsize=12)
        ax.set_ylabel(config.plane[1].upper(), fontsize=12)
        return fig, ax

    def plot_curve(self, ax: Axes, curve: Curve, config: RenderConfig) -> None:
        """Plot the interpolated curve, and optionally its samples."""
        points = [
            self._project(p, config.plane)
            for p in interpolate_curve(curve, config.resolution)
        ]
        x_coords = [p[0] for p in points]
        y_coords = [p[1] for p in points]

        if config.draw_curve:
            ax.plot(
                x_coords,
                y_coords,
                color=self.colors["curve"],
                linewidth=2.0,
                label="Curve",
                alpha=0.7,
            )
        if config.draw_interpolated_points:
            ax.scatter(
                x_coords,
                y_coords,
                s=8,
                color=self.colors["points"],
                label="Interpolated points",
                zorder=4,
            )

    def plot_anchors(self, ax: Axes, curve: Curve, config: RenderConfig) -> None:
        """Plot anchors and, when enabled, their handles."""
        anchors = [self._project(a.position, config.plane) for a in curve]
        if config.draw_anchors and anchors:
            ax.scatter(
                [p[0] for p in anchors],
                [p[1] for p in anchors],
                s=40,
                color=self.colors["anchors"],
                label="Anchors",
                zorder=5,
            )

        if not config.draw_handles:
            return

        for anchor in curve:
            if anchor.handle_style == HandleStyle.NONE:
                continue
            position = self._project(anchor.position, config.plane)
            for handle in (anchor.handle1_position, anchor.handle2_position):
                end = self._project(handle, config.plane)
                ax.plot(
                    [position[0], end[0]],
                    [position[1], end[1]],
                    color=self.colors["handles"],
                    linewidth=1.0,
                    linestyle=":",
                )
                ax.scatter([end[0]], [end[1]], s=12, color=self.colors["handles"])

    def plot_arcs(self, ax: Axes, arcs: List[Arc], config: RenderConfig) -> None:
        """Plot arcs as matplotlib arc patches, cycling colors."""
        palette = self.colors["arcs"]
        for i, arc in enumerate(arcs):
            patch = patches.Arc(
                arc.center,
                2 * arc.radius,
                2 * arc.radius,
                angle=0,
                theta1=math.degrees(arc.start_angle),
                theta2=math.degrees(arc.end_angle),
                color=palette[i % len(palette)],
                linewidth=2.5,
                linestyle="--",
                label="Arcs" if i == 0 else None,
            )
            ax.add_patch(patch)

            if config.draw_arc_centers:
                ax.scatter(
                    [arc.center[0]], [arc.center[1]], s=10, color=self.colors["centers"]
                )

    def plot(
        self,
        curve: Curve,
        arcs: Optional[List[Arc]] = None,
        config: Optional[RenderConfig] = None,
    ) -> Tuple[Figure, Axes]:
        """Plot a curve with its arc approximation.

        Args:
            curve: Curve to plot
            arcs: Optional arc approximation of the curve
            config: Render options for this call (defaults to the plotter's)

        Returns:
            Matplotlib figure and axes
        """
        config = config or self.config
        fig, ax = self.create_figure(config)

        title = config.title
        if title is None and curve.name:
            title = f"Curve: {curve.name}"
        if title:
            ax.set_title(title, fontsize=14, fontweight="bold")

        self.plot_curve(ax, curve, config)
        self.plot_anchors(ax, curve, config)
        if arcs and config.draw_arcs:
            self.plot_arcs(ax, arcs, config)
            ax.autoscale_view()

        handles, labels = ax.get_legend_handles_labels()
        if handles:
            ax.legend(loc="upper right", fontsize=10)

        stats_text = f"Anchors: {curve.point_count}\nLength: {curve.length:.3f}"
        if arcs:
            stats_text += f"\nArcs: {len(arcs)}"
        ax.text(
            0.02,
            0.98,
            stats_text,
            transform=ax.transAxes,
            fontsize=10,
            verticalalignment="top",
        )

        return fig, ax

    def save_plot(
        self, fig: Figure, output_path: Path, dpi: int = 300, format: str = "png"
    ) -> None:
        """Save plot to file.

        Args:
            fig: Matplotlib figure
            output_path: Output file path
            dpi: Resolution for raster formats
            format: Output format (png, svg, pdf)
        """
        fig.savefig(
            output_path,
            dpi=dpi,
            format=format,
            bbox_inches="tight",
            facecolor="white",
            edgecolor="none",
        )


def plot_curve(
    curve: Curve,
    arcs: Optional[List[Arc]] = None,
    output_path: Optional[Path] = None,
    config: Optional[RenderConfig] = None,
) -> Tuple[Figure, Axes]:
    """Convenience function to plot a curve and its arcs.

    Args:
        curve: Curve to plot
        arcs: Optional arc approximation
        output_path: Optional path to save plot
        config: Render options

    Returns:
        Matplotlib figure and axes
    """
    plotter = CurvePlotter(config)
    fig, ax = plotter.plot(curve, arcs)

    if output_path:
        suffix = Path(output_path).suffix.lstrip(".").lower() or "png"
        plotter.save_plot(fig, output_path, format=suffix)

    return fig, ax
