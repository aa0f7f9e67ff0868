"""Visualization functionality for curves and arc approximations."""

from .curve_plotter import CurvePlotter, RenderConfig, plot_curve

__all__ = [
    "CurvePlotter",
    "RenderConfig",
    "plot_curve",
]
