"""Command-line interface for bezierarcs."""

import io
import json
import logging
import math
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import ARC_APPROXIMATION, PLANE_AXES
from .core.exceptions import BezierArcsError
from .curves.parametrizer import GlobalParametrizer
from .geometry import ApproximationValidator, ArcApproximator
from .io import export_arcs_to_dxf, load_curve, save_curve
from .reporting import CSVReporter, JSONReporter


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(verbose: bool) -> None:
    """Bezier arcs - Bezier curve evaluation and circular arc approximation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("curve_file", type=click.Path(exists=True))
@click.option("--resolution", type=float, help="Samples per unit length override")
def length(curve_file: str, resolution: Optional[float]) -> None:
    """Print the approximate length of a curve."""
    try:
        curve = load_curve(Path(curve_file))
        if resolution is not None:
            curve.resolution = resolution
        click.echo(f"{curve.length:.6f}")
    except (BezierArcsError, ValueError) as e:
        raise click.ClickException(f"Failed to measure curve: {e}")


@main.command()
@click.argument("curve_file", type=click.Path(exists=True))
@click.argument("t", type=float)
@click.option("--tangent", is_flag=True, help="Also print the tangent at t")
def point(curve_file: str, t: float, tangent: bool) -> None:
    """Print the point at global parameter T (0 to 1)."""
    try:
        curve = load_curve(Path(curve_file))
        parametrizer = GlobalParametrizer(curve)
        location = parametrizer.locate(t)
        position = parametrizer.point_at(t)

        click.echo(" ".join(f"{v:.6f}" for v in position))
        if tangent:
            direction = parametrizer.tangent_at(t)
            click.echo(" ".join(f"{v:.6f}" for v in direction))
        logging.getLogger(__name__).debug(
            f"t={t} maps to segment {location.index} at local t={location.local_t:.6f}"
        )
    except (BezierArcsError, ValueError) as e:
        raise click.ClickException(f"Failed to evaluate curve: {e}")


def _text_report(curve, result, validation) -> str:
    lines = [
        f"Curve: {curve.name or '(unnamed)'}",
        f"  Anchors: {curve.point_count} ({'closed' if curve.closed else 'open'})",
        f"  Length: {curve.length:.6f}",
        f"Approximation: {result.message}",
        f"  Error threshold: {result.error_threshold}",
        f"  Arcs: {result.arc_count}",
        f"  Max fit error: {result.max_fit_error:.6f}",
    ]
    for i, arc in enumerate(result.arcs):
        lines.append(
            f"    {i}: t=[{arc.t_start:.4f}, {arc.t_end:.4f}] "
            f"center=({arc.center[0]:.4f}, {arc.center[1]:.4f}) "
            f"r={arc.radius:.4f} "
            f"angles=[{math.degrees(arc.start_angle):.2f}, "
            f"{math.degrees(arc.end_angle):.2f}] "
            f"{'CW' if arc.clockwise else 'CCW'}"
        )
    if validation is not None:
        lines.append(f"Validation: {validation.get_summary()}")
        for issue in validation.issues:
            if issue.severity != "info":
                lines.append(f"  [{issue.severity}] {issue.message}")
    return "\n".join(lines)


@main.command()
@click.argument("curve_file", type=click.Path(exists=True))
@click.option(
    "--error",
    "error_threshold",
    type=float,
    default=ARC_APPROXIMATION["error_threshold"],
    help="Maximum fit error per arc",
)
@click.option(
    "--plane",
    type=click.Choice(sorted(PLANE_AXES)),
    default=ARC_APPROXIMATION["plane"],
    help="Fitting plane",
)
@click.option(
    "--format",
    type=click.Choice(["text", "csv", "json"]),
    default="text",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Report output file")
@click.option("--dxf", type=click.Path(), help="Export curve and arcs to DXF")
@click.option("--plot", type=click.Path(), help="Save a plot (png, svg, pdf)")
def approximate(
    curve_file: str,
    error_threshold: float,
    plane: str,
    format: str,
    output: Optional[str],
    dxf: Optional[str],
    plot: Optional[str],
) -> None:
    """Approximate a curve by circular arcs."""
    try:
        curve = load_curve(Path(curve_file))

        approximator = ArcApproximator(plane=plane)
        result = approximator.approximate(curve, error_threshold)

        validator = ApproximationValidator(
            error_threshold=result.error_threshold, plane=plane
        )
        validation = validator.validate(result.arcs, curve) if result.arcs else None

        if format == "json":
            report = JSONReporter().dumps(curve, result, validation)
        elif format == "csv":
            buffer = io.StringIO()
            CSVReporter().write_arc_details(result, buffer)
            report = buffer.getvalue()
        else:
            report = _text_report(curve, result, validation)

        if output:
            output_path = Path(output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w", newline="", encoding="utf-8") as f:
                f.write(report)
            click.echo(f"Report saved to: {output_path}")
        else:
            click.echo(report)

        if dxf:
            export_arcs_to_dxf(curve, result.arcs, Path(dxf), plane=plane)
            click.echo(f"DXF saved to: {dxf}")

        if plot:
            from .visualization import RenderConfig, plot_curve

            plot_curve(curve, result.arcs, Path(plot), RenderConfig(plane=plane))
            click.echo(f"Plot saved to: {plot}")

    except (BezierArcsError, ValueError) as e:
        raise click.ClickException(f"Failed to approximate curve: {e}")

    if not result.success:
        raise click.ClickException(f"Approximation incomplete: {result.message}")


@main.command()
@click.argument("curve_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output curve file")
def migrate(curve_file: str, output: Optional[str]) -> None:
    """Upgrade a stored curve to the current schema version."""
    try:
        curve = load_curve(Path(curve_file))
        with open(curve_file, "r", encoding="utf-8") as f:
            stored_version = json.load(f).get("version", 1)

        if stored_version == curve.version:
            click.echo(f"Curve already at version {curve.version}", err=True)
        else:
            click.echo(
                f"Migrated curve from version {stored_version} to {curve.version} "
                f"(resolution {curve.resolution:.6f})",
                err=True,
            )

        if output:
            save_curve(curve, Path(output))
            click.echo(f"Curve saved to: {output}")
        else:
            click.echo(json.dumps(curve.to_dict(), indent=2))

    except (BezierArcsError, ValueError, OSError) as e:
        raise click.ClickException(f"Failed to migrate curve: {e}")


if __name__ == "__main__":
    main()
