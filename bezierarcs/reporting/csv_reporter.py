"""CSV report generation for arc approximations."""

import csv
import math
from datetime import datetime
from pathlib import Path
from typing import IO, Optional

from ..core.models import Curve
from ..geometry.arc_approximator import ApproximationResult


class CSVReporter:
    """Generate CSV tables describing a curve and its arcs."""

    def __init__(self) -> None:
        """Initialize CSV reporter."""
        self.headers = {
            "curve_summary": [
                "Curve Name",
                "Anchor Count",
                "Closed",
                "Resolution",
                "Curve Length",
                "Arc Count",
                "Arc Length",
                "Error Threshold",
                "Max Fit Error",
                "Analysis Date",
                "Status",
            ],
            "arc_details": [
                "Arc Index",
                "t Start",
                "t End",
                "Center U",
                "Center V",
                "Radius",
                "Start Angle (deg)",
                "End Angle (deg)",
                "Sweep (deg)",
                "Direction",
                "Length",
                "Fit Error",
            ],
        }

    def write_arc_details(self, result: ApproximationResult, stream: IO[str]) -> None:
        """Write one row per arc to an open text stream.

        Args:
            result: Approximation result
            stream: Writable text stream
        """
        writer = csv.writer(stream)
        writer.writerow(self.headers["arc_details"])

        for i, arc in enumerate(result.arcs):
            writer.writerow(
                [
                    i,
                    f"{arc.t_start:.6f}",
                    f"{arc.t_end:.6f}",
                    f"{arc.center[0]:.6f}",
                    f"{arc.center[1]:.6f}",
                    f"{arc.radius:.6f}",
                    f"{math.degrees(arc.start_angle):.3f}",
                    f"{math.degrees(arc.end_angle):.3f}",
                    f"{math.degrees(arc.sweep):.3f}",
                    "CW" if arc.clockwise else "CCW",
                    f"{arc.length:.6f}",
                    f"{arc.fit_error:.6f}",
                ]
            )

    def generate_arc_details(self, result: ApproximationResult, output_path: Path) -> None:
        """Generate arc details CSV report.

        Args:
            result: Approximation result
            output_path: Output CSV file path
        """
        with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
            self.write_arc_details(result, csvfile)

    def generate_curve_summary(
        self, curve: Curve, result: ApproximationResult, output_path: Path
    ) -> None:
        """Generate curve summary CSV report.

        Args:
            curve: Source curve
            result: Approximation result
            output_path: Output CSV file path
        """
        with open(output_path, "w", newline="", encoding="utf-8") as csvfile:
            writer = csv.writer(csvfile)

            writer.writerow(self.headers["curve_summary"])
            writer.writerow(
                [
                    curve.name,
                    curve.point_count,
                    "Yes" if curve.closed else "No",
                    f"{curve.resolution:.4f}",
                    f"{curve.length:.6f}",
                    result.arc_count,
                    f"{result.total_length:.6f}",
                    f"{result.error_threshold:.4f}",
                    f"{result.max_fit_error:.6f}",
                    datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                    "OK" if result.success else "PARTIAL",
                ]
            )


def generate_csv_report(
    result: ApproximationResult,
    output_path: Path,
    report_type: str = "arcs",
    curve: Optional[Curve] = None,
) -> None:
    """Convenience function to generate CSV reports.

    Args:
        result: Approximation result
        output_path: Output file path
        report_type: Type of report (arcs, summary)
        curve: Source curve, required for the summary report
    """
    reporter = CSVReporter()

    if report_type == "arcs":
        reporter.generate_arc_details(result, output_path)
    elif report_type == "summary":
        if curve is None:
            raise ValueError("Summary report needs the source curve")
        reporter.generate_curve_summary(curve, result, output_path)
    else:
        raise ValueError(f"Unknown report type: {report_type}")
