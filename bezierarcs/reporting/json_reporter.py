"""JSON report generation for arc approximations."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.models import Curve
from ..geometry.arc_approximator import ApproximationResult
from ..geometry.validator import ValidationResult


class JSONReporter:
    """Generate structured JSON reports for arc approximations."""

    def __init__(self, indent: int = 2) -> None:
        """Initialize JSON reporter.

        Args:
            indent: JSON indentation for readable output
        """
        self.indent = indent

    def build_report(
        self,
        curve: Curve,
        result: ApproximationResult,
        validation: Optional[ValidationResult] = None,
    ) -> Dict[str, Any]:
        """Build the report as a plain dictionary."""
        from .. import __version__

        return {
            "metadata": {
                "curve_name": curve.name,
                "analysis_date": datetime.now().isoformat(),
                "generator": "bezierarcs",
                "version": __version__,
            },
            "curve": self._build_curve_summary(curve),
            "approximation": {
                "success": result.success,
                "message": result.message,
                "error_threshold": result.error_threshold,
                "arc_count": result.arc_count,
                "total_arc_length": round(result.total_length, 6),
                "max_fit_error": result.max_fit_error,
            },
            "arcs": [arc.to_dict() for arc in result.arcs],
            "diagnostics": self._build_diagnostics(result),
            "validation": self._build_validation_data(validation),
        }

    def generate_approximation_report(
        self,
        curve: Curve,
        result: ApproximationResult,
        output_path: Path,
        validation: Optional[ValidationResult] = None,
    ) -> None:
        """Generate comprehensive JSON report.

        Args:
            curve: Source curve
            result: Approximation result
            output_path: Output JSON file path
            validation: Optional validation of the arcs
        """
        report = self.build_report(curve, result, validation)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report, f, indent=self.indent, ensure_ascii=False)

    def dumps(
        self,
        curve: Curve,
        result: ApproximationResult,
        validation: Optional[ValidationResult] = None,
    ) -> str:
        """Serialize the report to a JSON string."""
        return json.dumps(
            self.build_report(curve, result, validation),
            indent=self.indent,
            ensure_ascii=False,
        )

    def _build_curve_summary(self, curve: Curve) -> Dict[str, Any]:
        """Build curve summary section."""
        return {
            "anchor_count": curve.point_count,
            "segment_count": curve.segment_count,
            "closed": curve.closed,
            "resolution": curve.resolution,
            "version": curve.version,
            "length": round(curve.length, 6),
        }

    def _build_diagnostics(self, result: ApproximationResult) -> List[Dict[str, Any]]:
        """Build per-window search statistics."""
        return [diagnostic._asdict() for diagnostic in result.diagnostics]

    def _build_validation_data(
        self, validation: Optional[ValidationResult]
    ) -> Optional[Dict[str, Any]]:
        """Build validation section."""
        if validation is None:
            return None

        return {
            "is_valid": validation.is_valid,
            "summary": validation.get_summary(),
            "max_deviation": validation.max_deviation,
            "issues": [
                {
                    "arc_index": issue.arc_index,
                    "type": issue.issue_type,
                    "severity": issue.severity,
                    "message": issue.message,
                    "value": issue.value,
                    "limit": issue.limit,
                }
                for issue in validation.issues
            ],
        }


def generate_json_report(
    curve: Curve,
    result: ApproximationResult,
    output_path: Path,
    validation: Optional[ValidationResult] = None,
) -> None:
    """Convenience function to generate a JSON report.

    Args:
        curve: Source curve
        result: Approximation result
        output_path: Output file path
        validation: Optional validation of the arcs
    """
    JSONReporter().generate_approximation_report(curve, result, output_path, validation)
