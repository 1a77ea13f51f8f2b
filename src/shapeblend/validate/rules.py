"""
Validation rules for shapeblend.

Sanity checks on a finished hybrid before it is handed to a renderer.
"""

import numpy as np
from shapely.geometry import Polygon
from shapely.validation import explain_validity

from shapeblend.models import CheckResult, Severity, ValidationReport
from shapeblend.tracer import get_tracer, trace


CLOSURE_TOLERANCE = 1e-6


@trace(label="run_validation")
def run_validation(result, config):
    """
    Run all validation checks on a hybrid result.

    Returns ValidationReport with all check results.
    """
    tracer = get_tracer()

    checks = [
        check_path_closed(result),
        check_point_count(result, config),
        check_self_intersection(result),
        check_footprint(result, config),
    ]

    report = ValidationReport(checks=checks)

    tracer.event(f"Validation complete: {report.error_count} errors, {report.warning_count} warnings")

    return report


def check_path_closed(result):
    """The last Bezier segment must end where the first one starts."""
    segments = result.bezier_segments
    if not segments:
        return CheckResult(
            rule_id="path_closed",
            severity=Severity.ERROR,
            passed=False,
            message="Hybrid has no curve segments",
            evidence={"segments": 0},
        )

    gap = float(np.linalg.norm(np.subtract(segments[-1].p3, segments[0].p0)))
    passed = gap <= CLOSURE_TOLERANCE and result.svg_path.rstrip().endswith("Z")

    return CheckResult(
        rule_id="path_closed",
        severity=Severity.ERROR,
        passed=passed,
        message="Curve closes on its start point" if passed else f"Curve left open (gap {gap:.3g})",
        evidence={"segments": len(segments), "gap": gap},
    )


def check_point_count(result, config):
    expected = config.resample.count
    actual = len(result.points)

    return CheckResult(
        rule_id="point_count",
        severity=Severity.ERROR,
        passed=actual == expected,
        message=f"Hybrid has {actual} points (expected {expected})",
        evidence={"expected": expected, "actual": actual},
    )


def check_self_intersection(result):
    """
    Warn when the hybrid outline crosses itself.

    Crossings usually mean the inputs paired points poorly (bowtie blends);
    the outline is still rendered as-is.
    """
    if len(result.points) < 3:
        return CheckResult(
            rule_id="self_intersection",
            severity=Severity.WARN,
            passed=False,
            message="Too few points to form an outline",
            evidence={"points": len(result.points)},
        )

    polygon = Polygon(result.points)
    passed = polygon.is_valid

    return CheckResult(
        rule_id="self_intersection",
        severity=Severity.WARN,
        passed=passed,
        message="Outline is simple" if passed else f"Outline self-intersects: {explain_validity(polygon)}",
        evidence={"area": float(polygon.area)},
    )


def check_footprint(result, config):
    """The point bbox must fit inside the configured target size."""
    target = config.output.target_size
    min_x, min_y, max_x, max_y = result.bbox
    extent = max(max_x - min_x, max_y - min_y)
    passed = extent <= target * (1 + 1e-9)

    return CheckResult(
        rule_id="footprint",
        severity=Severity.WARN,
        passed=passed,
        message=f"Footprint {extent:.2f} within target {target:.2f}" if passed
        else f"Footprint {extent:.2f} exceeds target {target:.2f}",
        evidence={"extent": extent, "target": target},
    )
