"""
Validation report generation for shapeblend.

Writes the checks attached to a hybrid as JSON plus a plain-text summary.
"""

import os

from shapeblend.io.save_artifacts import ensure_dir, save_json
from shapeblend.models import Severity
from shapeblend.tracer import get_tracer, trace


def format_check_result(check):
    """Format a single check result for display."""
    status = "PASS" if check.passed else "FAIL"
    severity = check.severity.value.upper()
    return f"[{status}][{severity}] {check.rule_id}: {check.message}"


def format_summary(result):
    """Human-readable summary of a hybrid and its validation checks."""
    report = result.validation
    failed = [c for c in report.checks if not c.passed]

    lines = [
        "shapeblend Validation Report",
        "=" * 40,
        "",
        f"Hybrid: {result.hybrid_id}",
        f"Shapes: {' + '.join(result.names) or '-'}",
        f"Status: {result.status.value}",
    ]
    if result.message:
        lines.append(f"Message: {result.message}")
    lines += [
        "",
        f"Total checks: {len(report.checks)}",
        f"Passed: {len(report.checks) - len(failed)}",
        f"Failed: {len(failed)}",
        "",
    ]

    if failed:
        lines.append("ISSUES:")
        lines.append("-" * 40)
        for check in failed:
            mark = "[ERROR]" if check.severity == Severity.ERROR else "[WARN]"
            lines.append(f"{mark} {check.rule_id}: {check.message}")
        lines.append("")

    lines.append("ALL CHECKS:")
    lines.append("-" * 40)
    lines.extend(format_check_result(c) for c in report.checks)

    return "\n".join(lines)


@trace(label="generate_report")
def generate_report(result, out_dir):
    """
    Generate validation report files.

    Creates:
    - validation_report.json: full check results
    - validation_summary.txt: human-readable summary

    Returns:
        (report_path, summary_path)
    """
    tracer = get_tracer()

    report_path = os.path.join(out_dir, "validation_report.json")
    save_json(result.validation, report_path)

    summary_path = os.path.join(out_dir, "validation_summary.txt")
    ensure_dir(out_dir)
    with open(summary_path, "w", encoding="utf-8") as f:
        f.write(format_summary(result))

    tracer.event(f"Report saved: {len(result.validation.checks)} checks, {result.validation.error_count} errors")

    return report_path, summary_path
