"""
Pydantic data models for shapeblend results.

Everything the engine hands back to a caller flows through these validated
models. Content-based ID generation keeps outputs deterministic.
"""

import hashlib
from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class HybridStatus(str, Enum):
    """Outcome of a hybridization request."""
    OK = "ok"
    NOT_FOUND = "not_found"  # one or both named features are absent
    DEGENERATE = "degenerate"  # features found but geometrically unusable


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class CubicBezier(BaseModel):
    """A single cubic Bezier curve segment."""
    p0: List[float] = Field(..., min_length=2, max_length=2)  # start point
    p1: List[float] = Field(..., min_length=2, max_length=2)  # control point 1
    p2: List[float] = Field(..., min_length=2, max_length=2)  # control point 2
    p3: List[float] = Field(..., min_length=2, max_length=2)  # end point


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class ValidationReport(BaseModel):
    """Collection of validation check results."""
    checks: List[CheckResult] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @property
    def has_errors(self):
        """Check if any errors exist."""
        return any(c.severity == Severity.ERROR and not c.passed for c in self.checks)

    @property
    def error_count(self):
        """Count of failed error-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        """Count of failed warning-level checks."""
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


class HybridResult(BaseModel):
    """
    A hybrid outline ready for rendering or export.

    Points and Bezier segments are in the output frame: centered on the
    origin and sized to the configured target footprint.
    """
    hybrid_id: str
    status: HybridStatus = HybridStatus.OK
    message: str = ""
    names: List[str] = Field(default_factory=list)
    points: List[List[float]] = Field(default_factory=list)
    bezier_segments: List[CubicBezier] = Field(default_factory=list)
    svg_path: str = ""
    rotation: float = 0.0  # radians applied to the second shape
    blend_weight: float = Field(default=0.5, ge=0.0, le=1.0)
    resample_count: int = 0
    bbox: List[float] = Field(default_factory=lambda: [0.0, 0.0, 0.0, 0.0])
    validation: ValidationReport = Field(default_factory=ValidationReport)

    model_config = ConfigDict(extra="forbid")

    @property
    def is_empty(self):
        """True when no renderable path was produced."""
        return not self.svg_path


# ID generation

def generate_hybrid_id(names, resample_count, blend_weight):
    """
    Generate deterministic hybrid ID from the ordered feature names and parameters.

    Order matters: the second shape is aligned onto the first.
    """
    data = f"{':'.join(names)}:{resample_count}:{round(blend_weight, 6)}"
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"hybrid_{h}"


def compute_bbox(points):
    """
    Compute bounding box from a list of [x, y] points.

    Returns [min_x, min_y, max_x, max_y].
    """
    if len(points) == 0:
        return [0.0, 0.0, 0.0, 0.0]

    xs = [float(p[0]) for p in points]
    ys = [float(p[1]) for p in points]
    return [min(xs), min(ys), max(xs), max(ys)]
