"""
Closed curve synthesis for shapeblend.

Scales a hybrid point sequence to the output footprint and passes a closed
cardinal spline through every point, expressed as cubic Bezier segments and
an SVG path description.
"""

import numpy as np

from shapeblend.models import CubicBezier
from shapeblend.tracer import get_tracer, trace


MIN_CURVE_POINTS = 3


def fit_to_target(points, target_size, fit_fraction=0.85):
    """
    Scale and recenter points so the larger bbox side equals target_size * fit_fraction.

    The bounding-box center lands on the origin. A zero-size box keeps
    unit scale instead of dividing by zero.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(pts) == 0:
        return pts.copy()

    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    extent = float(np.max(maxs - mins)) or 1.0
    scale = (target_size * fit_fraction) / extent
    center = (mins + maxs) / 2

    return (pts - center) * scale


def cardinal_closed_beziers(points, tension=0.5):
    """
    Closed cardinal spline through all points, as cubic Bezier segments.

    Segment i runs from P[i] to P[i+1] (indices wrap), with control points
    P[i] + k * (P[i+1] - P[i-1]) and P[i+1] - k * (P[i+2] - P[i]), where
    k = (1 - tension) / 6. Tension 0 is Catmull-Rom; tension 1 gives
    straight edges.

    Returns:
        list of N CubicBezier objects, or [] for fewer than 3 points
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    n = len(pts)
    if n < MIN_CURVE_POINTS:
        return []

    k = (1.0 - tension) / 6.0

    prev_pts = np.roll(pts, 1, axis=0)
    next_pts = np.roll(pts, -1, axis=0)
    next2_pts = np.roll(pts, -2, axis=0)

    c1 = pts + k * (next_pts - prev_pts)
    c2 = next_pts - k * (next2_pts - pts)

    return [
        CubicBezier(
            p0=pts[i].tolist(),
            p1=c1[i].tolist(),
            p2=c2[i].tolist(),
            p3=next_pts[i].tolist(),
        )
        for i in range(n)
    ]


def _bernstein(i, t):
    """Compute Bernstein basis polynomial value B_i,3(t)."""
    if i == 0:
        return (1 - t) ** 3
    elif i == 1:
        return 3 * (1 - t) ** 2 * t
    elif i == 2:
        return 3 * (1 - t) * t ** 2
    else:
        return t ** 3


def evaluate_bezier(bezier, t):
    """Evaluate a cubic Bezier at parameter t."""
    control = np.array([bezier.p0, bezier.p1, bezier.p2, bezier.p3], dtype=float)
    weights = np.array([_bernstein(i, t) for i in range(4)])
    return (weights @ control).tolist()


def bezier_to_svg_path(beziers, closed=True, precision=2):
    """
    Convert connected CubicBezier segments to an SVG path d attribute.

    Closed paths end with Z so renderers join the final segment back to the
    start.
    """
    if not beziers:
        return ""

    def fmt(p):
        return f"{p[0]:.{precision}f} {p[1]:.{precision}f}"

    parts = [f"M {fmt(beziers[0].p0)}"]
    for bez in beziers:
        parts.append(f"C {fmt(bez.p1)} {fmt(bez.p2)} {fmt(bez.p3)}")
    if closed:
        parts.append("Z")

    return " ".join(parts)


@trace(label="synthesize_curve")
def synthesize_curve(points, target_size, fit_fraction=0.85, tension=0.5, precision=2):
    """
    Turn a hybrid point sequence into a renderable closed curve.

    Args:
        points: (N, 2) hybrid points in normalized units
        target_size: output footprint dimension
        fit_fraction: share of target_size taken by the larger bbox side
        tension: cardinal spline tension
        precision: decimals in the SVG path

    Returns:
        (scaled_points, beziers, svg_path); empty placeholders when N < 3
    """
    tracer = get_tracer()

    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(pts) < MIN_CURVE_POINTS:
        tracer.event(f"Too few points for a closed curve: {len(pts)}", level="WARN")
        return np.zeros((0, 2), dtype=float), [], ""

    scaled = fit_to_target(pts, target_size, fit_fraction)
    beziers = cardinal_closed_beziers(scaled, tension)
    svg_path = bezier_to_svg_path(beziers, closed=True, precision=precision)

    tracer.event(f"Synthesized closed curve with {len(beziers)} segments")

    return scaled, beziers, svg_path
