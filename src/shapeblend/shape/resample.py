"""
Arc-length resampling of closed rings.

Redistributes a fixed number of points along a ring so consecutive samples
are evenly spaced by path distance, independent of the original vertex
density.
"""

import numpy as np

from shapeblend.tracer import get_tracer, trace


MIN_POINTS = 3


@trace(label="resample_closed")
def resample_closed(ring, n):
    """
    Resample a closed ring to exactly n points evenly spaced by arc length.

    Args:
        ring: sequence of [x, y] points; closed or implicitly closed
        n: number of output points (at least 3)

    Returns:
        (n, 2) float array, or an empty (0, 2) array when the ring has
        fewer than 3 points
    """
    if n < MIN_POINTS:
        raise ValueError(f"Resample count must be at least {MIN_POINTS}, got {n}")

    tracer = get_tracer()

    points = np.asarray(ring, dtype=float).reshape(-1, 2)
    if len(points) < MIN_POINTS:
        tracer.event(f"Ring too short to resample: {len(points)} points", level="WARN")
        return np.zeros((0, 2), dtype=float)

    # Wraparound sampling needs an explicit closing edge
    if not np.array_equal(points[0], points[-1]):
        points = np.vstack([points, points[0]])

    segment_lengths = np.linalg.norm(np.diff(points, axis=0), axis=1)
    cumulative = np.concatenate([[0.0], np.cumsum(segment_lengths)])
    total_length = cumulative[-1]

    if not total_length > 0:
        tracer.event("Ring has zero length, repeating its only point", level="WARN")
        return np.tile(points[0], (n, 1))

    targets = np.arange(n) * (total_length / n)

    # Edge j spans cumulative[j]..cumulative[j + 1]
    idx = np.searchsorted(cumulative, targets, side="right") - 1
    idx = np.clip(idx, 0, len(segment_lengths) - 1)

    seg = segment_lengths[idx]
    safe = np.where(seg > 0, seg, 1.0)
    u = np.where(seg > 0, (targets - cumulative[idx]) / safe, 0.0)
    u = np.clip(u, 0.0, 1.0)[:, None]

    resampled = points[idx] * (1.0 - u) + points[idx + 1] * u

    tracer.event(f"Resampled {len(points)} vertices to {n} points, length={total_length:.3f}")

    return resampled
