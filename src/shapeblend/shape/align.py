"""
Rotation alignment of two index-corresponding point clouds.

Closed-form least-squares rotation (no scaling, no reflection). The second
shape is always rotated into the first shape's frame, so swapping the
operands can give a visibly different hybrid.
"""

import math

import numpy as np

from shapeblend.tracer import get_tracer


def _check_pair(a, b):
    a = np.asarray(a, dtype=float).reshape(-1, 2)
    b = np.asarray(b, dtype=float).reshape(-1, 2)
    if len(a) != len(b):
        raise ValueError(f"Point sequences differ in length: {len(a)} vs {len(b)}")
    return a, b


def rotation_offset(a, b):
    """
    Estimated angle by which b sits rotated relative to a: atan2(S, C).

    S sums the cross terms (a.x * b.y - a.y * b.x) and C the dot terms over
    paired points. All-zero clouds give atan2(0, 0) = 0.
    """
    a, b = _check_pair(a, b)

    s = float(np.sum(a[:, 0] * b[:, 1] - a[:, 1] * b[:, 0]))
    c = float(np.sum(a[:, 0] * b[:, 0] + a[:, 1] * b[:, 1]))

    return math.atan2(s, c)


def optimal_rotation_angle(a, b):
    """
    Least-squares rotation that carries b onto a.

    This undoes rotation_offset: rotating b by the returned angle minimizes
    the summed squared distance between paired points.
    """
    offset = rotation_offset(a, b)
    return -offset if offset else 0.0


def rotate_points(points, theta):
    """Rotate points about the origin by theta radians; returns a new array."""
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    ct = math.cos(theta)
    st = math.sin(theta)
    rotation = np.array([[ct, st], [-st, ct]])
    # Row vectors: [x, y] @ R gives (x*ct - y*st, x*st + y*ct)
    return pts @ rotation


def align_onto(a, b):
    """
    Rotate b into a's frame.

    Returns:
        (a, rotated_b, theta); a is returned as-is
    """
    a, b = _check_pair(a, b)

    theta = optimal_rotation_angle(a, b)
    rotated = rotate_points(b, theta)

    get_tracer().event(f"Rotation applied to second shape: {math.degrees(theta):.2f} deg")

    return a, rotated, theta
