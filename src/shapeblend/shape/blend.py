"""
Point-wise blending of two aligned shapes.
"""

import numpy as np


def blend_shapes(a, b, t=0.5):
    """
    Weighted index-wise average (1 - t) * a + t * b.

    t = 0 returns a, t = 1 returns b and 0.5 gives the symmetric midpoint.
    """
    if not 0.0 <= t <= 1.0:
        raise ValueError(f"Blend weight must be within [0, 1], got {t}")

    a = np.asarray(a, dtype=float).reshape(-1, 2)
    b = np.asarray(b, dtype=float).reshape(-1, 2)
    if len(a) != len(b):
        raise ValueError(f"Cannot blend shapes of {len(a)} and {len(b)} points")

    return (1.0 - t) * a + t * b
