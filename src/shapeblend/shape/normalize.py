"""
Shape normalization: remove position and absolute size.

Shapes are centered on their centroid and scaled to unit RMS radius so a
small island and a continental nation can be compared by shape alone.
"""

from dataclasses import dataclass

import numpy as np

from shapeblend.tracer import get_tracer


DEFAULT_EPS = 1e-6


@dataclass(frozen=True)
class NormalizedShape:
    """Normalized points plus the centroid and scale that produced them."""
    points: np.ndarray
    centroid: np.ndarray
    scale: float

    def __len__(self):
        return len(self.points)

    def denormalize(self, points=None):
        """Map normalized points (default: our own) back to the input frame."""
        pts = self.points if points is None else np.asarray(points, dtype=float)
        return pts * self.scale + self.centroid


def normalize_shape(points, eps=DEFAULT_EPS):
    """
    Center points on their centroid and scale to unit RMS radius.

    An RMS radius below eps is replaced by eps, so fully coincident points
    normalize to the origin instead of dividing by zero.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)

    if len(pts) == 0:
        return NormalizedShape(points=pts.copy(), centroid=np.zeros(2), scale=eps)

    centroid = pts.mean(axis=0)
    centered = pts - centroid
    rms = float(np.sqrt(np.mean(np.sum(centered ** 2, axis=1))))

    if rms < eps:
        get_tracer().event(f"RMS radius {rms:.3g} below eps, clamping", level="WARN")
        rms = eps

    return NormalizedShape(points=centered / rms, centroid=centroid, scale=rms)


def rms_radius(points):
    """Root-mean-square distance of points from the origin."""
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(pts) == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.sum(pts ** 2, axis=1))))
