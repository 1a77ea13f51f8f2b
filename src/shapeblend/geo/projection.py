"""
Planar map projections for shapeblend.

Each projection maps (longitude, latitude) in degrees to screen-oriented
planar coordinates (y grows downward). Both shapes of a hybrid must go
through the same projection so they share one planar frame.
"""

import math

import numpy as np

from shapeblend.tracer import get_tracer


def natural_earth1_raw(lam, phi):
    """Natural Earth I projection on radians, unit sphere."""
    phi2 = phi * phi
    phi4 = phi2 * phi2
    x = lam * (0.8707 - 0.131979 * phi2 + phi4 * (-0.013791 + phi4 * (0.003971 * phi2 - 0.001529 * phi4)))
    y = phi * (1.007226 + phi2 * (0.015085 + phi4 * (-0.044475 + 0.028874 * phi2 - 0.005916 * phi4)))
    return x, y


_EE_A1 = 1.340264
_EE_A2 = -0.081106
_EE_A3 = 0.000893
_EE_A4 = 0.003796
_EE_M = math.sqrt(3) / 2


def equal_earth_raw(lam, phi):
    """Equal Earth projection on radians, unit sphere."""
    l = np.arcsin(_EE_M * np.sin(phi))
    l2 = l * l
    l6 = l2 * l2 * l2
    x = lam * np.cos(l) / (_EE_M * (_EE_A1 + 3 * _EE_A2 * l2 + l6 * (7 * _EE_A3 + 9 * _EE_A4 * l2)))
    y = l * (_EE_A1 + _EE_A2 * l2 + l6 * (_EE_A3 + _EE_A4 * l2))
    return x, y


def equirectangular_raw(lam, phi):
    """Plate carree: radians map straight to planar units."""
    return lam, phi


RAW_PROJECTIONS = {
    "natural_earth1": natural_earth1_raw,
    "equal_earth": equal_earth_raw,
    "equirectangular": equirectangular_raw,
}


class Projection:
    """
    A scaled, translated projection callable as project(lon, lat) -> (x, y).

    Accepts scalars or numpy arrays. Instances are never mutated; sizing
    methods return new projections.
    """

    def __init__(self, raw, scale=150.0, translate=(480.0, 250.0), name=""):
        self.raw = raw
        self.scale = float(scale)
        self.translate = (float(translate[0]), float(translate[1]))
        self.name = name

    def __call__(self, lon, lat):
        lam = np.radians(lon)
        phi = np.radians(lat)
        rx, ry = self.raw(lam, phi)
        x = self.translate[0] + self.scale * rx
        y = self.translate[1] - self.scale * ry

        if np.ndim(x) == 0:
            return float(x), float(y)
        return x, y

    def __repr__(self):
        return f"Projection(name={self.name!r}, scale={self.scale:.3f}, translate={self.translate})"

    def sphere_bounds(self, samples=181):
        """Raw-space bounds [min_x, min_y, max_x, max_y] of the whole sphere outline."""
        phi = np.linspace(-math.pi / 2, math.pi / 2, samples)
        lam = np.concatenate([np.full(samples, -math.pi), np.full(samples, math.pi)])
        xs, ys = self.raw(lam, np.concatenate([phi, phi]))
        return [float(np.min(xs)), float(np.min(ys)), float(np.max(xs)), float(np.max(ys))]

    def fit_extent(self, width, height, padding=0.0):
        """
        Return a copy scaled and centered so the sphere fits the extent.

        The fitted sphere sits inside [padding, width - padding] x
        [padding, height - padding].
        """
        min_x, min_y, max_x, max_y = self.sphere_bounds()
        avail_w = width - 2 * padding
        avail_h = height - 2 * padding
        if avail_w <= 0 or avail_h <= 0:
            raise ValueError(f"Extent {width}x{height} too small for padding {padding}")

        scale = min(avail_w / (max_x - min_x), avail_h / (max_y - min_y))
        mid_x = (min_x + max_x) / 2
        mid_y = (min_y + max_y) / 2
        translate = (width / 2 - scale * mid_x, height / 2 + scale * mid_y)

        return Projection(self.raw, scale=scale, translate=translate, name=self.name)


def natural_earth1(scale=175.295, translate=(480.0, 250.0)):
    return Projection(natural_earth1_raw, scale, translate, name="natural_earth1")


def equal_earth(scale=177.158, translate=(480.0, 250.0)):
    return Projection(equal_earth_raw, scale, translate, name="equal_earth")


def equirectangular(scale=152.63, translate=(480.0, 250.0)):
    return Projection(equirectangular_raw, scale, translate, name="equirectangular")


def make_projection(config):
    """
    Build the projection described by a ProjectionConfig, fitted to its extent.
    """
    name = config.name
    if name not in RAW_PROJECTIONS:
        raise ValueError(f"Unknown projection: {name!r} (expected one of {sorted(RAW_PROJECTIONS)})")

    base = Projection(RAW_PROJECTIONS[name], name=name)
    projection = base.fit_extent(config.width, config.height, config.padding)

    get_tracer().event(f"Projection ready: {projection!r}", level="DEBUG")

    return projection
