"""Pytest fixtures for shapeblend tests."""

import json
import math
import os
import tempfile

import numpy as np
import pytest


def regular_polygon(sides, radius=1.0, center=(0.0, 0.0), phase=0.0):
    """Vertices of a regular polygon, counter-clockwise, not closed."""
    angles = phase + np.arange(sides) * (2 * math.pi / sides)
    return np.column_stack([
        center[0] + radius * np.cos(angles),
        center[1] + radius * np.sin(angles),
    ])


def make_feature(name, rings, multi=False, name_key="name"):
    """Build a GeoJSON Feature from a list of rings (each a list of [lon, lat])."""
    rings = [[list(map(float, p)) for p in ring] for ring in rings]
    if multi:
        geometry = {"type": "MultiPolygon", "coordinates": [[ring] for ring in rings]}
    else:
        geometry = {"type": "Polygon", "coordinates": rings}
    return {"type": "Feature", "properties": {name_key: name}, "geometry": geometry}


def identity_projection(lon, lat):
    return float(lon), float(lat)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def unit_square():
    """Closed unit square, counter-clockwise."""
    return np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)


@pytest.fixture
def fine_circle():
    """Radius-10 circle approximated by 2000 vertices."""
    return regular_polygon(2000, radius=10.0)


@pytest.fixture
def irregular_ring():
    """An asymmetric, non-convex outline with no rotational symmetry."""
    return np.array([
        [0, 0], [4, 0], [5, 1], [4, 3], [2, 2.5], [1, 4], [-1, 2],
    ], dtype=float)


@pytest.fixture
def sample_features():
    """A few small lon/lat features near the equator."""
    square = [[10, 0], [15, 0], [15, 5], [10, 5], [10, 0]]
    triangle = [[20, -5], [30, -5], [24, 6], [20, -5]]
    octagon = regular_polygon(8, radius=4.0, center=(-20.0, 10.0)).tolist()
    octagon.append(octagon[0])
    lake = [[11, 1], [12, 1], [12, 2], [11, 2], [11, 1]]
    islet = [[40, 40], [40.1, 40], [40.1, 40.1], [40, 40]]

    return [
        make_feature("Squareland", [square, lake]),
        make_feature("Trianglia", [triangle]),
        make_feature("Octagonia", [octagon, islet], multi=True),
        make_feature("Côte Pointe", [[[0, 0], [0, 0], [0, 0]]]),
        {"type": "Feature", "properties": {"name": "Nowhere"}, "geometry": None},
    ]


@pytest.fixture
def geojson_file(temp_dir, sample_features):
    """Sample features written as a FeatureCollection file."""
    path = os.path.join(temp_dir, "regions.geojson")
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"type": "FeatureCollection", "features": sample_features}, f)
    return path


@pytest.fixture
def default_config():
    """Create default engine configuration."""
    from shapeblend.config import HybridConfig
    return HybridConfig()


@pytest.fixture
def small_config():
    """Configuration with a low resample count for quick, checkable runs."""
    from shapeblend.config import HybridConfig
    config = HybridConfig()
    config.resample.count = 32
    return config
