"""
Ring extraction for shapeblend.

Pulls the single dominant boundary ring out of a GeoJSON Polygon or
MultiPolygon. Holes and secondary islands are discarded: only the ring with
the greatest projected perimeter is kept as the shape's silhouette.
"""

import math

import numpy as np
from shapely.geometry import LinearRing

from shapeblend.tracer import get_tracer, trace


EMPTY_RING = np.zeros((0, 2), dtype=float)


def rings_from_geometry(geometry):
    """
    List every coordinate ring of a GeoJSON geometry mapping.

    Polygon rings are returned as-is; MultiPolygon parts are flattened.
    Any other geometry type, or no geometry at all, yields no rings.
    """
    if not geometry:
        return []

    geom_type = geometry.get("type")
    coords = geometry.get("coordinates") or []

    if geom_type == "Polygon":
        return [ring for ring in coords if ring]
    if geom_type == "MultiPolygon":
        return [ring for polygon in coords for ring in (polygon or []) if ring]

    return []


def project_ring(ring, project):
    """
    Project one lon/lat ring into planar coordinates.

    Vertices that project to non-finite values are dropped.
    """
    projected = []
    for vertex in ring:
        x, y = project(vertex[0], vertex[1])
        if math.isfinite(x) and math.isfinite(y):
            projected.append((x, y))

    if not projected:
        return EMPTY_RING.copy()
    return np.array(projected, dtype=float)


def ring_length(ring):
    """Total length of the ring's listed edges (no implicit closing edge)."""
    ring = np.asarray(ring, dtype=float)
    if len(ring) < 2:
        return 0.0
    return float(np.sum(np.linalg.norm(np.diff(ring, axis=0), axis=1)))


def largest_ring(rings):
    """Ring with the greatest total edge length, or None when there are none."""
    best = None
    best_len = -math.inf

    for ring in rings:
        length = ring_length(ring)
        if length > best_len:
            best_len = length
            best = ring

    return best


def distinct_point_count(ring):
    ring = np.asarray(ring, dtype=float)
    if len(ring) == 0:
        return 0
    return len(np.unique(ring, axis=0))


def orient_ring(ring, ccw=True):
    """
    Return the ring wound counter-clockwise (or clockwise when ccw=False).

    Rings with fewer than 3 distinct points have no winding and come back
    unchanged.
    """
    ring = np.asarray(ring, dtype=float).reshape(-1, 2)
    if distinct_point_count(ring) < 3:
        return ring.copy()

    if LinearRing(ring).is_ccw == ccw:
        return ring.copy()
    return ring[::-1].copy()


@trace(label="extract_ring")
def extract_ring(geometry, project, ccw=True):
    """
    Extract the dominant projected ring of a geometry.

    Args:
        geometry: GeoJSON geometry mapping (Polygon or MultiPolygon, lon/lat)
        project: callable (lon, lat) -> (x, y)
        ccw: winding direction to normalize to

    Returns:
        (M, 2) float array; empty (0, 2) when the geometry has no rings
    """
    tracer = get_tracer()

    rings = [project_ring(ring, project) for ring in rings_from_geometry(geometry)]
    best = largest_ring(rings)

    if best is None:
        tracer.event("Geometry has no rings", level="WARN")
        return EMPTY_RING.copy()

    tracer.event(f"Selected ring with {len(best)} vertices out of {len(rings)} candidates")

    return orient_ring(best, ccw=ccw)
