"""
SVG export for shapeblend.

Builds svgwrite documents for a hybrid outline or for the projected outline
of a single feature.
"""

import svgwrite

from shapeblend.geo.rings import project_ring, rings_from_geometry
from shapeblend.io.save_artifacts import save_svg
from shapeblend.tracer import get_tracer, trace


STYLE = """
    .outline { stroke-linecap: round; stroke-linejoin: round; }
"""


def _styled_group(dwg, group_id, config):
    return dwg.g(
        id=group_id,
        fill=config.stroke.fill,
        stroke=config.stroke.color,
        stroke_width=config.stroke.width,
        class_="outline",
    )


@trace(label="create_hybrid_svg")
def create_hybrid_svg(result, config):
    """
    Create a square SVG document holding the hybrid path.

    The viewBox is centered on the origin and spans output.target_size, which
    is the frame the hybrid points were fitted into.
    """
    size = config.output.target_size

    dwg = svgwrite.Drawing(size=(f"{size}px", f"{size}px"))
    dwg.viewbox(-size / 2, -size / 2, size, size)
    dwg.defs.add(dwg.style(STYLE))

    group = _styled_group(dwg, "hybrid", config)
    if result.svg_path:
        group.add(dwg.path(d=result.svg_path, id=result.hybrid_id))
    dwg.add(group)

    get_tracer().event(f"Hybrid SVG created for {' + '.join(result.names) or 'unnamed shapes'}")

    return dwg


def outline_path(feature, project, precision=2):
    """
    SVG path data for every projected ring of a feature, holes included.

    Each ring becomes its own M ... L ... Z subpath.
    """
    parts = []
    for ring in rings_from_geometry(feature.get("geometry")):
        projected = project_ring(ring, project)
        if len(projected) == 0:
            continue
        coords = [f"{x:.{precision}f},{y:.{precision}f}" for x, y in projected]
        parts.append(f"M{coords[0]} " + " ".join(f"L{c}" for c in coords[1:]) + " Z")

    return " ".join(parts)


@trace(label="create_outline_svg")
def create_outline_svg(feature, project, config):
    """Create an SVG of one feature's outline in the projection extent."""
    width = config.projection.width
    height = config.projection.height

    dwg = svgwrite.Drawing(size=(f"{width}px", f"{height}px"))
    dwg.viewbox(0, 0, width, height)
    dwg.defs.add(dwg.style(STYLE))

    group = _styled_group(dwg, "outline", config)
    d = outline_path(feature, project, precision=config.output.precision)
    if d:
        group.add(dwg.path(d=d))
    else:
        get_tracer().event("Feature has no drawable rings", level="WARN")
    dwg.add(group)

    return dwg


def export_svg(dwg, path):
    """Write an svgwrite drawing to disk."""
    save_svg(dwg, path)
    return path
