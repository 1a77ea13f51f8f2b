"""
Main pipeline orchestrator for shapeblend.

Runs ring extraction, resampling, normalization, rotation alignment,
blending and curve synthesis for a pair of shapes. Every call recomputes
from scratch; nothing is cached between requests.

Data problems never raise: absent features come back with status
not_found, unusable geometry with status degenerate, both with an empty
path. Configuration mistakes (resample count below 3, blend weight outside
[0, 1]) raise ValueError.
"""

from shapeblend.config import load_config
from shapeblend.curve.cardinal import synthesize_curve
from shapeblend.export.svg_export import create_hybrid_svg, export_svg
from shapeblend.geo.catalog import FeatureNotFoundError, feature_name, load_catalog
from shapeblend.geo.projection import make_projection
from shapeblend.geo.rings import distinct_point_count, extract_ring, orient_ring
from shapeblend.models import HybridResult, HybridStatus, compute_bbox, generate_hybrid_id
from shapeblend.shape.align import align_onto
from shapeblend.shape.blend import blend_shapes
from shapeblend.shape.normalize import normalize_shape
from shapeblend.shape.resample import MIN_POINTS, resample_closed
from shapeblend.tracer import get_tracer, trace
from shapeblend.validate.rules import run_validation


def _check_config(config):
    if config.resample.count < MIN_POINTS:
        raise ValueError(f"resample.count must be at least {MIN_POINTS}, got {config.resample.count}")
    if not 0.0 <= config.blend.weight <= 1.0:
        raise ValueError(f"blend.weight must be within [0, 1], got {config.blend.weight}")


def _empty_result(names, status, message, config):
    get_tracer().event(message, level="WARN")
    return HybridResult(
        hybrid_id=generate_hybrid_id(names, config.resample.count, config.blend.weight),
        status=status,
        message=message,
        names=list(names),
        blend_weight=config.blend.weight,
        resample_count=config.resample.count,
    )


@trace(label="hybridize_rings")
def hybridize_rings(ring_a, ring_b, config=None, names=None):
    """
    Blend two projected rings into one hybrid outline.

    Args:
        ring_a: (M, 2) projected points of the first shape (the reference frame)
        ring_b: (K, 2) projected points of the second shape (rotated onto the first)
        config: HybridConfig (defaults when omitted)
        names: optional pair of display names

    Returns:
        HybridResult
    """
    tracer = get_tracer()

    if config is None:
        config = load_config()
    _check_config(config)
    names = list(names or [])

    n = config.resample.count

    with tracer.span("resample", module="pipeline", count=n):
        # Rings from extract_ring are already oriented; raw caller rings may not be
        res_a = resample_closed(orient_ring(ring_a), n)
        res_b = resample_closed(orient_ring(ring_b), n)

    unusable = [
        label for label, res in zip(names or ["first", "second"], (res_a, res_b))
        if distinct_point_count(res) < MIN_POINTS
    ]
    if unusable:
        return _empty_result(
            names, HybridStatus.DEGENERATE,
            f"Shape unavailable, degenerate geometry: {', '.join(unusable)}",
            config,
        )

    with tracer.span("align", module="pipeline"):
        norm_a = normalize_shape(res_a)
        norm_b = normalize_shape(res_b)
        aligned_a, aligned_b, theta = align_onto(norm_a.points, norm_b.points)

    with tracer.span("blend", module="pipeline", weight=config.blend.weight):
        hybrid = blend_shapes(aligned_a, aligned_b, config.blend.weight)

    with tracer.span("synthesize", module="pipeline"):
        scaled, beziers, svg_path = synthesize_curve(
            hybrid,
            config.output.target_size,
            fit_fraction=config.output.fit_fraction,
            tension=config.output.tension,
            precision=config.output.precision,
        )

    result = HybridResult(
        hybrid_id=generate_hybrid_id(names, n, config.blend.weight),
        status=HybridStatus.OK,
        names=names,
        points=scaled.tolist(),
        bezier_segments=beziers,
        svg_path=svg_path,
        rotation=theta,
        blend_weight=config.blend.weight,
        resample_count=n,
        bbox=compute_bbox(scaled),
    )
    result.validation = run_validation(result, config)

    tracer.event(f"Hybrid {result.hybrid_id} ready: {len(beziers)} segments")

    return result


@trace(label="hybridize_features")
def hybridize_features(feature_a, feature_b, project, config=None):
    """
    Blend two GeoJSON features using one shared projection.

    Args:
        feature_a: GeoJSON Feature mapping for the first shape
        feature_b: GeoJSON Feature mapping for the second shape
        project: callable (lon, lat) -> (x, y), used for both features
        config: HybridConfig (defaults when omitted)

    Returns:
        HybridResult
    """
    names = [feature_name(feature_a) or "first", feature_name(feature_b) or "second"]

    ring_a = extract_ring(feature_a.get("geometry"), project)
    ring_b = extract_ring(feature_b.get("geometry"), project)

    return hybridize_rings(ring_a, ring_b, config=config, names=names)


@trace(label="hybridize_by_name")
def hybridize_by_name(catalog, name_a, name_b, project=None, config=None):
    """
    Look up two features by name and blend them.

    Missing names produce a not_found result listing every absent name.
    """
    if config is None:
        config = load_config()
    _check_config(config)
    if project is None:
        project = make_projection(config.projection)

    features = []
    missing = []
    for name in (name_a, name_b):
        try:
            features.append(catalog.get(name))
        except FeatureNotFoundError as e:
            missing.append(e.name)

    if missing:
        return _empty_result(
            [name_a or "", name_b or ""], HybridStatus.NOT_FOUND,
            f"Feature not found: {', '.join(repr(m) for m in missing)}",
            config,
        )

    return hybridize_features(features[0], features[1], project, config=config)


@trace(label="run_hybrid")
def run_hybrid(geojson_path, name_a, name_b, out_path=None, config=None, config_path=None):
    """
    Load a dataset, blend two named features and optionally export SVG.

    Args:
        geojson_path: GeoJSON FeatureCollection file
        name_a: first feature name (reference frame)
        name_b: second feature name
        out_path: SVG path to write (skipped when None or result is empty)
        config: HybridConfig object (optional)
        config_path: path to YAML config file (optional)

    Returns:
        HybridResult
    """
    tracer = get_tracer()

    if config is None:
        config = load_config(config_path)

    catalog = load_catalog(geojson_path)
    result = hybridize_by_name(catalog, name_a, name_b, config=config)

    if out_path and not result.is_empty:
        export_svg(create_hybrid_svg(result, config), out_path)
        tracer.event(f"Hybrid exported to {out_path}")

    return result
