"""End-to-end tests for the hybridization pipeline."""

import math
import os

import numpy as np
import pytest

from shapeblend.config import HybridConfig
from shapeblend.geo.catalog import FeatureCatalog
from shapeblend.models import HybridStatus
from shapeblend.pipeline import hybridize_by_name, hybridize_features, hybridize_rings, run_hybrid
from shapeblend.shape.align import rotate_points
from shapeblend.shape.blend import blend_shapes
from shapeblend.shape.normalize import normalize_shape
from shapeblend.shape.resample import resample_closed

from conftest import identity_projection, make_feature, regular_polygon


@pytest.fixture
def config8():
    config = HybridConfig()
    config.resample.count = 8
    return config


def _square_scenario():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)
    turned = rotate_points(square, math.pi / 2) + 5.0
    return square, turned


class TestSquareScenario:
    """Unit square against a translated, quarter-turned copy."""

    def test_hybrid_reproduces_square(self, config8):
        square, turned = _square_scenario()

        result = hybridize_rings(square, turned, config=config8)

        assert result.status == HybridStatus.OK
        assert result.rotation == pytest.approx(-math.pi / 2)

        half = 360 * 0.85 / 2
        corners = np.array(result.points)[[0, 2, 4, 6]]
        np.testing.assert_allclose(
            corners,
            [[-half, -half], [half, -half], [half, half], [-half, half]],
            atol=1e-9,
        )

    def test_unaligned_blend_turns_square_by_45_degrees(self):
        """Without alignment the midpoint blend is a square rotated 45 degrees."""
        square, turned = _square_scenario()
        a = normalize_shape(resample_closed(square, 8)).points
        b = normalize_shape(resample_closed(turned, 8)).points

        hybrid = blend_shapes(a, b)

        corners = hybrid[[0, 2, 4, 6]]
        directions = corners / np.linalg.norm(corners, axis=1, keepdims=True)
        np.testing.assert_allclose(directions, [[0, -1], [1, 0], [0, 1], [-1, 0]], atol=1e-9)

    def test_result_is_valid_and_closed(self, config8):
        result = hybridize_rings(*_square_scenario(), config=config8)

        assert result.svg_path.startswith("M")
        assert result.svg_path.endswith("Z")
        assert result.bezier_segments[-1].p3 == result.bezier_segments[0].p0
        assert not result.validation.has_errors
        assert result.validation.warning_count == 0


class TestOctagonScenario:
    """Identical octagons a thousand times apart in size."""

    def test_scale_invariance(self, small_config):
        small = regular_polygon(8, radius=1.0)
        large = regular_polygon(8, radius=1000.0, center=(3000.0, -200.0))

        mixed = hybridize_rings(small, large, config=small_config)
        alone = hybridize_rings(small, small, config=small_config)

        assert mixed.rotation == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(mixed.points, alone.points, atol=1e-6)

    def test_through_features(self, small_config):
        small = regular_polygon(8, radius=0.01).tolist()
        large = regular_polygon(8, radius=10.0).tolist()

        result = hybridize_features(
            make_feature("Tiny", [small]),
            make_feature("Huge", [large]),
            identity_projection,
            config=small_config,
        )

        assert result.status == HybridStatus.OK
        assert result.names == ["Tiny", "Huge"]
        reference = hybridize_rings(small, small, config=small_config)
        np.testing.assert_allclose(result.points, reference.points, atol=1e-6)


class TestPipelineBehaviour:
    """Ordering, winding and parameter handling."""

    def test_order_dependence(self, small_config, irregular_ring):
        other = rotate_points(regular_polygon(5, radius=2.0), 0.4)

        ab = hybridize_rings(irregular_ring, other, config=small_config)
        ba = hybridize_rings(other, irregular_ring, config=small_config)

        assert ab.rotation == pytest.approx(-ba.rotation)
        assert not np.allclose(ab.points, ba.points)

    def test_winding_normalized(self, small_config, irregular_ring):
        """A clockwise copy blends like the counter-clockwise original."""
        forward = hybridize_rings(irregular_ring, irregular_ring, config=small_config)
        mixed = hybridize_rings(irregular_ring, irregular_ring[::-1], config=small_config)

        assert mixed.validation.warning_count == 0
        assert mixed.rotation == pytest.approx(0.0, abs=1e-9)
        np.testing.assert_allclose(mixed.points, forward.points, atol=1e-9)

    def test_blend_weight_endpoints(self, small_config, irregular_ring, unit_square):
        small_config.blend.weight = 0.0
        first_only = hybridize_rings(irregular_ring, unit_square, config=small_config)
        reference = hybridize_rings(irregular_ring, irregular_ring, config=small_config)

        np.testing.assert_allclose(first_only.points, reference.points, atol=1e-9)

    def test_point_count_follows_config(self, default_config, irregular_ring, unit_square):
        result = hybridize_rings(irregular_ring, unit_square, config=default_config)

        assert len(result.points) == 256
        assert result.resample_count == 256

    def test_deterministic_id(self, small_config, irregular_ring, unit_square):
        first = hybridize_rings(irregular_ring, unit_square, config=small_config, names=["A", "B"])
        second = hybridize_rings(irregular_ring, unit_square, config=small_config, names=["A", "B"])
        swapped = hybridize_rings(unit_square, irregular_ring, config=small_config, names=["B", "A"])

        assert first.hybrid_id == second.hybrid_id
        assert first.hybrid_id != swapped.hybrid_id

    def test_invalid_config_raises(self, small_config, unit_square):
        small_config.resample.count = 2
        with pytest.raises(ValueError):
            hybridize_rings(unit_square, unit_square, config=small_config)

        small_config.resample.count = 16
        small_config.blend.weight = 1.5
        with pytest.raises(ValueError):
            hybridize_rings(unit_square, unit_square, config=small_config)


class TestDegenerateInputs:
    """Missing or unusable geometry degrades to an empty path."""

    def test_empty_ring(self, small_config, unit_square):
        result = hybridize_rings([], unit_square, config=small_config)

        assert result.status == HybridStatus.DEGENERATE
        assert result.is_empty
        assert result.points == []

    def test_single_point_feature(self, small_config, sample_features):
        catalog = FeatureCatalog(sample_features)

        result = hybridize_by_name(
            catalog, "Squareland", "Côte Pointe",
            project=identity_projection, config=small_config,
        )

        assert result.status == HybridStatus.DEGENERATE
        assert "Côte Pointe" in result.message
        assert result.is_empty

    def test_feature_without_geometry(self, small_config, sample_features):
        catalog = FeatureCatalog(sample_features)

        result = hybridize_by_name(
            catalog, "Nowhere", "Squareland",
            project=identity_projection, config=small_config,
        )

        assert result.status == HybridStatus.DEGENERATE

    def test_missing_feature(self, small_config, sample_features):
        catalog = FeatureCatalog(sample_features)

        result = hybridize_by_name(
            catalog, "Atlantis", "Lemuria",
            project=identity_projection, config=small_config,
        )

        assert result.status == HybridStatus.NOT_FOUND
        assert "Atlantis" in result.message
        assert "Lemuria" in result.message
        assert result.is_empty

    def test_partial_name_is_not_found(self, small_config):
        catalog = FeatureCatalog([
            make_feature("Equatorial Guinea", [regular_polygon(6, radius=2.0).tolist()]),
            make_feature("France", [regular_polygon(5, radius=3.0).tolist()]),
        ])

        result = hybridize_by_name(
            catalog, "Guinea", "France",
            project=identity_projection, config=small_config,
        )

        assert result.status == HybridStatus.NOT_FOUND
        assert "'Guinea'" in result.message
        assert result.is_empty

    def test_missing_name(self, small_config, sample_features):
        result = hybridize_by_name(
            FeatureCatalog(sample_features), None, "Squareland",
            project=identity_projection, config=small_config,
        )

        assert result.status == HybridStatus.NOT_FOUND


class TestRunHybrid:
    """Tests for the file-based entry point."""

    def test_writes_svg(self, geojson_file, temp_dir, small_config):
        out_path = os.path.join(temp_dir, "out", "hybrid.svg")

        result = run_hybrid(geojson_file, "Squareland", "Trianglia", out_path=out_path, config=small_config)

        assert result.status == HybridStatus.OK
        assert result.names == ["Squareland", "Trianglia"]
        with open(out_path, encoding="utf-8") as f:
            content = f.read()
        assert "<path" in content
        assert result.hybrid_id in content

    def test_no_svg_for_missing_feature(self, geojson_file, temp_dir, small_config):
        out_path = os.path.join(temp_dir, "missing.svg")

        result = run_hybrid(geojson_file, "Squareland", "Atlantis", out_path=out_path, config=small_config)

        assert result.status == HybridStatus.NOT_FOUND
        assert not os.path.exists(out_path)
