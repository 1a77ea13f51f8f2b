"""Tests for result models and their helpers."""

import numpy as np

from shapeblend.models import HybridResult, compute_bbox, generate_hybrid_id


class TestComputeBbox:
    """Tests for the point bounding box."""

    def test_list_points(self):
        assert compute_bbox([[1, 5], [-2, 3], [4, -1]]) == [-2.0, -1.0, 4.0, 5.0]

    def test_numpy_points(self):
        assert compute_bbox(np.array([[0.5, 0.5], [1.5, 2.0]])) == [0.5, 0.5, 1.5, 2.0]

    def test_empty(self):
        assert compute_bbox([]) == [0.0, 0.0, 0.0, 0.0]
        assert compute_bbox(np.zeros((0, 2))) == [0.0, 0.0, 0.0, 0.0]


class TestHybridId:
    """Tests for deterministic ID generation."""

    def test_stable_and_prefixed(self):
        first = generate_hybrid_id(["A", "B"], 256, 0.5)

        assert first == generate_hybrid_id(["A", "B"], 256, 0.5)
        assert first.startswith("hybrid_")
        assert len(first) == len("hybrid_") + 12

    def test_parameters_change_id(self):
        base = generate_hybrid_id(["A", "B"], 256, 0.5)

        assert base != generate_hybrid_id(["A", "B"], 128, 0.5)
        assert base != generate_hybrid_id(["A", "B"], 256, 0.25)
        assert base != generate_hybrid_id(["B", "A"], 256, 0.5)


class TestHybridResult:
    """Tests for the result model."""

    def test_empty_result(self):
        result = HybridResult(hybrid_id="hybrid_x")

        assert result.is_empty
        assert result.bbox == [0.0, 0.0, 0.0, 0.0]
