"""
Unit tests for stl_reader.geometry.mesh_stats module.
"""

import numpy as np
import pytest

from stl_reader.geometry.mesh_stats import (
    BoundingBox,
    calculate_bounding_box,
    calculate_mesh_statistics,
    calculate_surface_area,
    calculate_volume,
)
from stl_reader.geometry.primitives import Triangle, Vector3
from stl_reader.io.stl_loader import parse


class TestBoundingBox:
    """Tests for BoundingBox."""

    def test_dimensions_and_center(self):
        bbox = BoundingBox(np.array([0.0, 0.0, 0.0]), np.array([2.0, 4.0, 6.0]))
        np.testing.assert_array_equal(bbox.dimensions, [2, 4, 6])
        np.testing.assert_array_equal(bbox.center, [1, 2, 3])
        assert bbox.diagonal == pytest.approx(np.sqrt(56.0))

    def test_contains_point(self):
        bbox = BoundingBox(np.zeros(3), np.ones(3))
        assert bbox.contains_point(np.array([0.5, 0.5, 0.5]))
        assert bbox.contains_point(np.array([1.0, 1.0, 1.0]))
        assert not bbox.contains_point(np.array([1.5, 0.5, 0.5]))

    def test_to_dict(self):
        d = BoundingBox(np.zeros(3), np.ones(3)).to_dict()
        assert d['min'] == [0.0, 0.0, 0.0]
        assert d['dimensions'] == [1.0, 1.0, 1.0]


class TestCubeStatistics:
    """Statistics of the 10 x 10 x 10 reference cube."""

    def test_bounding_box(self, cube_stl_path):
        bbox = calculate_bounding_box(parse(cube_stl_path))
        np.testing.assert_allclose(bbox.min_point, [-5, -5, -5])
        np.testing.assert_allclose(bbox.max_point, [5, 5, 5])

    def test_surface_area(self, cube_stl_path):
        assert calculate_surface_area(parse(cube_stl_path)) == pytest.approx(600.0)

    def test_volume(self, cube_stl_path):
        assert calculate_volume(parse(cube_stl_path)) == pytest.approx(1000.0)

    def test_inverted_winding_gives_negative_volume(self, cube_stl_path):
        flipped = [Triangle(t.v1, t.v3, t.v2) for t in parse(cube_stl_path)]
        assert calculate_volume(flipped) == pytest.approx(-1000.0)

    def test_mesh_statistics(self, cube_stl_path):
        stats = calculate_mesh_statistics(parse(cube_stl_path))
        assert stats.n_triangles == 12
        assert stats.n_degenerate == 0
        assert stats.dimensions == pytest.approx((10.0, 10.0, 10.0))
        assert "Triangles:" in stats.summary()
        assert stats.to_dict()['n_triangles'] == 12


class TestEdgeCases:
    """Empty and degenerate input."""

    def test_empty(self):
        stats = calculate_mesh_statistics([])
        assert stats.n_triangles == 0
        assert stats.bbox is None
        assert stats.surface_area == 0.0
        assert stats.volume == 0.0
        assert stats.dimensions == (0.0, 0.0, 0.0)
        assert stats.to_dict()['bbox'] is None

    def test_degenerate_triangle(self):
        p = Vector3(1.0, 1.0, 1.0)
        line = Triangle(Vector3(0, 0, 0), p, Vector3(2.0, 2.0, 2.0))
        stats = calculate_mesh_statistics([line, Triangle(p, p, p)])
        assert stats.n_degenerate == 2
        assert stats.surface_area == pytest.approx(0.0)

    def test_accepts_array(self, cube_triangles):
        assert calculate_surface_area(cube_triangles) == pytest.approx(600.0)
