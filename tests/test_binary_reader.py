"""
Unit tests for stl_reader.io.binary_reader module.

Tests:
- Little-endian decoding of records
- Declared count is advisory only
- Truncation errors with record index
"""

import struct

import numpy as np
import pytest
from stl import mesh as stl_mesh

from stl_reader.geometry.primitives import Vector3, triangles_to_array
from stl_reader.io.binary_reader import RECORD_DTYPE, RECORD_SIZE, decode_binary, read_binary
from stl_reader.io.errors import STLBinaryError, STLFormatError


class TestReadBinary:
    """Tests for well-formed binary content."""

    def test_record_layout(self):
        """Hand-packed little-endian record decodes field by field."""
        record = struct.pack(
            "<12fH",
            9.0, 9.0, 9.0,        # normal (discarded)
            1.0, 2.0, 3.0,
            -4.5, 0.25, 6.0,
            7.0, 8.0, 1e-3,
            0xBEEF,               # attribute (discarded)
        )
        data = b"\0" * 80 + struct.pack("<i", 1) + record
        (tri,) = read_binary(data)
        assert tri.v1 == Vector3(1.0, 2.0, 3.0)
        assert tri.v2 == Vector3(-4.5, 0.25, 6.0)
        assert tri.v3.z == float(np.float32(1e-3))

    def test_record_size(self):
        assert RECORD_SIZE == 50

    def test_values_and_order(self, binary_stl, sample_triangles):
        triangles = read_binary(binary_stl(sample_triangles))
        assert len(triangles) == 5
        np.testing.assert_array_equal(triangles_to_array(triangles), sample_triangles)

    def test_values_are_python_floats(self, binary_stl, sample_triangles):
        (tri, *_) = read_binary(binary_stl(sample_triangles))
        assert type(tri.v1.x) is float

    def test_zero_records(self, binary_stl):
        assert read_binary(binary_stl([])) == []

    @pytest.mark.parametrize("declared", [0, -1, 3, 1000])
    def test_declared_count_ignored(self, binary_stl, sample_triangles, declared):
        data = binary_stl(sample_triangles, declared_count=declared)
        triangles, declared_count = decode_binary(data)
        assert len(triangles) == 5
        assert declared_count == declared

    def test_record_dtype_matches_numpy_stl(self):
        assert RECORD_DTYPE.itemsize == stl_mesh.Mesh.dtype.itemsize

    def test_many_records_in_order(self, binary_stl):
        rng = np.random.default_rng(7)
        triangles = rng.uniform(-1e3, 1e3, size=(20000, 3, 3)).astype(np.float32)
        decoded = read_binary(binary_stl(triangles))
        assert len(decoded) == 20000
        np.testing.assert_array_equal(triangles_to_array(decoded), triangles)

    def test_header_content_ignored(self, binary_stl, sample_triangles):
        data = binary_stl(sample_triangles, header=b"\xff" * 80)
        assert len(read_binary(data)) == 5


class TestBinaryErrors:
    """Tests for truncated binary content."""

    def test_truncated_mid_vertex_at_record_5(self, binary_stl, sample_triangles):
        data = binary_stl(sample_triangles)
        truncated = data[:84 + 4 * RECORD_SIZE + 20]
        with pytest.raises(STLBinaryError) as exc_info:
            read_binary(truncated)
        assert exc_info.value.triangle_index == 5
        assert "triangle number 5" in str(exc_info.value)

    def test_truncated_in_attribute(self, binary_stl, sample_triangles):
        data = binary_stl(sample_triangles)[:-1]
        with pytest.raises(STLBinaryError) as exc_info:
            read_binary(data)
        assert exc_info.value.triangle_index == 5

    def test_truncated_first_record(self, binary_stl, sample_triangles):
        data = binary_stl(sample_triangles)[:84 + 10]
        with pytest.raises(STLBinaryError) as exc_info:
            read_binary(data)
        assert exc_info.value.triangle_index == 1

    def test_trailing_garbage_is_a_short_record(self, binary_stl, sample_triangles):
        data = binary_stl(sample_triangles) + b"\0\0\0"
        with pytest.raises(STLBinaryError) as exc_info:
            read_binary(data)
        assert exc_info.value.triangle_index == 6

    def test_missing_count_field(self):
        with pytest.raises(STLBinaryError) as exc_info:
            read_binary(b"\0" * 82)
        assert exc_info.value.triangle_index is None

    def test_is_format_error(self, binary_stl, sample_triangles):
        with pytest.raises(STLFormatError):
            read_binary(binary_stl(sample_triangles)[:-7])
