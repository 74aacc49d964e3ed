"""Geometric value types and mesh statistics."""

from stl_reader.geometry.primitives import Triangle, Vector3, triangles_to_array
from stl_reader.geometry.mesh_stats import (
    BoundingBox,
    MeshStatistics,
    calculate_bounding_box,
    calculate_mesh_statistics,
    calculate_surface_area,
    calculate_volume,
)

__all__ = [
    "Triangle",
    "Vector3",
    "triangles_to_array",
    "BoundingBox",
    "MeshStatistics",
    "calculate_bounding_box",
    "calculate_mesh_statistics",
    "calculate_surface_area",
    "calculate_volume",
]
