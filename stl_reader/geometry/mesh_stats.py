"""
Mesh statistics for parsed triangle lists.

Provides:
- Axis-aligned bounding box
- Surface area and signed volume
- Degenerate (zero-area) triangle count
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from stl_reader.geometry.primitives import Triangle, triangles_to_array

logger = logging.getLogger(__name__)

DEGENERATE_AREA = 1e-12


@dataclass
class BoundingBox:
    """Axis-Aligned Bounding Box (AABB).

    Attributes:
        min_point: Minimum corner (x_min, y_min, z_min)
        max_point: Maximum corner (x_max, y_max, z_max)
    """
    min_point: NDArray[np.float64]
    max_point: NDArray[np.float64]

    @property
    def dimensions(self) -> NDArray[np.float64]:
        """Box dimensions along x, y, z."""
        return self.max_point - self.min_point

    @property
    def center(self) -> NDArray[np.float64]:
        return (self.min_point + self.max_point) / 2

    @property
    def diagonal(self) -> float:
        return float(np.linalg.norm(self.dimensions))

    def contains_point(self, point: NDArray[np.float64]) -> bool:
        """Check if point is inside the bounding box (boundary included)."""
        return bool(
            np.all(point >= self.min_point) and
            np.all(point <= self.max_point)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'min': self.min_point.tolist(),
            'max': self.max_point.tolist(),
            'dimensions': self.dimensions.tolist(),
            'center': self.center.tolist(),
            'diagonal': self.diagonal,
        }


@dataclass
class MeshStatistics:
    """Summary of a triangle list.

    Attributes:
        n_triangles: Number of triangles
        bbox: Bounding box, None for an empty mesh
        surface_area: Total triangle area
        volume: Signed enclosed volume (negative if winding is inverted)
        n_degenerate: Triangles with zero area
    """
    n_triangles: int
    bbox: Optional[BoundingBox]
    surface_area: float
    volume: float
    n_degenerate: int = 0
    triangle_areas: Optional[NDArray[np.float64]] = field(default=None, repr=False)

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        if self.bbox is None:
            return (0.0, 0.0, 0.0)
        dims = self.bbox.dimensions
        return (float(dims[0]), float(dims[1]), float(dims[2]))

    def summary(self) -> str:
        """Generate human-readable summary."""
        dims = self.dimensions
        lines = [
            "Mesh Statistics",
            "=" * 40,
            f"Triangles:    {self.n_triangles:,}",
            f"Degenerate:   {self.n_degenerate:,}",
            f"Dimensions:   {dims[0]:.4g} x {dims[1]:.4g} x {dims[2]:.4g}",
            f"Surface Area: {self.surface_area:.4g}",
            f"Volume:       {self.volume:.4g}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'n_triangles': self.n_triangles,
            'n_degenerate': self.n_degenerate,
            'bbox': self.bbox.to_dict() if self.bbox is not None else None,
            'surface_area': self.surface_area,
            'volume': self.volume,
        }


def _as_array(triangles) -> np.ndarray:
    if isinstance(triangles, np.ndarray):
        return triangles
    return triangles_to_array(triangles)


def calculate_bounding_box(triangles: Sequence[Triangle]) -> Optional[BoundingBox]:
    """Bounding box of all vertices, or None for an empty list."""
    arr = _as_array(triangles)
    if len(arr) == 0:
        return None
    points = arr.reshape(-1, 3)
    return BoundingBox(min_point=points.min(axis=0), max_point=points.max(axis=0))


def _triangle_areas(arr: np.ndarray) -> np.ndarray:
    cross = np.cross(arr[:, 1] - arr[:, 0], arr[:, 2] - arr[:, 0])
    return 0.5 * np.linalg.norm(cross, axis=1)


def calculate_surface_area(triangles: Sequence[Triangle]) -> float:
    """Sum of triangle areas."""
    arr = _as_array(triangles)
    if len(arr) == 0:
        return 0.0
    return float(_triangle_areas(arr).sum())


def calculate_volume(triangles: Sequence[Triangle]) -> float:
    """Signed volume via the divergence theorem.

    Only meaningful for closed meshes; counter-clockwise winding seen from
    outside gives a positive value.
    """
    arr = _as_array(triangles)
    if len(arr) == 0:
        return 0.0
    signed = np.einsum('ij,ij->i', arr[:, 0], np.cross(arr[:, 1], arr[:, 2]))
    return float(signed.sum() / 6.0)


def calculate_mesh_statistics(triangles: Sequence[Triangle]) -> MeshStatistics:
    """Compute all statistics for a triangle list."""
    arr = _as_array(triangles)
    areas = _triangle_areas(arr) if len(arr) else np.zeros(0, dtype=np.float64)
    n_degenerate = int((areas < DEGENERATE_AREA).sum())
    if n_degenerate:
        logger.warning("Mesh has %d degenerate triangles", n_degenerate)

    return MeshStatistics(
        n_triangles=len(arr),
        bbox=calculate_bounding_box(arr),
        surface_area=float(areas.sum()),
        volume=calculate_volume(arr),
        n_degenerate=n_degenerate,
        triangle_areas=areas,
    )
