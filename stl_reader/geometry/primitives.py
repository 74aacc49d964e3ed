"""
Value types produced by the STL reader.

Contains:
- Vector3: immutable 3-component point
- Triangle: immutable ordered triple of Vector3 vertices
- conversion of a triangle list to a numpy array
"""

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class Vector3:
    """Point in 3D space with double-precision components."""
    x: float
    y: float
    z: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        """Return the vector as a float64 array of shape (3,)."""
        return np.array(self.as_tuple(), dtype=np.float64)


@dataclass(frozen=True)
class Triangle:
    """Triangular facet.

    Vertex order is kept exactly as read from the file; it defines the
    winding but is not validated.
    """
    v1: Vector3
    v2: Vector3
    v3: Vector3

    @property
    def vertices(self) -> Tuple[Vector3, Vector3, Vector3]:
        return (self.v1, self.v2, self.v3)

    def __iter__(self) -> Iterator[Vector3]:
        return iter(self.vertices)

    def to_array(self) -> np.ndarray:
        """Return the vertices as a float64 array of shape (3, 3)."""
        return np.array([v.as_tuple() for v in self.vertices], dtype=np.float64)


def triangles_to_array(triangles: Sequence[Triangle]) -> np.ndarray:
    """Stack triangles into an array of shape (N, 3, 3), float64.

    An empty sequence gives an array of shape (0, 3, 3).
    """
    if not triangles:
        return np.zeros((0, 3, 3), dtype=np.float64)
    return np.array(
        [[v.as_tuple() for v in tri.vertices] for tri in triangles],
        dtype=np.float64,
    )
