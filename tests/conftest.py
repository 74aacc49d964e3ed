"""
Pytest configuration and fixtures for stl_reader.

Provides:
- Reference triangle sets
- Binary STL builders (numpy-stl record layout)
- ASCII STL builders
- Temporary STL file fixtures
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

import numpy as np
import pytest
from stl import Mode
from stl import mesh as stl_mesh


# ============================================================================
# Reference Geometry
# ============================================================================

# Values exactly representable as float32
CUBE_HALF = 5.0

_CUBE_VERTICES = np.array([
    [-1, -1, -1], [+1, -1, -1], [+1, +1, -1], [-1, +1, -1],  # bottom
    [-1, -1, +1], [+1, -1, +1], [+1, +1, +1], [-1, +1, +1],  # top
], dtype=np.float64) * CUBE_HALF

# Outward-facing counter-clockwise winding
_CUBE_FACES = [
    [0, 2, 1], [0, 3, 2],  # bottom
    [4, 5, 6], [4, 6, 7],  # top
    [0, 1, 5], [0, 5, 4],  # front
    [2, 3, 7], [2, 7, 6],  # back
    [0, 4, 7], [0, 7, 3],  # left
    [1, 2, 6], [1, 6, 5],  # right
]


@pytest.fixture
def cube_triangles() -> np.ndarray:
    """Closed 10 x 10 x 10 cube centered at the origin, shape (12, 3, 3)."""
    return np.array([_CUBE_VERTICES[f] for f in _CUBE_FACES])


@pytest.fixture
def sample_triangles() -> np.ndarray:
    """Five triangles with distinct, float32-exact coordinates."""
    base = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    return np.array([base * (i + 1) + [0.5 * i, -0.25 * i, 2.0 * i] for i in range(5)])


# ============================================================================
# STL Builders
# ============================================================================

def make_binary_stl(
    triangles: Sequence,
    declared_count: Optional[int] = None,
    header: bytes = b"binary stl test header",
) -> bytes:
    """Build binary STL bytes using numpy-stl's record dtype."""
    triangles = np.asarray(triangles, dtype=np.float64).reshape(-1, 3, 3)
    records = np.zeros(len(triangles), dtype=stl_mesh.Mesh.dtype)
    records["vectors"] = triangles
    records["normals"] = [0.0, 0.0, 1.0]
    count = len(triangles) if declared_count is None else declared_count
    return (
        header.ljust(80, b"\0")[:80]
        + np.array([count], dtype="<i4").tobytes()
        + records.tobytes()
    )


def make_ascii_stl(triangles: Sequence, name: str = "test") -> str:
    """Build ASCII STL text."""
    lines = [f"solid {name}"]
    for tri in triangles:
        lines.append("  facet normal 0 0 1")
        lines.append("    outer loop")
        for v in tri:
            lines.append("      vertex " + " ".join(repr(float(c)) for c in v))
        lines.append("    endloop")
        lines.append("  endfacet")
    lines.append(f"endsolid {name}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def binary_stl() -> Callable[..., bytes]:
    """Factory fixture: make_binary_stl."""
    return make_binary_stl


@pytest.fixture
def ascii_stl() -> Callable[..., str]:
    """Factory fixture: make_ascii_stl."""
    return make_ascii_stl


# ============================================================================
# Temporary File Fixtures
# ============================================================================

@pytest.fixture
def tmp_stl_dir(tmp_path: Path) -> Path:
    """Temporary directory for STL files created during tests."""
    return tmp_path


@pytest.fixture
def cube_stl_path(tmp_stl_dir: Path, cube_triangles: np.ndarray) -> Path:
    """Binary cube written by numpy-stl."""
    path = tmp_stl_dir / "cube.stl"
    m = stl_mesh.Mesh(np.zeros(len(cube_triangles), dtype=stl_mesh.Mesh.dtype))
    m.vectors[:] = cube_triangles
    m.save(str(path), mode=Mode.BINARY)
    return path


@pytest.fixture
def ascii_cube_path(tmp_stl_dir: Path, cube_triangles: np.ndarray) -> Path:
    """ASCII cube with the solid name 'cube'."""
    path = tmp_stl_dir / "ascii_cube.stl"
    path.write_text(make_ascii_stl(cube_triangles.tolist(), name="cube"))
    return path


@pytest.fixture
def empty_binary_path(tmp_stl_dir: Path) -> Path:
    """Binary STL with header and count only."""
    path = tmp_stl_dir / "empty.stl"
    path.write_bytes(make_binary_stl([]))
    return path


# ============================================================================
# Logging
# ============================================================================

@pytest.fixture
def restore_package_logger():
    """Undo setup_logging changes to the stl_reader logger."""
    logger = logging.getLogger("stl_reader")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
