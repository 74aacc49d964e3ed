"""
Binary STL decoding.

Layout (little-endian)::

    offset  size  field
    0       80    header (ignored)
    80      4     triangle count (int32, advisory)
    84      50*N  records: normal 3*float32, vertices 9*float32, attribute uint16

Records are taken from the bytes that remain after the count field; the
declared count never bounds them.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from stl_reader.geometry.primitives import Triangle, Vector3
from stl_reader.io.detector import HEADER_SIZE
from stl_reader.io.errors import STLBinaryError

logger = logging.getLogger(__name__)

INT32_LE = np.dtype("<i4")
UINT16_LE = np.dtype("<u2")
FLOAT32_LE = np.dtype("<f4")

RECORD_DTYPE = np.dtype([
    ("normal", FLOAT32_LE, (3,)),
    ("vertices", FLOAT32_LE, (3, 3)),
    ("attribute", UINT16_LE),
])
RECORD_SIZE = RECORD_DTYPE.itemsize


class _LittleEndianReader:
    """Sequential little-endian reads over an in-memory buffer."""

    def __init__(self, data: bytes, offset: int = 0):
        self._data = data
        self._offset = offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read(self, dtype: np.dtype, count: int = 1) -> Optional[np.ndarray]:
        """Read ``count`` values of ``dtype``; None if the buffer is too short."""
        size = dtype.itemsize * count
        if size > self.remaining:
            self._offset = len(self._data)
            return None
        if count == 0:
            return np.empty(0, dtype=dtype)
        values = np.frombuffer(self._data, dtype=dtype, count=count, offset=self._offset)
        self._offset += size
        return values


def _to_triangles(records: np.ndarray) -> List[Triangle]:
    # float32 -> float64 is an exact widening
    corners = records["vertices"].astype(np.float64).tolist()
    return [Triangle(*(Vector3(*v) for v in tri)) for tri in corners]


def decode_binary(data: bytes) -> Tuple[List[Triangle], int]:
    """Decode binary STL and also return the declared triangle count.

    Args:
        data: Whole file content

    Returns:
        (triangles, declared_count)

    Raises:
        STLBinaryError: if the content stops inside the count field or
            inside a record
    """
    reader = _LittleEndianReader(data, offset=HEADER_SIZE)
    count_field = reader.read(INT32_LE)
    if count_field is None:
        raise STLBinaryError(None, "Malformed STL binary: missing triangle count")
    declared_count = int(count_field[0])

    n_records, tail = divmod(reader.remaining, RECORD_SIZE)
    records = reader.read(RECORD_DTYPE, n_records)
    if tail:
        raise STLBinaryError(n_records + 1)

    triangles = _to_triangles(records)
    if declared_count != len(triangles):
        logger.warning(
            "Binary STL declares %d triangles but contains %d",
            declared_count, len(triangles),
        )
    return triangles, declared_count


def read_binary(data: bytes) -> List[Triangle]:
    """Decode binary STL content into triangles.

    Args:
        data: Whole file content, header included

    Returns:
        Triangles in file order; an empty list when there are no records.

    Raises:
        STLBinaryError: with the 1-based index of an incomplete record
    """
    logger.debug("Parsing binary STL format (%d bytes)", len(data))
    triangles, _ = decode_binary(data)
    return triangles
