"""
STL reading entry points.

Supports:
- Binary STL (autodetected)
- ASCII STL (autodetected)

The whole file is read into memory, the format is detected from the first
80 bytes and the matching decoder produces a list of triangles. Errors
reading the file (STLReadError) are kept apart from errors in its content
(STLFormatError).
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from stl_reader.geometry.primitives import Triangle
from stl_reader.io.ascii_reader import read_ascii
from stl_reader.io.binary_reader import decode_binary
from stl_reader.io.detector import STLFormat, detect_stl_format, read_solid_name
from stl_reader.io.errors import STLFormatError, STLReadError
from stl_reader.logging_config import log_timing
from stl_reader.project_config import ReaderConfig

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class STLInfo:
    """Metadata about a parsed STL file."""
    filepath: str
    format: STLFormat
    file_size_bytes: int
    n_triangles: int
    declared_triangles: Optional[int] = None  # binary count field
    solid_name: Optional[str] = None  # ASCII only

    @property
    def file_size_kb(self) -> float:
        """File size in kilobytes."""
        return self.file_size_bytes / 1024

    @property
    def count_matches(self) -> bool:
        """False when a binary file's count field disagrees with its records."""
        return self.declared_triangles is None or self.declared_triangles == self.n_triangles


def read_stl_bytes(filepath: PathLike) -> bytes:
    """Read the whole file.

    Raises:
        STLReadError: if the file is missing or cannot be read
    """
    try:
        return Path(filepath).read_bytes()
    except FileNotFoundError as exc:
        raise STLReadError(f"File not found: {str(filepath)!r}") from exc
    except OSError as exc:
        raise STLReadError(f"Cannot read file {str(filepath)!r}: {exc}") from exc


def _decode(
    content: bytes,
    config: Optional[ReaderConfig],
) -> Tuple[STLFormat, List[Triangle], Optional[int]]:
    config = config or ReaderConfig()
    stl_format = detect_stl_format(content)
    logger.debug("Detected %s STL (%d bytes)", stl_format.value, len(content))

    if stl_format is STLFormat.ASCII:
        try:
            text = content.decode("utf-8", errors=config.text_errors)
        except UnicodeDecodeError as exc:
            raise STLFormatError(
                f"ASCII STL is not valid UTF-8 at byte {exc.start}: {exc.reason}"
            ) from exc
        return stl_format, read_ascii(text, config.context_chars), None

    triangles, declared = decode_binary(content)
    return stl_format, triangles, declared


def parse_bytes(content: bytes, config: Optional[ReaderConfig] = None) -> List[Triangle]:
    """Parse in-memory STL content.

    Args:
        content: Whole STL file content
        config: Decoder settings (defaults when None)

    Returns:
        Triangles in file order.

    Raises:
        STLReadError: if content is shorter than the 80-byte header
        STLFormatError: if the content is not valid STL
    """
    _, triangles, _ = _decode(content, config)
    return triangles


def parse(filepath: PathLike, config: Optional[ReaderConfig] = None) -> List[Triangle]:
    """Parse an STL file, detecting ASCII or binary format.

    Args:
        filepath: Path to STL file
        config: Decoder settings (defaults when None)

    Returns:
        Triangles in file order.

    Raises:
        STLReadError: if the file cannot be read or is too short
        STLFormatError: if the file is not valid STL
    """
    triangles, _ = load_stl_with_info(filepath, config)
    return triangles


def load_stl_with_info(
    filepath: PathLike,
    config: Optional[ReaderConfig] = None,
) -> Tuple[List[Triangle], STLInfo]:
    """Parse an STL file and return its triangles with file metadata.

    Raises:
        STLReadError: if the file cannot be read or is too short
        STLFormatError: if the file is not valid STL
    """
    with log_timing(logger, "Parsing STL", path=str(filepath)) as timing:
        content = read_stl_bytes(filepath)
        stl_format, triangles, declared = _decode(content, config)
        timing["triangles"] = len(triangles)

    info = STLInfo(
        filepath=str(filepath),
        format=stl_format,
        file_size_bytes=len(content),
        n_triangles=len(triangles),
        declared_triangles=declared,
        solid_name=read_solid_name(content) if stl_format is STLFormat.ASCII else None,
    )
    logger.info(
        "Loaded %s: %d triangles (format: %s, size: %.1f KB)",
        filepath, info.n_triangles, stl_format.value, info.file_size_kb,
    )
    return triangles, info
