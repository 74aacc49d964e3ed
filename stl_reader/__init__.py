"""
stl_reader: reader for ASCII and binary STL files.

    from stl_reader import parse

    triangles = parse("part.stl")
"""

from stl_reader.geometry.primitives import Triangle, Vector3
from stl_reader.io.detector import STLFormat, detect_stl_format
from stl_reader.io.errors import (
    STLBinaryError,
    STLFormatError,
    STLLoadError,
    STLReadError,
    STLSyntaxError,
)
from stl_reader.io.stl_loader import STLInfo, load_stl_with_info, parse, parse_bytes
from stl_reader.logging_config import setup_logging, get_logger, configure_default_logging

__version__ = "0.1.0"

__all__ = [
    "Triangle",
    "Vector3",
    "STLFormat",
    "detect_stl_format",
    "STLBinaryError",
    "STLFormatError",
    "STLLoadError",
    "STLReadError",
    "STLSyntaxError",
    "STLInfo",
    "load_stl_with_info",
    "parse",
    "parse_bytes",
    "setup_logging",
    "get_logger",
    "configure_default_logging",
]
