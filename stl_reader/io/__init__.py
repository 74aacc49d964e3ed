"""STL file reading: format detection, ASCII and binary decoders."""

from stl_reader.io.ascii_reader import read_ascii
from stl_reader.io.binary_reader import read_binary
from stl_reader.io.detector import STLFormat, detect_stl_format
from stl_reader.io.errors import (
    STLBinaryError,
    STLFormatError,
    STLLoadError,
    STLReadError,
    STLSyntaxError,
)
from stl_reader.io.stl_loader import STLInfo, load_stl_with_info, parse, parse_bytes

__all__ = [
    "STLBinaryError",
    "STLFormat",
    "STLFormatError",
    "STLInfo",
    "STLLoadError",
    "STLReadError",
    "STLSyntaxError",
    "detect_stl_format",
    "load_stl_with_info",
    "parse",
    "parse_bytes",
    "read_ascii",
    "read_binary",
]
