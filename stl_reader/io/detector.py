"""
STL format detection (ASCII vs binary).

ASCII STL starts with the keyword ``solid``; binary STL starts with an
80-byte header whose content is free-form. Detection only looks at that
80-byte window. A binary file whose header itself starts with "solid" is
classified as ASCII; this ambiguity comes from the format and is accepted.
"""

import logging
from enum import Enum
from typing import Optional

from stl_reader.io.errors import STLReadError

logger = logging.getLogger(__name__)

HEADER_SIZE = 80
ASCII_KEYWORD = "solid"
NAME_SCAN_SIZE = 1024

# Unicode whitespace that does not count as leading blank space in a header
_NON_BREAKING = "\x85\xa0\u2007\u202f"


class STLFormat(Enum):
    """STL file format type."""
    BINARY = "binary"
    ASCII = "ascii"


def _strip_leading_blanks(text: str) -> str:
    """Drop leading whitespace, keeping no-break spaces and NEL."""
    index = 0
    while index < len(text) and text[index].isspace() and text[index] not in _NON_BREAKING:
        index += 1
    return text[index:]


def detect_stl_format(content: bytes) -> STLFormat:
    """Detect STL format from the first 80 bytes of the content.

    Args:
        content: Whole file content

    Returns:
        STLFormat.ASCII if the first non-whitespace text is "solid"
        (any case), STLFormat.BINARY otherwise, including a header made
        only of whitespace.

    Raises:
        STLReadError: if content is shorter than the 80-byte header
    """
    if len(content) < HEADER_SIZE:
        raise STLReadError(
            f"Content too short for STL: {len(content)} bytes, "
            f"at least {HEADER_SIZE} required"
        )

    header_text = content[:HEADER_SIZE].decode("utf-8", errors="replace")
    first_word = _strip_leading_blanks(header_text)
    if not first_word:
        logger.debug("Header is blank, assuming binary STL")
        return STLFormat.BINARY

    if first_word.lower().startswith(ASCII_KEYWORD):
        return STLFormat.ASCII
    return STLFormat.BINARY


def read_solid_name(content: bytes) -> Optional[str]:
    """Return the solid name of ASCII STL content, or None.

    The name is whatever follows the ``solid`` keyword on the first line.
    """
    first_line = _strip_leading_blanks(content[:NAME_SCAN_SIZE].decode("utf-8", errors="replace"))
    first_line = first_line.split("\n", 1)[0]
    if not first_line.lower().startswith(ASCII_KEYWORD):
        return None
    return first_line[len(ASCII_KEYWORD):].strip() or None
