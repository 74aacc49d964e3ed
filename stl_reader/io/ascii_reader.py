"""
ASCII STL decoding.

Only the ``facet``, ``vertex`` and ``endfacet`` keywords and the nine vertex
coordinates between them are consumed. ``solid``, ``outer loop``,
``endloop``, ``endsolid`` and the facet normal are skipped over by the
keyword search.

On the first malformed facet an STLSyntaxError is raised with up to
``context_chars`` characters on each side of the failure position.
"""

import logging
import re
from typing import List, Optional

from stl_reader.geometry.primitives import Triangle, Vector3
from stl_reader.io.errors import STLSyntaxError

logger = logging.getLogger(__name__)

CONTEXT_CHARS = 128

_WHITESPACE_RE = re.compile(r"\s*")
_TOKEN_RE = re.compile(r"\S+")
# Decimal float literal on lower-cased text; nan/inf are rejected.
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?", re.ASCII)


class _Scanner:
    """Cursor over lower-cased STL text.

    Each step returns the scanned value (or a success flag) and leaves the
    cursor untouched on failure, so the caller can report the exact spot.
    """

    def __init__(self, text: str, context_chars: int):
        self.text = text
        self.pos = 0
        self.context_chars = context_chars

    def seek(self, keyword: str) -> bool:
        """Move the cursor to the next occurrence of keyword."""
        index = self.text.find(keyword, self.pos)
        if index < 0:
            return False
        self.pos = index
        return True

    def skip_past(self, keyword: str) -> bool:
        """Move the cursor just behind the next occurrence of keyword."""
        if not self.seek(keyword):
            return False
        self.pos += len(keyword)
        return True

    def skip_whitespace(self) -> None:
        self.pos = _WHITESPACE_RE.match(self.text, self.pos).end()

    def read_float(self) -> Optional[float]:
        """Read one whitespace-delimited decimal literal."""
        self.skip_whitespace()
        match = _TOKEN_RE.match(self.text, self.pos)
        if match is None:
            return None
        token = match.group()
        if _FLOAT_RE.fullmatch(token) is None:
            return None
        self.pos = match.end()
        return float(token)

    def error(self, reason: str) -> STLSyntaxError:
        """Build a syntax error with the text window around the cursor."""
        start = max(self.pos - self.context_chars, 0)
        end = min(self.pos + self.context_chars, len(self.text))
        return STLSyntaxError(reason, self.text[start:end], self.pos)


def _read_vertex(scanner: _Scanner) -> Vector3:
    if not scanner.skip_past("vertex"):
        raise scanner.error("expected 'vertex'")
    coords = []
    for _ in range(3):
        value = scanner.read_float()
        if value is None:
            raise scanner.error("expected a vertex coordinate")
        coords.append(value)
    return Vector3(*coords)


def read_ascii(text: str, context_chars: int = CONTEXT_CHARS) -> List[Triangle]:
    """Decode ASCII STL text into triangles.

    Args:
        text: Whole file content; matching is case-insensitive
        context_chars: Characters of context kept on each side of a failure

    Returns:
        Triangles in file order. Text without any ``facet`` gives an
        empty list.

    Raises:
        STLSyntaxError: on a missing keyword, a malformed coordinate or
            content ending inside a facet
    """
    logger.debug("Parsing ASCII STL format (%d characters)", len(text))
    scanner = _Scanner(text.lower(), context_chars)
    triangles: List[Triangle] = []

    while scanner.seek("facet"):
        vertices = [_read_vertex(scanner) for _ in range(3)]
        if not scanner.skip_past("endfacet"):
            raise scanner.error("expected 'endfacet'")
        triangles.append(Triangle(*vertices))

    return triangles
