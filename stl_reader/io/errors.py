"""STL reader exception hierarchy."""

from typing import Optional


class STLLoadError(Exception):
    """Base class for every error raised while reading an STL file."""


class STLReadError(STLLoadError):
    """The file could not be read, or is too short to hold an STL header."""


class STLFormatError(STLLoadError, ValueError):
    """The content was read but is not valid STL."""


class STLSyntaxError(STLFormatError):
    """Malformed ASCII STL.

    Attributes:
        context: text surrounding the failure position
        position: character offset where scanning failed
    """

    def __init__(self, reason: str, context: str, position: int):
        super().__init__(f"Malformed STL syntax ({reason}) near \"{context}\"")
        self.reason = reason
        self.context = context
        self.position = position


class STLBinaryError(STLFormatError):
    """Truncated or corrupted binary STL.

    Attributes:
        triangle_index: 1-based index of the record that could not be
            completed, or None when the triangle count field is missing.
    """

    def __init__(self, triangle_index: Optional[int], message: Optional[str] = None):
        if message is None:
            message = f"Malformed STL binary at triangle number {triangle_index}"
        super().__init__(message)
        self.triangle_index = triangle_index
