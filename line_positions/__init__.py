"""
Maps offsets in a text buffer to (line, column) positions and back.

A LinePositions index records where every line starts in one pass over the
text, then answers each lookup with a binary search. Lines are 0-indexed
LineNumbers internally and 1-indexed when displayed.

Typical usage example:

from line_positions import build
index = build("foo\\nbar\\nbaz\\n")
line, column = index.from_offset(5)
print(line.display(), column)  # 2 1
"""

__version__ = "0.1.0"
__author__ = "AI Innovation Hub"

from .line_numbers import (
    LineNumber,
    to_external,
    to_internal,
    validate_external,
    validate_internal,
)
from .src.errors import LineOutOfRange, LinePositionsError, OffsetOutOfRange
from .src.index import (
    LinePositions,
    Position,
    SingleLineSpan,
    build,
    display,
    lookup_line,
    lookup_offset,
)

__all__ = [
    "LineNumber",
    "LineOutOfRange",
    "LinePositions",
    "LinePositionsError",
    "OffsetOutOfRange",
    "Position",
    "SingleLineSpan",
    "build",
    "display",
    "lookup_line",
    "lookup_offset",
    "to_external",
    "to_internal",
    "validate_external",
    "validate_internal",
]
