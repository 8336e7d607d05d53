"""
Error types raised by line position lookups.

Both lookup errors subclass IndexError so callers that already guard
sequence access keep working, and LinePositionsError so callers can catch
everything this package raises in one clause.
"""

from ..line_numbers import to_external


class LinePositionsError(Exception):
    """Base class for line position errors."""


class OffsetOutOfRange(LinePositionsError, IndexError):
    """An offset outside [0, text_length] was queried."""

    def __init__(self, offset: int, text_length: int):
        self.offset = offset
        self.text_length = text_length
        super().__init__(f"Offset {offset} out of bounds (0-{text_length})")


class LineOutOfRange(LinePositionsError, IndexError):
    """A line that does not exist in the indexed text was queried."""

    def __init__(self, line: int, line_count: int):
        self.line = line
        self.line_count = line_count
        super().__init__(
            f"Line {to_external(line)} does not exist (text has {line_count} line"
            f"{'' if line_count == 1 else 's'})"
        )
