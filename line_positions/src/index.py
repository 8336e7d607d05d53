"""
Offset to line/column index.

Builds a table of newline offsets from a text buffer in one pass and answers
offset -> (line, column) and line -> offset range queries against it with a
binary search.

Line Number Convention:
    Every line number produced or accepted here is a 0-indexed LineNumber.
    Use LineNumber.display() (or display()) to show one to a user, and
    LineNumber.from_display() to read one from a user.

Units:
    Offsets and columns count whatever the buffer is made of: code points for
    str, bytes for bytes/bytearray/memoryview.

Line endings:
    Only "\\n" splits lines. By default a "\\r" before it is line content. With
    strip_cr=True that "\\r" is left out of the line's range; offset lookups
    and columns are unaffected.
"""

import bisect
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple, Union

from ..line_numbers import LineNumber, validate_internal
from ..utils.logger_setup import get_logger
from .errors import LineOutOfRange, OffsetOutOfRange

logger = get_logger(__name__)

Text = Union[str, bytes, bytearray, memoryview]


class Position(NamedTuple):
    """A (line, column) pair. Both parts are 0-indexed."""
    line: LineNumber
    column: int


@dataclass(frozen=True, order=True)
class SingleLineSpan:
    """A range within a single line of a string. All zero-indexed."""
    line: LineNumber
    start_col: int
    end_col: int


def _check_int(value, what: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{what} must be an int, got {type(value).__name__}")


class LinePositions:
    """
    Efficiently converts absolute offsets to line-relative positions.

    Construction scans the text once (O(n)); every lookup afterwards is a
    binary search over the newline table (O(log n)). Only the scan results
    are kept, never the text, and nothing changes after construction, so an
    instance can be shared between threads freely.

    Attributes:
        newline_offsets (Tuple[int, ...]): Offset just after each newline,
            ascending. Entry i is the start of line i + 1.
        text_length (int): Length of the indexed text.
        strip_cr (bool): Whether "\\r\\n" line content excludes the "\\r".
    """

    __slots__ = ("_newlines", "_ends", "_length", "_strip_cr")

    def __init__(self, text: Text, strip_cr: bool = False):
        if isinstance(text, memoryview):
            text = text.tobytes()

        if isinstance(text, str):
            newline, carriage_return, unit = "\n", "\r", "char"
        elif isinstance(text, (bytes, bytearray)):
            newline, carriage_return, unit = b"\n", b"\r", "byte"
        else:
            raise TypeError(f"Cannot index text of type {type(text).__name__}")

        starts: List[int] = []
        ends: List[int] = []
        pos = text.find(newline)
        while pos != -1:
            end = pos
            if strip_cr and text[pos - 1:pos] == carriage_return:
                end = pos - 1
            ends.append(end)
            starts.append(pos + 1)
            pos = text.find(newline, pos + 1)
        ends.append(len(text))

        self._newlines: Tuple[int, ...] = tuple(starts)
        self._ends: Tuple[int, ...] = tuple(ends)
        self._length = len(text)
        self._strip_cr = bool(strip_cr)

        logger.debug(
            f"Indexed {len(starts)} newline(s) across {self._length} {unit}(s)"
        )

    @property
    def newline_offsets(self) -> Tuple[int, ...]:
        return self._newlines

    @property
    def text_length(self) -> int:
        return self._length

    @property
    def strip_cr(self) -> bool:
        return self._strip_cr

    @property
    def line_count(self) -> int:
        """Number of lines; always at least 1, even for empty text."""
        return len(self._newlines) + 1

    @property
    def last_line(self) -> LineNumber:
        return LineNumber(len(self._newlines))

    def __repr__(self) -> str:
        return (
            f"LinePositions(lines={self.line_count}, text_length={self._length}, "
            f"strip_cr={self._strip_cr})"
        )

    def _check_offset(self, offset: int) -> None:
        _check_int(offset, "Offset")
        if offset < 0 or offset > self._length:
            raise OffsetOutOfRange(offset, self._length)

    def _check_line(self, line: int) -> None:
        _check_int(line, "Line number")
        if not validate_internal(line, self.line_count):
            raise LineOutOfRange(line, self.line_count)

    def from_offset(self, offset: int) -> Position:
        """
        Convert an offset to the (line, column) it falls on.

        Args:
            offset (int): Offset in [0, text_length]. text_length itself is
                the position just past the last character.

        Returns:
            Position: 0-indexed line and column

        Raises:
            OffsetOutOfRange: If offset is negative or past text_length
        """
        self._check_offset(offset)
        # Number of lines that start at or before offset, less the first one.
        line = bisect.bisect_right(self._newlines, offset)
        line_start = self._newlines[line - 1] if line else 0
        return Position(LineNumber(line), offset - line_start)

    def line_of(self, offset: int) -> LineNumber:
        """Return only the line an offset falls on."""
        return self.from_offset(offset).line

    def line_start(self, line: int) -> int:
        """Offset of the first character of a line."""
        self._check_line(line)
        return self._newlines[line - 1] if line else 0

    def line_end(self, line: int) -> int:
        """Offset just past a line's content, excluding its line terminator."""
        self._check_line(line)
        return self._ends[line]

    def line_range(self, line: int) -> Tuple[int, int]:
        """
        Return the [start, end) offsets of a line's content.

        The terminating newline is excluded, so for every line but the last
        the next line starts at end + 1 (end + 2 when strip_cr dropped a
        "\\r").

        Args:
            line (int): 0-indexed line number

        Returns:
            Tuple[int, int]: start (inclusive) and end (exclusive) offsets

        Raises:
            LineOutOfRange: If the line does not exist
        """
        return self.line_start(line), self._ends[line]

    def to_offset(self, position: Position) -> int:
        """
        Convert a (line, column) position back to an offset.

        The column may address the line's terminator, matching what
        from_offset returns for an offset on a newline.

        Raises:
            LineOutOfRange: If the line does not exist
            OffsetOutOfRange: If the column falls outside the line
        """
        line, column = position
        start = self.line_start(line)
        _check_int(column, "Column")
        if line < len(self._newlines):
            limit = self._newlines[line] - 1
        else:
            limit = self._length
        offset = start + column
        if column < 0 or offset > limit:
            raise OffsetOutOfRange(offset, self._length)
        return offset

    def from_offsets(self, region_start: int, region_end: int) -> List[SingleLineSpan]:
        """
        Convert a region to single-line spans.

        If the region crosses a newline, the list holds one span per line it
        touches: the first starts at region_start's column, inner lines are
        covered entirely and the last ends at region_end's column.

        Raises:
            ValueError: If region_start > region_end
            OffsetOutOfRange: If either bound is outside the text
        """
        self._check_offset(region_start)
        self._check_offset(region_end)
        if region_start > region_end:
            raise ValueError(
                f"Region start {region_start} is after region end {region_end}"
            )

        first_line = self.line_of(region_start)
        last_line = self.line_of(region_end)

        spans = []
        for line in range(first_line, last_line + 1):
            line_start = self._newlines[line - 1] if line else 0
            line_end = self._ends[line]
            start_col = region_start - line_start if region_start >= line_start else 0
            end_col = region_end - line_start if region_end < line_end else line_end - line_start
            spans.append(SingleLineSpan(LineNumber(line), start_col, end_col))

        return spans

    def from_offsets_relative_to(
        self,
        start: SingleLineSpan,
        region_start: int,
        region_end: int,
    ) -> List[SingleLineSpan]:
        """
        Convert a region to spans positioned inside an enclosing text.

        This index covers a fragment whose first character sits at `start`
        in some larger text. Spans on the fragment's first line are shifted
        right by start.start_col; spans on later lines move down by
        start.line lines and keep their columns.
        """
        spans = []
        for span in self.from_offsets(region_start, region_end):
            if span.line == 0:
                spans.append(SingleLineSpan(
                    line=start.line,
                    start_col=start.start_col + span.start_col,
                    end_col=start.start_col + span.end_col,
                ))
            else:
                spans.append(SingleLineSpan(
                    line=LineNumber(start.line + span.line),
                    start_col=span.start_col,
                    end_col=span.end_col,
                ))

        return spans


def build(text: Text, strip_cr: bool = False) -> LinePositions:
    """Build a LinePositions index from a text buffer."""
    return LinePositions(text, strip_cr=strip_cr)


def lookup_offset(index: LinePositions, offset: int) -> Position:
    """Return the (line, column) of an offset. Raises OffsetOutOfRange."""
    return index.from_offset(offset)


def lookup_line(index: LinePositions, line: int) -> Tuple[int, int]:
    """Return the [start, end) range of a 0-indexed line. Raises LineOutOfRange."""
    return index.line_range(line)


def display(line: int) -> str:
    """Render an internal line number the way users see it (1-indexed)."""
    return LineNumber(line).display()
