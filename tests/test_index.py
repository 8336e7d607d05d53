"""Test LinePositions construction and lookups in both directions."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from line_positions import (
    LineNumber,
    LineOutOfRange,
    LinePositions,
    LinePositionsError,
    OffsetOutOfRange,
    Position,
    build,
    lookup_line,
    lookup_offset,
)

SAMPLE = "foo\nbar\nbaz\n"

BUFFERS = [
    "",
    "\n",
    "\n\n\n",
    "foo",
    SAMPLE,
    "foo\nbar\nbaz\naaaaaaaaaaa",
    "ab\r\ncd\r\n",
    "é\nñandú\n\nx",
    b"foo\nbar",
    b"\xc3\xa9\nx\r\n",
]


# ============================================================================
# Construction
# ============================================================================

def test_empty_text_is_one_line():
    """An empty buffer has no newlines and exactly one (empty) line."""
    index = build("")
    assert index.newline_offsets == ()
    assert index.line_count == 1
    assert index.text_length == 0
    assert index.last_line == 0
    assert index.from_offset(0) == Position(LineNumber(0), 0)
    assert index.line_range(0) == (0, 0)


def test_newline_table_records_next_line_starts():
    """Each entry is the offset just after a newline, trailing one included."""
    index = build(SAMPLE)
    assert index.newline_offsets == (4, 8, 12)
    assert index.line_count == 4
    assert index.last_line.display() == "4"


def test_table_has_one_entry_per_newline():
    """The table never holds more or fewer entries than there are newlines."""
    for text in BUFFERS:
        newline = "\n" if isinstance(text, str) else b"\n"
        index = build(text)
        assert len(index.newline_offsets) == text.count(newline)
        assert list(index.newline_offsets) == sorted(set(index.newline_offsets))


def test_bytes_and_str_count_their_own_units():
    """str offsets count code points, bytes offsets count bytes."""
    text = "é\nx"
    assert build(text).newline_offsets == (2,)
    assert build(text.encode("utf-8")).newline_offsets == (3,)

    assert build(text.encode("utf-8")).from_offset(2) == (0, 2)


def test_bytearray_and_memoryview_are_accepted():
    """Any bytes-like buffer can be indexed."""
    data = bytearray(b"a\nb")
    assert build(data).newline_offsets == (2,)
    assert build(memoryview(b"a\nb")).newline_offsets == (2,)


def test_index_does_not_follow_later_mutation():
    """The index is a snapshot of the buffer it was built from."""
    data = bytearray(b"a\nb")
    index = build(data)
    data.extend(b"\nc")
    assert index.newline_offsets == (2,)
    assert index.text_length == 3


@pytest.mark.parametrize("text", [None, 123, ["a", "\n"]])
def test_unsupported_text_types_are_rejected(text):
    """Only str and bytes-like input can be indexed."""
    with pytest.raises(TypeError):
        LinePositions(text)


def test_index_is_read_only():
    """Instances have no attribute dict and expose tuples."""
    index = build(SAMPLE)
    assert isinstance(index.newline_offsets, tuple)
    with pytest.raises(AttributeError):
        index.extra = 1
    with pytest.raises(AttributeError):
        index.line_count = 10


# ============================================================================
# Offset -> position
# ============================================================================

def test_offset_in_second_line():
    """Offset 5 in "foo\\nbar\\nbaz\\n" is the 'a' in "bar"."""
    line, column = lookup_offset(build(SAMPLE), 5)
    assert line == 1
    assert line.display() == "2"
    assert column == 1


def test_offset_at_line_start_is_column_zero():
    """A table entry is the first character of its line."""
    index = build(SAMPLE)
    assert index.from_offset(4) == (1, 0)
    assert index.from_offset(8) == (2, 0)


def test_offset_before_first_newline():
    """Offsets on the first line keep their value as column."""
    index = build(SAMPLE)
    assert index.from_offset(0) == (0, 0)
    assert index.from_offset(2) == (0, 2)


def test_offset_on_newline_belongs_to_the_line_it_ends():
    """The newline character is the last column of its own line."""
    index = build(SAMPLE)
    assert index.from_offset(3) == (0, 3)
    assert index.from_offset(7) == (1, 3)


def test_offset_at_end_after_trailing_newline():
    """Offset == length lands on the empty line after the final newline."""
    index = build(SAMPLE)
    position = index.from_offset(len(SAMPLE))
    assert position == (3, 0)
    assert position.line.display() == "4"
    assert index.line_range(position.line) == (12, 12)


def test_offset_at_end_without_trailing_newline():
    """Offset == length is just past the last character of the last line."""
    index = build("foo\nbar")
    assert index.from_offset(7) == (1, 3)


def test_line_of_returns_line_number():
    """line_of is from_offset without the column."""
    line = build(SAMPLE).line_of(9)
    assert isinstance(line, LineNumber)
    assert line == 2


@pytest.mark.parametrize("offset", [-1, len(SAMPLE) + 1, 1000])
def test_offset_out_of_range(offset):
    """Offsets outside [0, length] fail rather than clamp."""
    index = build(SAMPLE)
    with pytest.raises(OffsetOutOfRange) as exc_info:
        index.from_offset(offset)

    assert exc_info.value.offset == offset
    assert exc_info.value.text_length == len(SAMPLE)
    assert "out of bounds" in str(exc_info.value)


def test_empty_text_rejects_offset_one():
    """Even the empty buffer has a valid offset 0 but nothing beyond."""
    with pytest.raises(OffsetOutOfRange):
        build("").from_offset(1)


@pytest.mark.parametrize("offset", [1.0, "1", None, True])
def test_offset_must_be_int(offset):
    """Non-int offsets are a type error, not a range error."""
    with pytest.raises(TypeError):
        build(SAMPLE).from_offset(offset)


def test_lookup_is_repeatable():
    """The same query on the same index always gives the same answer."""
    index = build(SAMPLE)
    first = index.from_offset(9)
    for _ in range(3):
        assert index.from_offset(9) == first


def test_lookups_from_many_threads_agree():
    """A shared index answers concurrent readers consistently."""
    text = "line\n" * 500
    index = build(text)
    offsets = list(range(0, len(text) + 1, 7))
    expected = [index.from_offset(o) for o in offsets]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(index.from_offset, offsets))

    assert results == expected


# ============================================================================
# Line -> range
# ============================================================================

def test_line_ranges_exclude_newline():
    """Ranges are [start, end) over the line's content."""
    index = build(SAMPLE)
    assert lookup_line(index, 0) == (0, 3)
    assert lookup_line(index, 1) == (4, 7)
    assert lookup_line(index, 2) == (8, 11)
    assert lookup_line(index, 3) == (12, 12)


def test_line_start_and_end():
    """line_start and line_end return each bound of line_range."""
    index = build(SAMPLE)
    assert index.line_start(LineNumber(1)) == 4
    assert index.line_end(LineNumber(1)) == 7


def test_last_line_ends_at_text_length():
    """The final line's range runs to the end of the buffer."""
    index = build("foo\nbar")
    assert index.line_range(1) == (4, 7)


@pytest.mark.parametrize("line", [-1, 4, 100])
def test_line_out_of_range(line):
    """Lines that do not exist fail with LineOutOfRange."""
    index = build(SAMPLE)
    with pytest.raises(LineOutOfRange) as exc_info:
        index.line_range(line)

    assert exc_info.value.line == line
    assert exc_info.value.line_count == 4


def test_line_error_message_uses_display_numbers():
    """Messages name lines the way users count them."""
    with pytest.raises(LineOutOfRange, match=r"Line 5 does not exist \(text has 4 lines\)"):
        build(SAMPLE).line_range(4)
    with pytest.raises(LineOutOfRange, match=r"text has 1 line\)"):
        build("").line_range(1)


def test_error_kinds_are_distinct():
    """Offset and line failures are separate types with a shared base."""
    assert not issubclass(LineOutOfRange, OffsetOutOfRange)
    assert not issubclass(OffsetOutOfRange, LineOutOfRange)
    for error in (LineOutOfRange, OffsetOutOfRange):
        assert issubclass(error, LinePositionsError)
        assert issubclass(error, IndexError)


def test_line_must_be_int():
    """String line numbers are rejected before any lookup."""
    with pytest.raises(TypeError):
        build(SAMPLE).line_range("1")


# ============================================================================
# Position -> offset
# ============================================================================

def test_to_offset_inverts_from_offset():
    """Every valid offset survives a trip through its position."""
    for text in BUFFERS:
        index = build(text)
        for offset in range(len(text) + 1):
            assert index.to_offset(index.from_offset(offset)) == offset


def test_to_offset_accepts_plain_tuples():
    """Positions can be given as (line, column) pairs."""
    index = build(SAMPLE)
    assert index.to_offset((1, 1)) == 5
    assert index.to_offset(Position(LineNumber(1), 3)) == 7


def test_to_offset_rejects_columns_outside_the_line():
    """A column may reach the newline but not run into the next line."""
    index = build("foo\nbar")
    with pytest.raises(OffsetOutOfRange):
        index.to_offset((0, 4))
    with pytest.raises(OffsetOutOfRange):
        index.to_offset((1, 4))
    with pytest.raises(OffsetOutOfRange):
        index.to_offset((0, -1))


def test_to_offset_rejects_missing_lines():
    """An unknown line is a line error, not an offset error."""
    with pytest.raises(LineOutOfRange):
        build("foo\nbar").to_offset((2, 0))


# ============================================================================
# Properties over several buffers
# ============================================================================

def test_every_offset_lies_in_its_lines_range():
    """The line from from_offset contains the offset, with matching column."""
    for text in BUFFERS:
        for strip_cr in (False, True):
            index = build(text, strip_cr=strip_cr)
            for offset in range(len(text) + 1):
                line, column = index.from_offset(offset)
                start, end = index.line_range(line)

                assert start <= offset
                assert offset - start == column
                if line == index.last_line:
                    assert offset <= end
                else:
                    assert offset < index.line_start(line + 1)


def test_consecutive_lines_are_adjacent():
    """Each line starts one past the previous line's end."""
    for text in BUFFERS:
        index = build(text)
        for line in range(index.line_count):
            start, end = index.line_range(line)
            assert 0 <= start <= end <= len(text)
            if line + 1 < index.line_count:
                assert index.line_start(line + 1) == end + 1


# ============================================================================
# Carriage returns
# ============================================================================

def test_carriage_return_is_content_by_default():
    """Without strip_cr the \\r of a CRLF counts toward the line."""
    index = build("ab\r\ncd")
    assert index.strip_cr is False
    assert index.newline_offsets == (4,)
    assert index.line_range(0) == (0, 3)
    assert index.from_offset(2) == (0, 2)


def test_strip_cr_excludes_carriage_return_from_range():
    """With strip_cr the line ends before the \\r."""
    for text in ("ab\r\ncd", b"ab\r\ncd"):
        index = build(text, strip_cr=True)
        assert index.strip_cr is True
        assert index.newline_offsets == (4,)
        assert index.line_range(0) == (0, 2)
        assert index.line_range(1) == (4, 6)


def test_strip_cr_keeps_offset_lookups_unchanged():
    """Columns are raw distances whether or not \\r is stripped."""
    text = "ab\r\ncd\r\n"
    plain = build(text)
    stripped = build(text, strip_cr=True)
    for offset in range(len(text) + 1):
        assert plain.from_offset(offset) == stripped.from_offset(offset)


def test_lone_carriage_return_does_not_split_lines():
    """Only \\n ends a line."""
    index = build("a\rb", strip_cr=True)
    assert index.line_count == 1
    assert index.line_range(0) == (0, 3)


def test_strip_cr_only_touches_crlf_lines():
    """Lines ending in a bare \\n are unaffected."""
    index = build("a\r\nb\nc", strip_cr=True)
    assert index.line_range(0) == (0, 1)
    assert index.line_range(1) == (3, 4)
    assert index.line_start(2) == 5


def test_repr_summarizes_index():
    """repr shows size information, never the text."""
    assert repr(build(SAMPLE)) == "LinePositions(lines=4, text_length=12, strip_cr=False)"


def test_position_is_a_named_tuple():
    """Positions unpack and compare like (line, column) pairs."""
    position = LinePositions(SAMPLE).from_offset(5)
    line, column = position
    assert (line, column) == (1, 1)
    assert position == (1, 1)
    assert position.line.display() == "2"
