"""
Line number handling utilities.

This module provides a line number type and conversion utilities to prevent
off-by-one errors when working with line numbers.

Convention:
- Internal (arithmetic, table indices): 0-indexed
- External (user-facing, display): 1-indexed

The only places that cross between the two are `LineNumber.display()`,
`LineNumber.from_display()`, `to_internal()` and `to_external()`.
"""


class LineNumber(int):
    """
    A zero-indexed line number.

    Subclasses int so it can index the newline table directly, but keeps a
    distinct type so line numbers are not confused with offsets or columns.
    Arithmetic on a LineNumber returns a plain int.

    Example:
        >>> LineNumber(0).display()
        '1'
        >>> LineNumber.from_display(42)
        LineNumber(41, display=42)
    """

    __slots__ = ()

    def __new__(cls, value: int = 0) -> "LineNumber":
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Line number must be an int, got {type(value).__name__}")
        return super().__new__(cls, value)

    @classmethod
    def from_display(cls, external: int) -> "LineNumber":
        """
        Build an internal line number from a 1-indexed user-facing one.

        Args:
            external (int): 1-indexed line number (as shown to user)

        Returns:
            LineNumber: The same line, 0-indexed
        """
        return cls(to_internal(external))

    def display(self) -> str:
        """Return the 1-indexed form shown to users."""
        return str(to_external(self))

    def __repr__(self) -> str:
        return f"LineNumber({int(self)}, display={self.display()})"


def to_internal(external: int) -> int:
    """
    Convert external (1-indexed) line number to internal (0-indexed).

    Args:
        external (int): 1-indexed line number (as shown to user)

    Returns:
        int: 0-indexed line number (for table access)

    Example:
        >>> to_internal(1)
        0
        >>> to_internal(42)
        41
    """
    return int(external) - 1


def to_external(internal: int) -> int:
    """
    Convert internal (0-indexed) line number to external (1-indexed).

    Args:
        internal (int): 0-indexed line number (table index)

    Returns:
        int: 1-indexed line number (for display to user)

    Example:
        >>> to_external(0)
        1
        >>> to_external(41)
        42
    """
    return int(internal) + 1


def validate_external(line_number: int, total_lines: int) -> bool:
    """
    Validate that external line number is within valid range.

    Args:
        line_number (int): 1-indexed line number to validate
        total_lines (int): Total number of lines in the text

    Returns:
        bool: True if valid, False otherwise

    Example:
        >>> validate_external(1, 100)
        True
        >>> validate_external(0, 100)
        False
        >>> validate_external(101, 100)
        False
    """
    return 1 <= line_number <= total_lines


def validate_internal(line_index: int, total_lines: int) -> bool:
    """
    Validate that internal line index is within valid range.

    Args:
        line_index (int): 0-indexed line index to validate
        total_lines (int): Total number of lines in the text

    Returns:
        bool: True if valid, False otherwise

    Example:
        >>> validate_internal(0, 100)
        True
        >>> validate_internal(-1, 100)
        False
        >>> validate_internal(100, 100)
        False
    """
    return 0 <= line_index < total_lines
