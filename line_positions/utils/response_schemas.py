"""
Report schema definitions.

Pydantic schemas for the JSON the command line emits. Reports are the
user-facing view of a lookup, so every line number in them is 1-indexed;
the from_* constructors are where internal LineNumbers get converted.
"""

from typing import List

from pydantic import BaseModel, Field, field_validator

from ..line_numbers import to_external
from ..src.index import Position, SingleLineSpan


def _one_indexed(v: int) -> int:
    if v < 1:
        raise ValueError(f"Display line numbers start at 1, got {v}")
    return v


class PositionReport(BaseModel):
    """Where an offset falls."""
    offset: int = Field(..., ge=0, description="Queried offset")
    line: int = Field(..., description="Line number (1-indexed)")
    column: int = Field(..., ge=0, description="Column (0-indexed)")
    line_text: str = Field("", description="Content of the line")

    @field_validator('line')
    @classmethod
    def line_is_one_indexed(cls, v: int) -> int:
        """Reject 0-indexed line numbers leaking into output."""
        return _one_indexed(v)

    @classmethod
    def from_position(cls, offset: int, position: Position, line_text: str = "") -> 'PositionReport':
        return cls(
            offset=offset,
            line=to_external(position.line),
            column=position.column,
            line_text=line_text,
        )


class LineRangeReport(BaseModel):
    """The offsets a line spans."""
    line: int = Field(..., description="Line number (1-indexed)")
    start: int = Field(..., ge=0, description="First offset of the line")
    end: int = Field(..., ge=0, description="Offset past the line's content")
    line_text: str = Field("", description="Content of the line")

    @field_validator('line')
    @classmethod
    def line_is_one_indexed(cls, v: int) -> int:
        """Reject 0-indexed line numbers leaking into output."""
        return _one_indexed(v)

    @field_validator('end')
    @classmethod
    def end_not_before_start(cls, v: int, info) -> int:
        """A range never ends before it starts."""
        start = info.data.get('start')
        if start is not None and v < start:
            raise ValueError(f"Range end {v} is before start {start}")
        return v


class SpanReport(BaseModel):
    """A single-line span."""
    line: int = Field(..., description="Line number (1-indexed)")
    start_col: int = Field(..., ge=0)
    end_col: int = Field(..., ge=0)

    @field_validator('line')
    @classmethod
    def line_is_one_indexed(cls, v: int) -> int:
        """Reject 0-indexed line numbers leaking into output."""
        return _one_indexed(v)

    @classmethod
    def from_span(cls, span: SingleLineSpan) -> 'SpanReport':
        return cls(
            line=to_external(span.line),
            start_col=span.start_col,
            end_col=span.end_col,
        )


class SpansReport(BaseModel):
    """A region split into single-line spans."""
    start: int = Field(..., ge=0, description="Region start offset")
    end: int = Field(..., ge=0, description="Region end offset")
    spans: List[SpanReport] = Field(default_factory=list)
