"""
Report formatter utilities.

Formats report schemas (Pydantic objects) into human-readable text for the
command line, or into JSON when machine output is requested.
"""

from typing import Union

from .response_schemas import LineRangeReport, PositionReport, SpansReport

Report = Union[PositionReport, LineRangeReport, SpansReport]


def format_position_report(report: PositionReport) -> str:
    """
    Format a PositionReport for display.

    Args:
        report: PositionReport Pydantic object

    Returns:
        Formatted string for display
    """
    return (
        f"Offset {report.offset} is on line {report.line} (column {report.column}), "
        f"and the text of that line is {report.line_text!r}."
    )


def format_line_range_report(report: LineRangeReport) -> str:
    """Format a LineRangeReport for display."""
    lines = []
    lines.append(f"Line {report.line} spans offsets [{report.start}, {report.end})")
    lines.append(f"    {report.line_text!r}")
    return "\n".join(lines)


def format_spans_report(report: SpansReport) -> str:
    """Format a SpansReport, one span per row."""
    lines = []
    lines.append(f"Region [{report.start}, {report.end}] covers {len(report.spans)} line(s):")
    for span in report.spans:
        lines.append(f"  line {span.line}: columns {span.start_col}-{span.end_col}")
    return "\n".join(lines)


def format_report(report: Report, output_format: str = "text") -> str:
    """
    Render any report as text or JSON.

    Args:
        report: One of the report schemas
        output_format: "text" or "json"

    Returns:
        Rendered report
    """
    if output_format == "json":
        return report.model_dump_json(indent=2)

    if isinstance(report, PositionReport):
        return format_position_report(report)
    if isinstance(report, LineRangeReport):
        return format_line_range_report(report)
    if isinstance(report, SpansReport):
        return format_spans_report(report)

    raise TypeError(f"Unknown report type: {type(report).__name__}")
