"""Core functionality modules."""

from .config import Config, ConfigManager, IndexConfig, LoggingConfig, OutputConfig
from .errors import LineOutOfRange, LinePositionsError, OffsetOutOfRange
from .index import (
    LinePositions,
    Position,
    SingleLineSpan,
    build,
    display,
    lookup_line,
    lookup_offset,
)

__all__ = [
    # Config
    "Config",
    "ConfigManager",
    "IndexConfig",
    "LoggingConfig",
    "OutputConfig",
    # Errors
    "LineOutOfRange",
    "LinePositionsError",
    "OffsetOutOfRange",
    # Index
    "LinePositions",
    "Position",
    "SingleLineSpan",
    "build",
    "display",
    "lookup_line",
    "lookup_offset",
]
