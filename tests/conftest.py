"""Shared test fixtures."""

import pytest

from line_positions.utils.logger_setup import LoggerManager

ENV_VARS = [
    "LINE_POSITIONS_STRIP_CR",
    "LINE_POSITIONS_FORMAT",
    "LINE_POSITIONS_ENCODING",
    "LINE_POSITIONS_CHARS",
    "LINE_POSITIONS_LOG_LEVEL",
    "LINE_POSITIONS_LOG_FILE",
]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the caller's LINE_POSITIONS_* settings and logging out of tests."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    LoggerManager.reset()
