"""
Shared fixtures for the srtkit test suite.
"""

import logging

import pytest


VALID_SRT = (
    "1\n"
    "00:00:01,000 --> 00:00:03,000\n"
    "Hello, world!\n"
    "\n"
    "2\n"
    "00:00:04,000 --> 00:00:06,500\n"
    "Second line\n"
    "with two rows."
)


@pytest.fixture
def valid_srt():
    return VALID_SRT


@pytest.fixture(autouse=True)
def restore_root_logging():
    """The CLI installs its own root handlers; put the originals back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
