"""Test configuration for the color gamut tools."""

import os

import pytest

# main builds its app at import time; keep the MCP transport out of tests
os.environ.setdefault("COLOR_TOOLS_MCP", "false")

from colorcore import ColorConverter, GamutDetector  # noqa: E402


@pytest.fixture
def detector():
    """A fresh detector with an empty cache."""
    return GamutDetector()


@pytest.fixture
def converter(detector):
    return ColorConverter(detector)
