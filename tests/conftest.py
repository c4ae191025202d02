"""Test configuration for octarine."""

import pytest

from octarine.types import ColorDefinition, GlobalSettings


@pytest.fixture
def settings():
    """Default settings: white background, lightness method."""
    return GlobalSettings()


@pytest.fixture
def blue():
    return ColorDefinition.with_default_stops("#0066cc", id="blue", label="Blue")
