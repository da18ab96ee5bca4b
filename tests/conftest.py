"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from structwire import ByteOrder, CodecConfig


@pytest.fixture
def little_config() -> CodecConfig:
    """Configuration with a little-endian native order."""
    return CodecConfig(native_order=ByteOrder.LITTLE)


@pytest.fixture
def big_config() -> CodecConfig:
    """Configuration with a big-endian native order."""
    return CodecConfig(native_order=ByteOrder.BIG)


@pytest.fixture
def sample_text() -> str:
    """Sample text payload for testing."""
    return "Hello, World!"
