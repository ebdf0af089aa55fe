"""
Pytest configuration and shared fixtures for Filter Tool tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest
from PIL import Image

from FT_Libs.WorkbenchLib.preferences_store import PreferencesStore


@pytest.fixture
def grayscale_2x2():
    """
    Provide the 2x2 single channel image used by the concrete range scenarios.

    Returns:
        uint8 array [[0, 128], [200, 255]]
    """
    return np.array([[0, 128], [200, 255]], dtype=np.uint8)


@pytest.fixture
def random_bgr_image():
    """Provide a reproducible 16x12 three channel image."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(16, 12, 3), dtype=np.uint8)


@pytest.fixture
def preferences(tmp_path):
    """Provide a PreferencesStore backed by a temporary file."""
    return PreferencesStore(tmp_path / "prefs" / "preferences.json")


@pytest.fixture
def sample_png(tmp_path):
    """
    Write a small RGB PNG to disk.

    The left column is pure red, the right column pure blue.

    Returns:
        Path to the PNG file
    """
    image = Image.new("RGB", (2, 3), color=(255, 0, 0))
    for y in range(3):
        image.putpixel((1, y), (0, 0, 255))
    path = tmp_path / "sample.png"
    image.save(path)
    return path
