"""
Pytest configuration and shared fixtures.
"""

import random
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from alchemist.core import Alchemist
from alchemist.detector import TypeDetector
from tests.fixtures import NOW_MS, SAMPLE_HTML, SAMPLE_JSON


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark as integration test")


# ============================================================================
# Base Fixtures
# ============================================================================


@pytest.fixture
def detector():
    """Create a type detector instance."""
    return TypeDetector()


@pytest.fixture
def engine():
    """Create a quiet conversion engine with default settings."""
    return Alchemist()


@pytest.fixture
def verbose_engine():
    """Create an engine that prints progress lines."""
    return Alchemist(verbose=True)


@pytest.fixture
def now_ms():
    """Provide a consistent reference clock for tests."""
    return NOW_MS


@pytest.fixture
def rng():
    """Provide a seeded random source."""
    return random.Random(1234)


# ============================================================================
# Image Fixtures
# ============================================================================


@pytest.fixture
def two_tone_png(tmp_path):
    """40x20 PNG: left half red, right half blue."""
    img = Image.new("RGB", (40, 20), (0, 0, 255))
    img.paste((255, 0, 0), (0, 0, 20, 20))
    file_path = tmp_path / "two_tone.png"
    img.save(file_path)
    return file_path


@pytest.fixture
def large_png(tmp_path):
    """400x200 solid image that gets downsampled before sampling."""
    img = Image.new("RGB", (400, 200), (32, 64, 128))
    file_path = tmp_path / "large.png"
    img.save(file_path)
    return file_path


@pytest.fixture
def transparent_png(tmp_path):
    """Fully transparent RGBA image."""
    img = Image.new("RGBA", (10, 10), (255, 255, 255, 0))
    file_path = tmp_path / "transparent.png"
    img.save(file_path)
    return file_path


@pytest.fixture
def corrupt_png(tmp_path):
    """A file with an image extension that holds no image data."""
    file_path = tmp_path / "broken.png"
    file_path.write_text("definitely not a png")
    return file_path


# ============================================================================
# Temporary File Fixtures
# ============================================================================


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file."""
    file_path = tmp_path / "data.json"
    file_path.write_text(SAMPLE_JSON)
    return file_path


@pytest.fixture
def temp_html_file(tmp_path):
    """Create a temporary HTML file."""
    file_path = tmp_path / "page.html"
    file_path.write_text(SAMPLE_HTML)
    return file_path


@pytest.fixture
def temp_color_file(tmp_path):
    """Create a text file whose contents are a color."""
    file_path = tmp_path / "brand.txt"
    file_path.write_text("#FF6B35\n")
    return file_path
