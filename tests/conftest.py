"""
Pytest configuration and shared fixtures for Open Blend tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import pytest
from pathlib import Path
from PIL import Image


def write_png(path: Path, size=(20, 10), color=(255, 0, 0, 255), mode="RGBA") -> Path:
    """Write a single-color PNG and return its path."""
    if mode == "RGB":
        color = color[:3]
    Image.new(mode, size, color).save(path, format="PNG")
    return path


@pytest.fixture
def png_dir(tmp_path):
    """
    Provide a folder with three PNG files named a.png, b.png, c.png.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to the folder
    """
    folder = tmp_path / "input"
    folder.mkdir()
    write_png(folder / "a.png", (40, 30), (255, 0, 0, 255))
    write_png(folder / "b.png", (25, 50), (0, 255, 0, 255), mode="RGB")
    write_png(folder / "c.png", (60, 60), (0, 0, 255, 10))
    return folder


@pytest.fixture
def output_dir(tmp_path):
    """Provide a not-yet-existing output folder."""
    return tmp_path / "results"


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 0),  # Transparent gray
    ]
