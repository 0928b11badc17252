"""
Pytest fixtures for Stripworks tests.
"""
import os

# Headless pygame for view tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest
from PIL import Image

from stripworks.config import get_settings

# One distinct opaque color per frame
FRAME_COLORS = [
    (255, 0, 0, 255),
    (0, 255, 0, 255),
    (0, 0, 255, 255),
    (255, 255, 0, 255),
]


def make_strip(frame_width: int = 8, frame_height: int = 8, colors=FRAME_COLORS) -> Image.Image:
    """A strip whose frame i is filled with colors[i]."""
    strip = Image.new("RGBA", (frame_width * len(colors), frame_height))
    for i, color in enumerate(colors):
        strip.paste(color, (i * frame_width, 0, (i + 1) * frame_width, frame_height))
    return strip


@pytest.fixture
def strip() -> Image.Image:
    """4-frame 32x8 strip, one solid color per frame."""
    return make_strip()


@pytest.fixture
def buffer() -> np.ndarray:
    """Fully transparent 8x8 raster buffer."""
    return np.zeros((8, 8, 4), dtype=np.uint8)


@pytest.fixture
def settings_env(monkeypatch):
    """Clear cached settings around a test that changes the environment."""
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.fixture(scope="session")
def pygame_headless():
    """Initialize pygame against the dummy video driver."""
    pygame.init()
    yield
    pygame.quit()
