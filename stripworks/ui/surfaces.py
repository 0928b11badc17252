"""
PIL/numpy <-> pygame surface helpers.
All scaling here is nearest-neighbor; pixel art is never smoothed.
"""
from typing import Sequence, Tuple

import numpy as np
import pygame
from PIL import Image


def image_to_surface(img: Image.Image) -> pygame.Surface:
    """Copy an image into a new per-pixel-alpha surface."""
    img = img.convert("RGBA")
    return pygame.image.frombuffer(img.tobytes(), img.size, "RGBA").copy()


def buffer_to_surface(buffer: np.ndarray) -> pygame.Surface:
    """Copy an (H, W, 4) uint8 raster buffer into a new surface."""
    height, width = buffer.shape[:2]
    data = np.ascontiguousarray(buffer, dtype=np.uint8).tobytes()
    return pygame.image.frombuffer(data, (width, height), "RGBA").copy()


def blit_scaled(
    target: pygame.Surface,
    source: pygame.Surface,
    rect: Sequence[float],
) -> pygame.Rect:
    """
    Blit `source` into `rect` (x, y, w, h) on `target` with nearest-neighbor scaling.
    """
    x, y, w, h = rect
    size: Tuple[int, int] = (max(1, round(w)), max(1, round(h)))
    scaled = pygame.transform.scale(source, size)
    return target.blit(scaled, (round(x), round(y)))


def checkerboard(size: Tuple[int, int], cell: int = 8,
                 light=(60, 60, 70), dark=(40, 40, 50)) -> pygame.Surface:
    """Transparency backdrop drawn under edited images."""
    surface = pygame.Surface(size)
    surface.fill(dark)
    for y in range(0, size[1], cell):
        for x in range((y // cell) % 2 * cell, size[0], cell * 2):
            surface.fill(light, (x, y, cell, cell))
    return surface
