"""
Playback view - draws the scheduler's current frame onto a preview canvas.
This is a THIN ADAPTER - no playback logic here.
"""
from typing import Tuple

import pygame
from PIL import Image

from stripworks.core.playback import contain_rect
from stripworks.ui.surfaces import blit_scaled, image_to_surface

CLEAR = (0, 0, 0, 0)


class PlaybackView:
    """
    Persistent preview canvas, redrawn only when the scheduler advances.
    The host blits `canvas` every display frame.
    """

    def __init__(self, size: Tuple[int, int]):
        self.canvas = pygame.Surface(size, pygame.SRCALPHA)
        self.last_rect = None

    @property
    def size(self) -> Tuple[int, int]:
        return self.canvas.get_size()

    def draw(self, frame: Image.Image) -> None:
        self.canvas.fill(CLEAR)
        rect = contain_rect(frame.size, self.size)
        self.last_rect = blit_scaled(self.canvas, image_to_surface(frame), rect)
