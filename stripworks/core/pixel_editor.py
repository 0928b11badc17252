"""
Pixel editor - tool dispatch over a mutable RGBA raster buffer.
NO UI DEPENDENCIES.
"""
import math
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .bitmap import Color, color_to_hex, parse_hex_color
from .constants import (
    DEFAULT_COLOR, DEFAULT_ZOOM, MIN_ZOOM, MAX_ZOOM,
    PALETTE_LIMIT, SMALL_IMAGE_WIDTH, SMALL_IMAGE_ZOOM,
)
from .flood_fill import flood_fill
from .palette import RGB, extract_palette

TRANSPARENT = (0, 0, 0, 0)


class Tool(Enum):
    """Pixel editor tools."""
    BRUSH = "brush"
    ERASER = "eraser"
    BUCKET = "bucket"
    PICKER = "picker"


# Tools that keep painting while the pointer is dragged
DRAG_TOOLS = (Tool.BRUSH, Tool.ERASER)


def screen_to_buffer(
    sx: float,
    sy: float,
    buffer_size: Tuple[int, int],
    display_size: Tuple[int, int],
) -> Tuple[int, int]:
    """
    Map a point on the displayed canvas to buffer coordinates.

    Args:
        sx, sy: Pointer position relative to the canvas' top-left corner
        buffer_size: (width, height) of the backing buffer
        display_size: (width, height) the canvas occupies on screen

    Returns:
        (x, y) buffer pixel, floored; may be out of bounds
    """
    scale_x = buffer_size[0] / display_size[0]
    scale_y = buffer_size[1] / display_size[1]
    return math.floor(sx * scale_x), math.floor(sy * scale_y)


def initial_zoom(image_width: int) -> int:
    """Zoom a freshly opened image starts at."""
    return SMALL_IMAGE_ZOOM if image_width < SMALL_IMAGE_WIDTH else DEFAULT_ZOOM


class PixelEditor:
    """
    Applies brush/eraser/bucket/picker events to one raster buffer.

    Each event touches at most the single pixel hit (or one fill region);
    there is no interpolation between drag samples, so fast strokes can
    leave gaps.
    """

    def __init__(self, buffer: np.ndarray, palette_limit: int = PALETTE_LIMIT):
        self.buffer = buffer
        self.tool: Tool = Tool.BRUSH
        self.color: Color = parse_hex_color(DEFAULT_COLOR)
        self.zoom: int = initial_zoom(self.width)
        self.drawing: bool = False
        # Set when the buffer changes; cleared by whoever redraws it
        self.dirty: bool = True
        # Computed once on load, not kept live
        self.palette: List[RGB] = extract_palette(buffer, palette_limit)

    @property
    def width(self) -> int:
        return self.buffer.shape[1]

    @property
    def height(self) -> int:
        return self.buffer.shape[0]

    @property
    def display_size(self) -> Tuple[int, int]:
        return self.width * self.zoom, self.height * self.zoom

    @property
    def color_hex(self) -> str:
        return color_to_hex(self.color)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def set_tool(self, tool: Tool) -> None:
        self.tool = tool

    def set_color(self, color: str) -> None:
        """Set the active color from a '#rrggbb' string."""
        self.color = parse_hex_color(color)

    def set_zoom(self, zoom: int) -> int:
        self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, zoom))
        return self.zoom

    def zoom_in(self) -> int:
        return self.set_zoom(self.zoom + 1)

    def zoom_out(self) -> int:
        return self.set_zoom(self.zoom - 1)

    # =========================================================================
    # POINTER EVENTS
    # =========================================================================

    def pointer_down(self, sx: float, sy: float) -> Optional[Tuple[int, int]]:
        """Start a stroke at a canvas-relative screen position."""
        self.drawing = True
        x, y = screen_to_buffer(sx, sy, (self.width, self.height), self.display_size)
        return (x, y) if self.apply(x, y) else None

    def pointer_move(self, sx: float, sy: float) -> Optional[Tuple[int, int]]:
        """Continue a stroke. Click-only tools ignore drags."""
        if not self.drawing or self.tool not in DRAG_TOOLS:
            return None
        x, y = screen_to_buffer(sx, sy, (self.width, self.height), self.display_size)
        return (x, y) if self.apply(x, y) else None

    def pointer_up(self) -> None:
        self.drawing = False

    def apply(self, x: int, y: int) -> bool:
        """
        Apply the active tool at buffer pixel (x, y).
        Returns True if the event hit the buffer.
        """
        if not self.in_bounds(x, y):
            return False

        if self.tool == Tool.PICKER:
            r, g, b = (int(c) for c in self.buffer[y, x, :3])
            self.color = (r, g, b, 255)
            self.tool = Tool.BRUSH  # picker is one-shot
            return True

        if self.tool == Tool.BUCKET:
            if flood_fill(self.buffer, x, y, self.color):
                self.dirty = True
        elif self.tool == Tool.ERASER:
            self.buffer[y, x] = TRANSPARENT
            self.dirty = True
        else:
            self.buffer[y, x] = self.color
            self.dirty = True
        return True
