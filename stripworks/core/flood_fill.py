"""
Flood fill over RGBA raster buffers.
NO UI DEPENDENCIES.
"""
import logging
from typing import Sequence

import numpy as np

logger = logging.getLogger(__name__)


def flood_fill(buffer: np.ndarray, x: int, y: int, color: Sequence[int]) -> int:
    """
    Recolor the 4-connected region of exactly-matching color around (x, y).

    Uses an explicit stack rather than recursion, so region size is bounded
    only by the buffer. Matching pixels are found in one vectorized pass and
    the region is written back in a single assignment. Matching is exact on all four RGBA channels with no
    tolerance; anti-aliased edges stop the fill.

    Args:
        buffer: (H, W, 4) uint8 buffer, mutated in place
        x, y: Start pixel
        color: Target RGBA color

    Returns:
        Number of pixels recolored (0 when the start color already equals
        the target or the start is out of bounds)
    """
    height, width = buffer.shape[:2]
    if not (0 <= x < width and 0 <= y < height):
        return 0

    target = np.array(color, dtype=np.uint8)
    source = buffer[y, x].copy()
    if tuple(source) == tuple(target):
        logger.debug(f"Fill at ({x}, {y}) is a no-op: start color equals target")
        return 0

    # Cleared as pixels join the region, so each is visited once
    open_pixels = np.all(buffer == source, axis=-1).tolist()
    rows, cols = [], []
    stack = [(x, y)]
    while stack:
        cx, cy = stack.pop()
        if not (0 <= cx < width and 0 <= cy < height):
            continue
        if not open_pixels[cy][cx]:
            continue

        open_pixels[cy][cx] = False
        rows.append(cy)
        cols.append(cx)

        stack.append((cx + 1, cy))
        stack.append((cx - 1, cy))
        stack.append((cx, cy + 1))
        stack.append((cx, cy - 1))

    buffer[rows, cols] = target
    filled = len(rows)
    logger.debug(f"Filled {filled} pixels from ({x}, {y})")
    return filled
