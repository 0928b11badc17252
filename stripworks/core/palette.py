"""
Palette extraction for the pixel editor.
NO UI DEPENDENCIES.
"""
from typing import List, Tuple

import numpy as np

from .constants import PALETTE_LIMIT

RGB = Tuple[int, int, int]


def extract_palette(buffer: np.ndarray, limit: int = PALETTE_LIMIT) -> List[RGB]:
    """
    Distinct RGB colors of all visible pixels, in first-seen raster order.

    Pixels with zero alpha are skipped. Any nonzero alpha counts, and colors
    differing only in alpha collapse into one entry.

    Args:
        buffer: (H, W, 4) uint8 buffer
        limit: Maximum number of colors reported

    Returns:
        Up to `limit` (R, G, B) tuples
    """
    flat = buffer.reshape(-1, 4)
    visible = flat[flat[:, 3] > 0][:, :3]
    if len(visible) == 0:
        return []

    # np.unique sorts; first-occurrence indices restore row-major discovery order
    colors, first_seen = np.unique(visible, axis=0, return_index=True)
    order = np.argsort(first_seen)[:limit]

    return [tuple(int(c) for c in colors[i]) for i in order]
