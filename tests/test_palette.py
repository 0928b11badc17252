"""
Tests for palette extraction.
"""
import numpy as np

from stripworks.core.palette import extract_palette


class TestExtractPalette:
    """Tests for extract_palette."""

    def test_first_seen_order_ignoring_transparent(self, buffer):
        """Three opaque colors come back in raster order."""
        buffer[0, 5] = (0, 0, 255, 255)
        buffer[1, 0] = (255, 0, 0, 255)
        buffer[0, 2] = (0, 255, 0, 255)
        buffer[7, 7] = (255, 0, 0, 255)
        assert extract_palette(buffer) == [(0, 255, 0), (0, 0, 255), (255, 0, 0)]

    def test_empty_when_all_transparent(self, buffer):
        assert extract_palette(buffer) == []

    def test_transparent_pixels_with_color_are_skipped(self, buffer):
        """Zero alpha hides a pixel regardless of its RGB."""
        buffer[0, 0] = (10, 20, 30, 0)
        buffer[0, 1] = (40, 50, 60, 128)
        assert extract_palette(buffer) == [(40, 50, 60)]

    def test_limit(self):
        """At most `limit` colors are reported, earliest first."""
        buffer = np.zeros((1, 30, 4), dtype=np.uint8)
        for i in range(30):
            buffer[0, i] = (i, 0, 0, 255)
        palette = extract_palette(buffer, limit=20)
        assert len(palette) == 20
        assert palette[0] == (0, 0, 0)
        assert palette[-1] == (19, 0, 0)

    def test_values_are_plain_ints(self, buffer):
        buffer[0, 0] = (1, 2, 3, 255)
        (color,) = extract_palette(buffer)
        assert all(type(c) is int for c in color)
