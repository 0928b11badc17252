"""
Tests for the pixel editor's tools, zoom and coordinate mapping.
"""
import numpy as np
import pytest

from stripworks.core.constants import MAX_ZOOM, MIN_ZOOM
from stripworks.core.pixel_editor import (
    TRANSPARENT, PixelEditor, Tool, initial_zoom, screen_to_buffer,
)

RED = (255, 0, 0, 255)
WHITE = (255, 255, 255, 255)


@pytest.fixture
def editor(buffer):
    buffer[0, 0] = RED
    return PixelEditor(buffer)


class TestEditorSetup:
    """Tests for initial editor state."""

    def test_defaults(self, editor):
        """Brush, white, 4x zoom for a small image."""
        assert editor.tool == Tool.BRUSH
        assert editor.color == WHITE
        assert editor.color_hex == "#ffffff"
        assert editor.zoom == 4
        assert editor.display_size == (32, 32)
        assert editor.dirty

    def test_initial_zoom(self):
        assert initial_zoom(16) == 4
        assert initial_zoom(64) == 2
        assert initial_zoom(200) == 2

    def test_palette_computed_on_load(self, editor):
        """Palette is a snapshot; later edits do not change it."""
        assert editor.palette == [(255, 0, 0)]
        editor.apply(3, 3)
        assert editor.palette == [(255, 0, 0)]

    def test_set_color(self, editor):
        editor.set_color("#102030")
        assert editor.color == (16, 32, 48, 255)

    def test_zoom_clamped(self, editor):
        editor.set_zoom(100)
        assert editor.zoom == MAX_ZOOM
        editor.set_zoom(0)
        assert editor.zoom == MIN_ZOOM
        assert editor.zoom_in() == MIN_ZOOM + 1
        assert editor.zoom_out() == MIN_ZOOM
        assert editor.zoom_out() == MIN_ZOOM


class TestTools:
    """Tests for tool application."""

    def test_brush_paints_one_pixel(self, editor):
        assert editor.apply(2, 3)
        assert tuple(editor.buffer[3, 2]) == WHITE
        assert int((editor.buffer[..., 3] > 0).sum()) == 2

    def test_eraser_clears_pixel(self, editor):
        editor.set_tool(Tool.ERASER)
        editor.apply(0, 0)
        assert tuple(editor.buffer[0, 0]) == TRANSPARENT

    def test_bucket_fills_region(self, editor):
        editor.set_tool(Tool.BUCKET)
        editor.apply(5, 5)
        assert tuple(editor.buffer[0, 0]) == RED
        assert tuple(editor.buffer[7, 7]) == WHITE

    def test_bucket_noop_leaves_clean(self, editor):
        """A fill that changes nothing does not mark the canvas dirty."""
        editor.dirty = False
        editor.set_color("#ff0000")
        editor.set_tool(Tool.BUCKET)
        editor.apply(0, 0)
        assert not editor.dirty

    def test_picker_sets_color_and_reverts_to_brush(self, editor):
        """The picker is one-shot and yields an opaque color."""
        editor.buffer[1, 1] = (10, 20, 30, 40)
        editor.set_tool(Tool.PICKER)
        assert editor.apply(1, 1)
        assert editor.color == (10, 20, 30, 255)
        assert editor.tool == Tool.BRUSH
        assert tuple(editor.buffer[1, 1]) == (10, 20, 30, 40)

    def test_out_of_bounds_ignored(self, editor):
        before = editor.buffer.copy()
        assert not editor.apply(8, 0)
        assert not editor.apply(-1, 2)
        assert np.array_equal(editor.buffer, before)


class TestPointer:
    """Tests for pointer strokes and screen mapping."""

    def test_screen_to_buffer_floors(self):
        assert screen_to_buffer(7.9, 4.0, (8, 8), (32, 32)) == (1, 1)
        assert screen_to_buffer(-0.5, 0, (8, 8), (32, 32)) == (-1, 0)

    def test_brush_drag_paints(self, editor):
        """Brush strokes continue while dragging."""
        editor.pointer_down(4, 4)
        editor.pointer_move(12, 4)
        editor.pointer_up()
        assert tuple(editor.buffer[1, 1]) == WHITE
        assert tuple(editor.buffer[1, 3]) == WHITE
        # No interpolation between samples
        assert tuple(editor.buffer[1, 2]) == TRANSPARENT

    def test_move_without_press_does_nothing(self, editor):
        assert editor.pointer_move(12, 12) is None
        assert tuple(editor.buffer[3, 3]) == TRANSPARENT

    def test_bucket_ignores_drag(self, editor):
        """Click-only tools apply on press only."""
        editor.set_tool(Tool.BUCKET)
        editor.set_color("#00ff00")
        editor.pointer_down(0, 0)
        editor.buffer[...] = 0
        assert editor.pointer_move(20, 20) is None
        assert tuple(editor.buffer[5, 5]) == TRANSPARENT

    def test_pointer_respects_zoom(self, editor):
        editor.set_zoom(1)
        editor.pointer_down(6, 2)
        assert tuple(editor.buffer[2, 6]) == WHITE
