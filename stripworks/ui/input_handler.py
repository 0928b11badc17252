"""
Input Handler - translates key and mouse events into engine commands.
This is a THIN ADAPTER - no editing logic here.
"""
import pygame

from stripworks.core.physics import InputSnapshot
from stripworks.core.pixel_editor import PixelEditor, Tool
from stripworks.core.timeline import Timeline

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
JUMP_KEYS = (pygame.K_UP, pygame.K_SPACE, pygame.K_w)

TOOL_KEYS = {
    pygame.K_b: Tool.BRUSH,
    pygame.K_e: Tool.ERASER,
    pygame.K_f: Tool.BUCKET,
    pygame.K_i: Tool.PICKER,
}


def snapshot_from_keys(pressed) -> InputSnapshot:
    """Build one tick's input from a pygame.key.get_pressed() result."""
    return InputSnapshot(
        left=any(pressed[k] for k in LEFT_KEYS),
        right=any(pressed[k] for k in RIGHT_KEYS),
        jump=any(pressed[k] for k in JUMP_KEYS),
    )


def read_input() -> InputSnapshot:
    """Capture the current keyboard state."""
    return snapshot_from_keys(pygame.key.get_pressed())


def handle_timeline_key(timeline: Timeline, key: int) -> bool:
    """
    Apply a timeline editing key.
    Returns True if the key was recognized.

    Keys:
        Left/Right: select previous/next frame (pauses)
        [ / ]: move selected frame earlier/later
        D: duplicate, X/Delete: delete
        Space: play/pause, -/=: slower/faster, R: reset to the source strip
    """
    selected = timeline.selected
    if key == pygame.K_LEFT:
        timeline.pick(selected - 1)
    elif key == pygame.K_RIGHT:
        timeline.pick(selected + 1)
    elif key == pygame.K_LEFTBRACKET:
        timeline.move_frame(selected, -1)
    elif key == pygame.K_RIGHTBRACKET:
        timeline.move_frame(selected, 1)
    elif key == pygame.K_d:
        timeline.duplicate_frame(selected)
    elif key in (pygame.K_x, pygame.K_DELETE):
        timeline.delete_frame(selected)
    elif key == pygame.K_SPACE:
        timeline.toggle_playback()
    elif key == pygame.K_MINUS:
        timeline.set_fps(timeline.fps - 1)
    elif key == pygame.K_EQUALS:
        timeline.set_fps(timeline.fps + 1)
    elif key == pygame.K_r:
        timeline.reset()
    else:
        return False
    return True


def handle_pixel_key(editor: PixelEditor, key: int) -> bool:
    """
    Apply a pixel editor key.
    Returns True if the key was recognized.

    Keys:
        B/E/F/I: brush, eraser, fill, picker
        -/=: zoom out/in
        1-9, 0: pick a palette color (0 is the tenth)
    """
    if key in TOOL_KEYS:
        editor.set_tool(TOOL_KEYS[key])
    elif key == pygame.K_MINUS:
        editor.zoom_out()
    elif key == pygame.K_EQUALS:
        editor.zoom_in()
    elif pygame.K_0 <= key <= pygame.K_9:
        index = (key - pygame.K_1) % 10
        if index < len(editor.palette):
            r, g, b = editor.palette[index]
            editor.color = (r, g, b, 255)
    else:
        return False
    return True
