"""
Editor windows - pygame front ends for the animation, pixel and runtime sessions.
This is a THIN ADAPTER - sessions own all editing state.
"""
import logging
from typing import List, Optional, Tuple

import pygame

from stripworks.core.pixel_editor import PixelEditor
from stripworks.core.session import AnimationSession, PixelEditSession, RuntimeSession
from stripworks.core.ticker import FrameLoop
from stripworks.ui import host
from stripworks.ui.input_handler import handle_pixel_key, handle_timeline_key
from stripworks.ui.surfaces import blit_scaled, buffer_to_surface, checkerboard, image_to_surface

logger = logging.getLogger(__name__)

# Colors
COLOR_BG = (30, 30, 40)
COLOR_PANEL = (45, 45, 58)
COLOR_SELECTED = (255, 200, 0)
COLOR_TEXT = (220, 220, 220)

THUMB_SIZE = 64
THUMB_GAP = 8
STRIP_HEIGHT = THUMB_SIZE + 40
SWATCH_SIZE = 24
CANVAS_ORIGIN = (16, 16)

SAVE_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)


def _font() -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, 18)


class CanvasView:
    """Zoomed image of the pixel editor's buffer over a checkerboard."""

    def __init__(self):
        self.canvas: Optional[pygame.Surface] = None
        self.draws = 0

    def draw(self, editor: PixelEditor) -> None:
        size = editor.display_size
        canvas = checkerboard(size, cell=max(4, editor.zoom * 2))
        blit_scaled(canvas, buffer_to_surface(editor.buffer), (0, 0, size[0], size[1]))
        self.canvas = canvas
        self.draws += 1


class TimelineWindow:
    """Playback preview above a row of clickable frame thumbnails."""

    def __init__(self, screen: pygame.Surface, session: AnimationSession):
        self.screen = screen
        self.session = session
        self.font = _font()
        self.scroll = 0

    @property
    def preview_origin(self) -> Tuple[int, int]:
        view = self.session.view
        x = (self.screen.get_width() - view.size[0]) // 2
        return x, 0

    @property
    def thumbs_per_row(self) -> int:
        return max(1, (self.screen.get_width() - THUMB_GAP) // (THUMB_SIZE + THUMB_GAP))

    def thumb_rects(self) -> List[Tuple[int, pygame.Rect]]:
        """
        (frame index, rect) for each visible thumbnail.

        The row scrolls just far enough to keep the selected frame on screen.
        """
        count = self.session.timeline.frame_count
        selected = self.session.timeline.selected
        per_row = self.thumbs_per_row
        if selected < self.scroll:
            self.scroll = selected
        elif selected >= self.scroll + per_row:
            self.scroll = selected - per_row + 1
        self.scroll = max(0, min(self.scroll, count - per_row))

        top = self.screen.get_height() - STRIP_HEIGHT + 8
        return [
            (i, pygame.Rect(THUMB_GAP + (i - self.scroll) * (THUMB_SIZE + THUMB_GAP), top, THUMB_SIZE, THUMB_SIZE))
            for i in range(self.scroll, min(count, self.scroll + per_row))
        ]

    def on_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.session.close()
            host.quit()
        elif key in SAVE_KEYS:
            self.session.save()
            host.quit()
        else:
            handle_timeline_key(self.session.timeline, key)

    def on_event(self, event: pygame.event.Event) -> bool:
        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return False
        for index, rect in self.thumb_rects():
            if rect.collidepoint(event.pos):
                self.session.timeline.pick(index)
                return True
        return False

    def render(self) -> None:
        self.screen.fill(COLOR_BG)
        timeline = self.session.timeline
        if timeline is None:
            return

        self.screen.blit(self.session.view.canvas, self.preview_origin)

        strip_top = self.screen.get_height() - STRIP_HEIGHT
        self.screen.fill(COLOR_PANEL, (0, strip_top, self.screen.get_width(), STRIP_HEIGHT))
        for index, rect in self.thumb_rects():
            frame = timeline.frames[index]
            scale = min(rect.width / frame.width, rect.height / frame.height)
            blit_scaled(self.screen, image_to_surface(frame),
                        (rect.x, rect.y, frame.width * scale, frame.height * scale))
            if index == timeline.selected:
                pygame.draw.rect(self.screen, COLOR_SELECTED, rect.inflate(4, 4), 2)

        state = "PLAYING" if timeline.playing else "PAUSED"
        status = f"{state}  {timeline.fps} FPS  FRAME {timeline.selected + 1}/{timeline.frame_count}"
        self.screen.blit(self.font.render(status, False, COLOR_TEXT), (THUMB_GAP, self.screen.get_height() - 22))


class PixelEditorWindow:
    """Zoomable canvas with palette swatches down the right edge."""

    def __init__(self, screen: pygame.Surface, session: PixelEditSession):
        self.screen = screen
        self.session = session
        self.font = _font()

    @property
    def editor(self) -> PixelEditor:
        return self.session.editor

    def _canvas_pos(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        return pos[0] - CANVAS_ORIGIN[0], pos[1] - CANVAS_ORIGIN[1]

    def swatch_rects(self) -> List[pygame.Rect]:
        left = self.screen.get_width() - SWATCH_SIZE - 16
        return [
            pygame.Rect(left, 16 + i * (SWATCH_SIZE + 4), SWATCH_SIZE, SWATCH_SIZE)
            for i in range(len(self.editor.palette))
        ]

    def on_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.session.close()
            host.quit()
        elif key in SAVE_KEYS:
            self.session.save()
            host.quit()
        elif handle_pixel_key(self.editor, key):
            self.editor.dirty = True

    def on_event(self, event: pygame.event.Event) -> bool:
        editor = self.editor
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for (r, g, b), rect in zip(editor.palette, self.swatch_rects()):
                if rect.collidepoint(event.pos):
                    editor.color = (r, g, b, 255)
                    return True
            editor.pointer_down(*self._canvas_pos(event.pos))
            return True
        if event.type == pygame.MOUSEMOTION:
            editor.pointer_move(*self._canvas_pos(event.pos))
            return True
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            editor.pointer_up()
            return True
        if event.type == pygame.MOUSEWHEEL:
            if event.y > 0:
                editor.zoom_in()
            elif event.y < 0:
                editor.zoom_out()
            editor.dirty = True
            return True
        return False

    def render(self) -> None:
        self.screen.fill(COLOR_BG)
        view = self.session.view
        if view.canvas is not None:
            self.screen.blit(view.canvas, CANVAS_ORIGIN)

        for (r, g, b), rect in zip(self.editor.palette, self.swatch_rects()):
            self.screen.fill((r, g, b), rect)
            if (r, g, b, 255) == tuple(self.editor.color):
                pygame.draw.rect(self.screen, COLOR_SELECTED, rect.inflate(4, 4), 2)

        status = f"{self.editor.tool.value.upper()}  {self.editor.color_hex}  {self.editor.zoom}x"
        self.screen.blit(self.font.render(status, False, COLOR_TEXT), (16, self.screen.get_height() - 22))


class RuntimeWindow:
    """Blits the runtime renderer's canvas."""

    def __init__(self, screen: pygame.Surface, session: RuntimeSession):
        self.screen = screen
        self.session = session

    def on_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.session.close()
            host.quit()
        elif key == pygame.K_r:
            self.session.preview.reset()

    def render(self) -> None:
        self.screen.blit(self.session.view.canvas, (0, 0))


def run_window(window, loop: FrameLoop, fps: int) -> None:
    """Drive `loop` from the host display loop until the window quits."""
    host.run(
        update=loop.tick,
        render=window.render,
        on_key=window.on_key,
        on_event=getattr(window, "on_event", None),
        fps=fps,
    )
    loop.cancel_all()
