"""
Editing sessions - open, edit, save/close lifecycles around the engine pieces.
NO UI DEPENDENCIES.

A session decodes its source in open() (the only wait), then registers exactly
one Tickable on its surface. close() always deregisters it. Opening another
session on the same surface stops this one, after which it reports closed.

Save contract: on_save(asset_id, png_bytes, frame_count) for strips,
on_save(asset_id, png_bytes) for single-image edits; called once per
successful save, after which the session is closed.
"""
import logging
from typing import Callable, Optional, Tuple

from PIL import Image

from ..errors import SessionClosed
from .assets import AssetBinding, AssetResolver
from .bitmap import BitmapSource, encode_png, from_buffer, load_bitmap, to_buffer
from .constants import DEFAULT_FPS, PALETTE_LIMIT
from .pixel_editor import PixelEditor
from .playback import FrameView, PlaybackScheduler
from .runtime import InputSource, RuntimePreview, RuntimeView
from .ticker import FrameLoop, Tickable
from .timeline import Timeline

logger = logging.getLogger(__name__)

SaveCallback = Callable[..., None]


class EditorSession:
    """Base lifecycle: one surface, one registration."""

    surface = "session"

    def __init__(self, asset_id: str, loop: FrameLoop):
        self.asset_id = asset_id
        self.loop = loop
        self._tickable: Optional[Tickable] = None

    @property
    def is_open(self) -> bool:
        # A later session on the same surface stops our tickable
        return self._tickable is not None and self._tickable.is_running

    def _require_open(self) -> None:
        if not self.is_open:
            raise SessionClosed(f"{type(self).__name__} for {self.asset_id} is not open")

    def _attach(self, tickable: Tickable) -> None:
        self._tickable = tickable
        self.loop.register(self.surface, tickable)
        logger.info(f"Opened {type(self).__name__} for {self.asset_id}")

    def close(self) -> None:
        """Deregister from the frame loop. Safe to call more than once."""
        if self._tickable is None:
            return
        if self.loop.get(self.surface) is self._tickable:
            self.loop.cancel(self.surface)
        self._tickable.stop()
        self._tickable = None
        logger.info(f"Closed {type(self).__name__} for {self.asset_id}")


class AnimationSession(EditorSession):
    """
    Timeline editing of one sprite strip, with a live playback preview.

    Usage:
        session = AnimationSession("a1", "spr_run_strip8.png", 8, loop, on_save)
        session.open()
        session.timeline.duplicate_frame(0)
        session.save()
    """

    surface = "animation"

    def __init__(
        self,
        asset_id: str,
        source: BitmapSource,
        frame_count: int,
        loop: FrameLoop,
        on_save: SaveCallback,
        fps: int = DEFAULT_FPS,
        view: Optional[FrameView] = None,
    ):
        super().__init__(asset_id, loop)
        self.source = source
        self.frame_count = frame_count
        self.on_save = on_save
        self.fps = fps
        self.view = view
        self.timeline: Optional[Timeline] = None
        self.scheduler: Optional[PlaybackScheduler] = None

    def open(self) -> "AnimationSession":
        """
        Decode and slice the source strip, then start playback.

        Raises:
            DecodeFailure: if the strip cannot be decoded; the session stays closed
        """
        strip = load_bitmap(self.source)
        self.timeline = Timeline.from_strip(strip, self.frame_count, fps=self.fps)
        self.scheduler = PlaybackScheduler(self.timeline, self.view)
        self._attach(self.scheduler)
        return self

    def save(self) -> Tuple[Image.Image, int]:
        """Stitch, hand the strip to on_save, and close."""
        self._require_open()
        strip, frame_count = self.timeline.stitch()
        self.on_save(self.asset_id, encode_png(strip), frame_count)
        logger.info(f"Saved {frame_count}-frame strip for {self.asset_id}")
        self.close()
        return strip, frame_count


class CanvasRefresh(Tickable):
    """Redraws the pixel editor's canvas on the next frame after a change."""

    def __init__(self, editor: PixelEditor, view=None):
        self.editor = editor
        self.view = view

    def tick(self, dt: float) -> None:
        if self.editor.dirty and self.view is not None:
            self.view.draw(self.editor)
        self.editor.dirty = False


class PixelEditSession(EditorSession):
    """Manual pixel editing of a single bitmap."""

    surface = "pixel_editor"

    def __init__(
        self,
        asset_id: str,
        source: BitmapSource,
        loop: FrameLoop,
        on_save: SaveCallback,
        palette_limit: int = PALETTE_LIMIT,
        view=None,
    ):
        super().__init__(asset_id, loop)
        self.source = source
        self.on_save = on_save
        self.palette_limit = palette_limit
        self.view = view
        self.editor: Optional[PixelEditor] = None

    def open(self) -> "PixelEditSession":
        """
        Decode the source into an editable buffer.

        Raises:
            DecodeFailure: if the bitmap cannot be decoded; the session stays closed
        """
        bitmap = load_bitmap(self.source)
        self.editor = PixelEditor(to_buffer(bitmap), palette_limit=self.palette_limit)
        self._attach(CanvasRefresh(self.editor, self.view))
        return self

    def save(self) -> Image.Image:
        """Encode the buffer, hand it to on_save (no frame count), and close."""
        self._require_open()
        image = from_buffer(self.editor.buffer)
        self.on_save(self.asset_id, encode_png(image))
        logger.info(f"Saved manual edit for {self.asset_id}")
        self.close()
        return image


class RuntimeSession(EditorSession):
    """The playable preview of a whole asset set."""

    surface = "runtime"

    def __init__(
        self,
        resolver: AssetResolver,
        viewport: Tuple[int, int],
        loop: FrameLoop,
        inputs: Optional[InputSource] = None,
        view: Optional[RuntimeView] = None,
        name: str = "project",
    ):
        super().__init__(name, loop)
        self.resolver = resolver
        self.viewport = viewport
        self.inputs = inputs
        self.view = view
        self.binding: Optional[AssetBinding] = None
        self.preview: Optional[RuntimePreview] = None

    def open(self) -> "RuntimeSession":
        """
        Resolve and decode every slot once, then start the simulation.

        Raises:
            DecodeFailure: if a bound asset cannot be decoded; the session stays closed
        """
        self.binding = AssetBinding.resolve(self.resolver)
        self.preview = RuntimePreview(self.binding, self.viewport, self.inputs, self.view)
        self._attach(self.preview)
        return self
