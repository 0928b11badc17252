"""
Playback scheduler - steps a timeline preview at its configured rate.
NO UI DEPENDENCIES.
"""
from typing import Optional, Protocol, Tuple

from PIL import Image

from .constants import CONTAIN_FILL, TIMING_EPSILON
from .ticker import Tickable
from .timeline import Timeline


class FrameView(Protocol):
    """Anything that can show one preview frame (see ui.playback_view)."""

    def draw(self, frame: Image.Image) -> None:
        ...


def contain_rect(
    image_size: Tuple[int, int],
    viewport_size: Tuple[int, int],
    fill: float = CONTAIN_FILL,
) -> Tuple[float, float, float, float]:
    """
    Aspect-preserving placement of an image inside a viewport.

    The image is scaled to fill `fill` of the viewport along its limiting axis
    and centered.

    Returns:
        (x, y, width, height) of the drawn image
    """
    img_w, img_h = image_size
    view_w, view_h = viewport_size
    scale = min(view_w / img_w, view_h / img_h) * fill
    draw_w = img_w * scale
    draw_h = img_h * scale
    return ((view_w - draw_w) / 2, (view_h - draw_h) / 2, draw_w, draw_h)


class PlaybackScheduler(Tickable):
    """
    Advances the displayed frame once every 1/fps seconds.

    While the timeline is playing the index wraps through the sequence; while
    paused it is pinned to the timeline's selection (0 if that is invalid).
    The view is redrawn only when the interval elapses. Leftover time carries
    into the next interval; after a stall at most one frame is advanced.
    """

    def __init__(self, timeline: Timeline, view: Optional[FrameView] = None):
        self.timeline = timeline
        self.view = view
        self.index: int = 0
        self.elapsed: float = 0.0

    @property
    def interval(self) -> float:
        """Seconds per frame at the timeline's current rate."""
        return 1.0 / self.timeline.fps

    @property
    def current_index(self) -> int:
        """Displayed index, 0 if an edit left the stored one out of range."""
        return self.index if 0 <= self.index < len(self.timeline) else 0

    @property
    def current_frame(self) -> Image.Image:
        return self.timeline.frames[self.current_index]

    def start(self) -> None:
        super().start()
        self.elapsed = 0.0

    def tick(self, dt: float) -> None:
        # fps changes only alter the interval; elapsed time carries over
        self.elapsed += dt
        interval = self.interval
        if self.elapsed + TIMING_EPSILON < interval:
            return

        count = len(self.timeline)
        if self.timeline.playing:
            self.index = (self.current_index + 1) % count
        else:
            selected = self.timeline.selected
            self.index = selected if 0 <= selected < count else 0
        self.elapsed = max(0.0, self.elapsed - interval) % interval

        if self.view is not None:
            self.view.draw(self.current_frame)
