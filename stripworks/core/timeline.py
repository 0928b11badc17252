"""
Timeline editor - an ordered, editable frame sequence backing one animation.
NO UI DEPENDENCIES.
"""
import logging
from typing import List, Optional, Tuple

from PIL import Image

from .constants import DEFAULT_FPS, MIN_FPS, MAX_FPS
from .slicer import slice_strip, stitch_frames

logger = logging.getLogger(__name__)


def clamp_fps(fps: int) -> int:
    """Clamp a playback rate into [MIN_FPS, MAX_FPS]."""
    return max(MIN_FPS, min(MAX_FPS, int(fps)))


class Timeline:
    """
    Ordered frame sequence with a selection, a playback flag and a rate.

    Structural edits never leave fewer than one frame and always leave the
    selection inside [0, len(frames)). Refused edits return False instead of
    raising.

    Usage:
        timeline = Timeline.from_strip(strip, frame_count=8)
        timeline.duplicate_frame(2)
        timeline.move_frame(3, +1)
        strip, count = timeline.stitch()
    """

    def __init__(self, frames: List[Image.Image], fps: int = DEFAULT_FPS,
                 source: Optional[Tuple[Image.Image, int]] = None):
        if not frames:
            raise ValueError("A timeline needs at least one frame")
        self.frames: List[Image.Image] = list(frames)
        self.selected: int = 0
        self.playing: bool = True
        self.fps: int = clamp_fps(fps)
        # (strip, frame_count) the timeline was sliced from, kept for reset()
        self._source = source

    @classmethod
    def from_strip(cls, strip: Image.Image, frame_count: int, fps: int = DEFAULT_FPS) -> "Timeline":
        """Slice a strip into a new timeline."""
        return cls(slice_strip(strip, frame_count), fps=fps, source=(strip, frame_count))

    def __len__(self) -> int:
        return len(self.frames)

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def selected_frame(self) -> Image.Image:
        return self.frames[self.selected]

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self.frames) - 1))

    # =========================================================================
    # SELECTION & PLAYBACK
    # =========================================================================

    def select(self, index: int) -> None:
        """Select a frame, clamping silently into range."""
        self.selected = self._clamp(index)

    def pick(self, index: int) -> None:
        """Select a frame from the timeline strip; this also pauses playback."""
        self.select(index)
        self.playing = False

    def toggle_playback(self) -> bool:
        """Flip between playing and paused. Returns the new playing flag."""
        self.playing = not self.playing
        return self.playing

    def set_fps(self, fps: int) -> int:
        """Set the playback rate, clamped to [MIN_FPS, MAX_FPS]."""
        self.fps = clamp_fps(fps)
        return self.fps

    # =========================================================================
    # STRUCTURAL EDITS
    # =========================================================================

    def move_frame(self, index: int, direction: int) -> bool:
        """
        Swap frame `index` with its neighbour in `direction` (-1 or +1).
        The selection follows the moved frame.
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction}")
        target = index + direction
        if not (0 <= index < len(self.frames)) or not (0 <= target < len(self.frames)):
            logger.debug(f"Rejected move of frame {index} by {direction}")
            return False

        self.frames[index], self.frames[target] = self.frames[target], self.frames[index]
        self.selected = target
        return True

    def delete_frame(self, index: int) -> bool:
        """Remove frame `index`. Refused when it is the only frame."""
        if len(self.frames) <= 1 or not (0 <= index < len(self.frames)):
            logger.debug(f"Rejected delete of frame {index} ({len(self.frames)} frames)")
            return False

        del self.frames[index]
        if self.selected >= len(self.frames):
            self.selected = len(self.frames) - 1
        return True

    def duplicate_frame(self, index: int) -> bool:
        """Insert a copy of frame `index` right after it and select the copy."""
        if not (0 <= index < len(self.frames)):
            logger.debug(f"Rejected duplicate of frame {index}")
            return False

        self.frames.insert(index + 1, self.frames[index].copy())
        self.selected = index + 1
        return True

    def reset(self) -> bool:
        """Re-slice the source strip, discarding all edits."""
        if self._source is None:
            return False
        strip, frame_count = self._source
        self.frames = slice_strip(strip, frame_count)
        self.selected = self._clamp(self.selected)
        return True

    # =========================================================================
    # SAVE
    # =========================================================================

    def stitch(self) -> Tuple[Image.Image, int]:
        """Stitch the current sequence back into a strip."""
        return stitch_frames(self.frames), len(self.frames)
