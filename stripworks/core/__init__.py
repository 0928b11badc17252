"""
Stripworks engine. NO UI DEPENDENCIES.
"""

from stripworks.core.slicer import slice_strip, stitch_frames, stack_strips, frame_rect
from stripworks.core.timeline import Timeline
from stripworks.core.flood_fill import flood_fill
from stripworks.core.palette import extract_palette
from stripworks.core.pixel_editor import PixelEditor, Tool
from stripworks.core.ticker import FrameLoop, Tickable
from stripworks.core.playback import PlaybackScheduler, contain_rect
from stripworks.core.runtime import RuntimePreview
from stripworks.core.session import AnimationSession, PixelEditSession, RuntimeSession

__all__ = [
    "slice_strip", "stitch_frames", "stack_strips", "frame_rect",
    "Timeline",
    "flood_fill",
    "extract_palette",
    "PixelEditor", "Tool",
    "FrameLoop", "Tickable",
    "PlaybackScheduler", "contain_rect",
    "RuntimePreview",
    "AnimationSession", "PixelEditSession", "RuntimeSession",
]
