"""
Frame slicer/stitcher - converts horizontal sprite strips to frame sequences and back.
NO UI DEPENDENCIES.

Strip layout: frame_count equal-width frames concatenated left to right, with
frame_width = strip_width // frame_count. When the strip width is not evenly
divisible, the rightmost remainder columns are dropped (truncation, never
padding), so slicing is deterministic but lossy for such strips.
"""
from typing import List, Sequence, Tuple

from PIL import Image


def frame_width_for(strip_width: int, frame_count: int) -> int:
    """Width of one frame in a strip of the given width."""
    return strip_width // max(1, frame_count)


def frame_rect(index: int, frame_width: int, frame_height: int) -> Tuple[int, int, int, int]:
    """
    Source rectangle of frame `index` within a strip.

    Returns:
        (x, y, width, height) with x = index * frame_width
    """
    return (index * frame_width, 0, frame_width, frame_height)


def slice_strip(strip: Image.Image, frame_count: int) -> List[Image.Image]:
    """
    Split a horizontal strip into independent frame bitmaps.

    Args:
        strip: Source strip bitmap
        frame_count: Declared number of frames (values below 1 are treated as 1)

    Returns:
        List of exactly frame_count RGBA images, each strip.width // frame_count wide

    Raises:
        ValueError: if the strip is narrower than frame_count pixels
    """
    frame_count = max(1, frame_count)
    frame_width = frame_width_for(strip.width, frame_count)
    if frame_width == 0:
        raise ValueError(
            f"Strip of width {strip.width} cannot hold {frame_count} frames"
        )

    strip = strip.convert("RGBA")
    frames = []
    for i in range(frame_count):
        x, y, w, h = frame_rect(i, frame_width, strip.height)
        # crop() returns a new image, so frames never alias the strip
        frames.append(strip.crop((x, y, x + w, y + h)))
    return frames


def stitch_frames(frames: Sequence[Image.Image]) -> Image.Image:
    """
    Write frames left to right, with no gaps, into a new strip.

    The first frame's size is canonical: the strip is
    first.width * len(frames) wide and first.height tall. Later frames are
    pasted at their slot origin as-is; keeping them the same size is the
    caller's job.
    """
    if not frames:
        raise ValueError("No frames to stitch")

    frame_width, frame_height = frames[0].size
    strip = Image.new("RGBA", (frame_width * len(frames), frame_height), (0, 0, 0, 0))

    for i, frame in enumerate(frames):
        x, y, _, _ = frame_rect(i, frame_width, frame_height)
        strip.paste(frame.convert("RGBA"), (x, y))

    return strip


def stack_strips(strips: Sequence[Image.Image]) -> Image.Image:
    """
    Stack strips top to bottom into one group sheet.

    The sheet is as wide as the widest strip and as tall as all strips combined;
    narrower strips are left-aligned over transparency.
    """
    if not strips:
        raise ValueError("No strips to stack")

    sheet_width = max(s.width for s in strips)
    sheet_height = sum(s.height for s in strips)
    sheet = Image.new("RGBA", (sheet_width, sheet_height), (0, 0, 0, 0))

    y_offset = 0
    for strip in strips:
        sheet.paste(strip.convert("RGBA"), (0, y_offset))
        y_offset += strip.height

    return sheet
