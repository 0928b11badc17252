#!/usr/bin/env python3
"""
Stripworks command line.

Batch commands work on PNG files directly; animate/paint/play open a pygame
window driven by one FrameLoop.

Usage:
    stripworks slice hero_run_strip8.png -o frames/
    stripworks stitch frames/*.png -o hero_run_strip8.png
    stripworks palette hero.png
    stripworks fill hero.png 4 4 "#ff0000" -o hero_red.png
    stripworks sheet idle.png run.png jump.png -o hero_sheet.png
    stripworks animate hero_run_strip8.png --fps 12
    stripworks paint hero.png
    stripworks play project.json
"""
import argparse
import logging
import sys
from pathlib import Path

from stripworks.config import get_settings
from stripworks.core.assets import ManifestResolver, frames_from_filename, load_manifest
from stripworks.core.bitmap import from_buffer, load_bitmap, parse_hex_color, to_buffer
from stripworks.core.flood_fill import flood_fill
from stripworks.core.palette import extract_palette
from stripworks.core.session import AnimationSession, PixelEditSession, RuntimeSession
from stripworks.core.slicer import slice_strip, stack_strips, stitch_frames
from stripworks.core.ticker import FrameLoop
from stripworks.errors import StripworksError

logger = logging.getLogger(__name__)


def _write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    print(f"Saved: {path}")


# =============================================================================
# BATCH COMMANDS
# =============================================================================

def cmd_slice(args) -> int:
    """Split a strip into numbered frame files."""
    strip = load_bitmap(args.strip)
    frame_count = args.frames or frames_from_filename(args.strip.name) or 1
    try:
        frames = slice_strip(strip, frame_count)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    out_dir = args.output or args.strip.parent / args.strip.stem
    out_dir.mkdir(parents=True, exist_ok=True)
    for i, frame in enumerate(frames):
        frame.save(out_dir / f"frame_{i:03d}.png")

    print(f"Sliced {args.strip.name} into {len(frames)} frames of {frames[0].width}x{frames[0].height}")
    print(f"Saved to: {out_dir}")
    return 0


def cmd_stitch(args) -> int:
    """Join frame files left to right into one strip."""
    frames = [load_bitmap(path) for path in args.frames]
    strip = stitch_frames(frames)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    strip.save(args.output)
    print(f"Stitched {len(frames)} frames into {strip.width}x{strip.height}")
    print(f"Saved: {args.output}")
    return 0


def cmd_palette(args) -> int:
    """Print the image's distinct opaque colors in first-seen order."""
    limit = args.limit or get_settings().palette_limit
    palette = extract_palette(to_buffer(load_bitmap(args.image)), limit)
    print(f"Palette ({len(palette)} colors):")
    for r, g, b in palette:
        print(f"  #{r:02x}{g:02x}{b:02x}  ({r}, {g}, {b})")
    return 0


def cmd_fill(args) -> int:
    """Bucket-fill one region of an image."""
    try:
        color = parse_hex_color(args.color)
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    buffer = to_buffer(load_bitmap(args.image))
    filled = flood_fill(buffer, args.x, args.y, color)
    output = args.output or args.image
    from_buffer(buffer).save(output)
    print(f"Filled {filled} pixels")
    print(f"Saved: {output}")
    return 0


def cmd_sheet(args) -> int:
    """Stack strips top to bottom into a group sheet."""
    strips = [load_bitmap(path) for path in args.strips]
    sheet = stack_strips(strips)
    args.output.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(args.output)
    print(f"Sheet: {sheet.width}x{sheet.height} from {len(strips)} strips")
    print(f"Saved: {args.output}")
    return 0


# =============================================================================
# WINDOWED COMMANDS
# =============================================================================

def cmd_animate(args) -> int:
    """Open the timeline editor on a strip."""
    from stripworks.ui import host
    from stripworks.ui.editor_view import TimelineWindow, run_window
    from stripworks.ui.playback_view import PlaybackView

    settings = get_settings()
    frame_count = args.frames or frames_from_filename(args.strip.name) or 1
    output = args.output or args.strip

    def on_save(asset_id: str, png_bytes: bytes, count: int) -> None:
        _write_bytes(output, png_bytes)
        print(f"Frames: {count}")

    loop = FrameLoop()
    try:
        session = AnimationSession(
            args.strip.name, args.strip, frame_count, loop, on_save,
            fps=args.fps or settings.default_fps,
            view=PlaybackView((settings.preview_width, settings.preview_height)),
        ).open()
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    screen = host.init(f"Stripworks - {args.strip.name}", (settings.editor_width, settings.editor_height))

    print("\nControls:")
    print("  Left/Right: Select frame (pauses)    Click: Select frame")
    print("  [ / ]: Move frame    D: Duplicate    X: Delete    R: Reset")
    print("  Space: Play/Pause    -/=: FPS")
    print("  Enter: Save    ESC: Quit\n")
    run_window(TimelineWindow(screen, session), loop, settings.display_fps)
    return 0


def cmd_paint(args) -> int:
    """Open the pixel editor on an image."""
    from stripworks.ui import host
    from stripworks.ui.editor_view import CanvasView, PixelEditorWindow, run_window

    settings = get_settings()
    output = args.output or args.image

    def on_save(asset_id: str, png_bytes: bytes) -> None:
        _write_bytes(output, png_bytes)

    loop = FrameLoop()
    session = PixelEditSession(
        args.image.name, args.image, loop, on_save,
        palette_limit=settings.palette_limit,
        view=CanvasView(),
    ).open()
    screen = host.init(f"Stripworks - {args.image.name}", (settings.editor_width, settings.editor_height))

    print("\nControls:")
    print("  B: Brush    E: Eraser    F: Fill    I: Pick color")
    print("  1-0 or click swatch: Palette color    -/= or wheel: Zoom")
    print("  Enter: Save    ESC: Quit\n")
    run_window(PixelEditorWindow(screen, session), loop, settings.display_fps)
    return 0


def cmd_play(args) -> int:
    """Open the runtime preview for a project manifest."""
    from stripworks.ui import host
    from stripworks.ui.editor_view import RuntimeWindow, run_window
    from stripworks.ui.input_handler import read_input
    from stripworks.ui.runtime_view import RuntimeRenderer

    settings = get_settings()
    manifest = load_manifest(args.manifest)
    viewport = (settings.runtime_width, settings.runtime_height)

    loop = FrameLoop()
    resolver = ManifestResolver(manifest, base_dir=args.manifest.parent)
    try:
        session = RuntimeSession(resolver, viewport, loop, inputs=read_input,
                                 name=args.manifest.stem).open()
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    # The renderer needs the decoded binding, so it is attached after open()
    session.view = session.preview.view = RuntimeRenderer(session.binding, viewport)
    screen = host.init(f"Stripworks - {manifest.theme or args.manifest.stem}", viewport)

    print("\nControls:")
    print("  Arrows/A/D: Move    Up/W/Space: Jump    R: Respawn    ESC: Quit\n")
    run_window(RuntimeWindow(screen, session), loop, settings.display_fps)
    return 0


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stripworks",
        description="Slice, edit, animate and preview pixel-art sprite strips",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # slice
    p_slice = subparsers.add_parser("slice", help="Split a strip into frame files")
    p_slice.add_argument("strip", type=Path, help="Strip image")
    p_slice.add_argument("--frames", "-n", type=int, default=None,
                         help="Frame count (default: from a _stripN filename, else 1)")
    p_slice.add_argument("-o", "--output", type=Path, default=None,
                         help="Output directory (default: <strip stem>/ beside the strip)")
    p_slice.set_defaults(func=cmd_slice)

    # stitch
    p_stitch = subparsers.add_parser("stitch", help="Join frames into a strip")
    p_stitch.add_argument("frames", type=Path, nargs="+", help="Frame images, left to right")
    p_stitch.add_argument("-o", "--output", type=Path, required=True, help="Output strip")
    p_stitch.set_defaults(func=cmd_stitch)

    # palette
    p_palette = subparsers.add_parser("palette", help="List an image's colors")
    p_palette.add_argument("image", type=Path, help="Image file")
    p_palette.add_argument("--limit", type=int, default=None,
                           help="Maximum colors (default: STRIPWORKS_PALETTE_LIMIT)")
    p_palette.set_defaults(func=cmd_palette)

    # fill
    p_fill = subparsers.add_parser("fill", help="Bucket-fill a region")
    p_fill.add_argument("image", type=Path, help="Image file")
    p_fill.add_argument("x", type=int, help="Start column")
    p_fill.add_argument("y", type=int, help="Start row")
    p_fill.add_argument("color", help="Fill color as #rrggbb or #rrggbbaa")
    p_fill.add_argument("-o", "--output", type=Path, default=None,
                        help="Output file (default: overwrite the input)")
    p_fill.set_defaults(func=cmd_fill)

    # sheet
    p_sheet = subparsers.add_parser("sheet", help="Stack strips into a group sheet")
    p_sheet.add_argument("strips", type=Path, nargs="+", help="Strip images, top to bottom")
    p_sheet.add_argument("-o", "--output", type=Path, required=True, help="Output sheet")
    p_sheet.set_defaults(func=cmd_sheet)

    # animate
    p_animate = subparsers.add_parser("animate", help="Edit a strip's frames with live playback")
    p_animate.add_argument("strip", type=Path, help="Strip image")
    p_animate.add_argument("--frames", "-n", type=int, default=None,
                           help="Frame count (default: from a _stripN filename, else 1)")
    p_animate.add_argument("--fps", type=int, default=None,
                           help="Initial playback rate (default: STRIPWORKS_DEFAULT_FPS)")
    p_animate.add_argument("-o", "--output", type=Path, default=None,
                           help="Where to save (default: overwrite the strip)")
    p_animate.set_defaults(func=cmd_animate)

    # paint
    p_paint = subparsers.add_parser("paint", help="Edit an image pixel by pixel")
    p_paint.add_argument("image", type=Path, help="Image file")
    p_paint.add_argument("-o", "--output", type=Path, default=None,
                         help="Where to save (default: overwrite the image)")
    p_paint.set_defaults(func=cmd_paint)

    # play
    p_play = subparsers.add_parser("play", help="Run the platformer preview for a manifest")
    p_play.add_argument("manifest", type=Path, help="Project manifest JSON")
    p_play.set_defaults(func=cmd_play)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        return args.func(args)
    except StripworksError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
