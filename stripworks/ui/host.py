"""
Host display loop - the single per-frame callback that drives every session.
"""
import logging
from typing import Callable, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)

_running = False


def init(title: str, size: Tuple[int, int]) -> pygame.Surface:
    """Open the window and return its surface."""
    pygame.init()
    pygame.display.set_caption(title)
    return pygame.display.set_mode(size)


def quit() -> None:
    """Ask the running loop to exit after the current frame."""
    global _running
    _running = False


def run(
    update: Callable[[float], None],
    render: Callable[[], None],
    on_key: Optional[Callable[[int], None]] = None,
    on_event: Optional[Callable[[pygame.event.Event], bool]] = None,
    fps: int = 60,
) -> None:
    """
    Run until quit() or the window closes.

    Each frame: dispatch events, call update(dt) with dt in seconds, call
    render(), flip. on_event returns True to consume an event before on_key
    sees it.
    """
    global _running
    _running = True
    clock = pygame.time.Clock()
    logger.info(f"Display loop started ({fps} fps)")

    try:
        while _running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    _running = False
                    break
                if on_event is not None and on_event(event):
                    continue
                if event.type == pygame.KEYDOWN and on_key is not None:
                    on_key(event.key)

            if not _running:
                break

            dt = clock.tick(fps) / 1000.0
            update(dt)
            render()
            pygame.display.flip()
    finally:
        _running = False
        logger.info("Display loop stopped")
        pygame.quit()
