"""
Runtime renderer - draws RuntimeFrame projections of the preview simulation.
This is a THIN ADAPTER - no physics here.
"""
import math
from typing import Dict, Optional, Tuple

import pygame

from stripworks.core.assets import STATE_SLOTS, AssetBinding, AssetSlot
from stripworks.core.constants import (
    FLOOR_MARGIN, PLATFORM_TILES, SPRITE_SCALE, TILE_SIZE,
)
from stripworks.core.runtime import RuntimeFrame
from stripworks.core.slicer import frame_rect, frame_width_for
from stripworks.ui.surfaces import image_to_surface

# Colors
COLOR_SKY = (26, 26, 42)
COLOR_GROUND = (51, 51, 51)
COLOR_PLAYER_BOX = (255, 0, 0)
COLOR_HUD = (255, 255, 255)


class RuntimeRenderer:
    """
    Renders the runtime preview onto its own canvas.

    Reads bitmaps from the binding once; never touches simulation state.
    """

    def __init__(self, binding: AssetBinding, viewport: Tuple[int, int], hud: bool = True):
        self.binding = binding
        self.canvas = pygame.Surface(viewport)
        self.hud = hud
        self._font: Optional[pygame.font.Font] = None

        self.surfaces: Dict[AssetSlot, pygame.Surface] = {}
        for slot in AssetSlot:
            resolved = binding.get(slot)
            if resolved is not None:
                self.surfaces[slot] = image_to_surface(resolved.bitmap)

        # Background is stretched once; it never changes
        self.background = None
        if AssetSlot.BACKGROUND in self.surfaces:
            self.background = pygame.transform.scale(self.surfaces[AssetSlot.BACKGROUND], viewport)

    @property
    def font(self) -> pygame.font.Font:
        if self._font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            self._font = pygame.font.Font(None, 16)
        return self._font

    def draw(self, frame: RuntimeFrame) -> None:
        self.render_background()
        self.render_ground(frame)
        self.render_enemy(frame)
        self.render_player(frame)
        if self.hud:
            self.render_hud(frame)

    def render_background(self) -> None:
        if self.background is not None:
            self.canvas.blit(self.background, (0, 0))
        else:
            self.canvas.fill(COLOR_SKY)

    def render_ground(self, frame: RuntimeFrame) -> None:
        width = self.canvas.get_width()
        floor_y = frame.stage.floor_y
        platform = frame.stage.platform
        tile = self.surfaces.get(AssetSlot.TILE)

        if tile is None:
            self.canvas.fill(COLOR_GROUND, (0, floor_y, width, FLOOR_MARGIN))
            self.canvas.fill(COLOR_GROUND, (platform.x, platform.y, platform.width, platform.height))
            return

        tile = pygame.transform.scale(tile, (TILE_SIZE, TILE_SIZE))
        for i in range(math.ceil(width / TILE_SIZE)):
            self.canvas.blit(tile, (i * TILE_SIZE, floor_y))
            self.canvas.blit(tile, (i * TILE_SIZE, floor_y + TILE_SIZE))
        for i in range(PLATFORM_TILES):
            self.canvas.blit(tile, (platform.x + i * TILE_SIZE, platform.y))

    def render_enemy(self, frame: RuntimeFrame) -> None:
        enemy = self.surfaces.get(AssetSlot.ENEMY)
        if enemy is None:
            return
        resolved = self.binding.get(AssetSlot.ENEMY)
        frame_width = frame_width_for(enemy.get_width(), resolved.frame_count)
        first = enemy.subsurface(frame_rect(0, frame_width, enemy.get_height()))
        sprite = pygame.transform.scale(first, (TILE_SIZE, TILE_SIZE))
        self.canvas.blit(sprite, (round(frame.enemy_x), frame.stage.floor_y - TILE_SIZE))

    def player_sprite(self, frame: RuntimeFrame) -> Optional[pygame.Surface]:
        """Current animation frame, scaled and mirrored when facing left."""
        sheet = self.surfaces.get(STATE_SLOTS[frame.state])
        if sheet is None or frame.source_rect is None:
            return None
        x, y, w, h = frame.source_rect
        if w <= 0 or x + w > sheet.get_width():
            return None

        sprite = pygame.transform.scale(
            sheet.subsurface((x, y, w, h)),
            (frame.width * SPRITE_SCALE, frame.height * SPRITE_SCALE),
        )
        if not frame.facing_right:
            sprite = pygame.transform.flip(sprite, True, False)
        return sprite

    def render_player(self, frame: RuntimeFrame) -> None:
        sprite = self.player_sprite(frame)
        if sprite is None:
            self.canvas.fill(COLOR_PLAYER_BOX, (round(frame.x), round(frame.y), frame.width, frame.height))
            return

        # Centered on the hitbox, feet on its bottom edge
        dest_x = frame.x + frame.width / 2 - sprite.get_width() / 2
        dest_y = frame.y + frame.height - sprite.get_height()
        self.canvas.blit(sprite, (round(dest_x), round(dest_y)))

    def render_hud(self, frame: RuntimeFrame) -> None:
        lines = [
            (f"STATE: {frame.state.value.upper()}", 10),
            (f"VELOCITY: {frame.vx:.1f}, {frame.vy:.1f}", 25),
        ]
        for text, y in lines:
            self.canvas.blit(self.font.render(text, False, COLOR_HUD), (10, y))
        hint = self.font.render("ARROWS to Move, SPACE to Jump", False, COLOR_HUD)
        self.canvas.blit(hint, (10, self.canvas.get_height() - 20))
