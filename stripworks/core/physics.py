"""
Player physics and movement state for the runtime preview.
NO UI DEPENDENCIES.

All quantities are per tick: the preview runs a fixed step each display frame.
"""
from dataclasses import dataclass
from enum import Enum

from .constants import (
    MOVE_IMPULSE, FRICTION, GRAVITY, JUMP_IMPULSE, RUN_THRESHOLD,
    PLAYER_SIZE, PLAYER_SPAWN, FLOOR_MARGIN,
    TILE_SIZE, PLATFORM_X, PLATFORM_TILES, PLATFORM_RISE, PLATFORM_LANDING_BAND,
)


class MovementState(Enum):
    """Animation state, derived from physics every tick."""
    IDLE = "idle"
    RUN = "run"
    JUMP = "jump"


@dataclass(frozen=True)
class InputSnapshot:
    """Direction and jump input, captured once per tick."""
    left: bool = False
    right: bool = False
    jump: bool = False


@dataclass(frozen=True)
class Rect:
    """Axis-aligned box."""
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class PlayerEntity:
    """Mutable simulation state of the previewed character."""
    x: float = PLAYER_SPAWN[0]
    y: float = PLAYER_SPAWN[1]
    vx: float = 0.0
    vy: float = 0.0
    width: int = PLAYER_SIZE
    height: int = PLAYER_SIZE
    state: MovementState = MovementState.IDLE
    facing_right: bool = True
    grounded: bool = False
    frame_index: int = 0
    frame_timer: int = 0

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True)
class Stage:
    """
    Fixed collision geometry: a flat floor and one platform.
    """
    floor_y: float
    platform: Rect

    @classmethod
    def for_viewport(cls, height: int) -> "Stage":
        floor_y = height - FLOOR_MARGIN
        platform = Rect(
            x=PLATFORM_X,
            y=floor_y - PLATFORM_RISE,
            width=TILE_SIZE * PLATFORM_TILES,
            height=TILE_SIZE,
        )
        return cls(floor_y=floor_y, platform=platform)


def derive_state(grounded: bool, vx: float) -> MovementState:
    """jump iff airborne; else run iff moving faster than RUN_THRESHOLD; else idle."""
    if not grounded:
        return MovementState.JUMP
    if abs(vx) > RUN_THRESHOLD:
        return MovementState.RUN
    return MovementState.IDLE


def lands_on(player: PlayerEntity, platform: Rect) -> bool:
    """
    AABB landing test: descending, horizontally overlapping, and with the
    feet inside the platform's top band.
    """
    return (
        player.vy > 0
        and player.x + player.width > platform.x
        and player.x < platform.right
        and platform.y < player.bottom < platform.y + PLATFORM_LANDING_BAND
    )


def step_player(player: PlayerEntity, inputs: InputSnapshot, stage: Stage) -> None:
    """Advance the player one tick in place."""
    if inputs.right:
        player.vx += MOVE_IMPULSE
        player.facing_right = True
    if inputs.left:
        player.vx -= MOVE_IMPULSE
        player.facing_right = False

    player.vx *= FRICTION
    player.vy += GRAVITY
    player.x += player.vx
    player.y += player.vy

    # Floor
    if player.bottom > stage.floor_y:
        player.y = stage.floor_y - player.height
        player.vy = 0.0
        player.grounded = True
    else:
        player.grounded = False

    # Platform, only while falling onto it
    if lands_on(player, stage.platform):
        player.y = stage.platform.y - player.height
        player.vy = 0.0
        player.grounded = True

    if inputs.jump and player.grounded:
        player.vy = JUMP_IMPULSE
        player.grounded = False

    player.state = derive_state(player.grounded, player.vx)
