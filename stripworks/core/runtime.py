"""
Runtime preview - a tiny platformer that plays the bound character animations.
NO UI DEPENDENCIES.

The simulation state (player, elapsed time) is owned here and updated in place
each tick. Views only ever see the frozen RuntimeFrame projection.
"""
import math
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple

from .assets import AssetBinding
from .constants import ANIMATION_TICKS, ENEMY_CENTER_X, ENEMY_PATROL, ENEMY_PERIOD
from .physics import InputSnapshot, MovementState, PlayerEntity, Stage, step_player
from .slicer import frame_rect, frame_width_for
from .ticker import Tickable

InputSource = Callable[[], InputSnapshot]


@dataclass(frozen=True)
class RuntimeFrame:
    """Read-only view of one simulated tick, for rendering."""
    x: float
    y: float
    width: int
    height: int
    vx: float
    vy: float
    state: MovementState
    facing_right: bool
    frame_index: int
    frame_count: int
    source_rect: Optional[Tuple[int, int, int, int]]
    enemy_x: float
    stage: Stage


class RuntimeView(Protocol):
    def draw(self, frame: RuntimeFrame) -> None:
        ...


def enemy_position(elapsed: float) -> float:
    """Horizontal position of the patrolling enemy after `elapsed` seconds."""
    return ENEMY_CENTER_X + math.sin(elapsed / ENEMY_PERIOD) * ENEMY_PATROL


def advance_animation(player: PlayerEntity, frame_count: int) -> None:
    """Step the animation timer; every ANIMATION_TICKS ticks, move to the next frame."""
    player.frame_timer += 1
    if player.frame_timer >= ANIMATION_TICKS:
        player.frame_index = (player.frame_index + 1) % max(1, frame_count)
        player.frame_timer = 0


class RuntimePreview(Tickable):
    """
    Fixed-step physics and animation for the bound character.

    Usage:
        preview = RuntimePreview(binding, viewport=(800, 450), inputs=read_keys)
        loop.register("runtime", preview)
    """

    def __init__(
        self,
        binding: AssetBinding,
        viewport: Tuple[int, int],
        inputs: Optional[InputSource] = None,
        view: Optional[RuntimeView] = None,
    ):
        self.binding = binding
        self.viewport = viewport
        self.stage = Stage.for_viewport(viewport[1])
        self.inputs: InputSource = inputs or InputSnapshot
        self.view = view
        self.player = PlayerEntity()
        self.elapsed: float = 0.0

    def reset(self) -> None:
        """Put the player back at the spawn point, at rest."""
        self.player = PlayerEntity()
        self.elapsed = 0.0

    def start(self) -> None:
        super().start()
        self.reset()

    def step(self, inputs: InputSnapshot) -> None:
        """Advance the simulation one tick with the given input."""
        previous = self.player.state
        step_player(self.player, inputs, self.stage)

        if self.player.state != previous:
            # New strip: restart so the index stays within its frame count
            self.player.frame_index = 0
            self.player.frame_timer = 0
        advance_animation(self.player, self.binding.frame_count(self.player.state))

    def tick(self, dt: float) -> None:
        self.elapsed += dt
        self.step(self.inputs())
        if self.view is not None:
            self.view.draw(self.projection())

    def projection(self) -> RuntimeFrame:
        player = self.player
        resolved = self.binding.for_state(player.state)
        frame_count = resolved.frame_count if resolved else 1

        source_rect = None
        if resolved is not None:
            bitmap = resolved.bitmap
            frame_width = frame_width_for(bitmap.width, frame_count)
            source_rect = frame_rect(player.frame_index, frame_width, bitmap.height)

        return RuntimeFrame(
            x=player.x,
            y=player.y,
            width=player.width,
            height=player.height,
            vx=player.vx,
            vy=player.vy,
            state=player.state,
            facing_right=player.facing_right,
            frame_index=player.frame_index,
            frame_count=frame_count,
            source_rect=source_rect,
            enemy_x=enemy_position(self.elapsed),
            stage=self.stage,
        )
