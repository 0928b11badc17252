"""
Tests for the runtime preview simulation.
"""
import math

import pytest
from PIL import Image

from stripworks.core.assets import AssetBinding, AssetSlot, ResolvedAsset
from stripworks.core.constants import ANIMATION_TICKS
from stripworks.core.physics import InputSnapshot, MovementState, PlayerEntity
from stripworks.core.runtime import (
    RuntimePreview, advance_animation, enemy_position,
)
from stripworks.core.ticker import FrameLoop

VIEWPORT = (800, 450)


def make_binding(idle_frames=4, run_frames=None):
    idle = ResolvedAsset(Image.new("RGBA", (16 * idle_frames, 16)), idle_frames)
    slots = {slot: None for slot in AssetSlot}
    slots[AssetSlot.IDLE] = idle
    slots[AssetSlot.JUMP] = idle
    slots[AssetSlot.RUN] = (
        ResolvedAsset(Image.new("RGBA", (16 * run_frames, 16)), run_frames) if run_frames else idle
    )
    return AssetBinding(slots=slots)


class RecordingView:
    def __init__(self):
        self.frames = []

    def draw(self, frame):
        self.frames.append(frame)


def settle(preview):
    """Drop the player onto the floor."""
    preview.player.y = preview.stage.floor_y - preview.player.height
    preview.step(InputSnapshot())


class TestAnimation:
    """Tests for animation cadence."""

    def test_advances_every_eight_ticks(self):
        player = PlayerEntity()
        for _ in range(ANIMATION_TICKS - 1):
            advance_animation(player, 4)
        assert player.frame_index == 0
        advance_animation(player, 4)
        assert player.frame_index == 1
        assert player.frame_timer == 0

    def test_wraps(self):
        player = PlayerEntity(frame_index=3, frame_timer=ANIMATION_TICKS - 1)
        advance_animation(player, 4)
        assert player.frame_index == 0

    def test_single_frame_stays_zero(self):
        player = PlayerEntity(frame_timer=ANIMATION_TICKS - 1)
        advance_animation(player, 1)
        assert player.frame_index == 0


class TestRuntimePreview:
    """Tests for RuntimePreview stepping and projection."""

    def test_start_resets_player(self):
        preview = RuntimePreview(make_binding(), VIEWPORT)
        preview.player.x = 999
        FrameLoop().register("runtime", preview)
        assert preview.player.x == 100.0
        assert preview.elapsed == 0.0

    def test_tick_reads_inputs_and_draws(self):
        view = RecordingView()
        preview = RuntimePreview(make_binding(), VIEWPORT,
                                 inputs=lambda: InputSnapshot(right=True), view=view)
        preview.start()
        preview.tick(1 / 60)
        assert preview.player.vx > 0
        assert len(view.frames) == 1
        assert view.frames[0].x == preview.player.x

    def test_state_change_restarts_animation(self):
        """Entering a new state restarts from its first frame."""
        preview = RuntimePreview(make_binding(idle_frames=6, run_frames=2), VIEWPORT)
        settle(preview)
        preview.player.frame_index = 5
        preview.step(InputSnapshot(right=True))
        assert preview.player.state == MovementState.RUN
        assert preview.player.frame_index == 0
        assert preview.player.frame_timer == 1

    def test_projection_source_rect(self):
        preview = RuntimePreview(make_binding(), VIEWPORT)
        settle(preview)
        preview.player.frame_index = 2
        frame = preview.projection()
        assert frame.state == MovementState.IDLE
        assert frame.frame_count == 4
        assert frame.source_rect == (32, 0, 16, 16)

    def test_projection_without_assets(self):
        binding = AssetBinding(slots={slot: None for slot in AssetSlot})
        preview = RuntimePreview(binding, VIEWPORT)
        frame = preview.projection()
        assert frame.source_rect is None
        assert frame.frame_count == 1

    def test_projection_is_read_only(self):
        preview = RuntimePreview(make_binding(), VIEWPORT)
        frame = preview.projection()
        with pytest.raises(AttributeError):
            frame.x = 5

    def test_enemy_patrol(self):
        assert enemy_position(0) == pytest.approx(400)
        assert enemy_position(math.pi / 2) == pytest.approx(500)
        assert enemy_position(3 * math.pi / 2) == pytest.approx(300)

    def test_enemy_follows_elapsed_time(self):
        preview = RuntimePreview(make_binding(), VIEWPORT)
        preview.start()
        preview.tick(math.pi / 2)
        assert preview.projection().enemy_x == pytest.approx(500)
