"""
Tests for the playback scheduler and preview placement.
"""
import pytest

from stripworks.core.playback import PlaybackScheduler, contain_rect
from stripworks.core.ticker import FrameLoop
from stripworks.core.timeline import Timeline

# Exact in binary floating point
HALF_FRAME_AT_8FPS = 0.0625


class RecordingView:
    def __init__(self):
        self.frames = []

    def draw(self, frame):
        self.frames.append(frame)


@pytest.fixture
def timeline(strip):
    return Timeline.from_strip(strip, 4, fps=8)


@pytest.fixture
def scheduler(timeline):
    view = RecordingView()
    scheduler = PlaybackScheduler(timeline, view)
    FrameLoop().register("animation", scheduler)
    return scheduler


class TestPlaybackScheduler:
    """Tests for frame advancement."""

    def test_interval(self, scheduler):
        assert scheduler.interval == pytest.approx(0.125)

    def test_one_frame_per_interval_at_8fps(self, scheduler):
        """Exactly one index advance per 125 ms of simulated time."""
        indices = []
        for _ in range(16):
            scheduler.tick(HALF_FRAME_AT_8FPS)
            indices.append(scheduler.index)
        assert indices == [0, 1, 1, 2, 2, 3, 3, 0, 0, 1, 1, 2, 2, 3, 3, 0]

    def test_view_drawn_only_on_advance(self, scheduler):
        scheduler.tick(HALF_FRAME_AT_8FPS)
        assert scheduler.view.frames == []
        scheduler.tick(HALF_FRAME_AT_8FPS)
        assert len(scheduler.view.frames) == 1
        assert scheduler.view.frames[0] is scheduler.timeline.frames[1]

    def test_paused_shows_selection(self, scheduler):
        """While paused the displayed frame is the selected one."""
        scheduler.timeline.pick(2)
        for _ in range(6):
            scheduler.tick(0.125)
            assert scheduler.index == 2
        assert scheduler.view.frames[-1] is scheduler.timeline.frames[2]

    def test_fps_change_takes_effect_next_tick(self, scheduler):
        scheduler.timeline.set_fps(16)
        scheduler.tick(HALF_FRAME_AT_8FPS)
        assert scheduler.index == 1

    def test_index_recovers_after_delete(self, scheduler):
        """A stale index past the end restarts from 0."""
        scheduler.index = 3
        scheduler.timeline.delete_frame(3)
        assert scheduler.current_index == 0
        scheduler.tick(0.125)
        assert scheduler.index == 1

    def test_reading_current_index_leaves_index_alone(self, scheduler):
        """Querying the displayed index never rewrites the stored one."""
        scheduler.index = 3
        scheduler.timeline.delete_frame(3)
        assert scheduler.current_index == 0
        assert scheduler.index == 3

    def test_summed_small_ticks_reach_interval(self, scheduler):
        """Ten 12.5 ms ticks advance once, despite float shortfall."""
        for _ in range(9):
            scheduler.tick(0.0125)
        assert scheduler.index == 0
        scheduler.tick(0.0125)
        assert scheduler.index == 1

    def test_no_drift_with_uneven_ticks(self, scheduler):
        """One second of 10 ms ticks advances exactly eight frames at 8 fps."""
        advances = 0
        previous = scheduler.index
        for _ in range(100):
            scheduler.tick(0.01)
            if scheduler.index != previous:
                advances += 1
                previous = scheduler.index
        assert advances == 8

    def test_remainder_carries_into_next_interval(self, scheduler):
        scheduler.tick(0.2)
        assert scheduler.index == 1
        assert scheduler.elapsed == pytest.approx(0.075)
        scheduler.tick(0.05)
        assert scheduler.index == 2

    def test_stall_advances_one_frame(self, scheduler):
        """A long gap shows the next frame rather than skipping ahead."""
        scheduler.tick(2.0)
        assert scheduler.index == 1
        assert scheduler.elapsed < scheduler.interval

    def test_start_resets_elapsed(self, scheduler):
        scheduler.tick(0.1)
        scheduler.start()
        assert scheduler.elapsed == 0.0


class TestContainRect:
    """Tests for contain_rect."""

    def test_square_in_square(self):
        """Fills 80% of the limiting axis, centered."""
        assert contain_rect((10, 10), (100, 100)) == pytest.approx((10, 10, 80, 80))

    def test_wide_strip_limited_by_width(self):
        x, y, w, h = contain_rect((40, 10), (100, 100))
        assert (w, h) == pytest.approx((80, 20))
        assert (x, y) == pytest.approx((10, 40))

    def test_upscales_tiny_frames(self):
        _, _, w, h = contain_rect((4, 8), (800, 600))
        assert h == pytest.approx(480)
        assert w == pytest.approx(240)
