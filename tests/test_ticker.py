"""
Tests for the shared frame loop.
"""
from stripworks.core.ticker import FrameLoop, Tickable


class Counter(Tickable):
    def __init__(self):
        self.ticks = 0
        self.total = 0.0

    def tick(self, dt):
        self.ticks += 1
        self.total += dt


class SelfCancelling(Tickable):
    def __init__(self, loop):
        self.loop = loop
        self.ticks = 0

    def tick(self, dt):
        self.ticks += 1
        self.loop.cancel("self")


class TestFrameLoop:
    """Tests for FrameLoop registration and ticking."""

    def test_register_starts_tickable(self):
        loop = FrameLoop()
        counter = Counter()
        loop.register("preview", counter)
        assert counter.is_running
        assert loop.get("preview") is counter
        assert loop.active_count == 1

    def test_tick_passes_dt(self):
        loop = FrameLoop()
        counter = Counter()
        loop.register("preview", counter)
        loop.tick(0.5)
        loop.tick(0.25)
        assert counter.ticks == 2
        assert counter.total == 0.75
        assert loop.tick_number == 2

    def test_register_replaces_previous(self):
        """A new registration on a surface stops the old one."""
        loop = FrameLoop()
        first, second = Counter(), Counter()
        loop.register("preview", first)
        loop.register("preview", second)
        loop.tick(0.1)
        assert not first.is_running
        assert first.ticks == 0
        assert second.ticks == 1
        assert loop.active_count == 1

    def test_cancel_stops_ticks(self):
        """No tick runs after cancel."""
        loop = FrameLoop()
        counter = Counter()
        loop.register("preview", counter)
        assert loop.cancel("preview")
        loop.tick(0.1)
        assert counter.ticks == 0
        assert not counter.is_running
        assert loop.active_count == 0

    def test_cancel_unknown_surface(self):
        assert not FrameLoop().cancel("nothing")

    def test_stopped_tickable_is_skipped(self):
        loop = FrameLoop()
        counter = Counter()
        loop.register("preview", counter)
        counter.stop()
        loop.tick(0.1)
        assert counter.ticks == 0

    def test_tickable_may_cancel_itself(self):
        """Cancelling from inside a tick is safe."""
        loop = FrameLoop()
        other = Counter()
        loop.register("self", SelfCancelling(loop))
        loop.register("other", other)
        loop.tick(0.1)
        loop.tick(0.1)
        assert loop.get("self") is None
        assert other.ticks == 2

    def test_cancel_all(self):
        loop = FrameLoop()
        a, b = Counter(), Counter()
        loop.register("a", a)
        loop.register("b", b)
        loop.cancel_all()
        assert loop.active_count == 0
        assert not a.is_running and not b.is_running
