"""Tests for PlaybackLoop timing and CommandQueue.

All timing runs on FakeClock; only TestThreaded uses real time.
"""

from __future__ import annotations

import threading

import pytest

from codescroll.playback.engine import Command, Frame, PlaybackEngine
from codescroll.playback.fileset import FileSet
from codescroll.playback.loop import CommandQueue, PlaybackLoop
from tests.helpers import FakeClock, ScriptedSource


def _engine(make_files, interval_ms: int = 1000, lines: int = 20) -> PlaybackEngine:
    return PlaybackEngine(FileSet(make_files(2, lines=lines)), max_bytes=64 * 1024, interval_ms=interval_ms)


class TestTiming:
    """Deadline bookkeeping."""

    def test_ticks_at_fixed_cadence(self, make_files) -> None:
        """With no input, one tick fires per interval."""
        clock = FakeClock()
        source = ScriptedSource(clock, [(3.5, Command.QUIT)])
        frames: list[Frame] = []
        engine = _engine(make_files)
        loop = PlaybackLoop(engine, frames.append, source=source, clock=clock)

        loop.run()

        assert loop.ticks == 3
        assert engine.scroll.top == 3
        # QUIT arrives 0.5s into the fourth full-interval wait
        assert source.waits == pytest.approx([1.0, 1.0, 1.0, 1.0])
        # initial frame + one per tick, none after Quit
        assert len(frames) == 4

    def test_input_does_not_reset_deadline(self, make_files) -> None:
        """Commands mid-interval leave the pending tick deadline alone."""
        clock = FakeClock()
        source = ScriptedSource(
            clock,
            [(0.3, Command.TOGGLE_PAUSE), (0.4, Command.TOGGLE_PAUSE), (0.6, Command.QUIT)],
        )
        frames: list[Frame] = []
        engine = _engine(make_files)
        loop = PlaybackLoop(engine, frames.append, source=source, clock=clock)

        loop.run()

        # 1.0, then the remaining 0.7 and 0.3 of the same interval
        assert source.waits[:3] == pytest.approx([1.0, 0.7, 0.3])
        assert loop.ticks == 1
        assert engine.scroll.top == 1
        assert [f.paused for f in frames] == [False, True, False, False]

    def test_overrun_does_not_catch_up(self, make_files) -> None:
        """A render slower than the interval restarts the deadline from now."""
        clock = FakeClock()
        source = ScriptedSource(clock)
        frames: list[Frame] = []

        def slow_render(frame: Frame) -> None:
            frames.append(frame)
            clock.advance(2.5)
            if len(frames) == 3:
                source.push(0.0, Command.QUIT)

        engine = _engine(make_files)
        loop = PlaybackLoop(engine, slow_render, source=source, clock=clock)

        loop.run()

        assert loop.ticks == 2
        assert engine.scroll.top == 2
        assert loop.deadline == pytest.approx(106.0)
        assert source.waits == [0.0, 0.0, 0.0]

    def test_early_wake_does_not_tick(self, make_files) -> None:
        """Returning from wait() before the deadline fires nothing."""
        clock = FakeClock()
        timeouts: list[float] = []

        class EarlySource:
            def wait(self, timeout: float) -> Command | None:
                timeouts.append(timeout)
                if len(timeouts) == 1:
                    clock.advance(timeout / 2)
                    return None
                if len(timeouts) == 2:
                    clock.advance(timeout)
                    return None
                return Command.QUIT

        frames: list[Frame] = []
        engine = _engine(make_files)
        loop = PlaybackLoop(engine, frames.append, source=EarlySource(), clock=clock)

        loop.run()

        assert timeouts == pytest.approx([1.0, 0.5, 1.0])
        assert loop.ticks == 1
        assert len(frames) == 2

    def test_paused_ticks_keep_firing(self, make_files) -> None:
        """The timer keeps running while paused; ticks are no-ops."""
        clock = FakeClock()
        source = ScriptedSource(clock, [(0.0, Command.TOGGLE_PAUSE), (2.5, Command.QUIT)])
        engine = _engine(make_files)
        loop = PlaybackLoop(engine, lambda frame: None, source=source, clock=clock)

        loop.run()

        assert loop.ticks == 2
        assert engine.scroll.top == 0

    def test_viewport_height_queried_per_frame(self, make_files) -> None:
        """Each frame is cut to the renderer's current height."""
        clock = FakeClock()
        source = ScriptedSource(clock, [(0.5, Command.REFRESH), (0.1, Command.QUIT)])
        heights = iter([3, 7])
        frames: list[Frame] = []
        engine = _engine(make_files)
        loop = PlaybackLoop(
            engine, frames.append, viewport_height=lambda: next(heights), source=source, clock=clock
        )

        loop.run()

        assert [len(f.visible_lines) for f in frames] == [3, 7]


class TestQuit:
    """Shutdown behaviour."""

    def test_quit_first_event(self, make_files) -> None:
        """Quit as the first event renders only the initial frame."""
        clock = FakeClock()
        source = ScriptedSource(clock, [(0.0, Command.QUIT)])
        frames: list[Frame] = []
        engine = _engine(make_files)

        PlaybackLoop(engine, frames.append, source=source, clock=clock).run()

        assert len(frames) == 1
        assert engine.running is False


class TestCommandQueue:
    """The thread-safe inbox."""

    def test_wait_returns_posted_command(self) -> None:
        inbox = CommandQueue()
        inbox.post(Command.HOME)

        assert inbox.wait(0) is Command.HOME
        assert inbox.wait(0) is None

    def test_wait_times_out(self) -> None:
        assert CommandQueue().wait(0.01) is None

    def test_fifo_order(self) -> None:
        inbox = CommandQueue()
        inbox.post(Command.NEXT_FILE)
        inbox.post(Command.PREVIOUS_FILE)

        assert inbox.wait(0.1) is Command.NEXT_FILE
        assert inbox.wait(0.1) is Command.PREVIOUS_FILE

    def test_loop_post_uses_default_queue(self, make_files) -> None:
        """A loop without an explicit source accepts posted commands."""
        loop = PlaybackLoop(_engine(make_files), lambda frame: None)

        loop.post(Command.END)

        assert loop.source.wait(0) is Command.END

    def test_loop_post_rejects_read_only_source(self, make_files) -> None:
        """Sources without post() cannot be fed through the loop."""
        source = ScriptedSource(FakeClock())
        loop = PlaybackLoop(_engine(make_files), lambda frame: None, source=source)

        with pytest.raises(TypeError):
            loop.post(Command.END)


class TestThreaded:
    """Real thread, real clock."""

    def test_quit_from_other_thread(self, make_files) -> None:
        """Posting Quit from another thread ends run() promptly."""
        frames: list[Frame] = []
        engine = _engine(make_files, interval_ms=10)
        loop = PlaybackLoop(engine, frames.append)
        worker = threading.Thread(target=loop.run, daemon=True)

        worker.start()
        loop.post(Command.QUIT)
        worker.join(timeout=5.0)

        assert not worker.is_alive()
        assert engine.running is False
        assert len(frames) >= 1
