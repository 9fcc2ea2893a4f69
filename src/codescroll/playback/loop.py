"""PlaybackLoop - single-threaded event loop around a PlaybackEngine.

Each iteration blocks on the command source until the next tick deadline:
- a command arriving first is dispatched, and the deadline is left alone
- reaching the deadline fires a tick

Deadlines advance by one interval from the previous deadline, so input does
not disturb scroll cadence. If handling overran a whole interval, the next
deadline restarts from now instead of firing catch-up ticks.

After every event the loop renders a Frame, except after Quit.

Usage:
    inbox = CommandQueue()
    loop = PlaybackLoop(engine, render=print, source=inbox)
    threading.Thread(target=loop.run).start()
    inbox.post(Command.TOGGLE_PAUSE)
"""

from __future__ import annotations

import logging
import queue
import time
from collections.abc import Callable
from typing import Protocol

from codescroll.playback.engine import Command, Frame, PlaybackEngine

_logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_HEIGHT = 24


class CommandSource(Protocol):
    """Anything the loop can block on for the next user command."""

    def wait(self, timeout: float) -> Command | None:
        """Return the next command, or None once ``timeout`` seconds pass."""
        ...


class CommandQueue:
    """Thread-safe command inbox.

    The input-mapping layer calls post() from any thread; the loop
    consumes with wait().
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[Command] = queue.Queue()

    def post(self, command: Command) -> None:
        self._queue.put(command)

    def wait(self, timeout: float) -> Command | None:
        try:
            if timeout <= 0:
                return self._queue.get_nowait()
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None


class PlaybackLoop:
    """Drives a PlaybackEngine from ticks and commands."""

    def __init__(
        self,
        engine: PlaybackEngine,
        render: Callable[[Frame], None],
        viewport_height: Callable[[], int] = lambda: DEFAULT_VIEWPORT_HEIGHT,
        source: CommandSource | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the loop.

        Args:
            engine: Engine to drive. Owned by this loop from run() on.
            render: Called with each new Frame.
            viewport_height: Returns the renderer's current line capacity.
            source: Command source; a fresh CommandQueue if None.
            clock: Monotonic clock in seconds.
        """
        self._engine = engine
        self._render = render
        self._viewport_height = viewport_height
        self._source: CommandSource = source if source is not None else CommandQueue()
        self._clock = clock
        self._deadline = 0.0
        self._ticks = 0

    @property
    def source(self) -> CommandSource:
        return self._source

    @property
    def deadline(self) -> float:
        """Clock time at which the next tick fires."""
        return self._deadline

    @property
    def ticks(self) -> int:
        """Number of ticks fired so far."""
        return self._ticks

    def post(self, command: Command) -> None:
        """Queue a command (only for sources with a ``post`` method)."""
        post = getattr(self._source, "post", None)
        if post is None:
            raise TypeError(f"{type(self._source).__name__} does not accept posted commands")
        post(command)

    def run(self) -> None:
        """Start the engine and process events until Quit."""
        self._engine.start()
        self._deadline = self._clock() + self._engine.interval_s
        self._emit()
        while self._engine.running:
            self.step()
        _logger.debug(f"Playback loop finished after {self._ticks} ticks")

    def step(self) -> None:
        """Process exactly one event (a command or a tick)."""
        timeout = max(0.0, self._deadline - self._clock())
        command = self._source.wait(timeout)

        if command is not None:
            self._engine.dispatch(command)
            if self._engine.running:
                self._emit()
            return

        now = self._clock()
        if now < self._deadline:
            # Woke early; wait out the rest of the interval
            return

        self._engine.tick()
        self._ticks += 1
        interval = self._engine.interval_s
        next_deadline = self._deadline + interval
        self._deadline = next_deadline if next_deadline > now else now + interval
        self._emit()

    def _emit(self) -> None:
        self._render(self._engine.frame(self._viewport_height()))
