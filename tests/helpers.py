"""Shared helpers for tests.

Keep this module small and dependency-light. It holds a source-file writer,
plus the deterministic clock and command source used to drive
PlaybackLoop without real time.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from pathlib import Path

from codescroll.playback.engine import Command


def write_lines(path: Path, count: int, prefix: str = "line") -> Path:
    """Write ``count`` numbered lines (with trailing newline) to ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{prefix} {i}\n" for i in range(count)), encoding="utf-8")
    return path


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedSource:
    """Command source replaying ``(delay, command)`` pairs on a FakeClock.

    ``delay`` is measured from the moment the previous scripted command was
    delivered. A wait shorter than the pending delay consumes ``timeout``
    seconds and returns None (a tick).
    """

    def __init__(
        self,
        clock: FakeClock,
        script: Iterable[tuple[float, Command]] = (),
        max_waits: int = 10_000,
    ) -> None:
        self._clock = clock
        self._script: deque[tuple[float, Command]] = deque(script)
        self._max_waits = max_waits
        self.waits: list[float] = []

    def push(self, delay: float, command: Command) -> None:
        self._script.append((delay, command))

    def wait(self, timeout: float) -> Command | None:
        self.waits.append(timeout)
        if len(self.waits) > self._max_waits:
            raise RuntimeError("ScriptedSource exhausted; missing Command.QUIT?")
        if self._script:
            delay, command = self._script[0]
            if delay <= timeout:
                self._script.popleft()
                self._clock.advance(delay)
                return command
            self._script[0] = (delay - timeout, command)
        self._clock.advance(timeout)
        return None
