"""ScrollState - position and pause axes of playback.

Two orthogonal axes:
- running vs paused (``toggle_pause``)
- position ``top`` in ``[0, max(0, total - 1)]``

``total`` is not stored here; it belongs to the current Document and is
passed in by the engine.
"""

from __future__ import annotations

from dataclasses import dataclass


def last_offset(total: int) -> int:
    """Largest valid ``top`` for a document of ``total`` lines."""
    return max(0, total - 1)


@dataclass(slots=True)
class ScrollState:
    """Mutable scroll position owned by the PlaybackEngine."""

    top: int = 0
    paused: bool = False
    step: int = 1
    interval_ms: int = 60

    def __post_init__(self) -> None:
        if self.step < 1:
            raise ValueError(f"step must be >= 1, got {self.step}")
        if self.interval_ms < 1:
            raise ValueError(f"interval_ms must be >= 1, got {self.interval_ms}")
        self.top = max(0, self.top)

    def at_end(self, total: int) -> bool:
        """True when the final line is already the topmost visible line."""
        return self.top >= last_offset(total)

    def advance(self, total: int) -> bool:
        """Move ``top`` forward by ``step``, clamped.

        No-op while paused.

        Returns:
            True if ``top`` changed.
        """
        if self.paused:
            return False
        new_top = min(self.top + self.step, last_offset(total))
        moved = new_top != self.top
        self.top = new_top
        return moved

    def toggle_pause(self) -> bool:
        """Flip the paused flag and return the new value."""
        self.paused = not self.paused
        return self.paused

    def home(self) -> None:
        self.top = 0

    def end(self, total: int) -> None:
        self.top = last_offset(total)

    def clamp(self, total: int) -> None:
        """Bring ``top`` back into range after ``total`` changed."""
        self.top = max(0, min(self.top, last_offset(total)))
