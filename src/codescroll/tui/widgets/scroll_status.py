"""Scroll Status Bar Widget.

Displays playback status for the current file:
- Play/pause indicator
- Progress bar through the file
- Line counter (top line / total)
- Last error or end-of-set notice, else the key hint
"""

from __future__ import annotations

from typing import Any

from rich.text import Text
from textual.widgets import Static

KEY_HINT = "q quit • space pause • n/p next/prev • r reload • ←/→ also work • ? help"


def progress_bar(progress: float, width: int = 20) -> str:
    """Generate a progress bar.

    Args:
        progress: Progress 0.0 to 1.0
        width: Bar width in characters

    Returns:
        Progress bar like "████████░░░░░░░░░░░░"
    """
    filled = int(progress * width)
    filled = max(0, min(width, filled))
    return "█" * filled + "░" * (width - filled)


def render_status(
    paused: bool,
    top: int,
    total: int,
    progress: float,
    status: str = "",
) -> Text:
    """Build the status bar line.

    Args:
        paused: Whether playback is paused
        top: First visible line (0-based)
        total: Line count of the current file
        progress: Scroll progress 0.0 to 1.0 (``Frame.progress``)
        status: Error or end-of-set message; empty shows the key hint
    """
    icon = ("⏸ PAUSED", "yellow") if paused else ("▶ PLAY", "green")
    bar = progress_bar(progress, width=15)
    pct = int(progress * 100)
    line_str = f"line {min(top + 1, total)}/{total}"
    message = (status, "bold red") if status else (KEY_HINT, "dim")

    return Text.assemble(icon, f" [{bar}] {line_str} {pct}%  ", message)


class ScrollStatusBar(Static):
    """Status bar showing scroll state.

    Usage:
        bar = ScrollStatusBar()
        bar.update_status(paused=False, top=10, total=120, progress=frame.progress)
    """

    DEFAULT_CSS = """
    ScrollStatusBar {
        height: 1;
        background: $primary-darken-2;
        padding: 0 1;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self._last_render = render_status(paused=False, top=0, total=0, progress=0.0)

    @property
    def last_render(self) -> Text:
        """Content of the most recent update."""
        return self._last_render

    def update_status(
        self,
        paused: bool,
        top: int,
        total: int,
        progress: float,
        status: str = "",
    ) -> None:
        """Redraw with new scroll state."""
        self._last_render = render_status(paused, top, total, progress, status)
        self.update(self._last_render)
