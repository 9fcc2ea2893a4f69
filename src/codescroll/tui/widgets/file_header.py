"""File Header Widget.

Single line identifying what is on screen:

    codescroll — src/app.py  (3/42)  [Python]  PLAY
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text
from textual.widgets import Static

if TYPE_CHECKING:
    from codescroll.playback.engine import Frame


def render_header(frame: "Frame") -> Text:
    """Build the header line for ``frame``.

    Built with Text.assemble rather than markup so paths containing
    brackets render literally.
    """
    index, count = frame.position
    mode = ("PAUSED", "yellow") if frame.paused else ("PLAY", "green")
    return Text.assemble(
        ("codescroll", "bold green"),
        " — ",
        frame.file_label,
        f"  ({index + 1}/{count})",
        "  [",
        (frame.syntax or "?", "cyan"),
        "]  ",
        mode,
    )


class FileHeader(Static):
    """Header showing path, file position, syntax and play state."""

    DEFAULT_CSS = """
    FileHeader {
        border-bottom: solid $primary-darken-2;
        height: 2;
    }
    """

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("", **kwargs)

    def update_frame(self, frame: "Frame") -> None:
        self.update(render_header(frame))
