"""Code View Widget.

Shows the visible slice of the current document. Short files are padded
with blank rows to the viewport height so the layout does not jitter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widgets import Static

if TYPE_CHECKING:
    from codescroll.playback.engine import Frame


def compose_lines(frame: "Frame", height: int) -> Text:
    """Join the frame's visible lines, padded to ``height`` rows."""
    rows = list(frame.visible_lines[:height])
    rows.extend(Text("") for _ in range(max(0, height - len(rows))))
    text = Text("\n", no_wrap=True, overflow="crop").join(rows)
    text.no_wrap = True
    return text


class CodeView(Static):
    """Viewport onto the highlighted source.

    Posts ViewportChanged whenever its height changes so the playback loop
    can slice frames to fit.
    """

    DEFAULT_CSS = """
    CodeView {
        height: 1fr;
        overflow: hidden;
    }
    """

    class ViewportChanged(Message):
        """The number of visible rows changed."""

        def __init__(self, height: int) -> None:
            super().__init__()
            self.height = height

    def __init__(self, **kwargs: Any) -> None:
        super().__init__("", **kwargs)
        self._shown_frame: Frame | None = None

    @property
    def frame(self) -> "Frame | None":
        """Last frame shown."""
        return self._shown_frame

    def show_frame(self, frame: "Frame") -> None:
        """Render ``frame`` into the widget."""
        self._shown_frame = frame
        height = self.size.height or len(frame.visible_lines)
        self.update(compose_lines(frame, height))

    def on_resize(self, event: events.Resize) -> None:
        self.post_message(self.ViewportChanged(event.size.height))
