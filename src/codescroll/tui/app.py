"""Codescroll Textual Application.

Renderer and input-mapping layer around the PlaybackLoop.

Threading model:
- The PlaybackLoop runs in one thread worker and is the only code that
  touches engine state.
- Key bindings post logical Commands into the loop's CommandQueue.
- Finished frames come back as FrameReady messages (post_message is
  thread-safe) and are drawn on the UI thread.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.message import Message
from textual.widgets import Footer

from codescroll.playback.engine import Command
from codescroll.playback.loop import DEFAULT_VIEWPORT_HEIGHT, CommandQueue, PlaybackLoop
from codescroll.tui.widgets import CodeView, FileHeader, HelpOverlay, ScrollStatusBar

if TYPE_CHECKING:
    from codescroll.playback.engine import Frame, PlaybackEngine

_logger = logging.getLogger(__name__)


class CodeScrollApp(App):
    """Auto-scrolling source viewer.

    Usage:
        engine = PlaybackEngine.from_config(config, paths, highlighter)
        CodeScrollApp(engine).run()
    """

    TITLE = "codescroll"

    BINDINGS = [
        Binding("q", "quit_playback", "Quit", show=True),
        Binding("space", "playback('toggle_pause')", "Pause", show=True),
        Binding("n", "playback('next_file')", "Next", show=True),
        Binding("right", "playback('next_file')", "Next", show=False),
        Binding("p", "playback('previous_file')", "Prev", show=True),
        Binding("left", "playback('previous_file')", "Prev", show=False),
        Binding("r", "playback('reload')", "Reload", show=True),
        Binding("home", "playback('home')", "Top", show=False),
        Binding("g", "playback('home')", "Top", show=False),
        Binding("end", "playback('end')", "Bottom", show=False),
        Binding("G", "playback('end')", "Bottom", show=False),
        Binding("question_mark", "toggle_help", "Help", show=True),
        Binding("escape", "dismiss", "Dismiss", show=False),
    ]

    class FrameReady(Message):
        """A new frame is ready to draw."""

        def __init__(self, frame: "Frame") -> None:
            super().__init__()
            self.frame = frame

    class PlaybackStopped(Message):
        """The playback loop has exited."""

    def __init__(self, engine: "PlaybackEngine", **kwargs: Any) -> None:
        """Initialize the app.

        Args:
            engine: Engine to play. Started by the playback worker.
            **kwargs: Additional args passed to App
        """
        super().__init__(**kwargs)
        self._playback_engine = engine
        self._commands = CommandQueue()
        self._code_rows = DEFAULT_VIEWPORT_HEIGHT
        self._playback = PlaybackLoop(
            engine,
            render=self._post_frame,
            viewport_height=lambda: self._code_rows,
            source=self._commands,
        )
        self._last_frame: Frame | None = None
        self._help_visible = False

    @property
    def engine(self) -> "PlaybackEngine":
        """Engine driven by the playback worker."""
        return self._playback_engine

    @property
    def frame(self) -> "Frame | None":
        """Most recently drawn frame."""
        return self._last_frame

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield FileHeader(id="file-header")
        yield HelpOverlay(id="help-overlay", classes="hidden")
        yield CodeView(id="code-view")
        yield ScrollStatusBar(id="scroll-status")
        yield Footer()

    def on_mount(self) -> None:
        """Start the playback worker."""
        self.run_worker(self._run_playback, name="playback", group="playback", thread=True)

    def exit(self, *args: Any, **kwargs: Any) -> None:
        """Exit the app, stopping the playback worker on every exit path."""
        self._commands.post(Command.QUIT)
        super().exit(*args, **kwargs)

    def _run_playback(self) -> None:
        self._playback.run()
        self.post_message(self.PlaybackStopped())

    def _post_frame(self, frame: "Frame") -> None:
        # Runs on the playback thread
        self.post_message(self.FrameReady(frame))

    def on_code_scroll_app_frame_ready(self, message: FrameReady) -> None:
        """Draw a frame produced by the playback loop."""
        frame = message.frame
        self._last_frame = frame
        self.query_one(FileHeader).update_frame(frame)
        self.query_one(CodeView).show_frame(frame)
        self.query_one(ScrollStatusBar).update_status(
            paused=frame.paused,
            top=frame.top,
            total=frame.total,
            progress=frame.progress,
            status=frame.status,
        )

    def on_code_scroll_app_playback_stopped(self, message: PlaybackStopped) -> None:
        """Exit once the loop has processed Quit."""
        _logger.debug("Playback worker finished; exiting")
        self.exit()

    def on_code_view_viewport_changed(self, message: CodeView.ViewportChanged) -> None:
        """Track the viewport height and redraw at the new size."""
        self._code_rows = message.height
        self._commands.post(Command.REFRESH)

    def action_playback(self, name: str) -> None:
        """Forward a logical command to the playback loop."""
        self._commands.post(Command(name))

    def action_quit_playback(self) -> None:
        """Stop playback; the app exits when the loop confirms."""
        self._commands.post(Command.QUIT)

    def action_toggle_help(self) -> None:
        """Toggle the help overlay visibility."""
        self.query_one("#help-overlay").toggle_class("hidden")
        self._help_visible = not self._help_visible

    def action_dismiss(self) -> None:
        """Dismiss the help overlay."""
        if self._help_visible:
            self.action_toggle_help()
