"""Help Overlay Widget.

Displays keyboard shortcuts.
Press ? to show, Esc to dismiss.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Static


HELP_TEXT = """\
[bold cyan]Codescroll Keyboard Shortcuts[/bold cyan]

[bold]Playback[/bold]
  [cyan]Space[/cyan]      Pause / resume scrolling
  [cyan]Home / g[/cyan]   Jump to top of file
  [cyan]End / G[/cyan]    Jump to last line of file

[bold]Files[/bold]
  [cyan]n / →[/cyan]      Next file
  [cyan]p / ←[/cyan]      Previous file
  [cyan]r[/cyan]          Reload current file

[bold]General[/bold]
  [cyan]?[/cyan]          Toggle this help overlay
  [cyan]q[/cyan]          Quit

[dim]Press Esc to close this help[/dim]
"""


class HelpOverlay(Container):
    """Modal overlay showing keyboard shortcuts.

    Usage:
        # In app compose():
        yield HelpOverlay(id="help-overlay", classes="hidden")

        # Toggle visibility:
        self.query_one("#help-overlay").toggle_class("hidden")
    """

    DEFAULT_CSS = """
    HelpOverlay {
        width: 50;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: thick $primary;
        padding: 1 2;
    }

    HelpOverlay.hidden {
        display: none;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help content."""
        yield Static(HELP_TEXT, markup=True)
