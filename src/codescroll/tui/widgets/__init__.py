"""Codescroll TUI widgets."""

from codescroll.tui.widgets.code_view import CodeView
from codescroll.tui.widgets.file_header import FileHeader
from codescroll.tui.widgets.help import HelpOverlay
from codescroll.tui.widgets.scroll_status import ScrollStatusBar

__all__ = [
    "CodeView",
    "FileHeader",
    "HelpOverlay",
    "ScrollStatusBar",
]
