"""Codescroll TUI - Textual renderer and key bindings."""

from codescroll.tui.app import CodeScrollApp

__all__ = ["CodeScrollApp"]
