"""Codescroll - auto-scrolling source viewer for the terminal.

Codescroll walks a directory tree, syntax-highlights each eligible source
file and scrolls through it at a steady pace, moving on to the next file
when the current one is exhausted.

Subpackages:
- core: Configuration
- playback: FileSet, Document, ScrollState and the PlaybackEngine
- tui: Textual renderer and key bindings
- scripts: Command-line entry point
"""

__version__ = "1.0.0"

from codescroll.errors import (
    CodeScrollError,
    DocumentLoadError,
    EmptySetError,
    NotTextError,
    TooLargeError,
    UnreadableError,
)
from codescroll.playback import Command, Frame, PlaybackEngine

__all__ = [
    "CodeScrollError",
    "DocumentLoadError",
    "EmptySetError",
    "NotTextError",
    "TooLargeError",
    "UnreadableError",
    "Command",
    "Frame",
    "PlaybackEngine",
]
