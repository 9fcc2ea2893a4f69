"""Playback - the auto-scroll core.

Components, leaves first:
- FileSet: ordered eligible paths with a wrapping or clamping cursor
- Document: highlighted lines of the current file
- ScrollState: top line, pause flag, step and interval
- PlaybackEngine: state machine reacting to ticks and commands
- PlaybackLoop: blocking wait-with-deadline event loop
"""

from codescroll.playback.document import Document, load_document
from codescroll.playback.engine import END_OF_SET, Command, Frame, PlaybackEngine
from codescroll.playback.fileset import FileSet
from codescroll.playback.loop import CommandQueue, PlaybackLoop
from codescroll.playback.scroll import ScrollState

__all__ = [
    "END_OF_SET",
    "Command",
    "CommandQueue",
    "Document",
    "FileSet",
    "Frame",
    "PlaybackEngine",
    "PlaybackLoop",
    "ScrollState",
    "load_document",
]
