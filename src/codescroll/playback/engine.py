"""PlaybackEngine - the auto-scroll state machine.

Owns FileSet, Document and ScrollState and reacts to two kinds of event:
- ``tick()``: timer-driven scroll step (and automatic file advance)
- ``dispatch(command)``: user commands from the input-mapping layer

Every transition completes before ``frame()`` can observe the state.

Usage:
    engine = PlaybackEngine(FileSet(paths), max_bytes=512 * 1024)
    engine.start()
    engine.tick()
    engine.dispatch(Command.NEXT_FILE)
    frame = engine.frame(viewport_height=40)
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from rich.text import Text

from codescroll.errors import DocumentLoadError, EmptySetError
from codescroll.playback.document import Document, Highlighter, load_document
from codescroll.playback.fileset import FileSet, IndexChooser
from codescroll.playback.scroll import ScrollState

if TYPE_CHECKING:
    from codescroll.core.config import ScrollerConfig

_logger = logging.getLogger(__name__)

END_OF_SET = "End of set"


class Command(Enum):
    """Logical user commands."""

    QUIT = "quit"
    TOGGLE_PAUSE = "toggle_pause"
    NEXT_FILE = "next_file"
    PREVIOUS_FILE = "previous_file"
    RELOAD = "reload"
    HOME = "home"
    END = "end"
    # Re-render only (viewport resized); no state change
    REFRESH = "refresh"


@dataclass(frozen=True)
class Frame:
    """Everything the renderer needs for one redraw.

    Attributes:
        visible_lines: Lines ``[top, top + viewport_height)`` clipped to the document.
        file_label: Path of the current file as displayed.
        position: ``(index, count)`` in the FileSet, index 0-based.
        paused: Pause indicator.
        top: First visible line (0-based).
        total: Line count of the current document.
        syntax: Lexer name.
        status: Error or end-of-set message, empty when there is nothing to report.
    """

    visible_lines: tuple[Text, ...]
    file_label: str
    position: tuple[int, int]
    paused: bool
    top: int = 0
    total: int = 0
    syntax: str = ""
    status: str = ""

    @property
    def progress(self) -> float:
        """Scroll progress through the current document (0.0 to 1.0)."""
        if self.total <= 1:
            return 0.0
        return self.top / (self.total - 1)


class PlaybackEngine:
    """Auto-scroll state machine for one FileSet.

    Not thread-safe: a single caller (the PlaybackLoop) drives it.
    """

    def __init__(
        self,
        files: FileSet,
        *,
        max_bytes: int,
        step: int = 1,
        interval_ms: int = 60,
        random_start: bool = False,
        highlighter: Highlighter | None = None,
        choose_index: IndexChooser = random.randrange,
    ) -> None:
        """Initialize the engine.

        Args:
            files: Non-empty FileSet to play.
            max_bytes: Per-file size limit for loading.
            step: Lines per tick.
            interval_ms: Tick interval.
            random_start: Start from a random file.
            highlighter: ``highlighter(text, path) -> lines``; plain text if None.
            choose_index: Random index provider used by random_start.

        Raises:
            EmptySetError: If ``files`` is empty.
        """
        if len(files) == 0:
            raise EmptySetError()
        self._files = files
        self._max_bytes = max_bytes
        self._highlighter = highlighter
        self._random_start = random_start
        self._choose_index = choose_index
        self._scroll = ScrollState(step=step, interval_ms=interval_ms)
        self._document: Document | None = None
        self._running = False
        self._stopped = False
        self._end_of_set = False

    @classmethod
    def from_config(
        cls,
        config: ScrollerConfig,
        paths: Sequence[Path],
        highlighter: Highlighter | None = None,
        choose_index: IndexChooser = random.randrange,
    ) -> PlaybackEngine:
        """Build an engine from validated configuration and discovered paths."""
        return cls(
            FileSet(paths, loop=config.loop_enabled),
            max_bytes=config.max_bytes,
            step=config.step,
            interval_ms=config.speed_ms,
            random_start=config.random_start,
            highlighter=highlighter,
            choose_index=choose_index,
        )

    # -- state access --------------------------------------------------------

    @property
    def files(self) -> FileSet:
        return self._files

    @property
    def scroll(self) -> ScrollState:
        return self._scroll

    @property
    def document(self) -> Document:
        if self._document is None:
            raise RuntimeError("PlaybackEngine.start() has not been called")
        return self._document

    @property
    def running(self) -> bool:
        """True between start() and Quit."""
        return self._running

    @property
    def interval_s(self) -> float:
        return self._scroll.interval_ms / 1000.0

    @property
    def end_of_set(self) -> bool:
        """True once auto-scroll exhausted the last file with looping off."""
        return self._end_of_set

    # -- lifecycle -----------------------------------------------------------

    def start(self) -> None:
        """Pick the starting file and load it. Idempotent."""
        if self._running or self._stopped:
            return
        if self._random_start:
            self._files.pick_random(self._choose_index)
        self._load_current(keep_position=False)
        self._running = True
        _logger.info(
            f"Playback started at {self._files.current_path()} "
            f"({self._files.index + 1}/{len(self._files)})"
        )

    # -- transitions ---------------------------------------------------------

    def tick(self) -> None:
        """Timer tick: scroll one step or move on to the next file."""
        if not self._running or self._scroll.paused:
            return
        total = self.document.total
        if not self._scroll.at_end(total):
            self._scroll.advance(total)
            return

        if self._files.next() is None:
            self._scroll.end(total)
            self._scroll.paused = True
            if not self._end_of_set:
                _logger.info("End of set reached; playback paused")
            self._end_of_set = True
            return
        _logger.debug(f"Auto-advancing to {self._files.current_path()}")
        self._load_current(keep_position=False)

    def dispatch(self, command: Command) -> None:
        """Apply one user command."""
        if not self._running:
            return
        match command:
            case Command.QUIT:
                self._running = False
                self._stopped = True
                _logger.info("Playback stopped")
            case Command.TOGGLE_PAUSE:
                self._scroll.toggle_pause()
            case Command.NEXT_FILE:
                if self._files.next() is not None:
                    self._load_current(keep_position=False)
            case Command.PREVIOUS_FILE:
                if self._files.previous() is not None:
                    self._load_current(keep_position=False)
            case Command.RELOAD:
                self._load_current(keep_position=True)
            case Command.HOME:
                self._scroll.home()
                self._end_of_set = False
            case Command.END:
                self._scroll.end(self.document.total)
            case Command.REFRESH:
                pass
            case _:
                raise ValueError(f"Unknown command: {command!r}")

    # -- rendering -----------------------------------------------------------

    def frame(self, viewport_height: int) -> Frame:
        """Describe what should be on screen for a viewport of the given height."""
        document = self.document
        height = max(0, viewport_height)
        start = min(self._scroll.top, document.total)
        end = min(start + height, document.total)

        if document.error is not None:
            status = f"{document.error.kind}: {document.error}"
        elif self._end_of_set:
            status = END_OF_SET
        else:
            status = ""

        return Frame(
            visible_lines=document.lines[start:end],
            file_label=str(document.source_path),
            position=(self._files.index, len(self._files)),
            paused=self._scroll.paused,
            top=self._scroll.top,
            total=document.total,
            syntax=document.syntax,
            status=status,
        )

    # -- internals -----------------------------------------------------------

    def _load_current(self, keep_position: bool) -> None:
        path = self._files.current_path()
        try:
            document = load_document(path, self._max_bytes, self._highlighter)
        except DocumentLoadError as e:
            _logger.warning(f"Failed to load {path}: {e}")
            document = Document.placeholder(e)
        else:
            _logger.debug(f"Loaded {path}: {document.total} lines ({document.syntax})")

        self._document = document
        if keep_position:
            self._scroll.clamp(document.total)
        else:
            self._scroll.home()
            self._end_of_set = False
