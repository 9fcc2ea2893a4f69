"""Document loading.

A Document is the decoded, line-split, highlighted content of one file.
Documents are immutable: navigation and reload build a new one.

Line semantics (shared by load and reload):
- ``\\r\\n`` and ``\\r`` are normalised to ``\\n``
- a trailing newline does not produce an extra empty line
- an empty file has zero lines
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from rich.text import Text

from codescroll.errors import DocumentLoadError, NotTextError, TooLargeError, UnreadableError
from codescroll.highlight import plain_lines

_logger = logging.getLogger(__name__)

Highlighter = Callable[[str, Path], Sequence[Text]]

# Leading bytes inspected for NUL when sniffing binary content
SNIFF_BYTES = 8192


@dataclass(frozen=True)
class Document:
    """Styled lines of one file.

    Attributes:
        source_path: File the lines came from.
        lines: One styled Text per source line.
        syntax: Lexer name used for highlighting.
        error: Set when this is a placeholder for a failed load.
    """

    source_path: Path
    lines: tuple[Text, ...] = field(default_factory=tuple)
    syntax: str = "Plain Text"
    error: DocumentLoadError | None = None

    @property
    def total(self) -> int:
        """Number of lines."""
        return len(self.lines)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def placeholder(cls, error: DocumentLoadError) -> Document:
        """Single-line document describing a load failure."""
        line = Text(f"[{error.kind}] {error}", style="bold red", no_wrap=True, end="")
        return cls(source_path=error.path, lines=(line,), syntax="-", error=error)


def read_text(path: Path, max_bytes: int) -> str:
    """Read and decode a file, enforcing the size and text checks.

    Raises:
        TooLargeError: Size (from metadata, then from the bytes read) exceeds max_bytes.
        UnreadableError: The file cannot be stat'ed, opened or read.
        NotTextError: NUL bytes in the leading sample, or invalid UTF-8.
    """
    try:
        size = path.stat().st_size
    except OSError as e:
        raise UnreadableError(path, e) from e
    if size > max_bytes:
        raise TooLargeError(path, size, max_bytes)

    try:
        with open(path, "rb") as f:
            # One extra byte detects files that grew since the stat
            raw = f.read(max_bytes + 1)
    except OSError as e:
        raise UnreadableError(path, e) from e
    if len(raw) > max_bytes:
        raise TooLargeError(path, len(raw), max_bytes)

    if b"\x00" in raw[:SNIFF_BYTES]:
        raise NotTextError(path, "NUL byte found")
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise NotTextError(path, f"invalid UTF-8 at byte {e.start}") from e

    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_document(path: Path | str, max_bytes: int, highlighter: Highlighter | None = None) -> Document:
    """Load ``path`` into a Document.

    The highlighter runs once per load. One with a ``render(text, path)``
    method returning ``(lines, syntax_name)`` is asked for both in a single
    call. If it returns a different number of lines than the source has,
    plain lines are used instead so line count always matches the file.

    Raises:
        DocumentLoadError: Any of TooLargeError, UnreadableError, NotTextError.
    """
    path = Path(path)
    text = read_text(path, max_bytes)
    plain = plain_lines(text)

    if highlighter is None:
        return Document(source_path=path, lines=tuple(plain))

    render = getattr(highlighter, "render", None)
    if callable(render):
        lines, syntax = render(text, path)
    else:
        lines, syntax = highlighter(text, path), "Plain Text"

    styled = list(lines)
    if len(styled) != len(plain):
        _logger.warning(
            f"Highlighter returned {len(styled)} lines for {path}, expected {len(plain)}; "
            "falling back to plain text"
        )
        styled = plain
    return Document(source_path=path, lines=tuple(styled), syntax=syntax)
