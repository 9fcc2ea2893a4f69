"""Syntax highlighting.

Wraps rich's Syntax (pygments underneath) and returns one styled
``rich.text.Text`` per source line. Lexer selection: file name first, then
content, then plain text.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pygments.lexers import guess_lexer
from pygments.util import ClassNotFound
from rich.syntax import Syntax
from rich.text import Text

_logger = logging.getLogger(__name__)

PLAIN_TEXT = "text"
PLAIN_TEXT_NAME = "Plain Text"
DEFAULT_THEME = "monokai"


class SyntaxHighlighter:
    """Callable highlighter: ``highlighter(raw_text, path) -> list[Text]``.

    Usage:
        highlighter = SyntaxHighlighter(theme="monokai")
        lines = highlighter(source, Path("main.py"))

        # Lines and lexer name from a single lexer pass
        lines, name = highlighter.render(source, Path("main.py"))
    """

    def __init__(self, theme: str = DEFAULT_THEME, tab_size: int = 4) -> None:
        self._theme = theme
        self._tab_size = tab_size

    @property
    def theme(self) -> str:
        return self._theme

    def lexer_for(self, raw_text: str, path: Path | str) -> str:
        """Pick a lexer alias for the file."""
        lexer_name = Syntax.guess_lexer(str(path), code=raw_text)
        if lexer_name not in ("default", PLAIN_TEXT):
            return lexer_name
        try:
            lexer = guess_lexer(raw_text)
        except ClassNotFound:
            return PLAIN_TEXT
        return lexer.aliases[0] if lexer.aliases else PLAIN_TEXT

    def render(self, raw_text: str, path: Path | str) -> tuple[list[Text], str]:
        """Highlight ``raw_text`` and name its lexer, guessing the lexer once.

        Returns:
            ``(lines, syntax_name)`` where ``lines`` follows the same rules
            as ``__call__``.
        """
        syntax = self._syntax(raw_text, path)
        lexer = syntax.lexer
        name = lexer.name if lexer is not None else PLAIN_TEXT_NAME
        _logger.debug(f"Highlighting {path} as {name}")
        return self._split(syntax, raw_text), name

    def __call__(self, raw_text: str, path: Path | str) -> list[Text]:
        """Highlight ``raw_text`` and split it into styled lines.

        The result has one entry per line of the input: a trailing newline
        does not add an empty line, and empty input yields no lines.
        """
        return self._split(self._syntax(raw_text, path), raw_text)

    def _split(self, syntax: Syntax, raw_text: str) -> list[Text]:
        if not raw_text:
            return []
        text = syntax.highlight(raw_text)
        lines = list(text.split("\n", allow_blank=False))
        for line in lines:
            line.no_wrap = True
            line.end = ""
        return lines

    def _syntax(self, raw_text: str, path: Path | str) -> Syntax:
        return Syntax(
            raw_text,
            self.lexer_for(raw_text, path),
            theme=self._theme,
            tab_size=self._tab_size,
        )


def plain_lines(raw_text: str) -> list[Text]:
    """Unstyled split with the same line semantics as SyntaxHighlighter."""
    if not raw_text:
        return []
    parts = raw_text.split("\n")
    if raw_text.endswith("\n"):
        parts.pop()
    return [Text(part, no_wrap=True, end="") for part in parts]
