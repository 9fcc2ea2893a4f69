"""Codescroll errors.

Two families:
- EmptySetError is fatal and must surface before the UI starts.
- DocumentLoadError (and subclasses) are per-file and recoverable: the
  engine turns them into a placeholder document instead of raising.
"""

from __future__ import annotations

from pathlib import Path


class CodeScrollError(Exception):
    """Base class for all codescroll errors."""


class EmptySetError(CodeScrollError):
    """Raised when there are no eligible files to play."""

    def __init__(self, root: Path | str | None = None) -> None:
        self.root = Path(root) if root is not None else None
        if self.root is None:
            message = "No eligible files to display"
        else:
            message = f"No matching code files found under {self.root}"
        super().__init__(message)


class DocumentLoadError(CodeScrollError):
    """Raised when a single file cannot be turned into a Document."""

    def __init__(self, path: Path | str, message: str) -> None:
        super().__init__(message)
        self.path = Path(path)

    @property
    def kind(self) -> str:
        """Short label for the failure, shown in the status line."""
        return "load failed"


class TooLargeError(DocumentLoadError):
    """File exceeds the configured maximum size."""

    def __init__(self, path: Path | str, size: int, limit: int) -> None:
        super().__init__(path, f"{path} is {size} bytes (limit {limit})")
        self.size = size
        self.limit = limit

    @property
    def kind(self) -> str:
        return "too large"


class UnreadableError(DocumentLoadError):
    """I/O or permission failure while reading a file."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        reason = cause.strerror or str(cause)
        super().__init__(path, f"cannot read {path}: {reason}")
        self.cause = cause

    @property
    def kind(self) -> str:
        return "unreadable"


class NotTextError(DocumentLoadError):
    """File content is binary or not valid UTF-8."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(path, f"{path} is not displayable text ({reason})")
        self.reason = reason

    @property
    def kind(self) -> str:
        return "not text"
