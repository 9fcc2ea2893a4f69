"""FileSet - ordered playlist of eligible files with a cursor.

Navigation either wraps (loop enabled) or clamps at the ends, in which case
the call is a no-op and reports it by returning ``None``.
"""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from pathlib import Path

from codescroll.errors import EmptySetError

IndexChooser = Callable[[int], int]


class FileSet:
    """Immutable path list plus the current index.

    Usage:
        files = FileSet([Path("a.py"), Path("b.py")], loop=True)
        files.next()          # -> 1
        files.next()          # -> 0 (wrapped)
        files.current_path()  # -> Path("a.py")
    """

    def __init__(self, paths: Sequence[Path | str], loop: bool = True) -> None:
        self._paths: tuple[Path, ...] = tuple(Path(p) for p in paths)
        self._loop = loop
        self._index = 0

    @property
    def paths(self) -> tuple[Path, ...]:
        return self._paths

    @property
    def loop(self) -> bool:
        return self._loop

    @property
    def index(self) -> int:
        """Current position (0-based)."""
        return self._index

    def __len__(self) -> int:
        return len(self._paths)

    def current_path(self) -> Path:
        """Path at the current index.

        Raises:
            EmptySetError: If the set has no entries.
        """
        if not self._paths:
            raise EmptySetError()
        return self._paths[self._index]

    def next(self) -> int | None:
        """Advance by one.

        Returns:
            The new index, or None if already at the end with looping off.
        """
        count = len(self._paths)
        if count == 0:
            return None
        if self._index + 1 < count:
            self._index += 1
        elif self._loop:
            self._index = 0
        else:
            return None
        return self._index

    def previous(self) -> int | None:
        """Step back by one.

        Returns:
            The new index, or None if already at the start with looping off.
        """
        count = len(self._paths)
        if count == 0:
            return None
        if self._index > 0:
            self._index -= 1
        elif self._loop:
            self._index = count - 1
        else:
            return None
        return self._index

    def jump(self, index: int) -> int:
        """Move directly to ``index`` (clamped to the valid range)."""
        if not self._paths:
            raise EmptySetError()
        self._index = max(0, min(index, len(self._paths) - 1))
        return self._index

    def pick_random(self, choose: IndexChooser = random.randrange) -> int:
        """Jump to a uniformly chosen index.

        Args:
            choose: ``choose(n)`` returns an int in ``[0, n)``. Tests pass a
                deterministic function here.

        Raises:
            EmptySetError: If the set has no entries.
        """
        if not self._paths:
            raise EmptySetError()
        return self.jump(choose(len(self._paths)))
