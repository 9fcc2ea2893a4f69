"""Eligible-file discovery.

Turns a root path into the ordered list of files the player will visit.

Eligibility:
- extension (lower-cased, without the dot) is in the allow-list
- size is at most ``max_bytes``
- name does not start with ``.`` (hidden directories are not descended)

Usage:
    files = collect_files(Path("src"), parse_extensions("py,rs"), 512 * 1024)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

_logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: frozenset[str] = frozenset({
    "rs", "toml", "c", "h", "cpp", "hpp", "cc", "cs", "go", "py", "js", "ts", "jsx", "tsx",
    "java", "kt", "swift", "php", "rb", "lua", "sh", "ps1", "sql", "html", "css", "json",
    "yml", "yaml", "md",
})


def parse_extensions(value: str | Iterable[str] | None) -> frozenset[str]:
    """Normalise an extension list.

    Accepts a comma-separated string (``"py, .RS"``) or an iterable of
    strings. Leading dots are stripped and entries lower-cased; blanks are
    dropped. ``None`` returns the default list.
    """
    if value is None:
        return DEFAULT_EXTENSIONS
    items = value.split(",") if isinstance(value, str) else value
    cleaned = (item.strip().lstrip(".").lower() for item in items)
    return frozenset(item for item in cleaned if item)


def _is_hidden(name: str) -> bool:
    return name.startswith(".") and len(name) > 1


def is_eligible(path: Path, extensions: frozenset[str], max_bytes: int) -> bool:
    """Check a single file against the extension, size and hidden rules."""
    if _is_hidden(path.name):
        return False
    if path.suffix.lstrip(".").lower() not in extensions:
        return False
    try:
        size = path.stat().st_size
    except OSError as e:
        _logger.debug(f"Skipping {path}: {e}")
        return False
    return size <= max_bytes


def collect_files(root: Path | str, extensions: frozenset[str], max_bytes: int) -> list[Path]:
    """Return every eligible file under ``root``, sorted by path.

    A file root yields itself (if eligible). Symlinked directories are not
    followed and symlinked files are skipped. An empty result is returned
    as-is; callers decide whether that is fatal.
    """
    root = Path(root)
    if root.is_file():
        return [root] if is_eligible(root, extensions, max_bytes) else []

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        # Prune in place so os.walk skips hidden directories
        dirnames[:] = [d for d in dirnames if not _is_hidden(d)]
        for name in filenames:
            candidate = Path(dirpath) / name
            if candidate.is_symlink() or not candidate.is_file():
                continue
            if is_eligible(candidate, extensions, max_bytes):
                found.append(candidate)

    found.sort()
    _logger.info(f"Found {len(found)} eligible files under {root}")
    return found
