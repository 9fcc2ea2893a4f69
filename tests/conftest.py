"""Shared pytest fixtures and configuration.

This file is automatically loaded by pytest and provides fixtures
accessible to all tests.
"""

import os
from pathlib import Path

import pytest
from hypothesis import HealthCheck, settings

from tests.helpers import write_lines

# =============================================================================
# Hypothesis Configuration
# =============================================================================

# Define profiles for different environments
settings.register_profile(
    "ci",
    max_examples=50,  # Faster for CI
    deadline=None,  # No deadlines for slow tests
    suppress_health_check=[HealthCheck.too_slow],
)

settings.register_profile(
    "dev",
    max_examples=25,
    deadline=500,  # 500ms deadline for local tests
)

settings.register_profile(
    "thorough",
    max_examples=1000,  # Comprehensive for nightly runs
    deadline=None,
)

# Load profile based on environment variable
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))

# =============================================================================
# Source Tree Fixtures
# =============================================================================


@pytest.fixture
def make_files(tmp_path):
    """Factory: ``make_files(3, lines=5)`` -> sorted list of .py files."""

    def _make(count: int, lines: int = 5) -> list[Path]:
        return [
            write_lines(tmp_path / f"file_{i:02d}.py", lines, prefix=f"# file {i}")
            for i in range(count)
        ]

    return _make


@pytest.fixture
def source_tree(tmp_path) -> Path:
    """A small project tree with eligible and ineligible entries.

    Eligible (sorted): a.py, b.rs, docs/readme.md, pkg/mod.go
    Ineligible: .hidden.py, .git/config.py, image.png, big.py (> 1 KB)
    """
    root = tmp_path / "project"
    write_lines(root / "a.py", 5)
    write_lines(root / "b.rs", 3)
    write_lines(root / "docs" / "readme.md", 2)
    write_lines(root / "pkg" / "mod.go", 4)
    write_lines(root / ".hidden.py", 2)
    write_lines(root / ".git" / "config.py", 2)
    (root / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (root / "big.py").write_text("x = 1\n" * 400, encoding="utf-8")
    return root
