"""Core settings shared by every codescroll subsystem."""

from codescroll.core.config import ScrollerConfig

__all__ = ["ScrollerConfig"]
