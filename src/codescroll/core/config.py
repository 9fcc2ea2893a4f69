"""Runtime configuration.

Values are layered, lowest to highest precedence:
    defaults -> CODESCROLL_* environment variables -> YAML file -> CLI flags

Usage:
    config = ScrollerConfig(path="src", speed_ms=30)

    # From a YAML file with CLI overrides on top
    config = ScrollerConfig.from_yaml("codescroll.yaml", {"step": 2})
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

import yaml  # type: ignore[import-untyped]
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pygments.styles import get_all_styles

from codescroll.discovery import DEFAULT_EXTENSIONS, parse_extensions


class ScrollerConfig(BaseSettings):
    """Validated, immutable configuration for one codescroll process.

    Attributes:
        path: File or directory to scroll through.
        speed_ms: Delay between scroll ticks in milliseconds.
        step: Lines advanced per tick.
        loop_enabled: Wrap around to the first file after the last one.
        extensions: Allowed file extensions (no dots, lower-case).
        max_kb: Files larger than this are skipped / refused.
        random_start: Start at a random file instead of the first.
        theme: Pygments style used by the highlighter.
        log_level: Logging level name.
        log_file: Where log records go (the terminal belongs to the UI).
    """

    model_config = SettingsConfigDict(
        env_prefix="CODESCROLL_",
        frozen=True,
        extra="ignore",
    )

    path: Path
    speed_ms: int = Field(default=60, ge=1)
    step: int = Field(default=1, ge=1)
    loop_enabled: bool = True
    # CODESCROLL_EXTENSIONS is comma-separated, not JSON
    extensions: Annotated[frozenset[str], NoDecode] = Field(default=DEFAULT_EXTENSIONS)
    max_kb: int = Field(default=512, ge=1)
    random_start: bool = False
    theme: str = "monokai"
    log_level: str = "WARNING"
    log_file: Path | None = None

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Path does not exist: {v}")
        return v

    @field_validator("extensions", mode="before")
    @classmethod
    def validate_extensions(cls, v: Any) -> frozenset[str]:
        exts = parse_extensions(v)
        if not exts:
            raise ValueError("At least one file extension is required")
        return exts

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        available = set(get_all_styles())
        if v not in available:
            raise ValueError(f"Unknown theme: {v}. Available: {sorted(available)}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def max_bytes(self) -> int:
        """Size limit in bytes."""
        return self.max_kb * 1024

    @property
    def interval_s(self) -> float:
        """Tick interval in seconds."""
        return self.speed_ms / 1000.0

    @classmethod
    def from_yaml(cls, path: Path | str, overrides: dict[str, Any] | None = None) -> ScrollerConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file.
            overrides: Optional values that win over the file (CLI flags).

        Returns:
            Validated ScrollerConfig instance.

        Raises:
            ValueError: If the YAML file is empty or not a mapping.
        """
        path = Path(path)
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(
                f"Config YAML must be a mapping, got {type(data).__name__}: {path}"
            )

        if overrides:
            data = {**data, **overrides}

        return cls(**data)
