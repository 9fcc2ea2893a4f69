#!/usr/bin/env python3
# src/codescroll/scripts/codescroll.py
"""Codescroll Entry Point.

Usage:
    codescroll src/
    codescroll --speed-ms 30 --step 2 --no-loop --exts py,rs project/
    python -m codescroll.scripts.codescroll --config codescroll.yaml .

Exit status:
    0  normal quit
    1  no eligible files (nothing was drawn)
    2  invalid configuration
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from codescroll.core.config import ScrollerConfig
from codescroll.discovery import collect_files
from codescroll.errors import EmptySetError
from codescroll.highlight import SyntaxHighlighter
from codescroll.playback.engine import PlaybackEngine

_logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser.

    Every option defaults to None so that only flags given on the command
    line override the config file and environment.
    """
    parser = argparse.ArgumentParser(
        prog="codescroll",
        description="Auto-scroll code files with syntax highlighting.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Scroll through every source file under src/
    codescroll src/

    # Faster, two lines per tick, stop after the last file
    codescroll --speed-ms 30 --step 2 --no-loop src/

Keyboard shortcuts:
    q           Quit
    space       Pause / resume
    n / →       Next file
    p / ←       Previous file
    r           Reload current file
    Home / End  Jump to top / last line
    ?           Toggle help overlay
""",
    )

    parser.add_argument("path", metavar="PATH", help="A file or directory to scroll through")
    parser.add_argument(
        "--speed-ms",
        dest="speed_ms",
        type=int,
        default=None,
        help="Delay between scroll steps in milliseconds (default: 60)",
    )
    parser.add_argument(
        "--step",
        type=int,
        default=None,
        help="Number of lines to advance per tick (default: 1)",
    )
    parser.add_argument(
        "--loop",
        dest="loop_enabled",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Start over after the last file (default: on)",
    )
    parser.add_argument(
        "--exts",
        dest="extensions",
        default=None,
        metavar="LIST",
        help="Comma-separated extensions without dots, e.g. rs,go,py,ts",
    )
    parser.add_argument(
        "--max-kb",
        dest="max_kb",
        type=int,
        default=None,
        help="Maximum file size to load in KB; larger files are skipped (default: 512)",
    )
    parser.add_argument(
        "--random-start",
        dest="random_start",
        action="store_true",
        default=None,
        help="Start at a random file",
    )
    parser.add_argument("--theme", default=None, help="Pygments style name (default: monokai)")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML file with any of the options above (flags win)",
    )
    parser.add_argument("--log-file", dest="log_file", type=Path, default=None, metavar="FILE")
    parser.add_argument("--log-level", dest="log_level", default=None, metavar="LEVEL")

    return parser


def load_config(args: argparse.Namespace) -> ScrollerConfig:
    """Merge parsed CLI flags over the config file / environment.

    Raises:
        ValidationError: If any value is out of range.
        ValueError: If the YAML file is not a mapping.
        OSError: If the YAML file cannot be read.
    """
    overrides = {
        key: value
        for key, value in vars(args).items()
        if key != "config" and value is not None
    }
    if args.config is not None:
        return ScrollerConfig.from_yaml(args.config, overrides)
    return ScrollerConfig(**overrides)


def configure_logging(config: ScrollerConfig) -> None:
    """Route log records to the log file, or nowhere (the UI owns the terminal)."""
    handlers: list[logging.Handler]
    if config.log_file is not None:
        handlers = [logging.FileHandler(config.log_file, encoding="utf-8")]
    else:
        handlers = [logging.NullHandler()]
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def build_engine(config: ScrollerConfig) -> PlaybackEngine:
    """Discover files and build the engine.

    Raises:
        EmptySetError: If no eligible files were found.
    """
    paths = collect_files(config.path, config.extensions, config.max_bytes)
    if not paths:
        raise EmptySetError(config.path)
    return PlaybackEngine.from_config(config, paths, highlighter=SyntaxHighlighter(config.theme))


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ValidationError as e:
        print(f"Error: invalid configuration\n{e}", file=sys.stderr)
        return 2
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    configure_logging(config)

    try:
        engine = build_engine(config)
    except EmptySetError as e:
        _logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    _logger.info(f"Starting codescroll on {config.path} ({len(engine.files)} files)")

    # Import app here to avoid slow import on --help
    from codescroll.tui import CodeScrollApp

    app = CodeScrollApp(engine)
    app.run()
    return app.return_code or 0


if __name__ == "__main__":
    sys.exit(main())
