"""
Logging for the prompt engine.

All modules log through children of the ``prompt_engine`` logger.  A prompt
owns stdout while it is on screen, so handlers installed here write to
stderr or to a file, never to stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_root_logger = logging.getLogger("prompt_engine")


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return getattr(logging, level.upper(), logging.INFO)


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure the package logger, replacing any handlers set up before.

    Args:
        level: Level name (``"DEBUG"``, ``"WARNING"``...) or number
        format: Record format, defaults to :data:`DEFAULT_FORMAT`
        stream: Stream for the console handler, defaults to stderr
        file: Optional path of an extra log file

    Example:
        from prompt_engine.logging import setup_logging

        # Trace key dispatch into a file while prompting
        setup_logging("DEBUG", file="prompts.log")
    """
    resolved = _resolve_level(level)
    formatter = logging.Formatter(format or DEFAULT_FORMAT)

    handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
    if file:
        handlers.append(logging.FileHandler(file))

    _root_logger.setLevel(resolved)
    _root_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(resolved)
        _root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """
    Child logger of the package, e.g. ``get_logger("tui.loop")``.

    Names already starting with ``prompt_engine.`` are used as-is.
    """
    if name.startswith("prompt_engine."):
        return logging.getLogger(name)
    return logging.getLogger(f"prompt_engine.{name}")


def set_level(level: str | int) -> None:
    """Change the package log level without touching handlers."""
    _root_logger.setLevel(_resolve_level(level))


def disable() -> None:
    """Silence the package logger."""
    _root_logger.disabled = True


def enable() -> None:
    """Undo :func:`disable`."""
    _root_logger.disabled = False
