"""
Configuration for the prompt engine.

Provides a small configuration object that can be loaded from YAML files
or constructed programmatically, with environment variable defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from prompt_engine.logging import get_logger
from prompt_engine.tui.keybindings import KeybindingsManager

logger = get_logger("config")

DEFAULT_WINDOW_SIZE = 7


def config_search_paths() -> list[Path]:
    """Config file locations, highest priority first."""
    return [
        Path.cwd() / "prompt-engine.yaml",
        Path.home() / ".config" / "prompt-engine" / "config.yaml",
    ]


def get_default_window_size() -> int:
    """Get the list window size from ``PROMPT_ENGINE_WINDOW_SIZE``, defaulting to 7."""
    val = os.environ.get("PROMPT_ENGINE_WINDOW_SIZE", "")
    try:
        size = int(val)
    except ValueError:
        return DEFAULT_WINDOW_SIZE
    return size if size >= 1 else DEFAULT_WINDOW_SIZE


def _normalize_keybindings(raw: Any) -> dict[str, list[str]]:
    """
    Validate keybinding overrides.

    A single descriptor string stands for a one-chord list.  Anything else
    that is not a list of strings is rejected.
    """
    if not isinstance(raw, dict):
        raise ValueError(f"keybindings must be a mapping of action to chords, got {type(raw).__name__}")
    keybindings: dict[str, list[str]] = {}
    for action, descriptors in raw.items():
        if isinstance(descriptors, str):
            descriptors = [descriptors]
        if not isinstance(descriptors, list) or not all(isinstance(d, str) for d in descriptors):
            raise ValueError(f"keybinding {action!r} must be a chord string or a list of chord strings")
        keybindings[str(action)] = list(descriptors)
    return keybindings


@dataclass
class PromptConfig:
    """
    Settings shared by every prompt.

    Example YAML:
        window_size: 5
        offset_window_scroll: true
        more_pattern: "• "
        end_pattern: "─"
        keybindings:
          cancel: ["ctrl+c", "escape"]
          toggle: ["space", "x"]
    """

    # List windowing
    window_size: int = field(default_factory=get_default_window_size)  # Rows shown at once
    offset_window_scroll: bool = True  # Keep one row of lookahead while scrolling
    chrome_rows: int = 3  # Question line + two indicator rows

    # Boundary indicator glyphs
    more_pattern: str = "• "  # Rows hidden beyond this edge
    end_pattern: str = "─"  # Edge of the list

    # Action -> key descriptors, overriding the defaults
    keybindings: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError(f"window_size must be at least 1, got {self.window_size}")
        if self.chrome_rows < 0:
            raise ValueError(f"chrome_rows must not be negative, got {self.chrome_rows}")
        self.keybindings = _normalize_keybindings(self.keybindings)
        if self.keybindings:
            # parse now so a bad chord fails while loading
            self.build_keybindings()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PromptConfig:
        """Create config from a dictionary."""
        return cls(
            window_size=int(data.get("window_size", get_default_window_size())),
            offset_window_scroll=bool(data.get("offset_window_scroll", True)),
            chrome_rows=int(data.get("chrome_rows", 3)),
            more_pattern=str(data.get("more_pattern", "• ")),
            end_pattern=str(data.get("end_pattern", "─")),
            keybindings=data.get("keybindings") or {},
        )

    @classmethod
    def from_yaml(cls, path: Path) -> PromptConfig:
        """Load config from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_yaml_string(cls, content: str) -> PromptConfig:
        """Load config from a YAML string."""
        data = yaml.safe_load(content)
        return cls.from_dict(data or {})

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary."""
        return {
            "window_size": self.window_size,
            "offset_window_scroll": self.offset_window_scroll,
            "chrome_rows": self.chrome_rows,
            "more_pattern": self.more_pattern,
            "end_pattern": self.end_pattern,
            "keybindings": {action: list(keys) for action, keys in self.keybindings.items()},
        }

    def build_keybindings(self) -> KeybindingsManager:
        """Build the keybindings manager with this config's overrides."""
        return KeybindingsManager(user_overrides=self.keybindings or None)


def load_config(path: str | Path | None = None) -> PromptConfig:
    """
    Resolve the active configuration.

    Search order:

    1. *path*, when given (must exist).
    2. ``./prompt-engine.yaml``
    3. ``~/.config/prompt-engine/config.yaml``
    4. Defaults.
    """
    if path is not None:
        return PromptConfig.from_yaml(Path(path))

    for candidate in config_search_paths():
        if candidate.is_file():
            logger.debug("Loading config from %s", candidate)
            return PromptConfig.from_yaml(candidate)

    return PromptConfig()
