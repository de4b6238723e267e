"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml

# Smallest square torus that still leaves room to turn around.
MIN_BOARD_SIZE = 4

DIRECTION_NAMES = ("up", "down", "left", "right")

# Bindings used when the config file has no input.keys section.
DEFAULT_KEYS = {
    "ArrowUp": "up",
    "ArrowDown": "down",
    "ArrowLeft": "left",
    "ArrowRight": "right",
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
}


@dataclass(frozen=True)
class BoardConfig:
    """Grid geometry and starting snake."""
    size: int             # Cells per side of the square torus
    initial_length: int   # Segments of the snake on a fresh game


@dataclass(frozen=True)
class TimingConfig:
    """Tick cadence for the driving loop."""
    tick_ms: int

    @property
    def tick_seconds(self) -> float:
        return self.tick_ms / 1000.0


@dataclass(frozen=True)
class InputConfig:
    """Key bindings and swipe detection."""
    swipe_threshold: float
    keys: Tuple[Tuple[str, str], ...]   # (key, direction name) pairs

    @property
    def key_map(self) -> Dict[str, str]:
        return dict(self.keys)


@dataclass(frozen=True)
class CapsConfig:
    """Episode limits for agent environments."""
    max_steps: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    timing: TimingConfig
    input: InputConfig
    caps: CapsConfig

    @property
    def board_size(self) -> int:
        return self.board.size

    @property
    def cell_count(self) -> int:
        """Total number of cells on the board."""
        return self.board.size * self.board.size


def max_initial_length(size: int) -> int:
    """Longest starting snake that fits left of the centered head."""
    return size // 2 + 1


def validate_board(size: int, initial_length: int) -> None:
    """
    Check that a board can host the starting snake.

    Raises:
        ValueError: If the board is too small or the snake does not fit.
    """
    if size < MIN_BOARD_SIZE:
        raise ValueError(f"Board size must be at least {MIN_BOARD_SIZE}, got {size}")
    if initial_length < 1:
        raise ValueError(f"initial_length must be at least 1, got {initial_length}")
    if initial_length > max_initial_length(size):
        raise ValueError(
            f"initial_length ({initial_length}) does not fit on a board of size {size} "
            f"(max {max_initial_length(size)})"
        )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    validate_board(config.board.size, config.board.initial_length)

    if config.timing.tick_ms <= 0:
        raise ValueError(f"tick_ms must be positive, got {config.timing.tick_ms}")

    if config.input.swipe_threshold <= 0:
        raise ValueError(
            f"swipe_threshold must be positive, got {config.input.swipe_threshold}"
        )

    for key, name in config.input.keys:
        if name not in DIRECTION_NAMES:
            raise ValueError(f"Key '{key}' bound to unknown direction '{name}'")

    if config.caps.max_steps <= 0:
        raise ValueError(f"max_steps must be positive, got {config.caps.max_steps}")


def _parse_keys(keys_data: dict) -> Tuple[Tuple[str, str], ...]:
    """Parse key bindings, normalizing direction names to lower case."""
    return tuple((str(key), str(name).lower()) for key, name in keys_data.items())


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f) or {}

    board_data = raw.get("board", {})
    board = BoardConfig(
        size=int(board_data.get("size", 20)),
        initial_length=int(board_data.get("initial_length", 3))
    )

    timing_data = raw.get("timing", {})
    timing = TimingConfig(
        tick_ms=int(timing_data.get("tick_ms", 120))
    )

    input_data = raw.get("input", {})
    input_config = InputConfig(
        swipe_threshold=float(input_data.get("swipe_threshold", 22)),
        keys=_parse_keys(input_data.get("keys") or DEFAULT_KEYS)
    )

    caps_data = raw.get("caps", {})
    caps = CapsConfig(
        max_steps=int(caps_data.get("max_steps", 10000))
    )

    config = GameConfig(
        board=board,
        timing=timing,
        input=input_config,
        caps=caps
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
