"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the snake game.
Reward is always 0.0 - agents must compute their own from info.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

import gymnasium as gym
from gymnasium import spaces

from torus_snake.snake_core.config_loader import GameConfig, load_config
from torus_snake.snake_core.game import GameEngine
from torus_snake.snake_core.geometry import Direction
from torus_snake.snake_core.rng import SeededRandom
from torus_snake.snake_core.rules import Status
from torus_snake.snake_core.state_snapshot import CELL_FOOD, GameSnapshot

logger = logging.getLogger(__name__)


class SnakeEnv(gym.Env):
    """
    Torus snake as a Gymnasium environment.

    Action Space:
        Discrete(4): 0 UP, 1 DOWN, 2 LEFT, 3 RIGHT.
        A reversal of the current heading is ignored by the engine, so the
        snake keeps going straight.

    Observation Space:
        Dict with the board grid, head and food cells, heading index,
        score and length.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, length, ticks, status, outcome.
    """

    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 8,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        size: Optional[int] = None,
        render_mode: Optional[str] = None,
        debug: bool = False,
    ):
        """
        Initialize snake environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            size: Board size override.
            render_mode: "ansi" for a text board, None for headless.
            debug: If True, logs every step at debug level.
        """
        super().__init__()

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._random = SeededRandom()
        self._game = GameEngine(
            config=self._config,
            random_source=self._random,
            size=size
        )
        self._max_steps = self._config.caps.max_steps

        self.action_space = spaces.Discrete(4)
        self.observation_space = self._build_observation_space()

        if self._debug:
            logger.debug("SnakeEnv initialized")
            logger.debug("  Board: %dx%d", self._game.size, self._game.size)
            logger.debug("  Max steps: %d", self._max_steps)

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        size = self._game.size
        cells = size * size

        return spaces.Dict({
            "grid": spaces.Box(low=0, high=CELL_FOOD, shape=(size, size), dtype=np.int8),
            "head": spaces.Box(low=0, high=size - 1, shape=(2,), dtype=np.int32),
            "food": spaces.Box(low=-1, high=size - 1, shape=(2,), dtype=np.int32),
            "direction": spaces.Discrete(4),
            "score": spaces.Box(low=0, high=cells, shape=(), dtype=np.int64),
            "length": spaces.Box(low=1, high=cells, shape=(), dtype=np.int32),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment and start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        if seed is not None:
            self._random.reset(seed)
        self._game.restart()

        obs = self._snapshot_to_obs(self._game.get_state())
        info = self._game.get_info()
        info["delta_score"] = 0
        info["outcome"] = "reset"

        return obs, info

    def step(
        self,
        action: Union[int, np.integer, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: Heading index in [0, 3].

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = int(action.item())
        direction = Direction.from_index(int(action))

        self._game.set_direction(direction)
        result = self._game.step()

        obs = self._snapshot_to_obs(result.snapshot)

        # Reward is always 0.0 - agents compute their own
        reward = 0.0

        terminated = result.snapshot.status in (Status.GAMEOVER, Status.WON)
        truncated = not terminated and result.snapshot.ticks >= self._max_steps

        info = self._game.get_info()
        info["delta_score"] = result.delta_score
        info["outcome"] = result.outcome.reason

        if self._debug:
            logger.debug(
                "Step: action=%s, outcome=%s, score=%d, length=%d",
                direction.name, result.outcome.reason,
                result.snapshot.score, result.snapshot.length
            )
            if terminated:
                logger.debug("TERMINATED: %s", result.snapshot.status.value)

        return obs, reward, terminated, truncated, info

    def _snapshot_to_obs(self, snapshot: GameSnapshot) -> Dict[str, np.ndarray]:
        """Convert snapshot to observation dict."""
        return snapshot.to_obs_dict()

    def render(self) -> Optional[str]:
        """
        Render the current game state.

        Returns:
            Text board if render_mode is "ansi", None otherwise.
        """
        if self.render_mode == "ansi":
            return self._game.get_state().render_text()
        return None

    def close(self) -> None:
        """Nothing to release; present for the Gymnasium API."""

    @property
    def game(self) -> GameEngine:
        """Access to underlying game (for debugging/tools)."""
        return self._game

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
