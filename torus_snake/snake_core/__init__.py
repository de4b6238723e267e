"""
Snake Core - The deterministic game simulation.

This module provides the snake state machine on a toroidal grid and the
thin adapters that drive it (input mapping, tick driver, Gymnasium
environment, replay recording).

Main exports:
- GameEngine: The game state machine
- create_game: Construct a fresh idle game
- GameSnapshot: Immutable view of a game
- SnakeEnv: Gymnasium environment for agents
- TickDriver: Fixed-cadence loop around an engine
- InputController: Keys, swipes and buttons to engine commands
- GameConfig: Configuration loaded from game_config.yaml
"""

from torus_snake.snake_core.config_loader import GameConfig, load_config, get_config
from torus_snake.snake_core.geometry import Direction, Point
from torus_snake.snake_core.rng import RandomSource, SeededRandom, ScriptedRandom
from torus_snake.snake_core.food import place_food
from torus_snake.snake_core.rules import Status, StepOutcome
from torus_snake.snake_core.state_snapshot import GameSnapshot
from torus_snake.snake_core.game import GameEngine, StepResult, create_game
from torus_snake.snake_core.input_map import InputController, direction_for_swipe
from torus_snake.snake_core.ticker import TickDriver
from torus_snake.snake_core.env_gym import SnakeEnv
from torus_snake.snake_core.replay_recorder import (
    ReplayRecorder,
    load_replay,
    verify_replay,
    generate_replay_filename,
)

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "Direction",
    "Point",
    "RandomSource",
    "SeededRandom",
    "ScriptedRandom",
    "place_food",
    "Status",
    "StepOutcome",
    "GameSnapshot",
    "GameEngine",
    "StepResult",
    "create_game",
    "InputController",
    "direction_for_swipe",
    "TickDriver",
    "SnakeEnv",
    "ReplayRecorder",
    "load_replay",
    "verify_replay",
    "generate_replay_filename",
]
