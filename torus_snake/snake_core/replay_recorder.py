"""
Replay Recorder
===============

Records the commands sent to a GameEngine so a game can be replayed and
checked for determinism.

Usage:
    from torus_snake.snake_core import ReplayRecorder, Direction

    recorder = ReplayRecorder(seed=42, agent_name="my_agent")
    recorder.start()
    recorder.set_direction(Direction.UP)
    recorder.step()
    path = recorder.save("my_replay.json")

    assert verify_replay(load_replay(path))
"""

from __future__ import annotations

import hashlib
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from torus_snake.snake_core.config_loader import GameConfig, get_config
from torus_snake.snake_core.game import GameEngine, StepResult
from torus_snake.snake_core.geometry import Direction
from torus_snake.snake_core.rng import SeededRandom
from torus_snake.snake_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)

REPLAY_VERSION = 1

# Commands without arguments, applied by name.
PLAIN_COMMANDS = ("start", "toggle_pause", "reset", "restart", "step")


def generate_replay_filename(
    agent_name: str = "replay",
    seed: Optional[int] = None,
    directory: Optional[Union[str, Path]] = None
) -> Path:
    """
    Generate a timestamped replay filename.

    Format: {agent_name}_{YYYYMMDD_HHMMSS}_s{seed}.json

    Args:
        agent_name: Name of the agent.
        seed: Random seed (optional, included if provided).
        directory: Directory for the file. Defaults to current directory.

    Returns:
        Path object for the replay file.
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    if seed is not None:
        filename = f"{agent_name}_{timestamp}_s{seed}.json"
    else:
        filename = f"{agent_name}_{timestamp}.json"

    if directory:
        return Path(directory) / filename
    return Path(filename)


def compute_config_hash(config: GameConfig, size: int) -> str:
    """Hash of the parameters that affect gameplay, for replay validation."""
    hash_data = {
        "size": size,
        "initial_length": config.board.initial_length,
    }
    return hashlib.md5(json.dumps(hash_data, sort_keys=True).encode()).hexdigest()[:8]


class ReplayRecorder:
    """
    Wrapper that records engine commands for replay.

    The recorder owns a GameEngine whose random source is a SeededRandom,
    so the seed plus the command list fully determine the game.

    Example:
        recorder = ReplayRecorder(seed=123, agent_name="greedy")
        recorder.start()
        while not recorder.engine.is_over:
            recorder.set_direction(choose(recorder.engine.get_state()))
            recorder.step()
        recorder.save("episode_123.json")
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        agent_name: str = "unknown",
        config: Optional[GameConfig] = None,
        size: Optional[int] = None
    ):
        """
        Initialize the replay recorder.

        Args:
            seed: Random seed for food placement.
            agent_name: Name of the agent (stored in replay metadata).
            config: Game configuration. Uses default if None.
            size: Board size override.
        """
        if config is None:
            config = get_config()

        self.agent_name = agent_name
        self._seed = seed
        self._config = config
        self._engine = GameEngine(
            config=config,
            random_source=SeededRandom(seed),
            size=size
        )
        self._commands: List[List[Any]] = []
        self._config_hash = compute_config_hash(config, self._engine.size)

    @property
    def engine(self) -> GameEngine:
        """The recorded engine. Commands sent to it directly are not recorded."""
        return self._engine

    @property
    def commands(self) -> List[List[Any]]:
        return [list(c) for c in self._commands]

    def start(self) -> None:
        self._commands.append(["start"])
        self._engine.start()

    def toggle_pause(self) -> None:
        self._commands.append(["toggle_pause"])
        self._engine.toggle_pause()

    def reset(self) -> None:
        self._commands.append(["reset"])
        self._engine.reset()

    def restart(self) -> None:
        self._commands.append(["restart"])
        self._engine.restart()

    def set_direction(self, direction: Any) -> bool:
        """Record and apply a direction change. Unrecognized values are not recorded."""
        candidate = Direction.coerce(direction)
        if candidate is None:
            return self._engine.set_direction(direction)
        self._commands.append(["set_direction", candidate.name])
        return self._engine.set_direction(candidate)

    def step(self) -> StepResult:
        self._commands.append(["step"])
        return self._engine.step()

    def get_replay_data(self) -> Dict[str, Any]:
        """
        Get the current replay data as a dictionary.

        Returns:
            Dictionary containing all replay data.
        """
        final = self._engine.get_state()
        return {
            "version": REPLAY_VERSION,
            "seed": self._seed,
            "agent": self.agent_name,
            "size": self._engine.size,
            "config_hash": self._config_hash,
            "commands": self.commands,
            "total_steps": sum(1 for c in self._commands if c[0] == "step"),
            "final_score": final.score,
            "final_status": final.status.value,
            "final_state": final.to_dict(),
        }

    def save(
        self,
        path: Optional[Union[str, Path]] = None,
        overwrite: bool = True,
        directory: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the replay to a JSON file.

        Args:
            path: Path to save the replay. If None, auto-generates a timestamped name.
            overwrite: If True, overwrite existing file.
            directory: Directory for auto-generated filename (only used if path is None).

        Returns:
            Path where the replay was saved.

        Raises:
            FileExistsError: If the file exists and overwrite is False.
        """
        if path is None:
            path = generate_replay_filename(
                agent_name=self.agent_name,
                seed=self._seed,
                directory=directory
            )
        else:
            path = Path(path)

        if path.exists() and not overwrite:
            raise FileExistsError(f"Replay file already exists: {path}")

        path.parent.mkdir(parents=True, exist_ok=True)

        replay_data = self.get_replay_data()

        with open(path, "w") as f:
            json.dump(replay_data, f, indent=2)

        logger.info(
            "Replay saved: %s (seed=%s, commands=%d, final score=%d)",
            path, self._seed, len(self._commands), replay_data["final_score"]
        )

        return path


def load_replay(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a replay file written by ReplayRecorder.save().

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")

    with open(path, "r") as f:
        return json.load(f)


def apply_command(engine: GameEngine, command: List[Any]) -> None:
    """
    Apply one recorded command to an engine.

    Raises:
        ValueError: If the command name is unknown.
    """
    name = command[0]
    if name == "set_direction":
        engine.set_direction(Direction.from_name(command[1]))
    elif name in PLAIN_COMMANDS:
        getattr(engine, name)()
    else:
        raise ValueError(f"Unknown replay command: {name}")


def play_replay(
    data: Dict[str, Any],
    config: Optional[GameConfig] = None
) -> GameSnapshot:
    """
    Re-run a replay on a fresh engine.

    Args:
        data: Replay dictionary (from load_replay or get_replay_data).
        config: Game configuration. Uses default if None.

    Returns:
        Snapshot after the last command.
    """
    if config is None:
        config = get_config()

    engine = GameEngine(
        config=config,
        random_source=SeededRandom(data.get("seed")),
        size=data.get("size")
    )

    expected_hash = data.get("config_hash")
    if expected_hash is not None and expected_hash != compute_config_hash(config, engine.size):
        logger.warning(
            "Replay config hash %s does not match current config; results may differ",
            expected_hash
        )

    for command in data.get("commands", []):
        apply_command(engine, command)

    return engine.get_state()


def verify_replay(
    data: Dict[str, Any],
    config: Optional[GameConfig] = None
) -> bool:
    """True if re-running the replay reproduces its recorded final state."""
    final = play_replay(data, config)
    return final == GameSnapshot.from_dict(data["final_state"])
