"""
Core Game
=========

The snake state machine: commands, tick transition, and snapshots.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, Optional

from torus_snake.snake_core.config_loader import GameConfig, get_config, validate_board
from torus_snake.snake_core.food import place_food
from torus_snake.snake_core.geometry import Direction, Point, initial_snake, next_head
from torus_snake.snake_core.rng import RandomSource, SeededRandom
from torus_snake.snake_core.rules import (
    Status,
    StepOutcome,
    apply_command,
    hits_self,
    status_after_step,
)
from torus_snake.snake_core.state_snapshot import GameSnapshot, build_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepResult:
    """Result of a single tick."""
    snapshot: GameSnapshot
    outcome: StepOutcome
    delta_score: int


class GameEngine:
    """
    Snake on a square torus, advanced one cell per external tick.

    The engine has no clock. A driver calls step() at its own cadence and
    feeds direction changes and lifecycle commands in between. The engine is
    not thread-safe; hosts with several threads must serialize every call.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        random_source: Optional[RandomSource] = None,
        size: Optional[int] = None
    ):
        """
        Initialize a fresh, idle game.

        Args:
            config: Game configuration. Uses default if None.
            random_source: Callable returning floats in [0, 1), used for food
                placement. An unseeded SeededRandom if None.
            size: Board size override. Uses config.board.size if None.

        Raises:
            ValueError: If the board cannot host the starting snake.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._size = int(size) if size is not None else config.board.size
        self._initial_length = config.board.initial_length
        validate_board(self._size, self._initial_length)

        self._random_source: RandomSource = (
            random_source if random_source is not None else SeededRandom()
        )

        # Game state, populated by _init_fields()
        self._snake: Deque[Point] = deque()
        self._direction: Direction = Direction.RIGHT
        self._pending_direction: Direction = Direction.RIGHT
        self._food: Optional[Point] = None
        self._score: int = 0
        self._status: Status = Status.IDLE
        self._ticks: int = 0

        self._init_fields()

    def _init_fields(self) -> None:
        """Lay out a fresh game: centered snake heading right, food placed."""
        self._snake = deque(initial_snake(self._size, self._initial_length))
        self._direction = Direction.RIGHT
        self._pending_direction = Direction.RIGHT
        self._food = place_food(self._size, self._snake, self._random_source)
        self._score = 0
        self._status = Status.IDLE
        self._ticks = 0

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def size(self) -> int:
        return self._size

    @property
    def random_source(self) -> RandomSource:
        return self._random_source

    @property
    def status(self) -> Status:
        return self._status

    @property
    def score(self) -> int:
        return self._score

    @property
    def ticks(self) -> int:
        """Steps taken while playing."""
        return self._ticks

    @property
    def is_over(self) -> bool:
        """True if the game ended in a collision or a full board."""
        return self._status.is_terminal

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_direction(self, direction: Any) -> bool:
        """
        Queue a heading for the next step.

        A reversal of the committed heading is refused, however many changes
        were queued since the last step. Values that are not one of the four
        unit directions are ignored.

        Args:
            direction: A Direction, a direction name, or a (dx, dy) pair.

        Returns:
            True if the pending heading was updated.
        """
        candidate = Direction.coerce(direction)
        if candidate is None:
            logger.debug("Ignoring unrecognized direction %r", direction)
            return False
        if candidate.is_opposite(self._direction):
            return False
        self._pending_direction = candidate
        return True

    def start(self) -> None:
        """Begin play from idle, or resume play after a finished game."""
        previous = self._status
        self._status = apply_command("start", self._status)
        if self._status is not previous:
            logger.debug("Game started from %s", previous.value)

    def toggle_pause(self) -> None:
        """Pause a running game or resume a paused one."""
        self._status = apply_command("toggle_pause", self._status)

    def reset(self) -> None:
        """Replace the whole game with a fresh idle one, same random source."""
        self._init_fields()
        logger.debug("Game reset")

    def restart(self) -> None:
        """Reset and immediately start playing."""
        self.reset()
        self.start()

    def step(self) -> StepResult:
        """
        Advance one tick. Does nothing unless the game is playing.

        Returns:
            StepResult with the new snapshot and what happened.
        """
        if self._status is not Status.PLAYING:
            return StepResult(
                snapshot=self.get_state(),
                outcome=StepOutcome.no_op(),
                delta_score=0
            )

        score_before = self._score
        self._ticks += 1

        self._direction = self._pending_direction
        target = next_head(self._snake[0], self._direction, self._size)

        if hits_self(self._snake, target):
            outcome = StepOutcome.collision()
        else:
            ate_food = self._food is not None and target == self._food
            self._snake.appendleft(target)
            won = False
            if not ate_food:
                self._snake.pop()
            else:
                self._score += 1
                self._food = place_food(self._size, self._snake, self._random_source)
                won = self._food is None
            outcome = StepOutcome.move(ate_food=ate_food, won=won)

        self._status = status_after_step(outcome, self._status)

        if outcome.collided:
            logger.info("Snake hit itself at %s; score %d", target, self._score)
        elif outcome.won:
            logger.info("Board filled after %d ticks; score %d", self._ticks, self._score)

        return StepResult(
            snapshot=self.get_state(),
            outcome=outcome,
            delta_score=self._score - score_before
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_state(self) -> GameSnapshot:
        """Immutable snapshot of the current game."""
        return build_snapshot(
            size=self._size,
            snake=self._snake,
            direction=self._direction,
            pending_direction=self._pending_direction,
            food=self._food,
            score=self._score,
            status=self._status,
            ticks=self._ticks
        )

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for agents and logs."""
        return {
            "score": self._score,
            "length": len(self._snake),
            "ticks": self._ticks,
            "status": self._status.value,
            "food": self._food.as_tuple() if self._food is not None else None,
        }

    def load_state(self, snapshot: GameSnapshot) -> None:
        """
        Replace the engine state with a snapshot's contents.

        The random source is kept.

        Raises:
            ValueError: If the snapshot is not a consistent game position on
                this engine's board.
        """
        if snapshot.size != self._size:
            raise ValueError(
                f"Snapshot board size {snapshot.size} does not match engine size {self._size}"
            )
        _validate_snapshot(snapshot)
        self._snake = deque(snapshot.snake)
        self._direction = snapshot.direction
        self._pending_direction = snapshot.pending_direction
        self._food = snapshot.food
        self._score = snapshot.score
        self._status = snapshot.status
        self._ticks = snapshot.ticks


def _validate_snapshot(snapshot: GameSnapshot) -> None:
    """Check a snapshot describes a position the engine can continue from."""
    size = snapshot.size
    if not snapshot.snake:
        raise ValueError("Snake must have at least one segment")
    for segment in snapshot.snake:
        if not segment.in_bounds(size):
            raise ValueError(f"Segment {segment} outside a board of size {size}")
    if len(set(snapshot.snake)) != len(snapshot.snake):
        raise ValueError("Snake segments overlap")
    if snapshot.food is not None:
        if not snapshot.food.in_bounds(size):
            raise ValueError(f"Food {snapshot.food} outside a board of size {size}")
        if snapshot.food in snapshot.snake:
            raise ValueError(f"Food {snapshot.food} lies on the snake")
    for value in (snapshot.direction, snapshot.pending_direction):
        if not isinstance(value, Direction):
            raise ValueError(f"Invalid direction: {value!r}")
    if not isinstance(snapshot.status, Status):
        raise ValueError(f"Invalid status: {snapshot.status!r}")
    if snapshot.score < 0 or snapshot.ticks < 0:
        raise ValueError("score and ticks must be non-negative")


def create_game(
    random_source: Optional[RandomSource] = None,
    size: Optional[int] = None,
    config: Optional[GameConfig] = None
) -> GameEngine:
    """Construct a fresh idle game."""
    return GameEngine(config=config, random_source=random_source, size=size)
