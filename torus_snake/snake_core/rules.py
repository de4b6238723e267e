"""
Game Rules
==========

Status transitions for lifecycle commands, the self-collision rule, and
step outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Sequence

from torus_snake.snake_core.geometry import Point


class Status(str, Enum):
    """Lifecycle status of a game."""
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAMEOVER = "gameover"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        """True for statuses only left through start or reset."""
        return self in (Status.GAMEOVER, Status.WON)


# Command -> {from status: to status}. Statuses missing from a row are no-ops.
TRANSITIONS: Dict[str, Dict[Status, Status]] = {
    "start": {
        Status.IDLE: Status.PLAYING,
        Status.GAMEOVER: Status.PLAYING,
        Status.WON: Status.PLAYING,
    },
    "toggle_pause": {
        Status.PLAYING: Status.PAUSED,
        Status.PAUSED: Status.PLAYING,
    },
}


def apply_command(command: str, status: Status) -> Status:
    """
    Status after a lifecycle command.

    Args:
        command: "start" or "toggle_pause".
        status: Current status.

    Returns:
        The new status, or the current one when the command does not apply.
    """
    try:
        table = TRANSITIONS[command]
    except KeyError:
        raise ValueError(f"Unknown command: {command}") from None
    return table.get(status, status)


def hits_self(snake: Sequence[Point], next_cell: Point) -> bool:
    """
    True if moving the head to next_cell runs into the body.

    The tail cell counts as free: it is vacated this tick unless food is
    eaten, and food never sits on the snake.
    """
    if next_cell == snake[-1]:
        return False
    return next_cell in snake


@dataclass(frozen=True)
class StepOutcome:
    """What a single step did."""
    skipped: bool = False
    moved: bool = False
    ate_food: bool = False
    collided: bool = False
    won: bool = False

    @staticmethod
    def no_op() -> "StepOutcome":
        return StepOutcome(skipped=True)

    @staticmethod
    def collision() -> "StepOutcome":
        return StepOutcome(collided=True)

    @staticmethod
    def move(ate_food: bool = False, won: bool = False) -> "StepOutcome":
        return StepOutcome(moved=True, ate_food=ate_food, won=won)

    @property
    def reason(self) -> str:
        """Short label for logs and info dicts."""
        if self.skipped:
            return "skipped"
        if self.collided:
            return "self_collision"
        if self.won:
            return "board_full"
        if self.ate_food:
            return "ate_food"
        return "moved"


def status_after_step(outcome: StepOutcome, status: Status) -> Status:
    """Status produced by a step outcome."""
    if outcome.collided:
        return Status.GAMEOVER
    if outcome.won:
        return Status.WON
    return status
