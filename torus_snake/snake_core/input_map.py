"""
Input Mapping
=============

Translates raw key presses, touch gestures, and button clicks into engine commands.

The engine only knows directions and lifecycle commands; this module holds
the bindings and the small conveniences around them (a direction key also
starts an idle game, R restarts, and so on).
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from torus_snake.snake_core.config_loader import GameConfig
from torus_snake.snake_core.game import GameEngine
from torus_snake.snake_core.geometry import Direction
from torus_snake.snake_core.rules import Status

PAUSE_KEYS = (" ", "Spacebar")
RESTART_KEYS = ("r",)
START_KEYS = ("Enter",)

OVERLAY_TEXT: Dict[Status, Optional[str]] = {
    Status.IDLE: "Press Start",
    Status.PLAYING: None,
    Status.PAUSED: "Paused",
    Status.GAMEOVER: "Game Over",
    Status.WON: "You Win",
}


def normalize_key(key: str) -> str:
    """Lowercase single characters; named keys (ArrowUp, Enter) keep their case."""
    return key.lower() if len(key) == 1 else key


def build_key_map(config: GameConfig) -> Dict[str, Direction]:
    """Key name -> Direction from the configured bindings."""
    return {
        normalize_key(key): Direction.from_name(name)
        for key, name in config.input.keys
    }


def direction_for_swipe(dx: float, dy: float, threshold: float) -> Optional[Direction]:
    """
    Direction of a swipe, or None if it is too short.

    The dominant axis wins; ties go to the vertical axis. Positive dy points
    down the screen.
    """
    abs_x = abs(dx)
    abs_y = abs(dy)
    if max(abs_x, abs_y) < threshold:
        return None
    if abs_x > abs_y:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def pause_label(status: Status) -> str:
    return "Resume" if status is Status.PAUSED else "Pause"


def start_label(status: Status) -> str:
    return "Start" if status is Status.IDLE else "Restart"


def overlay_text(status: Status) -> Optional[str]:
    """Message shown over the board, None while playing."""
    return OVERLAY_TEXT[status]


class InputController:
    """
    Routes user input to a GameEngine.

    Every handler returns True when the input was recognized, so a host can
    decide whether to swallow the event.
    """

    def __init__(self, engine: GameEngine, config: Optional[GameConfig] = None):
        if config is None:
            config = engine.config

        self._engine = engine
        self._key_map = build_key_map(config)
        self._swipe_threshold = config.input.swipe_threshold

        # Touch gesture in progress: start point, and whether it already steered.
        self._touch_start: Optional[Tuple[float, float]] = None
        self._swipe_handled: bool = False

    @property
    def engine(self) -> GameEngine:
        return self._engine

    @property
    def swipe_threshold(self) -> float:
        return self._swipe_threshold

    def direction_for_key(self, key: str) -> Optional[Direction]:
        return self._key_map.get(normalize_key(key))

    def handle_key(self, key: str) -> bool:
        """
        Apply a key press.

        Direction keys steer and start an idle game, space toggles pause,
        R restarts, Enter starts. Anything else is ignored.
        """
        normalized = normalize_key(key)

        direction = self._key_map.get(normalized)
        if direction is not None:
            self._steer(direction)
            return True

        if normalized in PAUSE_KEYS:
            self._engine.toggle_pause()
            return True

        if normalized in RESTART_KEYS:
            self._engine.restart()
            return True

        if normalized in START_KEYS:
            self._engine.start()
            return True

        return False

    def handle_swipe(self, dx: float, dy: float) -> bool:
        """Apply a swipe displacement in pixels. Short swipes are ignored."""
        direction = direction_for_swipe(dx, dy, self._swipe_threshold)
        if direction is None:
            return False
        self._steer(direction)
        return True

    def touch_start(self, x: float, y: float, touches: int = 1) -> bool:
        """
        Begin a touch gesture at (x, y).

        Multi-finger touches are ignored and leave any gesture in progress alone.
        """
        if touches != 1:
            return False
        self._touch_start = (x, y)
        self._swipe_handled = False
        return True

    def touch_move(self, x: float, y: float) -> bool:
        """Steer once per gesture, as soon as the drag crosses the threshold."""
        if self._touch_start is None or self._swipe_handled:
            return False
        start_x, start_y = self._touch_start
        if self.handle_swipe(x - start_x, y - start_y):
            self._swipe_handled = True
            return True
        return False

    def touch_end(self, x: float, y: float) -> bool:
        """
        Finish the gesture. If the drag never steered, try the whole
        displacement once more.
        """
        if self._touch_start is None:
            return False
        start_x, start_y = self._touch_start
        steered = False
        if not self._swipe_handled:
            steered = self.handle_swipe(x - start_x, y - start_y)
        self._touch_start = None
        self._swipe_handled = False
        return steered

    def handle_board_tap(self) -> None:
        """A tap on the board starts an idle game."""
        if self._engine.status is Status.IDLE:
            self._engine.start()

    def press_start(self) -> None:
        """Start button: start when idle, otherwise restart."""
        if self._engine.status is Status.IDLE:
            self._engine.start()
        else:
            self._engine.restart()

    def press_pause(self) -> None:
        self._engine.toggle_pause()

    def _steer(self, direction: Direction) -> None:
        self._engine.set_direction(direction)
        if self._engine.status is Status.IDLE:
            self._engine.start()
