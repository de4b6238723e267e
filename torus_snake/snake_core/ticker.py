"""
Tick Driver
===========

Calls GameEngine.step() on a fixed cadence. The engine itself has no clock;
this is the loop that owns it, and the only place that serializes access
when several threads touch the same game.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Optional

from torus_snake.snake_core.game import GameEngine, StepResult
from torus_snake.snake_core.state_snapshot import GameSnapshot

logger = logging.getLogger(__name__)


class TickDriver:
    """
    Fixed-cadence loop around a GameEngine.

    All engine access made through the driver goes through one lock, so an
    input thread may call submit() while run() is stepping on another.
    """

    def __init__(
        self,
        engine: GameEngine,
        tick_ms: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        on_tick: Optional[Callable[[GameSnapshot], None]] = None
    ):
        """
        Initialize the driver.

        Args:
            engine: The game to drive.
            tick_ms: Milliseconds between steps. Uses config timing if None.
            clock: Monotonic time source in seconds.
            sleep: Blocking sleep in seconds.
            on_tick: Called with the snapshot after every step.
        """
        if tick_ms is None:
            tick_ms = engine.config.timing.tick_ms
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")

        self._engine = engine
        self._interval = tick_ms / 1000.0
        self._clock = clock
        self._sleep = sleep
        self._on_tick = on_tick

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._ticks_run: int = 0

    @property
    def interval(self) -> float:
        """Seconds between steps."""
        return self._interval

    @property
    def ticks_run(self) -> int:
        """Number of step() calls made by this driver."""
        return self._ticks_run

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def submit(self, command: Callable[[GameEngine], Any]) -> Any:
        """
        Run a command against the engine under the driver lock.

        Example:
            driver.submit(lambda game: game.set_direction(Direction.UP))
        """
        with self._lock:
            return command(self._engine)

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return self._engine.get_state()

    def tick(self) -> StepResult:
        """Step the engine once, immediately."""
        with self._lock:
            result = self._engine.step()
            self._ticks_run += 1
        if self._on_tick is not None:
            self._on_tick(result.snapshot)
        return result

    def stop(self) -> None:
        """
        Ask run() to return after the current tick.

        A stop requested before run() begins makes it return without stepping.
        """
        self._stop_event.set()

    def run(
        self,
        max_ticks: Optional[int] = None,
        stop_when_over: bool = True
    ) -> int:
        """
        Step on the cadence until stopped.

        Args:
            max_ticks: Return after this many ticks. Unlimited if None.
            stop_when_over: Return once the game reaches gameover or won.

        Returns:
            Number of ticks run by this call.
        """
        count = 0
        deadline = self._clock() + self._interval

        try:
            while not self._stop_event.is_set():
                if max_ticks is not None and count >= max_ticks:
                    break

                remaining = deadline - self._clock()
                if remaining > 0:
                    self._sleep(remaining)

                result = self.tick()
                count += 1

                if stop_when_over and result.snapshot.is_over:
                    logger.debug(
                        "Stopping driver: game %s after %d ticks",
                        result.snapshot.status.value, count
                    )
                    break

                # Late ticks are not made up; schedule from now instead.
                now = self._clock()
                deadline += self._interval
                if deadline < now:
                    deadline = now + self._interval
        finally:
            # A stop is consumed by the run it ends.
            self._stop_event.clear()
        return count
