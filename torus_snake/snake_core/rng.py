"""
RNG - Injectable Random Sources
===============================

The engine never touches a global generator. It draws uniform floats in
[0, 1) from a random source passed in at construction, so games can be
replayed exactly.
"""

from __future__ import annotations

import random
from typing import Callable, List, Optional, Sequence

# Any zero-argument callable returning a float in [0, 1).
RandomSource = Callable[[], float]


class SeededRandom:
    """
    Random source backed by a private random.Random instance.

    Two instances built with the same seed produce the same sequence.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize the source.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._seed = seed
        self._rng = random.Random(seed)
        self._draws: int = 0

    def __call__(self) -> float:
        self._draws += 1
        return self._rng.random()

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @property
    def draws(self) -> int:
        """Number of values produced since the last reseed."""
        return self._draws

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Restart the sequence.

        Args:
            seed: New random seed. Keeps current if None.
        """
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
        self._draws = 0

    def get_state(self) -> tuple:
        """Get generator state for checkpointing."""
        return self._rng.getstate()

    def set_state(self, state: tuple) -> None:
        """Restore generator state captured by get_state()."""
        self._rng.setstate(state)


class ScriptedRandom:
    """
    Random source that replays a fixed list of values, cycling at the end.

    Intended for tests that need to pin exactly which free cell is chosen.
    """

    def __init__(self, values: Sequence[float]):
        if not values:
            raise ValueError("ScriptedRandom needs at least one value")
        for value in values:
            if not 0.0 <= value < 1.0:
                raise ValueError(f"Scripted value must be in [0, 1), got {value}")
        self._values: List[float] = list(values)
        self._index: int = 0

    def __call__(self) -> float:
        value = self._values[self._index % len(self._values)]
        self._index += 1
        return value

    @property
    def draws(self) -> int:
        return self._index

    def reset(self) -> None:
        self._index = 0


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    """Default random source used when none is injected."""
    return SeededRandom(seed)
