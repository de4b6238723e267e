"""
Performance Benchmark
=====================

Measures engine and environment step throughput.

Usage:
    python -m tools.benchmark_speed [--steps N] [--size S] [--seed K]
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import Optional

import numpy as np

from torus_snake.snake_core.config_loader import load_config
from torus_snake.snake_core.env_gym import SnakeEnv
from torus_snake.snake_core.game import GameEngine
from torus_snake.snake_core.geometry import Direction
from torus_snake.snake_core.rng import SeededRandom


def _timing(mode: str, num_steps: int, elapsed: float) -> dict:
    return {
        "mode": mode,
        "num_steps": num_steps,
        "elapsed_seconds": elapsed,
        "steps_per_second": num_steps / elapsed,
        "ms_per_step": (elapsed * 1000) / num_steps
    }


def benchmark_engine(
    num_steps: int = 10000,
    size: Optional[int] = None,
    seed: int = 42
) -> dict:
    """
    Benchmark a bare GameEngine without Gym overhead.

    Args:
        num_steps: Number of steps.
        size: Board size override.
        seed: Random seed for food and actions.

    Returns:
        Dict with timing results.
    """
    game = GameEngine(config=load_config(), random_source=SeededRandom(seed), size=size)
    rng = np.random.default_rng(seed)
    directions = list(Direction)

    game.restart()
    start = time.perf_counter()

    for _ in range(num_steps):
        game.set_direction(directions[int(rng.integers(4))])
        game.step()
        if game.is_over:
            game.restart()

    elapsed = time.perf_counter() - start
    return _timing("engine", num_steps, elapsed)


def benchmark_env(
    num_steps: int = 10000,
    size: Optional[int] = None,
    seed: int = 42
) -> dict:
    """
    Benchmark the Gymnasium wrapper, observation packing included.

    Args:
        num_steps: Number of steps.
        size: Board size override.
        seed: Random seed for food and actions.

    Returns:
        Dict with timing results.
    """
    env = SnakeEnv(size=size)
    rng = np.random.default_rng(seed)

    env.reset(seed=seed)
    start = time.perf_counter()

    for _ in range(num_steps):
        _, _, terminated, truncated, _ = env.step(int(rng.integers(4)))
        if terminated or truncated:
            env.reset()

    elapsed = time.perf_counter() - start
    env.close()
    return _timing("env", num_steps, elapsed)


def run_all_benchmarks(steps: int, size: Optional[int], seed: int) -> list:
    """Run both benchmarks and print a summary table."""
    results = [
        benchmark_engine(num_steps=steps, size=size, seed=seed),
        benchmark_env(num_steps=steps, size=size, seed=seed),
    ]

    print("=" * 44)
    print("SNAKE PERFORMANCE BENCHMARK")
    print("=" * 44)
    print(f"{'Mode':<10} {'Steps':>8} {'Steps/s':>12} {'ms/step':>10}")
    print("-" * 44)
    for r in results:
        print(f"{r['mode']:<10} {r['num_steps']:>8} "
              f"{r['steps_per_second']:>12.1f} {r['ms_per_step']:>10.4f}")

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark snake engine performance")
    parser.add_argument("--steps", type=int, default=10000, help="Steps per benchmark")
    parser.add_argument("--size", type=int, default=None, help="Board size override")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")

    args = parser.parse_args()
    run_all_benchmarks(steps=args.steps, size=args.size, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
