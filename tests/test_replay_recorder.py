"""
Tests for recording, saving and replaying games.
"""

import json

import pytest

from torus_snake.snake_core.config_loader import load_config
from torus_snake.snake_core.game import GameEngine
from torus_snake.snake_core.geometry import Direction
from torus_snake.snake_core.replay_recorder import (
    ReplayRecorder,
    apply_command,
    compute_config_hash,
    generate_replay_filename,
    load_replay,
    play_replay,
    verify_replay,
)
from torus_snake.snake_core.rng import SeededRandom
from torus_snake.snake_core.rules import Status


@pytest.fixture
def config():
    return load_config()


def _play(recorder, moves):
    recorder.start()
    for direction in moves:
        recorder.set_direction(direction)
        recorder.step()


class TestRecorder:
    """Test command capture."""

    def test_records_commands(self, config):
        recorder = ReplayRecorder(seed=1, config=config)
        _play(recorder, [Direction.UP, Direction.LEFT])
        assert recorder.commands == [
            ["start"],
            ["set_direction", "UP"],
            ["step"],
            ["set_direction", "LEFT"],
            ["step"],
        ]

    def test_unrecognized_direction_not_recorded(self, config):
        recorder = ReplayRecorder(seed=1, config=config)
        assert recorder.set_direction((3, 3)) is False
        assert recorder.commands == []

    def test_replay_data(self, config):
        recorder = ReplayRecorder(seed=5, agent_name="tester", config=config, size=8)
        _play(recorder, [Direction.DOWN] * 3)
        data = recorder.get_replay_data()

        assert data["version"] == 1
        assert data["seed"] == 5
        assert data["agent"] == "tester"
        assert data["size"] == 8
        assert data["total_steps"] == 3
        assert data["final_status"] == "playing"
        assert data["config_hash"] == compute_config_hash(config, 8)

    def test_config_hash_depends_on_size(self, config):
        assert compute_config_hash(config, 8) != compute_config_hash(config, 9)
        assert compute_config_hash(config, 8) == compute_config_hash(config, 8)


class TestSaveLoad:
    """Test replay files."""

    def test_round_trip_verifies(self, config, tmp_path):
        recorder = ReplayRecorder(seed=42, agent_name="spiral", config=config, size=10)
        moves = [Direction.UP, Direction.LEFT, Direction.DOWN, Direction.RIGHT] * 15
        _play(recorder, moves)
        recorder.toggle_pause()
        recorder.step()

        path = recorder.save(tmp_path / "replay.json")
        data = load_replay(path)

        assert verify_replay(data, config)
        assert play_replay(data, config) == recorder.engine.get_state()

    def test_tampered_replay_fails(self, config, tmp_path):
        recorder = ReplayRecorder(seed=42, config=config, size=10)
        _play(recorder, [Direction.UP] * 4)
        data = recorder.get_replay_data()
        data["commands"].append(["step"])
        assert not verify_replay(data, config)

    def test_restart_is_replayed(self, config):
        recorder = ReplayRecorder(seed=9, config=config, size=6)
        _play(recorder, [Direction.DOWN] * 5)
        recorder.restart()
        _play(recorder, [Direction.UP] * 2)
        assert verify_replay(recorder.get_replay_data(), config)

    def test_no_overwrite(self, config, tmp_path):
        recorder = ReplayRecorder(seed=1, config=config)
        path = recorder.save(tmp_path / "replay.json")
        with pytest.raises(FileExistsError):
            recorder.save(path, overwrite=False)

    def test_auto_filename(self, config, tmp_path):
        recorder = ReplayRecorder(seed=3, agent_name="bot", config=config)
        path = recorder.save(directory=tmp_path)
        assert path.parent == tmp_path
        assert path.name.startswith("bot_")
        assert path.name.endswith("_s3.json")
        assert json.loads(path.read_text())["agent"] == "bot"

    def test_generate_filename_without_seed(self):
        path = generate_replay_filename("agent")
        assert path.name.startswith("agent_")
        assert "_s" not in path.name[len("agent_"):]

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_replay(tmp_path / "nope.json")


class TestApplyCommand:
    """Test single command dispatch."""

    def test_plain_and_direction_commands(self, config):
        engine = GameEngine(config=config, random_source=SeededRandom(0))
        apply_command(engine, ["start"])
        apply_command(engine, ["set_direction", "DOWN"])
        apply_command(engine, ["step"])
        assert engine.status is Status.PLAYING
        assert engine.get_state().direction is Direction.DOWN

    def test_unknown_command(self, config):
        engine = GameEngine(config=config, random_source=SeededRandom(0))
        with pytest.raises(ValueError):
            apply_command(engine, ["teleport"])
