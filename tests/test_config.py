"""Tests for the game configuration dataclass."""

import json

import pytest

from neon_snake.config import GameConfig


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert cfg.grid_size == 20
        assert cfg.initial_speed_ms == 150
        assert cfg.speed_increment_ms == 5
        assert cfg.min_speed_ms == 50
        assert cfg.food_reward == 10

    def test_frozen(self):
        cfg = GameConfig()
        with pytest.raises(AttributeError):
            cfg.grid_size = 10

    def test_to_dict(self):
        d = GameConfig(grid_size=12).to_dict()
        assert d["grid_size"] == 12
        assert d["food_reward"] == 10

    @pytest.mark.parametrize(
        ("kwargs", "match"),
        [
            ({"grid_size": 3}, "grid_size"),
            ({"min_speed_ms": 0}, "min_speed_ms"),
            ({"initial_speed_ms": 40}, "initial_speed_ms"),
            ({"speed_increment_ms": -1}, "speed_increment_ms"),
            ({"food_reward": 0}, "food_reward"),
            ({"max_food_attempts": 0}, "max_food_attempts"),
        ],
    )
    def test_validation(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            GameConfig(**kwargs)


class TestGameConfigFiles:
    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(grid_size=15, initial_speed_ms=120, food_reward=5)
        path = tmp_path / "nested" / "config.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg

    def test_saved_file_is_json(self, tmp_path):
        path = tmp_path / "config.json"
        GameConfig().save(path)
        raw = json.loads(path.read_text())
        assert raw["min_speed_ms"] == 50

    def test_partial_file_uses_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"grid_size": 10}))
        cfg = GameConfig.load(path)
        assert cfg.grid_size == 10
        assert cfg.initial_speed_ms == 150

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"grid_size": 10, "levels": 3}))
        with pytest.raises(ValueError, match="levels"):
            GameConfig.load(path)
