"""Tests for generation settings and presets."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from levelforge import config
from levelforge.errors import ConfigurationError
from levelforge.settings import Settings


class TestPresets:
    @pytest.mark.parametrize("name", sorted(config.PRESETS))
    def test_every_preset_is_valid(self, name: str) -> None:
        Settings.from_preset(name).validate()

    def test_small_dungeon_values(self) -> None:
        settings = Settings.from_preset("small_dungeon")
        assert settings.level_size == (15, 3, 15)
        assert settings.max_room_size == 6
        assert settings.room_density == 0.4

    def test_overrides_win(self) -> None:
        settings = Settings.from_preset("small_dungeon", seed=9, room_density=0.1)
        assert settings.seed == 9
        assert settings.room_density == 0.1

    def test_unknown_preset(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown preset"):
            Settings.from_preset("castle")


class TestFromMapping:
    def test_converts_values(self) -> None:
        settings = Settings.from_mapping(
            {"level_size": [10, 2, 12], "seed": "5", "room_density": "0.25"}
        )
        assert settings.level_size == (10, 2, 12)
        assert settings.seed == 5
        assert settings.room_density == 0.25

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown settings: colour"):
            Settings.from_mapping({"colour": "red"})

    def test_bad_value(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid settings value"):
            Settings.from_mapping({"seed": "abc"})

    def test_wrong_dimension_count(self) -> None:
        with pytest.raises(ConfigurationError, match="three values"):
            Settings.from_mapping({"level_size": [10, 10]})


class TestValidate:
    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({"level_size": (0, 3, 10)}, "positive"),
            ({"level_size": (10, -1, 10)}, "positive"),
            ({"min_room_size": 0}, "at least 1"),
            ({"min_room_size": 7, "max_room_size": 4}, "larger than"),
            ({"max_room_attempts": -1}, "max_room_attempts"),
            ({"room_density": 1.5}, "room_density"),
            ({"furniture_density": -0.1}, "furniture_density"),
        ],
    )
    def test_rejects(self, overrides: dict, message: str) -> None:
        with pytest.raises(ConfigurationError, match=message):
            Settings(**overrides).validate()

    def test_defaults_are_valid(self) -> None:
        Settings().validate()
        assert Settings().volume == 20 * 3 * 20


class TestSeed:
    def test_pinned_seed(self) -> None:
        assert Settings(seed=123).resolve_seed() == 123

    def test_random_seed_drawn_per_call(self) -> None:
        settings = Settings(use_random_seed=True)
        with patch("levelforge.settings.random_seed", side_effect=[1, 2]):
            assert settings.resolve_seed() == 1
            assert settings.resolve_seed() == 2

    def test_with_seed_pins(self) -> None:
        settings = Settings(use_random_seed=True).with_seed(77)
        assert not settings.use_random_seed
        assert settings.resolve_seed() == 77
