"""Generation settings.

Settings is a frozen value built explicitly by the host, from a preset, or
from a plain mapping loaded by whatever persistence layer the host uses.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from levelforge import config
from levelforge.errors import ConfigurationError
from levelforge.types import LevelSize
from levelforge.util.rng import random_seed


@dataclass(frozen=True)
class Settings:
    """Inputs of one generation run.

    Attributes:
        level_size: Grid dimensions (x, y, z). Y is the number of layers.
        seed: Seed used when use_random_seed is False.
        use_random_seed: Draw a fresh seed for every run.
        min_room_size: Smallest room side length.
        max_room_size: Largest room side length.
        max_room_attempts: Placement attempts made by the room planner.
        room_density: Target fraction of the XZ area covered by rooms.
        corridor_extra_probability: Chance of accepting a redundant
            connection between already-connected rooms.
        furniture_density: Fraction of floor cells that get a furniture
            attempt above them.
    """

    level_size: LevelSize = config.DEFAULT_LEVEL_SIZE
    seed: int = config.DEFAULT_SEED
    use_random_seed: bool = False
    min_room_size: int = config.DEFAULT_MIN_ROOM_SIZE
    max_room_size: int = config.DEFAULT_MAX_ROOM_SIZE
    max_room_attempts: int = config.DEFAULT_MAX_ROOM_ATTEMPTS
    room_density: float = config.DEFAULT_ROOM_DENSITY
    corridor_extra_probability: float = config.DEFAULT_CORRIDOR_EXTRA_PROBABILITY
    furniture_density: float = config.DEFAULT_FURNITURE_DENSITY

    @classmethod
    def from_preset(cls, name: str, **overrides: Any) -> Settings:
        """Build settings from a named preset in config.PRESETS.

        Raises:
            ConfigurationError: If the preset name is unknown.
        """
        try:
            preset = config.PRESETS[name]
        except KeyError:
            known = ", ".join(sorted(config.PRESETS))
            raise ConfigurationError(
                f"Unknown preset {name!r} (known presets: {known})."
            ) from None
        return cls.from_mapping({**preset, **overrides})

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Settings:
        """Build settings from a plain mapping of field names to values.

        Raises:
            ConfigurationError: If the mapping has unknown keys or a value
                cannot be converted.
        """
        field_names = {f.name for f in dataclasses.fields(cls)}
        unknown = set(values) - field_names
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(sorted(unknown))}."
            )

        kwargs: dict[str, Any] = dict(values)
        try:
            if "level_size" in kwargs:
                size = tuple(int(v) for v in kwargs["level_size"])
                if len(size) != 3:
                    raise ConfigurationError(
                        f"level_size needs three values, got {len(size)}."
                    )
                kwargs["level_size"] = size
            for name in ("seed", "min_room_size", "max_room_size", "max_room_attempts"):
                if name in kwargs:
                    kwargs[name] = int(kwargs[name])
            for name in (
                "room_density",
                "corridor_extra_probability",
                "furniture_density",
            ):
                if name in kwargs:
                    kwargs[name] = float(kwargs[name])
            if "use_random_seed" in kwargs:
                kwargs["use_random_seed"] = bool(kwargs["use_random_seed"])
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid settings value: {exc}") from exc
        return cls(**kwargs)

    def with_seed(self, seed: int) -> Settings:
        """Return a copy pinned to `seed`."""
        return dataclasses.replace(self, seed=seed, use_random_seed=False)

    def resolve_seed(self) -> int:
        """Return the seed a run should use.

        The pinned seed when use_random_seed is False, otherwise a fresh one
        from system entropy.
        """
        if self.use_random_seed:
            return random_seed()
        return self.seed

    @property
    def volume(self) -> int:
        size_x, size_y, size_z = self.level_size
        return size_x * size_y * size_z

    def validate(self) -> None:
        """Check the settings describe a level that can be generated.

        Raises:
            ConfigurationError: On the first problem found.
        """
        if len(self.level_size) != 3:
            raise ConfigurationError(
                f"level_size needs three values, got {self.level_size!r}."
            )
        if any(dim <= 0 for dim in self.level_size):
            raise ConfigurationError(
                f"Level dimensions must be positive, got {self.level_size!r}."
            )
        if self.min_room_size < 1:
            raise ConfigurationError(
                f"min_room_size must be at least 1, got {self.min_room_size}."
            )
        if self.min_room_size > self.max_room_size:
            raise ConfigurationError(
                f"min_room_size ({self.min_room_size}) is larger than "
                f"max_room_size ({self.max_room_size})."
            )
        if self.max_room_attempts < 0:
            raise ConfigurationError(
                f"max_room_attempts must not be negative, got "
                f"{self.max_room_attempts}."
            )
        for name in ("room_density", "corridor_extra_probability", "furniture_density"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}.")
