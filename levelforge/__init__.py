"""Seeded procedural generation of 3D grid levels.

Rooms are placed on the XZ plane, joined by corridors, and the rest of the
grid is filled by an adjacency-constraint solver drawing from a tile
catalog. Every random decision comes from one seeded source, so the same
seed, settings and catalog always produce the same LevelPlan.
"""

from levelforge.environment.catalog import TileCatalog, default_catalog, rule_from_name
from levelforge.environment.generators import (
    GenerationResult,
    GenerationStatus,
    LevelGenerationRun,
    LevelGenerator,
    create_level_generator,
)
from levelforge.environment.level_plan import GenerationReport, LevelPlan, PlacedTile
from levelforge.environment.tiles import (
    ConnectionKind,
    Connector,
    Direction,
    TileCategory,
    TileDefinition,
)
from levelforge.errors import (
    ConfigurationError,
    GenerationIncomplete,
    LevelGenerationError,
)
from levelforge.settings import Settings

__all__ = [
    "ConfigurationError",
    "ConnectionKind",
    "Connector",
    "Direction",
    "GenerationIncomplete",
    "GenerationReport",
    "GenerationResult",
    "GenerationStatus",
    "LevelGenerationError",
    "LevelGenerationRun",
    "LevelGenerator",
    "LevelPlan",
    "PlacedTile",
    "Settings",
    "TileCatalog",
    "TileCategory",
    "TileDefinition",
    "create_level_generator",
    "default_catalog",
    "rule_from_name",
]
