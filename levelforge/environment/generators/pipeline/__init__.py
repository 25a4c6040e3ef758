"""Pipeline-based level generation.

Each layer transforms a shared GenerationContext, and a LevelGenerationRun
steps through the layers one bounded chunk at a time.

Example usage:
    from levelforge.environment.generators.pipeline import create_level_generator

    generator = create_level_generator("small_dungeon", seed=42)
    result = generator.generate()

Stepping a run manually, for example once per frame:
    run = generator.start()
    while run.step() is GenerationStatus.RUNNING:
        ...
    result = run.result()
"""

from .context import GenerationContext
from .factory import create_level_generator
from .layer import GenerationLayer
from .layers import (
    CorridorLayer,
    FurnitureLayer,
    GridSeedLayer,
    GridSolveLayer,
    OrientationLayer,
    RoomLayoutLayer,
)
from .pipeline import (
    GenerationStatus,
    LevelGenerationRun,
    LevelGenerator,
    default_layers,
)

__all__ = [
    "CorridorLayer",
    "FurnitureLayer",
    "GenerationContext",
    "GenerationLayer",
    "GenerationStatus",
    "GridSeedLayer",
    "GridSolveLayer",
    "LevelGenerationRun",
    "LevelGenerator",
    "OrientationLayer",
    "RoomLayoutLayer",
    "create_level_generator",
    "default_layers",
]
