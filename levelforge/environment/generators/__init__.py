"""Level generation: rooms, corridors, the grid solver and the pipeline."""

from .base import GenerationResult
from .corridors import Corridor, CorridorNetwork, CorridorRouter, CorridorStyle
from .furniture import FurniturePlacer
from .pipeline import (
    GenerationContext,
    GenerationLayer,
    GenerationStatus,
    LevelGenerationRun,
    LevelGenerator,
    create_level_generator,
)
from .rooms import RoomLayout, RoomLayoutPlanner
from .wfc_solver import GridSolver, SolverStatus

__all__ = [
    "Corridor",
    "CorridorNetwork",
    "CorridorRouter",
    "CorridorStyle",
    "FurniturePlacer",
    "GenerationContext",
    "GenerationLayer",
    "GenerationResult",
    "GenerationStatus",
    "GridSolver",
    "LevelGenerationRun",
    "LevelGenerator",
    "RoomLayout",
    "RoomLayoutPlanner",
    "SolverStatus",
    "create_level_generator",
]
