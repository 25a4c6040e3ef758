"""Generation layers for the level pipeline.

Each layer transforms the GenerationContext in a specific way:
- Layout layers: Place rooms and route corridors on the XZ plane
- Grid layers: Seed floors and run the constraint solver
- Decoration layers: Place furniture and orient tiles
"""

from .decoration import FurnitureLayer, OrientationLayer
from .grid import GridSeedLayer, GridSolveLayer
from .layout import CorridorLayer, RoomLayoutLayer

__all__ = [
    "CorridorLayer",
    "FurnitureLayer",
    "GridSeedLayer",
    "GridSolveLayer",
    "OrientationLayer",
    "RoomLayoutLayer",
]
