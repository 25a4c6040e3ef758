"""Generation output: the resolved level plan and its report.

A LevelPlan maps grid positions to PlacedTiles. Cells that never resolved
(holes, or cells nothing was placed in) are simply absent. Plans are immutable
once built; a new generation run produces a new plan.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from levelforge import config
from levelforge.types import GridPos, LevelSize, Yaw

from .tiles import TileCategory, TileDefinition


@dataclass(frozen=True)
class PlacedTile:
    """A tile committed to a grid cell.

    Attributes:
        tile: The resolved tile definition.
        position: Grid position of the cell.
        rotation: Cosmetic yaw in degrees (0, 90, 180 or 270). Does not affect
            connector logic.
    """

    tile: TileDefinition
    position: GridPos
    rotation: Yaw = 0

    @property
    def category(self) -> TileCategory:
        return self.tile.category


class LevelPlan(Mapping[GridPos, PlacedTile]):
    """Immutable mapping of grid position to placed tile."""

    def __init__(self, size: LevelSize, placed: Mapping[GridPos, PlacedTile]) -> None:
        self._size = size
        # Stored in grid-scan order so iteration is stable.
        self._placed = MappingProxyType(
            {pos: placed[pos] for pos in sorted(placed)}
        )

    @property
    def size(self) -> LevelSize:
        return self._size

    def __getitem__(self, pos: GridPos) -> PlacedTile:
        return self._placed[pos]

    def __iter__(self) -> Iterator[GridPos]:
        return iter(self._placed)

    def __len__(self) -> int:
        return len(self._placed)

    def tile_at(self, pos: GridPos) -> TileDefinition | None:
        placed = self._placed.get(pos)
        return placed.tile if placed is not None else None

    def count(self, tile: TileDefinition) -> int:
        """Number of cells resolved to `tile`."""
        return sum(1 for placed in self._placed.values() if placed.tile == tile)

    def positions_of(self, category: TileCategory) -> list[GridPos]:
        """Positions of every cell of a category, in grid-scan order."""
        return [
            pos for pos, placed in self._placed.items() if placed.category is category
        ]

    def category_counts(self) -> dict[TileCategory, int]:
        """Number of placed cells per category (zero counts included)."""
        counts = Counter(placed.category for placed in self._placed.values())
        return {category: counts.get(category, 0) for category in TileCategory}

    def render_layer(self, y: int) -> str:
        """Render one Y layer as ASCII, one row per Z and one column per X."""
        size_x, _, size_z = self._size
        rows = []
        for z in range(size_z):
            row = []
            for x in range(size_x):
                placed = self._placed.get((x, y, z))
                if placed is None:
                    row.append(config.HOLE_GLYPH)
                else:
                    row.append(config.CATEGORY_GLYPHS[placed.category.value])
            rows.append("".join(row))
        return "\n".join(rows)

    def __repr__(self) -> str:
        return f"LevelPlan(size={self._size}, placed={len(self._placed)})"


@dataclass(frozen=True)
class GenerationReport:
    """Summary of a generation run.

    Recoverable conditions end up here instead of being raised: the room
    density actually achieved, cells left as holes and tiles whose instance
    cap was reached.
    """

    seed: int
    level_size: LevelSize
    rooms_placed: int
    room_density: float
    target_room_density: float
    corridor_connections: int
    corridor_cells: int
    seeded_cells: int
    collapses: int
    budget_exhausted: bool
    cells_resolved: int
    holes: tuple[GridPos, ...]
    capped_tiles: tuple[str, ...]
    furniture_placed: int

    @property
    def hole_count(self) -> int:
        return len(self.holes)

    @property
    def density_reached(self) -> bool:
        return self.room_density >= self.target_room_density

    def summary(self) -> str:
        size_x, size_y, size_z = self.level_size
        lines = [
            f"Seed: {self.seed}",
            f"Level size: {size_x}x{size_y}x{size_z}",
            f"Rooms placed: {self.rooms_placed} "
            f"(density {self.room_density:.2f}, target {self.target_room_density:.2f})",
            f"Corridors: {self.corridor_connections} connections, "
            f"{self.corridor_cells} cells",
            f"Cells resolved: {self.cells_resolved} "
            f"({self.seeded_cells} seeded, {self.collapses} collapses)",
            f"Holes: {self.hole_count}",
            f"Furniture placed: {self.furniture_placed}",
        ]
        if self.capped_tiles:
            lines.append(f"Instance caps reached: {', '.join(self.capped_tiles)}")
        if self.budget_exhausted:
            lines.append("Solver iteration budget exhausted")
        return "\n".join(lines)
