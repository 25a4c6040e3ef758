"""Furniture and decoration pass run after the grid is solved."""

from __future__ import annotations

import logging

from levelforge.environment.tiles import Direction, TileCategory
from levelforge.types import GridPos
from levelforge.util.rng import SeededRng

from .wfc_solver import GridSolver

logger = logging.getLogger(__name__)


class FurniturePlacer:
    """Places furniture on top of a sample of floor cells.

    round(floor_count * density) distinct floor cells are sampled without
    replacement. For each, the cell directly above gets a furniture tile
    drawn by spawn weight from the furniture tiles that are valid there. The
    attempt is skipped silently when that cell is out of bounds, already
    resolved, or no furniture tile fits.
    """

    def __init__(self, rng: SeededRng) -> None:
        self.rng = rng

    def place_furniture(self, solver: GridSolver, density: float) -> list[GridPos]:
        """Run the pass on a solved grid.

        Returns:
            Positions that received a furniture tile, in placement order.
        """
        furniture = solver.catalog.of_category(TileCategory.FURNITURE)
        if not furniture:
            logger.debug("Catalog has no furniture tiles; skipping furniture pass")
            return []

        floor_cells = sorted(
            pos
            for pos, tile in solver.placed.items()
            if tile.category is TileCategory.FLOOR
        )
        count = min(round(len(floor_cells) * density), len(floor_cells))
        if count <= 0:
            return []

        placed: list[GridPos] = []
        for floor_pos in self.rng.sample(floor_cells, count):
            target = Direction.UP.step(floor_pos)
            options = solver.valid_tiles_at(target, furniture)
            if not options:
                continue
            tile = self.rng.weighted_choice(options, [t.spawn_weight for t in options])
            solver.place(target, tile)
            placed.append(target)

        logger.info(
            f"Placed {len(placed)} furniture pieces from {count} floor samples"
        )
        return placed
