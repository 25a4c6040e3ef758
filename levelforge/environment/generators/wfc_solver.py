"""Best-effort Wave Function Collapse over a 3D tile grid.

The solver fills a bounded grid with tiles from a TileCatalog so that every
pair of resolved neighbors has compatible connectors and every resolved tile
satisfied its placement constraints when it was placed.

Usage:
    from levelforge.environment.generators.wfc_solver import GridSolver

    solver = GridSolver((15, 3, 15), catalog, rng)
    solver.seed_floor(floor_cells)   # rooms and corridors at y=0
    solver.solve()                   # or call step() from a host loop
    placed = solver.placed

Algorithm:
    1. Every cell starts with the full catalog as its domain.
    2. Room and corridor footprints are force-resolved to the catalog's first
       floor tile. Each resolution enqueues the cell's neighbors.
    3. Propagate: cells are taken from a FIFO worklist. An unresolved cell's
       domain is filtered to tiles whose placement constraints hold and whose
       connectors fit every resolved neighbor. If the domain shrank, its
       unresolved neighbors are enqueued.
    4. Collapse: the unresolved cell with the smallest non-empty domain is
       resolved by a weighted draw over tiles that have not reached their
       instance cap. Ties go to the first cell in x, y, z scan order.
    5. Repeat 3-4 until no candidate cell remains or the collapse budget
       (the level volume) is spent.

Performance Notes:
    Domains are stored as a boolean numpy array of shape (x, y, z, tiles) and
    connector compatibility is precomputed into a (directions, tiles, tiles)
    table, so the connector part of a domain update is a handful of boolean
    ANDs. Domain sizes are cached per cell to make the entropy scan a single
    argmin.

Contradictions are not fatal. A cell whose domain empties is left as a hole
and reported; there is no backtracking.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable
from enum import Enum, auto

import numpy as np

from levelforge import config
from levelforge.environment.catalog import TileCatalog
from levelforge.environment.tiles import (
    DIRECTIONS,
    TileDefinition,
    fits_resolved_neighbors,
)
from levelforge.types import GridPos, LevelSize, XZCell
from levelforge.util.rng import SeededRng

logger = logging.getLogger(__name__)

UNRESOLVED = -1

# Larger than any real domain size; used to mask cells out of the argmin.
_NO_CANDIDATE = np.iinfo(np.int32).max


class SolverStatus(Enum):
    RUNNING = auto()
    DONE = auto()


class GridSolver:
    """Constraint-propagation solver over a bounded 3D grid.

    The solver is a steppable state machine: `step()` performs one collapse
    and the propagation it triggers, so a host can spread the work over
    several frames. Stepping and `solve()` produce identical results.
    """

    def __init__(self, size: LevelSize, catalog: TileCatalog, rng: SeededRng) -> None:
        """Initialize the solver with every cell able to hold every tile.

        Args:
            size: Grid dimensions (x, y, z).
            catalog: Tiles that may be placed, in tie-break order.
            rng: Random source for weighted draws.
        """
        self.size = size
        self.catalog = catalog
        self.rng = rng

        self.tiles: tuple[TileDefinition, ...] = catalog.tiles
        self.num_tiles = len(self.tiles)

        self.domains = np.ones((*size, self.num_tiles), dtype=bool)
        self.entropy = np.full(size, self.num_tiles, dtype=np.int32)
        self.resolved = np.full(size, UNRESOLVED, dtype=np.int32)
        self.instance_counts = np.zeros(self.num_tiles, dtype=np.int64)

        self.weights = np.array([t.spawn_weight for t in self.tiles], dtype=np.float64)
        self.caps = np.array(
            [-1 if t.max_instances is None else t.max_instances for t in self.tiles],
            dtype=np.int64,
        )

        self.placed: dict[GridPos, TileDefinition] = {}
        self.queue: deque[GridPos] = deque()

        self.seeded_cells = 0
        self.collapses = 0
        self.propagations = 0
        self.budget = size[0] * size[1] * size[2]
        self.budget_exhausted = False
        self.done = False

        self._reported_holes: set[GridPos] = set()
        self._capped: list[TileDefinition] = []

        self._precompute_compatibility()

    def _precompute_compatibility(self) -> None:
        """Build compat[d, a, b]: tile a accepts tile b on its face d.

        With the table, filtering a domain against a resolved neighbor is a
        single row lookup instead of a loop over tiles.
        """
        self.compat = np.zeros(
            (len(DIRECTIONS), self.num_tiles, self.num_tiles), dtype=bool
        )
        for d, direction in enumerate(DIRECTIONS):
            for a, tile in enumerate(self.tiles):
                for b, other in enumerate(self.tiles):
                    self.compat[d, a, b] = tile.can_connect(other, direction)

    # -------------------------------------------------------------------------
    # Grid helpers
    # -------------------------------------------------------------------------

    def in_bounds(self, pos: GridPos) -> bool:
        x, y, z = pos
        size_x, size_y, size_z = self.size
        return 0 <= x < size_x and 0 <= y < size_y and 0 <= z < size_z

    def is_resolved(self, pos: GridPos) -> bool:
        return self.resolved[pos] != UNRESOLVED

    def domain(self, pos: GridPos) -> list[TileDefinition]:
        """Tiles still possible at `pos`, in catalog order."""
        return [self.tiles[i] for i in np.flatnonzero(self.domains[pos])]

    def _neighbors(self, pos: GridPos) -> Iterable[GridPos]:
        for direction in DIRECTIONS:
            neighbor = direction.step(pos)
            if self.in_bounds(neighbor):
                yield neighbor

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _resolve(self, pos: GridPos, tile: TileDefinition) -> None:
        """Commit `pos` to `tile` and enqueue its neighbors."""
        index = self.catalog.index_of(tile)
        self.resolved[pos] = index
        self.domains[pos] = False
        self.domains[pos][index] = True
        self.entropy[pos] = 1
        self.placed[pos] = tile

        self.instance_counts[index] += 1
        cap = self.caps[index]
        if cap >= 0 and self.instance_counts[index] >= cap and tile not in self._capped:
            self._capped.append(tile)
            logger.debug(f"Tile {tile.name!r} reached its instance cap of {cap}")

        self.queue.extend(self._neighbors(pos))

    def seed_floor(self, cells: Iterable[XZCell]) -> int:
        """Force-resolve footprint cells at y=0 to the catalog's floor tile.

        Cells outside the grid and cells already resolved are skipped.

        Returns:
            The number of cells seeded.
        """
        floor = self.catalog.floor_tile
        seeded = 0
        for x, z in cells:
            pos = (x, 0, z)
            if not self.in_bounds(pos) or self.is_resolved(pos):
                continue
            self._resolve(pos, floor)
            seeded += 1
        self.seeded_cells += seeded
        logger.debug(f"Seeded {seeded} floor cells with {floor.name!r}")
        return seeded

    def place(self, pos: GridPos, tile: TileDefinition) -> None:
        """Resolve `pos` to `tile` from outside the collapse loop and propagate.

        The caller is responsible for checking the tile is valid there, for
        example with `valid_tiles_at()`.
        """
        self._resolve(pos, tile)
        self.propagate()

    # -------------------------------------------------------------------------
    # Constraint checks
    # -------------------------------------------------------------------------

    def _allowed_mask(self, pos: GridPos, domain: np.ndarray) -> np.ndarray:
        """Filter `domain` to tiles that fit the current neighborhood of `pos`."""
        mask = domain.copy()
        for d, direction in enumerate(DIRECTIONS):
            neighbor = direction.step(pos)
            if not self.in_bounds(neighbor):
                continue
            neighbor_index = self.resolved[neighbor]
            if neighbor_index != UNRESOLVED:
                mask &= self.compat[d, :, neighbor_index]

        for index in np.flatnonzero(mask):
            if not self.tiles[index].can_place_at(pos, self.placed):
                mask[index] = False
        return mask

    def _is_capped(self, index: int) -> bool:
        cap = self.caps[index]
        return cap >= 0 and self.instance_counts[index] >= cap

    def valid_tiles_at(
        self, pos: GridPos, candidates: Iterable[TileDefinition]
    ) -> list[TileDefinition]:
        """Return the candidates that could be placed at `pos` right now.

        A candidate qualifies when the cell is in bounds and unresolved, the
        tile has not reached its instance cap, its placement constraints hold
        and its connectors fit every resolved neighbor.
        """
        if not self.in_bounds(pos) or self.is_resolved(pos):
            return []
        valid = []
        for tile in candidates:
            if self._is_capped(self.catalog.index_of(tile)):
                continue
            if not tile.can_place_at(pos, self.placed):
                continue
            if not fits_resolved_neighbors(tile, pos, self.placed):
                continue
            valid.append(tile)
        return valid

    # -------------------------------------------------------------------------
    # Propagation
    # -------------------------------------------------------------------------

    def _set_domain(self, pos: GridPos, mask: np.ndarray) -> None:
        self.domains[pos] = mask
        self.entropy[pos] = int(mask.sum())
        if self.entropy[pos] == 0 and pos not in self._reported_holes:
            self._reported_holes.add(pos)
            logger.debug(f"No tile fits cell {pos}; leaving it empty")

    def propagate(self) -> int:
        """Drain the worklist, narrowing domains until nothing changes.

        Returns:
            The number of cells whose domain shrank.
        """
        shrunk = 0
        while self.queue:
            pos = self.queue.popleft()
            if self.is_resolved(pos):
                continue

            domain = self.domains[pos]
            if not domain.any():
                continue

            new_domain = self._allowed_mask(pos, domain)
            if np.array_equal(new_domain, domain):
                continue

            self._set_domain(pos, new_domain)
            shrunk += 1
            for neighbor in self._neighbors(pos):
                if not self.is_resolved(neighbor):
                    self.queue.append(neighbor)

        self.propagations += shrunk
        return shrunk

    # -------------------------------------------------------------------------
    # Collapse
    # -------------------------------------------------------------------------

    def find_lowest_entropy(self) -> GridPos | None:
        """Return the unresolved cell with the fewest candidates, if any.

        Ties are broken by x, y, z scan order (the first cell wins).
        """
        candidates = (self.resolved == UNRESOLVED) & (self.entropy > 0)
        if not candidates.any():
            return None
        masked = np.where(candidates, self.entropy, _NO_CANDIDATE)
        flat_index = int(np.argmin(masked))
        x, y, z = np.unravel_index(flat_index, self.size)
        return (int(x), int(y), int(z))

    def collapse(self, pos: GridPos) -> TileDefinition | None:
        """Resolve `pos` with a weighted draw from its domain.

        The domain is re-checked first so the chosen tile is valid for the
        neighborhood at the time of resolution. Tiles at their instance cap
        are left out of the draw. If nothing remains, the cell becomes a hole.

        Returns:
            The chosen tile, or None if the cell became a hole.
        """
        domain = self._allowed_mask(pos, self.domains[pos])
        if not np.array_equal(domain, self.domains[pos]):
            self._set_domain(pos, domain)

        options = [int(i) for i in np.flatnonzero(domain) if not self._is_capped(i)]
        if not options:
            if domain.any():
                # Everything left is capped.
                self._set_domain(pos, np.zeros(self.num_tiles, dtype=bool))
            return None

        index = self.rng.weighted_choice(options, [self.weights[i] for i in options])
        tile = self.tiles[index]
        self._resolve(pos, tile)
        return tile

    def step(self) -> SolverStatus:
        """Perform one collapse and the propagation it triggers."""
        if self.done:
            return SolverStatus.DONE

        self.propagate()

        if self.collapses >= self.budget:
            self.budget_exhausted = self.find_lowest_entropy() is not None
            if self.budget_exhausted:
                logger.warning(
                    f"Solver stopped after its budget of {self.budget} collapses"
                )
            return self._finish()

        pos = self.find_lowest_entropy()
        if pos is None:
            return self._finish()

        self.collapse(pos)
        self.collapses += 1
        self.propagate()

        if self.collapses % config.SOLVER_LOG_INTERVAL == 0:
            logger.debug(f"Solver iteration {self.collapses}")
        return SolverStatus.RUNNING

    def solve(self) -> dict[GridPos, TileDefinition]:
        """Run collapse and propagation until the solver is done."""
        while self.step() is SolverStatus.RUNNING:
            pass
        return self.placed

    def _finish(self) -> SolverStatus:
        self.done = True
        hole_count = len(self.holes())
        logger.info(
            f"Solver finished after {self.collapses} collapses: "
            f"{len(self.placed)} cells resolved, {hole_count} holes"
        )
        if hole_count:
            logger.warning(f"{hole_count} cells were left empty by the solver")
        return SolverStatus.DONE

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def holes(self) -> list[GridPos]:
        """Unresolved cells whose domain is empty, in scan order."""
        mask = (self.resolved == UNRESOLVED) & (self.entropy == 0)
        return [(int(x), int(y), int(z)) for x, y, z in np.argwhere(mask)]

    @property
    def capped_tiles(self) -> list[TileDefinition]:
        """Tiles that reached their instance cap, in the order they did."""
        return list(self._capped)
