"""Generation context for the level pipeline.

The GenerationContext is a mutable container that holds all state of one
generation run. Each layer in the pipeline receives the same context and
modifies it in place. A context belongs to exactly one run and is discarded
with it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from levelforge.environment.catalog import TileCatalog
from levelforge.environment.generators.base import GenerationResult
from levelforge.environment.generators.corridors import CorridorNetwork
from levelforge.environment.generators.rooms import RoomLayout
from levelforge.environment.generators.wfc_solver import GridSolver
from levelforge.environment.level_plan import GenerationReport, LevelPlan, PlacedTile
from levelforge.settings import Settings
from levelforge.types import GridPos, XZCell
from levelforge.util.rng import SeededRng


@dataclass
class GenerationContext:
    """Mutable state container passed through the generation pipeline.

    Attributes:
        settings: Settings of the run.
        catalog: Tiles the run may place.
        seed: Seed actually used (resolved from the settings).
        rng: The single random source every layer draws from.
        room_layout: Rooms placed by the room layer.
        corridors: Corridor network routed between the rooms.
        solver: Grid solver, created once rooms and corridors exist.
        furniture: Cells that received furniture in the decoration pass.
        plan: Final plan, built by the last layer.
    """

    settings: Settings
    catalog: TileCatalog
    seed: int
    rng: SeededRng
    room_layout: RoomLayout | None = None
    corridors: CorridorNetwork | None = None
    solver: GridSolver | None = None
    furniture: list[GridPos] = field(default_factory=list)
    plan: LevelPlan | None = None

    @classmethod
    def create(
        cls, settings: Settings, catalog: TileCatalog, seed: int
    ) -> GenerationContext:
        """Create a fresh context whose random source is seeded with `seed`."""
        return cls(settings=settings, catalog=catalog, seed=seed, rng=SeededRng(seed))

    def floor_cells(self) -> list[XZCell]:
        """Room footprints in placement order, then corridor cells in sorted order."""
        cells: list[XZCell] = []
        if self.room_layout is not None:
            for room in self.room_layout.rooms:
                cells.extend(room.cells())
        if self.corridors is not None:
            cells.extend(sorted(self.corridors.cells))
        return cells

    def build_plan(self, rotations: dict[GridPos, int]) -> LevelPlan:
        """Freeze the solver's placements into a LevelPlan."""
        assert self.solver is not None
        placed = {
            pos: PlacedTile(tile=tile, position=pos, rotation=rotations.get(pos, 0))
            for pos, tile in self.solver.placed.items()
        }
        self.plan = LevelPlan(self.settings.level_size, placed)
        return self.plan

    def to_result(self) -> GenerationResult:
        """Bundle the finished run into a GenerationResult."""
        assert self.room_layout is not None
        assert self.corridors is not None
        assert self.solver is not None
        assert self.plan is not None

        report = GenerationReport(
            seed=self.seed,
            level_size=self.settings.level_size,
            rooms_placed=len(self.room_layout.rooms),
            room_density=self.room_layout.density,
            target_room_density=self.settings.room_density,
            corridor_connections=len(self.corridors.corridors),
            corridor_cells=len(self.corridors.cells),
            seeded_cells=self.solver.seeded_cells,
            collapses=self.solver.collapses,
            budget_exhausted=self.solver.budget_exhausted,
            cells_resolved=len(self.plan),
            holes=tuple(self.solver.holes()),
            capped_tiles=tuple(tile.name for tile in self.solver.capped_tiles),
            furniture_placed=len(self.furniture),
        )
        return GenerationResult(
            plan=self.plan,
            report=report,
            rooms=self.room_layout.rooms,
            corridors=self.corridors,
        )
