"""Grid layers: seeding and solving the 3D tile grid."""

from __future__ import annotations

import logging

from levelforge import config
from levelforge.environment.generators.pipeline.context import GenerationContext
from levelforge.environment.generators.pipeline.layer import GenerationLayer
from levelforge.environment.generators.wfc_solver import GridSolver, SolverStatus

logger = logging.getLogger(__name__)


class GridSeedLayer(GenerationLayer):
    """Creates the solver and force-resolves room and corridor floors."""

    progress = config.PROGRESS_GRID_SEEDED

    def advance(self, ctx: GenerationContext) -> bool:
        ctx.solver = GridSolver(ctx.settings.level_size, ctx.catalog, ctx.rng)
        ctx.solver.seed_floor(ctx.floor_cells())
        shrunk = ctx.solver.propagate()
        logger.debug(f"Initial propagation narrowed {shrunk} cells")
        return True


class GridSolveLayer(GenerationLayer):
    """Collapses the grid one cell per advance until the solver is done."""

    progress = config.PROGRESS_GRID_SOLVED

    def advance(self, ctx: GenerationContext) -> bool:
        assert ctx.solver is not None
        return ctx.solver.step() is SolverStatus.DONE
