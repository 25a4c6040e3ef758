"""Decoration layers: furniture placement and cosmetic orientation."""

from __future__ import annotations

import logging

from levelforge import config
from levelforge.environment.generators.furniture import FurniturePlacer
from levelforge.environment.generators.pipeline.context import GenerationContext
from levelforge.environment.generators.pipeline.layer import GenerationLayer
from levelforge.types import GridPos

logger = logging.getLogger(__name__)


class FurnitureLayer(GenerationLayer):
    """Places furniture above a sample of floor cells."""

    progress = config.PROGRESS_FURNITURE

    def advance(self, ctx: GenerationContext) -> bool:
        assert ctx.solver is not None
        placer = FurniturePlacer(ctx.rng)
        ctx.furniture = placer.place_furniture(
            ctx.solver, ctx.settings.furniture_density
        )
        return True


class OrientationLayer(GenerationLayer):
    """Draws a cosmetic yaw for rotatable tiles and freezes the plan.

    Yaws are drawn in grid-scan order so they are reproducible. Tiles that
    cannot rotate keep a yaw of 0 and consume no randomness.
    """

    progress = config.PROGRESS_COMPLETE

    def advance(self, ctx: GenerationContext) -> bool:
        assert ctx.solver is not None
        rotations: dict[GridPos, int] = {}
        for pos in sorted(ctx.solver.placed):
            if ctx.solver.placed[pos].can_rotate:
                rotations[pos] = ctx.rng.choice(config.ROTATION_STEPS)
        plan = ctx.build_plan(rotations)
        logger.debug(f"Oriented {len(rotations)} of {len(plan)} placed tiles")
        return True
