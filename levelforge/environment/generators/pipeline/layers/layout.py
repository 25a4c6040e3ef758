"""Layout layers: room placement and corridor routing on the XZ plane."""

from __future__ import annotations

from levelforge import config
from levelforge.environment.generators.corridors import CorridorRouter
from levelforge.environment.generators.pipeline.context import GenerationContext
from levelforge.environment.generators.pipeline.layer import GenerationLayer
from levelforge.environment.generators.rooms import RoomLayoutPlanner


class RoomLayoutLayer(GenerationLayer):
    """Places rooms by rejection sampling until the density target is met."""

    progress = config.PROGRESS_ROOMS

    def advance(self, ctx: GenerationContext) -> bool:
        settings = ctx.settings
        size_x, _, size_z = settings.level_size
        planner = RoomLayoutPlanner(ctx.rng)
        ctx.room_layout = planner.plan_rooms(
            bounds=(size_x, size_z),
            min_size=settings.min_room_size,
            max_size=settings.max_room_size,
            target_density=settings.room_density,
            max_attempts=settings.max_room_attempts,
        )
        return True


class CorridorLayer(GenerationLayer):
    """Links every room into one component and carves the corridors."""

    progress = config.PROGRESS_CORRIDORS

    def advance(self, ctx: GenerationContext) -> bool:
        assert ctx.room_layout is not None
        router = CorridorRouter(ctx.rng)
        ctx.corridors = router.route_corridors(
            ctx.room_layout.rooms, ctx.settings.corridor_extra_probability
        )
        return True
