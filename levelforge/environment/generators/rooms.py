"""Room layout planning by rejection sampling."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from levelforge import config
from levelforge.util.coordinates import Rect
from levelforge.util.rng import SeededRng

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoomLayout:
    """Rooms accepted by the planner and the coverage they achieved.

    Attributes:
        rooms: Pairwise non-overlapping rooms in acceptance order.
        bounds: XZ extent of the level as (size_x, size_z).
        covered_area: Total number of cells covered by rooms.
        attempts: Placement attempts actually made.
    """

    rooms: tuple[Rect, ...]
    bounds: tuple[int, int]
    covered_area: int
    attempts: int

    @property
    def density(self) -> float:
        """Fraction of the XZ area covered by rooms."""
        bounds_area = self.bounds[0] * self.bounds[1]
        return self.covered_area / bounds_area if bounds_area else 0.0


class RoomLayoutPlanner:
    """Places non-overlapping rectangular rooms on the XZ plane.

    Each attempt draws a room size in [min_size, max_size] and an origin that
    keeps the room at least one cell away from the level border. Rooms that
    overlap an accepted room are rejected. Planning stops once the covered
    area reaches the target density or the attempt budget runs out; reaching
    the target is not guaranteed.
    """

    def __init__(self, rng: SeededRng) -> None:
        self.rng = rng

    def plan_rooms(
        self,
        bounds: tuple[int, int],
        min_size: int,
        max_size: int,
        target_density: float,
        max_attempts: int,
    ) -> RoomLayout:
        """Plan rooms inside `bounds` (size_x, size_z).

        Returns an empty layout, without error, when no room of the requested
        sizes can fit.
        """
        size_x, size_z = bounds
        bounds_area = size_x * size_z
        margin = config.ROOM_MARGIN

        rooms: list[Rect] = []
        covered_area = 0
        attempts = 0

        for _ in range(max_attempts):
            attempts += 1

            width = self.rng.randint(min_size, max_size)
            depth = self.rng.randint(min_size, max_size)

            # The room must fit strictly inside the bounds with a margin.
            max_x = size_x - width - margin
            max_z = size_z - depth - margin
            if max_x < margin or max_z < margin:
                continue

            x = self.rng.randint(margin, max_x)
            z = self.rng.randint(margin, max_z)
            new_room = Rect(x, z, width, depth)

            if any(new_room.intersects(other) for other in rooms):
                continue

            rooms.append(new_room)
            covered_area += new_room.area
            logger.debug(f"Accepted room {new_room} on attempt {attempts}")
            if covered_area / bounds_area >= target_density:
                break

        layout = RoomLayout(
            rooms=tuple(rooms),
            bounds=(size_x, size_z),
            covered_area=covered_area,
            attempts=attempts,
        )
        logger.info(
            f"Placed {len(rooms)} rooms in {attempts} attempts "
            f"(density {layout.density:.2f}, target {target_density:.2f})"
        )
        return layout
