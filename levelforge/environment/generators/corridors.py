"""Corridor routing between rooms.

Rooms are linked by walking every room pair in order of increasing
center-to-center distance and keeping a pair when it joins two previously
disconnected groups (Kruskal style, with a union-find over room indices). A
pair whose rooms are already connected may still be kept, with the configured
probability, to add loops; those extra connections are capped at a fraction of
the room count. The walk stops as soon as every room is in one group, so the
accepted connections always form a spanning tree plus a few extra edges.

Each accepted pair is carved between one edge cell of each room, either as an
L-shaped corridor or as a stepped diagonal walk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from levelforge import config
from levelforge.types import XZCell
from levelforge.util.coordinates import Rect
from levelforge.util.rng import SeededRng

logger = logging.getLogger(__name__)


class CorridorStyle(Enum):
    ELBOW = "elbow"  # One axis fully, then the other
    STEPPED = "stepped"  # Random axis per step while both remain


@dataclass(frozen=True)
class Corridor:
    """One carved connection between two rooms.

    Attributes:
        room_a: Index of the first room.
        room_b: Index of the second room.
        start: Connection cell on the edge of room_a.
        end: Connection cell on the edge of room_b.
        cells: Cells visited from start to end, inclusive.
        style: How the path was carved.
        extra: True if the rooms were already connected when it was accepted.
    """

    room_a: int
    room_b: int
    start: XZCell
    end: XZCell
    cells: tuple[XZCell, ...]
    style: CorridorStyle
    extra: bool = False


@dataclass(frozen=True)
class CorridorNetwork:
    """All corridors of a level and the union of their cells."""

    corridors: tuple[Corridor, ...]
    cells: frozenset[XZCell]

    @property
    def connections(self) -> list[tuple[int, int]]:
        return [(c.room_a, c.room_b) for c in self.corridors]


class _DisjointSet:
    """Union-find over room indices."""

    def __init__(self, size: int) -> None:
        self._parent = list(range(size))
        self.groups = size

    def find(self, i: int) -> int:
        while self._parent[i] != i:
            self._parent[i] = self._parent[self._parent[i]]
            i = self._parent[i]
        return i

    def union(self, a: int, b: int) -> bool:
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        self._parent[max(root_a, root_b)] = min(root_a, root_b)
        self.groups -= 1
        return True


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def connection_point(from_room: Rect, to_room: Rect) -> XZCell:
    """Cell on the edge of `from_room` that faces `to_room`.

    The edge is picked from the dominant axis of the center-to-center delta;
    along that edge the cell is the one closest to the other room's center.
    """
    from_x, from_z = from_room.center()
    to_x, to_z = to_room.center()
    dx, dz = to_x - from_x, to_z - from_z

    if abs(dx) > abs(dz):
        x = from_room.x2 - 1 if dx > 0 else from_room.x1
        z = min(max(to_z, from_room.z1), from_room.z2 - 1)
    else:
        x = min(max(to_x, from_room.x1), from_room.x2 - 1)
        z = from_room.z2 - 1 if dz > 0 else from_room.z1
    return (x, z)


class CorridorRouter:
    """Connects rooms into one component and carves corridor cells."""

    def __init__(self, rng: SeededRng) -> None:
        self.rng = rng

    def route_corridors(
        self, rooms: list[Rect] | tuple[Rect, ...], extra_connection_probability: float
    ) -> CorridorNetwork:
        """Choose room connections and carve a corridor for each."""
        corridors: list[Corridor] = []
        for a, b, extra in self.select_connections(rooms, extra_connection_probability):
            corridors.append(self._carve(rooms, a, b, extra))

        cells: set[XZCell] = set()
        for corridor in corridors:
            cells.update(corridor.cells)

        logger.info(
            f"Routed {len(corridors)} corridors "
            f"({sum(c.extra for c in corridors)} extra) over {len(cells)} cells"
        )
        return CorridorNetwork(corridors=tuple(corridors), cells=frozenset(cells))

    def select_connections(
        self, rooms: list[Rect] | tuple[Rect, ...], extra_connection_probability: float
    ) -> list[tuple[int, int, bool]]:
        """Return accepted (room_a, room_b, is_extra) pairs in acceptance order."""
        count = len(rooms)
        if count < 2:
            return []

        centers = [room.center() for room in rooms]
        pairs: list[tuple[int, int, int]] = []
        for i in range(count):
            for j in range(i + 1, count):
                dx = centers[i][0] - centers[j][0]
                dz = centers[i][1] - centers[j][1]
                pairs.append((dx * dx + dz * dz, i, j))
        # Stable on (distance, i, j) so ties resolve the same way every run.
        pairs.sort()

        max_extra = max(1, int(count * config.EXTRA_CONNECTION_RATIO))
        groups = _DisjointSet(count)
        accepted: list[tuple[int, int, bool]] = []
        extra_count = 0

        for _, i, j in pairs:
            if groups.union(i, j):
                accepted.append((i, j, False))
                if groups.groups == 1:
                    break
            elif extra_count < max_extra and self.rng.chance(
                extra_connection_probability
            ):
                accepted.append((i, j, True))
                extra_count += 1

        return accepted

    def _carve(
        self, rooms: list[Rect] | tuple[Rect, ...], a: int, b: int, extra: bool
    ) -> Corridor:
        start = connection_point(rooms[a], rooms[b])
        end = connection_point(rooms[b], rooms[a])

        if self.rng.chance(config.CORRIDOR_ELBOW_PROBABILITY):
            style = CorridorStyle.ELBOW
            x_first = self.rng.chance(config.CORRIDOR_HORIZONTAL_FIRST_PROBABILITY)
            cells = elbow_path(start, end, x_first)
        else:
            style = CorridorStyle.STEPPED
            cells = self._stepped_path(start, end)

        logger.debug(
            f"Corridor {a}->{b} {style.value} from {start} to {end} "
            f"({len(cells)} cells{', extra' if extra else ''})"
        )
        return Corridor(
            room_a=a,
            room_b=b,
            start=start,
            end=end,
            cells=tuple(cells),
            style=style,
            extra=extra,
        )

    def _stepped_path(self, start: XZCell, end: XZCell) -> list[XZCell]:
        """Walk toward `end`, picking the axis at random while both remain."""
        x, z = start
        end_x, end_z = end
        cells = [(x, z)]
        while (x, z) != end:
            if x != end_x and z != end_z:
                if self.rng.chance(config.CORRIDOR_STEP_X_PROBABILITY):
                    x += _sign(end_x - x)
                else:
                    z += _sign(end_z - z)
            elif x != end_x:
                x += _sign(end_x - x)
            else:
                z += _sign(end_z - z)
            cells.append((x, z))
        return cells


def elbow_path(start: XZCell, end: XZCell, x_first: bool) -> list[XZCell]:
    """L-shaped path: run fully along one axis, then the other."""
    x, z = start
    end_x, end_z = end
    cells = [(x, z)]
    if x_first:
        while x != end_x:
            x += _sign(end_x - x)
            cells.append((x, z))
    while z != end_z:
        z += _sign(end_z - z)
        cells.append((x, z))
    while x != end_x:
        x += _sign(end_x - x)
        cells.append((x, z))
    return cells
