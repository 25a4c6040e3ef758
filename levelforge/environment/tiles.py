"""
Tile definitions and adjacency rules.

This module defines:
- `TileCategory`: what kind of structure a tile is (floor, wall, door, ...).
- `ConnectionKind`: the tag carried by each face of a tile.
- `Direction`: the six face directions of a grid cell and their offsets.
- `Connector`: the per-face tags of one tile, plus the compatibility rule.
- `TileDefinition`: an immutable tile type with its spawn weight, instance
  cap, connector and placement constraints. The solver compares these by
  value; a catalog never holds two definitions with the same name.

Compatibility rule: two facing connectors are compatible when neither is
`NONE` and either one of them is `OPEN` (a wildcard) or both are the same
kind.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from levelforge import config
from levelforge.types import GridPos


class TileCategory(Enum):
    EMPTY = "empty"
    FLOOR = "floor"
    WALL = "wall"
    DOOR = "door"
    CEILING = "ceiling"
    FURNITURE = "furniture"


class ConnectionKind(Enum):
    NONE = "none"
    FLOOR = "floor"
    WALL = "wall"
    DOOR = "door"
    OPEN = "open"


class Direction(Enum):
    """Face directions of a grid cell. North is +Z, east is +X, up is +Y."""

    NORTH = (0, 0, 1)
    SOUTH = (0, 0, -1)
    EAST = (1, 0, 0)
    WEST = (-1, 0, 0)
    UP = (0, 1, 0)
    DOWN = (0, -1, 0)

    @property
    def offset(self) -> GridPos:
        return self.value

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def step(self, pos: GridPos) -> GridPos:
        """Return the neighbor of pos in this direction."""
        dx, dy, dz = self.value
        return (pos[0] + dx, pos[1] + dy, pos[2] + dz)


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}

# Iteration order used everywhere neighbors are visited.
DIRECTIONS: tuple[Direction, ...] = tuple(Direction)
HORIZONTAL_DIRECTIONS: tuple[Direction, ...] = DIRECTIONS[:4]

# Categories that can hold up a tile placed directly above them.
SUPPORT_CATEGORIES = frozenset({TileCategory.FLOOR, TileCategory.WALL})


def kinds_compatible(a: ConnectionKind, b: ConnectionKind) -> bool:
    """Return True if two facing connection kinds may touch."""
    if a is ConnectionKind.NONE or b is ConnectionKind.NONE:
        return False
    if a is ConnectionKind.OPEN or b is ConnectionKind.OPEN:
        return True
    return a is b


@dataclass(frozen=True)
class Connector:
    """Connection kind for each of the six faces of a tile."""

    north: ConnectionKind = ConnectionKind.NONE
    south: ConnectionKind = ConnectionKind.NONE
    east: ConnectionKind = ConnectionKind.NONE
    west: ConnectionKind = ConnectionKind.NONE
    up: ConnectionKind = ConnectionKind.NONE
    down: ConnectionKind = ConnectionKind.NONE

    @classmethod
    def uniform(
        cls,
        sides: ConnectionKind,
        up: ConnectionKind | None = None,
        down: ConnectionKind | None = None,
    ) -> Connector:
        """Build a connector with the same kind on all four horizontal faces."""
        return cls(
            north=sides,
            south=sides,
            east=sides,
            west=sides,
            up=sides if up is None else up,
            down=sides if down is None else down,
        )

    def face(self, direction: Direction) -> ConnectionKind:
        return getattr(self, direction.name.lower())

    def can_connect(self, other: Connector, direction: Direction) -> bool:
        """Check whether `other` may sit next to this connector in `direction`."""
        return kinds_compatible(self.face(direction), other.face(direction.opposite))


@dataclass(frozen=True)
class TileDefinition:
    """An immutable tile type.

    Attributes:
        name: Unique name within a catalog.
        category: Structural category of the tile.
        spawn_weight: Relative probability in weighted draws (non-negative).
        max_instances: Global placement cap, or None for unlimited.
        connector: Per-face connection kinds.
        requires_support: The cell below must hold a floor or wall tile.
        ground_only: The tile may only be placed on the bottom layer (y=0).
        can_rotate: A cosmetic 90 degree yaw may be applied when placed.
        forbidden_neighbors: Categories that may not be resolved next to it.
        required_neighbors: If non-empty, at least one resolved neighbor must
            be in one of these categories.
        min_neighbor_count: Inclusive lower bound on resolved neighbors.
        max_neighbor_count: Inclusive upper bound on resolved neighbors.
    """

    name: str
    category: TileCategory
    spawn_weight: float = 1.0
    max_instances: int | None = None
    connector: Connector = field(default_factory=Connector)
    requires_support: bool = False
    ground_only: bool = False
    can_rotate: bool = True
    forbidden_neighbors: frozenset[TileCategory] = frozenset()
    required_neighbors: frozenset[TileCategory] = frozenset()
    min_neighbor_count: int = config.DEFAULT_MIN_NEIGHBOR_COUNT
    max_neighbor_count: int = config.DEFAULT_MAX_NEIGHBOR_COUNT

    def __post_init__(self) -> None:
        # Accept any iterable of categories but store frozensets so the
        # definition stays hashable.
        object.__setattr__(
            self, "forbidden_neighbors", frozenset(self.forbidden_neighbors)
        )
        object.__setattr__(
            self, "required_neighbors", frozenset(self.required_neighbors)
        )

    @property
    def is_capped(self) -> bool:
        return self.max_instances is not None

    def can_connect(self, other: TileDefinition, direction: Direction) -> bool:
        """Check connector compatibility with `other` placed in `direction`."""
        return self.connector.can_connect(other.connector, direction)

    def can_place_at(
        self, pos: GridPos, placed: Mapping[GridPos, TileDefinition]
    ) -> bool:
        """Evaluate the placement constraints of this tile at `pos`.

        Only resolved cells (entries of `placed`) are considered. Connector
        compatibility and instance caps are checked separately.
        """
        if self.ground_only and pos[1] != 0:
            return False
        if self.requires_support and not has_support(pos, placed):
            return False

        neighbors = resolved_neighbors(pos, placed)
        categories = {tile.category for tile in neighbors}

        if categories & self.forbidden_neighbors:
            return False
        if self.required_neighbors and not (categories & self.required_neighbors):
            return False
        return self.min_neighbor_count <= len(neighbors) <= self.max_neighbor_count

    def __repr__(self) -> str:
        return f"TileDefinition({self.name!r}, {self.category.name})"


def has_support(pos: GridPos, placed: Mapping[GridPos, TileDefinition]) -> bool:
    """True if the cell below `pos` holds a floor or wall tile."""
    below = placed.get(Direction.DOWN.step(pos))
    return below is not None and below.category in SUPPORT_CATEGORIES


def resolved_neighbors(
    pos: GridPos, placed: Mapping[GridPos, TileDefinition]
) -> list[TileDefinition]:
    """Return the resolved tiles around `pos` in direction order."""
    neighbors = []
    for direction in DIRECTIONS:
        tile = placed.get(direction.step(pos))
        if tile is not None:
            neighbors.append(tile)
    return neighbors


def fits_resolved_neighbors(
    tile: TileDefinition, pos: GridPos, placed: Mapping[GridPos, TileDefinition]
) -> bool:
    """True if every resolved neighbor of `pos` is connector-compatible."""
    for direction in DIRECTIONS:
        neighbor = placed.get(direction.step(pos))
        if neighbor is not None and not tile.can_connect(neighbor, direction):
            return False
    return True
