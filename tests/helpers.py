from __future__ import annotations

from levelforge.environment.catalog import TileCatalog
from levelforge.environment.level_plan import LevelPlan
from levelforge.environment.tiles import (
    DIRECTIONS,
    SUPPORT_CATEGORIES,
    ConnectionKind,
    Connector,
    Direction,
    TileCategory,
    TileDefinition,
)
from levelforge.types import XZCell
from levelforge.util.coordinates import Rect, connected_components

OPEN = ConnectionKind.OPEN


def make_floor(name: str = "Floor", **kwargs) -> TileDefinition:
    """A floor tile that accepts anything beside and above it."""
    kwargs.setdefault(
        "connector", Connector.uniform(OPEN, up=OPEN, down=ConnectionKind.FLOOR)
    )
    return TileDefinition(name=name, category=TileCategory.FLOOR, **kwargs)


def make_open_tile(
    name: str, category: TileCategory = TileCategory.EMPTY, **kwargs
) -> TileDefinition:
    """A tile whose every face is OPEN."""
    kwargs.setdefault("connector", Connector.uniform(OPEN))
    return TileDefinition(name=name, category=category, **kwargs)


def open_catalog() -> TileCatalog:
    """Floor plus an all-OPEN filler; every pair of tiles is compatible."""
    return TileCatalog([make_floor(), make_open_tile("Air")])


def no_door_catalog() -> TileCatalog:
    return TileCatalog.from_names(["Floor", "Wall", "Ceiling", "Empty"])


def capped_catalog(cap: int) -> TileCatalog:
    """A weightless floor and a pillar that wins every draw until capped."""
    return TileCatalog(
        [
            make_floor(spawn_weight=0.0),
            make_open_tile(
                "Pillar", TileCategory.WALL, spawn_weight=1.0, max_instances=cap
            ),
        ]
    )


def incompatible_pairs(plan: LevelPlan) -> list[tuple]:
    """Adjacent placed cells whose facing connectors do not fit."""
    bad = []
    for pos, placed in plan.items():
        for direction in DIRECTIONS:
            neighbor = plan.get(direction.step(pos))
            if neighbor is None:
                continue
            if not placed.tile.can_connect(neighbor.tile, direction):
                bad.append((pos, direction, neighbor.position))
    return bad


def unsupported_tiles(plan: LevelPlan) -> list[tuple]:
    """Placed tiles that need support but have no floor or wall below."""
    bad = []
    for pos, placed in plan.items():
        if not placed.tile.requires_support:
            continue
        below = plan.get(Direction.DOWN.step(pos))
        if below is None or below.category not in SUPPORT_CATEGORIES:
            bad.append(pos)
    return bad


def footprint(rooms: tuple[Rect, ...], corridor_cells: frozenset[XZCell]) -> set:
    cells: set[XZCell] = set(corridor_cells)
    for room in rooms:
        cells.update(room.cells())
    return cells


def is_connected(cells: set[XZCell]) -> bool:
    return len(connected_components(cells)) <= 1
