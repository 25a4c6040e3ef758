"""Tile catalogs.

A TileCatalog is the ordered, immutable set of TileDefinitions a generation
run may place. Order matters: the first floor-category tile is the one used
for room and corridor footprints, and catalog order is the tie-break order of
every draw the solver makes.

Catalogs are plain values. Discovering tile assets (prefabs, meshes, files)
is the host's job; `TileCatalog.from_names()` only turns asset names into
rules by looking for keywords in each name.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from levelforge.errors import ConfigurationError

from .tiles import (
    HORIZONTAL_DIRECTIONS,
    ConnectionKind,
    Connector,
    TileCategory,
    TileDefinition,
)

OPEN = ConnectionKind.OPEN


class TileCatalog:
    """Ordered immutable collection of tile definitions."""

    def __init__(self, tiles: Iterable[TileDefinition]) -> None:
        self._tiles: tuple[TileDefinition, ...] = tuple(tiles)
        self._index: dict[TileDefinition, int] = {}
        for i, tile in enumerate(self._tiles):
            self._index.setdefault(tile, i)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> TileCatalog:
        """Build a catalog by inferring one rule per asset name."""
        return cls(rule_from_name(name) for name in names)

    @property
    def tiles(self) -> tuple[TileDefinition, ...]:
        return self._tiles

    def __iter__(self) -> Iterator[TileDefinition]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __getitem__(self, index: int) -> TileDefinition:
        return self._tiles[index]

    def __contains__(self, tile: object) -> bool:
        return tile in self._index

    def index_of(self, tile: TileDefinition) -> int:
        """Return the catalog position of `tile`.

        Raises:
            KeyError: If the tile is not part of this catalog.
        """
        return self._index[tile]

    def by_name(self, name: str) -> TileDefinition:
        for tile in self._tiles:
            if tile.name == name:
                return tile
        raise KeyError(name)

    def of_category(self, category: TileCategory) -> list[TileDefinition]:
        """Return every tile of a category, in catalog order."""
        return [tile for tile in self._tiles if tile.category is category]

    def first_of(self, category: TileCategory) -> TileDefinition | None:
        """Return the first tile of a category, or None."""
        for tile in self._tiles:
            if tile.category is category:
                return tile
        return None

    @property
    def floor_tile(self) -> TileDefinition:
        """The tile used for room and corridor footprints.

        Raises:
            ConfigurationError: If the catalog has no floor-category tile.
        """
        floor = self.first_of(TileCategory.FLOOR)
        if floor is None:
            raise ConfigurationError("Tile catalog has no floor-category tile.")
        return floor

    def validate(self) -> None:
        """Check the catalog can drive a generation run.

        Raises:
            ConfigurationError: On the first problem found.
        """
        if not self._tiles:
            raise ConfigurationError("Tile catalog is empty.")
        floor = self.floor_tile

        # Footprints are force-resolved to this tile without a cap or
        # connector check, so it must be uncapped and tile with itself.
        if floor.max_instances is not None:
            raise ConfigurationError(
                f"Floor tile {floor.name!r} cannot have max_instances; "
                "room and corridor footprints always use it."
            )
        for direction in HORIZONTAL_DIRECTIONS:
            if not floor.can_connect(floor, direction):
                raise ConfigurationError(
                    f"Floor tile {floor.name!r} does not connect to itself "
                    f"on its {direction.name.lower()} face."
                )

        seen: set[str] = set()
        for tile in self._tiles:
            if tile.name in seen:
                raise ConfigurationError(f"Duplicate tile name {tile.name!r}.")
            seen.add(tile.name)
            if tile.spawn_weight < 0:
                raise ConfigurationError(
                    f"Tile {tile.name!r} has negative spawn weight "
                    f"{tile.spawn_weight}."
                )
            if tile.max_instances is not None and tile.max_instances < 0:
                raise ConfigurationError(
                    f"Tile {tile.name!r} has negative max_instances "
                    f"{tile.max_instances}."
                )
            if tile.min_neighbor_count > tile.max_neighbor_count:
                raise ConfigurationError(
                    f"Tile {tile.name!r} has min_neighbor_count "
                    f"{tile.min_neighbor_count} > max_neighbor_count "
                    f"{tile.max_neighbor_count}."
                )

    def __repr__(self) -> str:
        names = ", ".join(tile.name for tile in self._tiles)
        return f"TileCatalog([{names}])"


# =============================================================================
# Rule inference from asset names
# =============================================================================

_FURNITURE_KEYWORDS = ("box", "wardrobe", "lamp")


def rule_from_name(name: str) -> TileDefinition:
    """Infer a TileDefinition from an asset name.

    Keywords are matched case-insensitively in this order: floor, wall, door,
    ceiling, then box/wardrobe/lamp for furniture. Anything else becomes an
    empty tile.
    """
    lowered = name.lower()

    if "floor" in lowered:
        return TileDefinition(
            name=name,
            category=TileCategory.FLOOR,
            spawn_weight=1.0,
            connector=Connector.uniform(OPEN, up=OPEN, down=ConnectionKind.FLOOR),
            ground_only=True,
        )
    if "wall" in lowered:
        return TileDefinition(
            name=name,
            category=TileCategory.WALL,
            spawn_weight=0.8,
            connector=Connector.uniform(
                ConnectionKind.WALL, up=OPEN, down=ConnectionKind.FLOOR
            ),
        )
    if "door" in lowered:
        return TileDefinition(
            name=name,
            category=TileCategory.DOOR,
            spawn_weight=0.1,
            max_instances=10,
            connector=Connector(
                north=ConnectionKind.DOOR,
                south=ConnectionKind.DOOR,
                east=ConnectionKind.WALL,
                west=ConnectionKind.WALL,
                up=OPEN,
                down=ConnectionKind.FLOOR,
            ),
            requires_support=True,
            can_rotate=False,
        )
    if "ceiling" in lowered:
        return TileDefinition(
            name=name,
            category=TileCategory.CEILING,
            spawn_weight=0.7,
            connector=Connector.uniform(OPEN, up=ConnectionKind.NONE, down=OPEN),
            can_rotate=False,
        )
    if any(keyword in lowered for keyword in _FURNITURE_KEYWORDS):
        return TileDefinition(
            name=name,
            category=TileCategory.FURNITURE,
            spawn_weight=0.3,
            connector=Connector.uniform(OPEN, up=OPEN, down=ConnectionKind.FLOOR),
            requires_support=True,
            can_rotate=True,
        )
    return TileDefinition(
        name=name,
        category=TileCategory.EMPTY,
        spawn_weight=0.1,
        connector=Connector.uniform(OPEN),
        can_rotate=False,
    )


DEFAULT_TILE_NAMES = (
    "Floor",
    "Wall",
    "Door",
    "Ceiling",
    "Empty",
    "Box",
    "Wardrobe",
    "Lamp",
)


def default_catalog() -> TileCatalog:
    """Catalog of the stock tile set used by presets and the CLI."""
    return TileCatalog.from_names(DEFAULT_TILE_NAMES)
