"""Tests for tile catalogs and name-based rule inference."""

from __future__ import annotations

import pytest

from levelforge.environment.catalog import (
    DEFAULT_TILE_NAMES,
    TileCatalog,
    default_catalog,
    rule_from_name,
)
from levelforge.environment.tiles import (
    ConnectionKind,
    Connector,
    Direction,
    TileCategory,
    TileDefinition,
)
from levelforge.errors import ConfigurationError
from tests.helpers import make_floor, make_open_tile


class TestRuleFromName:
    """Keyword matching on asset names."""

    @pytest.mark.parametrize(
        ("name", "category"),
        [
            ("Floor", TileCategory.FLOOR),
            ("stone_floor_02", TileCategory.FLOOR),
            ("WallSegment", TileCategory.WALL),
            ("Door_Wooden", TileCategory.DOOR),
            ("Ceiling", TileCategory.CEILING),
            ("Box", TileCategory.FURNITURE),
            ("OldWardrobe", TileCategory.FURNITURE),
            ("desk_lamp", TileCategory.FURNITURE),
            ("Rock", TileCategory.EMPTY),
        ],
    )
    def test_category_from_keyword(self, name: str, category: TileCategory) -> None:
        assert rule_from_name(name).category is category

    def test_keyword_order(self) -> None:
        """Floor wins over wall when both appear in the name."""
        assert rule_from_name("FloorWall").category is TileCategory.FLOOR

    def test_door_rule(self) -> None:
        door = rule_from_name("Door")
        assert door.max_instances == 10
        assert door.requires_support
        assert not door.can_rotate
        assert door.connector.face(Direction.NORTH) is ConnectionKind.DOOR
        assert door.connector.face(Direction.EAST) is ConnectionKind.WALL

    def test_floor_sides_accept_each_other(self) -> None:
        """Neighboring room floors must never conflict."""
        floor = rule_from_name("Floor")
        for direction in (Direction.NORTH, Direction.EAST):
            assert floor.can_connect(floor, direction)

    def test_floor_stays_on_ground(self) -> None:
        floor = rule_from_name("Floor")
        assert floor.ground_only
        assert floor.can_place_at((2, 0, 2), {})
        assert not floor.can_place_at((2, 1, 2), {})

    def test_name_is_kept(self) -> None:
        assert rule_from_name("Box_Large").name == "Box_Large"


class TestTileCatalog:
    def test_from_names_keeps_order(self) -> None:
        catalog = TileCatalog.from_names(["Wall", "Floor", "Empty"])
        assert [t.name for t in catalog] == ["Wall", "Floor", "Empty"]
        assert catalog.index_of(catalog.by_name("Floor")) == 1

    def test_floor_tile_is_first_floor(self) -> None:
        first = make_floor("FloorA")
        catalog = TileCatalog([make_open_tile("Air"), first, make_floor("FloorB")])
        assert catalog.floor_tile is first

    def test_floor_tile_missing_raises(self) -> None:
        catalog = TileCatalog([make_open_tile("Air")])
        with pytest.raises(ConfigurationError, match="no floor"):
            _ = catalog.floor_tile

    def test_of_category(self) -> None:
        catalog = default_catalog()
        names = [t.name for t in catalog.of_category(TileCategory.FURNITURE)]
        assert names == ["Box", "Wardrobe", "Lamp"]

    def test_by_name_unknown_raises(self) -> None:
        with pytest.raises(KeyError):
            default_catalog().by_name("Chandelier")

    def test_contains(self) -> None:
        catalog = default_catalog()
        assert catalog.by_name("Wall") in catalog
        assert make_open_tile("Stranger") not in catalog

    def test_default_catalog(self) -> None:
        catalog = default_catalog()
        assert len(catalog) == len(DEFAULT_TILE_NAMES)
        catalog.validate()


class TestCatalogValidation:
    """validate() reports problems as ConfigurationError."""

    def test_empty(self) -> None:
        with pytest.raises(ConfigurationError, match="empty"):
            TileCatalog([]).validate()

    def test_no_floor(self) -> None:
        with pytest.raises(ConfigurationError, match="floor"):
            TileCatalog.from_names(["Wall", "Ceiling"]).validate()

    def test_duplicate_names(self) -> None:
        catalog = TileCatalog([make_floor(), make_floor(spawn_weight=2.0)])
        with pytest.raises(ConfigurationError, match="Duplicate"):
            catalog.validate()

    def test_negative_weight(self) -> None:
        with pytest.raises(ConfigurationError, match="negative spawn weight"):
            TileCatalog([make_floor(spawn_weight=-1.0)]).validate()

    def test_negative_cap(self) -> None:
        with pytest.raises(ConfigurationError, match="max_instances"):
            TileCatalog([make_floor(max_instances=-2)]).validate()

    def test_inverted_neighbor_bounds(self) -> None:
        tile = TileDefinition(
            name="Pillar",
            category=TileCategory.WALL,
            min_neighbor_count=4,
            max_neighbor_count=2,
        )
        with pytest.raises(ConfigurationError, match="min_neighbor_count"):
            TileCatalog([make_floor(), tile]).validate()

    def test_capped_floor(self) -> None:
        """Footprints always use the floor tile, so it cannot carry a cap."""
        catalog = TileCatalog([make_floor(max_instances=3), make_open_tile("Air")])
        with pytest.raises(ConfigurationError, match="cannot have max_instances"):
            catalog.validate()

    def test_cap_on_later_floor_is_allowed(self) -> None:
        TileCatalog([make_floor(), make_floor("Rug", max_instances=3)]).validate()

    @pytest.mark.parametrize(
        "connector",
        [
            Connector.uniform(ConnectionKind.NONE),
            Connector(
                north=ConnectionKind.DOOR,
                south=ConnectionKind.WALL,
                east=ConnectionKind.OPEN,
                west=ConnectionKind.OPEN,
            ),
            Connector(
                north=ConnectionKind.OPEN,
                south=ConnectionKind.OPEN,
                east=ConnectionKind.FLOOR,
                west=ConnectionKind.WALL,
            ),
        ],
    )
    def test_floor_must_connect_to_itself(self, connector: Connector) -> None:
        catalog = TileCatalog([make_floor(connector=connector), make_open_tile("Air")])
        with pytest.raises(ConfigurationError, match="does not connect to itself"):
            catalog.validate()

    def test_floor_vertical_faces_are_not_checked(self) -> None:
        connector = Connector.uniform(
            ConnectionKind.FLOOR, up=ConnectionKind.NONE, down=ConnectionKind.NONE
        )
        TileCatalog([make_floor(connector=connector)]).validate()
