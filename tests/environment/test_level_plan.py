from __future__ import annotations

from types import MappingProxyType

import pytest

from levelforge.environment.catalog import default_catalog
from levelforge.environment.level_plan import GenerationReport, LevelPlan, PlacedTile
from levelforge.environment.tiles import TileCategory


def _plan() -> LevelPlan:
    catalog = default_catalog()
    floor = catalog.by_name("Floor")
    wall = catalog.by_name("Wall")
    box = catalog.by_name("Box")
    placed = {
        (0, 0, 0): PlacedTile(floor, (0, 0, 0)),
        (1, 0, 0): PlacedTile(wall, (1, 0, 0), rotation=90),
        (0, 0, 1): PlacedTile(floor, (0, 0, 1)),
        (0, 1, 0): PlacedTile(box, (0, 1, 0), rotation=180),
    }
    return LevelPlan((2, 2, 2), placed)


def _report(**overrides) -> GenerationReport:
    values = dict(
        seed=42,
        level_size=(15, 3, 15),
        rooms_placed=4,
        room_density=0.31,
        target_room_density=0.4,
        corridor_connections=3,
        corridor_cells=20,
        seeded_cells=90,
        collapses=500,
        budget_exhausted=False,
        cells_resolved=640,
        holes=((3, 2, 4),),
        capped_tiles=(),
        furniture_placed=2,
    )
    values.update(overrides)
    return GenerationReport(**values)


class TestLevelPlan:
    def test_mapping_access(self) -> None:
        plan = _plan()
        assert len(plan) == 4
        assert plan[(1, 0, 0)].rotation == 90
        assert plan.tile_at((1, 1, 1)) is None
        assert plan.tile_at((0, 0, 1)).name == "Floor"

    def test_iterates_in_scan_order(self) -> None:
        assert list(_plan()) == [(0, 0, 0), (0, 0, 1), (0, 1, 0), (1, 0, 0)]

    def test_is_read_only(self) -> None:
        plan = _plan()
        assert isinstance(plan._placed, MappingProxyType)
        with pytest.raises(TypeError):
            plan._placed[(1, 1, 1)] = plan[(0, 0, 0)]  # type: ignore[index]

    def test_counts(self) -> None:
        plan = _plan()
        floor = default_catalog().by_name("Floor")

        assert plan.count(floor) == 2
        assert plan.positions_of(TileCategory.FLOOR) == [(0, 0, 0), (0, 0, 1)]

        counts = plan.category_counts()
        assert set(counts) == set(TileCategory)
        assert counts[TileCategory.FURNITURE] == 1
        assert counts[TileCategory.DOOR] == 0

    def test_render_layer(self) -> None:
        """Rows are Z, columns are X; unplaced cells are blank."""
        plan = _plan()
        assert plan.render_layer(0) == ".#\n. "
        assert plan.render_layer(1) == "& \n  "

    def test_equal_plans(self) -> None:
        assert _plan() == _plan()


class TestGenerationReport:
    def test_hole_count_and_density(self) -> None:
        report = _report()
        assert report.hole_count == 1
        assert not report.density_reached
        assert _report(room_density=0.45).density_reached

    def test_summary_lines(self) -> None:
        summary = _report().summary()
        assert "Seed: 42" in summary
        assert "Level size: 15x3x15" in summary
        assert "Holes: 1" in summary
        assert "Instance caps" not in summary
        assert "budget" not in summary

    def test_summary_mentions_caps_and_budget(self) -> None:
        summary = _report(capped_tiles=("Door",), budget_exhausted=True).summary()
        assert "Instance caps reached: Door" in summary
        assert "budget exhausted" in summary
