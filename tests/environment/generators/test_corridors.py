"""Tests for corridor routing between rooms."""

from __future__ import annotations

import pytest

from levelforge import config
from levelforge.environment.generators.corridors import (
    CorridorRouter,
    CorridorStyle,
    connection_point,
    elbow_path,
)
from levelforge.environment.generators.rooms import RoomLayoutPlanner
from levelforge.util.coordinates import Rect
from levelforge.util.rng import SeededRng
from tests.helpers import footprint, is_connected

ROOMS = (
    Rect(1, 1, 4, 4),
    Rect(10, 1, 4, 4),
    Rect(1, 10, 4, 4),
    Rect(10, 10, 4, 4),
    Rect(20, 5, 3, 3),
)


def _random_rooms(seed: int) -> tuple[Rect, ...]:
    layout = RoomLayoutPlanner(SeededRng(seed)).plan_rooms(
        bounds=(40, 40), min_size=3, max_size=7, target_density=0.35, max_attempts=80
    )
    return layout.rooms


def _is_adjacent_walk(cells: tuple) -> bool:
    return all(
        abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1
        for a, b in zip(cells, cells[1:], strict=False)
    )


# =============================================================================
# Connection selection
# =============================================================================


class TestSelectConnections:
    def test_spanning_tree_without_extras(self) -> None:
        router = CorridorRouter(SeededRng(1))
        connections = router.select_connections(ROOMS, 0.0)

        assert len(connections) == len(ROOMS) - 1
        assert not any(extra for _, _, extra in connections)

    def test_nearest_pair_first(self) -> None:
        router = CorridorRouter(SeededRng(1))
        first = router.select_connections(ROOMS, 0.0)[0]
        assert first[:2] == (0, 1)

    def test_extra_connections_are_capped(self) -> None:
        cap = max(1, int(len(ROOMS) * config.EXTRA_CONNECTION_RATIO))
        for seed in range(20):
            router = CorridorRouter(SeededRng(seed))
            connections = router.select_connections(ROOMS, 1.0)
            extras = [c for c in connections if c[2]]
            assert len(extras) <= cap
            assert len(connections) - len(extras) == len(ROOMS) - 1

    @pytest.mark.parametrize("count", [0, 1])
    def test_fewer_than_two_rooms(self, count: int) -> None:
        router = CorridorRouter(SeededRng(1))
        assert router.select_connections(ROOMS[:count], 0.5) == []

    def test_zero_probability_draws_nothing(self) -> None:
        """Selection with no extras consumes no randomness."""
        rng = SeededRng(3)
        CorridorRouter(rng).select_connections(ROOMS, 0.0)
        assert rng.random() == SeededRng(3).random()


# =============================================================================
# Paths
# =============================================================================


class TestConnectionPoint:
    def test_horizontal_dominant(self) -> None:
        a = Rect(0, 0, 4, 4)
        b = Rect(10, 1, 4, 4)
        assert connection_point(a, b) == (3, 3)
        assert connection_point(b, a) == (10, 2)

    def test_vertical_dominant(self) -> None:
        a = Rect(0, 0, 3, 3)
        b = Rect(0, 10, 3, 3)
        assert connection_point(a, b) == (1, 2)
        assert connection_point(b, a) == (1, 10)

    def test_point_is_inside_room(self) -> None:
        for a in ROOMS:
            for b in ROOMS:
                if a != b:
                    assert a.contains(connection_point(a, b))


class TestPaths:
    def test_elbow_x_first(self) -> None:
        assert elbow_path((0, 0), (2, 3), x_first=True) == [
            (0, 0),
            (1, 0),
            (2, 0),
            (2, 1),
            (2, 2),
            (2, 3),
        ]

    def test_elbow_z_first(self) -> None:
        assert elbow_path((0, 0), (2, 3), x_first=False) == [
            (0, 0),
            (0, 1),
            (0, 2),
            (0, 3),
            (1, 3),
            (2, 3),
        ]

    def test_elbow_same_cell(self) -> None:
        assert elbow_path((4, 4), (4, 4), x_first=True) == [(4, 4)]

    def test_stepped_walk_reaches_target(self) -> None:
        router = CorridorRouter(SeededRng(5))
        for start, end in [((0, 0), (6, 4)), ((9, 2), (1, 7)), ((3, 3), (3, 0))]:
            cells = router._stepped_path(start, end)
            assert cells[0] == start
            assert cells[-1] == end
            manhattan = abs(end[0] - start[0]) + abs(end[1] - start[1])
            assert len(cells) == manhattan + 1
            assert _is_adjacent_walk(tuple(cells))


# =============================================================================
# Routing
# =============================================================================


class TestRouteCorridors:
    def test_corridors_join_rooms(self) -> None:
        network = CorridorRouter(SeededRng(2)).route_corridors(ROOMS, 0.3)

        assert is_connected(footprint(ROOMS, network.cells))
        for corridor in network.corridors:
            assert corridor.cells[0] == corridor.start
            assert corridor.cells[-1] == corridor.end
            assert ROOMS[corridor.room_a].contains(corridor.start)
            assert ROOMS[corridor.room_b].contains(corridor.end)
            assert _is_adjacent_walk(corridor.cells)
            assert isinstance(corridor.style, CorridorStyle)

    def test_random_layouts_are_connected(self) -> None:
        for seed in range(15):
            rooms = _random_rooms(seed)
            network = CorridorRouter(SeededRng(seed)).route_corridors(rooms, 0.3)
            assert is_connected(footprint(rooms, network.cells))

    def test_network_cells_are_union(self) -> None:
        network = CorridorRouter(SeededRng(4)).route_corridors(ROOMS, 0.0)
        union = set()
        for corridor in network.corridors:
            union.update(corridor.cells)
        assert network.cells == frozenset(union)
        assert network.connections == [(c.room_a, c.room_b) for c in network.corridors]

    def test_deterministic(self) -> None:
        a = CorridorRouter(SeededRng(8)).route_corridors(ROOMS, 0.5)
        b = CorridorRouter(SeededRng(8)).route_corridors(ROOMS, 0.5)
        assert a == b
