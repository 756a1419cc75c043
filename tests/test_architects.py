from __future__ import annotations

import random

import pytest

from delve.dungeon import Architect, ArchitectKind, DistanceMap, Position, TileKind
from delve.dungeon.architects import (
    CellularAutomataArchitect,
    DrunkardArchitect,
    EmptyArchitect,
    StandardArchitect,
)
from delve.dungeon.distance import largest_region

ALL_KINDS = list(ArchitectKind)


def _border(grid):
    for x in range(grid.width):
        yield Position(x, 0)
        yield Position(x, grid.height - 1)
    for y in range(grid.height):
        yield Position(0, y)
        yield Position(grid.width - 1, y)


@pytest.mark.parametrize("kind", ALL_KINDS)
@pytest.mark.parametrize("seed", [1, 7, 2024])
def test_start_is_floor_and_dimensions_match(kind, seed):
    bp = Architect(kind=kind).build(30, 40, random.Random(seed))
    assert (bp.grid.width, bp.grid.height) == (40, 30)
    assert bp.grid.get(bp.player_start) is TileKind.FLOOR


@pytest.mark.parametrize("kind", ALL_KINDS)
@pytest.mark.parametrize("size", [(1, 1), (2, 3), (3, 2), (5, 5)])
def test_tiny_grids_still_have_a_floor_start(kind, size):
    height, width = size
    bp = Architect(kind=kind).build(height, width, random.Random(3))
    assert bp.grid.in_bounds(bp.player_start)
    assert bp.grid.get(bp.player_start) is TileKind.FLOOR


@pytest.mark.parametrize("kind", ALL_KINDS)
def test_same_seed_same_layout(kind):
    a = Architect(kind=kind).build(30, 40, random.Random(99))
    b = Architect(kind=kind).build(30, 40, random.Random(99))
    assert a.grid.snapshot() == b.grid.snapshot()
    assert a.player_start == b.player_start
    assert a.rooms == b.rooms


def test_empty_is_all_floor_with_centre_start():
    bp = EmptyArchitect().build(9, 12, random.Random(0))
    assert bp.grid.floor_count() == 9 * 12
    assert bp.player_start == Position(6, 4)


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_standard_rooms_do_not_overlap_and_connect(seed):
    bp = StandardArchitect().build(40, 80, random.Random(seed))
    assert bp.rooms
    assert bp.player_start == bp.rooms[0].center()
    for i, a in enumerate(bp.rooms):
        for b in bp.rooms[i + 1:]:
            assert not a.intersects(b, padding=1)

    dmap = DistanceMap(bp.grid, bp.player_start)
    for room in bp.rooms:
        assert dmap.is_reachable(room.center())
    assert all(bp.grid.get(p) is TileKind.WALL for p in _border(bp.grid))


def test_standard_falls_back_to_single_room_on_small_grid():
    bp = StandardArchitect().build(5, 5, random.Random(0))
    assert len(bp.rooms) == 1
    assert bp.grid.get(bp.player_start) is TileKind.FLOOR


@pytest.mark.parametrize("seed", [5, 6, 8])
def test_cellular_keeps_one_connected_region(seed):
    bp = CellularAutomataArchitect().build(30, 40, random.Random(seed))
    floors = set(bp.grid.floor_positions())
    assert floors == largest_region(bp.grid)
    assert bp.player_start in floors
    assert all(bp.grid.get(p) is TileKind.WALL for p in _border(bp.grid))


@pytest.mark.parametrize("seed", [11, 12, 13])
def test_drunkard_carves_one_region_inside_frame(seed):
    arch = DrunkardArchitect(target_coverage=0.4)
    bp = arch.build(30, 40, random.Random(seed))
    floors = set(bp.grid.floor_positions())
    assert floors == largest_region(bp.grid)
    assert len(floors) == int(0.4 * 30 * 40)
    assert all(bp.grid.get(p) is TileKind.WALL for p in _border(bp.grid))


def test_drunkard_on_tiny_grid_with_aggressive_target_terminates():
    bp = DrunkardArchitect(target_coverage=1.0, max_steps=50, max_walks=5).build(5, 5, random.Random(42))
    floors = set(bp.grid.floor_positions())
    assert bp.player_start in floors
    assert floors == largest_region(bp.grid)
    assert len(floors) <= 9


@pytest.mark.parametrize(
    "value,expected",
    [
        ("standard", ArchitectKind.STANDARD),
        ("EMPTY", ArchitectKind.EMPTY),
        ("cellular-automata", ArchitectKind.CELLULAR_AUTOMATA),
        ("cave", ArchitectKind.CELLULAR_AUTOMATA),
        (ArchitectKind.DRUNKARD, ArchitectKind.DRUNKARD),
    ],
)
def test_architect_kind_parse(value, expected):
    assert ArchitectKind.parse(value) is expected


def test_architect_kind_parse_rejects_unknown():
    with pytest.raises(ValueError):
        ArchitectKind.parse("maze")
