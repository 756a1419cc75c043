from __future__ import annotations

from delve.dungeon import UNREACHABLE, DistanceMap, Grid, Position, fill_in_unreachable
from delve.dungeon.distance import largest_region

SPLIT = [
    "....#..",
    ".##.#..",
    "....#..",
]


def test_source_is_zero_and_walls_unreachable():
    g = Grid.from_ascii(SPLIT)
    dmap = DistanceMap(g, Position(0, 0))
    assert dmap.distance(Position(0, 0)) == 0
    assert dmap.distance(Position(4, 0)) == UNREACHABLE
    assert dmap.distance(Position(1, 1)) == UNREACHABLE
    assert dmap.distance(Position(-1, 0)) == UNREACHABLE


def test_distances_are_bfs_hop_counts():
    g = Grid.from_ascii(SPLIT)
    dmap = DistanceMap(g, Position(0, 0))
    assert dmap.distance(Position(3, 0)) == 3
    assert dmap.distance(Position(3, 1)) == 4
    assert dmap.distance(Position(2, 2)) == 4
    assert dmap.distance(Position(3, 2)) == 5
    # the closed-off right-hand region is never reached
    assert not dmap.is_reachable(Position(6, 2))


def test_furthest_point_and_first_occurrence_tie_break():
    g = Grid.from_ascii(SPLIT)
    assert DistanceMap(g, Position(0, 0)).furthest_point() == Position(3, 2)

    corridor = Grid.from_ascii(["..."])
    assert DistanceMap(corridor, Position(1, 0)).furthest_point() == Position(0, 0)


def test_far_points_with_and_without_threshold():
    g = Grid.from_ascii(SPLIT)
    dmap = DistanceMap(g, Position(0, 0))
    assert dmap.far_points(3) == [Position(3, 1), Position(2, 2), Position(3, 2)]
    unreachable = dmap.far_points()
    assert len(unreachable) == 6
    assert all(p.x >= 5 for p in unreachable)


def test_wall_source_reaches_nothing():
    g = Grid.from_ascii(SPLIT)
    dmap = DistanceMap(g, Position(1, 1))
    assert dmap.reachable_positions() == []
    assert dmap.furthest_point() == Position(1, 1)


def test_same_grid_same_distances():
    g = Grid.from_ascii(SPLIT)
    a = DistanceMap(g, Position(0, 2))
    b = DistanceMap(g, Position(0, 2))
    assert [a.distance(p) for p in g.positions()] == [b.distance(p) for p in g.positions()]


def test_fill_in_unreachable_is_idempotent():
    g = Grid.from_ascii(SPLIT)
    assert fill_in_unreachable(g, Position(0, 0)) == 6
    after_first = g.snapshot()
    assert fill_in_unreachable(g, Position(0, 0)) == 0
    assert g.snapshot() == after_first
    assert DistanceMap(g, Position(0, 0)).far_points() == []


def test_largest_region_picks_bigger_area():
    g = Grid.from_ascii(SPLIT)
    region = largest_region(g)
    assert len(region) == 10
    assert Position(0, 0) in region
