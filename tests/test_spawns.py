from __future__ import annotations

import random

import pytest

from delve.dungeon import DistanceMap, Grid, Position, TileKind, candidate_pool, entity_spawns, weighted_sample


def test_sample_returns_distinct_members_of_pool():
    pool = list(range(20))
    picked = weighted_sample(random.Random(1), pool, 5)
    assert len(picked) == 5
    assert len(set(picked)) == 5
    assert set(picked) <= set(pool)


def test_small_pool_is_returned_whole_without_draws():
    rng = random.Random(4)
    state = rng.getstate()
    assert weighted_sample(rng, ["a", "b", "c"], 3) == ["a", "b", "c"]
    assert weighted_sample(rng, ["a", "b"], 10) == ["a", "b"]
    assert rng.getstate() == state


def test_zero_or_negative_amount_is_empty():
    assert weighted_sample(random.Random(0), [1, 2, 3], 0) == []
    assert weighted_sample(random.Random(0), [1, 2, 3], -2) == []


def test_zero_weight_candidates_never_chosen():
    pool = list(range(10))
    for seed in range(20):
        picked = weighted_sample(random.Random(seed), pool, 3, weight=lambda n: n % 2)
        assert all(n % 2 == 1 for n in picked)


def test_negative_weight_rejected():
    with pytest.raises(ValueError):
        weighted_sample(random.Random(0), [1, 2, 3], 1, weight=lambda n: -n)


def test_same_seed_same_sample():
    pool = [Position(x, 0) for x in range(30)]
    assert weighted_sample(random.Random(77), pool, 6) == weighted_sample(random.Random(77), pool, 6)


def test_candidate_pool_filters_distance_reserved_and_walls():
    grid = Grid.from_ascii([
        ".....",
        ".###.",
        ".....",
    ])
    dmap = DistanceMap(grid, Position(0, 0))
    reserved = {Position(4, 2)}
    pool = candidate_pool(grid, dmap, 3, reserved)
    assert pool == [Position(4, 0), Position(4, 1), Position(2, 2), Position(3, 2)]
    assert all(grid.get(p) is TileKind.FLOOR for p in pool)


def test_entity_spawns_caps_at_pool_size():
    grid = Grid(6, 1, default=TileKind.FLOOR)
    dmap = DistanceMap(grid, Position(0, 0))
    spawns = entity_spawns(grid, dmap, 2, random.Random(0), 10)
    assert spawns == frozenset({Position(3, 0), Position(4, 0), Position(5, 0)})
