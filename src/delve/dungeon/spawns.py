from __future__ import annotations

import logging
import random
from typing import AbstractSet, Callable, FrozenSet, List, Optional, Sequence, TypeVar

from .distance import DistanceMap
from .grid import Grid
from .tiles import Position

logger = logging.getLogger(__name__)

T = TypeVar("T")


def candidate_pool(
    grid: Grid,
    dmap: DistanceMap,
    threshold: float,
    reserved: AbstractSet[Position] = frozenset(),
) -> List[Position]:
    """Floor tiles reachable from the distance map source and further than ``threshold``.

    The result is in row-major order; sampling depends on that order for replays.
    """
    return [
        p
        for p in grid.positions()
        if grid.can_enter(p)
        and dmap.is_reachable(p)
        and dmap.distance(p) > threshold
        and p not in reserved
    ]


def weighted_sample(
    rng: random.Random,
    pool: Sequence[T],
    amount: int,
    weight: Optional[Callable[[T], float]] = None,
) -> List[T]:
    """Pick ``amount`` distinct elements of ``pool``, each draw proportional to ``weight``.

    Without a weight function every candidate weighs 1. Zero-weight candidates are
    never picked. When there are not more candidates than requested, all of them are
    returned and the generator is not consumed.
    """
    if amount <= 0:
        return []
    weighted: List[tuple] = []
    for item in pool:
        w = 1.0 if weight is None else float(weight(item))
        if w < 0:
            raise ValueError(f"Weight for {item!r} must be non-negative, got {w}")
        if w > 0:
            weighted.append((item, w))

    if len(weighted) <= amount:
        return [item for item, _ in weighted]

    picked: List[T] = []
    remaining = list(weighted)
    for _ in range(amount):
        total = sum(w for _, w in remaining)
        r = rng.random() * total
        chosen = len(remaining) - 1
        cumulative = 0.0
        for i, (_, w) in enumerate(remaining):
            cumulative += w
            if r < cumulative:
                chosen = i
                break
        picked.append(remaining.pop(chosen)[0])
    return picked


def entity_spawns(
    grid: Grid,
    dmap: DistanceMap,
    threshold: float,
    rng: random.Random,
    amount: int,
    reserved: AbstractSet[Position] = frozenset(),
    weight: Optional[Callable[[Position], float]] = None,
) -> FrozenSet[Position]:
    """Choose up to ``amount`` spawn positions for one entity category."""
    pool = candidate_pool(grid, dmap, threshold, reserved)
    spawns = weighted_sample(rng, pool, amount, weight)
    if len(spawns) < amount:
        logger.warning("Requested %d spawns but only %d candidates available", amount, len(spawns))
    return frozenset(spawns)


__all__ = ["candidate_pool", "weighted_sample", "entity_spawns"]
