from __future__ import annotations

from collections import deque
from typing import List, Optional, Set

from .grid import Grid
from .tiles import Position

UNREACHABLE = -1


class DistanceMap:
    """Breadth-first hop counts from a single source over FLOOR tiles (4-neighbourhood).

    The map is a transient snapshot of the grid it was computed from; recompute it
    after the grid changes.
    """

    def __init__(self, grid: Grid, source: Position) -> None:
        self.width = grid.width
        self.height = grid.height
        self.source = source
        self._grid = grid
        self._dist: List[int] = [UNREACHABLE] * (grid.width * grid.height)
        if not grid.can_enter(source):
            return
        self._dist[source.index(self.width)] = 0
        dq = deque([source])
        while dq:
            p = dq.popleft()
            d = self._dist[p.index(self.width)]
            for n in grid.neighbours(p):
                i = n.index(self.width)
                if self._dist[i] != UNREACHABLE:
                    continue
                self._dist[i] = d + 1
                dq.append(n)

    def distance(self, pos: Position) -> int:
        if not (0 <= pos.x < self.width and 0 <= pos.y < self.height):
            return UNREACHABLE
        return self._dist[pos.index(self.width)]

    def is_reachable(self, pos: Position) -> bool:
        return self.distance(pos) != UNREACHABLE

    def reachable_positions(self) -> List[Position]:
        return [p for p in self._grid.positions() if self._dist[p.index(self.width)] != UNREACHABLE]

    def furthest_point(self) -> Position:
        """Reachable tile with the largest distance; ties go to the first in row-major order.

        Falls back to the source when nothing is reachable.
        """
        best = self.source
        best_d = -1
        for i, d in enumerate(self._dist):
            if d > best_d:
                best_d = d
                best = Position(i % self.width, i // self.width)
        return best

    def far_points(self, threshold: Optional[int] = None) -> List[Position]:
        """Positions further than ``threshold`` from the source.

        Without a threshold, returns the FLOOR tiles that cannot be reached at all,
        which is the set to seal when repairing connectivity.
        """
        if threshold is None:
            return [
                p
                for p in self._grid.positions()
                if self._dist[p.index(self.width)] == UNREACHABLE and self._grid.can_enter(p)
            ]
        return [
            p
            for p in self._grid.positions()
            if self._dist[p.index(self.width)] != UNREACHABLE and self._dist[p.index(self.width)] > threshold
        ]


def largest_region(grid: Grid) -> Set[Position]:
    """Return the positions of the largest 4-connected FLOOR region.

    Ties keep the region found first in row-major order.
    """
    visited: Set[Position] = set()
    best: Set[Position] = set()
    for p in grid.positions():
        if p in visited or not grid.can_enter(p):
            continue
        comp = set(DistanceMap(grid, p).reachable_positions())
        visited |= comp
        if len(comp) > len(best):
            best = comp
    return best


__all__ = ["DistanceMap", "UNREACHABLE", "largest_region"]
