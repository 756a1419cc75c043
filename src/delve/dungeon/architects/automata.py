from __future__ import annotations

import logging
import random
from typing import List

from ..distance import largest_region
from ..grid import Grid
from ..tiles import Position, TileKind
from .base import Blueprint

logger = logging.getLogger(__name__)


class CellularAutomataArchitect:
    """Cellular automata caverns generator.

    Algorithm:
    - Initialize interior tiles as walls with probability ``initial_wall_prob``.
    - Apply smoothing steps using the 8-neighbour rule (>= threshold => wall).
    - Keep only the largest connected floor region (others become walls).
    - Start on a random tile of that region.
    """

    def __init__(
        self,
        initial_wall_prob: float = 0.45,
        smooth_steps: int = 5,
        wall_threshold: int = 5,
        min_floor_fraction: float = 0.28,
        max_rerolls: int = 5,
    ) -> None:
        self.initial_wall_prob = float(initial_wall_prob)
        self.smooth_steps = int(smooth_steps)
        self.wall_threshold = int(wall_threshold)
        self.min_floor_fraction = float(min_floor_fraction)
        self.max_rerolls = max(1, int(max_rerolls))

    def build(self, height: int, width: int, rng: random.Random) -> Blueprint:
        tiles: List[List[TileKind]] = []
        region = set()
        for attempt in range(self.max_rerolls):
            tiles = self._randomize(width, height, rng)
            for _ in range(self.smooth_steps):
                tiles = self._smooth(tiles, width, height)
            region = largest_region(self._to_grid(tiles, width, height))
            frac = len(region) / float(width * height)
            if frac >= self.min_floor_fraction:
                break
            if attempt == self.max_rerolls - 1:
                logger.warning(
                    "CellularAutomataArchitect: min floor fraction not reached (%.2f < %.2f), proceeding",
                    frac,
                    self.min_floor_fraction,
                )

        # Keep only largest connected region as floors, rest walls
        grid = Grid(width, height, default=TileKind.WALL)
        for p in sorted(region):
            grid.set(p, TileKind.FLOOR)

        if region:
            start = rng.choice(grid.floor_positions())
        else:
            start = Position(width // 2, height // 2)
            logger.warning("CellularAutomataArchitect: no floor survived; carving start at %s", start)
            grid.set(start, TileKind.FLOOR)
        return Blueprint(grid=grid, rooms=(), player_start=start)

    def _randomize(self, width: int, height: int, rng: random.Random) -> List[List[TileKind]]:
        tiles = [[TileKind.WALL for _ in range(width)] for _ in range(height)]
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                tiles[y][x] = TileKind.WALL if rng.random() < self.initial_wall_prob else TileKind.FLOOR
        return tiles

    def _smooth(self, tiles: List[List[TileKind]], width: int, height: int) -> List[List[TileKind]]:
        # Moore neighbourhood; anything off the map counts as wall. Borders stay walls.
        new_tiles = [row[:] for row in tiles]
        for y in range(1, height - 1):
            for x in range(1, width - 1):
                wall_count = 0
                for ny in (y - 1, y, y + 1):
                    for nx in (x - 1, x, x + 1):
                        if nx == x and ny == y:
                            continue
                        if tiles[ny][nx] is TileKind.WALL:
                            wall_count += 1
                new_tiles[y][x] = TileKind.WALL if wall_count >= self.wall_threshold else TileKind.FLOOR
        return new_tiles

    @staticmethod
    def _to_grid(tiles: List[List[TileKind]], width: int, height: int) -> Grid:
        grid = Grid(width, height)
        for y in range(height):
            for x in range(width):
                grid.set(Position(x, y), tiles[y][x])
        return grid
