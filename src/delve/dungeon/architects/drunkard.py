from __future__ import annotations

import logging
import random

from ..grid import Grid
from ..tiles import Position, TileKind
from .base import Blueprint

logger = logging.getLogger(__name__)

DIRECTIONS = ((0, -1), (0, 1), (1, 0), (-1, 0))


class DrunkardArchitect:
    """Drunkard's walk caves.

    Each walker carves the tile it stands on and stumbles to a random adjacent
    tile. The first walker starts at the centre, later ones at a random tile that
    is already floor, so the carved area is always one connected region. Work is
    bounded by ``max_steps`` per walk and ``max_walks``; the coverage target is
    best-effort.
    """

    def __init__(
        self,
        target_coverage: float = 0.5,
        max_steps: int = 400,
        max_walks: int = 200,
    ) -> None:
        self.target_coverage = float(target_coverage)
        self.max_steps = int(max_steps)
        self.max_walks = int(max_walks)

    def build(self, height: int, width: int, rng: random.Random) -> Blueprint:
        grid = Grid(width, height, default=TileKind.WALL)
        # Keep an outer wall frame when there is an interior to walk in.
        lo_x, hi_x = (1, width - 2) if width >= 3 else (0, width - 1)
        lo_y, hi_y = (1, height - 2) if height >= 3 else (0, height - 1)
        interior = (hi_x - lo_x + 1) * (hi_y - lo_y + 1)
        target = min(interior, max(1, int(self.target_coverage * width * height)))

        start = Position(min(max(width // 2, lo_x), hi_x), min(max(height // 2, lo_y), hi_y))
        grid.set(start, TileKind.FLOOR)
        carved = 1
        walks = 0
        while carved < target and walks < self.max_walks:
            walks += 1
            pos = start if walks == 1 else rng.choice(grid.floor_positions())
            for _ in range(self.max_steps):
                if grid.get(pos) is TileKind.WALL:
                    grid.set(pos, TileKind.FLOOR)
                    carved += 1
                    if carved >= target:
                        break
                dx, dy = rng.choice(DIRECTIONS)
                pos = Position(
                    min(max(pos.x + dx, lo_x), hi_x),
                    min(max(pos.y + dy, lo_y), hi_y),
                )

        if carved < target:
            logger.warning(
                "DrunkardArchitect: coverage target not reached after %d walks (%d/%d tiles)",
                walks,
                carved,
                target,
            )
        else:
            logger.debug("DrunkardArchitect: carved %d tiles in %d walks", carved, walks)
        return Blueprint(grid=grid, rooms=(), player_start=start)
