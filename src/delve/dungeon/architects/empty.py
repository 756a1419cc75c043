from __future__ import annotations

import random

from ..grid import Grid
from ..tiles import Position, TileKind
from .base import Blueprint


class EmptyArchitect:
    """Open arena: every tile is floor and the player starts in the middle."""

    def build(self, height: int, width: int, rng: random.Random) -> Blueprint:
        grid = Grid(width, height, default=TileKind.FLOOR)
        return Blueprint(grid=grid, rooms=(), player_start=Position(width // 2, height // 2))
