from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from ..exceptions import ConfigurationError, GridFrozenError
from .tiles import Position, TileKind

logger = logging.getLogger(__name__)

# Ordered for deterministic traversal: North, South, East, West.
NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = ((0, -1), (0, 1), (1, 0), (-1, 0))


class Grid:
    """
    Dense row-major tile storage used by generation and by turn systems.

    Reads outside the grid report WALL. Writes are bounds-checked and only allowed
    until the grid is frozen on publication.
    """

    def __init__(self, width: int, height: int, default: TileKind = TileKind.WALL) -> None:
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Grid width/height must be > 0, got {width}x{height}")
        self.width = width
        self.height = height
        self._tiles: List[TileKind] = [default] * (width * height)
        self._frozen = False

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "Grid":
        self._frozen = True
        return self

    # ---- Query -----------------------------------------------------------
    def get(self, pos: Position) -> TileKind:
        if not self.in_bounds(pos):
            return TileKind.WALL
        return self._tiles[pos.index(self.width)]

    def can_enter(self, pos: Position) -> bool:
        return self.in_bounds(pos) and self._tiles[pos.index(self.width)] is TileKind.FLOOR

    def neighbours(self, pos: Position) -> List[Position]:
        return [
            n
            for n in (pos.offset(dx, dy) for dx, dy in NEIGHBOUR_OFFSETS)
            if self.can_enter(n)
        ]

    def positions(self) -> Iterator[Position]:
        """All positions in row-major scan order."""
        for y in range(self.height):
            for x in range(self.width):
                yield Position(x, y)

    def floor_positions(self) -> List[Position]:
        return [p for p in self.positions() if self._tiles[p.index(self.width)] is TileKind.FLOOR]

    def floor_count(self) -> int:
        return sum(1 for t in self._tiles if t is TileKind.FLOOR)

    # ---- Mutation --------------------------------------------------------
    def set(self, pos: Position, kind: TileKind) -> None:
        if self._frozen:
            raise GridFrozenError(f"Cannot set {pos} on a published grid")
        if not self.in_bounds(pos):
            # Generation code never writes out of bounds; log instead of crashing.
            logger.error("Attempt to write out-of-bounds tile at %s", pos)
            return
        self._tiles[pos.index(self.width)] = kind

    def fill(self, kind: TileKind) -> None:
        if self._frozen:
            raise GridFrozenError("Cannot fill a published grid")
        self._tiles = [kind] * (self.width * self.height)

    # ---- Export / Compare -----------------------------------------------
    def copy(self) -> "Grid":
        """Unfrozen copy of this grid."""
        clone = Grid(self.width, self.height)
        clone._tiles = list(self._tiles)
        return clone

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Deterministic, hashable snapshot of the tiles for equality tests."""
        w = self.width
        return tuple(tuple(int(t) for t in self._tiles[y * w:(y + 1) * w]) for y in range(self.height))

    def to_str_lines(self) -> List[str]:
        w = self.width
        return ["".join(t.glyph for t in self._tiles[y * w:(y + 1) * w]) for y in range(self.height)]

    @classmethod
    def from_ascii(cls, rows: Sequence[str], wall_chars: Sequence[str] = ("#",)) -> "Grid":
        """
        Build a Grid from ASCII rows for tests/tools.
        Any char in wall_chars is WALL; all others are FLOOR.
        """
        if not rows:
            raise ConfigurationError("rows must not be empty")
        width = len(rows[0])
        for r in rows:
            if len(r) != width:
                raise ConfigurationError("All rows must be same width")
        grid = cls(width, len(rows))
        walls = set(wall_chars)
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                grid.set(Position(x, y), TileKind.WALL if ch in walls else TileKind.FLOOR)
        return grid

    def __str__(self) -> str:
        return "\n".join(self.to_str_lines())

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, floors={self.floor_count()})"


__all__ = ["Grid", "NEIGHBOUR_OFFSETS"]
