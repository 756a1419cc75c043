from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple


class TileKind(IntEnum):
    """Basic dungeon tile kinds.

    - WALL: blocks movement and spawning
    - FLOOR: enterable and spawnable
    """

    WALL = 0
    FLOOR = 1

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return "." if self is TileKind.FLOOR else "#"


@dataclass(frozen=True, order=True)
class Position:
    """A tile coordinate. (0, 0) is top-left; x grows right, y grows down."""

    x: int
    y: int

    def index(self, width: int) -> int:
        """Row-major flattened index into a grid of the given width."""
        return self.y * width + self.x

    def to_world(self, tile_size: int) -> Tuple[int, int]:
        return (self.x * tile_size, self.y * tile_size)

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)

    def distance(self, other: "Position") -> float:
        """Euclidean distance between two tiles."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class Room:
    x: int
    y: int
    width: int
    height: int

    def right(self) -> int:
        return self.x + self.width

    def bottom(self) -> int:
        return self.y + self.height

    def center(self) -> Position:
        return Position(self.x + self.width // 2, self.y + self.height // 2)

    def intersects(self, other: "Room", padding: int = 1) -> bool:
        return not (
            self.right() + padding <= other.x
            or other.right() + padding <= self.x
            or self.bottom() + padding <= other.y
            or other.bottom() + padding <= self.y
        )

    def positions(self) -> List[Position]:
        return [Position(x, y) for y in range(self.y, self.bottom()) for x in range(self.x, self.right())]


__all__ = ["TileKind", "Position", "Room"]
