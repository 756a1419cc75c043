from __future__ import annotations

import logging
import random
from typing import List

from ..grid import Grid
from ..tiles import Position, Room, TileKind
from .base import Blueprint

logger = logging.getLogger(__name__)


class StandardArchitect:
    """Rooms + corridors generator.

    Attempts to place a number of non-overlapping rectangular rooms and connects
    them with L-shaped corridors in the order they were placed. The outer frame
    is never carved.
    """

    def __init__(
        self,
        max_rooms: int = 18,
        room_min_size: int = 4,
        room_max_size: int = 10,
    ) -> None:
        self.max_rooms = max_rooms
        self.room_min_size = room_min_size
        self.room_max_size = room_max_size

    def build(self, height: int, width: int, rng: random.Random) -> Blueprint:
        grid = Grid(width, height, default=TileKind.WALL)

        rooms: List[Room] = []
        max_w = min(self.room_max_size, width - 2)
        max_h = min(self.room_max_size, height - 2)
        if max_w >= self.room_min_size and max_h >= self.room_min_size:
            attempts = 0
            max_attempts = self.max_rooms * 10
            while len(rooms) < self.max_rooms and attempts < max_attempts:
                attempts += 1
                w = rng.randint(self.room_min_size, max_w)
                h = rng.randint(self.room_min_size, max_h)
                x = rng.randint(1, width - w - 1)
                y = rng.randint(1, height - h - 1)
                new_room = Room(x, y, w, h)
                if any(new_room.intersects(other, padding=1) for other in rooms):
                    continue
                self._carve_room(grid, new_room)
                rooms.append(new_room)

        if not rooms:
            # Ensure at least one open area
            center_room = self._fallback_room(width, height)
            logger.debug("StandardArchitect: no room fit in %dx%d, carving %s", width, height, center_room)
            self._carve_room(grid, center_room)
            rooms.append(center_room)

        for prev, cur in zip(rooms, rooms[1:]):
            a = prev.center()
            b = cur.center()
            if rng.random() < 0.5:
                self._carve_h_corridor(grid, a.x, b.x, a.y)
                self._carve_v_corridor(grid, a.y, b.y, b.x)
            else:
                self._carve_v_corridor(grid, a.y, b.y, a.x)
                self._carve_h_corridor(grid, a.x, b.x, b.y)

        logger.debug("StandardArchitect: generated %d rooms", len(rooms))
        return Blueprint(grid=grid, rooms=tuple(rooms), player_start=rooms[0].center())

    @staticmethod
    def _fallback_room(width: int, height: int) -> Room:
        if width < 3 or height < 3:
            return Room(0, 0, width, height)
        w = max(1, (width - 2) // 2)
        h = max(1, (height - 2) // 2)
        return Room((width - w) // 2, (height - h) // 2, w, h)

    @staticmethod
    def _carve_room(grid: Grid, room: Room) -> None:
        for p in room.positions():
            grid.set(p, TileKind.FLOOR)

    @staticmethod
    def _carve_h_corridor(grid: Grid, x1: int, x2: int, y: int) -> None:
        if x2 < x1:
            x1, x2 = x2, x1
        for x in range(x1, x2 + 1):
            grid.set(Position(x, y), TileKind.FLOOR)

    @staticmethod
    def _carve_v_corridor(grid: Grid, y1: int, y2: int, x: int) -> None:
        if y2 < y1:
            y1, y2 = y2, y1
        for y in range(y1, y2 + 1):
            grid.set(Position(x, y), TileKind.FLOOR)
