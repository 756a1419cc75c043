from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import AbstractSet, FrozenSet, List, Optional, Tuple

from .distance import DistanceMap
from .grid import Grid
from .tiles import Position, TileKind

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 10

WALL_CHAR = "#"
FLOOR_CHAR = "-"
MONSTER_CHAR = "M"

FORTRESS_ROWS: Tuple[str, ...] = (
    "------------",
    "---######---",
    "---#----#---",
    "---#-M--#---",
    "-###----###-",
    "--M------M--",
    "-###----###-",
    "---#----#---",
    "---#----#---",
    "---######---",
    "------------",
)


@dataclass(frozen=True)
class Prefab:
    """A small fixed layout stamped into a generated grid.

    ``#`` is wall, ``-`` is floor and ``M`` is floor carrying a monster marker.
    """

    rows: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.rows:
            raise ValueError("Prefab needs at least one row")
        width = len(self.rows[0])
        for r in self.rows:
            if len(r) != width:
                raise ValueError("All prefab rows must be same width")
            unknown = set(r) - {WALL_CHAR, FLOOR_CHAR, MONSTER_CHAR}
            if unknown:
                raise ValueError(f"Unsupported prefab characters: {sorted(unknown)}")

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def cells(self) -> List[Tuple[int, int, str]]:
        return [(x, y, ch) for y, row in enumerate(self.rows) for x, ch in enumerate(row)]


FORTRESS = Prefab(FORTRESS_ROWS)


@dataclass(frozen=True)
class PrefabPlacement:
    """Where a prefab landed and what it reserved."""

    origin: Position
    footprint: FrozenSet[Position]
    monster_markers: Tuple[Position, ...]


class PrefabStamper:
    """Applies a Prefab into a Grid."""

    @staticmethod
    def can_stamp(
        grid: Grid,
        prefab: Prefab,
        origin: Position,
        dmap: DistanceMap,
        reserved: AbstractSet[Position],
        min_distance: int,
        max_distance: int,
    ) -> bool:
        """Check bounds, distance window and overlap with already-placed features."""
        if origin.x < 0 or origin.y < 0:
            return False
        if origin.x + prefab.width > grid.width or origin.y + prefab.height > grid.height:
            return False
        for x, y, _ch in prefab.cells():
            p = Position(origin.x + x, origin.y + y)
            if p == dmap.source or p in reserved:
                return False
            d = dmap.distance(p)
            if not dmap.is_reachable(p) or not (min_distance < d < max_distance):
                return False
        return True

    @staticmethod
    def stamp(grid: Grid, prefab: Prefab, origin: Position) -> PrefabPlacement:
        # Accumulate intended writes first so a bad template never leaves a partial stamp.
        writes: List[Tuple[Position, TileKind]] = []
        markers: List[Position] = []
        for x, y, ch in prefab.cells():
            p = Position(origin.x + x, origin.y + y)
            writes.append((p, TileKind.WALL if ch == WALL_CHAR else TileKind.FLOOR))
            if ch == MONSTER_CHAR:
                markers.append(p)
        for p, kind in writes:
            grid.set(p, kind)
        return PrefabPlacement(
            origin=origin,
            footprint=frozenset(p for p, _ in writes),
            monster_markers=tuple(markers),
        )


def apply_prefab(
    grid: Grid,
    start: Position,
    rng: random.Random,
    reserved: AbstractSet[Position] = frozenset(),
    prefab: Prefab = FORTRESS,
    max_attempts: int = MAX_ATTEMPTS,
    min_distance: int = 20,
    max_distance: int = 2000,
) -> Optional[PrefabPlacement]:
    """Try up to ``max_attempts`` random placements of ``prefab``.

    Returns the placement, or None when the overlay was skipped.
    """
    if prefab.width > grid.width or prefab.height > grid.height:
        logger.debug("Prefab %dx%d does not fit grid %dx%d; skipped", prefab.width, prefab.height, grid.width, grid.height)
        return None

    dmap = DistanceMap(grid, start)
    for attempt in range(1, max_attempts + 1):
        origin = Position(
            rng.randint(0, grid.width - prefab.width),
            rng.randint(0, grid.height - prefab.height),
        )
        if PrefabStamper.can_stamp(grid, prefab, origin, dmap, reserved, min_distance, max_distance):
            placement = PrefabStamper.stamp(grid, prefab, origin)
            logger.info("Prefab stamped at %s after %d attempt(s)", origin, attempt)
            return placement

    logger.debug("Prefab placement failed after %d attempts; skipped", max_attempts)
    return None


__all__ = [
    "MAX_ATTEMPTS",
    "FORTRESS",
    "Prefab",
    "PrefabPlacement",
    "PrefabStamper",
    "apply_prefab",
]
