from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, FrozenSet, List, Optional, Set, Tuple

from .architects import Architect
from .distance import DistanceMap
from .grid import Grid
from .prefab import FORTRESS, MAX_ATTEMPTS, Prefab, apply_prefab
from .spawns import entity_spawns
from .tiles import Position, Room, TileKind

if TYPE_CHECKING:
    from ..config import GenerationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LevelDescriptor:
    """The published result of one generation pass.

    The grid is frozen; every position set is immutable.
    """

    grid: Grid
    player_start: Position
    exit: Position
    monster_spawns: FrozenSet[Position]
    item_spawns: FrozenSet[Position]
    npc_spawns: FrozenSet[Position]
    rooms: Tuple[Room, ...] = ()
    level: int = 0
    prefab_footprint: FrozenSet[Position] = field(default_factory=frozenset)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def all_spawns(self) -> FrozenSet[Position]:
        return self.monster_spawns | self.item_spawns | self.npc_spawns

    def to_str_lines(self) -> List[str]:
        lines: List[str] = []
        for y in range(self.grid.height):
            row = []
            for x in range(self.grid.width):
                p = Position(x, y)
                if p == self.player_start:
                    row.append("@")
                elif p == self.exit:
                    row.append("?")
                elif p in self.monster_spawns:
                    row.append("M")
                elif p in self.npc_spawns:
                    row.append("N")
                elif p in self.item_spawns:
                    row.append("I")
                else:
                    row.append(self.grid.get(p).glyph)
            lines.append("".join(row))
        return lines

    def summary(self) -> dict:
        """JSON-friendly description of the level."""
        def coords(ps):
            return sorted([p.x, p.y] for p in ps)

        return {
            "level": self.level,
            "width": self.width,
            "height": self.height,
            "player_start": [self.player_start.x, self.player_start.y],
            "exit": [self.exit.x, self.exit.y],
            "rooms": len(self.rooms),
            "floor_tiles": self.grid.floor_count(),
            "monster_spawns": coords(self.monster_spawns),
            "item_spawns": coords(self.item_spawns),
            "npc_spawns": coords(self.npc_spawns),
            "map": self.to_str_lines(),
        }

    def __str__(self) -> str:
        return "\n".join(self.to_str_lines())


def fill_in_unreachable(grid: Grid, start: Position) -> int:
    """Seal every floor tile that cannot be reached from ``start``. Returns how many were sealed."""
    sealed = DistanceMap(grid, start).far_points()
    for p in sealed:
        grid.set(p, TileKind.WALL)
    if sealed:
        logger.debug("Sealed %d unreachable tiles", len(sealed))
    return len(sealed)


class LevelBuilder:
    """Turns an Architect into a finished LevelDescriptor.

    Every call to build() is an independent generation pass; pass a fresh
    generator to regenerate.
    """

    def __init__(
        self,
        architect: Architect,
        prefab: Optional[Prefab] = FORTRESS,
        prefab_attempts: int = MAX_ATTEMPTS,
    ) -> None:
        self.architect = architect
        self.prefab = prefab
        self.prefab_attempts = prefab_attempts

    def build(self, height: int, width: int, rng: random.Random, level: int = 0) -> LevelDescriptor:
        blueprint = self.architect.build(height, width, rng)
        grid = blueprint.grid
        start = blueprint.player_start

        placement = None
        if self.prefab is not None:
            placement = apply_prefab(
                grid,
                start,
                rng,
                reserved=frozenset({start}),
                prefab=self.prefab,
                max_attempts=self.prefab_attempts,
            )
        footprint = placement.footprint if placement else frozenset()

        fill_in_unreachable(grid, start)
        dmap = DistanceMap(grid, start)
        exit_pos = dmap.furthest_point()

        reserved: Set[Position] = {start, exit_pos} | set(footprint)
        threshold = self.architect.entity_distance
        # Prefab markers count toward the monster budget and obey the same distance rule.
        in_reach = [
            p
            for p in (placement.monster_markers if placement else ())
            if dmap.is_reachable(p) and dmap.distance(p) > threshold and p != exit_pos
        ]
        markers = frozenset(in_reach[: self.architect.num_monsters])

        wanted = max(0, self.architect.num_monsters - len(markers))
        monsters = entity_spawns(grid, dmap, threshold, rng, wanted, reserved)
        reserved |= monsters
        items = entity_spawns(grid, dmap, threshold, rng, self.architect.num_items, reserved)
        reserved |= items
        npcs = entity_spawns(grid, dmap, threshold, rng, self.architect.num_npcs, reserved)

        descriptor = LevelDescriptor(
            grid=grid.freeze(),
            player_start=start,
            exit=exit_pos,
            monster_spawns=monsters | markers,
            item_spawns=items,
            npc_spawns=npcs,
            rooms=blueprint.rooms,
            level=level,
            prefab_footprint=footprint,
        )
        logger.info(
            "Level %d built: %dx%d, %d floor tiles, start=%s exit=%s, spawns m/i/n=%d/%d/%d",
            level,
            width,
            height,
            grid.floor_count(),
            start,
            exit_pos,
            len(descriptor.monster_spawns),
            len(items),
            len(npcs),
        )
        return descriptor


def build_level(config: "GenerationConfig", rng: random.Random, level: int = 0) -> LevelDescriptor:
    """Generate one level for ``config`` using ``rng``."""
    builder = LevelBuilder(config.to_architect())
    return builder.build(config.height, config.width, rng, level=level)


__all__ = ["LevelDescriptor", "LevelBuilder", "build_level", "fill_in_unreachable"]
