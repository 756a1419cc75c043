from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from .dungeon.builder import LevelDescriptor
from .dungeon.spawns import weighted_sample
from .dungeon.tiles import Position

logger = logging.getLogger(__name__)


class SpawnCategory(Enum):
    MONSTER = "monster"
    ITEM = "item"
    NPC = "npc"


@dataclass(frozen=True)
class Species:
    """One kind of entity that can occupy a spawn position.

    Attributes:
        name: Display name.
        health: Starting hit points (0 for items).
        proportion: Relative weight when choosing among eligible species.
        levels: Map levels on which the species may appear; None means every level.
    """

    name: str
    health: int = 1
    proportion: float = 1.0
    levels: Optional[FrozenSet[int]] = None

    def allowed_on(self, level: int) -> bool:
        return self.levels is None or level in self.levels


MONSTERS: Sequence[Species] = (
    Species("Yoga Bunny", health=1, proportion=61),
    Species("Gym Bro", health=4, proportion=20),
    Species("Nutritionist", health=2, proportion=15),
    Species("Supplement Pusher", health=3, proportion=4),
)

ITEMS: Sequence[Species] = (Species("Cake", health=0, proportion=1),)

NPCS: Sequence[Species] = (
    Species("Baker", health=3, proportion=50, levels=frozenset({0, 1})),
    Species("Pastry Chef", health=3, proportion=30, levels=frozenset({1, 2, 3})),
    Species("Grandma", health=2, proportion=20),
)

DEFAULT_ROSTERS: Dict[SpawnCategory, Sequence[Species]] = {
    SpawnCategory.MONSTER: MONSTERS,
    SpawnCategory.ITEM: ITEMS,
    SpawnCategory.NPC: NPCS,
}


@dataclass(frozen=True)
class SpawnOrder:
    """Instruction for the entity collaborator: put ``species`` at ``position``.

    ``seed`` seeds the entity's own generator (e.g. for random movement), so a
    replay with the same master seed reproduces its behaviour.
    """

    category: SpawnCategory
    position: Position
    species: str
    health: int
    seed: int

    def rng(self) -> random.Random:
        return random.Random(self.seed)


def choose_species(rng: random.Random, roster: Iterable[Species], level: int = 0) -> Optional[Species]:
    """Pick a species allowed on ``level`` proportionally to its weight."""
    eligible = [s for s in roster if s.allowed_on(level)]
    picked = weighted_sample(rng, eligible, 1, weight=lambda s: s.proportion)
    return picked[0] if picked else None


def plan_spawns(
    level: LevelDescriptor,
    rng: random.Random,
    rosters: Optional[Dict[SpawnCategory, Sequence[Species]]] = None,
) -> List[SpawnOrder]:
    """Assign a species and an entity seed to every spawn position of ``level``.

    Positions are visited category by category in row-major order, drawing one
    entity seed from ``rng`` each, so the plan depends only on ``rng``'s state.
    """
    rosters = rosters or DEFAULT_ROSTERS
    spawn_sets = {
        SpawnCategory.MONSTER: level.monster_spawns,
        SpawnCategory.ITEM: level.item_spawns,
        SpawnCategory.NPC: level.npc_spawns,
    }
    orders: List[SpawnOrder] = []
    for category in SpawnCategory:
        roster = rosters.get(category, ())
        for pos in sorted(spawn_sets[category], key=lambda p: (p.y, p.x)):
            seed = rng.getrandbits(64)
            species = choose_species(random.Random(seed), roster, level.level)
            if species is None:
                logger.warning("No %s species eligible on level %d; %s left empty", category.value, level.level, pos)
                continue
            orders.append(SpawnOrder(category, pos, species.name, species.health, seed))
    logger.debug("Planned %d spawns for level %d", len(orders), level.level)
    return orders


__all__ = [
    "SpawnCategory",
    "Species",
    "SpawnOrder",
    "MONSTERS",
    "ITEMS",
    "NPCS",
    "DEFAULT_ROSTERS",
    "choose_species",
    "plan_spawns",
]
