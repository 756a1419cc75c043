from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, Dict

from .automata import CellularAutomataArchitect
from .base import ArchitectKind, Blueprint, LayoutStrategy
from .drunkard import DrunkardArchitect
from .empty import EmptyArchitect
from .standard import StandardArchitect

logger = logging.getLogger(__name__)

# Closed set of layout strategies, one per ArchitectKind.
STRATEGIES: Dict[ArchitectKind, Callable[[], LayoutStrategy]] = {
    ArchitectKind.EMPTY: EmptyArchitect,
    ArchitectKind.STANDARD: StandardArchitect,
    ArchitectKind.CELLULAR_AUTOMATA: CellularAutomataArchitect,
    ArchitectKind.DRUNKARD: DrunkardArchitect,
}


@dataclass(frozen=True)
class Architect:
    """A generation strategy together with its entity placement requirements.

    Attributes:
        kind: Which layout strategy builds the grid.
        entity_distance: Spawns must be strictly further than this from the player start.
        num_monsters / num_items / num_npcs: Requested spawn counts per category.
    """

    kind: ArchitectKind = ArchitectKind.STANDARD
    entity_distance: float = 10.0
    num_monsters: int = 0
    num_items: int = 0
    num_npcs: int = 0

    def strategy(self) -> LayoutStrategy:
        return STRATEGIES[self.kind]()

    def build(self, height: int, width: int, rng: random.Random) -> Blueprint:
        logger.info("Building %dx%d layout with %s architect", width, height, self.kind.value)
        return self.strategy().build(height, width, rng)
