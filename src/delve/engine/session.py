from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import GenerationConfig
from ..dungeon.builder import LevelBuilder, LevelDescriptor
from ..rng import derive_rng, make_rng
from ..roster import SpawnCategory, SpawnOrder, Species, plan_spawns
from .events import LEVEL_GENERATED, TURN_CHANGED, EventBus
from .intents import PlayerIntent
from .scheduler import TurnScheduler, TurnSystems
from .state import TurnState

logger = logging.getLogger(__name__)

Signal = Tuple[Optional[PlayerIntent], bool]


class GameSession:
    """Holds the current run: configuration, level, spawn plan and turn state.

    The session owns the only root generator. Each level is built from a child
    generator drawn from it, followed by a second child for the spawn plan, so a
    run is fully determined by the config seed and the tick signals.
    """

    def __init__(
        self,
        config: GenerationConfig,
        systems: Optional[TurnSystems] = None,
        bus: Optional[EventBus] = None,
        rosters: Optional[Dict[SpawnCategory, Sequence[Species]]] = None,
    ) -> None:
        self.config = config
        self.systems = systems or TurnSystems()
        self.bus = bus or EventBus()
        self.rosters = rosters
        self._rng = make_rng(config.seed, "session")
        self._builder = LevelBuilder(config.to_architect())
        self.level_index = -1
        self.spawn_orders: List[SpawnOrder] = []
        self.level: LevelDescriptor = self._generate()
        self.scheduler = TurnScheduler(self.systems, regenerate=self._generate, level=self.level)
        logger.info("Initialized GameSession at level %d, player at %s", self.level_index, self.level.player_start)

    @property
    def state(self) -> TurnState:
        return self.scheduler.state

    def tick(self, intent: Optional[PlayerIntent] = None, level_complete: bool = False) -> TurnState:
        before = self.scheduler.state
        after = self.scheduler.tick(intent, level_complete)
        if after is not before:
            self.bus.publish(
                TURN_CHANGED,
                {"from": before, "to": after, "tick": self.scheduler.tick_count, "level": self.level_index},
            )
        return after

    def replay(self, signals: Iterable[Signal]) -> List[TurnState]:
        """Feed (intent, level_complete) pairs one tick at a time; returns the state after each."""
        return [self.tick(intent, done) for intent, done in signals]

    def _generate(self) -> LevelDescriptor:
        self.level_index += 1
        level_rng = derive_rng(self._rng)
        spawn_rng = derive_rng(self._rng)
        level = self._builder.build(self.config.height, self.config.width, level_rng, level=self.level_index)
        self.level = level
        self.spawn_orders = plan_spawns(level, spawn_rng, self.rosters)
        self.systems.respawn(level, self.spawn_orders)
        self.bus.publish(
            LEVEL_GENERATED,
            {"level": self.level_index, "descriptor": level, "spawns": len(self.spawn_orders)},
        )
        return level


__all__ = ["GameSession", "Signal"]
