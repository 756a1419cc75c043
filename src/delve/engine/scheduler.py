from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence, Tuple

from ..dungeon.builder import LevelDescriptor
from ..exceptions import TurnTransitionError
from .intents import PlayerIntent
from .state import TurnState

if TYPE_CHECKING:
    from ..roster import SpawnOrder

logger = logging.getLogger(__name__)


class TurnSystems:
    """Hooks implemented by the movement/AI/collision collaborator.

    The scheduler never moves entities itself; it calls these hooks from the phase
    that owns them. The defaults do nothing and report work as fully resolved.
    """

    def apply_intent(self, intent: PlayerIntent, level: Optional[LevelDescriptor]) -> None:
        """Turn the player's intent into pending moves/attacks/pick-ups."""

    def resolve_player(self, level: Optional[LevelDescriptor]) -> bool:
        """Apply player movement and collisions. Return False to stay in PLAYER_TURN."""
        return True

    def plan_monsters(self, level: Optional[LevelDescriptor]) -> None:
        """Generate monster actions for this turn."""

    def resolve_monsters(self, level: Optional[LevelDescriptor]) -> bool:
        """Apply monster movement and collisions. Return False to stay in MONSTER_TURN."""
        return True

    def respawn(self, level: LevelDescriptor, orders: Sequence["SpawnOrder"]) -> None:
        """Replace the entities of the previous level with ``orders`` on ``level``."""


@dataclass
class TickContext:
    """Per-tick scratch state shared by the phases of one tick.

    ``state`` is the turn state at the start of the tick and never changes while
    the phases run; the single requested transition is applied after the last phase.
    """

    tick: int
    state: TurnState
    intent: Optional[PlayerIntent]
    level_complete: bool
    requested: Optional[TurnState] = None
    requested_by: Optional[str] = None

    @property
    def preempted(self) -> bool:
        return self.level_complete and self.state is not TurnState.NEXT_LEVEL

    def request(self, phase: str, new_state: TurnState) -> None:
        if self.requested is not None:
            raise TurnTransitionError(
                f"Tick {self.tick}: phase {phase!r} requested {new_state.name} after "
                f"{self.requested_by!r} already requested {self.requested.name}"
            )
        self.requested = new_state
        self.requested_by = phase


class TurnScheduler:
    """Deterministic turn state machine.

    Each tick runs the phases below in this order, each gated on the state the
    tick started in:

    1. resolve_intent      AWAITING_INPUT -> PLAYER_TURN on a player intent
    2. player_resolution   PLAYER_TURN -> MONSTER_TURN once player effects are resolved
    3. monster_actions     MONSTER_TURN: monster actions are generated
    4. monster_resolution  MONSTER_TURN -> AWAITING_INPUT once monster effects are resolved
    5. advance             any -> NEXT_LEVEL on level-complete; NEXT_LEVEL -> AWAITING_INPUT
                           after regeneration

    A level-complete signal skips phases 1-4 for that tick.
    """

    def __init__(
        self,
        systems: Optional[TurnSystems] = None,
        regenerate: Optional[Callable[[], LevelDescriptor]] = None,
        level: Optional[LevelDescriptor] = None,
        initial: TurnState = TurnState.AWAITING_INPUT,
    ) -> None:
        self.systems = systems or TurnSystems()
        self.level = level
        self._regenerate = regenerate
        self._state = initial
        self._tick = 0
        self._history: List[TurnState] = [initial]

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def tick_count(self) -> int:
        return self._tick

    @property
    def history(self) -> Tuple[TurnState, ...]:
        """Initial state followed by the state after every tick."""
        return tuple(self._history)

    def tick(self, intent: Optional[PlayerIntent] = None, level_complete: bool = False) -> TurnState:
        """Run one tick and return the resulting state."""
        self._tick += 1
        ctx = TickContext(tick=self._tick, state=self._state, intent=intent, level_complete=level_complete)
        for name in self.PHASES:
            getattr(self, "_" + name)(ctx)

        if ctx.requested is not None and ctx.requested is not self._state:
            logger.info(
                "Tick %d: %s -> %s (by %s)", ctx.tick, self._state.name, ctx.requested.name, ctx.requested_by
            )
            self._state = ctx.requested
        else:
            logger.debug("Tick %d: staying in %s", ctx.tick, self._state.name)
        self._history.append(self._state)
        return self._state

    # --------------- Phases ---------------

    def _resolve_intent(self, ctx: TickContext) -> None:
        if ctx.preempted or ctx.state is not TurnState.AWAITING_INPUT or ctx.intent is None:
            return
        logger.debug("Tick %d: player intent %s", ctx.tick, ctx.intent)
        self.systems.apply_intent(ctx.intent, self.level)
        ctx.request("resolve_intent", TurnState.PLAYER_TURN)

    def _player_resolution(self, ctx: TickContext) -> None:
        if ctx.preempted or ctx.state is not TurnState.PLAYER_TURN:
            return
        if self.systems.resolve_player(self.level):
            ctx.request("player_resolution", TurnState.MONSTER_TURN)

    def _monster_actions(self, ctx: TickContext) -> None:
        if ctx.preempted or ctx.state is not TurnState.MONSTER_TURN:
            return
        self.systems.plan_monsters(self.level)

    def _monster_resolution(self, ctx: TickContext) -> None:
        if ctx.preempted or ctx.state is not TurnState.MONSTER_TURN:
            return
        if self.systems.resolve_monsters(self.level):
            ctx.request("monster_resolution", TurnState.AWAITING_INPUT)

    def _advance(self, ctx: TickContext) -> None:
        if ctx.preempted:
            ctx.request("advance", TurnState.NEXT_LEVEL)
            return
        if ctx.state is not TurnState.NEXT_LEVEL:
            return
        if self._regenerate is not None:
            self.level = self._regenerate()
        ctx.request("advance", TurnState.AWAITING_INPUT)

    # Each name runs the method "_<name>", so subclasses can override a phase.
    PHASES: Tuple[str, ...] = (
        "resolve_intent",
        "player_resolution",
        "monster_actions",
        "monster_resolution",
        "advance",
    )


__all__ = ["TurnScheduler", "TurnSystems", "TickContext"]
