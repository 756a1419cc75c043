from .events import LEVEL_GENERATED, TURN_CHANGED, Event, EventBus
from .intents import IntentKind, PlayerIntent
from .scheduler import TickContext, TurnScheduler, TurnSystems
from .session import GameSession
from .state import TurnState

__all__ = [
    "Event",
    "EventBus",
    "GameSession",
    "IntentKind",
    "LEVEL_GENERATED",
    "PlayerIntent",
    "TURN_CHANGED",
    "TickContext",
    "TurnScheduler",
    "TurnState",
    "TurnSystems",
]
