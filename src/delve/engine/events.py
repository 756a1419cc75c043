from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping

logger = logging.getLogger(__name__)

TURN_CHANGED = "turn.changed"
LEVEL_GENERATED = "level.generated"


@dataclass(frozen=True)
class Event:
    """Something that happened in the session.

    ``name`` is one of the module-level event names; ``payload`` carries the
    event-specific fields (states, level index, descriptor).
    """

    name: str
    payload: Mapping[str, Any] = field(default_factory=dict)


Handler = Callable[[Event], None]


class EventBus:
    """Synchronous publish/subscribe between the session and its observers.

    Handlers run in subscription order inside ``publish``. A handler that raises
    aborts the publish and the error reaches the caller. Each session owns its
    own bus.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        if not callable(handler):
            raise TypeError("handler must be callable")
        self._handlers.setdefault(name, []).append(handler)
        logger.debug("Handler %s subscribed to %s", getattr(handler, "__qualname__", handler), name)

    def unsubscribe(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, name: str, payload: Mapping[str, Any]) -> Event:
        event = Event(name, dict(payload))
        handlers = tuple(self._handlers.get(name, ()))
        logger.debug("Event %s -> %d handler(s)", name, len(handlers))
        for handler in handlers:
            handler(event)
        return event


__all__ = ["Event", "EventBus", "Handler", "TURN_CHANGED", "LEVEL_GENERATED"]
