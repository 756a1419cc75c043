from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple


class IntentKind(Enum):
    """Logical player intents, independent of the input device that produced them."""

    MOVE = auto()
    PICK_UP = auto()
    INTERACT = auto()
    USE_ITEM = auto()


@dataclass(frozen=True)
class PlayerIntent:
    """One resolved player intent for a tick.

    Attributes:
        kind: What the player wants to do.
        vector: Movement delta for MOVE (an attack when the target holds a monster).
        item_index: Inventory slot for USE_ITEM.
    """

    kind: IntentKind
    vector: Tuple[int, int] = (0, 0)
    item_index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is IntentKind.MOVE and self.vector == (0, 0):
            raise ValueError("MOVE intent needs a non-zero vector")
        if self.kind is IntentKind.USE_ITEM and (self.item_index is None or self.item_index < 0):
            raise ValueError("USE_ITEM intent needs a non-negative item_index")

    @classmethod
    def move(cls, dx: int, dy: int) -> "PlayerIntent":
        return cls(IntentKind.MOVE, vector=(dx, dy))

    @classmethod
    def pick_up(cls) -> "PlayerIntent":
        return cls(IntentKind.PICK_UP)

    @classmethod
    def interact(cls) -> "PlayerIntent":
        return cls(IntentKind.INTERACT)

    @classmethod
    def use_item(cls, index: int) -> "PlayerIntent":
        return cls(IntentKind.USE_ITEM, item_index=index)


__all__ = ["IntentKind", "PlayerIntent"]
