from enum import Enum


class TurnState(Enum):
    """The active phase of the turn loop. Exactly one is active at a time."""

    AWAITING_INPUT = "awaiting_input"
    PLAYER_TURN = "player_turn"
    MONSTER_TURN = "monster_turn"
    NEXT_LEVEL = "next_level"
