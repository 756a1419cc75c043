from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Tuple

from ..grid import Grid
from ..tiles import Position, Room


class ArchitectKind(Enum):
    EMPTY = "empty"
    STANDARD = "standard"
    CELLULAR_AUTOMATA = "cellular_automata"
    DRUNKARD = "drunkard"

    @classmethod
    def parse(cls, value: "str | ArchitectKind") -> "ArchitectKind":
        """Accept an enum member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "_")
        for kind in cls:
            if key in (kind.value, kind.name.lower()):
                return kind
        if key in ("automata", "cellular", "cave"):
            return cls.CELLULAR_AUTOMATA
        raise ValueError(f"Unknown architect {value!r}")


@dataclass
class Blueprint:
    """Raw architect output, still owned (and mutable) by the level builder."""

    grid: Grid
    rooms: Tuple[Room, ...]
    player_start: Position


class LayoutStrategy(Protocol):
    def build(self, height: int, width: int, rng: random.Random) -> Blueprint:
        ...
