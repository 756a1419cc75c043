"""delve: level generation and turn orchestration for a turn-based dungeon crawler."""

from .config import GenerationConfig, load_config
from .dungeon import (
    Architect,
    ArchitectKind,
    DistanceMap,
    Grid,
    LevelBuilder,
    LevelDescriptor,
    Position,
    TileKind,
    build_level,
)
from .engine import GameSession, PlayerIntent, TurnScheduler, TurnState, TurnSystems
from .exceptions import ConfigurationError, DelveError

__version__ = "0.1.0"

__all__ = [
    "Architect",
    "ArchitectKind",
    "ConfigurationError",
    "DelveError",
    "DistanceMap",
    "GameSession",
    "GenerationConfig",
    "Grid",
    "LevelBuilder",
    "LevelDescriptor",
    "PlayerIntent",
    "Position",
    "TileKind",
    "TurnScheduler",
    "TurnState",
    "TurnSystems",
    "build_level",
    "load_config",
]
