from .architects import Architect, ArchitectKind, Blueprint
from .builder import LevelBuilder, LevelDescriptor, build_level, fill_in_unreachable
from .distance import UNREACHABLE, DistanceMap
from .grid import Grid
from .prefab import FORTRESS, MAX_ATTEMPTS, Prefab, PrefabPlacement, apply_prefab
from .spawns import candidate_pool, entity_spawns, weighted_sample
from .tiles import Position, Room, TileKind

__all__ = [
    "Architect",
    "ArchitectKind",
    "Blueprint",
    "DistanceMap",
    "UNREACHABLE",
    "FORTRESS",
    "Grid",
    "LevelBuilder",
    "LevelDescriptor",
    "MAX_ATTEMPTS",
    "Position",
    "Prefab",
    "PrefabPlacement",
    "Room",
    "TileKind",
    "apply_prefab",
    "build_level",
    "candidate_pool",
    "entity_spawns",
    "fill_in_unreachable",
    "weighted_sample",
]
