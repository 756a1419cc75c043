from .architect import STRATEGIES, Architect
from .automata import CellularAutomataArchitect
from .base import ArchitectKind, Blueprint
from .drunkard import DrunkardArchitect
from .empty import EmptyArchitect
from .standard import StandardArchitect

__all__ = [
    "Architect",
    "ArchitectKind",
    "Blueprint",
    "STRATEGIES",
    "EmptyArchitect",
    "StandardArchitect",
    "CellularAutomataArchitect",
    "DrunkardArchitect",
]
