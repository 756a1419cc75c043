class DelveError(Exception):
    """Base exception for the delve project."""


class ConfigurationError(DelveError, ValueError):
    """Raised when a generation configuration is structurally invalid."""


class GridFrozenError(DelveError):
    """Raised when a published (frozen) grid is mutated."""


class TurnTransitionError(DelveError):
    """Raised when more than one phase requests a turn transition in a single tick."""
