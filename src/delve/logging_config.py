import logging
import os
from typing import Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def _level_from_env(default: int) -> int:
    value = os.getenv("DELVE_LOG_LEVEL", "").strip()
    if not value:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else default


def configure_logging(default_level: Union[int, str] = logging.INFO, stream: Optional[object] = None) -> None:
    """Install the root handler used by the command line.

    DELVE_LOG_LEVEL (a level name or number) wins over ``default_level``.
    Library code never calls this; it only logs through module loggers.
    """
    if isinstance(default_level, str):
        default_level = logging.getLevelName(default_level.upper())
    logging.basicConfig(level=_level_from_env(default_level), format=LOG_FORMAT, stream=stream)
