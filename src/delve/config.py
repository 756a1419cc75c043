from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from importlib.resources import files as resource_files
from typing import Any, Callable, Dict, Mapping, Optional, Union

import yaml

from .dungeon.architects import Architect, ArchitectKind
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _parse_seed(value: Any) -> Union[int, str, None]:
    if value is None or isinstance(value, int):
        return value
    s = str(value).strip()
    if s == "":
        return None
    try:
        return int(s)
    except ValueError:
        return s


@dataclass(frozen=True)
class GenerationConfig:
    """Everything needed to generate a level, and nothing else.

    Attributes:
        architect: Layout strategy (enum member, or its name/value as a string).
        height / width: Grid size in tiles; both must be positive.
        tile_size: World units per tile, used by consumers converting positions.
        entity_distance: Spawns must be further than this from the player start.
        num_monsters / num_items / num_npcs: Requested spawn counts.
        seed: Master seed (int or str). None means a fresh random run.
    """

    architect: ArchitectKind = ArchitectKind.STANDARD
    height: int = 40
    width: int = 80
    tile_size: int = 16
    entity_distance: float = 10.0
    num_monsters: int = 40
    num_items: int = 10
    num_npcs: int = 5
    seed: Union[int, str, None] = None

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "architect", ArchitectKind.parse(self.architect))
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Grid dimensions must be positive, got {self.width}x{self.height}")
        if self.tile_size <= 0:
            raise ConfigurationError(f"tile_size must be positive, got {self.tile_size}")
        if self.entity_distance < 0:
            raise ConfigurationError(f"entity_distance must be >= 0, got {self.entity_distance}")
        for name in ("num_monsters", "num_items", "num_npcs"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {getattr(self, name)}")

    def to_architect(self) -> Architect:
        return Architect(
            kind=self.architect,
            entity_distance=self.entity_distance,
            num_monsters=self.num_monsters,
            num_items=self.num_items,
            num_npcs=self.num_npcs,
        )

    def replace(self, **changes: Any) -> "GenerationConfig":
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        data["architect"] = self.architect.value
        return data

    # ------------------------ Loading & Overrides ------------------------
    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "GenerationConfig":
        allowed = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - allowed)
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")
        values = dict(data)
        if "seed" in values:
            values["seed"] = _parse_seed(values["seed"])
        try:
            return cls(**values)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        base: Optional["GenerationConfig"] = None,
    ) -> "GenerationConfig":
        """Overlay DELVE_* environment variables on ``base`` (defaults if None)."""
        env = os.environ if env is None else env
        mapping: Dict[str, tuple[str, Callable[[str], Any]]] = {
            "DELVE_ARCHITECT": ("architect", str),
            "DELVE_WIDTH": ("width", int),
            "DELVE_HEIGHT": ("height", int),
            "DELVE_TILE_SIZE": ("tile_size", int),
            "DELVE_ENTITY_DISTANCE": ("entity_distance", float),
            "DELVE_NUM_MONSTERS": ("num_monsters", int),
            "DELVE_NUM_ITEMS": ("num_items", int),
            "DELVE_NUM_NPCS": ("num_npcs", int),
            "DELVE_SEED": ("seed", _parse_seed),
        }
        out: Dict[str, Any] = {}
        for env_key, (field_name, caster) in mapping.items():
            if env_key in env and env[env_key] != "":
                try:
                    out[field_name] = caster(env[env_key])
                except ValueError as exc:
                    raise ConfigurationError(f"Invalid env for {env_key}={env[env_key]!r}: {exc}") from exc
        base = base or cls()
        return base.replace(**out) if out else base


def load_config(path: Optional[str] = None) -> GenerationConfig:
    """Load a generation configuration from YAML.

    If path is None, loads the embedded default resource at delve/data/default.yaml.
    """
    if path is None:
        data = resource_files("delve.data").joinpath("default.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded default generation config")
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
        logger.debug("Loaded generation config from path: %s", path)

    try:
        raw = yaml.safe_load(data) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML configuration: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError("Configuration root must be a mapping")
    cfg = GenerationConfig.from_dict(raw.get("generation", raw))
    logger.info(
        "Generation config: %s %dx%d seed=%r",
        cfg.architect.value,
        cfg.width,
        cfg.height,
        cfg.seed,
    )
    return cfg


__all__ = ["GenerationConfig", "load_config"]
