from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import GenerationConfig, load_config
from .dungeon.architects import ArchitectKind
from .dungeon.builder import build_level
from .exceptions import ConfigurationError
from .logging_config import configure_logging
from .rng import RNGManager


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="delve", description="Generate a dungeon level and print it.")
    parser.add_argument("--config", help="YAML generation config (defaults to the packaged one)")
    parser.add_argument("--architect", choices=[k.value for k in ArchitectKind])
    parser.add_argument("--width", type=int)
    parser.add_argument("--height", type=int)
    parser.add_argument("--seed", help="Master seed (int or string)")
    parser.add_argument("--level", type=int, default=0, help="Level index to generate")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of the map")
    parser.add_argument("--debug", action="store_true")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> GenerationConfig:
    cfg = GenerationConfig.from_env(base=load_config(args.config))
    overrides = {
        "architect": args.architect,
        "width": args.width,
        "height": args.height,
        "seed": args.seed,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    if "seed" in overrides:
        return GenerationConfig.from_dict({**cfg.as_dict(), **overrides})
    return cfg.replace(**overrides) if overrides else cfg


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.debug else logging.WARNING)

    try:
        config = build_config(args)
    except (ConfigurationError, OSError) as exc:
        print(f"delve: {exc}", file=sys.stderr)
        return 2

    rng = RNGManager(config.seed).context_rng("level", args.level)
    level = build_level(config, rng, level=args.level)
    if args.json:
        print(json.dumps({"config": config.as_dict(), "level": level.summary()}, indent=2, sort_keys=True))
    else:
        print(level)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
