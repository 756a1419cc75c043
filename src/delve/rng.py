from __future__ import annotations

import hashlib
import logging
import random
import secrets
from dataclasses import dataclass, field
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, bytes, None]

_SEED_VERSION = b"delve-seed-v1"


def seed_to_bytes(seed: Seed) -> bytes:
    """Canonical byte form of a master seed.

    Integers use their minimal big-endian encoding, so ``255`` and ``"0xff"``
    name the same run. Other strings are used as UTF-8 text.
    """
    if seed is None:
        return secrets.token_bytes(16)
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, bool) or not isinstance(seed, (int, str)):
        raise TypeError(f"Unsupported seed type: {type(seed).__name__}")
    if isinstance(seed, str):
        text = seed.strip()
        if not text.lower().startswith("0x"):
            return text.encode("utf-8")
        try:
            seed = int(text, 16)
        except ValueError:
            return text.encode("utf-8")
    if seed < 0:
        raise ValueError(f"Seed must be non-negative, got {seed}")
    return seed.to_bytes(max(1, (seed.bit_length() + 7) // 8), "big")


def derive_rng(parent: random.Random) -> random.Random:
    """Child generator seeded from the next 64 bits of ``parent``.

    Replaying the parent's draw sequence reproduces every child exactly.
    """
    return random.Random(parent.getrandbits(64))


@dataclass(frozen=True)
class RNGManager:
    """Root of all randomness for a run.

    Independent streams are keyed by a domain name plus identifiers, so e.g. the
    session stream and a standalone level preview never share state::

        rngm = RNGManager(master_seed)
        session_rng = rngm.context_rng("session")
        preview_rng = rngm.context_rng("level", 3)

    Without a master seed a random one is drawn and logged so the run can be
    reproduced.
    """

    master_seed: Seed
    seed_bytes: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "seed_bytes", seed_to_bytes(self.master_seed))
        if self.master_seed is None:
            logger.info("No master seed provided; generated random seed: %s", self.seed_bytes.hex())

    def derive_seed(self, domain: str, *identifiers: Any) -> int:
        """64-bit seed for ``domain``/``identifiers`` (BLAKE2b keyed by the master seed)."""
        key = self.seed_bytes if len(self.seed_bytes) <= 64 else hashlib.blake2b(self.seed_bytes).digest()
        h = hashlib.blake2b(digest_size=8, key=key, person=_SEED_VERSION)
        h.update(domain.encode("utf-8"))
        for ident in identifiers:
            h.update(b"\x1f")
            h.update(repr(ident).encode("utf-8"))
        value = int.from_bytes(h.digest(), "big")
        logger.debug("Seed for %s%r -> %d", domain, identifiers, value)
        return value

    def context_rng(self, domain: str, *identifiers: Any) -> random.Random:
        return random.Random(self.derive_seed(domain, *identifiers))

    def get_master_seed_hex(self) -> str:
        return self.seed_bytes.hex()


def make_rng(seed: Optional[Seed], domain: str = "session") -> random.Random:
    """Shortcut for ``RNGManager(seed).context_rng(domain)``."""
    return RNGManager(seed).context_rng(domain)


__all__ = ["RNGManager", "Seed", "derive_rng", "make_rng", "seed_to_bytes"]
