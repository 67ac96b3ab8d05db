"""Seedable random helpers for reproducible simulation runs."""

from __future__ import annotations

import math
import random
import secrets

from pygame.math import Vector3


def generate_seed() -> int:
    """Return a positive 63-bit seed for ad-hoc runs."""
    return secrets.randbits(63) or 1


class DeterministicRNG:
    """MT19937-backed generator whose seed can be read back for replays."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random()
        self.__seed_value: int | None = None
        self._seed(seed)

    def _seed(self, value: int | None) -> None:
        if value is None:
            value = generate_seed()
        try:
            normalized = int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid seed value: {value}") from exc
        self.__seed_value = normalized
        self._random.seed(normalized)

    @property
    def _seed_value(self) -> int | None:
        return self.__seed_value

    def random(self) -> float:
        """Return a float in the range [0.0, 1.0)."""
        return self._random.random()

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.random()

    def inside_unit_sphere(self) -> Vector3:
        """Return a point uniformly distributed inside the unit sphere."""
        # Uniform direction scaled by cbrt(u) keeps the volume density flat.
        z = self.uniform(-1.0, 1.0)
        angle = self.uniform(0.0, math.tau)
        ring = math.sqrt(max(0.0, 1.0 - z * z))
        scale = self.random() ** (1.0 / 3.0)
        return Vector3(ring * math.cos(angle), z, ring * math.sin(angle)) * scale


_GLOBAL_RNG = DeterministicRNG()


def get_rng() -> DeterministicRNG:
    return _GLOBAL_RNG


def seed_rng(seed: int | None) -> int:
    _GLOBAL_RNG._seed(seed)
    assert _GLOBAL_RNG._seed_value is not None
    return _GLOBAL_RNG._seed_value


__all__ = [
    "DeterministicRNG",
    "generate_seed",
    "get_rng",
    "seed_rng",
]
