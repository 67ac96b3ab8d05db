"""Agent definitions for zombie_ai."""

from .player import PlayerAgent
from .zombie import ZombieAgent, ZombieState
from .zombie_vitals import ZombieVitals

__all__ = [
    "PlayerAgent",
    "ZombieAgent",
    "ZombieState",
    "ZombieVitals",
]
