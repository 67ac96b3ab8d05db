"""Zombie AI and combat-physics core."""

# ruff: noqa: F401

from .__about__ import __version__
from .config import DEFAULT_CONFIG, load_config, save_config
from .entities import PlayerAgent, ZombieAgent, ZombieState
from .models import AgentHandle, SimulationData

__all__ = [
    "DEFAULT_CONFIG",
    "AgentHandle",
    "PlayerAgent",
    "SimulationData",
    "ZombieAgent",
    "ZombieState",
    "__version__",
    "load_config",
    "save_config",
]
