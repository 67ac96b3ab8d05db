"""Zombie AI services and the headless reference world."""

# ruff: noqa: F401

from .combat import CombatResolver
from .knockback import KnockbackIntegrator, horizontal_unit
from .navigation import StraightLineNavigation
from .perception import PerceptionService, eye_point
from .registry import AgentRegistry
from .signaling import SignalingProtocol, SignalPatch, ZombieSnapshot, plan_broadcast
from .spatial_index import SpatialIndex, SpatialKind
from .state import initialize_simulation, spawn_player, spawn_zombie
from .state_machine import AgentStateMachine
from .tick import TickDriver
from .world import Box, HeadlessWorld, KinematicMotor

__all__ = [
    "AgentRegistry",
    "AgentStateMachine",
    "Box",
    "CombatResolver",
    "HeadlessWorld",
    "KinematicMotor",
    "KnockbackIntegrator",
    "PerceptionService",
    "SignalPatch",
    "SignalingProtocol",
    "SpatialIndex",
    "SpatialKind",
    "StraightLineNavigation",
    "TickDriver",
    "ZombieSnapshot",
    "eye_point",
    "horizontal_unit",
    "initialize_simulation",
    "plan_broadcast",
    "spawn_player",
    "spawn_zombie",
]
