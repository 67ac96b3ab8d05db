from __future__ import annotations

from copy import deepcopy
from typing import Any

from loguru import logger
from pygame.math import Vector3

from ..config import DEFAULT_CONFIG
from ..entities import PlayerAgent, ZombieAgent
from ..entities_constants import GROUND_LAYER, OBSTACLE_LAYER
from ..interfaces import Animator
from ..models import (
    PlayerTuning,
    SimClock,
    SimulationData,
    WorldTuning,
    ZombieTuning,
)
from ..rng import DeterministicRNG
from .combat import CombatResolver
from .knockback import KnockbackIntegrator
from .perception import PerceptionService
from .registry import AgentRegistry
from .signaling import SignalingProtocol
from .state_machine import AgentStateMachine
from .tick import TickDriver
from .world import HeadlessWorld


def initialize_simulation(
    config: dict[str, Any] | None = None,
    *,
    world: HeadlessWorld | None = None,
    bounds: float | None = None,
) -> SimulationData:
    """Wire the core services together over a headless world."""
    config = deepcopy(DEFAULT_CONFIG) if config is None else config
    world_tuning = WorldTuning.from_config(config)
    zombie_tuning = ZombieTuning.from_config(
        config, ground_mask=GROUND_LAYER | OBSTACLE_LAYER
    )
    player_tuning = PlayerTuning.from_config(config)

    if world is None:
        world = HeadlessWorld(
            ground_height=world_tuning.ground_height,
            cell_size=world_tuning.spatial_cell_size,
            bounds=bounds,
        )
    clock = SimClock()
    registry = AgentRegistry()
    perception = PerceptionService(world)
    knockback = KnockbackIntegrator(max_fall_time=world_tuning.max_fall_time)
    signaling = SignalingProtocol(registry, world)
    combat = CombatResolver(
        registry=registry,
        clock=clock,
        signaling=signaling,
        knockback=knockback,
        collision=world,
        lifecycle=world,
    )
    state_machine = AgentStateMachine(
        registry=registry, perception=perception, combat=combat
    )
    driver = TickDriver(
        registry=registry,
        state_machine=state_machine,
        knockback=knockback,
        clock=clock,
        engine_step=world.step,
    )
    return SimulationData(
        config=config,
        clock=clock,
        registry=registry,
        world=world,
        perception=perception,
        knockback=knockback,
        signaling=signaling,
        combat=combat,
        state_machine=state_machine,
        driver=driver,
        zombie_tuning=zombie_tuning,
        player_tuning=player_tuning,
        world_tuning=world_tuning,
    )


def spawn_zombie(
    sim: SimulationData,
    position: Vector3,
    *,
    animator: Animator | None = None,
    rng: DeterministicRNG | None = None,
) -> ZombieAgent:
    navigation = sim.world.create_navigation(position)
    zombie = ZombieAgent(
        navigation.position(),
        navigation=navigation,
        collision=sim.world,
        tuning=sim.zombie_tuning,
        combat=sim.combat,
        animator=animator,
        rng=rng,
    )
    sim.registry.register(zombie)
    sim.world.attach(zombie, navigation=navigation)
    zombie.choose_wander_destination()
    logger.debug(f"Spawned {zombie!r} at {tuple(zombie.position)}")
    return zombie


def spawn_player(
    sim: SimulationData,
    position: Vector3,
    *,
    animator: Animator | None = None,
) -> PlayerAgent:
    if sim.player is not None:
        logger.warning(f"Replacing {sim.player!r}; only one player is tracked")
        sim.world.destroy(sim.player.handle)
        sim.registry.remove(sim.player.handle)
    player = PlayerAgent(
        motor=sim.world.create_motor(position),
        knockback=sim.knockback,
        tuning=sim.player_tuning,
        combat=sim.combat,
        animator=animator,
    )
    sim.registry.register(player)
    sim.world.attach(player)
    sim.player = player
    return player


__all__ = ["initialize_simulation", "spawn_player", "spawn_zombie"]
