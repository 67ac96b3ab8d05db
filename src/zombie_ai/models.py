"""Dataclasses that model simulation state and tuning."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType, Optional, TYPE_CHECKING

from pygame.math import Vector3

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from .entities import PlayerAgent
    from .gameplay.combat import CombatResolver
    from .gameplay.knockback import KnockbackIntegrator
    from .gameplay.perception import PerceptionService
    from .gameplay.registry import AgentRegistry
    from .gameplay.signaling import SignalingProtocol
    from .gameplay.state_machine import AgentStateMachine
    from .gameplay.tick import TickDriver
    from .gameplay.world import HeadlessWorld


AgentHandle = NewType("AgentHandle", int)

UP = Vector3(0.0, 1.0, 0.0)


class KnockbackPhase(Enum):
    IMPULSE = "impulse"
    FALLING = "falling"


class VerticalMode(Enum):
    """How the initial vertical knockback velocity is derived."""

    # Always launch with the configured vertical force.
    FIXED = "fixed"
    # Scale the vertical force by the y component of the push direction.
    SCALED = "scaled"


@dataclass
class KnockbackState:
    """One in-flight knockback process, owned by the agent it moves."""

    horizontal_velocity: Vector3
    vertical_velocity: float
    impulse_duration: float
    gravity: float
    phase: KnockbackPhase = KnockbackPhase.IMPULSE
    elapsed: float = 0.0
    falling_elapsed: float = 0.0


@dataclass(frozen=True)
class KnockbackParams:
    horizontal_force: float
    vertical_force: float
    gravity: float
    impulse_duration: float
    vertical_mode: VerticalMode = VerticalMode.FIXED

    @classmethod
    def from_config(
        cls, section: dict[str, Any], *, vertical_mode: VerticalMode
    ) -> "KnockbackParams":
        return cls(
            horizontal_force=float(section["horizontal_force"]),
            vertical_force=float(section["vertical_force"]),
            gravity=float(section["gravity"]),
            impulse_duration=float(section["duration_s"]),
            vertical_mode=vertical_mode,
        )


@dataclass(frozen=True)
class RaycastHit:
    """Nearest collider struck by a ray; ``handle`` is None for static geometry."""

    handle: Optional[AgentHandle]
    point: Vector3
    distance: float


@dataclass(frozen=True)
class ZombieTuning:
    health: float
    wander_radius: float
    wander_pause: float
    awareness_radius: float
    melee_range: float
    eye_height: float
    wander_speed: float
    chase_speed: float
    attack_cooldown: float
    attack_vertical_bias: float
    ground_check_distance: float
    ground_mask: int
    death_effect: str | None
    knockback: KnockbackParams

    @classmethod
    def from_config(cls, config: dict[str, Any], *, ground_mask: int) -> "ZombieTuning":
        section = config["zombie"]
        return cls(
            health=float(section["health"]),
            wander_radius=float(section["wander_radius"]),
            wander_pause=float(section["wander_pause_s"]),
            awareness_radius=float(section["awareness_radius"]),
            melee_range=float(section["melee_range"]),
            eye_height=float(section["eye_height"]),
            wander_speed=float(section["wander_speed"]),
            chase_speed=float(section["chase_speed"]),
            attack_cooldown=float(section["attack_cooldown_s"]),
            attack_vertical_bias=float(section["attack_vertical_bias"]),
            ground_check_distance=float(section["ground_check_distance"]),
            ground_mask=ground_mask,
            death_effect=section.get("death_effect") or None,
            knockback=KnockbackParams.from_config(
                section["knockback"], vertical_mode=VerticalMode.FIXED
            ),
        )


@dataclass(frozen=True)
class PlayerTuning:
    speed: float
    jump_speed: float
    gravity: float
    eye_height: float
    punch_range: float
    punch_damage: float
    punch_cooldown: float
    knockback: KnockbackParams

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "PlayerTuning":
        section = config["player"]
        return cls(
            speed=float(section["speed"]),
            jump_speed=float(section["jump_speed"]),
            gravity=float(section["gravity"]),
            eye_height=float(section["eye_height"]),
            punch_range=float(section["punch_range"]),
            punch_damage=float(section["punch_damage"]),
            punch_cooldown=float(section["punch_cooldown_s"]),
            knockback=KnockbackParams.from_config(
                section["knockback"], vertical_mode=VerticalMode.SCALED
            ),
        )


@dataclass(frozen=True)
class WorldTuning:
    ground_height: float
    spatial_cell_size: float
    max_fall_time: float

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "WorldTuning":
        section = config["world"]
        return cls(
            ground_height=float(section["ground_height"]),
            spatial_cell_size=float(section["spatial_cell_size"]),
            max_fall_time=float(section["max_fall_s"]),
        )


@dataclass
class SimClock:
    """Simulation time in seconds, advanced once per frame."""

    elapsed: float = 0.0
    frame: int = 0

    @property
    def now(self) -> float:
        return self.elapsed

    def advance(self, dt: float) -> None:
        self.elapsed += max(0.0, dt)
        self.frame += 1


@dataclass
class SimulationData:
    """Aggregated handles for the core simulation services."""

    config: dict
    clock: SimClock
    registry: AgentRegistry
    world: HeadlessWorld
    perception: PerceptionService
    knockback: KnockbackIntegrator
    signaling: SignalingProtocol
    combat: CombatResolver
    state_machine: AgentStateMachine
    driver: TickDriver
    zombie_tuning: ZombieTuning
    player_tuning: PlayerTuning
    world_tuning: WorldTuning
    player: Optional[PlayerAgent] = None


__all__ = [
    "AgentHandle",
    "UP",
    "KnockbackPhase",
    "VerticalMode",
    "KnockbackState",
    "KnockbackParams",
    "RaycastHit",
    "ZombieTuning",
    "PlayerTuning",
    "WorldTuning",
    "SimClock",
    "SimulationData",
]
