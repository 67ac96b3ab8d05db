from __future__ import annotations

from enum import Enum
from typing import Optional, Self, TYPE_CHECKING

from loguru import logger
from pygame.math import Vector3

from ..entities_constants import ZOMBIE_WALKING_SPEED_THRESHOLD
from ..models import UP, AgentHandle, KnockbackState, ZombieTuning
from ..rng import DeterministicRNG, get_rng
from .zombie_vitals import ZombieVitals

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from ..gameplay.combat import CombatResolver
    from ..interfaces import Animator, CollisionQuery, Navigation


class ZombieState(Enum):
    WANDER = "wander"
    CHASE = "chase"


class ZombieAgent:
    """A hostile agent driven by navigation and the Wander/Chase controller.

    ``position`` mirrors the navigation collaborator while position sync is
    enabled; during a knockback the integrator moves it directly and the
    navigation agent is warped back when the agent lands.
    """

    def __init__(
        self: Self,
        position: Vector3,
        *,
        navigation: Navigation,
        collision: CollisionQuery,
        tuning: ZombieTuning,
        combat: CombatResolver | None = None,
        animator: Animator | None = None,
        rng: DeterministicRNG | None = None,
    ) -> None:
        self.handle: Optional[AgentHandle] = None
        self.position = Vector3(position)
        self.navigation = navigation
        self.collision = collision
        self.tuning = tuning
        self.combat = combat
        self.animator = animator
        self.rng = rng or get_rng()
        self.vitals = ZombieVitals(max_health=tuning.health)
        self.state = ZombieState.WANDER
        self.current_target: Optional[AgentHandle] = None
        self.signaling_source: Optional[AgentHandle] = None
        self.has_signaled = False
        self.has_retargeted = False
        self.last_attack_time: float | None = None
        self.knockback: KnockbackState | None = None
        self.wander_pause_remaining: float | None = None
        self.navigation.set_speed(tuning.wander_speed)

    def __repr__(self: Self) -> str:
        return (
            f"ZombieAgent(handle={self.handle}, state={self.state.value}, "
            f"health={self.health:.1f})"
        )

    @property
    def health(self: Self) -> float:
        return self.vitals.health

    @health.setter
    def health(self: Self, value: float) -> None:
        self.vitals.health = float(value)

    @property
    def alive(self: Self) -> bool:
        return not self.vitals.dead

    def eye_position(self: Self) -> Vector3:
        return self.position + UP * self.tuning.eye_height

    # --- state transitions ---

    def switch_to_chase(self: Self, target: AgentHandle) -> None:
        """Enter Chase on *target*; never broadcasts on its own."""
        self.state = ZombieState.CHASE
        self.current_target = target
        self.has_retargeted = False
        self.wander_pause_remaining = None
        self.navigation.set_stopped(False)
        self.navigation.set_speed(self.tuning.chase_speed)

    def switch_to_wander(self: Self) -> None:
        """Enter Wander with a full reset of the chase bookkeeping."""
        self.state = ZombieState.WANDER
        self.current_target = None
        self.has_retargeted = False
        self.has_signaled = False
        self.signaling_source = None
        self.wander_pause_remaining = None
        self.navigation.set_stopped(False)
        self.navigation.set_speed(self.tuning.wander_speed)
        self.choose_wander_destination()

    def choose_wander_destination(self: Self) -> bool:
        offset = self.rng.inside_unit_sphere() * self.tuning.wander_radius
        offset.y = 0.0
        sampled = self.navigation.sample_position(
            self.position + offset, self.tuning.wander_radius
        )
        if sampled is None:
            logger.debug(f"{self!r}: no navigable point near wander offset {offset}")
            return False
        self.navigation.set_destination(sampled)
        return True

    def path_complete(self: Self) -> bool:
        nav = self.navigation
        return (
            not nav.is_path_pending()
            and nav.remaining_distance() <= nav.stopping_distance()
        )

    # --- Damageable ---

    def take_damage(self: Self, amount: float, attacker: AgentHandle) -> None:
        if self.combat is None:
            logger.warning(f"{self!r} has no combat resolver; damage ignored")
            return
        self.combat.take_damage(self, amount, attacker)

    # --- knockback body ---

    def knockback_started(self: Self) -> None:
        self.navigation.set_position_sync_enabled(False)

    def knockback_displace(self: Self, delta: Vector3) -> None:
        self.position += delta

    def knockback_grounded(self: Self) -> bool:
        return self.collision.grounded_check(
            self.position,
            self.tuning.ground_check_distance,
            self.tuning.ground_mask,
        )

    def knockback_finished(self: Self) -> None:
        self.navigation.warp(self.position)
        self.navigation.set_position_sync_enabled(True)

    # --- animation ---

    def update_animations(self: Self, target_position: Vector3 | None) -> None:
        if self.animator is None:
            return
        nav = self.navigation
        is_walking = (
            not nav.is_stopped()
            and nav.velocity().length() > ZOMBIE_WALKING_SPEED_THRESHOLD
        )
        is_attacking = (
            target_position is not None
            and self.position.distance_to(target_position) <= self.tuning.melee_range
        )
        self.animator.set_flag("IsWalking", is_walking)
        self.animator.set_flag("IsAttacking", is_attacking)
