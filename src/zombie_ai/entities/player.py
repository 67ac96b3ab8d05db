"""Player entity logic."""

from __future__ import annotations

import math
from typing import Optional, Self, TYPE_CHECKING

from pygame.math import Vector3

from ..entities_constants import (
    PLAYER_GROUNDED_FALL_SPEED,
    PLAYER_PITCH_LIMIT_DEG,
    PLAYER_WALKING_INPUT_THRESHOLD,
)
from ..models import UP, AgentHandle, KnockbackState, PlayerTuning

if TYPE_CHECKING:
    from ..gameplay.combat import CombatResolver
    from ..gameplay.knockback import KnockbackIntegrator
    from ..interfaces import Animator, CharacterMotor


class PlayerAgent:
    def __init__(
        self: Self,
        *,
        motor: CharacterMotor,
        knockback: KnockbackIntegrator,
        tuning: PlayerTuning,
        combat: CombatResolver | None = None,
        animator: Animator | None = None,
    ) -> None:
        self.handle: Optional[AgentHandle] = None
        self.motor = motor
        self.integrator = knockback
        self.tuning = tuning
        self.combat = combat
        self.animator = animator
        self.yaw = 0.0
        self.pitch = 0.0
        self.velocity = Vector3()
        self.move_input = (0.0, 0.0)
        self.jump_requested = False
        self.knockback: KnockbackState | None = None
        self.is_attacking = False
        self.attack_lockout_remaining = 0.0

    def __repr__(self: Self) -> str:
        return f"PlayerAgent(handle={self.handle})"

    @property
    def position(self: Self) -> Vector3:
        return self.motor.position()

    def eye_position(self: Self) -> Vector3:
        return self.position + UP * self.tuning.eye_height

    # --- orientation ---

    def turn(self: Self, yaw_delta: float, pitch_delta: float = 0.0) -> None:
        self.yaw = (self.yaw + yaw_delta) % 360.0
        self.pitch = max(
            -PLAYER_PITCH_LIMIT_DEG,
            min(PLAYER_PITCH_LIMIT_DEG, self.pitch + pitch_delta),
        )

    def forward(self: Self) -> Vector3:
        yaw = math.radians(self.yaw)
        return Vector3(math.sin(yaw), 0.0, math.cos(yaw))

    def right(self: Self) -> Vector3:
        yaw = math.radians(self.yaw)
        return Vector3(math.cos(yaw), 0.0, -math.sin(yaw))

    def aim_direction(self: Self) -> Vector3:
        """Camera forward; positive pitch looks down."""
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        return Vector3(
            math.sin(yaw) * math.cos(pitch),
            -math.sin(pitch),
            math.cos(yaw) * math.cos(pitch),
        )

    # --- input ---

    def set_move_input(self: Self, strafe: float, forward: float) -> None:
        self.move_input = (float(strafe), float(forward))

    def request_jump(self: Self) -> None:
        self.jump_requested = True

    def request_punch(self: Self) -> bool:
        """Start a punch unless one is still winding down."""
        if self.is_attacking:
            return False
        self.is_attacking = True
        self.attack_lockout_remaining = self.tuning.punch_cooldown
        if self.combat is not None:
            self.combat.punch(self)
        return True

    # --- KnockbackReceiver ---

    def apply_knockback(self: Self, direction: Vector3) -> None:
        self.integrator.begin(self, direction, self.tuning.knockback)

    # --- per-frame update ---

    def update(self: Self, dt: float) -> None:
        if self.is_attacking:
            self.attack_lockout_remaining -= dt
            if self.attack_lockout_remaining <= 0:
                self.is_attacking = False
                self.attack_lockout_remaining = 0.0
        # Knockback owns the position delta; normal movement waits for landing.
        if self.knockback is not None:
            self.integrator.step(self, dt)
        else:
            self.handle_movement(dt)
        self.update_animations()

    def handle_movement(self: Self, dt: float) -> None:
        strafe, forward = self.move_input
        move = (self.forward() * forward + self.right() * strafe) * self.tuning.speed
        self.velocity.x = move.x
        self.velocity.z = move.z

        if self.motor.is_grounded():
            if self.jump_requested:
                self.velocity.y = self.tuning.jump_speed
            else:
                self.velocity.y = PLAYER_GROUNDED_FALL_SPEED

        self.velocity.y -= self.tuning.gravity * dt
        self.motor.move(self.velocity * dt)
        self.jump_requested = False

    def update_animations(self: Self) -> None:
        if self.animator is None:
            return
        is_walking = math.hypot(*self.move_input) > PLAYER_WALKING_INPUT_THRESHOLD
        self.animator.set_flag("IsWalking", is_walking)
        self.animator.set_flag("IsAttacking", self.is_attacking)

    # --- knockback body ---

    def knockback_started(self: Self) -> None:
        pass

    def knockback_displace(self: Self, delta: Vector3) -> None:
        self.motor.move(delta)

    def knockback_grounded(self: Self) -> bool:
        return self.motor.is_grounded()

    def knockback_finished(self: Self) -> None:
        pass
