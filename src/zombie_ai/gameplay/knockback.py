"""Two-phase ballistic knockback shared by zombies and the player.

A knockback is an explicit per-agent sub-state (``agent.knockback``) that the
tick driver advances every frame:

  1. IMPULSE -- for ``impulse_duration`` seconds the vertical velocity decays
     by gravity and the agent is displaced by the horizontal and vertical
     velocities each tick.
  2. FALLING -- the same integration continues until the agent's grounded
     check succeeds, then the body is told to resume normal movement.

While ``agent.knockback`` is set it is the only source of position change
for that agent.  Starting a new knockback on an agent that is already being
knocked back replaces the in-flight process (latest wins).
"""

from __future__ import annotations

from typing import Optional, Protocol

from loguru import logger
from pygame.math import Vector3

from ..entities_constants import KNOCKBACK_MAX_FALL_S
from ..models import UP, KnockbackParams, KnockbackPhase, KnockbackState, VerticalMode


class KnockbackBody(Protocol):
    knockback: Optional[KnockbackState]

    def knockback_started(self) -> None: ...

    def knockback_displace(self, delta: Vector3) -> None: ...

    def knockback_grounded(self) -> bool: ...

    def knockback_finished(self) -> None: ...


def horizontal_unit(direction: Vector3) -> Vector3:
    flat = Vector3(direction.x, 0.0, direction.z)
    if flat.length_squared() == 0:
        return flat
    return flat.normalize()


class KnockbackIntegrator:
    def __init__(self, *, max_fall_time: float = KNOCKBACK_MAX_FALL_S) -> None:
        self.max_fall_time = max_fall_time

    def begin(
        self,
        body: KnockbackBody,
        direction: Vector3,
        params: KnockbackParams,
    ) -> KnockbackState:
        horizontal = horizontal_unit(direction) * params.horizontal_force
        if params.vertical_mode is VerticalMode.SCALED:
            vertical = direction.y * params.vertical_force
        else:
            vertical = params.vertical_force
        state = KnockbackState(
            horizontal_velocity=horizontal,
            vertical_velocity=vertical,
            impulse_duration=params.impulse_duration,
            gravity=params.gravity,
        )
        if body.knockback is None:
            body.knockback_started()
        else:
            logger.debug(f"{body!r}: knockback replaced while in flight")
        body.knockback = state
        return state

    def step(self, body: KnockbackBody, dt: float) -> bool:
        """Advance *body*'s knockback by one tick; False once it has landed."""
        state = body.knockback
        if state is None:
            return False

        if state.phase is KnockbackPhase.IMPULSE:
            self._integrate(body, state, dt)
            state.elapsed += dt
            if state.elapsed >= state.impulse_duration:
                state.phase = KnockbackPhase.FALLING
            return True

        if body.knockback_grounded():
            self._finish(body)
            return False
        if state.falling_elapsed >= self.max_fall_time:
            logger.warning(
                f"{body!r}: no ground after {state.falling_elapsed:.1f}s of "
                "knockback fall; forcing landing"
            )
            self._finish(body)
            return False
        self._integrate(body, state, dt)
        state.elapsed += dt
        state.falling_elapsed += dt
        return True

    def cancel(self, body: KnockbackBody) -> None:
        """Drop the process without the landing callback (agent is going away)."""
        body.knockback = None

    @staticmethod
    def _integrate(body: KnockbackBody, state: KnockbackState, dt: float) -> None:
        state.vertical_velocity -= state.gravity * dt
        delta = state.horizontal_velocity * dt + UP * (state.vertical_velocity * dt)
        body.knockback_displace(delta)

    @staticmethod
    def _finish(body: KnockbackBody) -> None:
        body.knockback = None
        body.knockback_finished()
