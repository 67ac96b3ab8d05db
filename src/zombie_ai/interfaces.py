"""Engine-side collaborators consumed by the simulation core.

The core never reaches into an engine directly: navigation, collision
queries, animation and object lifecycle are all reached through the narrow
protocols below.  ``Damageable`` and ``KnockbackReceiver`` are capability
checks on agents, tested with ``isinstance`` instead of name-based dispatch.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, runtime_checkable

from pygame.math import Vector3

from .models import AgentHandle, RaycastHit


class Navigation(Protocol):
    def position(self) -> Vector3: ...

    def set_destination(self, position: Vector3) -> None: ...

    def set_speed(self, speed: float) -> None: ...

    def is_path_pending(self) -> bool: ...

    def remaining_distance(self) -> float: ...

    def stopping_distance(self) -> float: ...

    def set_stopped(self, stopped: bool) -> None: ...

    def is_stopped(self) -> bool: ...

    def velocity(self) -> Vector3: ...

    def warp(self, position: Vector3) -> None: ...

    def set_position_sync_enabled(self, enabled: bool) -> None: ...

    def sample_position(
        self, point: Vector3, max_distance: float
    ) -> Optional[Vector3]: ...


class CollisionQuery(Protocol):
    def raycast(
        self,
        origin: Vector3,
        direction: Vector3,
        max_distance: float,
        ignore: Optional[AgentHandle] = None,
    ) -> Optional[RaycastHit]: ...

    def overlap_sphere(
        self, center: Vector3, radius: float
    ) -> Iterable[AgentHandle]: ...

    def grounded_check(
        self, origin: Vector3, max_distance: float, ground_mask: int
    ) -> bool: ...


class Animator(Protocol):
    def set_flag(self, name: str, value: bool) -> None: ...


class Lifecycle(Protocol):
    def spawn_effect(self, kind: str, position: Vector3) -> None: ...

    def destroy(self, handle: AgentHandle) -> None: ...


class CharacterMotor(Protocol):
    """Collision-aware mover for the player body."""

    def position(self) -> Vector3: ...

    def move(self, delta: Vector3) -> None: ...

    def is_grounded(self) -> bool: ...


class Targetable(Protocol):
    handle: Optional[AgentHandle]

    @property
    def position(self) -> Vector3: ...


@runtime_checkable
class Damageable(Protocol):
    def take_damage(self, amount: float, attacker: AgentHandle) -> None: ...


@runtime_checkable
class KnockbackReceiver(Protocol):
    def apply_knockback(self, direction: Vector3) -> None: ...


__all__ = [
    "Navigation",
    "CollisionQuery",
    "Animator",
    "Lifecycle",
    "CharacterMotor",
    "Targetable",
    "Damageable",
    "KnockbackReceiver",
]
