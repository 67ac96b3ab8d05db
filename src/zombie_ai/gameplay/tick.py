from __future__ import annotations

from typing import Callable, TYPE_CHECKING

from pygame.math import Vector3

from ..models import SimClock

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from ..entities import ZombieAgent
    from .knockback import KnockbackIntegrator
    from .registry import AgentRegistry
    from .state_machine import AgentStateMachine


class TickDriver:
    """Advances every live agent once per frame with a variable ``dt``.

    Per frame: the clock moves, engine-owned collaborators step (navigation),
    then each zombie mirrors its navigation position, runs its controller and
    advances any knockback in flight, and finally the player updates.
    """

    def __init__(
        self,
        *,
        registry: AgentRegistry,
        state_machine: AgentStateMachine,
        knockback: KnockbackIntegrator,
        clock: SimClock,
        engine_step: Callable[[float], None] | None = None,
    ) -> None:
        self.registry = registry
        self.state_machine = state_machine
        self.knockback = knockback
        self.clock = clock
        self.engine_step = engine_step

    def tick(self, dt: float) -> None:
        dt = max(0.0, float(dt))
        self.clock.advance(dt)
        if self.engine_step is not None:
            self.engine_step(dt)

        for handle in self.registry.zombie_handles():
            # Earlier zombies in this frame may have killed or signaled this one.
            zombie = self.registry.get_zombie(handle)
            if zombie is None or not zombie.alive:
                continue
            self._update_zombie(zombie, dt)

        player = self.registry.player
        if player is not None:
            player.update(dt)

    def run(self, frames: int, dt: float) -> None:
        for _ in range(max(0, frames)):
            self.tick(dt)

    def _update_zombie(self, zombie: ZombieAgent, dt: float) -> None:
        if zombie.knockback is None:
            zombie.position = Vector3(zombie.navigation.position())
        self.state_machine.update(zombie, dt)
        if zombie.alive and zombie.knockback is not None:
            self.knockback.step(zombie, dt)
