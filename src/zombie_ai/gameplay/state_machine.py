"""AgentStateMachine -- the per-zombie Wander/Chase controller.

Wander:
  Detecting the player switches to Chase without alerting the pack (the
  zombie found the target itself).  Otherwise, when the current path is
  complete, the zombie pauses for ``wander_pause`` seconds and then walks to
  a new random point within ``wander_radius``.

Chase:
  The destination is re-issued every tick.  How the chase ends depends on
  where it came from:
    - self-detected: lost line of sight or the target left the awareness
      radius (measured from the eye point);
    - signaled: only when the signaling source is back in Wander.  A
      source that no longer resolves is dropped, and the zombie then judges
      sight and range like a self-detected chaser.
  A target that no longer resolves always ends the chase.  Within melee
  range the zombie attacks through the CombatResolver.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from pygame.math import Vector3

from ..entities import ZombieAgent, ZombieState
from ..models import AgentHandle

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from .combat import CombatResolver
    from .perception import PerceptionService
    from .registry import AgentRegistry


class AgentStateMachine:
    def __init__(
        self,
        *,
        registry: AgentRegistry,
        perception: PerceptionService,
        combat: CombatResolver,
        player_handle: Optional[AgentHandle] = None,
    ) -> None:
        self.registry = registry
        self.perception = perception
        self.combat = combat
        self._player_handle = player_handle

    @property
    def player_handle(self) -> Optional[AgentHandle]:
        if self._player_handle is not None:
            return self._player_handle
        return self.registry.player_handle

    def update(self, zombie: ZombieAgent, dt: float) -> None:
        if not zombie.alive:
            return
        if zombie.state is ZombieState.WANDER:
            self._wander_tick(zombie, dt)
        else:
            self._chase_tick(zombie)
        target = self.registry.get(zombie.current_target)
        zombie.update_animations(target.position if target is not None else None)

    def _wander_tick(self, zombie: ZombieAgent, dt: float) -> None:
        player = self.registry.get(self.player_handle)
        if player is not None and self.perception.detect(
            zombie,
            player,
            zombie.tuning.awareness_radius,
            zombie.tuning.eye_height,
        ):
            zombie.switch_to_chase(player.handle)
            return

        if zombie.wander_pause_remaining is not None:
            zombie.wander_pause_remaining -= dt
            if zombie.wander_pause_remaining <= 0:
                zombie.wander_pause_remaining = None
                zombie.navigation.set_stopped(False)
                zombie.choose_wander_destination()
            return

        if zombie.path_complete():
            zombie.navigation.set_stopped(True)
            zombie.wander_pause_remaining = zombie.tuning.wander_pause

    def _chase_tick(self, zombie: ZombieAgent) -> None:
        target = self.registry.get(zombie.current_target)
        if target is None:
            zombie.switch_to_wander()
            return

        zombie.navigation.set_destination(Vector3(target.position))

        source = self.registry.resolve_signaling_source(zombie)
        if source is None:
            if self._lost_target(zombie, target):
                zombie.switch_to_wander()
                return
        elif source.state is ZombieState.WANDER:
            zombie.switch_to_wander()
            return

        if zombie.position.distance_to(target.position) <= zombie.tuning.melee_range:
            self.combat.attack(zombie)

    def _lost_target(self, zombie: ZombieAgent, target) -> bool:
        tuning = zombie.tuning
        if not self.perception.has_line_of_sight(
            zombie, target, tuning.awareness_radius, tuning.eye_height
        ):
            return True
        return zombie.eye_position().distance_to(target.position) > tuning.awareness_radius
