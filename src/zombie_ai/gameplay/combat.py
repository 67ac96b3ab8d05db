"""CombatResolver -- melee attacks, damage, retargeting and death.

Zombie attacks are gated by a per-zombie cooldown and land as a knockback on
the target when the target can receive one.  Damage taken by a zombie always
knocks it back, may kill it, and otherwise alerts the pack and points the
zombie at its attacker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger
from pygame.math import Vector3

from ..entities import ZombieAgent, ZombieState
from ..interfaces import Damageable, KnockbackReceiver
from ..models import AgentHandle, SimClock
from .knockback import KnockbackIntegrator, horizontal_unit

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from ..entities import PlayerAgent
    from ..interfaces import CollisionQuery, Lifecycle
    from .registry import AgentRegistry
    from .signaling import SignalingProtocol


class CombatResolver:
    def __init__(
        self,
        *,
        registry: AgentRegistry,
        clock: SimClock,
        signaling: SignalingProtocol,
        knockback: KnockbackIntegrator,
        collision: CollisionQuery | None = None,
        lifecycle: Lifecycle | None = None,
    ) -> None:
        self.registry = registry
        self.clock = clock
        self.signaling = signaling
        self.knockback = knockback
        self.collision = collision
        self.lifecycle = lifecycle

    # --- zombie attacks ---

    def attack_ready(self, zombie: ZombieAgent) -> bool:
        if zombie.last_attack_time is None:
            return True
        return self.clock.now - zombie.last_attack_time >= zombie.tuning.attack_cooldown

    def attack(self, zombie: ZombieAgent) -> bool:
        """Strike the current target; returns True if the attack landed."""
        if not self.attack_ready(zombie):
            return False
        target = self.registry.get(zombie.current_target)
        if target is None:
            return False

        zombie.last_attack_time = self.clock.now
        logger.debug(f"Zombie {zombie.handle} attacks {target!r}")

        offset = target.position - zombie.position
        direction = offset.normalize() if offset.length_squared() > 0 else Vector3()
        direction.y += zombie.tuning.attack_vertical_bias
        if direction.length_squared() > 0:
            direction.normalize_ip()

        if isinstance(target, KnockbackReceiver):
            target.apply_knockback(direction)
        else:
            logger.warning(
                f"{target!r} cannot receive knockback; attack from zombie "
                f"{zombie.handle} has no physical effect"
            )
        return True

    # --- zombie damage ---

    def take_damage(
        self, zombie: ZombieAgent, amount: float, attacker: AgentHandle
    ) -> None:
        if not zombie.alive:
            return
        zombie.vitals.take_damage(amount, source=attacker)

        attacker_agent = self.registry.get(attacker)
        if attacker_agent is not None:
            direction = horizontal_unit(zombie.position - attacker_agent.position)
            self.knockback.begin(zombie, direction, zombie.tuning.knockback)
        else:
            logger.warning(
                f"Attacker {attacker} of zombie {zombie.handle} does not resolve; "
                "skipping knockback"
            )

        if zombie.vitals.depleted:
            self.die(zombie)
            return

        source = self.registry.resolve_signaling_source(zombie)
        if not zombie.has_signaled and source is None:
            self.signaling.broadcast(zombie, attacker, zombie.tuning.awareness_radius)
            zombie.has_signaled = True

        if (
            zombie.state is ZombieState.CHASE
            and zombie.current_target != attacker
            and not zombie.has_retargeted
        ):
            zombie.current_target = attacker
            zombie.has_retargeted = True
        elif zombie.state is ZombieState.WANDER:
            zombie.switch_to_chase(attacker)

    def die(self, zombie: ZombieAgent) -> None:
        if not zombie.vitals.mark_dead():
            return
        logger.info(
            f"Zombie {zombie.handle} died at {tuple(zombie.position)}, "
            f"last hit by {zombie.vitals.last_damage_source}"
        )
        self.knockback.cancel(zombie)
        if zombie.handle is not None:
            self.registry.remove(zombie.handle)
        if self.lifecycle is None:
            logger.warning(f"No lifecycle collaborator; zombie {zombie.handle} not destroyed")
            return
        if zombie.tuning.death_effect:
            self.lifecycle.spawn_effect(zombie.tuning.death_effect, Vector3(zombie.position))
        if zombie.handle is not None:
            self.lifecycle.destroy(zombie.handle)

    # --- player attacks ---

    def punch(self, player: PlayerAgent) -> AgentHandle | None:
        """Raycast along the player's aim; damage the first Damageable struck."""
        if self.collision is None or player.handle is None:
            logger.warning("Punch skipped: no collision query or unregistered player")
            return None
        hit = self.collision.raycast(
            player.eye_position(),
            player.aim_direction(),
            player.tuning.punch_range,
            ignore=player.handle,
        )
        if hit is None:
            logger.debug("Player hit nothing.")
            return None
        victim = self.registry.get(hit.handle)
        if victim is None or victim is player:
            logger.debug(f"Player hit static geometry at {tuple(hit.point)}")
            return None
        if not isinstance(victim, Damageable):
            logger.debug(f"Player hit {victim!r}, which cannot take damage")
            return None
        logger.debug(f"Player hit {victim!r}")
        victim.take_damage(player.tuning.punch_damage, player.handle)
        return hit.handle
