from __future__ import annotations

from ..models import AgentHandle


class ZombieVitals:
    """Health bookkeeping; damage lands before the death test runs."""

    def __init__(self, *, max_health: float) -> None:
        self.max_health = max(0.0, float(max_health))
        self.health = self.max_health
        self.dead = False
        self.last_damage_source: AgentHandle | None = None

    @property
    def depleted(self) -> bool:
        return self.health <= 0

    def take_damage(
        self,
        amount: float,
        *,
        source: AgentHandle | None = None,
    ) -> None:
        # Health may go negative here; callers test ``depleted`` afterwards.
        if self.dead:
            return
        self.last_damage_source = source
        self.health -= float(amount)

    def mark_dead(self) -> bool:
        """Flag the death; returns False if it was already recorded."""
        if self.dead:
            return False
        self.dead = True
        return True
