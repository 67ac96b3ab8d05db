"""Pack alerts: one zombie converts nearby idle zombies into chasers.

A broadcast is single-hop.  Receivers chase the shared target but never
broadcast themselves, and they credit the sender as their signaling source
so that they drop the chase when the sender does.

The broadcast is split into a pure planning step over a snapshot of the
candidates and an apply step, so eligibility is always judged against the
state at the start of the call regardless of candidate order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, TYPE_CHECKING

from loguru import logger

from ..entities import ZombieAgent, ZombieState
from ..models import AgentHandle

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from ..interfaces import CollisionQuery
    from .registry import AgentRegistry


@dataclass(frozen=True)
class ZombieSnapshot:
    handle: AgentHandle
    state: ZombieState
    has_signaled: bool
    signaling_source: AgentHandle | None

    @classmethod
    def of(cls, zombie: ZombieAgent) -> "ZombieSnapshot":
        assert zombie.handle is not None
        return cls(
            handle=zombie.handle,
            state=zombie.state,
            has_signaled=zombie.has_signaled,
            signaling_source=zombie.signaling_source,
        )

    @property
    def eligible(self) -> bool:
        return (
            self.state is ZombieState.WANDER
            and not self.has_signaled
            and self.signaling_source is None
        )


@dataclass(frozen=True)
class SignalPatch:
    """Chase order for one receiver."""

    handle: AgentHandle
    target: AgentHandle
    signaling_source: AgentHandle


def plan_broadcast(
    source: AgentHandle,
    target: AgentHandle,
    candidates: Iterable[ZombieSnapshot],
) -> list[SignalPatch]:
    patches: list[SignalPatch] = []
    seen: set[AgentHandle] = set()
    for snapshot in candidates:
        if snapshot.handle == source or snapshot.handle in seen:
            continue
        seen.add(snapshot.handle)
        if snapshot.eligible:
            patches.append(
                SignalPatch(
                    handle=snapshot.handle,
                    target=target,
                    signaling_source=source,
                )
            )
        else:
            logger.debug(
                f"Zombie {snapshot.handle} not signaled (state={snapshot.state.value}, "
                f"has_signaled={snapshot.has_signaled}, "
                f"signaling_source={snapshot.signaling_source})"
            )
    return patches


class SignalingProtocol:
    def __init__(self, registry: AgentRegistry, collision: CollisionQuery) -> None:
        self.registry = registry
        self.collision = collision

    def snapshot_nearby(
        self, source: ZombieAgent, radius: float
    ) -> list[ZombieSnapshot]:
        snapshots: list[ZombieSnapshot] = []
        for handle in self.collision.overlap_sphere(source.position, radius):
            other = self.registry.get_zombie(handle)
            if other is None or not other.alive:
                if handle != self.registry.player_handle:
                    logger.debug(f"Overlap hit {handle} is not a live zombie; skipped")
                continue
            self.registry.resolve_signaling_source(other)
            snapshots.append(ZombieSnapshot.of(other))
        return snapshots

    def apply(self, patches: Iterable[SignalPatch]) -> list[AgentHandle]:
        signaled: list[AgentHandle] = []
        for patch in patches:
            other = self.registry.get_zombie(patch.handle)
            if other is None:
                continue
            other.switch_to_chase(patch.target)
            other.signaling_source = patch.signaling_source
            signaled.append(patch.handle)
        return signaled

    def broadcast(
        self, source: ZombieAgent, target: AgentHandle, radius: float
    ) -> list[AgentHandle]:
        """Signal every eligible zombie within *radius* of *source* to chase *target*."""
        if source.handle is None:
            logger.warning(f"{source!r} is not registered; broadcast skipped")
            return []
        candidates = self.snapshot_nearby(source, radius)
        patches = plan_broadcast(source.handle, target, candidates)
        signaled = self.apply(patches)
        logger.debug(
            f"Zombie {source.handle} signaled {len(signaled)} of "
            f"{len(candidates)} nearby zombies to chase {target}"
        )
        return signaled
