from __future__ import annotations

import math
from collections.abc import Iterable
from enum import IntFlag
from typing import Any

from pygame.math import Vector3

from ..entities import PlayerAgent, ZombieAgent
from ..entities_constants import SPATIAL_INDEX_CELL_SIZE


class SpatialKind(IntFlag):
    NONE = 0
    PLAYER = 1 << 0
    ZOMBIE = 1 << 1
    OTHER = 1 << 2
    ALL = PLAYER | ZOMBIE | OTHER


def kind_for_agent(agent: Any) -> SpatialKind:
    if isinstance(agent, PlayerAgent):
        return SpatialKind.PLAYER
    if isinstance(agent, ZombieAgent):
        return SpatialKind.ZOMBIE
    return SpatialKind.OTHER


class SpatialIndex:
    """Uniform grid over the ground (x, z) plane for radius queries.

    Buckets are filled from positions at rebuild time; distance tests read the
    agents' current positions, and queries scan one extra ring of cells so
    agents that drifted across a border since the rebuild are still found.
    """

    def __init__(self, cell_size: float = SPATIAL_INDEX_CELL_SIZE) -> None:
        self.cell_size = max(1e-3, float(cell_size))
        self._cells: dict[tuple[int, int], list[tuple[Any, SpatialKind]]] = {}

    def _cell_of(self, x: float, z: float) -> tuple[int, int]:
        return (int(math.floor(x / self.cell_size)), int(math.floor(z / self.cell_size)))

    def clear(self) -> None:
        self._cells.clear()

    def rebuild(self, entries: Iterable[tuple[Any, SpatialKind]]) -> None:
        self.clear()
        for agent, kind in entries:
            if not getattr(agent, "alive", True):
                continue
            self.insert(agent, kind)

    def insert(self, agent: Any, kind: SpatialKind) -> None:
        pos = agent.position
        self._cells.setdefault(self._cell_of(pos.x, pos.z), []).append((agent, kind))

    def query_radius(
        self,
        center: Vector3,
        radius: float,
        *,
        kinds: SpatialKind = SpatialKind.ALL,
    ) -> list[Any]:
        if kinds == SpatialKind.NONE:
            return []
        radius = max(0.0, float(radius))
        min_x, min_z = self._cell_of(center.x - radius, center.z - radius)
        max_x, max_z = self._cell_of(center.x + radius, center.z + radius)
        radius_sq = radius * radius
        results: list[Any] = []
        seen: set[int] = set()
        for cell_z in range(min_z - 1, max_z + 2):
            for cell_x in range(min_x - 1, max_x + 2):
                bucket = self._cells.get((cell_x, cell_z))
                if not bucket:
                    continue
                for agent, kind in bucket:
                    if kind & kinds == 0:
                        continue
                    agent_id = id(agent)
                    if agent_id in seen:
                        continue
                    if (agent.position - center).length_squared() <= radius_sq:
                        results.append(agent)
                        seen.add(agent_id)
        return results
