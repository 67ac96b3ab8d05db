"""HeadlessWorld -- in-memory engine collaborators for tests and the sandbox.

Provides a flat ground plane, axis-aligned box obstacles, box colliders for
agents, straight-line navigation agents and a kinematic player motor.  It
implements the ``CollisionQuery`` and ``Lifecycle`` protocols, so the core
can run without a game engine.

Agent colliders are approximated for overlap queries: a body counts as inside
a sphere when its position lies within the radius grown by its collider
radius.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Optional

from loguru import logger
from pygame.math import Vector3

from ..entities_constants import (
    AGENT_COLLIDER_HEIGHT,
    AGENT_COLLIDER_RADIUS,
    GROUND_HEIGHT,
    GROUND_LAYER,
    OBSTACLE_LAYER,
    SPATIAL_INDEX_CELL_SIZE,
)
from ..models import AgentHandle, RaycastHit
from .navigation import StraightLineNavigation
from .spatial_index import SpatialIndex, SpatialKind, kind_for_agent

_EPSILON = 1e-6


@dataclass(frozen=True)
class Box:
    low: Vector3
    high: Vector3
    layer: int = OBSTACLE_LAYER

    def contains(self, point: Vector3) -> bool:
        return all(self.low[i] <= point[i] <= self.high[i] for i in range(3))


@dataclass
class _Body:
    agent: Any
    kind: SpatialKind
    radius: float
    height: float
    navigation: StraightLineNavigation | None = None

    def box(self) -> Box:
        pos = self.agent.position
        return Box(
            low=Vector3(pos.x - self.radius, pos.y, pos.z - self.radius),
            high=Vector3(pos.x + self.radius, pos.y + self.height, pos.z + self.radius),
        )


def ray_box_distance(
    origin: Vector3, direction: Vector3, box: Box
) -> float | None:
    """Slab test; distance along *direction* to the box entry point."""
    t_min = 0.0
    t_max = math.inf
    for axis in range(3):
        o = origin[axis]
        d = direction[axis]
        lo = box.low[axis]
        hi = box.high[axis]
        if abs(d) < 1e-12:
            if o < lo or o > hi:
                return None
            continue
        t1 = (lo - o) / d
        t2 = (hi - o) / d
        if t1 > t2:
            t1, t2 = t2, t1
        t_min = max(t_min, t1)
        t_max = min(t_max, t2)
        if t_min > t_max:
            return None
    return t_min


class KinematicMotor:
    """Player mover: free translation, stopped by the ground plane."""

    def __init__(self, position: Vector3, *, ground_height: float = GROUND_HEIGHT) -> None:
        self.ground_height = ground_height
        self._position = Vector3(position)
        self._grounded = self._position.y <= ground_height + _EPSILON

    def position(self) -> Vector3:
        return Vector3(self._position)

    def move(self, delta: Vector3) -> None:
        self._position += delta
        if self._position.y <= self.ground_height:
            self._position.y = self.ground_height
            self._grounded = True
        else:
            self._grounded = False

    def is_grounded(self) -> bool:
        return self._grounded


class HeadlessWorld:
    def __init__(
        self,
        *,
        ground_height: float = GROUND_HEIGHT,
        cell_size: float = SPATIAL_INDEX_CELL_SIZE,
        bounds: float | None = None,
    ) -> None:
        self.ground_height = ground_height
        self.bounds = bounds
        self.obstacles: list[Box] = []
        self.effects: list[tuple[str, Vector3]] = []
        self.destroyed: list[AgentHandle] = []
        self._bodies: dict[AgentHandle, _Body] = {}
        self._index = SpatialIndex(cell_size=cell_size)
        self._index_dirty = True

    # --- construction ---

    def create_navigation(self, position: Vector3) -> StraightLineNavigation:
        # Agents halt with their colliders touching instead of walking into each other.
        return StraightLineNavigation(
            position,
            ground_height=self.ground_height,
            bounds=self.bounds,
            stopping_distance=2 * AGENT_COLLIDER_RADIUS,
        )

    def create_motor(self, position: Vector3) -> KinematicMotor:
        return KinematicMotor(position, ground_height=self.ground_height)

    def attach(
        self,
        agent: Any,
        *,
        navigation: StraightLineNavigation | None = None,
        radius: float = AGENT_COLLIDER_RADIUS,
        height: float = AGENT_COLLIDER_HEIGHT,
    ) -> None:
        if agent.handle is None:
            raise ValueError(f"{agent!r} must be registered before it is attached")
        self._bodies[agent.handle] = _Body(
            agent=agent,
            kind=kind_for_agent(agent),
            radius=radius,
            height=height,
            navigation=navigation,
        )
        self._index_dirty = True

    def add_obstacle(
        self, low: Vector3, high: Vector3, *, layer: int = OBSTACLE_LAYER
    ) -> Box:
        box = Box(
            low=Vector3(min(low.x, high.x), min(low.y, high.y), min(low.z, high.z)),
            high=Vector3(max(low.x, high.x), max(low.y, high.y), max(low.z, high.z)),
            layer=layer,
        )
        self.obstacles.append(box)
        return box

    def handles(self) -> list[AgentHandle]:
        return list(self._bodies)

    # --- frame step ---

    def step(self, dt: float) -> None:
        for body in self._bodies.values():
            if body.navigation is not None:
                body.navigation.advance(dt)
        self._index_dirty = True

    # --- CollisionQuery ---

    def raycast(
        self,
        origin: Vector3,
        direction: Vector3,
        max_distance: float,
        ignore: Optional[AgentHandle] = None,
    ) -> Optional[RaycastHit]:
        if direction.length_squared() == 0 or max_distance <= 0:
            return None
        direction = direction.normalize()
        best: tuple[float, Optional[AgentHandle]] | None = None

        def _consider(distance: float | None, handle: Optional[AgentHandle]) -> None:
            nonlocal best
            if distance is None or distance > max_distance:
                return
            if best is None or distance < best[0]:
                best = (distance, handle)

        for handle, body in self._bodies.items():
            if handle == ignore:
                continue
            box = body.box()
            # An agent the ray starts inside is struck immediately.
            if box.contains(origin):
                _consider(0.0, handle)
                continue
            _consider(ray_box_distance(origin, direction, box), handle)
        # Static geometry the ray starts inside is not reported.
        for box in self.obstacles:
            if box.contains(origin):
                continue
            _consider(ray_box_distance(origin, direction, box), None)
        if direction.y < 0 and origin.y >= self.ground_height:
            _consider((self.ground_height - origin.y) / direction.y, None)

        if best is None:
            return None
        distance, handle = best
        return RaycastHit(handle=handle, point=origin + direction * distance, distance=distance)

    def overlap_sphere(self, center: Vector3, radius: float) -> set[AgentHandle]:
        """Handles of every attached body whose collider reaches into the sphere."""
        if self._index_dirty:
            self._index.rebuild(
                (body.agent, body.kind) for body in self._bodies.values()
            )
            self._index_dirty = False
        radius = max(0.0, radius)
        reach = max((body.radius for body in self._bodies.values()), default=0.0)
        handles: set[AgentHandle] = set()
        for agent in self._index.query_radius(center, radius + reach):
            body = self._bodies.get(agent.handle)
            if body is None:
                continue
            if agent.position.distance_to(center) <= radius + body.radius:
                handles.add(agent.handle)
        return handles

    def grounded_check(
        self, origin: Vector3, max_distance: float, ground_mask: int
    ) -> bool:
        # An origin that sank below a surface counts as landed on it.
        if ground_mask & GROUND_LAYER and origin.y - self.ground_height <= max_distance:
            return True
        for box in self.obstacles:
            if not box.layer & ground_mask:
                continue
            inside_xz = (
                box.low.x <= origin.x <= box.high.x and box.low.z <= origin.z <= box.high.z
            )
            if inside_xz and box.low.y <= origin.y and origin.y - box.high.y <= max_distance:
                return True
        return False

    # --- Lifecycle ---

    def spawn_effect(self, kind: str, position: Vector3) -> None:
        self.effects.append((kind, Vector3(position)))

    def destroy(self, handle: AgentHandle) -> None:
        if self._bodies.pop(handle, None) is None:
            logger.debug(f"destroy({handle}): no body attached")
        self.destroyed.append(handle)
        self._index_dirty = True


__all__ = [
    "Box",
    "HeadlessWorld",
    "KinematicMotor",
    "ray_box_distance",
]
