from __future__ import annotations

from typing import TYPE_CHECKING

from pygame.math import Vector3

from ..models import UP

if TYPE_CHECKING:  # pragma: no cover - typing-only imports
    from ..interfaces import CollisionQuery, Targetable


def eye_point(agent: Targetable, eye_height: float) -> Vector3:
    return agent.position + UP * eye_height


class PerceptionService:
    """Distance and line-of-sight checks between agents' eye points.

    Both observer and target are sampled at the same eye height.  A ray only
    counts as sight when the first collider it strikes is the target itself;
    occluders in between block it.
    """

    def __init__(self, collision: CollisionQuery) -> None:
        self.collision = collision

    def detect(
        self,
        observer: Targetable,
        target: Targetable,
        awareness_radius: float,
        eye_height: float,
    ) -> bool:
        eye = eye_point(observer, eye_height)
        target_eye = eye_point(target, eye_height)
        if eye.distance_to(target_eye) > awareness_radius:
            return False
        return self._ray_reaches(observer, target, eye, target_eye, awareness_radius)

    def has_line_of_sight(
        self,
        observer: Targetable,
        target: Targetable,
        max_range: float,
        eye_height: float,
    ) -> bool:
        eye = eye_point(observer, eye_height)
        target_eye = eye_point(target, eye_height)
        return self._ray_reaches(observer, target, eye, target_eye, max_range)

    def _ray_reaches(
        self,
        observer: Targetable,
        target: Targetable,
        eye: Vector3,
        target_eye: Vector3,
        max_range: float,
    ) -> bool:
        offset = target_eye - eye
        if offset.length_squared() == 0:
            # Coincident eye points: nothing can stand in between.
            return observer.handle != target.handle
        hit = self.collision.raycast(
            eye, offset.normalize(), max_range, ignore=observer.handle
        )
        if hit is None:
            return False
        return hit.handle is not None and hit.handle == target.handle
