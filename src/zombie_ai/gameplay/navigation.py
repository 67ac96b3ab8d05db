from __future__ import annotations

from typing import Optional

from pygame.math import Vector3

from ..entities_constants import GROUND_HEIGHT


class StraightLineNavigation:
    """Headless stand-in for a nav-mesh agent: walks straight at its goal.

    The walkable area is the ground plane, optionally clipped to a square of
    half-extent ``bounds`` around the origin.  Movement is advanced by
    ``advance`` once per frame, before the agents' controllers run.
    """

    def __init__(
        self,
        position: Vector3,
        *,
        ground_height: float = GROUND_HEIGHT,
        bounds: float | None = None,
        stopping_distance: float = 0.0,
    ) -> None:
        self.ground_height = ground_height
        self.bounds = bounds
        self._position = self._on_ground(Vector3(position))
        self._destination: Vector3 | None = None
        self._speed = 0.0
        self._stopped = False
        self._sync_enabled = True
        self._stopping_distance = max(0.0, stopping_distance)
        self._velocity = Vector3()

    def _on_ground(self, point: Vector3) -> Vector3:
        return Vector3(point.x, self.ground_height, point.z)

    def _in_bounds(self, point: Vector3) -> bool:
        if self.bounds is None:
            return True
        return abs(point.x) <= self.bounds and abs(point.z) <= self.bounds

    # --- Navigation protocol ---

    def position(self) -> Vector3:
        return Vector3(self._position)

    def destination(self) -> Vector3 | None:
        return None if self._destination is None else Vector3(self._destination)

    def set_destination(self, position: Vector3) -> None:
        self._destination = self._on_ground(position)

    def set_speed(self, speed: float) -> None:
        self._speed = max(0.0, float(speed))

    def speed(self) -> float:
        return self._speed

    def is_path_pending(self) -> bool:
        return False

    def remaining_distance(self) -> float:
        if self._destination is None:
            return 0.0
        return self._position.distance_to(self._destination)

    def stopping_distance(self) -> float:
        return self._stopping_distance

    def set_stopped(self, stopped: bool) -> None:
        self._stopped = bool(stopped)
        if self._stopped:
            self._velocity = Vector3()

    def is_stopped(self) -> bool:
        return self._stopped

    def velocity(self) -> Vector3:
        return Vector3(self._velocity)

    def warp(self, position: Vector3) -> None:
        self._position = self._on_ground(position)
        self._velocity = Vector3()

    def set_position_sync_enabled(self, enabled: bool) -> None:
        self._sync_enabled = bool(enabled)

    def position_sync_enabled(self) -> bool:
        return self._sync_enabled

    def sample_position(
        self, point: Vector3, max_distance: float
    ) -> Optional[Vector3]:
        candidate = self._on_ground(point)
        if self._in_bounds(candidate):
            return candidate
        if self.bounds is None:
            return None
        clamped = Vector3(
            max(-self.bounds, min(self.bounds, candidate.x)),
            self.ground_height,
            max(-self.bounds, min(self.bounds, candidate.z)),
        )
        if clamped.distance_to(candidate) <= max_distance:
            return clamped
        return None

    # --- simulation ---

    def advance(self, dt: float) -> None:
        # A knocked-back agent is moved by its owner; the nav agent holds still.
        if not self._sync_enabled or self._stopped or self._destination is None:
            self._velocity = Vector3()
            return
        offset = self._destination - self._position
        distance = offset.length()
        # The agent halts at the stopping distance, short of the goal itself.
        travel = distance - self._stopping_distance
        step = self._speed * dt
        if travel <= 1e-9 or step <= 0:
            self._velocity = Vector3()
            return
        if step >= travel:
            if self._stopping_distance > 0:
                move = offset * (travel / distance)
                self._position += move
            else:
                move = offset
                self._position = Vector3(self._destination)
            self._velocity = move / dt
            return
        move = offset * (step / distance)
        self._position += move
        self._velocity = move / dt
