import pytest

pygame = pytest.importorskip("pygame")

from pygame.math import Vector3

from zombie_ai.gameplay.perception import PerceptionService, eye_point
from zombie_ai.gameplay.world import HeadlessWorld
from zombie_ai.models import AgentHandle

EYE = 1.5


class _Agent:
    def __init__(self, handle: int, position: Vector3) -> None:
        self.handle = AgentHandle(handle)
        self.position = Vector3(position)


def _make_world(*agents: _Agent) -> HeadlessWorld:
    world = HeadlessWorld()
    for agent in agents:
        world.attach(agent)
    return world


def test_eye_point_adds_height() -> None:
    agent = _Agent(1, Vector3(2.0, 0.5, -1.0))
    assert eye_point(agent, EYE) == Vector3(2.0, 2.0, -1.0)


def test_detects_visible_target_in_range() -> None:
    observer = _Agent(1, Vector3(10.0, 0.0, 0.0))
    target = _Agent(2, Vector3(0.0, 0.0, 0.0))
    perception = PerceptionService(_make_world(observer, target))

    assert perception.detect(observer, target, 35.0, EYE) is True


def test_target_beyond_awareness_radius_is_not_detected() -> None:
    observer = _Agent(1, Vector3(40.0, 0.0, 0.0))
    target = _Agent(2, Vector3(0.0, 0.0, 0.0))
    perception = PerceptionService(_make_world(observer, target))

    assert perception.detect(observer, target, 35.0, EYE) is False


def test_obstacle_blocks_sight() -> None:
    observer = _Agent(1, Vector3(10.0, 0.0, 0.0))
    target = _Agent(2, Vector3(0.0, 0.0, 0.0))
    world = _make_world(observer, target)
    world.add_obstacle(Vector3(4.0, 0.0, -2.0), Vector3(5.0, 3.0, 2.0))
    perception = PerceptionService(world)

    assert perception.detect(observer, target, 35.0, EYE) is False
    assert perception.has_line_of_sight(observer, target, 35.0, EYE) is False


def test_other_agent_in_between_blocks_sight() -> None:
    observer = _Agent(1, Vector3(10.0, 0.0, 0.0))
    blocker = _Agent(2, Vector3(5.0, 0.0, 0.0))
    target = _Agent(3, Vector3(0.0, 0.0, 0.0))
    perception = PerceptionService(_make_world(observer, blocker, target))

    assert perception.detect(observer, target, 35.0, EYE) is False


def test_line_of_sight_limited_by_range() -> None:
    observer = _Agent(1, Vector3(10.0, 0.0, 0.0))
    target = _Agent(2, Vector3(0.0, 0.0, 0.0))
    perception = PerceptionService(_make_world(observer, target))

    assert perception.has_line_of_sight(observer, target, 35.0, EYE) is True
    assert perception.has_line_of_sight(observer, target, 5.0, EYE) is False


def test_coincident_eye_points_count_as_detected() -> None:
    observer = _Agent(1, Vector3(3.0, 0.0, 3.0))
    target = _Agent(2, Vector3(3.0, 0.0, 3.0))
    perception = PerceptionService(_make_world(observer, target))

    assert perception.detect(observer, target, 35.0, EYE) is True
    assert perception.detect(observer, observer, 35.0, EYE) is False


def test_target_in_contact_is_still_seen() -> None:
    observer = _Agent(1, Vector3(0.3, 0.0, 0.0))
    target = _Agent(2, Vector3(0.0, 0.0, 0.0))
    perception = PerceptionService(_make_world(observer, target))

    assert perception.detect(observer, target, 35.0, EYE) is True
