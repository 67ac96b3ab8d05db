import pytest

pygame = pytest.importorskip("pygame")

from pygame.math import Vector3

from zombie_ai.entities_constants import GROUND_LAYER, OBSTACLE_LAYER
from zombie_ai.gameplay.navigation import StraightLineNavigation
from zombie_ai.gameplay.world import Box, HeadlessWorld, KinematicMotor, ray_box_distance
from zombie_ai.models import AgentHandle


class _Agent:
    def __init__(self, handle: int, position: Vector3) -> None:
        self.handle = AgentHandle(handle)
        self.position = Vector3(position)


def test_ray_box_distance_hits_front_face() -> None:
    box = Box(low=Vector3(2.0, -1.0, -1.0), high=Vector3(3.0, 1.0, 1.0))

    assert ray_box_distance(Vector3(), Vector3(1.0, 0.0, 0.0), box) == pytest.approx(2.0)
    assert ray_box_distance(Vector3(), Vector3(-1.0, 0.0, 0.0), box) is None
    assert ray_box_distance(Vector3(0.0, 5.0, 0.0), Vector3(1.0, 0.0, 0.0), box) is None


def test_raycast_reports_nearest_agent_and_skips_ignored_collider() -> None:
    world = HeadlessWorld()
    shooter = _Agent(1, Vector3(0.0, 0.0, 0.0))
    near = _Agent(2, Vector3(0.0, 0.0, 3.0))
    far = _Agent(3, Vector3(0.0, 0.0, 6.0))
    for agent in (shooter, near, far):
        world.attach(agent)

    hit = world.raycast(
        Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0), 10.0, ignore=shooter.handle
    )

    assert hit is not None
    assert hit.handle == near.handle
    assert hit.distance == pytest.approx(2.6)
    assert hit.point.z == pytest.approx(2.6)


def test_raycast_starting_inside_another_agent_hits_it_at_once() -> None:
    world = HeadlessWorld()
    shooter = _Agent(1, Vector3(0.0, 0.0, 0.0))
    hugger = _Agent(2, Vector3(0.0, 0.0, 0.3))
    for agent in (shooter, hugger):
        world.attach(agent)

    hit = world.raycast(
        Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0), 10.0, ignore=shooter.handle
    )

    assert hit is not None
    assert hit.handle == hugger.handle
    assert hit.distance == 0.0


def test_raycast_reports_static_geometry_without_handle() -> None:
    world = HeadlessWorld()
    world.add_obstacle(Vector3(-1.0, 0.0, 2.0), Vector3(1.0, 2.0, 3.0))

    wall = world.raycast(Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, 1.0), 10.0)
    floor = world.raycast(Vector3(0.0, 1.0, 0.0), Vector3(0.0, -1.0, 0.0), 10.0)

    assert wall is not None and wall.handle is None
    assert wall.distance == pytest.approx(2.0)
    assert floor is not None and floor.handle is None
    assert floor.distance == pytest.approx(1.0)
    assert world.raycast(Vector3(0.0, 1.0, 0.0), Vector3(0.0, 0.0, -1.0), 10.0) is None


def test_overlap_sphere_uses_current_positions_and_forgets_destroyed() -> None:
    world = HeadlessWorld(cell_size=4.0)
    first = _Agent(1, Vector3(1.0, 0.0, 0.0))
    second = _Agent(2, Vector3(9.0, 0.0, 0.0))
    world.attach(first)
    world.attach(second)

    assert world.overlap_sphere(Vector3(), 5.0) == {first.handle}

    second.position = Vector3(3.0, 0.0, 0.0)
    world.step(0.0)
    assert world.overlap_sphere(Vector3(), 5.0) == {first.handle, second.handle}

    world.destroy(first.handle)
    assert world.overlap_sphere(Vector3(), 5.0) == {second.handle}
    assert world.destroyed == [first.handle]


def test_overlap_sphere_counts_colliders_reaching_into_the_radius() -> None:
    world = HeadlessWorld(cell_size=4.0)
    edge = _Agent(1, Vector3(5.3, 0.0, 0.0))
    outside = _Agent(2, Vector3(5.5, 0.0, 0.0))
    world.attach(edge)
    world.attach(outside)

    assert world.overlap_sphere(Vector3(), 5.0) == {edge.handle}


def test_grounded_check_respects_mask_and_obstacle_tops() -> None:
    world = HeadlessWorld()
    world.add_obstacle(Vector3(-1.0, 0.0, -1.0), Vector3(1.0, 2.0, 1.0))

    assert world.grounded_check(Vector3(5.0, 0.5, 0.0), 1.0, GROUND_LAYER) is True
    assert world.grounded_check(Vector3(5.0, 3.0, 0.0), 1.0, GROUND_LAYER) is False
    assert world.grounded_check(Vector3(5.0, -0.4, 0.0), 1.0, GROUND_LAYER) is True
    assert world.grounded_check(Vector3(0.0, 2.5, 0.0), 1.0, OBSTACLE_LAYER) is True
    assert world.grounded_check(Vector3(0.0, 2.5, 0.0), 1.0, GROUND_LAYER) is False


def test_attach_requires_registered_agent() -> None:
    world = HeadlessWorld()
    agent = _Agent(1, Vector3())
    agent.handle = None

    with pytest.raises(ValueError):
        world.attach(agent)


def test_effects_are_recorded() -> None:
    world = HeadlessWorld()
    world.spawn_effect("death_particles", Vector3(1.0, 0.0, 2.0))

    assert world.effects == [("death_particles", Vector3(1.0, 0.0, 2.0))]


def test_navigation_walks_toward_destination_and_stops() -> None:
    nav = StraightLineNavigation(Vector3(0.0, 3.0, 0.0))
    assert nav.position() == Vector3(0.0, 0.0, 0.0)

    nav.set_destination(Vector3(4.0, 0.0, 0.0))
    nav.set_speed(2.0)
    nav.advance(1.0)
    assert nav.position() == Vector3(2.0, 0.0, 0.0)
    assert nav.velocity() == Vector3(2.0, 0.0, 0.0)
    assert nav.remaining_distance() == pytest.approx(2.0)

    nav.advance(5.0)
    assert nav.position() == Vector3(4.0, 0.0, 0.0)
    assert nav.remaining_distance() == 0.0


def test_navigation_halts_at_stopping_distance() -> None:
    nav = StraightLineNavigation(Vector3(), stopping_distance=0.8)
    nav.set_destination(Vector3(3.0, 0.0, 0.0))
    nav.set_speed(2.0)

    nav.advance(1.0)
    assert nav.position() == Vector3(2.0, 0.0, 0.0)

    nav.advance(1.0)
    assert nav.position().x == pytest.approx(2.2)
    assert nav.remaining_distance() == pytest.approx(0.8)

    nav.advance(1.0)
    assert nav.position().x == pytest.approx(2.2)
    assert nav.velocity() == Vector3()


def test_world_navigation_keeps_colliders_apart() -> None:
    world = HeadlessWorld()
    nav = world.create_navigation(Vector3())

    assert nav.stopping_distance() == pytest.approx(0.8)


def test_navigation_holds_when_stopped_or_unsynced() -> None:
    nav = StraightLineNavigation(Vector3())
    nav.set_destination(Vector3(4.0, 0.0, 0.0))
    nav.set_speed(2.0)

    nav.set_stopped(True)
    nav.advance(1.0)
    assert nav.position() == Vector3()

    nav.set_stopped(False)
    nav.set_position_sync_enabled(False)
    nav.advance(1.0)
    assert nav.position() == Vector3()

    nav.warp(Vector3(1.0, 2.0, 1.0))
    assert nav.position() == Vector3(1.0, 0.0, 1.0)


def test_navigation_sample_position_clamps_to_bounds() -> None:
    nav = StraightLineNavigation(Vector3(), bounds=10.0)

    assert nav.sample_position(Vector3(3.0, 5.0, 3.0), 1.0) == Vector3(3.0, 0.0, 3.0)
    assert nav.sample_position(Vector3(11.0, 0.0, 0.0), 2.0) == Vector3(10.0, 0.0, 0.0)
    assert nav.sample_position(Vector3(20.0, 0.0, 0.0), 2.0) is None


def test_kinematic_motor_lands_on_ground() -> None:
    motor = KinematicMotor(Vector3())
    assert motor.is_grounded() is True

    motor.move(Vector3(0.0, 1.0, 0.5))
    assert motor.is_grounded() is False

    motor.move(Vector3(0.0, -3.0, 0.0))
    assert motor.is_grounded() is True
    assert motor.position() == Vector3(0.0, 0.0, 0.5)
