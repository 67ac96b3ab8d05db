import pytest

pygame = pytest.importorskip("pygame")

from pygame.math import Vector3

from zombie_ai.entities import ZombieState
from zombie_ai.gameplay.state import initialize_simulation, spawn_player, spawn_zombie


def test_tick_advances_clock_and_engine() -> None:
    sim = initialize_simulation()
    steps: list[float] = []
    sim.driver.engine_step = steps.append

    sim.driver.tick(0.05)
    sim.driver.tick(-1.0)

    assert steps == [0.05, 0.0]
    assert sim.clock.now == pytest.approx(0.05)
    assert sim.clock.frame == 2


def test_zombie_position_follows_navigation() -> None:
    sim = initialize_simulation()
    zombie = spawn_zombie(sim, Vector3(0.0, 0.0, 0.0))
    zombie.navigation.set_destination(Vector3(10.0, 0.0, 0.0))

    sim.driver.tick(0.5)

    assert zombie.position.x == pytest.approx(zombie.tuning.wander_speed * 0.5)
    assert zombie.position == zombie.navigation.position()


def test_run_steps_requested_frames() -> None:
    sim = initialize_simulation()
    sim.driver.run(10, 0.1)

    assert sim.clock.frame == 10
    assert sim.clock.now == pytest.approx(1.0)


def test_dead_zombies_are_skipped() -> None:
    sim = initialize_simulation()
    zombie = spawn_zombie(sim, Vector3(0.0, 0.0, 0.0))
    zombie.navigation.set_destination(Vector3(10.0, 0.0, 0.0))
    sim.combat.die(zombie)

    sim.driver.tick(0.5)

    assert zombie.position == Vector3(0.0, 0.0, 0.0)


def test_punched_zombie_flies_back_and_resumes_navigation() -> None:
    sim = initialize_simulation()
    player = spawn_player(sim, Vector3(0.0, 0.0, 0.0))
    zombie = spawn_zombie(sim, Vector3(0.0, 0.0, 1.8))

    assert player.request_punch() is True
    assert zombie.knockback is not None
    nav_before = zombie.navigation.position()

    for _ in range(120):
        sim.driver.tick(1 / 60)
        if zombie.knockback is None:
            break
        # The navigation agent holds still while the knockback moves the body.
        assert zombie.navigation.position() == nav_before

    assert zombie.knockback is None
    assert zombie.position.z > 2.5
    assert zombie.navigation.position_sync_enabled() is True
    assert zombie.navigation.position().z == pytest.approx(zombie.position.z)
    assert zombie.state is ZombieState.CHASE

    sim.driver.tick(1 / 60)
    assert zombie.position.y == pytest.approx(sim.world.ground_height)


def test_player_is_knocked_back_by_attack_and_recovers() -> None:
    sim = initialize_simulation()
    player = spawn_player(sim, Vector3(0.0, 0.0, 0.0))
    zombie = spawn_zombie(sim, Vector3(1.0, 0.0, 0.0))
    zombie.switch_to_chase(player.handle)

    sim.driver.tick(1 / 60)
    assert player.knockback is not None

    for _ in range(120):
        sim.driver.tick(1 / 60)
        if player.knockback is None:
            break

    assert player.knockback is None
    assert player.position.x < -1.0
    assert player.position.y == pytest.approx(0.0)


def test_full_crowd_run_is_stable() -> None:
    sim = initialize_simulation(bounds=30.0)
    spawn_player(sim, Vector3(0.0, 0.0, 0.0))
    for x in range(-20, 21, 8):
        spawn_zombie(sim, Vector3(float(x), 0.0, 15.0))

    sim.driver.run(300, 1 / 30)

    zombies = list(sim.registry.zombies())
    assert len(zombies) == 6
    for zombie in zombies:
        assert zombie.state in (ZombieState.WANDER, ZombieState.CHASE)
        if zombie.knockback is None:
            assert zombie.position.y == pytest.approx(0.0)
    assert sim.clock.frame == 300


def test_chasing_zombie_keeps_chasing_in_contact() -> None:
    sim = initialize_simulation()
    player = spawn_player(sim, Vector3(0.0, 0.0, 0.0))
    zombie = spawn_zombie(sim, Vector3(0.0, 0.0, 3.0))

    for _ in range(120):
        sim.driver.tick(1 / 60)
        assert zombie.state is ZombieState.CHASE
        assert zombie.current_target == player.handle

    assert zombie.last_attack_time is not None
