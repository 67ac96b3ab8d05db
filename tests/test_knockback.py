import pytest

pygame = pytest.importorskip("pygame")

from pygame.math import Vector3

from zombie_ai.gameplay.knockback import KnockbackIntegrator, horizontal_unit
from zombie_ai.models import KnockbackParams, KnockbackPhase, VerticalMode


class _Body:
    def __init__(self) -> None:
        self.knockback = None
        self.position = Vector3()
        self.grounded = False
        self.started = 0
        self.finished = 0

    def knockback_started(self) -> None:
        self.started += 1

    def knockback_displace(self, delta: Vector3) -> None:
        self.position += delta

    def knockback_grounded(self) -> bool:
        return self.grounded

    def knockback_finished(self) -> None:
        self.finished += 1


def _make_params(
    mode: VerticalMode = VerticalMode.FIXED, duration: float = 0.3
) -> KnockbackParams:
    return KnockbackParams(
        horizontal_force=5.0,
        vertical_force=1.0,
        gravity=20.0,
        impulse_duration=duration,
        vertical_mode=mode,
    )


def test_horizontal_unit_flattens_and_handles_zero() -> None:
    flat = horizontal_unit(Vector3(3.0, 7.0, 4.0))
    assert (flat.x, flat.y, flat.z) == pytest.approx((0.6, 0.0, 0.8))
    assert horizontal_unit(Vector3(0.0, 1.0, 0.0)) == Vector3()


def test_fixed_mode_ignores_direction_height() -> None:
    body = _Body()
    state = KnockbackIntegrator().begin(body, Vector3(0.0, -1.0, 2.0), _make_params())

    assert state.horizontal_velocity == Vector3(0.0, 0.0, 5.0)
    assert state.vertical_velocity == 1.0
    assert body.started == 1


def test_scaled_mode_uses_direction_height() -> None:
    body = _Body()
    state = KnockbackIntegrator().begin(
        body, Vector3(0.8, 0.6, 0.0), _make_params(VerticalMode.SCALED)
    )

    assert state.vertical_velocity == pytest.approx(0.6)
    assert state.horizontal_velocity.x == pytest.approx(5.0)


def test_impulse_step_decays_vertical_before_displacing() -> None:
    body = _Body()
    integrator = KnockbackIntegrator()
    integrator.begin(body, Vector3(1.0, 0.0, 0.0), _make_params())

    assert integrator.step(body, 0.15) is True

    assert body.knockback.vertical_velocity == pytest.approx(-2.0)
    assert body.position.x == pytest.approx(0.75)
    assert body.position.y == pytest.approx(-0.3)
    assert body.knockback.phase is KnockbackPhase.IMPULSE


def test_switches_to_falling_then_lands_when_grounded() -> None:
    body = _Body()
    integrator = KnockbackIntegrator()
    integrator.begin(body, Vector3(1.0, 0.0, 0.0), _make_params())

    integrator.step(body, 0.15)
    integrator.step(body, 0.15)
    assert body.knockback.phase is KnockbackPhase.FALLING

    integrator.step(body, 0.15)
    assert body.finished == 0
    moved_to = Vector3(body.position)

    body.grounded = True
    assert integrator.step(body, 0.15) is False
    assert body.knockback is None
    assert body.finished == 1
    # The landing tick does not move the body.
    assert body.position == moved_to


def test_grounded_during_impulse_does_not_end_early() -> None:
    body = _Body()
    body.grounded = True
    integrator = KnockbackIntegrator()
    integrator.begin(body, Vector3(1.0, 0.0, 0.0), _make_params())

    assert integrator.step(body, 0.1) is True
    assert body.knockback is not None
    assert body.finished == 0


def test_new_knockback_replaces_in_flight_one() -> None:
    body = _Body()
    integrator = KnockbackIntegrator()
    integrator.begin(body, Vector3(1.0, 0.0, 0.0), _make_params())
    integrator.step(body, 0.1)

    replacement = integrator.begin(body, Vector3(0.0, 0.0, -1.0), _make_params())

    assert body.knockback is replacement
    assert replacement.elapsed == 0.0
    assert body.started == 1


def test_endless_fall_is_forced_to_land() -> None:
    body = _Body()
    integrator = KnockbackIntegrator(max_fall_time=0.5)
    integrator.begin(body, Vector3(1.0, 0.0, 0.0), _make_params(duration=0.15))

    for _ in range(100):
        if not integrator.step(body, 0.15):
            break

    assert body.knockback is None
    assert body.finished == 1


def test_cancel_skips_landing_callback() -> None:
    body = _Body()
    integrator = KnockbackIntegrator()
    integrator.begin(body, Vector3(1.0, 0.0, 0.0), _make_params())

    integrator.cancel(body)

    assert body.knockback is None
    assert body.finished == 0
    assert integrator.step(body, 0.1) is False


def test_zero_direction_gives_vertical_only_push() -> None:
    body = _Body()
    state = KnockbackIntegrator().begin(body, Vector3(), _make_params())

    assert state.horizontal_velocity == Vector3()
    assert state.vertical_velocity == 1.0
