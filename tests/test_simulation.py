from __future__ import annotations

import math

import numpy as np
import pytest

from coriolis_sim.simulation import (
    Bounds,
    Projectile,
    ProjectileState,
    SimulationConfig,
    SimulationState,
    beam_endpoints,
)
from coriolis_sim.vector_math import magnitude

CENTER = np.array([300.0, 300.0])


def attached_projectile(anchor, bounds) -> Projectile:
    projectile = Projectile(speed=500.0)
    projectile.advance(0.0, anchor, bounds)
    return projectile


def test_beam_endpoints_at_zero_angle():
    launch_end, opposite_end = beam_endpoints(0.0, CENTER, 200.0)
    np.testing.assert_allclose(launch_end, [500.0, 300.0])
    np.testing.assert_allclose(opposite_end, [100.0, 300.0], atol=1e-9)


def test_beam_endpoints_are_symmetric_about_center():
    for angle in np.linspace(-10.0, 10.0, 17):
        launch_end, opposite_end = beam_endpoints(float(angle), CENTER, 200.0)
        np.testing.assert_allclose((launch_end + opposite_end) / 2, CENTER, atol=1e-9)
        assert magnitude(launch_end - CENTER) == pytest.approx(200.0)


def test_attached_projectile_tracks_anchor(bounds):
    projectile = Projectile(speed=500.0)
    assert projectile.position is None
    for angle in np.linspace(0.0, math.tau, 9):
        anchor, _ = beam_endpoints(float(angle), bounds.center, 200.0)
        projectile.advance(0.016, anchor, bounds)
        assert projectile.state is ProjectileState.ATTACHED
        assert np.array_equal(projectile.position, anchor)


def test_launch_flies_straight_to_center(bounds, anchor):
    projectile = attached_projectile(anchor, bounds)
    assert projectile.launch(bounds.center)
    assert projectile.state is ProjectileState.LAUNCHED
    np.testing.assert_allclose(projectile.direction, [-1.0, 0.0])

    projectile.advance(1.0, np.array([123.0, 456.0]), bounds)
    np.testing.assert_allclose(projectile.position, [0.0, 300.0])
    assert projectile.launched


def test_linear_flight_step(bounds):
    anchor = np.array([400.0, 200.0])
    projectile = attached_projectile(anchor, bounds)
    projectile.launch(bounds.center)
    assert magnitude(projectile.direction) == pytest.approx(1.0)

    before = projectile.position.copy()
    projectile.advance(0.05, anchor, bounds)
    np.testing.assert_allclose(projectile.position, before + 0.05 * 500.0 * projectile.direction)


def test_second_launch_keeps_direction(bounds, anchor):
    projectile = attached_projectile(anchor, bounds)
    projectile.launch(bounds.center)
    direction = projectile.direction.copy()
    projectile.advance(0.1, anchor, bounds)
    projectile.launch(bounds.center)
    assert np.array_equal(projectile.direction, direction)


def test_reset_is_idempotent(bounds, anchor):
    projectile = attached_projectile(anchor, bounds)
    projectile.launch(bounds.center)
    projectile.reset()
    once = (projectile.state, projectile.direction, projectile.position.copy())
    projectile.reset()
    assert projectile.state is once[0]
    assert projectile.direction is None and once[1] is None
    assert np.array_equal(projectile.position, once[2])


def test_reset_then_advance_returns_to_anchor(bounds, anchor):
    projectile = attached_projectile(anchor, bounds)
    projectile.launch(bounds.center)
    projectile.advance(0.2, anchor, bounds)
    projectile.reset()
    new_anchor = np.array([300.0, 500.0])
    projectile.advance(0.2, new_anchor, bounds)
    assert np.array_equal(projectile.position, new_anchor)


@pytest.mark.parametrize(
    "start, heading",
    [
        ([10.0, 300.0], [-1.0, 0.0]),
        ([590.0, 300.0], [1.0, 0.0]),
        ([300.0, 10.0], [0.0, -1.0]),
        ([300.0, 590.0], [0.0, 1.0]),
    ],
)
def test_leaving_the_surface_resets(bounds, start, heading):
    projectile = attached_projectile(np.array(start), bounds)
    projectile.launch(bounds.center)
    projectile.direction = np.array(heading)
    projectile.advance(0.1, np.array(start), bounds)
    assert projectile.state is ProjectileState.ATTACHED
    assert projectile.direction is None


def test_attached_on_far_edge_resets(bounds):
    projectile = Projectile(speed=500.0)
    projectile.advance(0.0, np.array([600.0, 300.0]), bounds)
    assert projectile.state is ProjectileState.ATTACHED

    projectile.advance(0.0, np.array([500.0, 300.0]), bounds)
    projectile.launch(bounds.center)
    projectile.position = np.array([600.0, 300.0])
    projectile.direction = np.array([0.0, 0.0])
    projectile.advance(0.0, np.array([500.0, 300.0]), bounds)
    assert projectile.state is ProjectileState.ATTACHED


def test_zero_edge_is_inside(bounds):
    assert bounds.contains(np.array([0.0, 0.0]))
    assert not bounds.contains(np.array([600.0, 0.0]))
    assert not bounds.contains(np.array([-0.001, 300.0]))


def test_launch_from_center_is_refused(bounds):
    projectile = attached_projectile(bounds.center, bounds)
    assert not projectile.launch(bounds.center)
    assert projectile.state is ProjectileState.ATTACHED
    assert projectile.direction is None


def test_launch_before_attach_is_refused(bounds):
    projectile = Projectile(speed=500.0)
    assert not projectile.launch(bounds.center)
    assert projectile.state is ProjectileState.ATTACHED


def test_state_launch_uses_surface_center(make_state):
    state = make_state()
    launch_end, _ = state.beam()
    state.projectile.advance(0.0, launch_end, state.bounds)
    assert state.launch()
    np.testing.assert_allclose(state.projectile.direction, [-1.0, 0.0])
    state.reset()
    assert not state.projectile.launched


def test_state_projectile_uses_config():
    state = SimulationState(config=SimulationConfig(projectile_speed=120.0))
    assert state.projectile.speed == 120.0
    assert state.projectile.color == (255, 0, 0)


@pytest.mark.parametrize("width, height", [(0.0, 10.0), (10.0, -1.0)])
def test_bounds_must_be_positive(width, height):
    with pytest.raises(ValueError):
        Bounds(width, height)


def test_config_rejects_bad_half_length():
    with pytest.raises(ValueError):
        SimulationConfig(beam_half_length=0.0)
