from __future__ import annotations

import numpy as np
import pytest

from coriolis_sim.simulation import Bounds, SimulationConfig, SimulationState


@pytest.fixture
def bounds() -> Bounds:
    return Bounds(600.0, 600.0)


@pytest.fixture
def config() -> SimulationConfig:
    return SimulationConfig()


@pytest.fixture
def make_state(bounds, config):
    def _make(angle: float = 0.0, angular_speed: float = 0.0) -> SimulationState:
        return SimulationState(config=config, angle=angle, angular_speed=angular_speed, bounds=bounds)
    return _make


@pytest.fixture
def anchor() -> np.ndarray:
    return np.array([500.0, 300.0])
