"""Rotating-beam Coriolis demo seen from above and from the launcher."""

from .driver import FrameDriver
from .simulation import Bounds, Projectile, ProjectileState, SimulationConfig, SimulationState

__all__ = [
    "Bounds",
    "FrameDriver",
    "Projectile",
    "ProjectileState",
    "SimulationConfig",
    "SimulationState",
]
