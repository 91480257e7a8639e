from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .vector_math import Vector, normalize, polar_offset, to_vector

logger = logging.getLogger(__name__)

Color = tuple[int, int, int]


@dataclass(slots=True, frozen=True)
class SimulationConfig:
    projectile_speed: float = 500.0  # units per second
    projectile_color: Color = (255, 0, 0)
    projectile_radius: float = 10.0
    beam_half_length: float = 200.0
    beam_width: int = 20
    cap_radius: float = 20.0
    front_projectile_radius: float = 30.0
    front_beam_half_width: float = 50.0
    angular_speed: float = 1.0  # radians per second
    slider_limit: float = 5.0
    fps_target: int = 120
    window_width: int = 1200

    def __post_init__(self) -> None:
        if self.beam_half_length <= 0:
            raise ValueError("Beam half-length must be positive")
        if self.slider_limit <= 0:
            raise ValueError("Slider limit must be positive")
        if self.window_width <= 0:
            raise ValueError("Window width must be positive")


@dataclass(slots=True, frozen=True)
class Bounds:
    """Size of a drawing surface; the global center sits at its midpoint."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Bounds must have a positive width and height")

    @property
    def center(self) -> Vector:
        return np.array([self.width / 2, self.height / 2], dtype=np.float64)

    def contains(self, point: Vector) -> bool:
        # half-open: [0, width) x [0, height)
        x, y = float(point[0]), float(point[1])
        return 0 <= x < self.width and 0 <= y < self.height


class ProjectileState(enum.Enum):
    ATTACHED = "attached"
    LAUNCHED = "launched"


def beam_endpoints(angle: float, center: Vector, half_length: float) -> tuple[Vector, Vector]:
    """Return (launch end, opposite end) of the beam rotated by angle."""
    center = to_vector(center)
    launch_end = polar_offset(center, half_length, angle)
    opposite_end = polar_offset(center, half_length, angle + math.pi)
    return launch_end, opposite_end


def _direction_to_center(position: Vector, center: Vector) -> Optional[Vector]:
    try:
        return normalize(to_vector(center) - position)
    except ValueError:
        return None


class Projectile:
    """Ball that rides the beam's launch end until it is fired at the center."""

    def __init__(self, speed: float, color: Color = (255, 0, 0), radius: float = 10.0) -> None:
        self.speed = speed
        self.color = color
        self.radius = radius
        self.position: Optional[Vector] = None
        self.direction: Optional[Vector] = None
        self.state = ProjectileState.ATTACHED

    @property
    def launched(self) -> bool:
        return self.state is ProjectileState.LAUNCHED

    def launch(self, center: Vector) -> bool:
        """Fire towards center. Returns False when the launch is refused."""
        if self.launched:
            return True
        if self.position is None:
            logger.warning("Launch refused: projectile has not been attached yet")
            return False
        direction = _direction_to_center(self.position, center)
        if direction is None:
            logger.warning("Launch refused: projectile sits on the center %s", self.position)
            return False
        self.direction = direction
        self.state = ProjectileState.LAUNCHED
        logger.debug("Launched from %s towards %s", self.position, direction)
        return True

    def reset(self) -> None:
        if self.launched:
            logger.debug("Projectile reset at %s", self.position)
        self.state = ProjectileState.ATTACHED
        self.direction = None

    def advance(self, dt: float, anchor: Vector, bounds: Bounds) -> None:
        if self.state is ProjectileState.ATTACHED:
            self.position = to_vector(anchor)
        else:
            self.position = self.position + dt * self.speed * self.direction

        if not bounds.contains(self.position):
            logger.debug("Projectile left the surface at %s", self.position)
            self.reset()


@dataclass(slots=True)
class SimulationState:
    """Everything that survives between frames.

    The frame driver owns ``angle`` and ``last_timestamp``; the input layer
    owns ``angular_speed``; the projectile mutates only itself.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    angle: float = 0.0
    angular_speed: float = 0.0
    last_timestamp: Optional[float] = None
    bounds: Bounds = field(default_factory=lambda: Bounds(600.0, 600.0))
    projectile: Projectile = field(init=False)

    def __post_init__(self) -> None:
        self.projectile = Projectile(
            speed=self.config.projectile_speed,
            color=self.config.projectile_color,
            radius=self.config.projectile_radius,
        )

    @property
    def center(self) -> Vector:
        return self.bounds.center

    def beam(self) -> tuple[Vector, Vector]:
        return beam_endpoints(self.angle, self.center, self.config.beam_half_length)

    def launch(self) -> bool:
        return self.projectile.launch(self.center)

    def reset(self) -> None:
        self.projectile.reset()
