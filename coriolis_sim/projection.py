"""Projections of the shared global frame into the two views.

Both functions are pure: they take the current global state and return
the screen-space geometry to draw. Nothing here touches pygame.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .simulation import Bounds, SimulationConfig, beam_endpoints
from .vector_math import Vector, rotate, to_vector

# Apparent distance at which the ball shrinks to nothing, in half-heights.
DEPTH_SCALE = 1.6


@dataclass(slots=True)
class TopViewFrame:
    launch_end: Vector
    opposite_end: Vector
    projectile: Optional[Vector]

    @property
    def anchor(self) -> Vector:
        return self.launch_end


@dataclass(slots=True)
class BeamSilhouette:
    trapezoid: list[tuple[float, float]]
    cap_center: tuple[float, float]
    cap_radii: tuple[float, float]


@dataclass(slots=True)
class FrontViewFrame:
    horizon: float
    beam_top: Vector
    projectile: Optional[Vector]
    screen_position: Optional[tuple[float, float]]
    depth_factor: float
    radius: float

    @property
    def visible(self) -> bool:
        return self.screen_position is not None and self.radius > 0


def project_top_view(
    angle: float,
    projectile_position: Optional[Vector],
    bounds: Bounds,
    config: SimulationConfig,
) -> TopViewFrame:
    """Orthographic view: global coordinates are screen coordinates."""
    launch_end, opposite_end = beam_endpoints(angle, bounds.center, config.beam_half_length)
    position = None if projectile_position is None else to_vector(projectile_position)
    return TopViewFrame(launch_end=launch_end, opposite_end=opposite_end, projectile=position)


def to_camera_frame(anchor: Vector, *points: Vector) -> list[Vector]:
    """Translate global points so that anchor becomes the origin."""
    origin = to_vector(anchor)
    return [to_vector(point) - origin for point in points]


def beam_bearing(local_top: Vector) -> float:
    """Angle that, undone, points the beam straight up.

    Uses the single-argument arctangent; the caller flips by pi when the
    result ends up pointing down.
    """
    dx, dy = float(local_top[0]), float(local_top[1])
    if dx == 0:
        base = math.copysign(math.pi / 2, dy)
    else:
        base = math.atan(dy / dx)
    return base - math.pi / 2


def beam_silhouette(bounds: Bounds, config: SimulationConfig) -> BeamSilhouette:
    wh = bounds.width / 2
    top = 4 * (bounds.height / 2) / 3
    k = config.front_beam_half_width
    return BeamSilhouette(
        trapezoid=[
            (wh - k, bounds.height),
            (wh - k / 2, top),
            (wh + k / 2, top),
            (wh + k, bounds.height),
        ],
        cap_center=(wh, top),
        cap_radii=(40.0, 20.0),
    )


def project_front_view(
    anchor: Vector,
    projectile_position: Optional[Vector],
    bounds: Bounds,
    config: SimulationConfig,
) -> FrontViewFrame:
    """First-person view from the launch end, looking along the beam."""
    half_height = bounds.height / 2
    local_top, = to_camera_frame(anchor, bounds.center)

    theta = beam_bearing(local_top)
    local_top = rotate(local_top, -theta)
    if local_top[1] > 0:
        local_top = rotate(local_top, math.pi)
        flip = True
    else:
        flip = False

    if projectile_position is None:
        return FrontViewFrame(
            horizon=half_height,
            beam_top=local_top,
            projectile=None,
            screen_position=None,
            depth_factor=0.0,
            radius=0.0,
        )

    local_ball, = to_camera_frame(anchor, projectile_position)
    local_ball = rotate(local_ball, -theta)
    if flip:
        local_ball = rotate(local_ball, math.pi)

    # far-away floor: past it the ball stays pinned at the horizon depth
    if local_ball[1] + bounds.width < half_height:
        local_ball = np.array([local_ball[0], -half_height], dtype=np.float64)

    depth_factor = max(0.0, 1 - local_ball[1] / -(DEPTH_SCALE * half_height))
    radius = config.front_projectile_radius * depth_factor
    screen = (float(local_ball[0] + bounds.width / 2), float(local_ball[1] + bounds.width))
    return FrontViewFrame(
        horizon=half_height,
        beam_top=local_top,
        projectile=local_ball,
        screen_position=screen if depth_factor > 0 else None,
        depth_factor=depth_factor,
        radius=radius,
    )
