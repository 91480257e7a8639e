from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .projection import FrontViewFrame, TopViewFrame, project_front_view, project_top_view
from .simulation import Bounds, SimulationState
from .vector_math import Vector

logger = logging.getLogger(__name__)

TopRenderer = Callable[[TopViewFrame, SimulationState], None]
FrontRenderer = Callable[[FrontViewFrame, SimulationState], None]


@dataclass(slots=True)
class FrameResult:
    elapsed: float
    anchor: Vector
    top: TopViewFrame
    front: FrontViewFrame


class FrameDriver:
    """Runs one simulation step per display refresh.

    Order within a frame is fixed: top view, projectile advance, front view.
    The top view produces the anchor that the attached projectile follows
    and that the front-view camera sits on.
    """

    def __init__(
        self,
        state: SimulationState,
        draw_top: Optional[TopRenderer] = None,
        draw_front: Optional[FrontRenderer] = None,
    ) -> None:
        self.state = state
        self.draw_top = draw_top
        self.draw_front = draw_front

    def elapsed_since_last(self, timestamp: float) -> float:
        last = self.state.last_timestamp
        return 0.0 if last is None else timestamp - last

    def step(self, timestamp: float, bounds: Optional[Bounds] = None) -> FrameResult:
        """Advance by the real time since the previous call (seconds)."""
        state = self.state
        if bounds is not None and bounds != state.bounds:
            logger.debug("Surface bounds changed to %sx%s", bounds.width, bounds.height)
            state.bounds = bounds

        dt = self.elapsed_since_last(timestamp)
        state.angle += state.angular_speed * dt

        top = project_top_view(state.angle, state.projectile.position, state.bounds, state.config)
        if self.draw_top is not None:
            self.draw_top(top, state)

        anchor = top.anchor
        state.projectile.advance(dt, anchor, state.bounds)

        front = project_front_view(anchor, state.projectile.position, state.bounds, state.config)
        if self.draw_front is not None:
            self.draw_front(front, state)

        state.last_timestamp = timestamp
        return FrameResult(elapsed=dt, anchor=anchor, top=top, front=front)
