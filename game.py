from __future__ import annotations

import argparse
import dataclasses
import logging
import math
from dataclasses import dataclass, field

import pygame

from coriolis_sim.driver import FrameDriver
from coriolis_sim.projection import FrontViewFrame, TopViewFrame, beam_silhouette
from coriolis_sim.simulation import Bounds, SimulationConfig, SimulationState

logger = logging.getLogger("coriolis_sim.game")

TOP_BACKGROUND = pygame.Color("green")
BEAM_COLOR = pygame.Color("darkgrey")
SKY_COLOR = pygame.Color("lightblue")
GROUND_COLOR = pygame.Color("green")
PANEL_COLOR = (24, 28, 40)
TRACK_COLOR = (90, 100, 120)
KNOB_COLOR = (230, 235, 245)
TEXT_COLOR = (230, 235, 245)

PANEL_HEIGHT = 64
SLIDER_MARGIN = 24
SLIDER_STEP = 0.1


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


@dataclass
class Slider:
    """Horizontal control for the beam's angular speed."""

    limit: float
    value: float = 0.0
    rect: pygame.Rect = field(default_factory=lambda: pygame.Rect(0, 0, 1, 1))
    dragging: bool = False

    def set_value(self, value: float) -> bool:
        value = clamp(value, -self.limit, self.limit)
        changed = not math.isclose(value, self.value)
        self.value = value
        return changed

    def value_at(self, x: int) -> float:
        t = clamp((x - self.rect.left) / max(self.rect.width, 1), 0.0, 1.0)
        return self.limit * (2.0 * t - 1.0)

    def knob_x(self) -> int:
        t = (self.value / self.limit + 1.0) / 2.0
        return int(self.rect.left + t * self.rect.width)

    def nudge(self, steps: int) -> bool:
        return self.set_value(round(self.value + steps * SLIDER_STEP, 2))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.inflate(0, 20).collidepoint(event.pos):
                self.dragging = True
                return self.set_value(self.value_at(event.pos[0]))
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            return self.set_value(self.value_at(event.pos[0]))
        return False


@dataclass
class Layout:
    window: pygame.Surface
    top: pygame.Surface
    front: pygame.Surface
    bounds: Bounds

    @property
    def side(self) -> int:
        return self.top.get_width()


def build_layout(width: int, slider: Slider) -> Layout:
    """Two square views side by side, each half the window wide."""
    side = max(width // 2, 1)
    window = pygame.display.set_mode((side * 2, side + PANEL_HEIGHT), pygame.RESIZABLE)
    slider.rect = pygame.Rect(
        SLIDER_MARGIN,
        side + PANEL_HEIGHT // 2 - 3,
        max(side - 2 * SLIDER_MARGIN, 1),
        6,
    )
    logger.debug("Layout rebuilt with %dpx views", side)
    return Layout(
        window=window,
        top=pygame.Surface((side, side)),
        front=pygame.Surface((side, side)),
        bounds=Bounds(float(side), float(side)),
    )


def draw_top_view(surface: pygame.Surface, frame: TopViewFrame, state: SimulationState) -> None:
    config = state.config
    surface.fill(TOP_BACKGROUND)
    start = tuple(frame.launch_end)
    end = tuple(frame.opposite_end)
    pygame.draw.line(surface, BEAM_COLOR, start, end, config.beam_width)
    pygame.draw.circle(surface, BEAM_COLOR, start, int(config.cap_radius))
    pygame.draw.circle(surface, BEAM_COLOR, end, int(config.cap_radius))
    if frame.projectile is not None:
        projectile = state.projectile
        pygame.draw.circle(surface, projectile.color, tuple(frame.projectile), int(projectile.radius))


def draw_front_view(surface: pygame.Surface, frame: FrontViewFrame, state: SimulationState) -> None:
    width, height = surface.get_size()
    horizon = int(frame.horizon)
    surface.fill(GROUND_COLOR, pygame.Rect(0, horizon, width, height - horizon))
    surface.fill(SKY_COLOR, pygame.Rect(0, 0, width, horizon))

    silhouette = beam_silhouette(state.bounds, state.config)
    pygame.draw.polygon(surface, BEAM_COLOR, silhouette.trapezoid)
    rx, ry = silhouette.cap_radii
    cx, cy = silhouette.cap_center
    pygame.draw.ellipse(surface, BEAM_COLOR, pygame.Rect(cx - rx, cy - ry, 2 * rx, 2 * ry))

    if frame.visible:
        pygame.draw.circle(surface, state.projectile.color, frame.screen_position, max(int(frame.radius), 1))


def draw_panel(layout: Layout, slider: Slider, state: SimulationState, font: pygame.font.Font) -> None:
    side = layout.side
    panel = pygame.Rect(0, side, side * 2, PANEL_HEIGHT)
    layout.window.fill(PANEL_COLOR, panel)
    pygame.draw.rect(layout.window, TRACK_COLOR, slider.rect, border_radius=3)
    pygame.draw.circle(layout.window, KNOB_COLOR, (slider.knob_x(), slider.rect.centery), 9)

    status = "launched" if state.projectile.launched else "attached"
    lines = [
        f"w = {slider.value:+.2f} rad/s",
        f"SPACE launch | R reset | UP/DOWN adjust | ball {status}",
    ]
    for idx, text in enumerate(lines):
        layout.window.blit(font.render(text, True, TEXT_COLOR), (side + SLIDER_MARGIN, side + 10 + idx * 22))


def handle_keydown(event: pygame.event.Event, state: SimulationState, slider: Slider) -> bool:
    if event.key == pygame.K_ESCAPE:
        return False
    if event.key == pygame.K_SPACE:
        state.launch()
    elif event.key == pygame.K_r:
        state.reset()
    elif event.key == pygame.K_UP:
        slider.nudge(1)
    elif event.key == pygame.K_DOWN:
        slider.nudge(-1)
    return True


def handle_events(state: SimulationState, slider: Slider, layout: Layout) -> tuple[bool, Layout]:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False, layout
        if event.type == pygame.KEYDOWN:
            if not handle_keydown(event, state, slider):
                return False, layout
        elif event.type == pygame.VIDEORESIZE:
            layout = build_layout(event.w, slider)
        else:
            slider.handle_mouse(event)
    return True, layout


def apply_angular_speed(state: SimulationState, slider: Slider) -> None:
    if not math.isclose(state.angular_speed, slider.value):
        logger.info("Angular speed set to %.2f rad/s", slider.value)
    state.angular_speed = slider.value


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    defaults = SimulationConfig()
    parser = argparse.ArgumentParser(description="Rotating beam Coriolis demo")
    parser.add_argument("--angular-speed", type=float, default=defaults.angular_speed,
                        help="initial beam angular speed in rad/s")
    parser.add_argument("--width", type=int, default=defaults.window_width,
                        help="initial window width in pixels")
    parser.add_argument("--fps", type=int, default=defaults.fps_target,
                        help="frame rate cap")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)
    if args.width < 2:
        parser.error("--width must be at least 2")
    if args.fps <= 0:
        parser.error("--fps must be positive")
    if abs(args.angular_speed) > defaults.slider_limit:
        parser.error(f"--angular-speed must be within +/-{defaults.slider_limit}")
    return args


def build_config(args: argparse.Namespace) -> SimulationConfig:
    return dataclasses.replace(
        SimulationConfig(),
        angular_speed=args.angular_speed,
        window_width=args.width,
        fps_target=args.fps,
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    config = build_config(args)

    pygame.init()
    pygame.font.init()
    pygame.display.set_caption("Coriolis: rotating beam")
    font = pygame.font.SysFont("JetBrains Mono", 16)
    clock = pygame.time.Clock()

    slider = Slider(limit=config.slider_limit, value=config.angular_speed)
    layout = build_layout(config.window_width, slider)
    state = SimulationState(config=config, angular_speed=slider.value, bounds=layout.bounds)
    driver = FrameDriver(
        state,
        draw_top=lambda frame, st: draw_top_view(layout.top, frame, st),
        draw_front=lambda frame, st: draw_front_view(layout.front, frame, st),
    )

    running = True
    while running:
        clock.tick(config.fps_target)
        running, layout = handle_events(state, slider, layout)
        if not running:
            break

        apply_angular_speed(state, slider)
        driver.step(pygame.time.get_ticks() / 1000.0, layout.bounds)

        layout.window.blit(layout.top, (0, 0))
        layout.window.blit(layout.front, (layout.side, 0))
        draw_panel(layout, slider, state, font)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
