"""Interactive 2D scene drawing the fields of the selected scenario."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

import pygame

from base_scene import BaseScene
from camera2d import Camera2D
from field import (
    electric_field_at,
    field_magnitude,
    magnetic_field_at,
    magnetic_field_z,
    potential_at,
    sample_grid,
)
from objects import ChargeConfiguration, PointCharge
from scenarios import get_scenario, list_scenarios
from simulation_config import Bounds, SimulationConfig, TraceOptions
from state import SimulationState
from streamlines import (
    EquipotentialEllipse,
    Polyline,
    ellipse_points,
    equipotential_contour,
    trace_field_lines,
    trace_magnetic_lines,
)
from vector2 import Vector2

logger = logging.getLogger(__name__)

Color = Tuple[int, ...]

COLORS = {
    "grid": (40, 48, 64),
    "axes": (150, 150, 160),
    "electric": (255, 87, 34),
    "magnetic": (33, 150, 243),
    "equipotential": (76, 175, 80),
    "positive": (244, 67, 54),
    "negative": (33, 150, 243),
    "velocity": (255, 193, 7),
    "selected": (255, 255, 0),
    "text": (224, 224, 224),
    "info_box": (30, 41, 59),
}

SCENARIO_KEYS = (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5, pygame.K_6)
BETA_STEP = 0.05
CHARGE_STEP = 0.1
MAGNETIC_LOOPS = 6


class Scene2D(BaseScene):
    """Handle rendering and input for the field visualiser."""

    def __init__(self, screen: pygame.Surface, config: SimulationConfig) -> None:
        super().__init__(screen, config)
        self.small_font = pygame.font.Font(None, 20)
        width, height = self.screen.get_size()
        self.camera = Camera2D(width=width, height=height)
        self.state = SimulationState(num_field_lines=config.num_field_lines)
        self.selected_point: Optional[Vector2] = None
        self.show_help = False
        self.is_panning = False

        self._cache_key: Optional[tuple] = None
        self.electric_lines: List[Polyline] = []
        self.magnetic_lines: List[Polyline] = []
        self.equipotentials: List[Polyline] = []
        logger.info("viewer ready: %s", config.describe())

    # ------------------------------------------------------------------ input

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not super().handle_event(event):
            return False

        if event.type == pygame.KEYDOWN:
            self._handle_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self.selected_point = self.camera.screen_to_world(*event.pos)
            elif event.button == 3:
                self.is_panning = True
            elif event.button in (4, 5):
                self.camera.zoom_at(event.pos[0], event.pos[1], 1.1 if event.button == 4 else 1 / 1.1)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 3:
            self.is_panning = False
        elif event.type == pygame.MOUSEMOTION and self.is_panning:
            self.camera.pan(*event.rel)
        return True

    def _handle_key(self, key: int) -> None:
        if key in SCENARIO_KEYS:
            scenarios = list_scenarios()
            index = SCENARIO_KEYS.index(key)
            if index < len(scenarios):
                self.state = self.state.with_scenario(scenarios[index].identifier)
        elif key == pygame.K_RIGHT:
            self.state = self.state.with_beta(self.state.beta + BETA_STEP)
        elif key == pygame.K_LEFT:
            self.state = self.state.with_beta(self.state.beta - BETA_STEP)
        elif key == pygame.K_UP:
            self.state = self.state.with_charge(self.state.charge + CHARGE_STEP)
        elif key == pygame.K_DOWN:
            self.state = self.state.with_charge(self.state.charge - CHARGE_STEP)
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self.state = self.state.with_num_field_lines(self.state.num_field_lines + 2)
        elif key == pygame.K_MINUS:
            self.state = self.state.with_num_field_lines(self.state.num_field_lines - 2)
        elif key == pygame.K_SPACE:
            self.state = self.state.toggled("playing")
        elif key == pygame.K_r:
            self.state = self.state.reset()
            self.selected_point = None
        elif key == pygame.K_h:
            self.show_help = not self.show_help
        else:
            toggles = {
                pygame.K_e: "show_electric",
                pygame.K_m: "show_magnetic",
                pygame.K_v: "show_vectors",
                pygame.K_p: "show_equipotentials",
                pygame.K_g: "show_grid",
                pygame.K_t: "show_transformation",
            }
            if key in toggles:
                self.state = self.state.toggled(toggles[key])

    # ------------------------------------------------------------ simulation

    def update(self, dt: float) -> None:
        self.state = self.state.advanced(dt)

    def _visible_bounds(self) -> Bounds:
        top_left = self.camera.screen_to_world(0, 0)
        bottom_right = self.camera.screen_to_world(self.camera.width, self.camera.height)
        return Bounds(top_left.x, bottom_right.x, bottom_right.y, top_left.y)

    def _ensure_field_visuals(self, configuration: ChargeConfiguration) -> None:
        bounds = self._visible_bounds()
        key = (configuration, bounds, self.state.num_field_lines, self.state.show_equipotentials)
        if key == self._cache_key:
            return
        self._cache_key = key

        options = replace(self.config.trace, bounds=bounds)
        settings = self.config.settings
        self.electric_lines = trace_field_lines(configuration, self.state.num_field_lines, options, settings)
        self.magnetic_lines = trace_magnetic_lines(configuration, MAGNETIC_LOOPS, options, settings=settings)
        self.equipotentials = []
        if self.state.show_equipotentials:
            self.equipotentials = self._equipotential_lines(configuration, options)

    def _equipotential_lines(self, configuration: ChargeConfiguration, options: TraceOptions) -> List[Polyline]:
        anchors = configuration.sources() or configuration.sinks()
        if not anchors:
            return []
        anchor = anchors[0]
        settings = self.config.settings
        lone_charge = ChargeConfiguration(charges=(PointCharge(anchor.position, anchor.charge),))
        unit_potential = potential_at(anchor.position + Vector2(0.0, 1.0), lone_charge, settings)
        lines: List[Polyline] = []
        levels = settings.equipotential_levels
        for i in range(1, levels + 1):
            level = unit_potential * i / levels
            contour = equipotential_contour(anchor.position, configuration, level, options, settings)
            if isinstance(contour, EquipotentialEllipse):
                contour = ellipse_points(contour)
            if len(contour) > 1:
                lines.append(contour)
        return lines

    # --------------------------------------------------------------- drawing

    def draw(self) -> None:
        self.screen.fill(self.BG_COLOR)
        configuration = self.state.configuration()
        self._ensure_field_visuals(configuration)

        if self.state.show_grid:
            self._draw_grid()
        self._draw_axes()

        if self.state.show_electric:
            if self.state.show_vectors:
                self._draw_vectors(configuration, magnetic=False)
            else:
                self._draw_lines(self.electric_lines, COLORS["electric"])
        if self.state.show_magnetic:
            if self.state.show_vectors:
                self._draw_vectors(configuration, magnetic=True)
            else:
                self._draw_lines(self.magnetic_lines, COLORS["magnetic"])
        if self.state.show_equipotentials:
            self._draw_lines(self.equipotentials, COLORS["equipotential"])

        for charge in configuration.charges:
            self._draw_charge(charge)
        for wire in configuration.wires:
            pygame.draw.circle(self.screen, (200, 200, 200), self.camera.world_to_screen(wire.position), 6, 2)

        self._draw_info(configuration)

    def _draw_grid(self) -> None:
        bounds = self._visible_bounds()
        for x in range(int(bounds.x_min) - 1, int(bounds.x_max) + 2):
            start = self.camera.world_to_screen(Vector2(x, bounds.y_min))
            end = self.camera.world_to_screen(Vector2(x, bounds.y_max))
            pygame.draw.line(self.screen, COLORS["grid"], start, end, 1)
        for y in range(int(bounds.y_min) - 1, int(bounds.y_max) + 2):
            start = self.camera.world_to_screen(Vector2(bounds.x_min, y))
            end = self.camera.world_to_screen(Vector2(bounds.x_max, y))
            pygame.draw.line(self.screen, COLORS["grid"], start, end, 1)

    def _draw_axes(self) -> None:
        origin = self.camera.world_to_screen(Vector2())
        pygame.draw.line(self.screen, COLORS["axes"], (0, origin[1]), (self.camera.width, origin[1]), 2)
        pygame.draw.line(self.screen, COLORS["axes"], (origin[0], 0), (origin[0], self.camera.height), 2)

    def _draw_lines(self, lines: Sequence[Polyline], color: Color) -> None:
        for line in lines:
            if len(line) < 2:
                continue
            points = [self.camera.world_to_screen(p) for p in line]
            pygame.draw.lines(self.screen, color, False, points, 2)

    def _draw_vectors(self, configuration: ChargeConfiguration, magnetic: bool) -> None:
        color = COLORS["magnetic"] if magnetic else COLORS["electric"]
        length = 0.06 * self.config.field_scale
        grid = sample_grid(
            configuration, self._visible_bounds(), self.config.settings.grid_resolution, self.config.settings
        )
        for row in grid:
            for sample in row:
                vec = sample.magnetic if magnetic else sample.electric
                direction = vec.normalized()
                if direction.is_zero():
                    continue
                start = self.camera.world_to_screen(sample.position)
                end = self.camera.world_to_screen(sample.position + direction * length)
                pygame.draw.line(self.screen, color, start, end, 1)
                pygame.draw.circle(self.screen, color, end, 2)

    def _draw_charge(self, charge: PointCharge) -> None:
        color = COLORS["positive"] if charge.charge > 0 else COLORS["negative"]
        center = self.camera.world_to_screen(charge.position)
        radius = max(4, self.camera.pixels(abs(charge.charge) * 0.2))
        pygame.draw.circle(self.screen, color, center, radius)
        label = self.small_font.render(f"{charge.charge:+.1f}e", True, (255, 255, 255))
        self.screen.blit(label, label.get_rect(center=(center[0], center[1] + radius + 10)))
        if abs(charge.beta) > self.config.settings.stationary_threshold:
            tip = self.camera.world_to_screen(charge.position + charge.axis.unit() * (charge.beta * 0.8 + 0.3))
            pygame.draw.line(self.screen, COLORS["velocity"], center, tip, 2)
            speed = self.small_font.render(f"{charge.beta * 100:.0f}% c", True, COLORS["velocity"])
            self.screen.blit(speed, (tip[0] + 4, tip[1] - 16))

    def _draw_info(self, configuration: ChargeConfiguration) -> None:
        scenario = get_scenario(self.state.scenario)
        lines = [
            scenario.name,
            f"q = {self.state.charge:+.1f} e   β = {self.state.beta:.2f}   γ = {self.state.gamma:.3f}",
        ]
        if self.state.show_transformation and self.state.beta > self.config.settings.stationary_threshold:
            lines.extend(["E∥' = E∥", "E⟂' = γ(E⟂ + v × B)", "B⟂' = γ(B⟂ − v × E/c²)"])
        if self.selected_point is not None:
            e_vec = electric_field_at(self.selected_point, configuration, self.config.settings)
            b_z = magnetic_field_z(self.selected_point, configuration, self.config.settings)
            b_loop = magnetic_field_at(self.selected_point, configuration, self.config.settings)
            lines.append(f"Point ({self.selected_point.x:.2f}, {self.selected_point.y:.2f}) m")
            lines.append(f"|E| = {field_magnitude(e_vec):.2e} N/C   B_z = {b_z:+.2e} T")
            lines.append(f"|B| loops = {field_magnitude(b_loop):.2e} T")
            marker = self.camera.world_to_screen(self.selected_point)
            pygame.draw.circle(self.screen, COLORS["selected"], marker, 5, 1)
        if self.show_help:
            lines.extend([
                "1-6 scenario  ←/→ β  ↑/↓ q  +/- lines",
                "E/M fields  V vectors  P equipotentials  G grid",
                "T transformation  Space pause  R reset  Esc quit",
            ])

        title, *details = lines
        surfaces = [self.font.render(title, True, COLORS["text"])]
        surfaces.extend(self.small_font.render(text, True, COLORS["text"]) for text in details)
        width = max(surface.get_width() for surface in surfaces) + 20
        height = sum(surface.get_height() + 4 for surface in surfaces) + 16
        box = pygame.Rect(12, 12, width, height)
        pygame.draw.rect(self.screen, COLORS["info_box"], box, border_radius=6)
        y = box.top + 8
        for surface in surfaces:
            self.screen.blit(surface, (box.left + 10, y))
            y += surface.get_height() + 4
