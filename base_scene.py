"""Shared scene base class for pygame views of the field engine."""
from __future__ import annotations

import pygame

from simulation_config import SimulationConfig


class BaseScene:
    """Frame loop shared by the field views; subclasses fill in update/draw."""

    CAPTION = "Relativistic Field Visualizer"
    BG_COLOR = (13, 27, 42)
    FPS = 60
    MAX_DT = 0.1  # seconds; longer stalls (window drag) do not jump the motion

    def __init__(self, screen: pygame.Surface, config: SimulationConfig) -> None:
        self.screen = screen
        self.config = config
        self.clock = pygame.time.Clock()
        # Titles use ``font``; subclasses add smaller faces for details.
        self.font = pygame.font.Font(None, 26)
        self.running = True
        pygame.display.set_caption(self.CAPTION)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Return False when the application should close."""

        if event.type == pygame.QUIT:
            self.running = False
            return False
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False
        return True

    def update(self, dt: float) -> None:
        """Advance the simulation by ``dt`` seconds."""

    def draw(self) -> None:
        """Render one frame onto ``self.screen``."""

    def run(self) -> bool:
        while self.running:
            for event in pygame.event.get():
                if not self.handle_event(event):
                    return False

            dt = min(self.clock.tick(self.FPS) / 1000.0, self.MAX_DT)
            self.update(dt)
            self.draw()
            pygame.display.flip()
        return True
