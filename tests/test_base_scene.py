import pygame
import pytest

from base_scene import BaseScene
from simulation_config import SimulationConfig


class _StalledClock:
    def tick(self, fps):
        return 5000


class _OneFrame(BaseScene):
    def __init__(self, screen, config):
        super().__init__(screen, config)
        self.steps = []

    def update(self, dt):
        self.steps.append(dt)
        self.running = False


@pytest.fixture
def screen(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    pygame.init()
    yield pygame.display.set_mode((64, 48))
    pygame.quit()


def test_scene_sets_caption_and_title_font(screen):
    scene = BaseScene(screen, SimulationConfig())
    assert pygame.display.get_caption()[0] == BaseScene.CAPTION
    assert scene.font.size("Dipole")[0] > 0


def test_long_stall_is_capped(screen):
    scene = _OneFrame(screen, SimulationConfig())
    scene.clock = _StalledClock()
    assert scene.run() is True
    assert scene.steps == [BaseScene.MAX_DT]
