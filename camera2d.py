"""Simple 2D camera mapping simulation coordinates to pygame pixels."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Tuple

from vector2 import Vector2


@dataclass
class Camera2D:
    """Y-up world camera centred on ``center`` with ``zoom`` pixels per unit."""

    MIN_ZOOM: ClassVar[float] = 5.0
    MAX_ZOOM: ClassVar[float] = 400.0

    width: int = 1000
    height: int = 700
    center: Vector2 = Vector2()
    zoom: float = 50.0

    def world_to_screen(self, point: Vector2) -> Tuple[int, int]:
        """Convert world coordinates into (rounded) screen coordinates."""

        sx = self.width / 2 + (point.x - self.center.x) * self.zoom
        sy = self.height / 2 - (point.y - self.center.y) * self.zoom
        return int(round(sx)), int(round(sy))

    def screen_to_world(self, sx: float, sy: float) -> Vector2:
        """Convert screen coordinates back to world coordinates."""

        wx = (sx - self.width / 2) / self.zoom + self.center.x
        wy = -(sy - self.height / 2) / self.zoom + self.center.y
        return Vector2(wx, wy)

    def zoom_at(self, focus_x: float, focus_y: float, zoom_factor: float) -> None:
        """Zoom while keeping a given focus point stationary on screen."""

        if zoom_factor <= 0:
            return
        focus_world = self.screen_to_world(focus_x, focus_y)
        self.zoom = max(self.MIN_ZOOM, min(self.zoom * zoom_factor, self.MAX_ZOOM))
        moved = self.screen_to_world(focus_x, focus_y)
        self.center = self.center + (focus_world - moved)

    def pan(self, dx_pixels: float, dy_pixels: float) -> None:
        self.center = self.center + Vector2(-dx_pixels / self.zoom, dy_pixels / self.zoom)

    def pixels(self, length: float) -> int:
        return max(1, int(round(length * self.zoom)))
