"""Minimal immutable 2D vector used throughout the field computations."""
from __future__ import annotations

import math
from dataclasses import dataclass

ZERO_TOLERANCE = 1e-12


@dataclass(frozen=True)
class Vector2:
    """A point or a direction in the simulation plane."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_polar(cls, radius: float, angle: float) -> "Vector2":
        return cls(radius * math.cos(angle), radius * math.sin(angle))

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vector2":
        return Vector2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vector2":
        return self * scalar

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: "Vector2") -> float:
        """Out-of-plane (z) component of the 3D cross product."""

        return self.x * other.y - self.y * other.x

    def perpendicular(self) -> "Vector2":
        """Rotate by +90 degrees, i.e. ``z_hat x self``."""

        return Vector2(-self.y, self.x)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector2":
        mag = self.magnitude()
        if mag < ZERO_TOLERANCE or not math.isfinite(mag):
            return Vector2()
        return Vector2(self.x / mag, self.y / mag)

    def distance_to(self, other: "Vector2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_finite(self) -> bool:
        return math.isfinite(self.x) and math.isfinite(self.y)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0
