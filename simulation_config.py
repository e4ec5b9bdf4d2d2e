"""Configuration objects and enumerations for the field engine and viewer."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum, auto
from typing import Any, Mapping

from vector2 import Vector2


class FieldKind(Enum):
    """Which field a line is traced through."""

    ELECTRIC = auto()
    MAGNETIC = auto()

    def label(self) -> str:
        return "Electric field (E)" if self is FieldKind.ELECTRIC else "Magnetic field (B)"


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle in simulation coordinates."""

    x_min: float = -6.0
    x_max: float = 6.0
    y_min: float = -5.0
    y_max: float = 5.0

    def contains(self, point: Vector2) -> bool:
        return self.x_min <= point.x <= self.x_max and self.y_min <= point.y <= self.y_max

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min


@dataclass(frozen=True)
class FieldSettings:
    """Numerical policy shared by every field evaluation."""

    epsilon: float = 0.1  # minimum distance used as a divisor
    max_beta: float = 0.999
    stationary_threshold: float = 0.01  # below this |beta| a charge has no B
    lightlike_tolerance: float = 1e-9
    grid_resolution: int = 25
    equipotential_levels: int = 8


@dataclass(frozen=True)
class TraceOptions:
    """Integration limits for field-line and equipotential tracing."""

    step_size: float = 0.05
    max_steps: int = 200
    bounds: Bounds = Bounds()
    capture_radius: float = 0.3
    seed_radius: float = 0.3
    min_field: float = 1e-30

    def __post_init__(self) -> None:
        if self.step_size <= 0:
            raise ValueError(f"step_size must be positive, got {self.step_size}")
        if self.max_steps < 0:
            raise ValueError(f"max_steps must not be negative, got {self.max_steps}")


@dataclass
class SimulationConfig:
    """Container for the user-tunable settings of a session."""

    settings: FieldSettings = field(default_factory=FieldSettings)
    trace: TraceOptions = field(default_factory=TraceOptions)
    num_field_lines: int = 20
    field_scale: float = 5.0

    def set_num_field_lines(self, count: int) -> None:
        """Change how many lines are seeded around each source charge."""

        self.num_field_lines = max(1, int(count))

    def set_field_scale(self, scale: float) -> None:
        self.field_scale = max(0.1, float(scale))

    def set_trace(self, **changes: Any) -> None:
        """Replace individual tracing limits, e.g. ``set_trace(max_steps=400)``."""

        values = {f.name: getattr(self.trace, f.name) for f in fields(self.trace)}
        values.update(changes)
        self.trace = TraceOptions(**values)

    def describe(self) -> str:
        """Return a short human-readable summary of the configuration."""

        return (
            f"{self.num_field_lines} lines • step {self.trace.step_size:g}"
            f" • ε={self.settings.epsilon:g} • β≤{self.settings.max_beta:g}"
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "SimulationConfig":
        """Build a configuration from a flat or nested plain mapping."""

        settings_keys = {f.name for f in fields(FieldSettings)}
        trace_keys = {f.name for f in fields(TraceOptions)}

        settings_data = dict(data.get("settings", {}))
        trace_data = dict(data.get("trace", {}))
        for key, value in data.items():
            if key in settings_keys:
                settings_data[key] = value
            elif key in trace_keys:
                trace_data[key] = value
        if "bounds" in trace_data and not isinstance(trace_data["bounds"], Bounds):
            trace_data["bounds"] = Bounds(*trace_data["bounds"])

        config = cls(settings=FieldSettings(**settings_data), trace=TraceOptions(**trace_data))
        if "num_field_lines" in data:
            config.set_num_field_lines(data["num_field_lines"])
        if "field_scale" in data:
            config.set_field_scale(data["field_scale"])
        return config
