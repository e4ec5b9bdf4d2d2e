"""Immutable session state handed from the input layer to the field engine."""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, fields, replace
from datetime import datetime
from typing import Deque, Iterator, Optional

from lorentz import SpacetimeEvent, lorentz_factor, to_other_frame
from objects import ChargeConfiguration
from scenarios import DEFAULT_SCENARIO, get_scenario
from vector2 import Vector2

logger = logging.getLogger(__name__)

CHARGE_MIN = -2.0
CHARGE_MAX = 2.0
BETA_MAX = 0.99
MOTION_SPEED = 3.0  # scene units per second at beta = 1
HISTORY_LIMIT = 5


@dataclass(frozen=True)
class SimulationState:
    """Everything the user controls; replaced wholesale on every change."""

    scenario: str = DEFAULT_SCENARIO
    charge: float = 1.0
    beta: float = 0.0
    offset: Vector2 = Vector2()
    time: float = 0.0
    playing: bool = True
    show_electric: bool = True
    show_magnetic: bool = True
    show_vectors: bool = False
    show_equipotentials: bool = False
    show_grid: bool = True
    show_transformation: bool = False
    num_field_lines: int = 20

    @property
    def gamma(self) -> float:
        return lorentz_factor(self.beta)

    def with_scenario(self, identifier: str) -> "SimulationState":
        scenario = get_scenario(identifier)
        charge = self.charge
        if scenario.configuration.charges:
            charge = scenario.configuration.charges[0].charge
        beta = scenario.default_beta if scenario.uses_velocity_control else self.beta
        logger.info("scenario changed to %s", identifier)
        return replace(self, scenario=identifier, charge=charge, beta=beta, time=0.0)

    def with_charge(self, charge: float) -> "SimulationState":
        charge = round(min(max(charge, CHARGE_MIN), CHARGE_MAX), 1)
        return replace(self, charge=charge)

    def with_beta(self, beta: float) -> "SimulationState":
        return replace(self, beta=min(max(beta, 0.0), BETA_MAX))

    def with_offset(self, offset: Vector2) -> "SimulationState":
        return replace(self, offset=offset)

    def with_num_field_lines(self, count: int) -> "SimulationState":
        return replace(self, num_field_lines=max(1, int(count)))

    def toggled(self, flag: str) -> "SimulationState":
        """Flip one of the ``show_*`` display toggles or ``playing``."""

        toggles = {f.name for f in fields(self) if f.name.startswith("show_")} | {"playing"}
        if flag not in toggles:
            raise ValueError(f"unknown toggle {flag!r}")
        return replace(self, **{flag: not getattr(self, flag)})

    def advanced(self, dt: float) -> "SimulationState":
        if not self.playing:
            return self
        return replace(self, time=self.time + dt)

    def reset(self) -> "SimulationState":
        return replace(self, time=0.0, offset=Vector2())

    def charge_displacement(self) -> Vector2:
        if not get_scenario(self.scenario).uses_velocity_control:
            return Vector2()
        return Vector2(self.beta * self.time * MOTION_SPEED, 0.0)

    def configuration(self) -> ChargeConfiguration:
        """Resolve the scenario into the configuration for the current frame."""

        scenario = get_scenario(self.scenario)
        configuration = scenario.configuration
        if scenario.uses_charge_control:
            configuration = configuration.with_charge(self.charge)
        if scenario.uses_velocity_control:
            configuration = configuration.with_beta(self.beta)
        return configuration.translated(self.offset + self.charge_displacement())


@dataclass(frozen=True)
class TransformRecord:
    beta: float
    event: SpacetimeEvent
    transformed: SpacetimeEvent
    timestamp: datetime


class TransformHistory:
    """Most recent Lorentz calculations, newest first."""

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        self._records: Deque[TransformRecord] = deque(maxlen=limit)

    def record(self, event: SpacetimeEvent, beta: float) -> TransformRecord:
        entry = TransformRecord(beta, event, to_other_frame(event, beta), datetime.now())
        self._records.appendleft(entry)
        return entry

    @property
    def latest(self) -> Optional[TransformRecord]:
        return self._records[0] if self._records else None

    def clear(self) -> None:
        self._records.clear()

    def __iter__(self) -> Iterator[TransformRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)
