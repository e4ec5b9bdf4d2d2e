"""Named presets for the field visualiser and the Lorentz calculator."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from objects import ChargeConfiguration, PointCharge, WireCurrent
from vector2 import Vector2

logger = logging.getLogger(__name__)


class UnknownScenarioError(KeyError):
    """Raised when a preset identifier is not in the catalog."""


@dataclass(frozen=True)
class Scenario:
    identifier: str
    name: str
    description: str
    configuration: ChargeConfiguration
    default_beta: float = 0.0
    uses_charge_control: bool = False
    uses_velocity_control: bool = False


@dataclass(frozen=True)
class LorentzPreset:
    identifier: str
    name: str
    x: float
    t: float
    beta: float


def _charges(*specs: Tuple[float, float, float]) -> ChargeConfiguration:
    return ChargeConfiguration(charges=tuple(PointCharge(Vector2(x, y), q) for x, y, q in specs))


SCENARIOS: Dict[str, Scenario] = {
    scenario.identifier: scenario
    for scenario in (
        Scenario(
            "stationary",
            "Stationary Point Charge",
            "A single charge at rest. Shows radial electric field only.",
            _charges((0.0, 0.0, 1.0)),
            uses_charge_control=True,
        ),
        Scenario(
            "moving",
            "Moving Charge",
            "A charge moving at constant velocity. Shows both E and B fields with relativistic effects.",
            ChargeConfiguration(charges=(PointCharge(Vector2(0.0, 0.0), 1.0, beta=0.6),)),
            default_beta=0.6,
            uses_charge_control=True,
            uses_velocity_control=True,
        ),
        Scenario(
            "dipole",
            "Electric Dipole",
            "Equal and opposite charges separated by a distance.",
            _charges((-1.0, 0.0, 1.0), (1.0, 0.0, -1.0)),
        ),
        Scenario(
            "wire",
            "Current-Carrying Wire",
            "Infinitely long straight wire carrying current.",
            ChargeConfiguration(wires=(WireCurrent(Vector2(0.0, 0.0), 1.0),)),
        ),
        Scenario(
            "two_charges",
            "Two Similar Charges",
            "Two charges of same sign showing field repulsion.",
            _charges((-1.5, 0.0, 1.0), (1.5, 0.0, 1.0)),
        ),
        Scenario(
            "quadrupole",
            "Quadrupole",
            "Four charges arranged in alternating pattern.",
            _charges((-1.5, -1.5, 1.0), (1.5, -1.5, -1.0), (-1.5, 1.5, -1.0), (1.5, 1.5, 1.0)),
        ),
    )
}

DEFAULT_SCENARIO = "stationary"

LORENTZ_PRESETS: Dict[str, LorentzPreset] = {
    preset.identifier: preset
    for preset in (
        LorentzPreset("custom", "Custom", 5.0, 2.0, 0.8),
        LorentzPreset("time_dilation", "Time Dilation", 0.0, 5.0, 0.6),
        LorentzPreset("length_contraction", "Length Contraction", 10.0, 0.0, 0.8),
        LorentzPreset("twin_paradox", "Twin Paradox", 0.0, 10.0, 0.87),
        LorentzPreset("simultaneity", "Relativity of Simultaneity", 5.0, 0.0, 0.9),
    )
}


def get_scenario(identifier: str) -> Scenario:
    try:
        scenario = SCENARIOS[identifier]
    except KeyError:
        raise UnknownScenarioError(identifier) from None
    logger.debug("resolved scenario %s", identifier)
    return scenario


def list_scenarios() -> List[Scenario]:
    return list(SCENARIOS.values())


def get_lorentz_preset(identifier: str) -> LorentzPreset:
    try:
        return LORENTZ_PRESETS[identifier]
    except KeyError:
        raise UnknownScenarioError(identifier) from None
