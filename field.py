"""Computation helpers for electric and magnetic fields in the 2D scene.

All functions are pure: they take a :class:`ChargeConfiguration` snapshot and
return fresh values. Distances used as divisors are floored at
``FieldSettings.epsilon`` and velocities are clamped to ``max_beta`` so every
result is finite.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List

from constants import SI, PhysicsConstants
from lorentz import clamp_beta, lorentz_factor
from objects import ChargeConfiguration, PointCharge, WireCurrent
from simulation_config import Bounds, FieldSettings
from vector2 import Vector2

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = FieldSettings()


@dataclass(frozen=True)
class BetaCheck:
    """Outcome of validating a velocity before it is used."""

    value: float
    original: float
    clamped: bool


@dataclass(frozen=True)
class FieldSample:
    position: Vector2
    electric: Vector2
    magnetic: Vector2
    magnetic_z: float
    potential: float


def check_beta(beta: float, max_beta: float = DEFAULT_SETTINGS.max_beta) -> BetaCheck:
    """Validate ``beta`` and report whether it had to be clamped."""

    value = clamp_beta(beta, max_beta)
    return BetaCheck(value=value, original=beta, clamped=value != beta)


def effective_beta(charge: PointCharge, settings: FieldSettings = DEFAULT_SETTINGS) -> float:
    """Velocity actually used for ``charge``; slow charges count as stationary."""

    beta = clamp_beta(charge.beta, settings.max_beta)
    if abs(beta) < settings.stationary_threshold:
        return 0.0
    return beta


def field_magnitude(vec: Vector2) -> float:
    return vec.magnitude()


def _finite_or_zero(vec: Vector2, what: str) -> Vector2:
    if vec.is_finite():
        return vec
    logger.debug("non-finite %s contribution discarded", what)
    return Vector2()


def _finite_scalar(value: float, what: str) -> float:
    if math.isfinite(value):
        return value
    logger.debug("non-finite %s contribution discarded", what)
    return 0.0


def _charge_electric_field(
    point: Vector2,
    charge: PointCharge,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> Vector2:
    offset = point - charge.position
    distance = max(offset.magnitude(), settings.epsilon)
    strength = constants.coulomb_constant * constants.charge_in_coulombs(charge.charge) / (distance * distance)
    field = offset.normalized() * strength

    beta = effective_beta(charge, settings)
    if beta == 0.0:
        return field

    # E parallel to the motion is unchanged, the perpendicular part grows by gamma.
    gamma = lorentz_factor(beta, settings.max_beta)
    axis = charge.axis.unit()
    parallel = axis * field.dot(axis)
    perpendicular = field - parallel
    return parallel + perpendicular * gamma


def electric_field_at(
    point: Vector2,
    configuration: ChargeConfiguration,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> Vector2:
    """Compute the electric field (Ex, Ey) generated at ``point``."""

    if not point.is_finite():
        return Vector2()

    total = Vector2()
    for charge in configuration.charges:
        contribution = _charge_electric_field(point, charge, settings, constants)
        total = total + _finite_or_zero(contribution, "electric")
    return total


def _charge_magnetic_z(
    point: Vector2,
    charge: PointCharge,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> float:
    """Out-of-plane B of a charge moving in the plane: (v x E)_z / c^2."""

    beta = effective_beta(charge, settings)
    if beta == 0.0 or not charge.axis.is_in_plane():
        return 0.0
    electric = _charge_electric_field(point, charge, settings, constants)
    return beta * charge.axis.unit().cross(electric) / constants.speed_of_light


def _wire_magnetic_z(
    point: Vector2,
    wire: WireCurrent,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> float:
    if not wire.orientation.is_in_plane():
        return 0.0
    signed_distance = wire.orientation.unit().cross(point - wire.position)
    if signed_distance == 0.0:
        return 0.0
    distance = max(abs(signed_distance), settings.epsilon)
    strength = constants.vacuum_permeability * wire.current / (2 * math.pi * distance)
    return math.copysign(strength, signed_distance)


def magnetic_field_z(
    point: Vector2,
    configuration: ChargeConfiguration,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> float:
    """Out-of-plane component of B at ``point``."""

    if not point.is_finite():
        return 0.0

    total = 0.0
    for charge in configuration.charges:
        total += _finite_scalar(_charge_magnetic_z(point, charge, settings, constants), "magnetic")
    for wire in configuration.wires:
        total += _finite_scalar(_wire_magnetic_z(point, wire, settings, constants), "magnetic")
    return total


def _charge_magnetic_in_plane(
    point: Vector2,
    charge: PointCharge,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> Vector2:
    """Circulating B drawn around a moving charge.

    For motion along z the field is exactly (beta / c) z_hat x E. For motion in
    the plane the loops keep that circulation but take the magnitude of the
    exact |B_z| = |(v x E)_z| / c^2, so B vanishes on the motion axis.
    """

    beta = effective_beta(charge, settings)
    if beta == 0.0:
        return Vector2()
    offset = point - charge.position
    if charge.axis.is_in_plane():
        strength = abs(_charge_magnetic_z(point, charge, settings, constants))
    else:
        distance = max(offset.magnitude(), settings.epsilon)
        gamma = lorentz_factor(beta, settings.max_beta)
        coulomb = constants.coulomb_constant * abs(constants.charge_in_coulombs(charge.charge))
        strength = gamma * coulomb / (distance * distance) * abs(beta) / constants.speed_of_light
    # Positive q moving forward circulates counterclockwise.
    return offset.normalized().perpendicular() * math.copysign(strength, charge.charge * beta)


def _wire_magnetic_in_plane(
    point: Vector2,
    wire: WireCurrent,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> Vector2:
    """B = mu0 I / (2 pi r), tangential around a wire piercing the plane."""

    if wire.orientation.is_in_plane():
        return Vector2()
    offset = point - wire.position
    distance = max(offset.magnitude(), settings.epsilon)
    strength = constants.vacuum_permeability * wire.current / (2 * math.pi * distance)
    return offset.normalized().perpendicular() * strength


def magnetic_field_at(
    point: Vector2,
    configuration: ChargeConfiguration,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> Vector2:
    """Compute the in-plane magnetic field drawn at ``point``."""

    if not point.is_finite():
        return Vector2()

    total = Vector2()
    for charge in configuration.charges:
        contribution = _charge_magnetic_in_plane(point, charge, settings, constants)
        total = total + _finite_or_zero(contribution, "magnetic")
    for wire in configuration.wires:
        contribution = _wire_magnetic_in_plane(point, wire, settings, constants)
        total = total + _finite_or_zero(contribution, "magnetic")
    return total


def potential_at(
    point: Vector2,
    configuration: ChargeConfiguration,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> float:
    """Compute the electrostatic potential at a given point.

    A moving charge gives γ·k·q / sqrt((γ·d∥)² + d⊥²): the distance along the
    motion axis is stretched by γ, which makes the equipotentials of a charge
    moving in the plane ellipses contracted by 1/γ.
    """

    if not point.is_finite():
        return 0.0

    potential = 0.0
    for charge in configuration.charges:
        offset = point - charge.position
        beta = effective_beta(charge, settings)
        gamma = lorentz_factor(beta, settings.max_beta)
        if beta != 0.0 and charge.axis.is_in_plane():
            axis = charge.axis.unit()
            along = offset.dot(axis)
            across = offset.cross(axis)
            distance = math.hypot(gamma * along, across)
        else:
            distance = offset.magnitude()
        distance = max(distance, settings.epsilon)
        value = gamma * constants.coulomb_constant * constants.charge_in_coulombs(charge.charge) / distance
        potential += _finite_scalar(value, "potential")
    return potential


def sample_field(
    point: Vector2,
    configuration: ChargeConfiguration,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> FieldSample:
    return FieldSample(
        position=point,
        electric=electric_field_at(point, configuration, settings, constants),
        magnetic=magnetic_field_at(point, configuration, settings, constants),
        magnetic_z=magnetic_field_z(point, configuration, settings, constants),
        potential=potential_at(point, configuration, settings, constants),
    )


def sample_grid(
    configuration: ChargeConfiguration,
    bounds: Bounds = Bounds(),
    resolution: int = DEFAULT_SETTINGS.grid_resolution,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> List[List[FieldSample]]:
    """Sample the fields on a ``resolution`` x ``resolution`` grid, row by row in y."""

    if resolution < 2:
        raise ValueError(f"resolution must be at least 2, got {resolution}")

    xs = [bounds.x_min + bounds.width * i / (resolution - 1) for i in range(resolution)]
    ys = [bounds.y_min + bounds.height * j / (resolution - 1) for j in range(resolution)]
    return [
        [sample_field(Vector2(x, y), configuration, settings, constants) for x in xs]
        for y in ys
    ]
