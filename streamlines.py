"""Field-line and equipotential tracing through the evaluated fields.

Lines are integrated with explicit Euler steps of fixed length along the unit
field direction. Every trace is bounded by ``TraceOptions.max_steps`` and by the
domain rectangle, so it always terminates.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence, Union

from constants import SI, PhysicsConstants
from field import (
    DEFAULT_SETTINGS,
    effective_beta,
    electric_field_at,
    magnetic_field_at,
    potential_at,
)
from lorentz import lorentz_factor
from objects import Axis, ChargeConfiguration, PointCharge
from simulation_config import FieldKind, FieldSettings, TraceOptions
from vector2 import Vector2

logger = logging.getLogger(__name__)

Polyline = List[Vector2]
FieldFunction = Callable[[Vector2], Vector2]

DEFAULT_OPTIONS = TraceOptions()
BISECTION_ITERATIONS = 60


@dataclass(frozen=True)
class EquipotentialEllipse:
    """Closed-form equipotential of a single charge.

    ``rx`` is the semi-axis along the motion ``axis`` (contracted by 1/γ),
    ``ry`` the semi-axis across it.
    """

    center: Vector2
    rx: float
    ry: float
    level: float
    axis: Axis = Axis.X


def seed_points(center: Vector2, count: int, radius: float, phase: float = 0.0) -> List[Vector2]:
    """``count`` equally spaced points on a circle around ``center``."""

    if count <= 0:
        raise ValueError(f"count must be positive, got {count}")
    return [center + Vector2.from_polar(radius, phase + 2 * math.pi * i / count) for i in range(count)]


def _closes_loop(seed: Vector2, tangent: Vector2, previous: Vector2, current: Vector2, travelled: float, step: float) -> bool:
    """True once a line has come back around through its starting point."""

    if travelled < 4 * step:
        return False
    before = (previous - seed).dot(tangent)
    after = (current - seed).dot(tangent)
    if not (before < 0.0 <= after):
        return False
    return current.distance_to(seed) < max(2 * step, 0.1 * travelled)


def _integrate(
    seed: Vector2,
    direction_of: FieldFunction,
    options: TraceOptions,
    sign: float,
    sinks: Sequence[PointCharge] = (),
    closable: bool = False,
) -> Polyline:
    points: Polyline = [seed]
    current = seed
    travelled = 0.0
    tangent: Optional[Vector2] = None
    reason = "max steps"

    for _ in range(options.max_steps):
        vec = direction_of(current)
        magnitude = vec.magnitude()
        if not math.isfinite(magnitude) or magnitude <= options.min_field:
            reason = "vanishing field"
            break
        unit = vec * (sign / magnitude)
        if tangent is None:
            tangent = unit
        next_point = current + unit * options.step_size
        if not next_point.is_finite() or not options.bounds.contains(next_point):
            reason = "left domain"
            break

        travelled += options.step_size
        if closable and _closes_loop(seed, tangent, current, next_point, travelled, options.step_size):
            points.append(seed)
            reason = "closed loop"
            break

        points.append(next_point)
        current = next_point
        if any(current.distance_to(sink.position) < options.capture_radius for sink in sinks):
            reason = "captured by sink"
            break

    logger.debug("trace from (%.3f, %.3f) stopped after %d points: %s", seed.x, seed.y, len(points), reason)
    return points


def trace_field_line(
    seed: Vector2,
    configuration: ChargeConfiguration,
    options: TraceOptions = DEFAULT_OPTIONS,
    direction: int = 1,
    kind: FieldKind = FieldKind.ELECTRIC,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> Polyline:
    """Trace one field line from ``seed``.

    ``direction`` +1 follows the field (positive towards negative charges),
    -1 runs against it. Electric lines stop inside the capture radius of a
    charge of the opposite sign to the tracing direction; magnetic lines stop
    once they close on themselves.
    """

    if configuration.is_empty or not seed.is_finite() or not options.bounds.contains(seed):
        return []

    sign = 1.0 if direction >= 0 else -1.0
    if kind is FieldKind.ELECTRIC:
        sinks = configuration.sinks() if sign > 0 else configuration.sources()
        return _integrate(
            seed,
            lambda p: electric_field_at(p, configuration, settings, constants),
            options,
            sign,
            sinks=sinks,
        )
    return _integrate(
        seed,
        lambda p: magnetic_field_at(p, configuration, settings, constants),
        options,
        sign,
        closable=True,
    )


def trace_field_lines(
    configuration: ChargeConfiguration,
    num_field_lines: int,
    options: TraceOptions = DEFAULT_OPTIONS,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> List[Polyline]:
    """Seed ``num_field_lines`` lines around every source charge and trace them.

    Sources are the positive charges; with only negative charges present the
    lines are traced backwards out of them instead.
    """

    sources = configuration.sources()
    direction = 1
    if not sources:
        sources = configuration.sinks()
        direction = -1

    lines: List[Polyline] = []
    for charge in sources:
        for seed in seed_points(charge.position, num_field_lines, options.seed_radius):
            line = trace_field_line(seed, configuration, options, direction, FieldKind.ELECTRIC, settings, constants)
            if len(line) > 1:
                lines.append(line)
    return lines


def _loop_options(options: TraceOptions, radius: float) -> TraceOptions:
    """Coarsen the step so a loop of ``radius`` closes within ``max_steps``."""

    # Euler steps spiral outwards slightly, so allow a quarter turn extra.
    length = 1.25 * 2 * math.pi * radius
    budget = options.max_steps - 8
    if budget <= 0 or length / options.step_size <= budget:
        return options
    return replace(options, step_size=length / budget)


def trace_magnetic_lines(
    configuration: ChargeConfiguration,
    num_loops: int,
    options: TraceOptions = DEFAULT_OPTIONS,
    max_radius: float = 4.0,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> List[Polyline]:
    """Closed B loops around out-of-plane wires and moving charges."""

    if num_loops <= 0:
        raise ValueError(f"num_loops must be positive, got {num_loops}")

    # Seeds go across the motion, where the circulating field is strongest.
    centers = [
        (wire.position, Vector2(0.0, 1.0))
        for wire in configuration.wires
        if not wire.orientation.is_in_plane()
    ]
    for charge in configuration.charges:
        if effective_beta(charge, settings) == 0.0:
            continue
        across = charge.axis.unit().perpendicular() if charge.axis.is_in_plane() else Vector2(0.0, 1.0)
        centers.append((charge.position, across))

    lines: List[Polyline] = []
    for center, across in centers:
        for i in range(1, num_loops + 1):
            radius = max_radius * i / num_loops
            seed = center + across * radius
            line = trace_field_line(
                seed,
                configuration,
                _loop_options(options, radius),
                kind=FieldKind.MAGNETIC,
                settings=settings,
                constants=constants,
            )
            if len(line) > 1:
                lines.append(line)
    return lines


def trace_equipotential(
    seed: Vector2,
    configuration: ChargeConfiguration,
    options: TraceOptions = DEFAULT_OPTIONS,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
) -> Polyline:
    """Follow the contour of constant potential through ``seed``."""

    if configuration.is_empty or not seed.is_finite() or not options.bounds.contains(seed):
        return []
    return _integrate(
        seed,
        lambda p: electric_field_at(p, configuration, settings, constants).perpendicular(),
        options,
        1.0,
        closable=True,
    )


def _single_charge_ellipse(
    charge: PointCharge,
    level: float,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> Optional[EquipotentialEllipse]:
    source = constants.coulomb_constant * constants.charge_in_coulombs(charge.charge)
    if source == 0.0 or (source > 0) != (level > 0):
        return None
    beta = effective_beta(charge, settings)
    gamma = lorentz_factor(beta, settings.max_beta)
    radius = abs(gamma * source / level)
    if radius < settings.epsilon:
        return None
    if beta == 0.0 or not charge.axis.is_in_plane():
        return EquipotentialEllipse(charge.position, radius, radius, level, charge.axis)
    return EquipotentialEllipse(charge.position, radius / gamma, radius, level, charge.axis)


def _find_level_crossing(
    center: Vector2,
    ray: Vector2,
    configuration: ChargeConfiguration,
    level: float,
    options: TraceOptions,
    settings: FieldSettings,
    constants: PhysicsConstants,
) -> Optional[Vector2]:
    def residual(t: float) -> float:
        return potential_at(center + ray * t, configuration, settings, constants) - level

    reach = math.hypot(options.bounds.width, options.bounds.height)
    scan = options.step_size
    lo = scan
    f_lo = residual(lo)
    hi = lo
    while hi < reach:
        hi = lo + scan
        f_hi = residual(hi)
        if f_lo == 0.0:
            return center + ray * lo
        if (f_lo < 0.0) != (f_hi < 0.0):
            break
        lo, f_lo = hi, f_hi
    else:
        return None

    for _ in range(BISECTION_ITERATIONS):
        mid = 0.5 * (lo + hi)
        f_mid = residual(mid)
        if (f_lo < 0.0) == (f_mid < 0.0):
            lo, f_lo = mid, f_mid
        else:
            hi = mid
    return center + ray * (0.5 * (lo + hi))


def equipotential_contour(
    center: Vector2,
    configuration: ChargeConfiguration,
    level: float,
    options: TraceOptions = DEFAULT_OPTIONS,
    settings: FieldSettings = DEFAULT_SETTINGS,
    constants: PhysicsConstants = SI,
    ray: Vector2 = Vector2(0.0, 1.0),
) -> Union[Polyline, EquipotentialEllipse]:
    """Equipotential at potential ``level``.

    A configuration made of one charge yields the analytic ellipse around it.
    Otherwise the contour crossing the ``ray`` from ``center`` is located by
    bisection and traced for at most ``options.max_steps`` steps; an empty
    list means no such contour was found.
    """

    if level == 0.0 or not math.isfinite(level) or not configuration.charges:
        return []

    if len(configuration.charges) == 1 and not configuration.wires:
        ellipse = _single_charge_ellipse(configuration.charges[0], level, settings, constants)
        return ellipse if ellipse is not None else []

    seed = _find_level_crossing(center, ray.normalized(), configuration, level, options, settings, constants)
    if seed is None:
        logger.debug("no crossing of level %.6g found from (%.3f, %.3f)", level, center.x, center.y)
        return []
    return trace_equipotential(seed, configuration, options, settings, constants)


def ellipse_points(ellipse: EquipotentialEllipse, segments: int = 64) -> Polyline:
    """Sample an :class:`EquipotentialEllipse` as a closed polyline."""

    if segments < 3:
        raise ValueError(f"segments must be at least 3, got {segments}")
    along = ellipse.axis.unit() if ellipse.axis.is_in_plane() else Vector2(1.0, 0.0)
    across = along.perpendicular()
    points = []
    for i in range(segments + 1):
        angle = 2 * math.pi * i / segments
        points.append(ellipse.center + along * (ellipse.rx * math.cos(angle)) + across * (ellipse.ry * math.sin(angle)))
    return points
