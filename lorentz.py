"""Lorentz boosts in 1+1 dimensions and invariant interval classification.

Events are expressed with the time coordinate as ``ct`` so that both
coordinates share length units; ``transform_si`` covers the metre/second form
shown in the calculator panel.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from constants import SPEED_OF_LIGHT

logger = logging.getLogger(__name__)

DEFAULT_MAX_BETA = 0.999

Segment = Tuple[Tuple[float, float], Tuple[float, float]]


def clamp_beta(beta: float, max_beta: float = DEFAULT_MAX_BETA) -> float:
    """Limit ``|beta|`` to ``max_beta``, keeping its sign. NaN maps to 0."""

    if math.isnan(beta):
        logger.debug("beta is NaN, treating as 0")
        return 0.0
    if abs(beta) > max_beta:
        logger.debug("clamping beta %.6g to ±%.6g", beta, max_beta)
        return math.copysign(max_beta, beta)
    return beta


def lorentz_factor(beta: float, max_beta: float = DEFAULT_MAX_BETA) -> float:
    """Return γ = 1/√(1 − β²) for the clamped ``beta``."""

    beta = clamp_beta(beta, max_beta)
    if beta == 0.0:
        return 1.0
    return 1.0 / math.sqrt(1.0 - beta * beta)


class IntervalType(Enum):
    """Causal character of the separation between two events."""

    TIMELIKE = "timelike"
    SPACELIKE = "spacelike"
    LIGHTLIKE = "lightlike"

    def label(self) -> str:
        return self.value.capitalize()

    def description(self) -> str:
        if self is IntervalType.TIMELIKE:
            return "Timelike (causally connected)"
        if self is IntervalType.SPACELIKE:
            return "Spacelike (no causal connection)"
        return "Lightlike (on light cone)"


@dataclass(frozen=True)
class SpacetimeEvent:
    """A point in flat 1+1 spacetime with ``ct`` in the same units as ``x``."""

    x: float
    ct: float
    label: str = ""

    @classmethod
    def from_si(cls, x: float, t: float, c: float = SPEED_OF_LIGHT, label: str = "") -> "SpacetimeEvent":
        return cls(x, c * t, label)

    def t(self, c: float = SPEED_OF_LIGHT) -> float:
        return self.ct / c

    def is_close(self, other: "SpacetimeEvent", tolerance: float = 1e-9) -> bool:
        return math.isclose(self.x, other.x, abs_tol=tolerance) and math.isclose(
            self.ct, other.ct, abs_tol=tolerance
        )


@dataclass(frozen=True)
class LorentzFrame:
    """Inertial frame moving at ``beta`` along +x relative to the lab frame."""

    beta: float = 0.0
    max_beta: float = DEFAULT_MAX_BETA

    @property
    def effective_beta(self) -> float:
        return clamp_beta(self.beta, self.max_beta)

    @property
    def gamma(self) -> float:
        return lorentz_factor(self.beta, self.max_beta)

    def transform(self, event: SpacetimeEvent) -> SpacetimeEvent:
        """Coordinates of ``event`` as measured in this frame."""

        beta = self.effective_beta
        gamma = self.gamma
        return SpacetimeEvent(
            gamma * (event.x - beta * event.ct),
            gamma * (event.ct - beta * event.x),
            event.label,
        )

    def inverse(self, event: SpacetimeEvent) -> SpacetimeEvent:
        """Lab-frame coordinates of an event given in this frame."""

        return LorentzFrame(-self.effective_beta, self.max_beta).transform(event)


def to_other_frame(event: SpacetimeEvent, beta: float, max_beta: float = DEFAULT_MAX_BETA) -> SpacetimeEvent:
    """Apply the boost x' = γ(x − β·ct), ct' = γ(ct − β·x)."""

    return LorentzFrame(beta, max_beta).transform(event)


def transform_si(
    x: float, t: float, beta: float, c: float = SPEED_OF_LIGHT, max_beta: float = DEFAULT_MAX_BETA
) -> Tuple[float, float]:
    """Boost an event given in metres and seconds; returns ``(x', t')``."""

    beta = clamp_beta(beta, max_beta)
    gamma = lorentz_factor(beta, max_beta)
    return gamma * (x - beta * c * t), gamma * (t - beta * x / c)


def spacetime_interval(a: SpacetimeEvent, b: SpacetimeEvent) -> float:
    """Δs² = Δx² − Δ(ct)²; positive for spacelike separations."""

    dx = b.x - a.x
    dct = b.ct - a.ct
    return dx * dx - dct * dct


def classify_interval(interval: float, tolerance: float = 1e-9) -> IntervalType:
    if abs(interval) <= tolerance:
        return IntervalType.LIGHTLIKE
    if interval > 0:
        return IntervalType.SPACELIKE
    return IntervalType.TIMELIKE


def time_dilation(proper_time: float, beta: float, max_beta: float = DEFAULT_MAX_BETA) -> float:
    """Lab-frame duration of a clock interval ``proper_time`` moving at ``beta``."""

    return lorentz_factor(beta, max_beta) * proper_time


def length_contraction(proper_length: float, beta: float, max_beta: float = DEFAULT_MAX_BETA) -> float:
    return proper_length / lorentz_factor(beta, max_beta)


def proper_time_between(a: SpacetimeEvent, b: SpacetimeEvent) -> float:
    """Proper time (in ct units) along a straight worldline; 0 unless timelike."""

    interval = spacetime_interval(a, b)
    if interval >= 0:
        return 0.0
    return math.sqrt(-interval)


@dataclass(frozen=True)
class FrameAxes:
    """Line segments of a Minkowski diagram for a frame moving at ``beta``."""

    x_axis: Segment  # ct' = 0, i.e. ct = beta * x
    ct_axis: Segment  # x' = 0, i.e. x = beta * ct
    light_cone: Tuple[Segment, Segment]


def frame_axes(beta: float, extent: float = 10.0, max_beta: float = DEFAULT_MAX_BETA) -> FrameAxes:
    beta = clamp_beta(beta, max_beta)
    return FrameAxes(
        x_axis=((-extent, -beta * extent), (extent, beta * extent)),
        ct_axis=((-beta * extent, -extent), (beta * extent, extent)),
        light_cone=(((-extent, -extent), (extent, extent)), ((-extent, extent), (extent, -extent))),
    )


def transform_events(events: List[SpacetimeEvent], beta: float) -> List[SpacetimeEvent]:
    frame = LorentzFrame(beta)
    return [frame.transform(event) for event in events]
