"""Physical entities that make up a field scenario."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Tuple

from vector2 import Vector2


class Axis(Enum):
    """Direction used for charge motion and wire orientation."""

    X = "x"
    Y = "y"
    Z = "z"

    def unit(self) -> Vector2:
        """In-plane unit vector of the axis (zero for the out-of-plane axis)."""

        if self is Axis.X:
            return Vector2(1.0, 0.0)
        if self is Axis.Y:
            return Vector2(0.0, 1.0)
        return Vector2()

    def is_in_plane(self) -> bool:
        return self is not Axis.Z


@dataclass(frozen=True)
class PointCharge:
    """A point charge in units of e, optionally moving along ``axis`` at ``beta``."""

    position: Vector2
    charge: float
    beta: float = 0.0
    axis: Axis = Axis.X

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def is_positive(self) -> bool:
        return self.charge > 0

    @property
    def is_negative(self) -> bool:
        return self.charge < 0

    def moved_to(self, position: Vector2) -> "PointCharge":
        return replace(self, position=position)


@dataclass(frozen=True)
class WireCurrent:
    """An infinitely long straight wire carrying ``current`` amperes.

    ``Axis.Z`` wires pierce the plane at ``position``; ``Axis.X``/``Axis.Y``
    wires lie in the plane and pass through ``position``.
    """

    position: Vector2
    current: float
    orientation: Axis = Axis.Z


@dataclass(frozen=True)
class ChargeConfiguration:
    """Immutable set of sources evaluated together by the field functions."""

    charges: Tuple[PointCharge, ...] = ()
    wires: Tuple[WireCurrent, ...] = ()

    def __post_init__(self) -> None:
        # Accept lists from callers while keeping the stored value hashable.
        object.__setattr__(self, "charges", tuple(self.charges))
        object.__setattr__(self, "wires", tuple(self.wires))

    @property
    def is_empty(self) -> bool:
        return not self.charges and not self.wires

    def sources(self) -> Tuple[PointCharge, ...]:
        """Charges field lines start from."""

        return tuple(charge for charge in self.charges if charge.is_positive)

    def sinks(self) -> Tuple[PointCharge, ...]:
        """Charges field lines end on."""

        return tuple(charge for charge in self.charges if charge.is_negative)

    def translated(self, offset: Vector2) -> "ChargeConfiguration":
        if offset.is_zero():
            return self
        return ChargeConfiguration(
            charges=tuple(c.moved_to(c.position + offset) for c in self.charges),
            wires=tuple(replace(w, position=w.position + offset) for w in self.wires),
        )

    def with_charge(self, charge: float) -> "ChargeConfiguration":
        """Replace every charge magnitude, keeping each charge's sign pattern."""

        updated = []
        for point in self.charges:
            sign = -1.0 if point.charge < 0 else 1.0
            updated.append(replace(point, charge=sign * charge))
        return replace(self, charges=tuple(updated))

    def with_beta(self, beta: float) -> "ChargeConfiguration":
        return replace(self, charges=tuple(replace(c, beta=beta) for c in self.charges))
