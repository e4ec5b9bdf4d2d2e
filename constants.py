"""Physical constants shared by the field evaluator and the Lorentz helpers."""
from __future__ import annotations

import math
from dataclasses import dataclass

COULOMB_CONSTANT = 8.9875517873681764e9  # N·m²/C²
VACUUM_PERMEABILITY = 4 * math.pi * 1e-7  # T·m/A
SPEED_OF_LIGHT = 299792458.0  # m/s
ELEMENTARY_CHARGE = 1.602176634e-19  # C


@dataclass(frozen=True)
class PhysicsConstants:
    """Bundle of constants so the evaluator can run in SI or visual units."""

    coulomb_constant: float = COULOMB_CONSTANT
    vacuum_permeability: float = VACUUM_PERMEABILITY
    speed_of_light: float = SPEED_OF_LIGHT
    elementary_charge: float = ELEMENTARY_CHARGE

    @classmethod
    def natural(cls) -> "PhysicsConstants":
        """Unit constants (k = mu0 = c = e = 1) for drawing-scale fields."""

        return cls(
            coulomb_constant=1.0,
            vacuum_permeability=1.0,
            speed_of_light=1.0,
            elementary_charge=1.0,
        )

    def charge_in_coulombs(self, charge: float) -> float:
        return charge * self.elementary_charge


SI = PhysicsConstants()
NATURAL = PhysicsConstants.natural()
