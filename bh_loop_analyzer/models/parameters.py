"""Physical parameters of the B-H measurement set-up and the scaling model.

Field intensity
---------------
The excitation current is measured as the voltage across a shunt resistor::

    H = N_exc * I / l_e = (N_exc / (l_e * R_s)) * V_shunt

Induction
---------
The sense coil sees ``V_ind = -N_B * A_e * dB/dt``; after integration::

    B = (1 / (N_B * A_e)) * integral(V_ind dt)

The two factors in parentheses are :func:`h_scale` and :func:`b_scale`.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict

import numpy as np

from bh_loop_analyzer.errors import InvalidPhysicalParameters


@dataclass(frozen=True)
class PhysicalParameters:
    """Geometry and electrical constants of the magnetic circuit.

    Attributes
    ----------
    turns_exc : float
        Number of turns of the excitation coil (N_exc).
    path_len_m : float
        Mean magnetic path length of the core in metres (l_e).
    shunt_ohm : float
        Shunt resistance in series with the excitation coil (R_s).
    turns_b : float
        Number of turns of the sense coil (N_B).
    area_m2 : float
        Core cross-section area in square metres (A_e).
    """

    turns_exc: float = 100.0
    path_len_m: float = 0.1
    shunt_ohm: float = 1.0
    turns_b: float = 50.0
    area_m2: float = 1e-4

    def validate(self) -> None:
        """Raise :class:`InvalidPhysicalParameters` unless all five constants are finite and > 0."""
        bad = {
            name: value
            for name, value in asdict(self).items()
            if not (isinstance(value, (int, float, np.floating, np.integer)) and math.isfinite(value) and value > 0)
        }
        if bad:
            raise InvalidPhysicalParameters(
                f"Physical parameters must be finite and > 0, got {bad}"
            )

    def h_scale(self) -> float:
        return h_scale(self)

    def b_scale(self) -> float:
        return b_scale(self)

    def field_from_voltage(self, v_shunt) -> np.ndarray:
        """Convert shunt voltage [V] to field intensity H [A/m]."""
        return np.asarray(v_shunt, dtype=float) * h_scale(self)

    def induction_from_integral(self, v_integrated) -> np.ndarray:
        """Convert integrated sense-coil voltage [V s] to induction B [T]."""
        return np.asarray(v_integrated, dtype=float) * b_scale(self)

    def to_dict(self) -> Dict[str, float]:
        return {k: float(v) for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> PhysicalParameters:
        """Build from a mapping; unknown keys raise ``TypeError`` like the constructor."""
        return cls(**{k: float(v) for k, v in dict(d).items()})


def h_scale(p: PhysicalParameters) -> float:
    """Return the shunt-voltage to H factor ``N_exc / (l_e * R_s)`` in (A/m)/V."""
    p.validate()
    return float(p.turns_exc) / (float(p.path_len_m) * float(p.shunt_ohm))


def b_scale(p: PhysicalParameters) -> float:
    """Return the integrated-voltage to B factor ``1 / (N_B * A_e)`` in T/(V s)."""
    p.validate()
    return 1.0 / (float(p.turns_b) * float(p.area_m2))
