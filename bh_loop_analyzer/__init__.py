"""B-H Loop Analyzer -- Python tooling for two-channel magnetic hysteresis measurements.

A sense coil (CH0) and an excitation-coil shunt (CH1) are sampled
simultaneously by an external acquisition device. This package turns the two
raw voltage records into a presentable hysteresis loop and its scalars.

This package provides tools for:
- Integrating the sense-coil voltage with a drift-free digital RC integrator
- Direction-aware decimation and binning of the point cloud into rising and
  falling branches
- Linear interpolation of branches for remanence (Br) and coercivity (Hc)
- Saturation induction (Bsat) and per-channel min/max/peak-to-peak/RMS
- Converting voltages to H [A/m] and B [T] from the coil and core geometry

Key principles:
- One acquisition in, one immutable result out; no state shared between calls
- Invalid input fails fast with a specific error kind, never as NaN/inf
- Interpolation misses report the 0.0 sentinel plus an explicit not-found flag

Main subpackages:
- analysis: Integrator, statistics, loop reconstruction, interpolation, analyzer
- models: Physical parameters, acquisition config/record, analysis profile, results
- presentation: Matplotlib helpers for time traces and loops
"""

from .errors import EmptyInput, HysteresisError, InvalidInput, InvalidPhysicalParameters

__all__ = [
    "HysteresisError",
    "InvalidInput",
    "EmptyInput",
    "InvalidPhysicalParameters",
]
