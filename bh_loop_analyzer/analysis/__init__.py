"""Loop reconstruction package.

Design principle:
  - Inputs are complete, fixed-length acquisitions (two raw voltage channels).
  - Every function is pure or keeps its state local to one call; nothing is
    shared between acquisitions.

Accordingly, analysis functions are expressed on the *sample index* of the
record; the only time quantity used is ``dt = 1 / sample_rate_hz`` inside the
integrator.
"""

from .integrator import integrate_rc, rc_coefficients
from .statistics import compute_stats
from .loop import (
    bin_branches,
    classify_directions,
    closed_outline,
    decimation_stride,
    reconstruct_loop,
)
from .interpolate import find_at_x, find_at_y, interpolate_at_x, interpolate_at_y
from .hysteresis import HysteresisAnalyzer, analyze_acquisition, branch_table, loop_parameters
from .synthetic import synthetic_acquisition

__all__ = [
    "integrate_rc",
    "rc_coefficients",
    "compute_stats",
    "bin_branches",
    "classify_directions",
    "closed_outline",
    "decimation_stride",
    "reconstruct_loop",
    "find_at_x",
    "find_at_y",
    "interpolate_at_x",
    "interpolate_at_y",
    "HysteresisAnalyzer",
    "analyze_acquisition",
    "branch_table",
    "loop_parameters",
    "synthetic_acquisition",
]
