from __future__ import annotations

import math

import numpy as np

from bh_loop_analyzer.errors import EmptyInput, InvalidInput
from bh_loop_analyzer.models.results import ChannelStats


def compute_stats(v) -> ChannelStats:
    """Single-pass min / max / peak-to-peak / RMS of a channel.

    Raises
    ------
    EmptyInput
        If *v* has zero length (RMS would divide by zero).
    """
    x = np.asarray(v, dtype=float)
    if x.ndim != 1:
        raise InvalidInput(f"Expected 1D array, got shape {x.shape}")
    n = int(x.size)
    if n == 0:
        raise EmptyInput("Cannot compute statistics of an empty sequence")
    if not np.all(np.isfinite(x)):
        raise InvalidInput("Sequence contains non-finite values")

    lo = math.inf
    hi = -math.inf
    sum_sq = 0.0
    for xi in x.tolist():
        if xi < lo:
            lo = xi
        if xi > hi:
            hi = xi
        sum_sq += xi * xi

    return ChannelStats(min=lo, max=hi, peak_to_peak=hi - lo, rms=math.sqrt(sum_sq / n))
