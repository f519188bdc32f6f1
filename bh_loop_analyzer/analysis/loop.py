"""Direction-aware binning of a B-H point cloud into two loop branches.

Plotted in acquisition order, a real hysteresis measurement is a tangled
scribble: noise makes it non-monotonic in time. The reconstruction instead

1. decimates the paired signals with a fixed stride (plot-density control),
2. labels every decimated point RISING or FALLING from the sign of the
   x-increment since the previous decimated sample, dropping points whose
   increment is below a numerical-noise floor,
3. splits the x-range of all accepted points into ``bins`` fixed-width bins
   (``width = (xmax - xmin) / (bins - 1)``),
4. averages y per bin, separately per direction.

Each occupied bin yields one branch point located at the bin *left edge*
``xmin + b * width`` (not at the mean of the contributing x values), so both
branches share the same x grid and x is strictly increasing along a branch.

Functions
---------
decimation_stride
    ``max(1, n_samples // target_plot_points)``.
classify_directions
    Decimate and direction-label a pair of signals.
bin_branches
    Average a classified cloud into rising and falling branch curves.
reconstruct_loop
    The three steps above with input validation.
closed_outline
    Rising branch followed by the reversed falling branch, as one closed path.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from bh_loop_analyzer.errors import InvalidInput
from bh_loop_analyzer.models.profile import (
    DEFAULT_BINS,
    DEFAULT_DX_NOISE_FLOOR,
    DEFAULT_TARGET_PLOT_POINTS,
)
from bh_loop_analyzer.models.results import BranchCurve, Direction, LoopResult, ScatterCloud


def _validate_pair(x, y) -> Tuple[np.ndarray, np.ndarray]:
    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    if xa.ndim != 1 or ya.ndim != 1:
        raise InvalidInput(f"Expected 1D signals, got shapes {xa.shape} and {ya.shape}")
    if xa.size != ya.size:
        raise InvalidInput(f"Signal length mismatch: len(x)={xa.size}, len(y)={ya.size}")
    if not (np.all(np.isfinite(xa)) and np.all(np.isfinite(ya))):
        raise InvalidInput("Signals contain non-finite values")
    return xa, ya


def _validate_bins(bins: int) -> int:
    b = int(bins)
    if b < 2:
        raise InvalidInput(f"bins must be >= 2, got {bins!r}")
    return b


def decimation_stride(n_samples: int, target_plot_points: int = DEFAULT_TARGET_PLOT_POINTS) -> int:
    """Deterministic stride bounding the number of decimated points to about *target_plot_points*."""
    target = int(target_plot_points)
    if target <= 0:
        raise InvalidInput(f"target_plot_points must be > 0, got {target_plot_points!r}")
    return max(1, int(n_samples) // target)


def classify_directions(
    x,
    y,
    stride: int = 1,
    *,
    noise_floor: float = DEFAULT_DX_NOISE_FLOOR,
) -> ScatterCloud:
    """Decimate ``(x, y)`` with *stride* and label each kept point by the sign of dx.

    For ``i = stride, 2*stride, ...``: ``dx = x[i] - x[i - stride]``. Points with
    ``|dx| < noise_floor`` are discarded; the others become
    ``(x[i], y[i], RISING if dx > 0 else FALLING)``.
    """
    xa, ya = _validate_pair(x, y)
    k = int(stride)
    if k < 1:
        raise InvalidInput(f"decimation stride must be >= 1, got {stride!r}")

    idx = np.arange(k, xa.size, k)
    if idx.size == 0:
        return ScatterCloud.empty()

    dx = xa[idx] - xa[idx - k]
    keep = np.abs(dx) >= float(noise_floor)
    idx = idx[keep]
    direction = np.where(dx[keep] > 0.0, int(Direction.RISING), int(Direction.FALLING)).astype(np.int8)

    return ScatterCloud(x=xa[idx], y=ya[idx], direction=direction)


def _branch(
    bin_idx: np.ndarray,
    y: np.ndarray,
    bins: int,
    xmin: float,
    width: float,
) -> BranchCurve:
    if bin_idx.size == 0:
        return BranchCurve.empty()
    counts = np.bincount(bin_idx, minlength=bins)
    sums = np.bincount(bin_idx, weights=y, minlength=bins)
    occupied = np.flatnonzero(counts > 0)
    bx = xmin + occupied * width
    by = sums[occupied] / counts[occupied]
    return BranchCurve(x=bx.astype(float), y=by.astype(float))


def bin_branches(scatter: ScatterCloud, bins: int = DEFAULT_BINS) -> Tuple[BranchCurve, BranchCurve]:
    """Average a classified cloud into ``(rising, falling)`` branch curves.

    The x-range is taken over all points of both directions. Bin indices
    outside ``[0, bins)`` (floating rounding at the upper edge) are dropped.
    If every point has the same x, the width is zero and all points fall in bin 0.
    """
    n_bins = _validate_bins(bins)
    if scatter.is_empty:
        return BranchCurve.empty(), BranchCurve.empty()

    x = np.asarray(scatter.x, dtype=float)
    y = np.asarray(scatter.y, dtype=float)
    d = np.asarray(scatter.direction)

    xmin = float(np.min(x))
    xmax = float(np.max(x))
    width = (xmax - xmin) / (n_bins - 1)

    if width > 0.0:
        b = np.floor((x - xmin) / width)
    else:
        b = np.zeros_like(x)

    ok = (b >= 0) & (b < n_bins)
    b = b.astype(np.int64)

    rising_m = ok & (d == int(Direction.RISING))
    falling_m = ok & (d == int(Direction.FALLING))

    rising = _branch(b[rising_m], y[rising_m], n_bins, xmin, width)
    falling = _branch(b[falling_m], y[falling_m], n_bins, xmin, width)
    return rising, falling


def reconstruct_loop(
    x,
    y,
    decimation: int = 1,
    bins: int = DEFAULT_BINS,
    *,
    noise_floor: float = DEFAULT_DX_NOISE_FLOOR,
) -> LoopResult:
    """Decimate, classify and bin a pair of signals into a partial :class:`LoopResult`.

    Parameters
    ----------
    x:
        Independent-axis signal (its increments decide the direction).
    y:
        Dependent-axis signal, same length as *x*.
    decimation:
        Stride, usually :func:`decimation_stride` of the record length.
    bins:
        Number of spatial bins along x.
    noise_floor:
        Minimum ``|dx|`` for a point to be classified.

    Returns
    -------
    LoopResult
        ``scatter``, ``rising`` and ``falling`` filled in; ``bsat``/``br``/``hc`` are None.
        No direction change at all is a legitimate result: the curves are simply empty.
    """
    n_bins = _validate_bins(bins)
    scatter = classify_directions(x, y, decimation, noise_floor=noise_floor)
    rising, falling = bin_branches(scatter, n_bins)

    warnings = []
    if scatter.is_empty:
        warnings.append("no point passed the dx noise floor; both branches are empty")
    elif rising.is_empty:
        warnings.append("no rising point; rising branch is empty")
    elif falling.is_empty:
        warnings.append("no falling point; falling branch is empty")

    return LoopResult(
        scatter=scatter,
        rising=rising,
        falling=falling,
        decimation=int(decimation),
        bins=n_bins,
        warnings=tuple(warnings),
    )


def closed_outline(loop: LoopResult) -> Tuple[np.ndarray, np.ndarray]:
    """Return the loop as one closed path: rising forward, falling reversed, back to start."""
    xs = np.concatenate([loop.rising.x, loop.falling.x[::-1]])
    ys = np.concatenate([loop.rising.y, loop.falling.y[::-1]])
    if xs.size == 0:
        return xs, ys
    return np.append(xs, xs[0]), np.append(ys, ys[0])
