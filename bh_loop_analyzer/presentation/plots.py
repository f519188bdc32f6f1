"""
Plot helpers for acquisitions and reconstructed loops.

Design goals:
- Read-only with respect to the analysis pipeline.
- Time traces are plotted against the sample index (acquisition order).
- Downsampling is decimation only: keep every Kth sample (no interpolation).
- Every function draws on a caller-supplied matplotlib Axes and returns the artists.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import numpy as np

from bh_loop_analyzer.analysis.loop import closed_outline, decimation_stride
from bh_loop_analyzer.models.acquisition import AcquisitionRecord
from bh_loop_analyzer.models.results import Direction, HysteresisResult

DEFAULT_BRANCH_COLORS = {"rising": "tab:blue", "falling": "tab:red"}


def _decimate(x: np.ndarray, k: int) -> np.ndarray:
    k = int(k)
    if k <= 1:
        return x
    return x[::k]


def plot_time_traces(ax, record: AcquisitionRecord, *, target_plot_points: int = 10_000) -> List:
    """Plot integrated CH0 and raw CH1 against the decimated sample index."""
    k = decimation_stride(record.n_samples, target_plot_points)
    idx = _decimate(np.arange(record.n_samples), k)
    lines = []
    lines += ax.plot(idx, _decimate(record.ch0_integrated, k), lw=1.0, label="CH0 integrated")
    lines += ax.plot(idx, _decimate(record.ch1, k), lw=1.0, label="CH1")
    ax.set_xlabel("sample")
    ax.set_ylabel("V")
    ax.legend(loc="best")
    return lines


def plot_loop(
    ax,
    result: HysteresisResult,
    *,
    show_scatter: bool = True,
    branch_colors: Optional[Dict[str, str]] = None,
) -> List:
    """Plot a reconstructed loop in physical units.

    Parameters
    ----------
    ax : matplotlib Axes
    result : HysteresisResult
    show_scatter : bool
        Also draw the direction-classified raw points (small, translucent).
    branch_colors : dict, optional
        ``{"rising": color, "falling": color}``.  Defaults to
        :data:`DEFAULT_BRANCH_COLORS`.

    The branch x values are scaled with ``h_scale`` and y with ``b_scale``,
    the same convention as Bsat, Br and Hc.
    """
    colors = dict(DEFAULT_BRANCH_COLORS)
    if branch_colors:
        colors.update(branch_colors)

    loop = result.loop
    kh, kb = result.h_scale, result.b_scale
    artists = []

    if show_scatter and not loop.scatter.is_empty:
        for name, direction in (("rising", Direction.RISING), ("falling", Direction.FALLING)):
            xs, ys = loop.scatter.select(direction)
            if xs.size:
                artists.append(
                    ax.scatter(xs * kh, ys * kb, s=4, color=colors[name], alpha=0.25, zorder=1)
                )

    ox, oy = closed_outline(loop)
    if ox.size:
        artists += ax.plot(ox * kh, oy * kb, "-", color="purple", lw=1.0, alpha=0.6, zorder=2)

    for name, curve in (("rising", loop.rising), ("falling", loop.falling)):
        if not curve.is_empty:
            artists += ax.plot(
                curve.x * kh, curve.y * kb, "o-", color=colors[name], ms=3, lw=1.5, label=name, zorder=3
            )

    ax.axhline(0.0, color="grey", lw=0.5)
    ax.axvline(0.0, color="grey", lw=0.5)
    ax.set_xlabel("H [A/m]")
    ax.set_ylabel("B [T]")
    ax.set_title(f"Bsat={result.bsat:.4f} T  Br={result.br:.4f} T  Hc={result.hc:.4f} A/m")
    if artists:
        ax.legend(loc="best")
    return artists
