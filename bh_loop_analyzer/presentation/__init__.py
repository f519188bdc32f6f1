"""Presentation helpers (matplotlib)."""

from .plots import plot_loop, plot_time_traces

__all__ = ["plot_loop", "plot_time_traces"]
