"""Digital RC integrator for the sense-coil channel.

Faraday's law gives ``V_ind = -N_B * A_e * dB/dt``, so B is recovered by
integrating the induced voltage. The reference hardware used a first-order RC
network

    tau * dy/dt + y = x,        tau = R * C = 800 ohm * 470 nF = 376 us

and this module reproduces it digitally. The derivative is discretized with
the trapezoidal rule (bilinear transform)::

    (2 tau + dt) * y[n] = (2 tau - dt) * y[n-1] + dt * (x[n] + x[n-1])

which gives the recurrence

    y[n] = a * y[n-1] + b * (x[n] + x[n-1])
    a = (2 tau - dt) / (2 tau + dt)
    b = dt / (2 tau + dt)

The bilinear map keeps the pole inside the unit circle for every dt > 0, so
the filter is unconditionally stable (|a| < 1).

Limits
------
- dt << tau: a -> 1, b -> 0. Strong memory, near-ideal integration.
- dt >> tau: a -> -1. The output alternates sign each step; degenerate but
  well defined, not an error.

Filter state (previous input and output) starts at zero on every call.
Each acquisition is integrated independently.
"""

from __future__ import annotations

import math
from typing import Tuple

import numpy as np

from bh_loop_analyzer.errors import InvalidInput
from bh_loop_analyzer.models.profile import DEFAULT_TAU_S


def rc_coefficients(sample_rate_hz: float, tau_s: float = DEFAULT_TAU_S) -> Tuple[float, float]:
    """Return the recurrence coefficients ``(a, b)`` for the given rate and time constant."""
    try:
        rate = float(sample_rate_hz)
        tau = float(tau_s)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(f"sample_rate_hz and tau_s must be numbers, got {sample_rate_hz!r}, {tau_s!r}") from exc

    if not (math.isfinite(rate) and rate > 0.0):
        raise InvalidInput(f"sample_rate_hz must be > 0, got {sample_rate_hz!r}")
    if not (math.isfinite(tau) and tau > 0.0):
        raise InvalidInput(f"tau_s must be > 0, got {tau_s!r}")

    dt = 1.0 / rate
    den = 2.0 * tau + dt
    return (2.0 * tau - dt) / den, dt / den


def integrate_rc(samples, sample_rate_hz: float, *, tau_s: float = DEFAULT_TAU_S) -> np.ndarray:
    """Integrate a raw voltage sequence with the trapezoidal RC recurrence.

    Parameters
    ----------
    samples:
        1D sequence of raw sense-coil voltages in acquisition order.
    sample_rate_hz:
        Sampling frequency; ``dt = 1 / sample_rate_hz``.
    tau_s:
        Filter time constant in seconds.

    Returns
    -------
    np.ndarray
        Float array of the same length as *samples*, proportional to B.
        Multiply by :func:`~bh_loop_analyzer.models.parameters.b_scale` for Tesla.

    Raises
    ------
    InvalidInput
        If ``sample_rate_hz <= 0``, ``tau_s <= 0``, or *samples* is not a finite 1D sequence.
    """
    a, b = rc_coefficients(sample_rate_hz, tau_s)

    x = np.asarray(samples, dtype=float)
    if x.ndim != 1:
        raise InvalidInput(f"samples must be 1D, got shape {x.shape}")
    if not np.all(np.isfinite(x)):
        raise InvalidInput("samples contain non-finite values")

    out = np.empty_like(x)
    y_prev = 0.0
    x_prev = 0.0
    # Each output depends on the previous one: a plain loop over Python floats.
    for i, xi in enumerate(x.tolist()):
        y = a * y_prev + b * (xi + x_prev)
        out[i] = y
        y_prev = y
        x_prev = xi
    return out
