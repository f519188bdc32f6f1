"""Synthetic two-channel acquisitions for tests and demos.

Stands in for the acquisition device: produces a shunt voltage (CH1) driven
by a sinusoidal excitation and a sense-coil voltage (CH0) phase-shifted
against the excitation, which opens the loop. Output is deterministic for a
given seed.

CH0 starts near its peak while the integrator starts from rest, so the
first few integrated samples carry a start-up transient. Drop the first
excitation period after integration when a settled loop is needed.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from bh_loop_analyzer.errors import InvalidInput
from bh_loop_analyzer.models.acquisition import AcquisitionConfig


def synthetic_acquisition(
    config: Optional[AcquisitionConfig] = None,
    *,
    frequency_hz: float = 50.0,
    amplitude_v: float = 1.0,
    phase_lag_rad: float = 0.3,
    saturation: float = 0.0,
    noise_v: float = 0.0,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(ch0, ch1)`` arrays of ``config.buffer_size`` samples.

    Parameters
    ----------
    config:
        Sample rate and buffer size; defaults to :class:`AcquisitionConfig`.
    frequency_hz:
        Excitation frequency.
    amplitude_v:
        Peak voltage of both channels before noise.
    phase_lag_rad:
        Phase shift of CH0 against the excitation; 0 gives a cosine/sine pair.
    saturation:
        ``>= 0``; when positive CH0 is the derivative of ``tanh(s * sin)/tanh(s)``,
        which sharpens the loop tips.
    noise_v:
        Standard deviation of additive Gaussian noise on both channels.
    seed:
        Seed for :func:`numpy.random.default_rng`.
    """
    cfg = config or AcquisitionConfig()
    cfg.validate()
    if frequency_hz <= 0:
        raise InvalidInput(f"frequency_hz must be > 0, got {frequency_hz!r}")
    if saturation < 0 or noise_v < 0:
        raise InvalidInput("saturation and noise_v must be >= 0")

    n = int(cfg.buffer_size)
    fs = float(cfg.sample_rate_hz)
    t = np.arange(n, dtype=float) / fs
    w = 2.0 * np.pi * float(frequency_hz)

    ch1 = amplitude_v * np.sin(w * t)

    phase = w * t - float(phase_lag_rad)
    if saturation > 0:
        s = float(saturation)
        # d/dt of tanh(s*sin(phase))/tanh(s), scaled back to a voltage amplitude.
        ch0 = amplitude_v * s * np.cos(phase) / np.cosh(s * np.sin(phase)) ** 2 / np.tanh(s)
    else:
        ch0 = amplitude_v * np.cos(phase)

    if noise_v > 0:
        rng = np.random.default_rng(seed)
        ch0 = ch0 + rng.normal(0.0, noise_v, n)
        ch1 = ch1 + rng.normal(0.0, noise_v, n)

    return ch0, ch1
