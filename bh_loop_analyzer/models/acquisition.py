from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from bh_loop_analyzer.errors import InvalidInput


@dataclass(frozen=True)
class AcquisitionConfig:
    """
    Configuration handed to the acquisition device.

    sample_rate_hz:
      Samples per second on both channels; drives dt = 1/sample_rate_hz.
    buffer_size:
      Number of samples per channel; drives the record length.
    input_range_v:
      Full-scale input range of both channels (informational for the core).

    Relation: acquisition_time_s = buffer_size / sample_rate_hz.
    """
    sample_rate_hz: int = 10_000
    buffer_size: int = 4000
    input_range_v: float = 25.0

    DEFAULT_INPUT_RANGE_V = 25.0
    DEFAULT_PLOT_POINTS = 10_000
    MIN_ACQUISITION_TIME_S = 0.01
    MAX_ACQUISITION_TIME_S = 10.0
    MIN_BUFFER_SIZE = 100
    MAX_BUFFER_SIZE = 10_000

    @property
    def acquisition_time_s(self) -> float:
        if self.sample_rate_hz <= 0:
            raise InvalidInput(f"sample_rate_hz must be > 0, got {self.sample_rate_hz!r}")
        return float(self.buffer_size) / float(self.sample_rate_hz)

    def buffer_for_time(self, time_s: float) -> int:
        """Number of samples needed to cover *time_s* at the configured rate (unclamped)."""
        return int(round(float(time_s) * int(self.sample_rate_hz)))

    def with_acquisition_time(self, time_s: float) -> AcquisitionConfig:
        """Return a copy whose buffer covers *time_s*, clamped to [MIN_BUFFER_SIZE, MAX_BUFFER_SIZE]."""
        n = self.buffer_for_time(time_s)
        n = min(max(n, self.MIN_BUFFER_SIZE), self.MAX_BUFFER_SIZE)
        return replace(self, buffer_size=n)

    def validate(self) -> None:
        if int(self.sample_rate_hz) <= 0:
            raise InvalidInput(f"sample_rate_hz must be > 0, got {self.sample_rate_hz!r}")
        if not (self.MIN_BUFFER_SIZE <= int(self.buffer_size) <= self.MAX_BUFFER_SIZE):
            raise InvalidInput(
                f"buffer_size must be in [{self.MIN_BUFFER_SIZE}, {self.MAX_BUFFER_SIZE}], "
                f"got {self.buffer_size!r}"
            )


def _as_channel(x, name: str) -> np.ndarray:
    """Copy *x* into a read-only 1D float64 array."""
    arr = np.array(x, dtype=float, copy=True)
    if arr.ndim != 1:
        raise InvalidInput(f"{name} must be 1D, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput(f"{name} contains non-finite samples")
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class AcquisitionRecord:
    """
    One completed acquisition: both raw channels plus the integrated CH0.

    Notes
    - ch0 is the sense-coil voltage, ch1 the shunt voltage.
    - Arrays are read-only copies; a record never shares buffers with the caller.
    """
    ch0: np.ndarray
    ch1: np.ndarray
    ch0_integrated: np.ndarray
    sample_rate_hz: int
    warnings: Tuple[str, ...] = ()

    @property
    def n_samples(self) -> int:
        return int(self.ch0.size)

    @classmethod
    def from_raw(
        cls,
        ch0,
        ch1,
        sample_rate_hz: int,
        *,
        tau_s: Optional[float] = None,
    ) -> AcquisitionRecord:
        """Validate both channels and integrate CH0."""
        from bh_loop_analyzer.analysis.integrator import DEFAULT_TAU_S, integrate_rc

        a0 = _as_channel(ch0, "ch0")
        a1 = _as_channel(ch1, "ch1")
        if a0.size != a1.size:
            raise InvalidInput(f"Channel length mismatch: len(ch0)={a0.size}, len(ch1)={a1.size}")

        warnings = []
        if not (AcquisitionConfig.MIN_BUFFER_SIZE <= a0.size <= AcquisitionConfig.MAX_BUFFER_SIZE):
            warnings.append(
                f"record length {a0.size} outside the practical range "
                f"[{AcquisitionConfig.MIN_BUFFER_SIZE}, {AcquisitionConfig.MAX_BUFFER_SIZE}]"
            )

        integrated = integrate_rc(a0, sample_rate_hz, tau_s=DEFAULT_TAU_S if tau_s is None else tau_s)
        integrated.flags.writeable = False

        return cls(
            ch0=a0,
            ch1=a1,
            ch0_integrated=integrated,
            sample_rate_hz=int(sample_rate_hz),
            warnings=tuple(warnings),
        )
