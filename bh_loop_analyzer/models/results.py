from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .acquisition import AcquisitionRecord
from .profile import DEFAULT_BINS


class Direction(enum.IntEnum):
    """Sign of the x-increment that produced a scatter point."""

    RISING = 1
    FALLING = -1


@dataclass(frozen=True)
class ScatterPoint:
    x: float
    y: float
    direction: Direction


@dataclass(frozen=True)
class ScatterCloud:
    """Direction-classified points, in decimated acquisition order.

    Behaves as a read-only sequence of :class:`ScatterPoint` while keeping the
    columns as arrays for vectorized binning.

    Attributes
    ----------
    x, y:
        Float arrays of shape ``(n,)``.
    direction:
        int8 array of shape ``(n,)`` holding ``Direction`` values (+1 / -1).
    """

    x: np.ndarray
    y: np.ndarray
    direction: np.ndarray

    @classmethod
    def empty(cls) -> ScatterCloud:
        return cls(x=np.empty(0, dtype=float), y=np.empty(0, dtype=float), direction=np.empty(0, dtype=np.int8))

    def __len__(self) -> int:
        return int(self.x.size)

    def __getitem__(self, i: int) -> ScatterPoint:
        return ScatterPoint(float(self.x[i]), float(self.y[i]), Direction(int(self.direction[i])))

    def __iter__(self) -> Iterator[ScatterPoint]:
        for i in range(len(self)):
            yield self[i]

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0

    def select(self, direction: Direction) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(x, y)`` arrays of the points with the given direction."""
        m = self.direction == int(direction)
        return self.x[m], self.y[m]


@dataclass(frozen=True)
class BranchCurve:
    """One half of the loop: averaged ``(x, y)`` pairs, x strictly increasing by construction."""

    x: np.ndarray
    y: np.ndarray

    @classmethod
    def empty(cls) -> BranchCurve:
        return cls(x=np.empty(0, dtype=float), y=np.empty(0, dtype=float))

    def __len__(self) -> int:
        return int(self.x.size)

    def __iter__(self) -> Iterator[Tuple[float, float]]:
        for xi, yi in zip(self.x.tolist(), self.y.tolist()):
            yield xi, yi

    @property
    def is_empty(self) -> bool:
        return self.x.size == 0


@dataclass(frozen=True)
class ChannelStats:
    """Extremal and RMS summary of one channel."""

    min: float
    max: float
    peak_to_peak: float
    rms: float

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max, "peak_to_peak": self.peak_to_peak, "rms": self.rms}

    def formatted(self, digits: int = 4) -> Dict[str, str]:
        """Display strings with a fixed number of decimals."""
        return {k: f"{v:.{int(digits)}f}" for k, v in self.to_dict().items()}


@dataclass(frozen=True)
class LoopResult:
    """Reconstructed loop of one acquisition.

    The reconstruction step leaves ``bsat``, ``br`` and ``hc`` as None; the
    analyzer returns a new instance with the scalars filled in.
    """

    scatter: ScatterCloud
    rising: BranchCurve
    falling: BranchCurve

    bsat: Optional[float] = None
    br: Optional[float] = None
    hc: Optional[float] = None

    decimation: int = 1
    bins: int = DEFAULT_BINS
    warnings: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.rising.is_empty and self.falling.is_empty


@dataclass(frozen=True)
class HysteresisResult:
    """Everything the presentation side needs for one acquisition."""

    record: AcquisitionRecord
    loop: LoopResult
    stats_ch0: ChannelStats
    stats_ch1: ChannelStats
    h_scale: float
    b_scale: float

    # Explicit not-found flags for the 0.0 sentinels in loop.br / loop.hc.
    br_found: bool = False
    hc_found: bool = False

    warnings: Tuple[str, ...] = ()

    @property
    def bsat(self) -> float:
        return float(self.loop.bsat or 0.0)

    @property
    def br(self) -> float:
        return float(self.loop.br or 0.0)

    @property
    def hc(self) -> float:
        return float(self.loop.hc or 0.0)
