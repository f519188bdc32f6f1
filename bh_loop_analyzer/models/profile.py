"""Analysis profile -- bundles all reconstruction-relevant configuration.

An AnalysisProfile groups every parameter that affects the analysis output
into one frozen dataclass.  It can be:

- Constructed with defaults matching the reference set-up
- Overridden field-by-field via ``dataclasses.replace()``
- Serialized to/from a dict for JSON provenance
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from bh_loop_analyzer.errors import InvalidInput

#: RC time constant of the reference analog integrator: 800 ohm * 470 nF.
DEFAULT_TAU_S = 800.0 * 470e-9

DEFAULT_TARGET_PLOT_POINTS = 10_000
DEFAULT_BINS = 150
DEFAULT_DX_NOISE_FLOOR = 1e-9


@dataclass(frozen=True)
class AnalysisProfile:
    """Frozen configuration for the loop reconstruction pipeline.

    Fields
    ------
    target_plot_points : int
        Point budget used to derive the decimation stride
        ``max(1, n_samples // target_plot_points)``.
    bins : int
        Number of spatial bins along the independent axis (branch resolution).
    dx_noise_floor : float
        Minimum ``|dx|`` between decimated samples for a point to receive a
        direction. Numerical-noise floor, not a physical constant.
    tau_s : float
        Time constant of the digital RC integrator in seconds.
    """

    target_plot_points: int = DEFAULT_TARGET_PLOT_POINTS
    bins: int = DEFAULT_BINS
    dx_noise_floor: float = DEFAULT_DX_NOISE_FLOOR
    tau_s: float = DEFAULT_TAU_S

    def validate(self) -> None:
        if int(self.target_plot_points) <= 0:
            raise InvalidInput(f"target_plot_points must be > 0, got {self.target_plot_points!r}")
        if int(self.bins) < 2:
            raise InvalidInput(f"bins must be >= 2, got {self.bins!r}")
        if not (self.dx_noise_floor >= 0.0):
            raise InvalidInput(f"dx_noise_floor must be >= 0, got {self.dx_noise_floor!r}")
        if not (self.tau_s > 0.0):
            raise InvalidInput(f"tau_s must be > 0, got {self.tau_s!r}")

    def decimation_for(self, n_samples: int) -> int:
        """Return the decimation stride for a record of *n_samples*."""
        # Local import: analysis depends on models, not the other way round.
        from bh_loop_analyzer.analysis.loop import decimation_stride

        return decimation_stride(n_samples, self.target_plot_points)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> AnalysisProfile:
        """Reconstruct from a dict (e.g. loaded from JSON)."""
        d = dict(d)  # shallow copy
        if "target_plot_points" in d:
            d["target_plot_points"] = int(d["target_plot_points"])
        if "bins" in d:
            d["bins"] = int(d["bins"])
        return cls(**d)
