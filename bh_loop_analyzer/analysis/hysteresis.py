"""Hysteresis analysis: from a completed acquisition to Bsat, Br and Hc.

Ordering (per acquisition)
--------------------------
1) Validate the physical parameters (fail before any work).
2) Integrate CH0 with the digital RC integrator (:mod:`.integrator`).
3) Decimate/classify/bin ``(integrated CH0, CH1)`` into rising and falling
   branches (:mod:`.loop`).
4) Extract the scalars from the averaged branches:

   - ``Bsat = max(|y| * b_scale)`` over the points of *both* branches,
   - ``Br   = interpolate_at_x(rising, 0) * b_scale``,
   - ``Hc   = interpolate_at_y(rising, 0) * h_scale``.

   Br and Hc read the rising branch only. Some conventions average both
   branches; this module keeps the single-branch definition.
5) Channel statistics for integrated CH0 and raw CH1.

Br/Hc use the ``0.0`` not-found sentinel of :mod:`.interpolate`; the result
additionally carries ``br_found``/``hc_found`` and a warning when the rising
branch never crosses the axis.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

import numpy as np
import pandas as pd

from bh_loop_analyzer.models.acquisition import AcquisitionRecord
from bh_loop_analyzer.models.parameters import PhysicalParameters, b_scale, h_scale
from bh_loop_analyzer.models.profile import AnalysisProfile
from bh_loop_analyzer.models.results import HysteresisResult, LoopResult

from .interpolate import NOT_FOUND, find_at_x, find_at_y
from .loop import reconstruct_loop
from .statistics import compute_stats

logger = logging.getLogger(__name__)


def loop_parameters(loop: LoopResult, params: PhysicalParameters) -> LoopResult:
    """Return a copy of *loop* with ``bsat``, ``br`` and ``hc`` filled in.

    Raises
    ------
    InvalidPhysicalParameters
        If any of the five constants is not strictly positive.
    """
    k_h = h_scale(params)
    k_b = b_scale(params)

    bsat = 0.0
    for curve in (loop.rising, loop.falling):
        if not curve.is_empty:
            bsat = max(bsat, float(np.max(np.abs(curve.y * k_b))))

    warnings: List[str] = list(loop.warnings)

    br_raw = find_at_x(loop.rising, 0.0)
    if br_raw is None:
        warnings.append("rising branch does not cross x=0; Br reported as 0")
        br = NOT_FOUND
    else:
        br = br_raw * k_b

    hc_raw = find_at_y(loop.rising, 0.0)
    if hc_raw is None:
        warnings.append("rising branch does not cross y=0; Hc reported as 0")
        hc = NOT_FOUND
    else:
        hc = hc_raw * k_h

    return replace(loop, bsat=bsat, br=br, hc=hc, warnings=tuple(warnings))


class HysteresisAnalyzer:
    """Run the full pipeline on raw CH0/CH1 acquisitions.

    The analyzer holds only read-only configuration; every call builds its
    own record and integrator state, so one instance can serve any number of
    acquisitions.
    """

    def __init__(
        self,
        params: Optional[PhysicalParameters] = None,
        profile: Optional[AnalysisProfile] = None,
    ) -> None:
        self.params = params or PhysicalParameters()
        self.profile = profile or AnalysisProfile()

    def analyze(self, ch0, ch1, sample_rate_hz: int) -> HysteresisResult:
        """Integrate CH0, reconstruct the loop against CH1 and extract Bsat/Br/Hc."""
        self.params.validate()
        self.profile.validate()

        record = AcquisitionRecord.from_raw(ch0, ch1, sample_rate_hz, tau_s=self.profile.tau_s)
        return self.analyze_record(record)

    def analyze_record(self, record: AcquisitionRecord) -> HysteresisResult:
        """Same as :meth:`analyze` for an already integrated record."""
        self.params.validate()
        self.profile.validate()

        stride = self.profile.decimation_for(record.n_samples)
        partial = reconstruct_loop(
            record.ch0_integrated,
            record.ch1,
            stride,
            self.profile.bins,
            noise_floor=self.profile.dx_noise_floor,
        )
        loop = loop_parameters(partial, self.params)

        logger.debug(
            "loop: n=%d stride=%d scatter=%d rising=%d falling=%d",
            record.n_samples, stride, len(loop.scatter), len(loop.rising), len(loop.falling),
        )
        for msg in loop.warnings:
            logger.warning(msg)

        return HysteresisResult(
            record=record,
            loop=loop,
            stats_ch0=compute_stats(record.ch0_integrated),
            stats_ch1=compute_stats(record.ch1),
            h_scale=h_scale(self.params),
            b_scale=b_scale(self.params),
            br_found=find_at_x(loop.rising, 0.0) is not None,
            hc_found=find_at_y(loop.rising, 0.0) is not None,
            warnings=tuple(record.warnings) + tuple(loop.warnings),
        )


def analyze_acquisition(
    ch0,
    ch1,
    sample_rate_hz: int,
    params: Optional[PhysicalParameters] = None,
    profile: Optional[AnalysisProfile] = None,
) -> HysteresisResult:
    """Functional wrapper around :class:`HysteresisAnalyzer`."""
    return HysteresisAnalyzer(params, profile).analyze(ch0, ch1, sample_rate_hz)


def branch_table(loop: LoopResult, params: Optional[PhysicalParameters] = None) -> pd.DataFrame:
    """Build a long-format table of both branches.

    Columns: ``branch`` ("rising"/"falling"), ``x``, ``y`` and, when *params*
    is given, ``H_A_per_m = x * h_scale`` and ``B_T = y * b_scale``, the same
    axis convention used for Bsat, Br and Hc.
    """
    rows = []
    for name, curve in (("rising", loop.rising), ("falling", loop.falling)):
        for x, y in curve:
            rows.append({"branch": name, "x": x, "y": y})

    df = pd.DataFrame(rows, columns=["branch", "x", "y"])
    if params is not None:
        df["H_A_per_m"] = df["x"].astype(float) * h_scale(params)
        df["B_T"] = df["y"].astype(float) * b_scale(params)
    return df
