"""End-to-end and scalar-extraction tests for the hysteresis analyzer.

Covers:
- Bsat over both averaged branches (not the raw scatter)
- Br / Hc read from the rising branch only
- 0.0 sentinel plus explicit not-found flags and warnings
- Clean sinusoid at 10 kHz through integrate -> reconstruct -> scalars
- Synthetic open loop through HysteresisAnalyzer, with and without the
  integrator start-up transient
"""

from __future__ import annotations

import numpy as np
import pytest

from bh_loop_analyzer.analysis.hysteresis import (
    HysteresisAnalyzer,
    analyze_acquisition,
    branch_table,
    loop_parameters,
)
from bh_loop_analyzer.analysis.integrator import integrate_rc
from bh_loop_analyzer.analysis.interpolate import interpolate_at_x, interpolate_at_y
from bh_loop_analyzer.analysis.loop import reconstruct_loop
from bh_loop_analyzer.analysis.synthetic import synthetic_acquisition
from bh_loop_analyzer.errors import InvalidPhysicalParameters
from bh_loop_analyzer.models.acquisition import AcquisitionConfig, AcquisitionRecord
from bh_loop_analyzer.models.parameters import PhysicalParameters
from bh_loop_analyzer.models.results import BranchCurve, LoopResult, ScatterCloud

# Defaults: h_scale = 100 / (0.1 * 1.0) = 1000, b_scale = 1 / (50 * 1e-4) = 200
PARAMS = PhysicalParameters()
K_H = 1000.0
K_B = 200.0


def _loop(rx, ry, fx, fy, scatter: ScatterCloud = None) -> LoopResult:
    return LoopResult(
        scatter=scatter if scatter is not None else ScatterCloud.empty(),
        rising=BranchCurve(x=np.asarray(rx, dtype=float), y=np.asarray(ry, dtype=float)),
        falling=BranchCurve(x=np.asarray(fx, dtype=float), y=np.asarray(fy, dtype=float)),
    )


# -----------------------------------------------------------------------
# loop_parameters
# -----------------------------------------------------------------------


def test_scalars_from_hand_built_loop() -> None:
    loop = loop_parameters(_loop([-1.0, 1.0], [-0.5, 1.5], [-1.0, 1.0], [-3.0, 0.5]), PARAMS)

    # Bsat comes from the falling branch here: |-3| * 200.
    assert loop.bsat == pytest.approx(3.0 * K_B)
    # Br: y at x=0 on the rising branch = 0.5.
    assert loop.br == pytest.approx(0.5 * K_B)
    # Hc: x at y=0 on the rising branch = -0.5.
    assert loop.hc == pytest.approx(-0.5 * K_H)


def test_br_hc_ignore_falling_branch() -> None:
    rising_only = loop_parameters(_loop([-1.0, 1.0], [-0.5, 1.5], [], []), PARAMS)
    both = loop_parameters(_loop([-1.0, 1.0], [-0.5, 1.5], [-1.0, 1.0], [-1.5, 0.5]), PARAMS)
    assert both.br == rising_only.br
    assert both.hc == rising_only.hc


def test_bsat_uses_branches_not_scatter() -> None:
    outlier = ScatterCloud(x=np.array([0.0]), y=np.array([100.0]), direction=np.array([1], dtype=np.int8))
    loop = loop_parameters(_loop([-1.0, 1.0], [-0.5, 1.5], [], [], scatter=outlier), PARAMS)
    assert loop.bsat == pytest.approx(1.5 * K_B)


def test_no_crossing_gives_sentinel_and_warnings() -> None:
    loop = loop_parameters(_loop([1.0, 2.0], [1.0, 2.0], [1.0, 2.0], [3.0, 4.0]), PARAMS)
    assert loop.br == 0.0
    assert loop.hc == 0.0
    assert any("Br" in w for w in loop.warnings)
    assert any("Hc" in w for w in loop.warnings)


def test_empty_loop_has_zero_scalars() -> None:
    loop = loop_parameters(_loop([], [], [], []), PARAMS)
    assert loop.bsat == 0.0
    assert loop.br == 0.0
    assert loop.hc == 0.0


def test_invalid_parameters_rejected() -> None:
    with pytest.raises(InvalidPhysicalParameters):
        loop_parameters(_loop([0.0], [0.0], [], []), PhysicalParameters(area_m2=0.0))


# -----------------------------------------------------------------------
# End-to-end
# -----------------------------------------------------------------------


def test_clean_sinusoid_one_period() -> None:
    fs = 10_000
    f = 50.0
    amplitude = 1.0
    t = np.arange(int(fs / f)) / fs  # one full period
    ch0 = amplitude * np.sin(2 * np.pi * f * t)
    ch1 = amplitude * np.sin(2 * np.pi * f * t)

    integrated = integrate_rc(ch0, fs)
    loop = loop_parameters(reconstruct_loop(integrated, ch1, 1, 150), PARAMS)

    assert 0 < len(loop.rising) <= 150
    assert 0 < len(loop.falling) <= 150

    # Top/bottom bins average samples within ~0.16 rad of the peak.
    assert 0.9 * amplitude * K_B <= loop.bsat <= amplitude * K_B * (1 + 1e-12)

    branch_y = np.concatenate([loop.rising.y, loop.falling.y])
    assert loop.bsat == pytest.approx(np.max(np.abs(branch_y)) * K_B)


def _settled_record(ch0, ch1, fs: int, skip: int) -> AcquisitionRecord:
    """Integrate the full record, then drop the first *skip* samples of all channels."""
    integrated = integrate_rc(ch0, fs)
    return AcquisitionRecord(
        ch0=np.asarray(ch0)[skip:],
        ch1=np.asarray(ch1)[skip:],
        ch0_integrated=integrated[skip:],
        sample_rate_hz=fs,
    )


def _first_crossing_x(curve: BranchCurve) -> float:
    y_lo, y_hi = curve.y[:-1], curve.y[1:]
    enclosing = (np.minimum(y_lo, y_hi) <= 0.0) & (np.maximum(y_lo, y_hi) >= 0.0) & (y_lo != y_hi)
    i = int(np.flatnonzero(enclosing)[0])
    t = (0.0 - curve.y[i]) / (curve.y[i + 1] - curve.y[i])
    return float(curve.x[i] + t * (curve.x[i + 1] - curve.x[i]))


def test_analyzer_on_settled_synthetic_loop() -> None:
    fs = 10_000
    cfg = AcquisitionConfig(sample_rate_hz=fs, buffer_size=4000)
    ch0, ch1 = synthetic_acquisition(cfg, frequency_hz=50.0, amplitude_v=1.0, phase_lag_rad=0.3)

    # One excitation period covers the integrator start-up (tau ~ 4 samples).
    record = _settled_record(ch0, ch1, fs, skip=200)
    res = HysteresisAnalyzer(PARAMS).analyze_record(record)

    assert res.h_scale == pytest.approx(K_H)
    assert res.b_scale == pytest.approx(K_B)
    assert res.br_found and res.hc_found
    assert res.br == pytest.approx(interpolate_at_x(res.loop.rising, 0.0) * K_B)
    assert res.hc == pytest.approx(interpolate_at_y(res.loop.rising, 0.0) * K_H)

    # x ~ cos(wt - 0.3 - RC lag), y = sin(wt): on the rising branch
    # y(x=0) ~ -cos(0.42) and x(y=0) ~ cos(0.42).
    assert res.br / K_B == pytest.approx(-0.914, abs=0.05)
    assert res.hc / K_H == pytest.approx(0.907, abs=0.05)

    assert res.stats_ch1.max == pytest.approx(1.0, abs=1e-3)
    assert res.stats_ch0.peak_to_peak > 1.5
    assert res.record.n_samples == 3800
    assert res.loop.decimation == 1


def test_start_up_transient_gives_first_crossing_hc() -> None:
    # CH0 starts near its peak while the integrator starts from rest, so the
    # first samples add rising points near y=0 well left of the settled crossing.
    fs = 10_000
    cfg = AcquisitionConfig(sample_rate_hz=fs, buffer_size=4000)
    ch0, ch1 = synthetic_acquisition(cfg, frequency_hz=50.0, amplitude_v=1.0, phase_lag_rad=0.3)

    full = HysteresisAnalyzer(PARAMS).analyze(ch0, ch1, fs)
    settled = HysteresisAnalyzer(PARAMS).analyze_record(_settled_record(ch0, ch1, fs, skip=200))

    assert full.hc_found
    assert full.hc == pytest.approx(_first_crossing_x(full.loop.rising) * K_H)
    assert full.hc / K_H < 0.5
    assert settled.hc / K_H > 0.85
    assert full.record.n_samples == 4000


def test_analyzer_is_stateless_between_calls() -> None:
    cfg = AcquisitionConfig(sample_rate_hz=10_000, buffer_size=1000)
    ch0, ch1 = synthetic_acquisition(cfg, noise_v=0.01, seed=7)
    other0, other1 = synthetic_acquisition(cfg, phase_lag_rad=1.0)

    analyzer = HysteresisAnalyzer()
    first = analyzer.analyze(ch0, ch1, 10_000)
    analyzer.analyze(other0, other1, 10_000)
    again = analyzer.analyze(ch0, ch1, 10_000)

    assert first.bsat == again.bsat
    assert first.br == again.br
    assert first.hc == again.hc
    np.testing.assert_array_equal(first.loop.rising.y, again.loop.rising.y)


def test_analyze_validates_parameters_first() -> None:
    with pytest.raises(InvalidPhysicalParameters):
        analyze_acquisition([0.0, 1.0], [0.0], 10_000, params=PhysicalParameters(turns_b=-5.0))


def test_branch_table_columns() -> None:
    loop = _loop([-1.0, 1.0], [-0.5, 1.5], [0.0], [2.0])
    df = branch_table(loop, PARAMS)

    assert list(df.columns) == ["branch", "x", "y", "H_A_per_m", "B_T"]
    assert len(df) == 3
    assert (df["branch"] == "rising").sum() == 2
    np.testing.assert_allclose(df["H_A_per_m"].to_numpy(), df["x"].to_numpy() * K_H)
    np.testing.assert_allclose(df["B_T"].to_numpy(), df["y"].to_numpy() * K_B)


def test_branch_table_without_params() -> None:
    df = branch_table(_loop([], [], [], []))
    assert list(df.columns) == ["branch", "x", "y"]
    assert len(df) == 0
