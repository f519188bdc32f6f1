from __future__ import annotations

import math

import numpy as np
import pytest

from bh_loop_analyzer.analysis.statistics import compute_stats
from bh_loop_analyzer.errors import EmptyInput, InvalidInput


def test_constant_sequence() -> None:
    s = compute_stats([5, 5, 5, 5])
    assert s.min == 5.0
    assert s.max == 5.0
    assert s.peak_to_peak == 0.0
    assert s.rms == 5.0


def test_empty_sequence_rejected() -> None:
    with pytest.raises(EmptyInput):
        compute_stats([])
    # EmptyInput is also an InvalidInput.
    with pytest.raises(InvalidInput):
        compute_stats(np.array([]))


def test_mixed_signs() -> None:
    s = compute_stats(np.array([-1.0, 3.0]))
    assert s.min == -1.0
    assert s.max == 3.0
    assert s.peak_to_peak == 4.0
    assert s.rms == pytest.approx(math.sqrt(5.0))


def test_sine_rms() -> None:
    x = np.sin(np.linspace(0.0, 2 * np.pi, 10_000, endpoint=False))
    s = compute_stats(x)
    assert s.rms == pytest.approx(1 / math.sqrt(2), rel=1e-9)
    assert s.peak_to_peak == pytest.approx(2.0, rel=1e-6)


def test_formatted_uses_four_decimals() -> None:
    s = compute_stats([0.5, 1.0])
    f = s.formatted()
    assert f["min"] == "0.5000"
    assert f["max"] == "1.0000"
    assert f["peak_to_peak"] == "0.5000"


def test_non_finite_rejected() -> None:
    with pytest.raises(InvalidInput):
        compute_stats([1.0, np.inf])
