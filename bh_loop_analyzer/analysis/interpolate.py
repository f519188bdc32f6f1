"""Linear interpolation on branch curves.

The curve is treated as an ordered list of ``(x, y)`` pairs; it does not need
to be monotonic. The first consecutive pair whose coordinates enclose the query
value (in either order) is used. Pairs with equal coordinates on the query axis
are skipped, so no division by a zero span can occur.

Two flavours are provided:

- :func:`find_at_x` / :func:`find_at_y` return ``None`` when no pair encloses
  the query value.
- :func:`interpolate_at_x` / :func:`interpolate_at_y` return ``0.0`` instead.
  This sentinel collides with a legitimate zero; callers that need to tell the
  two apart should use the ``find_*`` functions.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from bh_loop_analyzer.errors import InvalidInput
from bh_loop_analyzer.models.results import BranchCurve

CurveLike = Union[BranchCurve, Tuple[object, object]]

NOT_FOUND = 0.0


def _columns(curve: CurveLike) -> Tuple[np.ndarray, np.ndarray]:
    if isinstance(curve, BranchCurve):
        xs, ys = curve.x, curve.y
    else:
        xs, ys = curve
    xa = np.asarray(xs, dtype=float).ravel()
    ya = np.asarray(ys, dtype=float).ravel()
    if xa.size != ya.size:
        raise InvalidInput(f"Curve length mismatch: len(x)={xa.size}, len(y)={ya.size}")
    return xa, ya


def _find(u: np.ndarray, v: np.ndarray, u0: float) -> Optional[float]:
    """Interpolate v at u == u0 over the first enclosing segment of u."""
    if u.size < 2:
        return None
    u0 = float(u0)
    ua = u[:-1]
    ub = u[1:]
    enclosing = (np.minimum(ua, ub) <= u0) & (u0 <= np.maximum(ua, ub)) & (ua != ub)
    hits = np.flatnonzero(enclosing)
    if hits.size == 0:
        return None

    i = int(hits[0])
    u_lo, u_hi = float(ua[i]), float(ub[i])
    v_lo, v_hi = float(v[i]), float(v[i + 1])
    # Exact at the nodes.
    if u0 == u_lo:
        return v_lo
    if u0 == u_hi:
        return v_hi
    t = (u0 - u_lo) / (u_hi - u_lo)
    return v_lo + t * (v_hi - v_lo)


def find_at_x(curve: CurveLike, x0: float) -> Optional[float]:
    """Return y at *x0*, or None if no segment encloses *x0*."""
    x, y = _columns(curve)
    return _find(x, y, x0)


def find_at_y(curve: CurveLike, y0: float) -> Optional[float]:
    """Return x at *y0*, or None if no segment encloses *y0*."""
    x, y = _columns(curve)
    return _find(y, x, y0)


def interpolate_at_x(curve: CurveLike, x0: float) -> float:
    """Return y at *x0*; ``0.0`` when *x0* is outside the curve."""
    r = find_at_x(curve, x0)
    return NOT_FOUND if r is None else r


def interpolate_at_y(curve: CurveLike, y0: float) -> float:
    """Return x at *y0*; ``0.0`` when *y0* is outside the curve."""
    r = find_at_y(curve, y0)
    return NOT_FOUND if r is None else r
