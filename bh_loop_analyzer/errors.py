"""Error kinds raised by the loop reconstruction pipeline.

All errors derive from :class:`ValueError`, so code that only guards against
``ValueError`` keeps working. Interpolation misses are *not* errors: they are
reported through the ``0.0`` sentinel (see :mod:`bh_loop_analyzer.analysis.interpolate`).
"""

from __future__ import annotations


class HysteresisError(ValueError):
    """Base class for all pipeline errors."""


class InvalidInput(HysteresisError):
    """Raised for malformed signals or arguments (e.g. sample rate <= 0)."""


class EmptyInput(InvalidInput):
    """Raised when a statistic is requested over a zero-length sequence."""


class InvalidPhysicalParameters(HysteresisError):
    """Raised when a turns count, length, resistance or area is not strictly positive."""


__all__ = [
    "HysteresisError",
    "InvalidInput",
    "EmptyInput",
    "InvalidPhysicalParameters",
]
