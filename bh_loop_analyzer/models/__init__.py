from .acquisition import AcquisitionConfig, AcquisitionRecord
from .parameters import PhysicalParameters, b_scale, h_scale
from .profile import AnalysisProfile
from .results import (
    BranchCurve,
    ChannelStats,
    Direction,
    HysteresisResult,
    LoopResult,
    ScatterCloud,
    ScatterPoint,
)

__all__ = [
    "AcquisitionConfig",
    "AcquisitionRecord",
    "PhysicalParameters",
    "h_scale",
    "b_scale",
    "AnalysisProfile",
    "BranchCurve",
    "ChannelStats",
    "Direction",
    "HysteresisResult",
    "LoopResult",
    "ScatterCloud",
    "ScatterPoint",
]
