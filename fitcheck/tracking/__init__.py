from __future__ import annotations

from .comparison import PhotoComparison, select_comparisons
from .compliance import ComplianceState, PoseStatus, evaluate
from .schedule import next_photo_check, next_weight_check

__all__ = [
    "ComplianceState",
    "PhotoComparison",
    "PoseStatus",
    "evaluate",
    "next_photo_check",
    "next_weight_check",
    "select_comparisons",
]
