"""Application layer - use cases and orchestration."""

from .commands import CutPlanOutput, OptimizeCutPlanCommand

__all__ = [
    "CutPlanOutput",
    "OptimizeCutPlanCommand",
]
