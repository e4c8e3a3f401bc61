"""Progress feedback shown while the generation request is in flight."""

from .simulator import ProgressSimulator
from .stages import DEFAULT_MAX_INDEX, LOADING_STAGES, STAGE_INTERVAL_SECONDS, Stage

__all__ = [
    "DEFAULT_MAX_INDEX",
    "LOADING_STAGES",
    "STAGE_INTERVAL_SECONDS",
    "ProgressSimulator",
    "Stage",
]
