"""Progress module for tracking problem completion."""

from thinkscope.progress.aggregator import ProgressAggregator, completion_percentage
from thinkscope.progress.models import NumberedProgress, Progress
from thinkscope.progress.service import ProgressService, ToggleResult


__all__ = [
    "NumberedProgress",
    "Progress",
    "ProgressAggregator",
    "ProgressService",
    "ToggleResult",
    "completion_percentage",
]
