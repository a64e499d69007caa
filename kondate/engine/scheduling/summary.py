"""
Schedule summarizer.
"""

from typing import Mapping, Sequence

from kondate.models.schemas import Step


def optimized_time(steps: Sequence[Step], starts: Mapping[int, int], empty_default: int = 0) -> int:
    """
    Total plan duration: the latest end time over all steps.

    Args:
        steps: The plan's steps.
        starts: Start time per step id.
        empty_default: Value reported for a plan with no steps.

    Returns:
        Latest start + duration, in minutes.
    """
    if not steps:
        return empty_default
    return max(starts[step.id] + step.duration for step in steps)
