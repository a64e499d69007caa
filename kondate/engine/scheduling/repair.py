"""
Timeline repair engine.

Turns a dependency-only timeline into one where conflicting steps never
overlap and no idle gap is left in the plan. Each pass runs three sub-steps
(conflict resolution, gap compaction, dependency re-validation), each taking
an immutable snapshot of start times and returning a new one. Passes repeat
until one changes nothing or the pass cap is reached.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from kondate.engine.scheduling.conflicts import KeywordConflictClassifier
from kondate.engine.scheduling.dependencies import (
    dependency_floor,
    index_steps,
    topological_order,
)
from kondate.engine.scheduling.protocol import ConflictClassifier
from kondate.models.schemas import Step

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10


@dataclass(frozen=True)
class RepairResult:
    """
    Outcome of a repair run.

    Attributes:
        starts: Final start time per step id (read-only).
        passes: Number of passes executed, including the final no-change pass.
        converged: False when the pass cap was hit before a no-change pass.
    """

    starts: Mapping[int, int]
    passes: int
    converged: bool


def overlaps(start_a: int, duration_a: int, start_b: int, duration_b: int) -> bool:
    """Whether half-open intervals [start, start + duration) intersect."""
    return start_a < start_b + duration_b and start_b < start_a + duration_a


def resolve_conflicts(
    starts: Mapping[int, int],
    pairs: Sequence[Tuple[int, int]],
    steps_by_id: Mapping[int, Step],
) -> Dict[int, int]:
    """
    Push apart overlapping conflicting steps.

    The step that starts first keeps its place and the other moves to its end.
    On equal starts the first id of the pair stays. Pairs are processed in the
    given order against the start times updated so far.
    """
    resolved = dict(starts)
    for first_id, second_id in pairs:
        first, second = steps_by_id[first_id], steps_by_id[second_id]
        if not overlaps(resolved[first_id], first.duration, resolved[second_id], second.duration):
            continue

        if resolved[second_id] < resolved[first_id]:
            fixed, moved = second, first
        else:
            fixed, moved = first, second

        resolved[moved.id] = resolved[fixed.id] + fixed.duration
        logger.debug(
            f"Step {moved.id} conflicts with step {fixed.id}; moved to t={resolved[moved.id]}"
        )
    return resolved


def compact_gaps(starts: Mapping[int, int], steps_by_id: Mapping[int, Step]) -> Dict[int, int]:
    """
    Close idle intervals after the first step.

    Scanning by start time, every stretch no step occupies is removed by
    shifting all steps starting at or after its end backward by its length.
    Relative order is kept, so dependencies and non-overlap are preserved.
    """
    compacted = dict(starts)
    if not compacted:
        return compacted

    ordered = sorted(compacted, key=lambda step_id: (compacted[step_id], step_id))
    first_id = ordered[0]
    covered_until = compacted[first_id] + steps_by_id[first_id].duration
    shift = 0

    for step_id in ordered[1:]:
        start = compacted[step_id] - shift
        if start > covered_until:
            gap = start - covered_until
            logger.debug(f"Closing {gap} min gap at t={covered_until}")
            shift += gap
            start = covered_until
        compacted[step_id] = start
        covered_until = max(covered_until, start + steps_by_id[step_id].duration)

    return compacted


def revalidate_dependencies(
    starts: Mapping[int, int],
    order: Sequence[int],
    steps_by_id: Mapping[int, Step],
) -> Dict[int, int]:
    """
    Push steps forward until each starts after all of its dependencies end.

    Steps are visited in topological order so one sweep settles every chain.
    """
    validated = dict(starts)
    for step_id in order:
        floor = dependency_floor(steps_by_id[step_id], validated, steps_by_id)
        if validated[step_id] < floor:
            logger.debug(f"Step {step_id} starts before its dependencies end; moved to t={floor}")
            validated[step_id] = floor
    return validated


class TimelineRepairEngine:
    """
    Fixpoint loop over conflict resolution, gap compaction and dependency checks.

    The classifier is consulted once per pair per run; step definitions do
    not change between passes, so the set of conflicting pairs is fixed.
    """

    def __init__(
        self,
        classifier: Optional[ConflictClassifier] = None,
        max_passes: int = DEFAULT_MAX_PASSES,
    ):
        """
        Initialize the repair engine.

        Args:
            classifier: Conflict classifier. Defaults to KeywordConflictClassifier.
            max_passes: Pass cap before returning a degraded timeline.
        """
        if max_passes < 1:
            raise ValueError("max_passes must be at least 1")
        self._classifier = classifier or KeywordConflictClassifier()
        self._max_passes = max_passes

    @property
    def max_passes(self) -> int:
        return self._max_passes

    def conflicting_pairs(self, steps: Sequence[Step]) -> List[Tuple[int, int]]:
        """
        List every pair of steps that must be serialized.

        Returns:
            (lower_id, higher_id) pairs sorted by id.
        """
        ordered = sorted(steps, key=lambda step: step.id)
        pairs = []
        for i, first in enumerate(ordered):
            for second in ordered[i + 1:]:
                if self._classifier.must_serialize(first, second):
                    pairs.append((first.id, second.id))
        return pairs

    def repair(self, steps: Sequence[Step], starts: Mapping[int, int]) -> RepairResult:
        """
        Repair a timeline.

        Args:
            steps: The plan's steps.
            starts: Initial start time per step id, normally the
                dependency-only times from earliest_starts().

        Returns:
            RepairResult with the final start times.

        Raises:
            CyclicDependencyError: If the dependencies contain a cycle.
        """
        steps_by_id = index_steps(steps)
        order = topological_order(steps)
        pairs = self.conflicting_pairs(steps)
        logger.debug(f"Repairing {len(steps)} steps with {len(pairs)} conflicting pairs")

        snapshot: Mapping[int, int] = MappingProxyType(dict(starts))

        for pass_number in range(1, self._max_passes + 1):
            resolved = resolve_conflicts(snapshot, pairs, steps_by_id)
            compacted = compact_gaps(resolved, steps_by_id)
            validated = revalidate_dependencies(compacted, order, steps_by_id)

            changed = resolved != dict(snapshot) or compacted != resolved or validated != compacted
            snapshot = MappingProxyType(validated)

            if not changed:
                logger.debug(f"Timeline converged after {pass_number} pass(es)")
                return RepairResult(starts=snapshot, passes=pass_number, converged=True)

        logger.warning(
            f"Timeline repair did not converge within {self._max_passes} passes; "
            "returning best effort"
        )
        return RepairResult(starts=snapshot, passes=self._max_passes, converged=False)
