"""
Dependency resolution for cooking steps.

Computes earliest start times from precedence edges alone, as if no two
steps ever competed for hands or equipment. Steps are visited in topological
order, so every start time is computed exactly once from already-final
dependency start times, and a cyclic plan is rejected up front instead of
recursing forever.
"""

import heapq
import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Sequence, Set, Tuple

from kondate.errors import CyclicDependencyError
from kondate.models.schemas import Step

logger = logging.getLogger(__name__)


def index_steps(steps: Sequence[Step]) -> Dict[int, Step]:
    """Map step id to step."""
    return {step.id: step for step in steps}


def dangling_dependencies(steps: Sequence[Step]) -> List[Tuple[int, int]]:
    """
    Find dependencies on ids that are not part of the plan.

    Returns:
        (step_id, missing_dependency_id) pairs in step order.
    """
    known = {step.id for step in steps}
    return [
        (step.id, dep_id)
        for step in steps
        for dep_id in step.dependencies
        if dep_id not in known
    ]


def topological_order(steps: Sequence[Step]) -> List[int]:
    """
    Order step ids so every step comes after all of its dependencies.

    Ties are broken by lowest id, so the order is deterministic. Dangling
    dependencies are ignored.

    Args:
        steps: The plan's steps.

    Returns:
        Step ids in dependency order.

    Raises:
        CyclicDependencyError: If the dependencies contain a cycle.
    """
    known = {step.id for step in steps}
    indegree: Dict[int, int] = {step.id: 0 for step in steps}
    dependents: Dict[int, List[int]] = defaultdict(list)

    for step in steps:
        for dep_id in step.dependencies:
            if dep_id in known:
                indegree[step.id] += 1
                dependents[dep_id].append(step.id)

    ready = [step_id for step_id, degree in indegree.items() if degree == 0]
    heapq.heapify(ready)

    order: List[int] = []
    while ready:
        step_id = heapq.heappop(ready)
        order.append(step_id)
        for child_id in dependents[step_id]:
            indegree[child_id] -= 1
            if indegree[child_id] == 0:
                heapq.heappush(ready, child_id)

    if len(order) != len(indegree):
        blocked = {step_id for step_id, degree in indegree.items() if degree > 0}
        on_cycle = _cycle_members(blocked, dependents)
        logger.warning(f"Circular dependency detected between steps {on_cycle}")
        raise CyclicDependencyError(on_cycle)

    return order


def _cycle_members(blocked: Set[int], dependents: Mapping[int, List[int]]) -> List[int]:
    """
    Narrow blocked steps down to the ones on (or between) cycles.

    Steps that merely wait behind a cycle have no blocked dependents of their
    own once the tail is peeled off, so they are removed repeatedly.
    """
    remaining = set(blocked)
    changed = True
    while changed:
        changed = False
        for step_id in sorted(remaining):
            if not any(child in remaining for child in dependents.get(step_id, [])):
                remaining.discard(step_id)
                changed = True
    return sorted(remaining)


def dependency_floor(step: Step, starts: Mapping[int, int], steps_by_id: Mapping[int, Step]) -> int:
    """
    Earliest legal start for a step given its dependencies' current starts.

    Dangling dependencies contribute nothing.
    """
    floor = 0
    for dep_id in step.dependencies:
        dep = steps_by_id.get(dep_id)
        if dep is None:
            continue
        floor = max(floor, starts[dep_id] + dep.duration)
    return floor


def earliest_starts(steps: Sequence[Step]) -> Dict[int, int]:
    """
    Compute dependency-only start times.

    A step without dependencies starts at 0; any other step starts when its
    last dependency ends.

    Args:
        steps: The plan's steps.

    Returns:
        Mapping of step id to start time in minutes.

    Raises:
        CyclicDependencyError: If the dependencies contain a cycle.
    """
    steps_by_id = index_steps(steps)
    starts: Dict[int, int] = {}

    for step_id in topological_order(steps):
        starts[step_id] = dependency_floor(steps_by_id[step_id], starts, steps_by_id)

    return starts
