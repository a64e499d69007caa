"""
Tests for dependency resolution: topological order, cycle detection and
dependency-only start times.
"""
import pytest

from kondate.engine.scheduling import (
    dangling_dependencies,
    dependency_floor,
    earliest_starts,
    topological_order,
)
from kondate.engine.scheduling.dependencies import index_steps
from kondate.errors import CyclicDependencyError
from kondate.models.schemas import Step


def _step(step_id, duration=5, dependencies=None):
    return Step(id=step_id, duration=duration, dependencies=dependencies or [])


class TestTopologicalOrder:
    """Tests for topological_order()."""

    def test_dependencies_come_first(self):
        steps = [_step(1, dependencies=[2]), _step(2)]
        assert topological_order(steps) == [2, 1]

    def test_ties_broken_by_lowest_id(self):
        steps = [_step(3, dependencies=[1]), _step(2), _step(1)]
        assert topological_order(steps) == [1, 2, 3]

    def test_dangling_dependencies_ignored(self):
        steps = [_step(1, dependencies=[99]), _step(2)]
        assert topological_order(steps) == [1, 2]

    def test_two_step_cycle_rejected(self):
        steps = [_step(1, dependencies=[2]), _step(2, dependencies=[1])]
        with pytest.raises(CyclicDependencyError) as exc_info:
            topological_order(steps)
        assert exc_info.value.step_ids == [1, 2]

    def test_cycle_error_excludes_steps_waiting_behind_the_cycle(self):
        """Step 3 is blocked by the cycle but is not part of it."""
        steps = [
            _step(1, dependencies=[2]),
            _step(2, dependencies=[1]),
            _step(3, dependencies=[1]),
            _step(4),
        ]
        with pytest.raises(CyclicDependencyError) as exc_info:
            topological_order(steps)
        assert exc_info.value.step_ids == [1, 2]

    def test_self_dependency_rejected(self):
        with pytest.raises(CyclicDependencyError) as exc_info:
            topological_order([_step(1, dependencies=[1])])
        assert exc_info.value.step_ids == [1]


class TestEarliestStarts:
    """Tests for earliest_starts()."""

    def test_independent_steps_start_at_zero(self):
        starts = earliest_starts([_step(1, 5), _step(2, 10)])
        assert starts == {1: 0, 2: 0}

    def test_chain_starts_after_dependencies_end(self):
        steps = [
            _step(1, 5),
            _step(2, 10, dependencies=[1]),
            _step(3, 3, dependencies=[1, 2]),
        ]
        assert earliest_starts(steps) == {1: 0, 2: 5, 3: 15}

    def test_waits_for_longest_dependency(self):
        steps = [
            _step(1, 5),
            _step(2, 20),
            _step(3, 3, dependencies=[1, 2]),
        ]
        assert earliest_starts(steps)[3] == 20

    def test_dangling_dependency_counts_as_zero_duration(self):
        steps = [_step(1, 5, dependencies=[42])]
        assert earliest_starts(steps) == {1: 0}

    def test_input_order_does_not_matter(self):
        forward = [_step(1, 5), _step(2, 7, dependencies=[1]), _step(3, 2, dependencies=[2])]
        backward = list(reversed(forward))
        assert earliest_starts(forward) == earliest_starts(backward)

    def test_cycle_rejected(self):
        steps = [_step(1, dependencies=[3]), _step(2, dependencies=[1]), _step(3, dependencies=[2])]
        with pytest.raises(CyclicDependencyError) as exc_info:
            earliest_starts(steps)
        assert exc_info.value.step_ids == [1, 2, 3]
        assert exc_info.value.status_code == 422

    def test_long_chain_does_not_recurse(self):
        """A deep chain is resolved iteratively."""
        steps = [_step(1, 1)] + [_step(i, 1, dependencies=[i - 1]) for i in range(2, 3001)]
        starts = earliest_starts(steps)
        assert starts[3000] == 2999


class TestDependencyHelpers:
    """Tests for dependency_floor() and dangling_dependencies()."""

    def test_floor_is_latest_dependency_end(self):
        steps = [_step(1, 5), _step(2, 8), _step(3, dependencies=[1, 2])]
        floor = dependency_floor(steps[2], {1: 10, 2: 0}, index_steps(steps))
        assert floor == 15

    def test_floor_ignores_unknown_dependencies(self):
        steps = [_step(1, dependencies=[7])]
        assert dependency_floor(steps[0], {1: 0}, index_steps(steps)) == 0

    def test_dangling_dependencies_reported(self):
        steps = [_step(1, dependencies=[9]), _step(2, dependencies=[1, 8])]
        assert dangling_dependencies(steps) == [(1, 9), (2, 8)]

    def test_no_dangling_dependencies(self):
        steps = [_step(1), _step(2, dependencies=[1])]
        assert dangling_dependencies(steps) == []
