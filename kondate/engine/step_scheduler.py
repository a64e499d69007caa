"""
Step scheduler.
Assigns start times to cooking steps so dependencies are respected,
conflicting steps never overlap and the plan has no idle gaps.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from kondate.config import settings
from kondate.engine.scheduling import (
    ConflictClassifier,
    TimelineRepairEngine,
    dangling_dependencies,
    earliest_starts,
    optimized_time,
    validate_steps,
)
from kondate.models.schemas import Schedule, Step

logger = logging.getLogger(__name__)


class StepScheduler:
    """
    Schedule a plan's cooking steps onto a single timeline.

    Pipeline:
    - Validate producer records (the whole plan is rejected on any bad step)
    - Compute dependency-only start times
    - Repair conflict overlaps and idle gaps up to the pass cap
    - Summarize the total plan duration

    Each call works on its own copies of the steps; the scheduler holds no
    per-plan state and can be shared.
    """

    def __init__(
        self,
        classifier: Optional[ConflictClassifier] = None,
        max_passes: Optional[int] = None,
        empty_plan_minutes: Optional[int] = None,
        max_steps: Optional[int] = None,
    ):
        """
        Initialize the scheduler.

        Args:
            classifier: Optional conflict classifier. Defaults to keyword tables.
            max_passes: Repair pass cap. Defaults to config.
            empty_plan_minutes: optimizedTime for an empty plan. Defaults to config.
            max_steps: Largest accepted plan. Defaults to config.
        """
        self._repair_engine = TimelineRepairEngine(
            classifier=classifier,
            max_passes=max_passes if max_passes is not None else settings.schedule_max_passes,
        )
        self._empty_plan_minutes = (
            empty_plan_minutes if empty_plan_minutes is not None
            else settings.schedule_empty_plan_minutes
        )
        self._max_steps = max_steps if max_steps is not None else settings.schedule_max_steps

    def schedule(self, records: Iterable[Union[Step, Mapping[str, Any]]]) -> Schedule:
        """
        Schedule a plan.

        Args:
            records: Step records from the upstream producer, as dicts or Step models.
                Any supplied startTime is ignored.

        Returns:
            Schedule with every step's start_time set, in input order.

        Raises:
            InvalidStepError: If any step is malformed.
            DuplicateStepIdError: If step ids are not unique.
            CyclicDependencyError: If dependencies form a cycle.
        """
        advisories: List[str] = []
        steps = validate_steps(records, max_steps=self._max_steps, advisories=advisories)
        logger.debug(f"Scheduling {len(steps)} steps")

        for step_id, dep_id in dangling_dependencies(steps):
            logger.warning(
                f"Step {step_id} depends on unknown step {dep_id}; treating it as satisfied"
            )
            advisories.append(
                f"Step {step_id} depends on unknown step {dep_id}, which was ignored."
            )

        if not steps:
            return Schedule(
                steps=[],
                optimized_time=self._empty_plan_minutes,
                converged=True,
                passes=0,
                advisories=advisories,
            )

        initial = earliest_starts(steps)
        result = self._repair_engine.repair(steps, initial)

        if not result.converged:
            advisories.append(
                f"The timeline could not be fully compacted within "
                f"{self._repair_engine.max_passes} passes; some steps may start later "
                "than necessary or overlap."
            )

        scheduled = [
            step.model_copy(update={"start_time": result.starts[step.id]})
            for step in steps
        ]
        total = optimized_time(scheduled, result.starts, self._empty_plan_minutes)

        logger.info(
            f"Scheduled {len(scheduled)} steps in {total} min "
            f"({result.passes} pass(es), converged={result.converged})"
        )

        return Schedule(
            steps=scheduled,
            optimized_time=total,
            converged=result.converged,
            passes=result.passes,
            advisories=advisories,
        )
