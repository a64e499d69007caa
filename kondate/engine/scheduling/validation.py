"""
Validation of raw step records from the upstream producer.

Producer output is untrusted: the whole plan is rejected if any step is
malformed, since a guessed id or duration would corrupt every downstream
timing. Fractional durations are rounded up to whole minutes and reported.
Optional fields are defaulted the conservative way (a step with no parallel
flag is assumed to need the cook's full attention).
"""

import logging
import math
from collections import Counter
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from kondate.errors import DuplicateStepIdError, InvalidStepError
from kondate.models.schemas import Step, StepCategory

logger = logging.getLogger(__name__)

# Optional keys where an explicit null means "not supplied"
_NULLABLE_KEYS = (
    "title", "description", "dependencies",
    "canParallel", "can_parallel", "category", "dishLabel", "dish_label",
)

# Computed by the scheduler, never taken from input
_OUTPUT_KEYS = ("startTime", "start_time")

# Free-text fields; numbers are kept as text, anything else is dropped
_TEXT_KEYS = ("title", "description", "dishLabel", "dish_label")

_CATEGORY_VALUES = {category.value for category in StepCategory}


def validate_steps(
    records: Iterable[Union[Step, Mapping[str, Any]]],
    max_steps: Optional[int] = None,
    advisories: Optional[List[str]] = None,
) -> List[Step]:
    """
    Validate producer records into fresh Step models.

    Args:
        records: Step records as dicts (wire names or field names) or Step models.
        max_steps: Optional upper bound on plan size.
        advisories: Optional list that receives a note for every value that
            was adjusted rather than rejected (rounded durations).

    Returns:
        New Step models in input order, with start_time unset.

    Raises:
        InvalidStepError: If any record is malformed or the plan is too large.
        DuplicateStepIdError: If two records share an id.
    """
    if isinstance(records, (str, bytes)) or isinstance(records, Mapping):
        raise InvalidStepError([
            {"index": None, "step_id": None, "field": "steps", "message": "steps must be a list"}
        ])

    records = list(records)
    if max_steps is not None and len(records) > max_steps:
        raise InvalidStepError([
            {
                "index": None,
                "step_id": None,
                "field": "steps",
                "message": f"plan has {len(records)} steps, the limit is {max_steps}",
            }
        ])

    problems: List[Dict[str, Any]] = []
    steps: List[Step] = []

    for index, record in enumerate(records):
        data = _normalize_record(record, advisories)
        if data is None:
            problems.append({
                "index": index,
                "step_id": None,
                "field": None,
                "message": "step must be an object",
            })
            continue

        try:
            steps.append(Step.model_validate(data))
        except ValidationError as e:
            for error in e.errors():
                problems.append({
                    "index": index,
                    "step_id": data.get("id"),
                    "field": ".".join(str(part) for part in error["loc"]) or None,
                    "message": error["msg"],
                })

    if problems:
        logger.warning(f"Rejecting plan with {len(problems)} validation problem(s)")
        raise InvalidStepError(problems)

    counts = Counter(step.id for step in steps)
    duplicates = sorted(step_id for step_id, count in counts.items() if count > 1)
    if duplicates:
        logger.warning(f"Rejecting plan with duplicate step ids: {duplicates}")
        raise DuplicateStepIdError(duplicates)

    return steps


def _normalize_record(record: Any, advisories: Optional[List[str]] = None) -> Optional[Dict[str, Any]]:
    """Copy a record into a plain dict with nulls and output fields removed."""
    if isinstance(record, Step):
        data = record.model_dump(by_alias=True)
    elif isinstance(record, Mapping):
        data = dict(record)
    else:
        return None

    for key in _OUTPUT_KEYS:
        data.pop(key, None)

    for key in _NULLABLE_KEYS:
        if key in data and data[key] is None:
            del data[key]

    category = data.get("category")
    if category is not None and not _is_known_category(category):
        logger.warning(
            f"Step {data.get('id')} has unknown category {category!r}; leaving it unset"
        )
        del data["category"]

    for key in _TEXT_KEYS:
        value = data.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (str, int, float))):
            logger.warning(f"Step {data.get('id')} has a non-text {key} {value!r}; leaving it unset")
            del data[key]

    duration = data.get("duration")
    if isinstance(duration, float) and math.isfinite(duration) and duration > 0 and not duration.is_integer():
        rounded = math.ceil(duration)
        logger.warning(f"Step {data.get('id')} duration {duration} rounded up to {rounded} min")
        if advisories is not None:
            advisories.append(
                f"Step {data.get('id')} duration of {duration} min was rounded up to {rounded} min."
            )
        data["duration"] = rounded

    return data


def _is_known_category(value: Any) -> bool:
    if isinstance(value, StepCategory):
        return True
    return isinstance(value, str) and value in _CATEGORY_VALUES
