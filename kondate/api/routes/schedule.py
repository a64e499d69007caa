"""
Step scheduling API routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status

from kondate.api.dependencies import get_step_scheduler
from kondate.engine.step_scheduler import StepScheduler
from kondate.errors import ErrorCode, KondateError
from kondate.features import Feature
from kondate.features.service import require_feature
from kondate.models.schemas import Schedule, ScheduleRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["schedule"])


@router.post("/schedule", response_model=Schedule, response_model_by_alias=True)
async def schedule_steps(
    body: ScheduleRequest,
    scheduler: StepScheduler = Depends(get_step_scheduler),
    _: None = Depends(require_feature(Feature.STEP_SCHEDULING)),
):
    """
    Schedule cooking steps onto a single timeline.

    Returns the steps in input order with startTime filled in, plus the total
    plan duration (optimizedTime). The whole plan is rejected with 422 if any
    step is malformed, ids repeat, or dependencies form a cycle.
    """
    try:
        return scheduler.schedule(body.steps)
    except KondateError as e:
        logger.warning(f"Schedule request rejected: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except Exception as e:
        logger.exception("Failed to schedule steps")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error_code": ErrorCode.INTERNAL_ERROR.value,
                "message": "Failed to schedule steps",
                "details": {"error_type": type(e).__name__},
            },
        )
