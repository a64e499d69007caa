"""
Custom exceptions and error codes for the Kondate planner.

This module provides:
- Structured error codes for categorized error handling
- Custom exception classes for specific failure scenarios
- Error response schema for consistent API responses
"""
from enum import Enum
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, ConfigDict


class ErrorCode(str, Enum):
    """
    Application-wide error codes for categorized error handling.

    Format: CATEGORY_SPECIFIC_ERROR
    Categories:
    - SCHEDULE_*: Step validation and scheduling errors
    - RECIPE_*: Recipe generation errors
    - EXTERNAL_*: External service errors
    """

    # Schedule-related errors
    SCHEDULE_INVALID_STEP = "SCHEDULE_INVALID_STEP"
    SCHEDULE_DUPLICATE_STEP_ID = "SCHEDULE_DUPLICATE_STEP_ID"
    SCHEDULE_CYCLIC_DEPENDENCY = "SCHEDULE_CYCLIC_DEPENDENCY"

    # Recipe-related errors
    RECIPE_GENERATION_FAILED = "RECIPE_GENERATION_FAILED"
    RECIPE_INCOMPLETE = "RECIPE_INCOMPLETE"
    RECIPE_NO_INGREDIENTS = "RECIPE_NO_INGREDIENTS"

    # External service errors
    EXTERNAL_LLM_UNAVAILABLE = "EXTERNAL_LLM_UNAVAILABLE"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class ErrorResponse(BaseModel):
    """Structured error response for API errors."""
    error_code: ErrorCode
    message: str
    details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(use_enum_values=True)


class KondateError(Exception):
    """
    Base exception for all Kondate application errors.

    Provides structured error information for consistent error handling.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_response(self) -> ErrorResponse:
        """Convert exception to ErrorResponse for API output."""
        return ErrorResponse(
            error_code=self.error_code,
            message=self.message,
            details=self.details if self.details else None,
        )

    def to_detail(self) -> Dict[str, Any]:
        """Detail payload for HTTPException responses."""
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details,
        }


# Schedule-related exceptions

class ScheduleError(KondateError):
    """Base exception for plans the scheduler refuses to schedule."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.SCHEDULE_INVALID_STEP,
        details: Dict[str, Any] = None,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=422,
        )


class InvalidStepError(ScheduleError):
    """Raised when one or more steps are malformed (missing id, bad duration, ...)."""

    def __init__(self, problems: List[Dict[str, Any]]):
        count = len({problem.get("index") for problem in problems})
        noun = "step" if count == 1 else "steps"
        super().__init__(
            message=f"Plan rejected: {count} malformed {noun}",
            error_code=ErrorCode.SCHEDULE_INVALID_STEP,
            details={"problems": problems},
        )
        self.problems = problems


class DuplicateStepIdError(ScheduleError):
    """Raised when two steps in the same plan share an id."""

    def __init__(self, step_ids: List[int]):
        ids = ", ".join(str(i) for i in step_ids)
        super().__init__(
            message=f"Plan rejected: duplicate step ids {ids}",
            error_code=ErrorCode.SCHEDULE_DUPLICATE_STEP_ID,
            details={"step_ids": step_ids},
        )
        self.step_ids = step_ids


class CyclicDependencyError(ScheduleError):
    """Raised when step dependencies form a cycle."""

    def __init__(self, step_ids: List[int]):
        ids = ", ".join(str(i) for i in step_ids)
        super().__init__(
            message=f"Plan rejected: circular dependency between steps {ids}",
            error_code=ErrorCode.SCHEDULE_CYCLIC_DEPENDENCY,
            details={"step_ids": step_ids},
        )
        self.step_ids = step_ids


# Recipe-related exceptions

class RecipeGenerationError(KondateError):
    """Raised when the LLM recipe generator cannot produce a usable recipe."""

    def __init__(
        self,
        reason: str,
        error_code: ErrorCode = ErrorCode.RECIPE_GENERATION_FAILED,
        details: Dict[str, Any] = None,
        status_code: int = 500,
    ):
        super().__init__(
            message=f"Failed to generate recipe: {reason}",
            error_code=error_code,
            details=details,
            status_code=status_code,
        )


class IncompleteRecipeError(RecipeGenerationError):
    """Raised when a generated recipe is missing required fields."""

    def __init__(self, missing_fields: List[str]):
        super().__init__(
            reason=f"recipe is missing {', '.join(missing_fields)}",
            error_code=ErrorCode.RECIPE_INCOMPLETE,
            details={"missing_fields": missing_fields},
            status_code=502,
        )


class LLMNotConfiguredError(RecipeGenerationError):
    """Raised when no OpenAI API key is configured."""

    def __init__(self):
        super().__init__(
            reason="OpenAI API key is not configured",
            error_code=ErrorCode.EXTERNAL_LLM_UNAVAILABLE,
            status_code=503,
        )


class NoIngredientsError(RecipeGenerationError):
    """Raised when a recipe is requested without any ingredients."""

    def __init__(self):
        super().__init__(
            reason="no ingredients were provided",
            error_code=ErrorCode.RECIPE_NO_INGREDIENTS,
            status_code=400,
        )
