"""
FastAPI dependencies for the scheduling and recipe services.
"""
from kondate.engine.recipe_generator import RecipeGenerator
from kondate.engine.step_scheduler import StepScheduler


def get_step_scheduler() -> StepScheduler:
    """
    Dependency providing a StepScheduler configured from settings.

    Usage:
        @router.post("/schedule")
        def schedule(scheduler: StepScheduler = Depends(get_step_scheduler)):
            ...
    """
    return StepScheduler()


def get_recipe_generator() -> RecipeGenerator:
    """Dependency providing a RecipeGenerator backed by the OpenAI client."""
    return RecipeGenerator()
