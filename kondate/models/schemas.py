"""
Pydantic data models for the Kondate planner.

Wire format uses the camelCase names the upstream producer and the timeline
renderer exchange (canParallel, dishLabel, startTime, optimizedTime); Python
code may populate the models by field name as well.
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StepCategory(str, Enum):
    """Kind of cooking work. Informational only, the scheduler ignores it."""
    PREP = "prep"
    COOK = "cook"
    SERVE = "serve"
    WAIT = "wait"


class Genre(str, Enum):
    """Cuisine genres the recipe generator understands."""
    ANY = "any"
    JAPANESE = "japanese"
    WESTERN = "western"
    CHINESE = "chinese"
    CAFE = "cafe"
    DIET = "diet"
    COMFORT = "comfort"
    QUICK = "quick"
    KIDS = "kids"
    HEALTHY = "healthy"


# Prompt wording per genre; ANY adds no genre condition
GENRE_DESCRIPTIONS: Dict[str, str] = {
    "any": "",
    "japanese": "Japanese home cooking (rice, miso soup, simmered dishes, grilled fish)",
    "western": "Western dishes (pasta, salad, soup, omelette)",
    "chinese": "Chinese dishes (stir-fries, gyoza, mapo tofu, spring rolls)",
    "cafe": "Stylish cafe food (sandwiches, smoothies, pancakes, salad bowls)",
    "diet": "Diet-friendly (low calorie, healthy, vegetable-centred)",
    "comfort": "Classic family comfort food with nostalgic flavours",
    "quick": "Quick cooking that can be made within 15 minutes",
    "kids": "Kid-friendly dishes that look cute and taste mild",
    "healthy": "Health-focused dishes with balanced nutrition",
}


class Step(BaseModel):
    """
    A unit of cooking work.

    `start_time` is computed by the scheduler; any value supplied by the
    producer is discarded during validation.
    """
    id: int = Field(..., gt=0, description="Positive id, unique within a plan")
    title: str = Field(default="", description="Short step title")
    description: str = Field(default="", description="Step text, mined for ingredient and equipment keywords")
    duration: int = Field(..., gt=0, description="Duration in minutes")
    dependencies: List[int] = Field(
        default_factory=list,
        description="Ids of steps that must finish before this one starts",
    )
    can_parallel: bool = Field(
        default=False,
        alias="canParallel",
        description="Whether the step may overlap other steps",
    )
    category: Optional[StepCategory] = Field(default=None, description="prep, cook, serve or wait")
    dish_label: Optional[str] = Field(
        default=None,
        alias="dishLabel",
        description="Dish group tag such as 'A' or 'B'",
    )
    start_time: Optional[int] = Field(
        default=None,
        alias="startTime",
        description="Minutes from plan start (computed)",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "id": 2,
                    "title": "Simmer the soup",
                    "description": "Simmer the miso soup in a pot",
                    "duration": 10,
                    "dependencies": [1],
                    "canParallel": True,
                    "category": "cook",
                    "dishLabel": "B",
                }
            ]
        },
    )

    @field_validator("id", "duration", mode="before")
    @classmethod
    def reject_boolean_numbers(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("must be a number, not true or false")
        return v

    @field_validator("dependencies", mode="before")
    @classmethod
    def reject_boolean_dependencies(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)) and any(isinstance(item, bool) for item in v):
            raise ValueError("dependency ids must be numbers, not true or false")
        return v

    @field_validator("title", "description", "dish_label", mode="before")
    @classmethod
    def numbers_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("dependencies")
    @classmethod
    def dedupe_dependencies(cls, v: List[int]) -> List[int]:
        return list(dict.fromkeys(v))

    @field_validator("dish_label")
    @classmethod
    def blank_dish_label_is_unset(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def end_time(self) -> Optional[int]:
        """End of the step interval, once scheduled."""
        if self.start_time is None:
            return None
        return self.start_time + self.duration


class Schedule(BaseModel):
    """Scheduled steps plus the total plan duration."""
    steps: List[Step]
    optimized_time: int = Field(..., ge=0, alias="optimizedTime", description="Latest step end time in minutes")
    converged: bool = Field(default=True, description="False when the repair pass cap was reached")
    passes: int = Field(default=0, ge=0, description="Repair passes executed")
    advisories: List[str] = Field(default_factory=list, description="Non-fatal data-quality notes")

    model_config = ConfigDict(populate_by_name=True)


class ScheduleRequest(BaseModel):
    """Raw step records from the upstream producer."""
    steps: List[Any] = Field(..., description="Step records; validated by the scheduler")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "steps": [
                        {"id": 1, "title": "Cut onion", "description": "Slice the onion", "duration": 5},
                        {"id": 2, "title": "Fry", "description": "Stir-fry onion in a pan", "duration": 8,
                         "dependencies": [1], "canParallel": False, "category": "cook"},
                    ]
                }
            ]
        }
    }


class RecipeRequest(BaseModel):
    """Conditions for LLM recipe generation."""
    ingredients: List[str] = Field(default_factory=list, description="Ingredients on hand, optionally with quantities")
    family_members: Optional[str] = Field(default=None, alias="familyMembers")
    family_ages: Optional[str] = Field(default=None, alias="familyAges")
    genre: Genre = Genre.ANY
    additional_request: Optional[str] = Field(default=None, alias="additionalRequest")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("ingredients")
    @classmethod
    def drop_blank_ingredients(cls, v: List[str]) -> List[str]:
        return [item.strip() for item in v if item.strip()]


class Recipe(BaseModel):
    """A generated one-meal menu with its scheduled cooking steps."""
    title: str
    menu_items: List[str] = Field(default_factory=list, alias="menuItems")
    ingredients: Union[List[str], Dict[str, List[str]]] = Field(
        default_factory=list,
        description="Flat list, or per-dish lists keyed by dish label",
    )
    instructions: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    servings: str = ""
    total_time: str = Field(default="", alias="totalTime")
    steps: Optional[List[Step]] = None
    optimized_time: Optional[int] = Field(default=None, alias="optimizedTime")
    converged: bool = Field(default=True, description="False when step repair hit the pass cap")
    advisories: List[str] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class RecipeResponse(BaseModel):
    """Envelope for a generated recipe."""
    recipe: Recipe
