"""Models for meal analysis requests and AI results.

The result models are the trust boundary for model output: numeric fields
are normalised on ingestion and text fields are coerced to strings, so the
rest of the application only ever sees well-typed values. Numeric fields
stay ``None`` when the model left them out, which lets display code tell a
missing value from a real zero.
"""

from dataclasses import dataclass
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cravesmart.domain.numbers import is_missing, to_number

MIN_MEALS_PER_DAY = 2
MAX_MEALS_PER_DAY = 5

DISCLAIMER = (
    "Disclaimer: This is an AI-based nutritional estimate and suggestion "
    "generator. Values are approximate. This is not a substitute for "
    "professional medical advice, diagnosis, or treatment."
)


class PlanType(StrEnum):
    """What the user asked the coach for."""

    ANALYZE = "analyze"
    FULL_DAY = "full_day"


@dataclass(frozen=True)
class ImageInput:
    """Raw meal photo bytes with their MIME type."""

    data: bytes
    mime_type: str


@dataclass(frozen=True)
class AnalysisRequest:
    """Parameters of a single analysis action."""

    plan_type: PlanType
    meals_per_day: int = 3
    description: str = ""
    image: ImageInput | None = None


def optional_number(value: object) -> float | int | None:
    """Normalise a value, keeping missing values as None."""
    if is_missing(value):
        return None
    return to_number(value)


def _text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Macros(_ResultModel):
    """Macronutrients in grams."""

    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None

    @field_validator("protein", "carbs", "fats", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> float | int | None:
        return optional_number(value)


class MealOption(_ResultModel):
    """One concrete suggestion for a meal slot."""

    option_name: str = ""
    food_items: str = ""
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fats: float | None = None
    diet_adjusted: bool = False

    @field_validator("calories", "protein", "carbs", "fats", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> float | int | None:
        return optional_number(value)

    @field_validator("option_name", "food_items", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        return _text(value)


class MealSlot(_ResultModel):
    """A time-of-day bucket with interchangeable options."""

    meal_time: str = ""
    options: list[MealOption] = Field(default_factory=list)

    @field_validator("meal_time", mode="before")
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        return _text(value)

    @field_validator("options", mode="before")
    @classmethod
    def _options_list(cls, value: object) -> object:
        if not isinstance(value, list):
            return []
        return [option for option in value if isinstance(option, dict | MealOption)]


class AnalysisResult(_ResultModel):
    """Meal analysis and optional day plan returned by the coach."""

    detected_meal_name: str = ""
    estimated_calories: float | None = None
    macros: Macros = Field(default_factory=Macros)
    health_analysis: str = ""
    daily_plan: list[MealSlot] | None = None
    coach_summary: str = ""
    disclaimer: str = DISCLAIMER

    @field_validator("estimated_calories", mode="before")
    @classmethod
    def _normalize(cls, value: object) -> float | int | None:
        return optional_number(value)

    @field_validator(
        "detected_meal_name", "health_analysis", "coach_summary", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: object) -> str:
        return _text(value)

    @field_validator("macros", mode="before")
    @classmethod
    def _macros_object(cls, value: object) -> object:
        if isinstance(value, dict | Macros):
            return value
        return {}

    @field_validator("daily_plan", mode="before")
    @classmethod
    def _plan_list(cls, value: object) -> object:
        if not isinstance(value, list):
            return None
        return [slot for slot in value if isinstance(slot, dict | MealSlot)]

    @field_validator("disclaimer", mode="before")
    @classmethod
    def _fixed_disclaimer(cls, value: object) -> str:
        return DISCLAIMER
