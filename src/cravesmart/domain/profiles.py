"""Dietary profile models."""

from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Gender(StrEnum):
    """Gender options offered on the profile form."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ActivityLevel(StrEnum):
    """Weekly activity levels."""

    SEDENTARY = "Sedentary (little to no exercise)"
    LIGHT = "Light (exercise 1-3 times/week)"
    MODERATE = "Moderate (exercise 4-5 times/week)"
    HIGH = "High (intense exercise 6-7 times/week)"


class FitnessGoal(StrEnum):
    """Body composition goals."""

    BULKING = "Bulking (Gain Muscle)"
    CUTTING = "Cutting (Lose Fat)"
    MAINTENANCE = "Maintenance (Stay same)"


class DietType(StrEnum):
    """Declared diet restriction."""

    VEGETARIAN = "Vegetarian"
    VEG_PLUS_EGGS = "Vegetarian + Eggs"
    NON_VEG = "Non-Vegetarian"


DEFAULT_MACRO_PREFERENCE = "Balanced calories and protein (default)"
DEFAULT_PROTEIN_PREFERENCE = "No specific preference (default)"

# (label, value) pairs shown on the form; the value is what reaches the prompt.
MACRO_PREFERENCES: tuple[tuple[str, str], ...] = (
    ("Balanced calories and protein (Default)", DEFAULT_MACRO_PREFERENCE),
    (
        "Higher protein, lower calories (Cutting)",
        "Higher protein, lower calories (lean / cutting focus)",
    ),
    (
        "Higher calories and higher protein (Bulking)",
        "Higher calories and higher protein (bulking focus)",
    ),
    ("Lower carbs, moderate fats", "Lower carbs, moderate fats (low-carb style)"),
    ("Flexible, just make it realistic", "Flexible, just make it realistic"),
)

PROTEIN_PREFERENCES: tuple[tuple[str, str], ...] = (
    (DEFAULT_PROTEIN_PREFERENCE, DEFAULT_PROTEIN_PREFERENCE),
    ("Higher protein than normal", "Higher protein than normal"),
    (
        "Very high protein target (aggressive)",
        "Very high protein target (aggressive)",
    ),
    ("Moderate protein", "Moderate protein"),
    ("Lower protein", "Lower protein"),
)


class UserProfile(BaseModel):
    """Body stats, goal and food preferences used to personalise advice."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    age: int = Field(default=25, ge=0)
    gender: Gender = Gender.MALE
    height: float = Field(default=175, ge=0)
    weight: float = Field(default=70, ge=0)
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: FitnessGoal = FitnessGoal.MAINTENANCE
    diet_type: DietType = DietType.NON_VEG
    country: str = "India"
    prefer_local_food: bool = True
    is_on_diet: bool = False
    diet_description: str = ""
    macro_preference: str = DEFAULT_MACRO_PREFERENCE
    protein_preference: str = DEFAULT_PROTEIN_PREFERENCE
    manual_calorie_limit_enabled: bool = False
    manual_calorie_limit: int | None = Field(default=None, ge=0)
    available_items: str = ""

    @field_validator("macro_preference")
    @classmethod
    def _known_macro_preference(cls, value: str) -> str:
        if value not in {option for _, option in MACRO_PREFERENCES}:
            raise ValueError("unknown macro preference")
        return value

    @field_validator("protein_preference")
    @classmethod
    def _known_protein_preference(cls, value: str) -> str:
        if value not in {option for _, option in PROTEIN_PREFERENCES}:
            raise ValueError("unknown protein preference")
        return value

    @property
    def has_calorie_limit(self) -> bool:
        """Return True when a positive manual calorie ceiling is active."""
        return bool(
            self.manual_calorie_limit_enabled
            and self.manual_calorie_limit is not None
            and self.manual_calorie_limit > 0
        )


class SavedProfile(UserProfile):
    """A profile stored under a name on an account."""

    id: UUID = Field(default_factory=uuid4)
    profile_name: str

    def as_profile(self) -> UserProfile:
        """Drop the identity fields and return the plain profile."""
        return UserProfile.model_validate(
            self.model_dump(exclude={"id", "profile_name"})
        )
