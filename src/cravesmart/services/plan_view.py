"""Option selection, daily totals and display rendering for results."""

from dataclasses import dataclass, field
from enum import StrEnum
from urllib.parse import quote

from cravesmart.domain.analysis import AnalysisResult, MealOption, MealSlot
from cravesmart.services.normalize import (
    PLACEHOLDER,
    format_number,
    format_value,
    to_number,
)

_RECIPE_SEARCH_URL = "https://www.youtube.com/results?search_query="


class Direction(StrEnum):
    """Direction to cycle through a slot's options."""

    PREV = "prev"
    NEXT = "next"


def cycle_index(current: int, option_count: int, direction: Direction) -> int:
    """Step an option index, wrapping at both ends."""
    if option_count <= 1:
        return current
    step = 1 if direction is Direction.NEXT else -1
    return (current + step) % option_count


@dataclass
class PlanSelection:
    """Currently selected option index for every meal slot."""

    indices: list[int] = field(default_factory=list)

    @classmethod
    def for_result(cls, result: AnalysisResult) -> "PlanSelection":
        """Start with the first option selected in every slot."""
        return cls(indices=[0] * len(result.daily_plan or []))

    def selected_index(self, slot_index: int) -> int:
        """Return the selected index for a slot, defaulting to 0."""
        if 0 <= slot_index < len(self.indices):
            return self.indices[slot_index]
        return 0

    def cycle(
        self, plan: list[MealSlot], slot_index: int, direction: Direction
    ) -> int:
        """Move the selection of one slot and return the new index."""
        if not 0 <= slot_index < len(plan):
            raise IndexError(f"no meal slot at index {slot_index}")
        while len(self.indices) < len(plan):
            self.indices.append(0)
        current = self.indices[slot_index]
        self.indices[slot_index] = cycle_index(
            current, len(plan[slot_index].options), direction
        )
        return self.indices[slot_index]


@dataclass(frozen=True)
class PlanTotals:
    """Summed macros of the selected options."""

    calories: float
    protein: float
    carbs: float
    fats: float

    def formatted(self) -> dict[str, str]:
        """Return display strings, with a dash for any non-positive sum."""
        return {
            "calories": _total_text(self.calories),
            "protein": _total_text(self.protein),
            "carbs": _total_text(self.carbs),
            "fats": _total_text(self.fats),
        }


def selected_option(slot: MealSlot, index: int) -> MealOption | None:
    """Return the option at ``index``, falling back to the first one."""
    if not slot.options:
        return None
    if 0 <= index < len(slot.options):
        return slot.options[index]
    return slot.options[0]


def daily_totals(
    plan: list[MealSlot] | None, selection: PlanSelection
) -> PlanTotals | None:
    """Sum the selected options across the plan, or None without a plan."""
    if not plan:
        return None
    calories = protein = carbs = fats = 0.0
    for slot_index, slot in enumerate(plan):
        option = selected_option(slot, selection.selected_index(slot_index))
        if option is None:
            continue
        calories += to_number(option.calories)
        protein += to_number(option.protein)
        carbs += to_number(option.carbs)
        fats += to_number(option.fats)
    return PlanTotals(calories=calories, protein=protein, carbs=carbs, fats=fats)


def recipe_search_url(food_items: str) -> str:
    """Return a video search link for cooking the given food items."""
    return _RECIPE_SEARCH_URL + quote(f"{food_items} recipe", safe="")


def render_result(result: AnalysisResult, selection: PlanSelection) -> dict[str, object]:
    """Build the view returned to clients for a result and selection."""
    totals = daily_totals(result.daily_plan, selection)
    return {
        "result": result.model_dump(mode="json"),
        "display": {
            "detected_meal_name": result.detected_meal_name,
            "estimated_calories": format_value(result.estimated_calories, " kcal"),
            "macros": {
                "protein": format_value(result.macros.protein, "g"),
                "carbs": format_value(result.macros.carbs, "g"),
                "fats": format_value(result.macros.fats, "g"),
            },
            "health_analysis": result.health_analysis,
            "coach_summary": result.coach_summary,
            "disclaimer": result.disclaimer,
        },
        "plan": _render_plan(result.daily_plan or [], selection),
        "selection": list(selection.indices),
        "totals": totals.formatted() if totals else None,
    }


def _render_plan(
    plan: list[MealSlot], selection: PlanSelection
) -> list[dict[str, object]]:
    rendered = []
    for slot_index, slot in enumerate(plan):
        index = selection.selected_index(slot_index)
        option = selected_option(slot, index)
        if option is None:
            continue
        if not 0 <= index < len(slot.options):
            index = 0
        rendered.append(
            {
                "slot_index": slot_index,
                "meal_time": slot.meal_time,
                "option_label": f"Option {index + 1} / {len(slot.options)}",
                "option_count": len(slot.options),
                "option_name": option.option_name,
                "food_items": option.food_items,
                "diet_adjusted": option.diet_adjusted,
                "calories": format_value(option.calories, " kcal"),
                "protein": format_value(option.protein, "g"),
                "carbs": format_value(option.carbs, "g"),
                "fats": format_value(option.fats, "g"),
                "recipe_url": recipe_search_url(option.food_items),
            }
        )
    return rendered


def _total_text(value: float) -> str:
    if value > 0:
        return format_number(value)
    return PLACEHOLDER
