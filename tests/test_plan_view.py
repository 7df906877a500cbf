"""Tests for option cycling, totals and result rendering."""

import pytest

from cravesmart.domain.analysis import AnalysisResult, MealOption, MealSlot
from cravesmart.services.normalize import PLACEHOLDER
from cravesmart.services.plan_view import (
    Direction,
    PlanSelection,
    cycle_index,
    daily_totals,
    recipe_search_url,
    render_result,
)
from tests.conftest import sample_meal_payload, sample_plan_payload


def _plan_result() -> AnalysisResult:
    return AnalysisResult.model_validate(sample_plan_payload())


@pytest.mark.parametrize(
    ("current", "direction", "expected"),
    [
        (0, Direction.NEXT, 1),
        (2, Direction.NEXT, 0),
        (0, Direction.PREV, 2),
        (1, Direction.PREV, 0),
    ],
)
def test_cycle_wraps_at_both_ends(current, direction, expected) -> None:
    assert cycle_index(current, 3, direction) == expected


def test_single_option_never_moves() -> None:
    assert cycle_index(0, 1, Direction.NEXT) == 0
    assert cycle_index(0, 0, Direction.PREV) == 0


def test_selection_cycles_one_slot_only() -> None:
    result = _plan_result()
    selection = PlanSelection.for_result(result)

    selection.cycle(result.daily_plan, 0, Direction.PREV)

    assert selection.indices == [2, 0]


def test_selection_rejects_unknown_slot() -> None:
    result = _plan_result()
    selection = PlanSelection.for_result(result)

    with pytest.raises(IndexError):
        selection.cycle(result.daily_plan, 5, Direction.NEXT)


def test_totals_follow_selected_options() -> None:
    result = _plan_result()
    selection = PlanSelection.for_result(result)

    first = daily_totals(result.daily_plan, selection)
    selection.cycle(result.daily_plan, 1, Direction.NEXT)
    second = daily_totals(result.daily_plan, selection)

    assert first.calories == 950
    assert first.protein == 35
    assert second.calories == 1000
    assert second.protein == 50


def test_totals_show_placeholder_for_zero_sums() -> None:
    plan = [
        MealSlot(
            meal_time="Lunch",
            options=[MealOption(calories=300, protein=None, carbs=0, fats=0)],
        ),
        MealSlot(meal_time="Dinner", options=[MealOption(calories=0)]),
    ]

    totals = daily_totals(plan, PlanSelection(indices=[0, 0]))

    assert totals.formatted() == {
        "calories": "300",
        "protein": PLACEHOLDER,
        "carbs": PLACEHOLDER,
        "fats": PLACEHOLDER,
    }


def test_totals_absent_without_plan() -> None:
    assert daily_totals(None, PlanSelection()) is None
    assert daily_totals([], PlanSelection()) is None


def test_out_of_range_selection_falls_back_to_first_option() -> None:
    result = _plan_result()

    totals = daily_totals(result.daily_plan, PlanSelection(indices=[9, 9]))

    assert totals.calories == 950


def test_recipe_url_is_encoded() -> None:
    url = recipe_search_url("Dal, rice & salad")

    assert url == (
        "https://www.youtube.com/results?search_query="
        "Dal%2C%20rice%20%26%20salad%20recipe"
    )


def test_render_plan_result() -> None:
    result = _plan_result()
    selection = PlanSelection.for_result(result)
    selection.cycle(result.daily_plan, 0, Direction.NEXT)

    view = render_result(result, selection)

    assert view["selection"] == [1, 0]
    breakfast = view["plan"][0]
    assert breakfast["option_label"] == "Option 2 / 3"
    assert breakfast["food_items"] == "Grilled chicken sandwich"
    assert breakfast["calories"] == "450 kcal"
    assert view["totals"]["calories"] == "1000"
    assert view["display"]["estimated_calories"] == "1800 kcal"
    assert view["display"]["macros"]["fats"] == "60g"


def test_render_meal_result_without_plan() -> None:
    result = AnalysisResult.model_validate(sample_meal_payload())

    view = render_result(result, PlanSelection.for_result(result))

    assert view["plan"] == []
    assert view["totals"] is None
    assert view["display"]["macros"]["carbs"] == "12g"


def test_render_shows_placeholder_for_missing_values() -> None:
    result = AnalysisResult(detected_meal_name="Unknown")

    view = render_result(result, PlanSelection())

    assert view["display"]["estimated_calories"] == PLACEHOLDER
    assert view["display"]["macros"]["protein"] == PLACEHOLDER
