"""Prompt construction for meal analysis and day plans."""

import json
from dataclasses import dataclass

from cravesmart.domain.analysis import PlanType
from cravesmart.domain.profiles import (
    DEFAULT_MACRO_PREFERENCE,
    DEFAULT_PROTEIN_PREFERENCE,
    ActivityLevel,
    DietType,
    UserProfile,
)

_ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.HIGH: 1.725,
}

_MEAL_TIMES = {
    2: ("Breakfast", "Dinner"),
    3: ("Breakfast", "Lunch", "Dinner"),
    4: ("Breakfast", "Lunch", "Evening Snack", "Dinner"),
    5: ("Breakfast", "Mid-Morning Snack", "Lunch", "Evening Snack", "Dinner"),
}

_DIET_RULES = {
    DietType.VEGETARIAN: (
        "STRICT DIET RULE: The user is vegetarian. Never include meat, poultry, "
        "fish, seafood or eggs in any suggestion. Dairy such as paneer, curd "
        "and milk is allowed."
    ),
    DietType.VEG_PLUS_EGGS: (
        "STRICT DIET RULE: The user is vegetarian but eats eggs. Never include "
        "meat, poultry, fish or seafood in any suggestion. Eggs and dairy are "
        "allowed."
    ),
    DietType.NON_VEG: (
        "Diet: The user eats everything, including meat, fish and eggs."
    ),
}

_MEAL_OPTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "optionName": {"type": "string"},
        "foodItems": {"type": "string"},
        "calories": {"type": "number"},
        "protein": {"type": "number"},
        "carbs": {"type": "number"},
        "fats": {"type": "number"},
    },
    "required": ["optionName", "foodItems", "calories", "protein", "carbs", "fats"],
}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "detectedMealName": {"type": "string"},
        "estimatedCalories": {"type": "number"},
        "macros": {
            "type": "object",
            "properties": {
                "protein": {"type": "number"},
                "carbs": {"type": "number"},
                "fats": {"type": "number"},
            },
            "required": ["protein", "carbs", "fats"],
        },
        "healthAnalysis": {"type": "string"},
        "dailyPlan": {
            "anyOf": [
                {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "mealTime": {"type": "string"},
                            "options": {
                                "type": "array",
                                "items": _MEAL_OPTION_SCHEMA,
                            },
                        },
                        "required": ["mealTime", "options"],
                    },
                },
                {"type": "null"},
            ]
        },
        "coachSummary": {"type": "string"},
    },
    "required": [
        "detectedMealName",
        "estimatedCalories",
        "macros",
        "healthAnalysis",
        "coachSummary",
    ],
}

_EXAMPLE_OPTION = {
    "optionName": "Option 1",
    "foodItems": "string",
    "calories": 0,
    "protein": 0,
    "carbs": 0,
    "fats": 0,
}


@dataclass(frozen=True)
class AnalysisPrompt:
    """Instruction text plus the JSON schema the model must follow."""

    text: str
    schema: dict[str, object]


def build_analysis_prompt(
    profile: UserProfile,
    *,
    has_image: bool,
    description: str,
    plan_type: PlanType,
    meals_per_day: int,
) -> AnalysisPrompt:
    """Serialise a profile and request options into model instructions."""
    sections = [
        "You are CraveSmart, an expert AI nutrition coach. Be practical, "
        "specific and encouraging.",
        _profile_section(profile),
        _calorie_section(profile),
        _DIET_RULES[profile.diet_type],
    ]
    sections.extend(_preference_lines(profile))
    sections.append(_task_section(has_image, description, plan_type, meals_per_day))
    sections.append(_shape_section(plan_type, meals_per_day))
    return AnalysisPrompt(text="\n\n".join(sections), schema=ANALYSIS_SCHEMA)


def meal_times(meals_per_day: int) -> tuple[str, ...]:
    """Return the conventional slot names for a number of daily meals."""
    return _MEAL_TIMES.get(meals_per_day, _MEAL_TIMES[3])


def _profile_section(profile: UserProfile) -> str:
    return "\n".join(
        [
            "User profile:",
            f"- Age: {profile.age}",
            f"- Gender: {profile.gender}",
            f"- Height: {profile.height:g} cm",
            f"- Weight: {profile.weight:g} kg",
            f"- Activity level: {profile.activity_level}",
            f"- Goal: {profile.goal}",
            f"- Diet type: {profile.diet_type}",
            f"- Country: {profile.country or 'Not specified'}",
        ]
    )


def _calorie_section(profile: UserProfile) -> str:
    if profile.has_calorie_limit:
        return (
            f"HARD CALORIE LIMIT: The user has set a manual limit of "
            f"{profile.manual_calorie_limit} kcal per day. Total daily calories "
            "must never exceed this number. Do not estimate TDEE."
        )
    multiplier = _ACTIVITY_MULTIPLIERS[profile.activity_level]
    return (
        "Calorie target: Estimate the user's TDEE with the Mifflin-St Jeor "
        f"equation and an activity multiplier of {multiplier}, then adjust it "
        f"for the goal '{profile.goal}' (surplus for bulking, deficit for "
        "cutting, no change for maintenance)."
    )


def _preference_lines(profile: UserProfile) -> list[str]:
    lines: list[str] = []
    if profile.is_on_diet and profile.diet_description.strip():
        lines.append(
            "Active diet: The user currently follows this diet, respect it: "
            f"{profile.diet_description.strip()}"
        )
    if profile.macro_preference != DEFAULT_MACRO_PREFERENCE:
        lines.append(f"Macro preference: {profile.macro_preference}")
    if profile.protein_preference != DEFAULT_PROTEIN_PREFERENCE:
        lines.append(f"Protein preference: {profile.protein_preference}")
    if profile.available_items.strip():
        lines.append(
            "Available ingredients: Build meals mainly from these items the "
            f"user already has: {profile.available_items.strip()}"
        )
    if profile.prefer_local_food and profile.country.strip():
        lines.append(
            "Local food: Prefer dishes and ingredients commonly eaten and easy "
            f"to buy in {profile.country.strip()}."
        )
    return lines


def _task_section(
    has_image: bool, description: str, plan_type: PlanType, meals_per_day: int
) -> str:
    lines = ["Task:"]
    if has_image:
        lines.append(
            "Identify the meal in the attached photo. Estimate its calories and "
            "macros, and explain how well it fits the user's goal in "
            "healthAnalysis."
        )
    else:
        lines.append(
            "No photo was provided. Do not try to identify a meal. Set "
            "detectedMealName to a short title for the plan, set "
            "estimatedCalories and macros to the day's totals using the first "
            "option of each meal, and use healthAnalysis to explain the plan's "
            "approach."
        )
    if description.strip():
        lines.append(f"The user's note about the meal: {description.strip()}")
    if plan_type is PlanType.FULL_DAY:
        slots = ", ".join(meal_times(meals_per_day))
        lines.append(
            f"Build a full-day meal plan with exactly {meals_per_day} meals "
            f"({slots}). Give every meal 2 to 3 interchangeable options with "
            "similar calories so the user can mix and match."
        )
        if has_image:
            lines.append("Account for the analysed meal when planning the day.")
    else:
        lines.append("Do not build a day plan; set dailyPlan to null.")
    lines.append(
        "Finish with a short, motivating coachSummary. All numbers must be "
        "plain numbers without units."
    )
    return "\n".join(lines)


def _shape_section(plan_type: PlanType, meals_per_day: int) -> str:
    plan: object = None
    if plan_type is PlanType.FULL_DAY:
        plan = [
            {"mealTime": name, "options": [_EXAMPLE_OPTION]}
            for name in meal_times(meals_per_day)
        ]
    shape = {
        "detectedMealName": "string",
        "estimatedCalories": 0,
        "macros": {"protein": 0, "carbs": 0, "fats": 0},
        "healthAnalysis": "string",
        "dailyPlan": plan,
        "coachSummary": "string",
    }
    return "Respond with JSON only, following exactly this shape:\n" + json.dumps(
        shape, indent=2
    )
