"""Keyword-based enforcement of diet restrictions on generated plans."""

import logging
import re
from collections.abc import Iterable

from cravesmart.domain.analysis import AnalysisResult, MealOption
from cravesmart.domain.profiles import DietType, UserProfile

MEAT_KEYWORDS: frozenset[str] = frozenset(
    {
        "chicken",
        "mutton",
        "beef",
        "pork",
        "ham",
        "lamb",
        "goat",
        "veal",
        "venison",
        "duck",
        "turkey",
        "bacon",
        "sausage",
        "salami",
        "pepperoni",
        "prosciutto",
        "meat",
        "meatball",
        "meatloaf",
        "hamburger",
        "keema",
        "fish",
        "shellfish",
        "catfish",
        "swordfish",
        "cod",
        "salmon",
        "tuna",
        "tilapia",
        "sardine",
        "mackerel",
        "pomfret",
        "seafood",
        "prawn",
        "shrimp",
        "crab",
        "lobster",
        "squid",
        "octopus",
        "oyster",
        "mussel",
        "anchovy",
        "anchovies",
    }
)

EGG_KEYWORDS: frozenset[str] = frozenset(
    {
        "egg",
        "omelette",
        "omelet",
        "frittata",
        "shakshuka",
    }
)

INDIAN_SAFE_DISH = "Paneer bhurji with 2 multigrain rotis and a bowl of mixed dal"
GENERIC_SAFE_DISH = "Tofu and chickpea stir-fry with brown rice and mixed vegetables"
REPLACED_MARKER = " (replaced to match your diet)"

_logger = logging.getLogger(__name__)


def _word_pattern(words: Iterable[str]) -> re.Pattern[str]:
    """Match any of the words as a whole word, singular or plural."""
    alternatives = "|".join(
        re.escape(word) for word in sorted(words, key=len, reverse=True)
    )
    return re.compile(rf"\b(?:{alternatives})(?:e?s)?\b")


# Allowed phrases that still spell out a forbidden word.
_EXEMPT_PHRASES = re.compile(
    r"\b(?:egg|meat)[- ]free\b|\bgoat(?:'s)? (?:cheese|milk)\b"
)

_FORBIDDEN_PATTERNS: dict[DietType, re.Pattern[str]] = {
    DietType.VEGETARIAN: _word_pattern(MEAT_KEYWORDS | EGG_KEYWORDS),
    DietType.VEG_PLUS_EGGS: _word_pattern(MEAT_KEYWORDS),
}


def forbidden_keywords(diet_type: DietType) -> frozenset[str]:
    """Return the words a plan must not mention for a diet type."""
    if diet_type is DietType.VEGETARIAN:
        return MEAT_KEYWORDS | EGG_KEYWORDS
    if diet_type is DietType.VEG_PLUS_EGGS:
        return MEAT_KEYWORDS
    return frozenset()


def violates_diet(food_items: str, diet_type: DietType) -> bool:
    """Return True when the food list names something the diet forbids."""
    pattern = _FORBIDDEN_PATTERNS.get(diet_type)
    if pattern is None:
        return False
    text = _EXEMPT_PHRASES.sub(" ", food_items.lower())
    return pattern.search(text) is not None


def safe_replacement(country: str) -> str:
    """Return the replacement dish text for the user's country."""
    dish = INDIAN_SAFE_DISH if "india" in country.lower() else GENERIC_SAFE_DISH
    return f"{dish}{REPLACED_MARKER}"


def sanitize_plan(result: AnalysisResult, profile: UserProfile) -> AnalysisResult:
    """Replace plan options that break the user's declared diet.

    Each forbidden word is matched as a whole word, plurals included,
    against the lowercased food list, so "veggie" is not an egg and
    "graham" is not ham. A matching option gets its food list swapped for
    a fixed safe dish; its macro numbers are kept as they were. The input
    result is never mutated.
    """
    if profile.diet_type not in _FORBIDDEN_PATTERNS or not result.daily_plan:
        return result

    replacement = safe_replacement(profile.country)
    replaced = 0
    slots = []
    for slot in result.daily_plan:
        options: list[MealOption] = []
        for option in slot.options:
            if violates_diet(option.food_items, profile.diet_type):
                option = option.model_copy(
                    update={"food_items": replacement, "diet_adjusted": True}
                )
                replaced += 1
            options.append(option)
        slots.append(slot.model_copy(update={"options": options}))

    if replaced:
        _logger.info(
            "Replaced %s meal options violating diet %s", replaced, profile.diet_type
        )
    return result.model_copy(update={"daily_plan": slots})
