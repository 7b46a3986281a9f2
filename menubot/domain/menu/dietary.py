"""
Dietary and budget summary of a menu.

Keyword-based categorisation of dishes plus price-tier narration.
The keyword table is declarative so rules can be tuned and tested
without touching the composition logic.
"""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from menubot.domain.menu.formatting import DEFAULT_CURRENCY_SYMBOL, format_currency
from menubot.domain.menu.models import DietarySummary, HungerLevel, MenuItem, round_or_zero
from menubot.domain.menu.thresholds import DEFAULT_THRESHOLDS, MenuThresholds

NO_DIETARY_DATA = "No menu items available for analysis."
NO_BUDGET_DATA = "Unable to provide budget strategy without menu data."


class FoodCategory(str, Enum):
    """Menu composition categories (an item may belong to several)."""

    SEAFOOD = "seafood"
    MEAT = "meat"
    VEGETABLES = "vegetables"
    GRAINS = "grains"
    DAIRY = "dairy"
    FRUITS = "fruits"
    DESSERTS = "desserts"

    # Derived
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    HEALTHY = "healthy"
    HIGH_CALORIE = "high_calorie"
    HIGH_PROTEIN = "high_protein"
    LOW_CALORIE = "low_calorie"


# Trigger substrings matched against lower-cased "name description"
CATEGORY_KEYWORDS: Dict[FoodCategory, Tuple[str, ...]] = {
    FoodCategory.SEAFOOD: (
        "salmon",
        "fish",
        "shrimp",
        "tuna",
        "cod",
        "seafood",
        "mackerel",
        "sardine",
        "trout",
    ),
    FoodCategory.MEAT: (
        "chicken",
        "beef",
        "pork",
        "lamb",
        "turkey",
        "meat",
        "steak",
        "burger",
        "sausage",
    ),
    FoodCategory.VEGETABLES: (
        "salad",
        "vegetable",
        "broccoli",
        "spinach",
        "carrot",
        "tomato",
        "kale",
        "lettuce",
        "cucumber",
    ),
    FoodCategory.GRAINS: ("rice", "pasta", "bread", "quinoa", "oat", "noodle"),
    FoodCategory.DAIRY: ("cheese", "milk", "yogurt", "cream", "butter", "dairy"),
    FoodCategory.FRUITS: ("apple", "banana", "berry", "orange", "fruit", "grape"),
    FoodCategory.DESSERTS: ("cake", "cookie", "ice cream", "dessert", "sweet", "chocolate"),
}

# (category, sentence template, singular noun, plural noun), in narration order
NOTE_TEMPLATES: List[Tuple[FoodCategory, str, str, str]] = [
    (FoodCategory.SEAFOOD, "It includes {count} seafood {noun}.", "option", "options"),
    (FoodCategory.MEAT, "There are {count} meat-based {noun}.", "dish", "dishes"),
    (FoodCategory.VEGETABLES, "Vegetable-focused options include {count} {noun}.", "item", "items"),
    (FoodCategory.GRAINS, "Grain-based dishes: {count} {noun}.", "option", "options"),
    (FoodCategory.DAIRY, "Dairy features in {count} {noun}.", "dish", "dishes"),
    (FoodCategory.FRUITS, "Fruit-based options: {count} {noun}.", "item", "items"),
    (FoodCategory.DESSERTS, "Desserts and sweets: {count} {noun}.", "option", "options"),
    (FoodCategory.VEGETARIAN, "Vegetarian choices: {count} {noun}.", "option", "options"),
    (FoodCategory.VEGAN, "Vegan-friendly: {count} {noun}.", "choice", "choices"),
    (
        FoodCategory.HEALTHY,
        "Health-conscious options: {count} low-calorie, high-protein {noun}.",
        "item",
        "items",
    ),
    (FoodCategory.HIGH_PROTEIN, "High-protein options: {count} {noun}.", "item", "items"),
    (FoodCategory.LOW_CALORIE, "Light options: {count} low-calorie {noun}.", "item", "items"),
    (FoodCategory.HIGH_CALORIE, "Calorie-dense dishes: {count} {noun}.", "item", "items"),
]

HUNGER_WORDING: Dict[HungerLevel, str] = {
    HungerLevel.LIGHT: "light hunger",
    HungerLevel.MODERATE: "moderate appetite",
    HungerLevel.VERY: "substantial hunger",
}


def _mentions(text: str, category: FoodCategory) -> bool:
    return any(keyword in text for keyword in CATEGORY_KEYWORDS[category])


def categorize_item(
    item: MenuItem, thresholds: Optional[MenuThresholds] = None
) -> Set[FoodCategory]:
    """
    Categories one item belongs to.

    Example:
        >>> found = categorize_item(MenuItem(name="Salmon Salad", calories=420, protein_g=35))
        >>> assert FoodCategory.SEAFOOD in found
        >>> assert FoodCategory.VEGETARIAN not in found
    """
    limits = thresholds or DEFAULT_THRESHOLDS
    text = item.search_text()

    categories = {category for category in CATEGORY_KEYWORDS if _mentions(text, category)}

    if FoodCategory.MEAT not in categories and FoodCategory.SEAFOOD not in categories:
        categories.add(FoodCategory.VEGETARIAN)
        if FoodCategory.DAIRY not in categories:
            categories.add(FoodCategory.VEGAN)

    if (
        item.calories <= limits.healthy_max_calories
        and item.protein_g >= limits.healthy_min_protein_g
        and item.fat_g <= limits.healthy_max_fat_g
    ):
        categories.add(FoodCategory.HEALTHY)
    if item.calories >= limits.high_calorie_min:
        categories.add(FoodCategory.HIGH_CALORIE)
    if item.protein_g >= limits.high_protein_min_g:
        categories.add(FoodCategory.HIGH_PROTEIN)
    if item.calories <= limits.low_calorie_max:
        categories.add(FoodCategory.LOW_CALORIE)

    return categories


def count_categories(
    items: Sequence[MenuItem], thresholds: Optional[MenuThresholds] = None
) -> Counter[FoodCategory]:
    """Number of items in each category."""
    counts: Counter[FoodCategory] = Counter()
    for item in items:
        counts.update(categorize_item(item, thresholds))
    return counts


def _dietary_notes(items: Sequence[MenuItem], counts: Counter[FoodCategory]) -> str:
    total = len(items)
    sentences = [
        f"This menu contains {total} item{'s' if total != 1 else ''} "
        "with a diverse nutritional profile."
    ]

    for category, template, singular, plural in NOTE_TEMPLATES:
        count = counts[category]
        if count > 0:
            sentences.append(template.format(count=count, noun=singular if count == 1 else plural))

    avg_calories = round_or_zero(sum(item.calories for item in items) / total)
    avg_protein = round_or_zero(sum(item.protein_g for item in items) / total)
    avg_carbs = round_or_zero(sum(item.carbs_g for item in items) / total)
    avg_fat = round_or_zero(sum(item.fat_g for item in items) / total)
    sentences.append(
        f"Average nutrition per item: {avg_calories} calories, {avg_protein}g protein, "
        f"{avg_carbs}g carbs, {avg_fat}g fat."
    )
    return " ".join(sentences)


def price_tier(total_price: float, thresholds: Optional[MenuThresholds] = None) -> str:
    """Tier label for the summed price of every item on the menu."""
    limits = thresholds or DEFAULT_THRESHOLDS
    if total_price <= limits.budget_friendly_max:
        return "budget-friendly"
    if total_price <= limits.mid_range_max:
        return "mid-range"
    return "premium"


TIER_SENTENCES: Dict[str, str] = {
    "budget-friendly": "This is a budget-friendly menu with good value options.",
    "mid-range": "This is a mid-range menu with balanced pricing.",
    "premium": "This is a premium menu with higher-end pricing.",
}


def _budget_strategy(
    items: Sequence[MenuItem],
    hunger_level: HungerLevel,
    thresholds: Optional[MenuThresholds],
    currency_symbol: str,
) -> str:
    total = len(items)
    total_price = sum(item.price for item in items)
    average = format_currency(total_price / total, currency_symbol)

    return " ".join(
        [
            f"The menu offers {total} item{'s' if total != 1 else ''} "
            f"with an average price of {average}.",
            TIER_SENTENCES[price_tier(total_price, thresholds)],
            f"For your {HUNGER_WORDING[hunger_level]}, "
            "you can create a balanced meal within your budget.",
        ]
    )


def summarize_menu(
    items: Sequence[MenuItem],
    hunger_level: Any = HungerLevel.MODERATE,
    thresholds: Optional[MenuThresholds] = None,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> DietarySummary:
    """
    Describe menu composition and pricing.

    Args:
        items: Validated menu items
        hunger_level: Diner's hunger (wording only; unknown values mean moderate)
        thresholds: Heuristic constants
        currency_symbol: Symbol for the average price

    Returns:
        DietarySummary with dietary notes and budget strategy

    Example:
        >>> summarize_menu([]).dietary_notes
        'No menu items available for analysis.'
    """
    if not items:
        return DietarySummary(dietary_notes=NO_DIETARY_DATA, budget_strategy=NO_BUDGET_DATA)

    counts = count_categories(items, thresholds)
    return DietarySummary(
        dietary_notes=_dietary_notes(items, counts),
        budget_strategy=_budget_strategy(
            items, HungerLevel.coerce(hunger_level), thresholds, currency_symbol
        ),
    )
