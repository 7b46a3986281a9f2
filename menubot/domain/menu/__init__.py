"""
Menu analysis core.

Pure, synchronous functions: scoring, ranking, aggregation, validation,
dietary summary and explanation. None of them raise on bad data.
"""

from menubot.domain.menu.aggregation import item_macros, sum_macros, sum_price
from menubot.domain.menu.dietary import (
    CATEGORY_KEYWORDS,
    FoodCategory,
    categorize_item,
    count_categories,
    summarize_menu,
)
from menubot.domain.menu.explanation import compose_explanation
from menubot.domain.menu.formatting import format_currency
from menubot.domain.menu.models import (
    Analysis,
    Combo,
    DietarySummary,
    HungerLevel,
    MacroSummary,
    MenuItem,
    MenuRecommendation,
)
from menubot.domain.menu.scoring import rank_items, score_item
from menubot.domain.menu.thresholds import DEFAULT_THRESHOLDS, MenuThresholds
from menubot.domain.menu.validation import MenuValidator, validate_analysis

__all__ = [
    "Analysis",
    "CATEGORY_KEYWORDS",
    "Combo",
    "DEFAULT_THRESHOLDS",
    "DietarySummary",
    "FoodCategory",
    "HungerLevel",
    "MacroSummary",
    "MenuItem",
    "MenuRecommendation",
    "MenuThresholds",
    "MenuValidator",
    "categorize_item",
    "compose_explanation",
    "count_categories",
    "format_currency",
    "item_macros",
    "rank_items",
    "score_item",
    "sum_macros",
    "sum_price",
    "summarize_menu",
    "validate_analysis",
]
