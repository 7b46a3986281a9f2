"""
Health scoring and ranking.

A linear heuristic, not a nutritional model: favours protein, penalises
fat moderately, calorie density lightly and carbohydrate load moderately.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List, Sequence

from menubot.domain.menu.models import coerce_number

PROTEIN_WEIGHT = 2.0
FAT_PENALTY = 0.8
CALORIE_PENALTY = 0.005
CARB_PENALTY = 0.3


def _nutrient(item: Any, field: str) -> float:
    """Read a nutrient from a MenuItem or a raw mapping, 0 when unusable."""
    if isinstance(item, Mapping):
        return coerce_number(item.get(field))
    return coerce_number(getattr(item, field, None))


def score_item(item: Any) -> float:
    """
    Healthiness score of one item (higher is healthier).

    score = 2*protein_g - 0.8*fat_g - 0.005*calories - 0.3*carbs_g

    Missing or non-numeric fields count as 0, so raw dicts straight from
    the extractor are accepted too.

    Example:
        >>> round(score_item({"protein_g": 45, "fat_g": 12, "calories": 450, "carbs_g": 10}), 2)
        75.15
    """
    protein = _nutrient(item, "protein_g")
    fat = _nutrient(item, "fat_g")
    calories = _nutrient(item, "calories")
    carbs = _nutrient(item, "carbs_g")
    return (
        protein * PROTEIN_WEIGHT
        - fat * FAT_PENALTY
        - calories * CALORIE_PENALTY
        - carbs * CARB_PENALTY
    )


def rank_items(items: Sequence[Any]) -> List[int]:
    """
    Indices of items ordered by score, healthiest first.

    Always a permutation of ``range(len(items))``. Ties keep menu order.

    Example:
        >>> rank_items([])
        []
    """
    scores = [score_item(item) for item in items]
    return sorted(range(len(items)), key=lambda index: scores[index], reverse=True)
