"""
Heuristic thresholds for menu analysis.

Fixed constants with no nutritional derivation; kept together so callers
can tune them without touching the algorithms.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MenuThresholds(BaseModel):
    """
    Tunable heuristics used by the validator and the summarizer.

    Attributes:
        calorie_tolerance_kcal: Max gap between stated and macro-derived kcal
        budget_friendly_max: Menu total at or below which pricing is budget-friendly
        mid_range_max: Menu total at or below which pricing is mid-range
        healthy_max_calories: Upper kcal bound for a "healthy" item
        healthy_min_protein_g: Lower protein bound for a "healthy" item
        healthy_max_fat_g: Upper fat bound for a "healthy" item
        high_calorie_min: kcal at or above which an item is high-calorie
        high_protein_min_g: Protein at or above which an item is high-protein
        low_calorie_max: kcal at or below which an item is low-calorie

    Example:
        >>> thresholds = MenuThresholds(calorie_tolerance_kcal=50)
        >>> assert thresholds.budget_friendly_max == 50.0
    """

    model_config = ConfigDict(frozen=True)

    calorie_tolerance_kcal: float = Field(100.0, ge=0)
    budget_friendly_max: float = Field(50.0, ge=0)
    mid_range_max: float = Field(100.0, ge=0)

    healthy_max_calories: float = Field(300.0, ge=0)
    healthy_min_protein_g: float = Field(15.0, ge=0)
    healthy_max_fat_g: float = Field(15.0, ge=0)
    high_calorie_min: float = Field(600.0, ge=0)
    high_protein_min_g: float = Field(25.0, ge=0)
    low_calorie_max: float = Field(200.0, ge=0)


DEFAULT_THRESHOLDS = MenuThresholds()
