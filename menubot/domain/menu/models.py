"""
Menu domain models.

Menu items, pairings and the full analysis extracted from a menu photo.
Item fields coerce loosely-typed AI output into safe defaults instead of
failing, so building a model from a raw mapping never raises.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ITEM_NAME = "Unknown Item"


# ═══════════════════════════════════════════════════════════
# COERCION HELPERS
# ═══════════════════════════════════════════════════════════


def coerce_number(value: Any) -> float:
    """
    Coerce an untrusted value into a non-negative finite float.

    Numeric strings are parsed. Anything else (None, bools, text,
    NaN, infinities, negatives) becomes 0.0.

    Example:
        >>> coerce_number("12.5")
        12.5
        >>> coerce_number(None)
        0.0
        >>> coerce_number(-3)
        0.0
    """
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0

    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def round_or_zero(value: float) -> int:
    """
    Round to a whole number, 0 for NaN and infinities.

    Example:
        >>> round_or_zero(506.7)
        507
        >>> round_or_zero(float("inf"))
        0
    """
    if not math.isfinite(value):
        return 0
    return round(value)


def coerce_text(value: Any) -> str:
    """Coerce an untrusted value into text ("" when unusable)."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def coerce_index(value: Any) -> Optional[int]:
    """
    Coerce an untrusted value into an integer index.

    Returns None for anything that is not an integral number, so callers
    can drop it. Range is not checked here.

    Example:
        >>> coerce_index(2.0)
        2
        >>> coerce_index("first") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


# ═══════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════


class HungerLevel(str, Enum):
    """How hungry the diner is. Affects wording and prompts only."""

    LIGHT = "light"
    MODERATE = "moderate"
    VERY = "very"

    @classmethod
    def coerce(cls, value: Any) -> HungerLevel:
        """Parse a hunger level, falling back to MODERATE."""
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.MODERATE


# ═══════════════════════════════════════════════════════════
# MENU MODELS
# ═══════════════════════════════════════════════════════════


class MenuItem(BaseModel):
    """
    One dish on the menu.

    Prices are currency-agnostic numbers. Nutrition values are AI
    estimates per typical portion.

    Attributes:
        name: Dish name (placeholder when missing)
        description: Menu description, may be empty
        price: Price in local currency
        calories: Energy in kcal
        protein_g: Protein in grams
        carbs_g: Carbohydrates in grams
        fat_g: Total fat in grams

    Example:
        >>> item = MenuItem.model_validate(
        ...     {"name": "Grilled Chicken", "price": "12", "fat_g": None}
        ... )
        >>> assert item.price == 12.0
        >>> assert item.fat_g == 0.0
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(DEFAULT_ITEM_NAME, min_length=1, description="Dish name")
    description: str = Field("", description="Menu description")
    price: float = Field(0.0, ge=0, description="Price in local currency")
    calories: float = Field(0.0, ge=0, description="Energy in kcal")
    protein_g: float = Field(0.0, ge=0, description="Protein in g")
    carbs_g: float = Field(0.0, ge=0, description="Carbohydrates in g")
    fat_g: float = Field(0.0, ge=0, description="Total fat in g")

    @field_validator("name", mode="before")
    @classmethod
    def name_or_placeholder(cls, v: Any) -> str:
        """Substitute placeholder for missing or blank names."""
        text = coerce_text(v).strip()
        return text or DEFAULT_ITEM_NAME

    @field_validator("description", mode="before")
    @classmethod
    def description_text(cls, v: Any) -> str:
        """Coerce description to text."""
        return coerce_text(v)

    @field_validator("price", "calories", "protein_g", "carbs_g", "fat_g", mode="before")
    @classmethod
    def non_negative_number(cls, v: Any) -> float:
        """Default unusable numbers to 0."""
        return coerce_number(v)

    def search_text(self) -> str:
        """Lower-cased name and description for keyword matching."""
        return f"{self.name} {self.description}".lower()


class Combo(BaseModel):
    """
    Suggested pairing of dishes.

    Indices point into ``Analysis.items``. Duplicates and out-of-range
    values are kept; aggregation treats out-of-range as zero.

    Example:
        >>> combo = Combo(
        ...     title="High-protein under £15",
        ...     item_indices=[0, 2],
        ...     rationale="Lean protein with greens",
        ... )
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field("", description="Short label")
    item_indices: List[int] = Field(default_factory=list, description="Indices into items")
    rationale: str = Field("", description="Why these go together")

    @field_validator("title", "rationale", mode="before")
    @classmethod
    def text(cls, v: Any) -> str:
        """Coerce to text."""
        return coerce_text(v)

    @field_validator("item_indices", mode="before")
    @classmethod
    def integer_indices(cls, v: Any) -> List[int]:
        """Drop entries that are not integral numbers."""
        if not isinstance(v, (list, tuple)):
            return []
        indices = [coerce_index(raw) for raw in v]
        return [i for i in indices if i is not None]


class Analysis(BaseModel):
    """
    Full extracted-and-processed menu.

    Item order is menu order and indices are stable identifiers.
    After validation ``health_rank`` is a permutation of all item indices,
    healthiest first.

    Attributes:
        items: Menu items in menu order
        health_rank: Item indices, healthiest first
        combos: Suggested pairings
        notes: Caveats and assumptions from the extractor
    """

    model_config = ConfigDict(frozen=True)

    items: List[MenuItem] = Field(default_factory=list)
    health_rank: List[int] = Field(default_factory=list)
    combos: List[Combo] = Field(default_factory=list)
    notes: str = ""

    def item_at(self, index: int) -> Optional[MenuItem]:
        """Item at index, or None when out of range."""
        if 0 <= index < len(self.items):
            return self.items[index]
        return None

    def top_items(self, limit: int) -> List[Tuple[int, MenuItem]]:
        """
        Healthiest ``limit`` items as (index, item) pairs.

        Example:
            >>> for index, item in analysis.top_items(3):
            ...     print(index, item.name)
        """
        top: List[Tuple[int, MenuItem]] = []
        for index in self.health_rank:
            item = self.item_at(index)
            if item is None:
                continue
            top.append((index, item))
            if len(top) >= limit:
                break
        return top


class MacroSummary(BaseModel):
    """
    Calories and macros summed over a set of items.

    Example:
        >>> total = MacroSummary(calories=450, protein_g=45) + MacroSummary(
        ...     calories=420, protein_g=35
        ... )
        >>> assert total.calories == 870
    """

    model_config = ConfigDict(frozen=True)

    calories: float = Field(0.0, ge=0)
    protein_g: float = Field(0.0, ge=0)
    carbs_g: float = Field(0.0, ge=0)
    fat_g: float = Field(0.0, ge=0)

    def __add__(self, other: MacroSummary) -> MacroSummary:
        return MacroSummary(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
        )

    def rounded(self) -> Tuple[int, int, int, int]:
        """(calories, protein_g, carbs_g, fat_g) rounded to whole units."""
        return (
            round_or_zero(self.calories),
            round_or_zero(self.protein_g),
            round_or_zero(self.carbs_g),
            round_or_zero(self.fat_g),
        )


# ═══════════════════════════════════════════════════════════
# DERIVED OUTPUTS
# ═══════════════════════════════════════════════════════════


class DietarySummary(BaseModel):
    """Narrative composition and budget text for a menu."""

    model_config = ConfigDict(frozen=True)

    dietary_notes: str
    budget_strategy: str


class MenuRecommendation(BaseModel):
    """
    Everything the display collaborator needs for one analysed menu.

    Attributes:
        analysis: Validated analysis
        summary: Dietary and budget narrative
        explanation: Top pick narration, also used for speech
        hunger_level: Hunger level the analysis was requested for
        model: Vision model that produced the data ("" when not from AI)
    """

    model_config = ConfigDict(frozen=True)

    analysis: Analysis
    summary: DietarySummary
    explanation: str
    hunger_level: HungerLevel = HungerLevel.MODERATE
    model: str = ""
