"""
Menu analysis validation and repair.

The vision model's JSON is unreliable: missing fields, strings where
numbers belong, calorie totals that disagree with the macros, rankings
that point past the end of the menu. This module turns any such payload
into a well-formed Analysis. It never raises; it repairs.
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from typing import Any, List, Optional

import structlog

from menubot.domain.menu.models import (
    Analysis,
    Combo,
    MenuItem,
    coerce_index,
    coerce_text,
)
from menubot.domain.menu.scoring import rank_items
from menubot.domain.menu.thresholds import DEFAULT_THRESHOLDS, MenuThresholds

logger = structlog.get_logger(__name__)

PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FAT_KCAL_PER_G = 9


def expected_calories(item: MenuItem) -> float:
    """Energy implied by the macros (4/4/9 kcal per gram)."""
    return (
        item.protein_g * PROTEIN_KCAL_PER_G
        + item.carbs_g * CARBS_KCAL_PER_G
        + item.fat_g * FAT_KCAL_PER_G
    )


class MenuValidator:
    """
    Coerces and repairs raw menu analyses.

    Flow:
    1. Coerce every item to typed defaults
    2. Reconcile stated calories with macro-derived calories
    3. Regenerate a missing or empty health ranking
    4. Drop out-of-range ranking entries
    5. Regenerate the ranking unless it is a full permutation

    Example:
        >>> validator = MenuValidator()
        >>> analysis = validator.validate(
        ...     {
        ...         "items": [{"calories": 900, "protein_g": 10, "carbs_g": 10, "fat_g": 5}],
        ...         "health_rank": [5],
        ...     }
        ... )
        >>> assert analysis.items[0].calories == 125
        >>> assert analysis.health_rank == [0]
    """

    def __init__(self, thresholds: Optional[MenuThresholds] = None) -> None:
        """
        Initialize validator.

        Args:
            thresholds: Heuristic constants (defaults to 100 kcal tolerance)
        """
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    def validate(self, raw: Any) -> Analysis:
        """
        Validate and repair a raw analysis.

        Args:
            raw: Mapping, Analysis, JSON text, or anything else
                (unusable input yields an empty analysis)

        Returns:
            Analysis whose health_rank is a permutation of all item indices
        """
        data = self._as_mapping(raw)

        items = [
            self._reconcile_calories(index, item)
            for index, item in enumerate(self._coerce_items(data.get("items")))
        ]
        health_rank = self._repair_rank(data.get("health_rank"), items)
        combos = self._coerce_combos(data.get("combos"))

        logger.debug(
            "Validated menu analysis",
            items=len(items),
            combos=len(combos),
        )

        return Analysis(
            items=items,
            health_rank=health_rank,
            combos=combos,
            notes=coerce_text(data.get("notes")),
        )

    # ── input shape ────────────────────────────────────────

    @staticmethod
    def _as_mapping(raw: Any) -> Mapping[str, Any]:
        if isinstance(raw, Analysis):
            return raw.model_dump()
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except ValueError:
                logger.debug("Analysis payload is not JSON")
                return {}
        if isinstance(raw, Mapping):
            return raw
        return {}

    @staticmethod
    def _coerce_items(raw_items: Any) -> List[MenuItem]:
        if not isinstance(raw_items, (list, tuple)):
            return []
        return [
            MenuItem.model_validate(raw if isinstance(raw, Mapping) else {})
            for raw in raw_items
        ]

    @staticmethod
    def _coerce_combos(raw_combos: Any) -> List[Combo]:
        if not isinstance(raw_combos, (list, tuple)):
            return []
        return [Combo.model_validate(raw) for raw in raw_combos if isinstance(raw, Mapping)]

    # ── repairs ────────────────────────────────────────────

    def _reconcile_calories(self, index: int, item: MenuItem) -> MenuItem:
        """Trust the macro breakdown over a stated total that is far off."""
        expected = expected_calories(item)
        if item.calories <= 0 or not math.isfinite(expected):
            return item
        if abs(item.calories - expected) <= self.thresholds.calorie_tolerance_kcal:
            return item

        corrected = float(round(expected))
        logger.debug(
            "Corrected calorie total",
            index=index,
            item=item.name,
            stated=item.calories,
            corrected=corrected,
        )
        return item.model_copy(update={"calories": corrected})

    @staticmethod
    def _repair_rank(raw_rank: Any, items: List[MenuItem]) -> List[int]:
        if not isinstance(raw_rank, (list, tuple)) or len(raw_rank) == 0:
            return rank_items(items)

        indices = [coerce_index(raw) for raw in raw_rank]
        in_range = [i for i in indices if i is not None and 0 <= i < len(items)]

        if sorted(in_range) != list(range(len(items))):
            logger.debug(
                "Regenerated health ranking",
                provided=len(raw_rank),
                usable=len(in_range),
                items=len(items),
            )
            return rank_items(items)
        return in_range


def validate_analysis(raw: Any, thresholds: Optional[MenuThresholds] = None) -> Analysis:
    """
    Validate and repair a raw analysis with the given thresholds.

    Shortcut for ``MenuValidator(thresholds).validate(raw)``.
    """
    return MenuValidator(thresholds).validate(raw)
