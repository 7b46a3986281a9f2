"""
Price and macro aggregation over item subsets.

Used for pairings and top-N slices. Malformed or out-of-range indices
contribute zero instead of failing.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from menubot.domain.menu.models import MacroSummary, MenuItem, coerce_index


def _lookup(items: Sequence[MenuItem], raw_index: Any) -> Optional[MenuItem]:
    """Item for index, None when not an in-range integer (no negative wrap)."""
    index = coerce_index(raw_index)
    if index is None or not 0 <= index < len(items):
        return None
    return items[index]


def item_macros(item: Optional[MenuItem]) -> MacroSummary:
    """Macros of a single item (zeros for None)."""
    if item is None:
        return MacroSummary()
    return MacroSummary(
        calories=item.calories,
        protein_g=item.protein_g,
        carbs_g=item.carbs_g,
        fat_g=item.fat_g,
    )


def sum_price(items: Sequence[MenuItem], indices: Iterable[Any]) -> float:
    """
    Total price of the items at ``indices``.

    Example:
        >>> sum_price(items, [0, 2])
        25.0
        >>> sum_price(items, [])
        0.0
    """
    total = 0.0
    for raw_index in indices:
        item = _lookup(items, raw_index)
        if item is not None:
            total += item.price
    return total


def sum_macros(items: Sequence[MenuItem], indices: Iterable[Any]) -> MacroSummary:
    """
    Element-wise calorie and macro sum of the items at ``indices``.

    Example:
        >>> sum_macros(items, [0, 99]) == sum_macros(items, [0])
        True
    """
    total = MacroSummary()
    for raw_index in indices:
        total = total + item_macros(_lookup(items, raw_index))
    return total
