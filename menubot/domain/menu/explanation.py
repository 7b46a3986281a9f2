"""
Explanation text for the top recommendation.

The same text is shown on screen and sent to speech synthesis.
"""

from __future__ import annotations

from typing import Optional

from menubot.domain.menu.aggregation import item_macros, sum_macros, sum_price
from menubot.domain.menu.formatting import DEFAULT_CURRENCY_SYMBOL, format_currency
from menubot.domain.menu.models import Analysis, MacroSummary

NO_RECOMMENDATION = "No clear recommendation."


def compose_explanation(
    analysis: Optional[Analysis], currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> str:
    """
    Narrate the top pairing, or the healthiest single item.

    Output is three lines: the choice, its estimated nutrition, and the
    pairing rationale (falling back to the analysis notes).

    Args:
        analysis: Validated analysis, or None
        currency_symbol: Symbol for prices

    Returns:
        Explanation text ("" when analysis is None)

    Example:
        >>> print(compose_explanation(analysis))
        Top pairing: Protein power — Grilled Chicken + Salmon Salad (£25.00).
        Estimated nutrition: 870 kcal; 80g protein, 22g carbohydrates, 30g fats.
        Two lean proteins.
    """
    if analysis is None:
        return ""

    combo = analysis.combos[0] if analysis.combos else None
    best = analysis.item_at(analysis.health_rank[0]) if analysis.health_rank else None

    if combo is not None:
        names = " + ".join(
            item.name
            for item in (analysis.item_at(index) for index in combo.item_indices)
            if item is not None
        )
        price = format_currency(sum_price(analysis.items, combo.item_indices), currency_symbol)
        choice = f"Top pairing: {combo.title} — {names} ({price})."
        summary = sum_macros(analysis.items, combo.item_indices)
    elif best is not None:
        choice = f"Healthiest single: {best.name} ({format_currency(best.price, currency_symbol)})."
        summary = item_macros(best)
    else:
        choice = NO_RECOMMENDATION
        summary = MacroSummary()

    calories, protein, carbs, fat = summary.rounded()
    nutrition = (
        f"Estimated nutrition: {calories} kcal; {protein}g protein, "
        f"{carbs}g carbohydrates, {fat}g fats."
    )
    closing = (combo.rationale if combo is not None else "") or analysis.notes

    return "\n".join([choice, nutrition, closing])
