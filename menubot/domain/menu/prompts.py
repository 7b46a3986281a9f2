"""
OpenAI prompts for menu analysis.

System prompt carries the hunger context; the user message carries the
JSON contract and the menu photo.
"""

from typing import Any, Dict, List

from menubot.domain.menu.models import HungerLevel


HUNGER_CONTEXT: Dict[HungerLevel, str] = {
    HungerLevel.LIGHT: "small portions, light meals",
    HungerLevel.MODERATE: "standard portions, balanced meals",
    HungerLevel.VERY: "larger portions, filling meals",
}


# ═══════════════════════════════════════════════════════════
# SYSTEM PROMPT
# ═══════════════════════════════════════════════════════════

MENU_SYSTEM_PROMPT = """You are a nutritionist and menu analyst.
Extract the full menu from the provided photo.
Then infer typical UK portion sizes and estimate nutrition per item (kcal, protein_g, carbs_g, fat_g).
Rank items by overall healthiness for a generally healthy adult (bias: higher protein, more fibre/veg, lower added sugar, lower saturated fat, lower kcal density; do not penalise lean fish/chicken).
Consider the user's hunger level: {hunger_context}. Adjust recommendations accordingly.
Propose 2-3 smart pairings that go well together (e.g., main + side, or 2 small plates) with short rationale.
If prices are missing, estimate typical UK prices from context; mark those as estimated.
Return STRICT JSON matching the schema."""


# ═══════════════════════════════════════════════════════════
# USER PROMPT
# ═══════════════════════════════════════════════════════════

MENU_USER_PROMPT = """Return JSON with fields: {items: MenuItem[], health_rank: number[], combos: {title: string, item_indices: number[], rationale: string}[], notes: string}.
MenuItem = {name: string, description?: string, price?: number, calories?: number, protein_g?: number, carbs_g?: number, fat_g?: number}.
Prices should be numeric in GBP. Make health_rank indices correspond to items[]. Keep notes concise."""


def build_system_prompt(hunger_level: Any = HungerLevel.MODERATE) -> str:
    """System prompt with the hunger context filled in."""
    level = HungerLevel.coerce(hunger_level)
    return MENU_SYSTEM_PROMPT.format(hunger_context=HUNGER_CONTEXT[level])


def build_menu_messages(
    image_data_url: str, hunger_level: Any = HungerLevel.MODERATE
) -> List[Dict[str, Any]]:
    """
    Build chat messages for menu extraction.

    Args:
        image_data_url: Menu photo as ``data:image/...;base64,`` URL
        hunger_level: Diner's hunger level

    Returns:
        System and user messages with the image attached

    Example:
        >>> messages = build_menu_messages("data:image/jpeg;base64,AAAA", "light")
        >>> assert "small portions" in messages[0]["content"]
        >>> assert messages[1]["content"][1]["type"] == "image_url"
    """
    return [
        {"role": "system", "content": build_system_prompt(hunger_level)},
        {
            "role": "user",
            "content": [
                {"type": "text", "text": MENU_USER_PROMPT},
                {"type": "image_url", "image_url": {"url": image_data_url}},
            ],
        },
    ]
