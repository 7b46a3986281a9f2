"""Stub menu provider for offline demos and tests.

Returns a fixed menu without calling external APIs.
"""

import copy
from typing import Any, Dict, List

# Minimal ID3 header: enough for players to accept the payload
STUB_AUDIO = b"ID3\x03\x00\x00\x00\x00\x00\x00"

STUB_MENU: Dict[str, Any] = {
    "items": [
        {
            "name": "Grilled Chicken",
            "description": "Chicken breast with greens",
            "price": 12.0,
            "calories": 330,
            "protein_g": 45,
            "carbs_g": 10,
            "fat_g": 12,
        },
        {
            "name": "Cheesecake",
            "description": "Baked vanilla cheesecake with berry compote",
            "price": 6.0,
            "calories": 650,
            "protein_g": 6,
            "carbs_g": 60,
            "fat_g": 40,
        },
        {
            "name": "Salmon Salad",
            "description": "Flaked salmon, cucumber, lettuce",
            "price": 13.0,
            "calories": 420,
            "protein_g": 35,
            "carbs_g": 12,
            "fat_g": 18,
        },
        {
            "name": "Tomato Soup",
            "description": "Roast tomato soup with bread",
            "price": 5.5,
            "calories": 220,
            "protein_g": 6,
            "carbs_g": 34,
            "fat_g": 7,
        },
    ],
    "health_rank": [0, 2, 3, 1],
    "combos": [
        {
            "title": "High-protein under £26",
            "item_indices": [0, 2],
            "rationale": "Two lean proteins with plenty of greens.",
        },
        {
            "title": "Light lunch",
            "item_indices": [3, 2],
            "rationale": "Soup and salad keep it light.",
        },
    ],
    "notes": "Demo menu. Prices and nutrition are estimates.",
}


class StubMenuProvider:
    """
    Stub implementation of IMenuVisionProvider.

    Every analysis returns the same demo menu and every narration the
    same short audio payload. Supports async context manager protocol
    so it can replace the OpenAI client anywhere.
    """

    def __init__(self) -> None:
        self.requested_models: List[str] = []

    async def __aenter__(self) -> "StubMenuProvider":
        """Enter async context (no-op for stub)."""
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Exit async context (no-op for stub)."""
        return None

    async def analyze_menu(self, messages: List[Dict[str, Any]], model: str) -> Dict[str, Any]:
        """Return a copy of the demo menu."""
        self.requested_models.append(model)
        return copy.deepcopy(STUB_MENU)

    async def synthesize_speech(self, text: str) -> bytes:
        """Return fixed audio bytes."""
        return STUB_AUDIO
