"""
Shared fixtures for MenuBot tests.

Menus here mirror what the vision model returns: plain dicts with
loosely-typed values, plus the validated models built from them.
"""

from typing import Any, Dict, List

import pytest

from menubot.domain.menu.models import Analysis, Combo, MenuItem
from menubot.infrastructure.config import MenuBotSettings
from menubot.infrastructure.providers.factory import reset_providers
from menubot.infrastructure.providers.stub_menu_provider import StubMenuProvider


# ═══════════════════════════════════════════════════════════
# RAW PAYLOAD FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def raw_items() -> List[Dict[str, Any]]:
    """Chicken, cheesecake and salmon as the extractor returns them."""
    return [
        {
            "name": "Grilled Chicken",
            "calories": 450,
            "protein_g": 45,
            "carbs_g": 10,
            "fat_g": 12,
            "price": 12,
        },
        {
            "name": "Cheesecake",
            "calories": 650,
            "protein_g": 6,
            "carbs_g": 60,
            "fat_g": 40,
            "price": 6,
        },
        {
            "name": "Salmon Salad",
            "calories": 420,
            "protein_g": 35,
            "carbs_g": 12,
            "fat_g": 18,
            "price": 13,
        },
    ]


@pytest.fixture
def raw_analysis(raw_items: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Raw analysis with one pairing and a valid ranking."""
    return {
        "items": raw_items,
        "health_rank": [0, 2, 1],
        "combos": [
            {
                "title": "Protein power",
                "item_indices": [0, 2],
                "rationale": "Two lean proteins.",
            }
        ],
        "notes": "Prices estimated.",
    }


# ═══════════════════════════════════════════════════════════
# DOMAIN MODEL FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def menu_items(raw_items: List[Dict[str, Any]]) -> List[MenuItem]:
    """Validated menu items."""
    return [MenuItem.model_validate(raw) for raw in raw_items]


@pytest.fixture
def analysis(menu_items: List[MenuItem]) -> Analysis:
    """Analysis with one pairing, used for explanation tests."""
    return Analysis(
        items=menu_items,
        health_rank=[0, 2, 1],
        combos=[
            Combo(
                title="Protein power",
                item_indices=[0, 2],
                rationale="Two lean proteins.",
            )
        ],
        notes="Prices estimated.",
    )


# ═══════════════════════════════════════════════════════════
# INFRASTRUCTURE FIXTURES
# ═══════════════════════════════════════════════════════════


@pytest.fixture
def settings() -> MenuBotSettings:
    """Default settings with two vision models."""
    return MenuBotSettings(vision_models=("gpt-4o", "gpt-4o-mini"))


@pytest.fixture
def stub_provider() -> StubMenuProvider:
    """Fresh stub provider."""
    return StubMenuProvider()


@pytest.fixture(autouse=True)
def clean_provider_singleton() -> Any:
    """Reset provider singleton around each test."""
    reset_providers()
    yield
    reset_providers()
