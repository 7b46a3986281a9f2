"""
Unit tests for analysis validation and repair.

The validator must accept anything and always return a well-formed
Analysis whose ranking is a permutation of the item indices.
"""

import json
from typing import Any, Dict

import pytest

from menubot.domain.menu.models import DEFAULT_ITEM_NAME, Analysis, MenuItem
from menubot.domain.menu.thresholds import MenuThresholds
from menubot.domain.menu.validation import MenuValidator, expected_calories, validate_analysis


class TestCalorieReconciliation:
    """Test stated calories vs macro-derived calories."""

    def test_far_off_total_is_recomputed(self) -> None:
        """Test 900 kcal with 10/10/5 macros becomes 125 kcal."""
        analysis = validate_analysis(
            {
                "items": [{"calories": 900, "protein_g": 10, "carbs_g": 10, "fat_g": 5}],
                "health_rank": [5],
                "combos": [],
                "notes": "",
            }
        )

        assert analysis.items[0].calories == 125
        assert analysis.health_rank == [0]

    def test_within_tolerance_is_kept(self) -> None:
        """Test 420 kcal vs 350 derived stays as stated."""
        analysis = validate_analysis(
            {"items": [{"calories": 420, "protein_g": 35, "carbs_g": 12, "fat_g": 18}]}
        )

        assert analysis.items[0].calories == 420

    def test_exactly_at_tolerance_is_kept(self) -> None:
        """Test a gap equal to the tolerance is not corrected."""
        analysis = validate_analysis({"items": [{"calories": 200, "protein_g": 25}]})

        assert analysis.items[0].calories == 200

    def test_zero_calories_not_touched(self) -> None:
        """Test missing calorie totals stay at zero."""
        analysis = validate_analysis({"items": [{"protein_g": 40, "fat_g": 20}]})

        assert analysis.items[0].calories == 0

    def test_custom_tolerance(self) -> None:
        """Test thresholds control the tolerance."""
        raw = {"items": [{"calories": 420, "protein_g": 35, "carbs_g": 12, "fat_g": 18}]}

        analysis = validate_analysis(raw, MenuThresholds(calorie_tolerance_kcal=50))

        assert analysis.items[0].calories == 350

    def test_expected_calories(self) -> None:
        """Test 4/4/9 kcal per gram."""
        item = MenuItem(protein_g=10, carbs_g=10, fat_g=5)

        assert expected_calories(item) == 125


class TestHealthRankRepair:
    """Test ranking repair."""

    @pytest.mark.parametrize("rank", [None, [], "0,1,2", 7])
    def test_missing_rank_is_regenerated(self, raw_analysis: Dict[str, Any], rank: Any) -> None:
        """Test missing, empty or non-list rankings are computed from scores."""
        raw_analysis["health_rank"] = rank

        analysis = validate_analysis(raw_analysis)

        assert sorted(analysis.health_rank) == [0, 1, 2]
        assert analysis.health_rank[-1] == 1

    def test_valid_rank_is_kept(self, raw_analysis: Dict[str, Any]) -> None:
        """Test a full permutation is preserved even if it disagrees with scores."""
        raw_analysis["health_rank"] = [1, 0, 2]

        assert validate_analysis(raw_analysis).health_rank == [1, 0, 2]

    def test_out_of_range_entries_dropped(self, raw_analysis: Dict[str, Any]) -> None:
        """Test out-of-range entries are removed from an otherwise full ranking."""
        raw_analysis["health_rank"] = [2, 9, 0, -1, 1]

        assert validate_analysis(raw_analysis).health_rank == [2, 0, 1]

    def test_short_rank_is_regenerated(self, raw_analysis: Dict[str, Any]) -> None:
        """Test a ranking missing items is recomputed."""
        raw_analysis["health_rank"] = [0]

        rank = validate_analysis(raw_analysis).health_rank

        assert sorted(rank) == [0, 1, 2]

    def test_duplicate_rank_is_regenerated(self, raw_analysis: Dict[str, Any]) -> None:
        """Test duplicates cannot hide a missing index."""
        raw_analysis["health_rank"] = [0, 0, 2]

        rank = validate_analysis(raw_analysis).health_rank

        assert sorted(rank) == [0, 1, 2]

    def test_integral_floats_and_strings_accepted(self, raw_analysis: Dict[str, Any]) -> None:
        """Test 2.0 and "1" count as indices."""
        raw_analysis["health_rank"] = [0, 2.0, "1"]

        assert validate_analysis(raw_analysis).health_rank == [0, 2, 1]


class TestMalformedInput:
    """Test the validator never raises."""

    @pytest.mark.parametrize("raw", [None, 42, "not json", b"\xff", [], {"items": "soup"}])
    def test_unusable_input_yields_empty_analysis(self, raw: Any) -> None:
        """Test garbage becomes an empty analysis."""
        analysis = validate_analysis(raw)

        assert analysis == Analysis()

    def test_json_text_is_parsed(self, raw_analysis: Dict[str, Any]) -> None:
        """Test JSON strings are accepted."""
        analysis = validate_analysis(json.dumps(raw_analysis))

        assert [item.name for item in analysis.items] == [
            "Grilled Chicken",
            "Cheesecake",
            "Salmon Salad",
        ]

    def test_items_coerced_to_defaults(self) -> None:
        """Test bad item fields fall back to placeholders and zeros."""
        analysis = validate_analysis(
            {
                "items": [
                    {"name": "", "price": "£5", "calories": None, "protein_g": -4},
                    "Tomato Soup",
                ]
            }
        )

        first, second = analysis.items
        assert first.name == DEFAULT_ITEM_NAME
        assert first.price == 0.0
        assert first.calories == 0.0
        assert first.protein_g == 0.0
        assert second.name == DEFAULT_ITEM_NAME
        assert analysis.health_rank == [0, 1]

    def test_bad_combos_and_notes(self) -> None:
        """Test non-mapping combos are dropped and bad indices filtered."""
        analysis = validate_analysis(
            {
                "items": [{"name": "Soup"}],
                "combos": ["nope", {"title": "Solo", "item_indices": [0, "x", 1.5]}],
                "notes": {"text": "hi"},
            }
        )

        assert len(analysis.combos) == 1
        assert analysis.combos[0].title == "Solo"
        assert analysis.combos[0].item_indices == [0]
        assert analysis.notes == ""


class TestValidatorProperties:
    """Test idempotence and round-trip."""

    def test_idempotent(self, raw_analysis: Dict[str, Any]) -> None:
        """Test validating twice changes nothing."""
        validator = MenuValidator()
        once = validator.validate(raw_analysis)

        assert validator.validate(once) == once

    def test_consistent_analysis_round_trips(self) -> None:
        """Test an already consistent analysis passes through unchanged."""
        analysis = Analysis(
            items=[
                MenuItem(name="Soup", price=5, calories=220, protein_g=6, carbs_g=34, fat_g=7),
                MenuItem(name="Salad", price=9, calories=350, protein_g=35, carbs_g=12, fat_g=18),
            ],
            health_rank=[1, 0],
            notes="ok",
        )

        assert validate_analysis(analysis) == analysis

    def test_rank_always_permutation(self) -> None:
        """Test every item appears exactly once in the repaired ranking."""
        raw = {
            "items": [{"name": f"Dish {i}", "protein_g": i} for i in range(6)],
            "health_rank": [5, 5, 3, 40, "a"],
        }

        rank = validate_analysis(raw).health_rank

        assert sorted(rank) == list(range(6))
        assert rank[0] == 5


class TestExtremeNumbers:
    """Test values at the edge of float range."""

    def test_integer_too_large_for_float(self) -> None:
        """Test a 400-digit JSON integer coerces to zero."""
        analysis = validate_analysis('{"items": [{"price": 1' + "0" * 400 + "}]}")

        assert analysis.items[0].price == 0.0

    def test_macro_total_overflow_skips_correction(self) -> None:
        """Test finite macros whose kcal total overflows leave calories alone."""
        analysis = validate_analysis(
            {"items": [{"calories": 5, "protein_g": 1e308, "carbs_g": 1e308}]}
        )

        assert analysis.items[0].calories == 5
        assert analysis.health_rank == [0]

    def test_extreme_menu_is_idempotent(self) -> None:
        """Test revalidating an extreme menu changes nothing."""
        raw = {
            "items": [
                {"name": "A", "calories": 1e308, "protein_g": 1e308, "fat_g": 1e308},
                {"name": "B", "calories": 5, "carbs_g": 1e308},
            ]
        }
        once = validate_analysis(raw)

        assert validate_analysis(once) == once
        assert sorted(once.health_rank) == [0, 1]
