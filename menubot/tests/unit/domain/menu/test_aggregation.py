"""
Unit tests for price and macro aggregation.
"""

from typing import List

from menubot.domain.menu.aggregation import item_macros, sum_macros, sum_price
from menubot.domain.menu.models import MacroSummary, MenuItem


class TestSumPrice:
    """Test price totals over index subsets."""

    def test_pairing_price(self, menu_items: List[MenuItem]) -> None:
        """Test chicken + salmon costs 25."""
        assert sum_price(menu_items, [0, 2]) == 25.0

    def test_empty_indices(self, menu_items: List[MenuItem]) -> None:
        """Test no indices sums to zero."""
        assert sum_price(menu_items, []) == 0.0

    def test_out_of_range_contributes_zero(self, menu_items: List[MenuItem]) -> None:
        """Test out-of-range and negative indices are ignored."""
        assert sum_price(menu_items, [0, 99, -1]) == 12.0

    def test_malformed_indices_contribute_zero(self, menu_items: List[MenuItem]) -> None:
        """Test non-integral indices are ignored."""
        assert sum_price(menu_items, ["x", None, 1.5, True]) == 0.0

    def test_duplicates_counted_twice(self, menu_items: List[MenuItem]) -> None:
        """Test a repeated index adds the item again."""
        assert sum_price(menu_items, [1, 1]) == 12.0


class TestSumMacros:
    """Test macro totals over index subsets."""

    def test_pairing_macros(self, menu_items: List[MenuItem]) -> None:
        """Test chicken + salmon macros add element-wise."""
        total = sum_macros(menu_items, [0, 2])

        assert total.calories == 870
        assert total.protein_g == 80
        assert total.carbs_g == 22
        assert total.fat_g == 30

    def test_out_of_range_equals_without(self, menu_items: List[MenuItem]) -> None:
        """Test an out-of-range index changes nothing."""
        assert sum_macros(menu_items, [0, 99]) == sum_macros(menu_items, [0])

    def test_empty_subset_is_zero(self, menu_items: List[MenuItem]) -> None:
        """Test empty subset yields zero macros."""
        assert sum_macros(menu_items, []) == MacroSummary()

    def test_empty_menu(self) -> None:
        """Test any index into an empty menu yields zero."""
        assert sum_macros([], [0, 1]) == MacroSummary()

    def test_overflow_does_not_raise(self) -> None:
        """Test sums past float range saturate at infinity."""
        items = [MenuItem(calories=1e308), MenuItem(calories=1e308)]

        total = sum_macros(items, [0, 1])

        assert total.calories == float("inf")
        assert total.rounded() == (0, 0, 0, 0)


class TestItemMacros:
    """Test single-item macro extraction."""

    def test_none_is_zero(self) -> None:
        """Test missing item yields zero macros."""
        assert item_macros(None) == MacroSummary()

    def test_copies_fields(self, menu_items: List[MenuItem]) -> None:
        """Test macros mirror the item."""
        assert item_macros(menu_items[0]).rounded() == (450, 45, 10, 12)
