from decimal import Decimal

import pytest

from pricing.records import PricingTier
from pricing.tiers import (
    AT_LEAST,
    BOUNDED,
    GREATER_THAN,
    NAMED,
    match_complexity_tier,
    match_quantity_tier,
    parse_tier_label,
)

LOGO_TIERS = [("1-50", Decimal("2.00")), ("51-100", Decimal("1.80")), ("101+", Decimal("1.30"))]


class TestParseTierLabel:
    @pytest.mark.parametrize(
        "label, expected",
        [
            ("51-75", (BOUNDED, 51, 75)),
            ("1 - 50 units", (BOUNDED, 1, 50)),
            ("101+", (AT_LEAST, 101, None)),
            (">100", (GREATER_THAN, 100, None)),
            ("Ultimate", (NAMED, None, None)),
            ("", (NAMED, None, None)),
        ],
    )
    def test_label_shapes(self, label, expected):
        bound = parse_tier_label(label)
        assert (bound.kind, bound.minimum, bound.maximum) == expected

    def test_range_is_checked_before_open_ended_forms(self):
        assert parse_tier_label("10-20+").kind == BOUNDED


class TestMatchQuantityTier:
    @pytest.mark.parametrize(
        "quantity, expected",
        [(1, "2.00"), (50, "2.00"), (51, "1.80"), (60, "1.80"), (100, "1.80"), (101, "1.30"), (5000, "1.30")],
    )
    def test_brackets_are_inclusive(self, quantity, expected):
        assert match_quantity_tier(quantity, LOGO_TIERS) == Decimal(expected)

    def test_no_tier_covers_quantity(self):
        assert match_quantity_tier(0, LOGO_TIERS) is None
        assert match_quantity_tier(10, [("51-75", Decimal("1"))]) is None

    def test_greater_than_is_strict(self):
        tiers = [(">100", Decimal("0.70"))]
        assert match_quantity_tier(100, tiers) is None
        assert match_quantity_tier(101, tiers) == Decimal("0.70")

    def test_largest_open_ended_minimum_wins(self):
        tiers = [("10+", Decimal("3")), (">50", Decimal("2")), ("100+", Decimal("1"))]
        assert match_quantity_tier(60, tiers) == Decimal("2")
        assert match_quantity_tier(150, tiers) == Decimal("1")

    def test_first_open_ended_tier_wins_on_equal_minimum(self):
        tiers = [("100+", Decimal("1.10")), (">100", Decimal("0.90"))]
        assert match_quantity_tier(200, tiers) == Decimal("1.10")

    def test_bounded_range_beats_open_ended_tier(self):
        tiers = [("100+", Decimal("1.00")), ("90-200", Decimal("1.50"))]
        assert match_quantity_tier(150, tiers) == Decimal("1.50")

    def test_first_matching_range_wins_on_overlap(self):
        tiers = [("1-100", Decimal("2")), ("50-150", Decimal("1"))]
        assert match_quantity_tier(75, tiers) == Decimal("2")

    def test_tiers_without_price_are_skipped(self):
        tiers = [PricingTier("1-50", None), PricingTier("1-100", Decimal("1.25"))]
        assert match_quantity_tier(20, tiers) == Decimal("1.25")

    def test_named_labels_never_match_quantities(self):
        assert match_quantity_tier(5, [("Basic", Decimal("20"))]) is None


class TestMatchComplexityTier:
    TIERS = [PricingTier("Basic", Decimal("30.00")), PricingTier("Ultimate", Decimal("80.00"))]

    def test_match_ignores_case(self):
        assert match_complexity_tier("ultimate", self.TIERS) == Decimal("80.00")
        assert match_complexity_tier("BASIC", self.TIERS) == Decimal("30.00")

    def test_unknown_or_missing_level(self):
        assert match_complexity_tier("Premium", self.TIERS) is None
        assert match_complexity_tier(None, self.TIERS) is None
        assert match_complexity_tier("", self.TIERS) is None

    def test_first_equal_label_wins(self):
        tiers = [("Basic", Decimal("30")), ("basic", Decimal("99"))]
        assert match_complexity_tier("Basic", tiers) == Decimal("30")
