"""Tier label parsing and matching.

A quantity tier label is one of ``"51-75"`` (inclusive range), ``"101+"``
(at least 101) or ``">100"`` (more than 100). Anything else is a named
complexity level such as ``"Basic"`` or ``"Ultimate"``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional, Union

from core.money import to_decimal
from pricing.records import PricingTier

BOUNDED = "bounded"
AT_LEAST = "at_least"
GREATER_THAN = "greater_than"
NAMED = "named"

_LABEL_PATTERNS = (
    (BOUNDED, re.compile(r"(\d+)\s*-\s*(\d+)")),
    (AT_LEAST, re.compile(r"(\d+)\+")),
    (GREATER_THAN, re.compile(r">(\d+)")),
)

TierInput = Union[PricingTier, tuple]


@dataclass(frozen=True)
class TierBound:
    kind: str
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    @property
    def is_unbounded(self) -> bool:
        return self.kind in (AT_LEAST, GREATER_THAN)

    def contains(self, quantity: int) -> bool:
        if self.kind == BOUNDED:
            return self.minimum <= quantity <= self.maximum
        if self.kind == AT_LEAST:
            return quantity >= self.minimum
        if self.kind == GREATER_THAN:
            return quantity > self.minimum
        return False


def parse_tier_label(label) -> TierBound:
    """Classify *label*; the patterns are searched, not anchored."""
    text = str(label or "").strip()
    for kind, pattern in _LABEL_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        if kind == BOUNDED:
            return TierBound(kind, int(match.group(1)), int(match.group(2)))
        return TierBound(kind, int(match.group(1)))
    return TierBound(NAMED)


def _iter_tiers(tiers: Iterable[TierInput]):
    for tier in tiers or ():
        if isinstance(tier, PricingTier):
            label, amount = tier.label, tier.amount
        else:
            label, amount = tier
        amount = to_decimal(amount)
        if amount is None:
            continue
        yield str(label), amount


def match_quantity_tier(quantity: int, tiers: Iterable[TierInput]) -> Optional[Decimal]:
    """Return the unit price of the tier covering *quantity*, or ``None``.

    The first bounded range containing the quantity wins outright. Otherwise
    the satisfied open-ended tier with the largest minimum wins; on equal
    minimums the earlier tier is kept.
    """
    best_amount = None
    best_minimum = -1
    for label, amount in _iter_tiers(tiers):
        bound = parse_tier_label(label)
        if bound.kind == BOUNDED:
            if bound.contains(quantity):
                return amount
        elif bound.is_unbounded and bound.contains(quantity) and bound.minimum > best_minimum:
            best_minimum = bound.minimum
            best_amount = amount
    return best_amount


def match_complexity_tier(complexity, tiers: Iterable[TierInput]) -> Optional[Decimal]:
    """Return the price of the first tier whose label equals *complexity*, ignoring case."""
    wanted = "" if complexity is None else str(complexity).lower()
    if not wanted:
        return None
    for label, amount in _iter_tiers(tiers):
        if label.lower() == wanted:
            return amount
    return None
