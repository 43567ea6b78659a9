"""Client-tier and coupon discounts."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Optional

from core.money import ZERO, ceil_cents, floor_cents, quantize_cents, to_decimal
from pricing.records import Coupon

logger = logging.getLogger("servicehub")

DISCOUNT_TIER_PERCENTS = MappingProxyType({
    "none": Decimal("0"),
    "power_level": Decimal("10"),
    "oms_subscription": Decimal("15"),
    "enterprise": Decimal("20"),
})

PERCENTAGE_TYPES = frozenset({"percentage", "percent"})
FIXED_TYPES = frozenset({"fixed", "amount"})

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class DiscountBreakdown:
    base_price: Decimal
    client_discount_percent: Decimal
    after_client_discount: Decimal
    coupon_discount: Decimal
    discount_amount: Decimal
    final_price: Decimal


def tier_discount_percent(client_tier, percents=DISCOUNT_TIER_PERCENTS) -> Decimal:
    """Percent off for *client_tier*; unknown or missing tiers get nothing."""
    return percents.get(str(client_tier or "none"), ZERO)


def coupon_discount_amount(coupon: Optional[Coupon], amount: Decimal) -> Decimal:
    """Discount *coupon* takes off *amount*, never more than *amount* itself.

    Percentages are floored to the cent. A coupon with an unknown type or a
    missing, malformed or negative value yields no discount.
    """
    if coupon is None:
        return ZERO
    value = to_decimal(coupon.discount_value)
    if value is None or value < 0:
        logger.debug("Ignoring coupon %s with unusable value %r", coupon.code, coupon.discount_value)
        return ZERO

    discount_type = str(coupon.discount_type or "").lower()
    if discount_type in PERCENTAGE_TYPES:
        discount = floor_cents(amount * value / HUNDRED)
    elif discount_type in FIXED_TYPES:
        discount = quantize_cents(value)
    else:
        logger.debug("Ignoring coupon %s with unknown type %r", coupon.code, coupon.discount_type)
        return ZERO
    return min(discount, amount)


def apply_discounts(base_price, client_tier=None, coupon: Optional[Coupon] = None,
                    percents=DISCOUNT_TIER_PERCENTS) -> DiscountBreakdown:
    """Stack the client-tier discount and then the coupon on *base_price*.

    Parameters
    ----------
    base_price : Decimal | str | int
        Undiscounted price. Unparseable or negative input counts as zero.
    client_tier : str, optional
        One of the keys of ``DISCOUNT_TIER_PERCENTS``.
    coupon : Coupon, optional
        Already validated for this client and item; see ``coupon_applies``.

    Returns
    -------
    DiscountBreakdown
        The after-tier price is rounded up to the cent so the tier never
        gives away a fraction of a cent. The coupon works on that rounded
        amount and the final price never drops below zero.
    """
    base = max(to_decimal(base_price, ZERO), ZERO)
    percent = tier_discount_percent(client_tier, percents)
    after_client = ceil_cents(base * (HUNDRED - percent) / HUNDRED)
    coupon_discount = coupon_discount_amount(coupon, after_client)
    final_price = max(after_client - coupon_discount, ZERO)
    return DiscountBreakdown(
        base_price=base,
        client_discount_percent=percent,
        after_client_discount=after_client,
        coupon_discount=coupon_discount,
        discount_amount=base - final_price,
        final_price=final_price,
    )


def coupon_applies(coupon: Optional[Coupon], client_id, *, service_id=None, bundle_id=None,
                   on_date: Optional[date] = None) -> bool:
    """Whether *coupon* may be redeemed by *client_id* on the given item today.

    Exactly one of *service_id* / *bundle_id* identifies the item.
    """
    if coupon is None or not coupon.is_active:
        return False
    if coupon.max_uses is not None and coupon.current_uses >= coupon.max_uses:
        return False
    if coupon.client_id and str(coupon.client_id) != str(client_id):
        return False
    if on_date is not None:
        if coupon.valid_from and on_date < coupon.valid_from:
            return False
        if coupon.valid_to and on_date > coupon.valid_to:
            return False

    if bundle_id is not None:
        scope, target, item = coupon.bundle_scope, coupon.bundle_id, bundle_id
    else:
        scope, target, item = coupon.service_scope, coupon.service_id, service_id
    if scope == "none":
        return False
    if scope == "specific":
        return target is not None and str(target) == str(item)
    return True
