"""Price and cost resolution for ad-hoc requests and bundles.

Every function here is total: missing catalog entries, unknown structures
and malformed form values resolve to a zero amount tagged with where it
came from, never to an exception.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from core.money import ZERO, quantize_cents, to_decimal
from pricing.discounts import apply_discounts
from pricing.records import (
    BundleDefinition,
    Coupon,
    Principal,
    ServiceAgreement,
    ServiceDefinition,
    ServiceRequestRecord,
)
from pricing.tiers import match_complexity_tier, match_quantity_tier

logger = logging.getLogger("servicehub")

COMPLEXITY_KEYS = ("complexity", "designComplexity")
QUANTITY_KEYS = ("amount_of_products", "amountOfProducts", "quantity")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Retail price sources
STORED = "stored"
BASE = "base"
COMPLEXITY_TIER = "complexity_tier"
QUANTITY_TIER = "quantity_tier"
UNAVAILABLE = "unavailable"

# Vendor cost provenance
INTERNAL = "internal"
UNASSIGNED = "unassigned"
NO_AGREEMENT = "no_agreement"
AGREEMENT = "agreement"
BUNDLE_COST = "bundle_cost"
PACK_COST = "pack_cost"


@dataclass(frozen=True)
class RetailPrice:
    amount: Decimal
    source: str

    @property
    def is_available(self) -> bool:
        return self.source != UNAVAILABLE


@dataclass(frozen=True)
class VendorCost:
    amount: Decimal
    source: str
    vendor_id: Optional[str] = None


@dataclass(frozen=True)
class BundlePrice:
    subtotal: Decimal
    discount: Decimal
    final_price: Decimal
    is_override: bool = False


@dataclass(frozen=True)
class ResolvedPrice:
    retail_price: Decimal
    discount_amount: Decimal
    final_price: Decimal
    vendor_cost: Decimal
    profit: Decimal
    price_source: str
    cost_source: str
    is_available: bool


_UNAVAILABLE = RetailPrice(ZERO, UNAVAILABLE)


# ---------------------------------------------------------------------------
# Form data
# ---------------------------------------------------------------------------

def _first_present(form_data: Optional[Mapping[str, Any]], keys):
    if not isinstance(form_data, Mapping):
        return None
    for key in keys:
        value = form_data.get(key)
        if value not in (None, ""):
            return value
    return None


def read_complexity(form_data) -> Optional[str]:
    value = _first_present(form_data, COMPLEXITY_KEYS)
    return None if value is None else str(value)


def read_quantity(form_data) -> int:
    """Leading integer of the first quantity field; 0 when there is none."""
    value = _first_present(form_data, QUANTITY_KEYS)
    if value is None or isinstance(value, bool):
        return 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


# ---------------------------------------------------------------------------
# Retail price
# ---------------------------------------------------------------------------

def resolve_retail_price(service: Optional[ServiceDefinition], form_data=None,
                         stored_final_price=None) -> RetailPrice:
    """Client-facing price of one ad-hoc request, before discounts.

    A stored final price is returned as-is. Otherwise the service's pricing
    structure decides: ``single`` uses the base price, ``complexity`` a flat
    tier price and ``quantity`` the tier unit price times the quantity.
    When no tier matches the price is unavailable; the base price is not
    used as a fallback for tiered services.
    """
    stored = to_decimal(stored_final_price)
    if stored is not None:
        return RetailPrice(stored, STORED)
    if stored_final_price is not None:
        logger.debug("Ignoring unparseable stored final price %r", stored_final_price)

    if service is None:
        return _UNAVAILABLE

    structure = service.pricing_structure
    if structure == "single":
        return RetailPrice(to_decimal(service.base_price, ZERO), BASE)

    if structure == "complexity":
        amount = match_complexity_tier(read_complexity(form_data), service.tiers)
        if amount is None:
            return _UNAVAILABLE
        return RetailPrice(amount, COMPLEXITY_TIER)

    if structure == "quantity":
        quantity = read_quantity(form_data)
        if quantity <= 0:
            return _UNAVAILABLE
        unit_price = match_quantity_tier(quantity, service.tiers)
        if unit_price is None:
            return _UNAVAILABLE
        return RetailPrice(quantize_cents(unit_price * quantity), QUANTITY_TIER)

    logger.debug("Unknown pricing structure %r on service %s", structure, service.id)
    return _UNAVAILABLE


# ---------------------------------------------------------------------------
# Vendor cost
# ---------------------------------------------------------------------------

def resolve_vendor_cost(request, service: Optional[ServiceDefinition], assignee: Optional[Principal],
                        vendor_agreements: Mapping[str, Mapping[str, Any]]) -> VendorCost:
    """What the business owes the assignee's vendor for one ad-hoc request.

    Internal staff cost nothing. Vendor designers bill through their parent
    vendor. The vendor's agreement for the service title is read with the
    service's own pricing structure; when no agreement tier applies the
    agreement base price is used, and zero when there is none.
    """
    if service is None or assignee is None:
        return VendorCost(ZERO, UNASSIGNED)
    if assignee.is_internal:
        return VendorCost(ZERO, INTERNAL)

    vendor_id = assignee.vendor_account_id
    if not vendor_id:
        return VendorCost(ZERO, NO_AGREEMENT)
    agreements = (vendor_agreements or {}).get(vendor_id)
    if not agreements:
        return VendorCost(ZERO, NO_AGREEMENT, vendor_id)
    entry = agreements.get(service.title)
    if entry is None:
        return VendorCost(ZERO, NO_AGREEMENT, vendor_id)
    if not isinstance(entry, ServiceAgreement):
        entry = ServiceAgreement.from_json(entry)

    form_data = getattr(request, "form_data", None)
    if service.pricing_structure == "complexity" and entry.complexity:
        amount = match_complexity_tier(read_complexity(form_data), entry.complexity)
        if amount is not None:
            return VendorCost(amount, AGREEMENT, vendor_id)
    elif service.pricing_structure == "quantity" and entry.quantity:
        quantity = read_quantity(form_data)
        if quantity > 0:
            unit_cost = match_quantity_tier(quantity, entry.quantity)
            if unit_cost is not None:
                return VendorCost(quantize_cents(unit_cost * quantity), AGREEMENT, vendor_id)

    return VendorCost(entry.base_price if entry.base_price is not None else ZERO, AGREEMENT, vendor_id)


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

def resolve_bundle_vendor(assignee: Optional[Principal], default_vendor_id=None) -> Optional[str]:
    """Vendor billed for a bundle request: the assignee's, else the house default."""
    if assignee is not None and assignee.vendor_account_id:
        return assignee.vendor_account_id
    return default_vendor_id or None


def resolve_bundle_vendor_cost(vendor_id, bundle_id, bundle_costs: Mapping) -> VendorCost:
    if not vendor_id:
        return VendorCost(ZERO, UNASSIGNED)
    cost = to_decimal((bundle_costs or {}).get((vendor_id, bundle_id)))
    if cost is None:
        return VendorCost(ZERO, NO_AGREEMENT, vendor_id)
    return VendorCost(cost, BUNDLE_COST, vendor_id)


def resolve_pack_vendor_cost(vendor_id, pack_id, pack_costs: Mapping) -> VendorCost:
    if not vendor_id:
        return VendorCost(ZERO, UNASSIGNED)
    cost = to_decimal((pack_costs or {}).get((vendor_id, pack_id)))
    if cost is None:
        return VendorCost(ZERO, NO_AGREEMENT, vendor_id)
    return VendorCost(cost, PACK_COST, vendor_id)


def calculate_bundle_price(bundle: BundleDefinition, services: Mapping[str, ServiceDefinition],
                           line_item_prices: Mapping[str, Any]) -> BundlePrice:
    """Price of *bundle*: the stored override when positive, else the discounted item sum.

    Each item contributes its service base price (or line item price) times
    its quantity. Items pointing at nothing contribute zero.
    """
    subtotal = ZERO
    for item in bundle.items:
        if item.service_id is not None and item.service_id in services:
            unit = to_decimal(services[item.service_id].base_price, ZERO)
        elif item.line_item_id is not None:
            unit = to_decimal(line_item_prices.get(item.line_item_id), ZERO)
        else:
            unit = ZERO
        subtotal += unit * max(int(item.quantity or 0), 0)

    override = to_decimal(bundle.final_price)
    if override is not None and override > 0:
        return BundlePrice(subtotal, subtotal - override, override, is_override=True)

    percent = to_decimal(bundle.discount_percent, ZERO)
    discount = quantize_cents(subtotal * percent / Decimal("100"))
    return BundlePrice(subtotal, discount, subtotal - discount)


# ---------------------------------------------------------------------------
# Quotes
# ---------------------------------------------------------------------------

def quote_service_request(request: ServiceRequestRecord, service: Optional[ServiceDefinition], *,
                          client_tier=None, coupon: Optional[Coupon] = None,
                          assignee: Optional[Principal] = None,
                          vendor_agreements: Optional[Mapping] = None) -> ResolvedPrice:
    """Full price picture of one ad-hoc request.

    A stored final price already includes whatever discounts were granted,
    so discounts are only applied to catalog-derived prices.
    """
    retail = resolve_retail_price(service, request.form_data, request.final_price)
    if retail.source in (STORED, UNAVAILABLE):
        discount_amount, final_price = ZERO, retail.amount
    else:
        breakdown = apply_discounts(retail.amount, client_tier, coupon)
        discount_amount, final_price = breakdown.discount_amount, breakdown.final_price

    cost = resolve_vendor_cost(request, service, assignee, vendor_agreements or {})
    return ResolvedPrice(
        retail_price=retail.amount,
        discount_amount=discount_amount,
        final_price=final_price,
        vendor_cost=cost.amount,
        profit=final_price - cost.amount,
        price_source=retail.source,
        cost_source=cost.source,
        is_available=retail.is_available,
    )
