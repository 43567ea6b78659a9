"""Plain, immutable records consumed by the pricing engine.

The engine never touches the ORM: ``pricing.selectors`` turns model
instances into these records, and tests build them directly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping, Optional

from core.money import ZERO, to_decimal

INTERNAL_ROLES = frozenset({"admin", "internal_designer"})


@dataclass(frozen=True)
class PricingTier:
    label: str
    amount: Optional[Decimal]
    sort_order: int = 0


@dataclass(frozen=True)
class ServiceDefinition:
    id: str
    title: str
    pricing_structure: str = "single"
    base_price: Decimal = ZERO
    price_range: str = ""
    tiers: tuple[PricingTier, ...] = ()


@dataclass(frozen=True)
class Coupon:
    """A coupon as handed to the discount stacker.

    ``discount_value`` is kept raw; a value that does not parse is treated
    as no discount rather than an error.
    """

    code: str
    discount_type: str
    discount_value: Any
    is_active: bool = True
    max_uses: Optional[int] = None
    current_uses: int = 0
    valid_from: Optional[date] = None
    valid_to: Optional[date] = None
    client_id: Optional[str] = None
    service_scope: str = "all"
    service_id: Optional[str] = None
    bundle_scope: str = "all"
    bundle_id: Optional[str] = None


@dataclass(frozen=True)
class ServiceAgreement:
    """One vendor's cost table for one service."""

    base_price: Optional[Decimal] = None
    complexity: tuple[tuple[str, Decimal], ...] = ()
    quantity: tuple[tuple[str, Decimal], ...] = ()

    @classmethod
    def from_json(cls, data) -> "ServiceAgreement":
        """Build from the stored ``{"basePrice", "complexity", "quantity"}`` shape.

        Unparseable amounts are dropped instead of failing the whole entry.
        """
        if not isinstance(data, Mapping):
            return cls()
        base_price = to_decimal(data.get("basePrice", data.get("base_price")))
        return cls(
            base_price=base_price,
            complexity=_amount_pairs(data.get("complexity")),
            quantity=_amount_pairs(data.get("quantity")),
        )


def _amount_pairs(table) -> tuple[tuple[str, Decimal], ...]:
    if not isinstance(table, Mapping):
        return ()
    pairs = []
    for label, raw in table.items():
        amount = to_decimal(raw)
        if amount is not None:
            pairs.append((str(label), amount))
    return tuple(pairs)


@dataclass(frozen=True)
class Principal:
    """A user as far as pricing is concerned: role and vendor linkage."""

    id: str
    username: str = ""
    role: str = "client"
    vendor_id: Optional[str] = None
    discount_tier: str = "none"

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_internal(self) -> bool:
        return self.role in INTERNAL_ROLES

    @property
    def vendor_account_id(self) -> Optional[str]:
        """Vendor the principal bills through: itself, or its parent vendor."""
        if self.role == "vendor":
            return self.id
        if self.role == "vendor_designer":
            return self.vendor_id or None
        return None


@dataclass(frozen=True)
class ServiceRequestRecord:
    id: str
    client_id: str
    service_id: str
    created_at: datetime
    status: str = "pending"
    assignee_id: Optional[str] = None
    form_data: Mapping[str, Any] = field(default_factory=dict)
    final_price: Any = None


@dataclass(frozen=True)
class BundleItem:
    quantity: int = 1
    service_id: Optional[str] = None
    line_item_id: Optional[str] = None


@dataclass(frozen=True)
class BundleDefinition:
    id: str
    name: str
    discount_percent: Decimal = ZERO
    final_price: Optional[Decimal] = None
    items: tuple[BundleItem, ...] = ()


@dataclass(frozen=True)
class BundleRequestRecord:
    id: str
    client_id: str
    bundle_id: str
    created_at: datetime
    status: str = "pending"
    assignee_id: Optional[str] = None


@dataclass(frozen=True)
class PackDefinition:
    id: str
    name: str
    price: Decimal = ZERO


@dataclass(frozen=True)
class PackSubscriptionRecord:
    id: str
    client_id: str
    pack_id: str
    start_date: date
    is_active: bool = True
    vendor_id: Optional[str] = None


@dataclass(frozen=True)
class PricingContext:
    """Read-only catalog snapshot shared by every row of a report."""

    services: Mapping[str, ServiceDefinition] = field(default_factory=dict)
    bundles: Mapping[str, BundleDefinition] = field(default_factory=dict)
    line_item_prices: Mapping[str, Decimal] = field(default_factory=dict)
    users: Mapping[str, Principal] = field(default_factory=dict)
    vendor_names: Mapping[str, str] = field(default_factory=dict)
    vendor_agreements: Mapping[str, Mapping[str, ServiceAgreement]] = field(default_factory=dict)
    bundle_costs: Mapping[tuple[str, str], Decimal] = field(default_factory=dict)
    default_bundle_vendor_id: Optional[str] = None
