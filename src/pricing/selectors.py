"""ORM -> pricing record conversion.

The only module of the pricing app that imports models. Callers load a
``PricingContext`` once per report and reuse it for every row.
"""
from django.conf import settings
from django.utils import timezone

from core.money import ZERO
from pricing.records import (
    BundleDefinition,
    BundleItem,
    BundleRequestRecord,
    Coupon,
    PackDefinition,
    PackSubscriptionRecord,
    PricingContext,
    PricingTier,
    Principal,
    ServiceAgreement,
    ServiceDefinition,
    ServiceRequestRecord,
)


def _id(value):
    return None if value is None else str(value)


def _local(value):
    """Creation timestamps are bucketed by day in the configured time zone."""
    if value is not None and timezone.is_aware(value):
        return timezone.localtime(value)
    return value


# ---------------------------------------------------------------------------
# Single objects
# ---------------------------------------------------------------------------

def service_definition(service):
    tiers = tuple(
        PricingTier(label=tier.label, amount=tier.price, sort_order=tier.sort_order)
        for tier in sorted(service.pricing_tiers.all(), key=lambda t: t.sort_order)
    )
    return ServiceDefinition(
        id=str(service.pk),
        title=service.title,
        pricing_structure=service.pricing_structure,
        base_price=service.base_price if service.base_price is not None else ZERO,
        price_range=service.price_range,
        tiers=tiers,
    )


def bundle_definition(bundle):
    items = tuple(
        BundleItem(
            quantity=item.quantity,
            service_id=_id(item.service_id),
            line_item_id=_id(item.line_item_id),
        )
        for item in bundle.items.all()
    )
    return BundleDefinition(
        id=str(bundle.pk),
        name=bundle.name,
        discount_percent=bundle.discount_percent,
        final_price=bundle.final_price,
        items=items,
    )


def principal(user):
    if user is None:
        return None
    return Principal(
        id=str(user.pk),
        username=user.username,
        role=user.role,
        vendor_id=_id(user.vendor_id),
        discount_tier=user.tripod_discount_tier,
    )


def coupon_record(coupon):
    if coupon is None:
        return None
    return Coupon(
        code=coupon.code,
        discount_type=coupon.discount_type,
        discount_value=coupon.discount_value,
        is_active=coupon.is_active,
        max_uses=coupon.max_uses,
        current_uses=coupon.current_uses,
        valid_from=coupon.valid_from,
        valid_to=coupon.valid_to,
        client_id=_id(coupon.client_id),
        service_scope=coupon.service_scope,
        service_id=_id(coupon.service_id),
        bundle_scope=coupon.bundle_scope,
        bundle_id=_id(coupon.bundle_id),
    )


def service_request_record(request):
    return ServiceRequestRecord(
        id=str(request.pk),
        client_id=str(request.client_id),
        service_id=str(request.service_id),
        created_at=_local(request.created_at),
        status=request.status,
        assignee_id=_id(request.assignee_id),
        form_data=request.form_data or {},
        final_price=request.final_price,
    )


def bundle_request_record(request):
    return BundleRequestRecord(
        id=str(request.pk),
        client_id=str(request.client_id),
        bundle_id=str(request.bundle_id),
        created_at=_local(request.created_at),
        status=request.status,
        assignee_id=_id(request.assignee_id),
    )


def pack_subscription_record(subscription):
    return PackSubscriptionRecord(
        id=str(subscription.pk),
        client_id=str(subscription.client_id),
        pack_id=str(subscription.pack_id),
        start_date=subscription.start_date,
        is_active=subscription.is_active,
        vendor_id=_id(subscription.vendor_id),
    )


def vendor_agreements(profile):
    """Parse a vendor profile's agreement JSON into ``{service title: ServiceAgreement}``."""
    raw = profile.pricing_agreements if isinstance(profile.pricing_agreements, dict) else {}
    return {title: ServiceAgreement.from_json(entry) for title, entry in raw.items()}


# ---------------------------------------------------------------------------
# Catalog snapshot
# ---------------------------------------------------------------------------

def load_pricing_context():
    """Load everything a profit report needs to price and cost its rows."""
    from accounts.models import User
    from catalog.models import Bundle, BundleLineItem, Service
    from vendors.models import VendorBundleCost, VendorProfile

    services = Service.objects.prefetch_related("pricing_tiers")
    bundles = Bundle.objects.prefetch_related("items")
    profiles = VendorProfile.objects.all()

    return PricingContext(
        services={str(s.pk): service_definition(s) for s in services},
        bundles={str(b.pk): bundle_definition(b) for b in bundles},
        line_item_prices={str(pk): price for pk, price in BundleLineItem.objects.values_list("pk", "price")},
        users={str(u.pk): principal(u) for u in User.objects.all()},
        vendor_names={str(p.user_id): p.company_name for p in profiles},
        vendor_agreements={str(p.user_id): vendor_agreements(p) for p in profiles},
        bundle_costs={
            (str(vendor_id), str(bundle_id)): cost
            for vendor_id, bundle_id, cost in VendorBundleCost.objects.values_list("vendor_id", "bundle_id", "cost")
        },
        default_bundle_vendor_id=_id(getattr(settings, "SERVICEHUB_DEFAULT_BUNDLE_VENDOR_ID", None) or None),
    )


def load_service_requests():
    from orders.models import ServiceRequest

    return [service_request_record(r) for r in ServiceRequest.objects.order_by("-created_at")]


def load_bundle_requests():
    from orders.models import BundleRequest

    return [bundle_request_record(r) for r in BundleRequest.objects.order_by("-created_at")]


def load_pack_data():
    """Return ``(subscriptions, packs, pack_costs)`` for the pack profit report."""
    from catalog.models import ServicePack
    from orders.models import ClientPackSubscription
    from vendors.models import VendorPackCost

    subscriptions = [pack_subscription_record(s) for s in ClientPackSubscription.objects.all()]
    packs = {
        str(p.pk): PackDefinition(id=str(p.pk), name=p.name, price=p.price)
        for p in ServicePack.objects.all()
    }
    pack_costs = {
        (str(vendor_id), str(pack_id)): cost
        for vendor_id, pack_id, cost in VendorPackCost.objects.values_list("vendor_id", "pack_id", "cost")
    }
    return subscriptions, packs, pack_costs
