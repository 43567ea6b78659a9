from datetime import datetime, timezone
from decimal import Decimal

import pytest

from pricing import services
from pricing.records import (
    BundleDefinition,
    BundleItem,
    Coupon,
    PricingTier,
    Principal,
    ServiceAgreement,
    ServiceDefinition,
    ServiceRequestRecord,
)

LOGO_CLEANUP = ServiceDefinition(
    id="svc-logo",
    title="Logo Cleanup",
    pricing_structure="quantity",
    tiers=(
        PricingTier("1-50", Decimal("2.00")),
        PricingTier("51-100", Decimal("1.80")),
        PricingTier("101+", Decimal("1.30")),
    ),
)
CREATIVE_ART = ServiceDefinition(
    id="svc-art",
    title="Creative Art",
    pricing_structure="complexity",
    base_price=Decimal("99.00"),
    tiers=(PricingTier("Basic", Decimal("30.00")), PricingTier("Ultimate", Decimal("80.00"))),
)
BANNER = ServiceDefinition(id="svc-banner", title="Banner Design", base_price=Decimal("45.00"))

VENDOR = Principal(id="v1", username="pixelworks", role="vendor")
VENDOR_DESIGNER = Principal(id="vd1", username="dana", role="vendor_designer", vendor_id="v1")
AGREEMENTS = {
    "v1": {
        "Logo Cleanup": ServiceAgreement(quantity=(("1-50", Decimal("1.20")), (">100", Decimal("0.70")))),
        "Creative Art": ServiceAgreement(
            base_price=Decimal("25"),
            complexity=(("Basic", Decimal("20")), ("Ultimate", Decimal("55"))),
        ),
        "Banner Design": {"basePrice": "18.50"},
    }
}


def _request(form_data=None, final_price=None, service_id="svc-logo"):
    return ServiceRequestRecord(
        id="3f9a2c10-0000-0000-0000-000000000000",
        client_id="c1",
        service_id=service_id,
        created_at=datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc),
        form_data=form_data or {},
        final_price=final_price,
    )


class TestResolveRetailPrice:
    def test_quantity_price_is_unit_times_quantity(self):
        price = services.resolve_retail_price(LOGO_CLEANUP, {"amount_of_products": 60})
        assert price.amount == Decimal("108.00")
        assert price.source == services.QUANTITY_TIER
        assert price.is_available

    def test_open_ended_quantity_tier(self):
        price = services.resolve_retail_price(LOGO_CLEANUP, {"amountOfProducts": "150"})
        assert price.amount == Decimal("195.00")

    @pytest.mark.parametrize(
        "form_data, expected",
        [
            ({"quantity": "60 logos"}, Decimal("108.00")),
            ({"amount_of_products": "", "quantity": 10}, Decimal("20.00")),
            ({"amount_of_products": 60.9}, Decimal("108.00")),
        ],
    )
    def test_quantity_field_parsing(self, form_data, expected):
        assert services.resolve_retail_price(LOGO_CLEANUP, form_data).amount == expected

    @pytest.mark.parametrize("form_data", [{}, {"quantity": "0"}, {"quantity": "-4"}, {"quantity": "many"}])
    def test_missing_or_non_positive_quantity_is_unavailable(self, form_data):
        price = services.resolve_retail_price(LOGO_CLEANUP, form_data)
        assert price.amount == Decimal("0")
        assert not price.is_available

    def test_complexity_price_is_flat(self):
        price = services.resolve_retail_price(CREATIVE_ART, {"designComplexity": "ultimate"})
        assert price.amount == Decimal("80.00")
        assert price.source == services.COMPLEXITY_TIER

    def test_unmatched_complexity_does_not_fall_back_to_base_price(self):
        price = services.resolve_retail_price(CREATIVE_ART, {"complexity": "Premium"})
        assert price.amount == Decimal("0")
        assert price.source == services.UNAVAILABLE

    def test_single_structure_uses_base_price(self):
        assert services.resolve_retail_price(BANNER, {"quantity": 3}).amount == Decimal("45.00")

    def test_stored_final_price_wins(self):
        price = services.resolve_retail_price(LOGO_CLEANUP, {"amount_of_products": 60}, Decimal("50.00"))
        assert price.amount == Decimal("50.00")
        assert price.source == services.STORED

    def test_unknown_service_or_structure(self):
        odd = ServiceDefinition(id="x", title="Odd", pricing_structure="hourly", base_price=Decimal("5"))
        assert not services.resolve_retail_price(None, {}).is_available
        assert not services.resolve_retail_price(odd, {}).is_available


class TestResolveVendorCost:
    def test_internal_assignee_costs_nothing(self):
        designer = Principal(id="i1", role="internal_designer")
        cost = services.resolve_vendor_cost(_request({"quantity": 10}), LOGO_CLEANUP, designer, AGREEMENTS)
        assert cost.amount == Decimal("0")
        assert cost.source == services.INTERNAL

    def test_unassigned(self):
        cost = services.resolve_vendor_cost(_request(), LOGO_CLEANUP, None, AGREEMENTS)
        assert cost.source == services.UNASSIGNED

    def test_vendor_quantity_agreement(self):
        cost = services.resolve_vendor_cost(_request({"quantity": 150}), LOGO_CLEANUP, VENDOR, AGREEMENTS)
        assert cost.amount == Decimal("105.00")
        assert cost.source == services.AGREEMENT
        assert cost.vendor_id == "v1"

    def test_vendor_designer_bills_through_parent_vendor(self):
        request = _request({"complexity": "Basic"}, service_id="svc-art")
        cost = services.resolve_vendor_cost(request, CREATIVE_ART, VENDOR_DESIGNER, AGREEMENTS)
        assert cost.amount == Decimal("20")
        assert cost.vendor_id == "v1"

    def test_agreement_base_price_fallback(self):
        request = _request({"complexity": "Premium"}, service_id="svc-art")
        cost = services.resolve_vendor_cost(request, CREATIVE_ART, VENDOR, AGREEMENTS)
        assert cost.amount == Decimal("25")
        assert cost.source == services.AGREEMENT

    def test_quantity_gap_without_base_price_costs_zero(self):
        cost = services.resolve_vendor_cost(_request({"quantity": 75}), LOGO_CLEANUP, VENDOR, AGREEMENTS)
        assert cost.amount == Decimal("0")
        assert cost.source == services.AGREEMENT

    def test_raw_json_agreement_entries_are_accepted(self):
        cost = services.resolve_vendor_cost(_request(service_id="svc-banner"), BANNER, VENDOR, AGREEMENTS)
        assert cost.amount == Decimal("18.50")

    def test_missing_agreement_pieces(self):
        orphan = Principal(id="vd2", role="vendor_designer", vendor_id=None)
        stranger = Principal(id="v9", role="vendor")
        other_service = ServiceDefinition(id="s9", title="Packaging", base_price=Decimal("10"))
        for assignee, service in [(orphan, LOGO_CLEANUP), (stranger, LOGO_CLEANUP), (VENDOR, other_service)]:
            cost = services.resolve_vendor_cost(_request({"quantity": 10}), service, assignee, AGREEMENTS)
            assert cost.amount == Decimal("0")
            assert cost.source == services.NO_AGREEMENT


class TestBundles:
    BUNDLE = BundleDefinition(
        id="b1",
        name="Launch Kit",
        discount_percent=Decimal("10"),
        items=(BundleItem(quantity=2, service_id="svc-banner"), BundleItem(quantity=1, line_item_id="li1")),
    )

    def test_discounted_item_sum(self):
        price = services.calculate_bundle_price(self.BUNDLE, {"svc-banner": BANNER}, {"li1": Decimal("10.00")})
        assert price.subtotal == Decimal("100.00")
        assert price.discount == Decimal("10.00")
        assert price.final_price == Decimal("90.00")

    def test_stored_final_price_overrides(self):
        bundle = BundleDefinition(id="b1", name="Launch Kit", final_price=Decimal("75.00"), items=self.BUNDLE.items)
        price = services.calculate_bundle_price(bundle, {"svc-banner": BANNER}, {"li1": Decimal("10.00")})
        assert price.final_price == Decimal("75.00")
        assert price.is_override

    def test_unknown_items_contribute_nothing(self):
        price = services.calculate_bundle_price(self.BUNDLE, {}, {})
        assert price.final_price == Decimal("0")

    def test_bundle_vendor_resolution(self):
        assert services.resolve_bundle_vendor(VENDOR_DESIGNER, "house") == "v1"
        assert services.resolve_bundle_vendor(Principal(id="i1", role="internal_designer"), "house") == "house"
        assert services.resolve_bundle_vendor(None, None) is None

    def test_bundle_vendor_cost(self):
        costs = {("v1", "b1"): Decimal("40.00")}
        assert services.resolve_bundle_vendor_cost("v1", "b1", costs).amount == Decimal("40.00")
        assert services.resolve_bundle_vendor_cost("v1", "b2", costs).amount == Decimal("0")
        assert services.resolve_bundle_vendor_cost(None, "b1", costs).source == services.UNASSIGNED


class TestQuoteServiceRequest:
    def test_full_pipeline(self):
        coupon = Coupon(code="TENOFF", discount_type="amount", discount_value=Decimal("10.00"))
        quote = services.quote_service_request(
            _request({"amount_of_products": 60}),
            LOGO_CLEANUP,
            client_tier="oms_subscription",
            coupon=coupon,
            assignee=VENDOR,
            vendor_agreements={"v1": {"Logo Cleanup": {"quantity": {"1-100": 1.0}}}},
        )
        assert quote.retail_price == Decimal("108.00")
        assert quote.final_price == Decimal("81.80")
        assert quote.discount_amount == Decimal("26.20")
        assert quote.vendor_cost == Decimal("60.00")
        assert quote.profit == Decimal("21.80")

    def test_stored_price_is_not_discounted_again(self):
        quote = services.quote_service_request(
            _request({"amount_of_products": 60}, final_price="50.00"),
            LOGO_CLEANUP,
            client_tier="enterprise",
        )
        assert quote.final_price == Decimal("50.00")
        assert quote.discount_amount == Decimal("0")
        assert quote.price_source == services.STORED
