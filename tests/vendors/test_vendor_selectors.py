from decimal import Decimal

import pytest

from pricing import selectors
from vendors.models import VendorProfile


@pytest.mark.django_db
class TestSelectors:
    def test_principal_carries_vendor_linkage(self, vendor_user, vendor_designer, client_user):
        designer = selectors.principal(vendor_designer)
        assert designer.vendor_account_id == str(vendor_user.pk)
        assert selectors.principal(vendor_user).vendor_account_id == str(vendor_user.pk)
        assert selectors.principal(client_user).discount_tier == "oms_subscription"
        assert selectors.principal(None) is None

    def test_vendor_designer_model_helper(self, vendor_user, vendor_designer):
        assert vendor_designer.vendor_account_id == vendor_user.pk
        assert vendor_user in [member.vendor for member in vendor_user.team_members.all()]

    def test_agreement_json_is_parsed(self, vendor_profile):
        agreements = selectors.vendor_agreements(vendor_profile)
        art = agreements["Creative Art"]
        assert art.base_price == Decimal("25")
        assert dict(art.complexity) == {"Basic": Decimal("20"), "Ultimate": Decimal("55")}
        assert dict(agreements["Logo Cleanup"].quantity)[">100"] == Decimal("0.7")

    def test_malformed_agreement_values_are_dropped(self, vendor_user):
        profile = VendorProfile.objects.create(
            user=vendor_user,
            company_name="Pixel Works",
            pricing_agreements={"Logo Cleanup": {"basePrice": "tbd", "quantity": {"1-50": "n/a", "51+": "0.9"}}},
        )
        entry = selectors.vendor_agreements(profile)["Logo Cleanup"]
        assert entry.base_price is None
        assert entry.quantity == (("51+", Decimal("0.9")),)

    def test_service_definition_orders_tiers(self, logo_cleanup):
        definition = selectors.service_definition(logo_cleanup)
        assert definition.pricing_structure == "quantity"
        assert [tier.label for tier in definition.tiers] == ["1-50", "51-100", "101+"]

    def test_pricing_context_snapshot(self, vendor_profile, launch_bundle):
        context = selectors.load_pricing_context()
        vendor_id = str(vendor_profile.user_id)
        assert context.vendor_names[vendor_id] == "Pixel Works"
        assert "Logo Cleanup" in context.vendor_agreements[vendor_id]
        bundle = context.bundles[str(launch_bundle.pk)]
        assert sum(item.quantity for item in bundle.items) == 3
        assert context.default_bundle_vendor_id is None
