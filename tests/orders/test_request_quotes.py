from datetime import date
from decimal import Decimal

import pytest

from catalog.models import DiscountCoupon
from orders.models import ServiceRequest
from orders.services import quote_request


@pytest.mark.django_db
class TestQuoteRequest:
    def test_tier_and_coupon_are_stacked(self, client_user, vendor_user, vendor_profile, logo_cleanup, ten_off_coupon):
        request = ServiceRequest.objects.create(
            client=client_user,
            service=logo_cleanup,
            assignee=vendor_user,
            form_data={"amount_of_products": 60},
        )

        quote = quote_request(request, coupon_code="tenoff")

        assert quote.retail_price == Decimal("108.00")
        assert quote.final_price == Decimal("81.80")
        assert quote.discount_amount == Decimal("26.20")
        assert quote.vendor_cost == Decimal("60.00")
        assert quote.profit == Decimal("21.80")

    def test_open_ended_tier(self, client_user, logo_cleanup):
        request = ServiceRequest.objects.create(
            client=client_user, service=logo_cleanup, form_data={"amount_of_products": 150},
        )
        quote = quote_request(request)
        assert quote.retail_price == Decimal("195.00")
        assert quote.final_price == Decimal("165.75")
        assert quote.cost_source == "unassigned"

    def test_stored_price_short_circuits(self, client_user, logo_cleanup, ten_off_coupon):
        request = ServiceRequest.objects.create(
            client=client_user,
            service=logo_cleanup,
            form_data={"amount_of_products": 60},
            final_price=Decimal("50.00"),
            coupon=ten_off_coupon,
        )
        quote = quote_request(request)
        assert quote.final_price == Decimal("50.00")
        assert quote.discount_amount == Decimal("0")

    def test_unknown_coupon_code(self, client_user, banner_design):
        request = ServiceRequest.objects.create(client=client_user, service=banner_design)
        with pytest.raises(ValueError, match="Unknown coupon"):
            quote_request(request, coupon_code="NOPE")

    def test_coupon_outside_its_scope_is_rejected(self, client_user, banner_design, logo_cleanup):
        DiscountCoupon.objects.create(
            code="LOGOONLY",
            discount_value=Decimal("20"),
            service_scope=DiscountCoupon.Scope.SPECIFIC,
            service=logo_cleanup,
        )
        request = ServiceRequest.objects.create(client=client_user, service=banner_design)
        with pytest.raises(ValueError, match="cannot be used"):
            quote_request(request, coupon_code="LOGOONLY")

    def test_expired_stored_coupon_is_ignored(self, client_user, banner_design):
        expired = DiscountCoupon.objects.create(
            code="OLD",
            discount_type=DiscountCoupon.DiscountType.AMOUNT,
            discount_value=Decimal("5"),
            valid_to=date(2020, 1, 1),
        )
        request = ServiceRequest.objects.create(client=client_user, service=banner_design, coupon=expired)
        quote = quote_request(request, on_date=date(2024, 1, 1))
        # 45.00 less the 15% subscription tier only
        assert quote.final_price == Decimal("38.25")
