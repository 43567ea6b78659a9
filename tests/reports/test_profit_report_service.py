from datetime import date
from decimal import Decimal

import pytest
from django.test import override_settings

from catalog.models import ServicePack
from orders.models import BundleRequest, ClientPackSubscription, ServiceRequest
from reports.services import PackReportFilters, ReportFilters, get_pack_profit_report, get_profit_report
from vendors.models import VendorBundleCost, VendorPackCost


@pytest.mark.django_db
class TestGetProfitReport:
    def test_scenarios_end_to_end(
        self, client_user, admin_user, vendor_designer, vendor_profile, internal_designer, logo_cleanup, creative_art,
    ):
        ServiceRequest.objects.create(
            client=client_user,
            service=logo_cleanup,
            assignee=vendor_designer,
            form_data={"amount_of_products": "60"},
        )
        ServiceRequest.objects.create(
            client=client_user,
            service=creative_art,
            assignee=internal_designer,
            form_data={"complexity": "Ultimate"},
        )
        ServiceRequest.objects.create(
            client=admin_user,
            service=logo_cleanup,
            form_data={"amount_of_products": 150},
        )

        report = get_profit_report()

        by_service = {(row.service_name, row.client_name): row for row in report.rows}
        vendor_row = by_service[("Logo Cleanup", "acme")]
        assert vendor_row.retail_price == Decimal("108.00")
        assert vendor_row.vendor_cost == Decimal("60.00")
        assert vendor_row.vendor_name == "Pixel Works"
        assert vendor_row.assignee_name == "pixel-dana"

        internal_row = by_service[("Creative Art", "acme")]
        assert internal_row.retail_price == Decimal("80.00")
        assert internal_row.cost_source == "internal"

        admin_row = by_service[("Logo Cleanup", "admin")]
        assert admin_row.retail_price == Decimal("0")
        assert admin_row.assignee_name == "Unassigned"

        assert report.totals.count == 3
        assert report.totals.retail_price == Decimal("188.00")
        assert report.totals.vendor_cost == Decimal("60.00")

    def test_stored_final_price_is_used(self, client_user, logo_cleanup):
        ServiceRequest.objects.create(
            client=client_user,
            service=logo_cleanup,
            form_data={"amount_of_products": 60},
            final_price=Decimal("50.00"),
        )
        report = get_profit_report()
        assert report.rows[0].retail_price == Decimal("50.00")

    def test_bundle_rows_use_default_vendor(self, client_user, vendor_user, launch_bundle):
        VendorBundleCost.objects.create(vendor=vendor_user, bundle=launch_bundle, cost=Decimal("60.00"))
        BundleRequest.objects.create(client=client_user, bundle=launch_bundle)

        with override_settings(SERVICEHUB_DEFAULT_BUNDLE_VENDOR_ID=str(vendor_user.pk)):
            report = get_profit_report(ReportFilters(method="bundle"))

        row = report.rows[0]
        assert row.job_number.startswith("B-")
        assert row.retail_price == Decimal("90.00")
        assert row.vendor_cost == Decimal("60.00")
        assert row.vendor_name == "pixelworks"
        assert report.totals.margin_percent == Decimal("33.3")

    def test_bundle_without_vendor_costs_nothing(self, client_user, launch_bundle):
        BundleRequest.objects.create(client=client_user, bundle=launch_bundle)
        report = get_profit_report()
        assert report.rows[0].vendor_cost == Decimal("0")
        assert report.rows[0].vendor_name == "Unassigned"

    def test_client_filter(self, client_user, admin_user, banner_design):
        ServiceRequest.objects.create(client=client_user, service=banner_design)
        ServiceRequest.objects.create(client=admin_user, service=banner_design)
        report = get_profit_report(ReportFilters(client_ids=frozenset({str(client_user.pk)})))
        assert [row.client_name for row in report.rows] == ["acme"]
        assert report.totals.retail_price == Decimal("45.00")


@pytest.mark.django_db
def test_pack_profit_report(client_user, vendor_user):
    pack = ServicePack.objects.create(name="Starter Pack", price=Decimal("200.00"))
    VendorPackCost.objects.create(vendor=vendor_user, pack=pack, cost=Decimal("150.00"))
    ClientPackSubscription.objects.create(client=client_user, pack=pack, vendor=vendor_user, start_date=date(2024, 1, 1))
    ClientPackSubscription.objects.create(
        client=client_user, pack=pack, start_date=date(2024, 2, 1), is_active=False,
    )

    report = get_pack_profit_report()
    assert report.summary.total_subscriptions == 2
    assert report.summary.total_vendor_cost == Decimal("150.00")
    assert report.summary.average_margin == Decimal("62.5")

    active = get_pack_profit_report(PackReportFilters(status="active"))
    assert [row.vendor_name for row in active.rows] == ["pixelworks"]
