"""Service functions for the reports app.

The ``build_*`` functions are pure: they take request records and a
``PricingContext`` and return report objects. The ``get_*`` functions load
those inputs from the database and are what views and the management
command call.
"""
import logging
from dataclasses import asdict, dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings

from core.money import ZERO
from pricing import services as pricing
from pricing.records import PricingContext

logger = logging.getLogger("servicehub")

UNKNOWN_CLIENT = "Unknown"
UNKNOWN_SERVICE = "Unknown Service"
UNKNOWN_BUNDLE = "Unknown Bundle"
UNASSIGNED = "Unassigned"

AD_HOC = "ad_hoc"
BUNDLE = "bundle"


def job_number(prefix, request_id):
    """``A-`` / ``B-`` followed by the first five characters of the id, upper-cased."""
    return f"{prefix}-{str(request_id)[:5].upper()}"


def margin_percent(profit, retail, places=1):
    """Profit as a percentage of retail; 0 when there is no retail."""
    if not retail:
        return Decimal(0).quantize(Decimal(1).scaleb(-places))
    return (profit / retail * 100).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _day(value):
    if isinstance(value, datetime):
        return value.date()
    return value


# ---------------------------------------------------------------------------
# Report objects
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ReportRow:
    request_id: str
    job_number: str
    service_method: str
    item_id: str
    service_name: str
    client_id: str
    client_name: str
    assignee_name: str
    vendor_id: str | None
    vendor_name: str
    status: str
    created_at: datetime
    retail_price: Decimal
    vendor_cost: Decimal
    cost_source: str
    discount: Decimal
    profit: Decimal

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class ReportTotals:
    count: int
    retail_price: Decimal
    vendor_cost: Decimal
    discount: Decimal
    profit: Decimal
    margin_percent: Decimal


@dataclass(frozen=True)
class ProfitReport:
    rows: tuple
    totals: ReportTotals


@dataclass(frozen=True)
class ReportFilters:
    """Row filters, AND-combined. Unset fields do not filter."""

    vendor_id: str | None = None
    service_id: str | None = None
    bundle_id: str | None = None
    method: str | None = None
    date_from: date | None = None
    date_to: date | None = None
    client_ids: frozenset = frozenset()
    search: str = ""

    def matches(self, row: ReportRow) -> bool:
        if self.vendor_id and row.vendor_id != str(self.vendor_id):
            return False
        if self.service_id and (row.service_method != AD_HOC or row.item_id != str(self.service_id)):
            return False
        if self.bundle_id and (row.service_method != BUNDLE or row.item_id != str(self.bundle_id)):
            return False
        if self.method and row.service_method != self.method:
            return False
        day = _day(row.created_at)
        if self.date_from and day < self.date_from:
            return False
        if self.date_to and day > self.date_to:
            return False
        if self.client_ids and row.client_id not in self.client_ids:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in row.job_number.lower() and needle not in row.request_id.lower():
                return False
        return True


# ---------------------------------------------------------------------------
# Rows
# ---------------------------------------------------------------------------

def _vendor_name(vendor_id, context):
    if not vendor_id:
        return UNASSIGNED
    if vendor_id in context.vendor_names:
        return context.vendor_names[vendor_id]
    vendor = context.users.get(vendor_id)
    return vendor.username if vendor else UNASSIGNED


def build_ad_hoc_row(request, context: PricingContext) -> ReportRow:
    service = context.services.get(request.service_id)
    client = context.users.get(request.client_id)
    assignee = context.users.get(request.assignee_id) if request.assignee_id else None

    retail = pricing.resolve_retail_price(service, request.form_data, request.final_price).amount
    if client is not None and client.is_admin:
        retail = ZERO
    vendor_id = assignee.vendor_account_id if assignee else None
    cost = pricing.resolve_vendor_cost(request, service, assignee, context.vendor_agreements)
    discount = ZERO

    return ReportRow(
        request_id=request.id,
        job_number=job_number("A", request.id),
        service_method=AD_HOC,
        item_id=request.service_id,
        service_name=service.title if service else UNKNOWN_SERVICE,
        client_id=request.client_id,
        client_name=client.username if client else UNKNOWN_CLIENT,
        assignee_name=assignee.username if assignee else UNASSIGNED,
        vendor_id=vendor_id,
        vendor_name=_vendor_name(vendor_id, context),
        status=request.status,
        created_at=request.created_at,
        retail_price=retail,
        vendor_cost=cost.amount,
        cost_source=cost.source,
        discount=discount,
        profit=retail - cost.amount - discount,
    )


def build_bundle_row(request, context: PricingContext) -> ReportRow:
    bundle = context.bundles.get(request.bundle_id)
    client = context.users.get(request.client_id)
    assignee = context.users.get(request.assignee_id) if request.assignee_id else None

    if bundle is None:
        retail = ZERO
    else:
        retail = pricing.calculate_bundle_price(bundle, context.services, context.line_item_prices).final_price
    if client is not None and client.is_admin:
        retail = ZERO

    vendor_id = pricing.resolve_bundle_vendor(assignee, context.default_bundle_vendor_id)
    cost = pricing.resolve_bundle_vendor_cost(vendor_id, request.bundle_id, context.bundle_costs)
    discount = ZERO

    return ReportRow(
        request_id=request.id,
        job_number=job_number("B", request.id),
        service_method=BUNDLE,
        item_id=request.bundle_id,
        service_name=bundle.name if bundle else UNKNOWN_BUNDLE,
        client_id=request.client_id,
        client_name=client.username if client else UNKNOWN_CLIENT,
        assignee_name=assignee.username if assignee else UNASSIGNED,
        vendor_id=vendor_id,
        vendor_name=_vendor_name(vendor_id, context),
        status=request.status,
        created_at=request.created_at,
        retail_price=retail,
        vendor_cost=cost.amount,
        cost_source=cost.source,
        discount=discount,
        profit=retail - cost.amount - discount,
    )


def summarize_rows(rows, places=1) -> ReportTotals:
    retail = sum((r.retail_price for r in rows), ZERO)
    cost = sum((r.vendor_cost for r in rows), ZERO)
    discount = sum((r.discount for r in rows), ZERO)
    profit = sum((r.profit for r in rows), ZERO)
    return ReportTotals(
        count=len(rows),
        retail_price=retail,
        vendor_cost=cost,
        discount=discount,
        profit=profit,
        margin_percent=margin_percent(profit, retail, places),
    )


def build_profit_report(requests, bundle_requests, context: PricingContext, filters=None, places=1):
    """Price, cost and filter every request, newest first.

    Parameters
    ----------
    requests : iterable of ServiceRequestRecord
    bundle_requests : iterable of BundleRequestRecord
    context : PricingContext
    filters : ReportFilters, optional
    places : int
        Decimal places of the margin percentages.

    Returns
    -------
    ProfitReport
        Totals are computed over the filtered rows only.
    """
    filters = filters or ReportFilters()
    rows = [build_ad_hoc_row(r, context) for r in requests]
    rows += [build_bundle_row(r, context) for r in bundle_requests]
    rows = [row for row in rows if filters.matches(row)]
    rows.sort(key=lambda row: row.created_at, reverse=True)
    return ProfitReport(rows=tuple(rows), totals=summarize_rows(rows, places))


# ---------------------------------------------------------------------------
# Pack profit report
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PackProfitRow:
    subscription_id: str
    client_id: str
    client_name: str
    pack_id: str
    pack_name: str
    vendor_id: str | None
    vendor_name: str
    status: str
    start_date: date
    retail_price: Decimal
    vendor_cost: Decimal
    profit: Decimal
    margin_percent: Decimal

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class PackProfitSummary:
    total_subscriptions: int
    total_retail_price: Decimal
    total_vendor_cost: Decimal
    total_profit: Decimal
    average_margin: Decimal


@dataclass(frozen=True)
class PackProfitReport:
    rows: tuple
    summary: PackProfitSummary


@dataclass(frozen=True)
class PackReportFilters:
    vendor_id: str | None = None
    pack_id: str | None = None
    status: str | None = None

    def matches(self, row: PackProfitRow) -> bool:
        if self.vendor_id and row.vendor_id != str(self.vendor_id):
            return False
        if self.pack_id and row.pack_id != str(self.pack_id):
            return False
        if self.status and row.status != self.status:
            return False
        return True


def build_pack_profit_report(subscriptions, packs, pack_costs, context: PricingContext,
                             filters=None, places=1):
    """One row per pack subscription: pack price against the vendor's pack cost.

    The average margin is the plain mean of the row margins.
    """
    filters = filters or PackReportFilters()
    rows = []
    for subscription in subscriptions:
        pack = packs.get(subscription.pack_id)
        client = context.users.get(subscription.client_id)
        retail = pack.price if pack else ZERO
        if client is not None and client.is_admin:
            retail = ZERO
        cost = pricing.resolve_pack_vendor_cost(subscription.vendor_id, subscription.pack_id, pack_costs)
        profit = retail - cost.amount
        row = PackProfitRow(
            subscription_id=subscription.id,
            client_id=subscription.client_id,
            client_name=client.username if client else UNKNOWN_CLIENT,
            pack_id=subscription.pack_id,
            pack_name=pack.name if pack else "Unknown Pack",
            vendor_id=subscription.vendor_id,
            vendor_name=_vendor_name(subscription.vendor_id, context),
            status="active" if subscription.is_active else "inactive",
            start_date=subscription.start_date,
            retail_price=retail,
            vendor_cost=cost.amount,
            profit=profit,
            margin_percent=margin_percent(profit, retail, places),
        )
        if filters.matches(row):
            rows.append(row)

    if rows:
        average = sum((r.margin_percent for r in rows), ZERO) / len(rows)
        average = average.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    else:
        average = margin_percent(ZERO, ZERO, places)
    summary = PackProfitSummary(
        total_subscriptions=len(rows),
        total_retail_price=sum((r.retail_price for r in rows), ZERO),
        total_vendor_cost=sum((r.vendor_cost for r in rows), ZERO),
        total_profit=sum((r.profit for r in rows), ZERO),
        average_margin=average,
    )
    return PackProfitReport(rows=tuple(rows), summary=summary)


# ---------------------------------------------------------------------------
# Database entry points
# ---------------------------------------------------------------------------

def _margin_places():
    return getattr(settings, "SERVICEHUB_MARGIN_DECIMALS", 1)


def get_profit_report(filters=None):
    """Build the profit report over every ad-hoc and bundle request in the database."""
    from pricing import selectors

    context = selectors.load_pricing_context()
    report = build_profit_report(
        selectors.load_service_requests(),
        selectors.load_bundle_requests(),
        context,
        filters,
        places=_margin_places(),
    )
    logger.info(
        "Profit report built with %d rows",
        report.totals.count,
        extra={"retail_total": str(report.totals.retail_price), "profit_total": str(report.totals.profit)},
    )
    return report


def get_pack_profit_report(filters=None):
    from pricing import selectors

    context = selectors.load_pricing_context()
    subscriptions, packs, pack_costs = selectors.load_pack_data()
    report = build_pack_profit_report(
        subscriptions, packs, pack_costs, context, filters, places=_margin_places(),
    )
    logger.info("Pack profit report built with %d rows", report.summary.total_subscriptions)
    return report
