"""Serializers for the ServiceHub API.

Query-parameter serializers validate and normalise report filters; the
output serializers render report objects with decimals as strings.
"""
from rest_framework import serializers

from reports.services import AD_HOC, BUNDLE, PackReportFilters, ReportFilters


# ---------------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------------

class ProfitReportQuerySerializer(serializers.Serializer):
    vendor = serializers.UUIDField(required=False)
    service = serializers.UUIDField(required=False)
    bundle = serializers.UUIDField(required=False)
    method = serializers.ChoiceField(choices=[AD_HOC, BUNDLE], required=False)
    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    clients = serializers.CharField(required=False, allow_blank=True, default="")
    search = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_clients(self, value):
        ids = [part.strip() for part in value.split(",") if part.strip()]
        field = serializers.UUIDField()
        return frozenset(str(field.to_internal_value(client_id)) for client_id in ids)

    def validate(self, attrs):
        date_from, date_to = attrs.get("date_from"), attrs.get("date_to")
        if date_from and date_to and date_from > date_to:
            raise serializers.ValidationError({"date_to": "date_to must not be before date_from."})
        return attrs

    def to_filters(self):
        data = self.validated_data
        return ReportFilters(
            vendor_id=str(data["vendor"]) if data.get("vendor") else None,
            service_id=str(data["service"]) if data.get("service") else None,
            bundle_id=str(data["bundle"]) if data.get("bundle") else None,
            method=data.get("method") or None,
            date_from=data.get("date_from"),
            date_to=data.get("date_to"),
            client_ids=data.get("clients") or frozenset(),
            search=data.get("search", "").strip(),
        )


class PackProfitReportQuerySerializer(serializers.Serializer):
    vendor = serializers.UUIDField(required=False)
    pack = serializers.UUIDField(required=False)
    status = serializers.ChoiceField(choices=["active", "inactive"], required=False)

    def to_filters(self):
        data = self.validated_data
        return PackReportFilters(
            vendor_id=str(data["vendor"]) if data.get("vendor") else None,
            pack_id=str(data["pack"]) if data.get("pack") else None,
            status=data.get("status") or None,
        )


class QuoteQuerySerializer(serializers.Serializer):
    coupon = serializers.CharField(required=False, allow_blank=True, max_length=50)


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _money():
    return serializers.DecimalField(max_digits=12, decimal_places=2)


class ReportRowSerializer(serializers.Serializer):
    request_id = serializers.CharField()
    job_number = serializers.CharField()
    service_method = serializers.CharField()
    item_id = serializers.CharField()
    service_name = serializers.CharField()
    client_id = serializers.CharField()
    client_name = serializers.CharField()
    assignee_name = serializers.CharField()
    vendor_id = serializers.CharField(allow_null=True)
    vendor_name = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    retail_price = _money()
    vendor_cost = _money()
    cost_source = serializers.CharField()
    discount = _money()
    profit = _money()


class ReportTotalsSerializer(serializers.Serializer):
    count = serializers.IntegerField()
    retail_price = _money()
    vendor_cost = _money()
    discount = _money()
    profit = _money()
    margin_percent = serializers.DecimalField(max_digits=8, decimal_places=None)


class ProfitReportSerializer(serializers.Serializer):
    rows = ReportRowSerializer(many=True)
    totals = ReportTotalsSerializer()


class PackProfitRowSerializer(serializers.Serializer):
    subscription_id = serializers.CharField()
    client_id = serializers.CharField()
    client_name = serializers.CharField()
    pack_id = serializers.CharField()
    pack_name = serializers.CharField()
    vendor_id = serializers.CharField(allow_null=True)
    vendor_name = serializers.CharField()
    status = serializers.CharField()
    start_date = serializers.DateField()
    retail_price = _money()
    vendor_cost = _money()
    profit = _money()
    margin_percent = serializers.DecimalField(max_digits=8, decimal_places=None)


class PackProfitSummarySerializer(serializers.Serializer):
    total_subscriptions = serializers.IntegerField()
    total_retail_price = _money()
    total_vendor_cost = _money()
    total_profit = _money()
    average_margin = serializers.DecimalField(max_digits=8, decimal_places=None)


class PackProfitReportSerializer(serializers.Serializer):
    rows = PackProfitRowSerializer(many=True)
    summary = PackProfitSummarySerializer()


class ResolvedPriceSerializer(serializers.Serializer):
    retail_price = _money()
    discount_amount = _money()
    final_price = _money()
    vendor_cost = _money()
    profit = _money()
    price_source = serializers.CharField()
    cost_source = serializers.CharField()
    is_available = serializers.BooleanField()
