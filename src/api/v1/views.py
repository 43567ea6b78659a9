"""REST API endpoints for profit reporting and request quotes."""
import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from api.v1.permissions import IsAdminRole
from api.v1.serializers import (
    PackProfitReportQuerySerializer,
    PackProfitReportSerializer,
    ProfitReportQuerySerializer,
    ProfitReportSerializer,
    QuoteQuerySerializer,
    ResolvedPriceSerializer,
)
from orders.models import ServiceRequest
from orders.services import quote_request
from reports.services import get_pack_profit_report, get_profit_report

logger = logging.getLogger("servicehub")


class ProfitReportAPIView(APIView):
    """
    GET endpoint returning per-request profit rows and their totals.

    Query params:
        - vendor, service, bundle (optional): UUIDs
        - method (optional): 'ad_hoc' or 'bundle'
        - date_from, date_to (optional): YYYY-MM-DD, inclusive
        - clients (optional): comma-separated client UUIDs
        - search (optional): job number or request id fragment
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        query = ProfitReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        report = get_profit_report(query.to_filters())
        return Response(ProfitReportSerializer(report).data)


class PackProfitReportAPIView(APIView):
    """
    GET endpoint returning pack subscription profitability.

    Query params:
        - vendor, pack (optional): UUIDs
        - status (optional): 'active' or 'inactive'
    """

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request):
        query = PackProfitReportQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        report = get_pack_profit_report(query.to_filters())
        return Response(PackProfitReportSerializer(report).data)


class ServiceRequestQuoteAPIView(APIView):
    """GET the resolved price of one ad-hoc request, optionally with a coupon code."""

    permission_classes = [IsAuthenticated, IsAdminRole]

    def get(self, request, pk):
        query = QuoteQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        service_request = get_object_or_404(
            ServiceRequest.objects.select_related("client", "service", "assignee", "coupon"),
            pk=pk,
        )
        try:
            quote = quote_request(service_request, coupon_code=query.validated_data.get("coupon") or None)
        except ValueError as exc:
            logger.info("Quote rejected for %s: %s", service_request, exc)
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(ResolvedPriceSerializer(quote).data)
