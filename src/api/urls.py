"""Main API URL router for /api/v1/."""
from django.urls import path

from api.v1 import views as v1_views

app_name = "api"
urlpatterns = [
    # Reports
    path("reports/profit/", v1_views.ProfitReportAPIView.as_view(), name="profit-report"),
    path("reports/pack-profit/", v1_views.PackProfitReportAPIView.as_view(), name="pack-profit-report"),

    # Orders
    path(
        "service-requests/<uuid:pk>/quote/",
        v1_views.ServiceRequestQuoteAPIView.as_view(),
        name="service-request-quote",
    ),
]
