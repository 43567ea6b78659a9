"""Models for the orders app (ad-hoc requests, bundle requests, pack subscriptions)."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class RequestStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    IN_PROGRESS = "in-progress", "In Progress"
    DELIVERED = "delivered", "Delivered"
    CHANGE_REQUEST = "change-request", "Change Request"
    CANCELED = "canceled", "Canceled"


# ---------------------------------------------------------------------------
# ServiceRequest
# ---------------------------------------------------------------------------

class ServiceRequest(TimeStampedModel):
    """An ad-hoc order for a single service.

    ``form_data`` is the raw key/value bag submitted by the client. Only a
    few keys matter for pricing (complexity, amount of products). Once
    ``final_price`` is set the request is never repriced from the catalog.
    """

    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="service_requests",
        verbose_name="client",
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.PROTECT,
        related_name="requests",
        verbose_name="service",
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_requests",
        verbose_name="assignee",
    )
    assigned_at = models.DateTimeField("assigned at", null=True, blank=True)
    status = models.CharField(
        "status",
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True,
    )
    order_number = models.CharField("order number", max_length=50, blank=True, default="")
    form_data = models.JSONField("form data", default=dict, blank=True)
    final_price = models.DecimalField(
        "final price",
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
    )
    coupon = models.ForeignKey(
        "catalog.DiscountCoupon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="service_requests",
        verbose_name="coupon",
    )
    due_date = models.DateTimeField("due date", null=True, blank=True)
    delivered_at = models.DateTimeField("delivered at", null=True, blank=True)

    class Meta:
        verbose_name = "service request"
        verbose_name_plural = "service requests"
        ordering = ["-created_at"]

    def __str__(self):
        return f"A-{str(self.pk)[:5].upper()}"


# ---------------------------------------------------------------------------
# BundleRequest
# ---------------------------------------------------------------------------

class BundleRequest(TimeStampedModel):
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="bundle_requests",
        verbose_name="client",
    )
    bundle = models.ForeignKey(
        "catalog.Bundle",
        on_delete=models.PROTECT,
        related_name="requests",
        verbose_name="bundle",
    )
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="assigned_bundle_requests",
        verbose_name="assignee",
    )
    status = models.CharField(
        "status",
        max_length=20,
        choices=RequestStatus.choices,
        default=RequestStatus.PENDING,
        db_index=True,
    )
    form_data = models.JSONField("form data", default=dict, blank=True)

    class Meta:
        verbose_name = "bundle request"
        verbose_name_plural = "bundle requests"
        ordering = ["-created_at"]

    def __str__(self):
        return f"B-{str(self.pk)[:5].upper()}"


# ---------------------------------------------------------------------------
# ClientPackSubscription
# ---------------------------------------------------------------------------

class ClientPackSubscription(TimeStampedModel):
    """A client's monthly pack subscription and who services it."""

    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="pack_subscriptions",
        verbose_name="client",
    )
    pack = models.ForeignKey(
        "catalog.ServicePack",
        on_delete=models.PROTECT,
        related_name="subscriptions",
        verbose_name="pack",
    )
    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="serviced_subscriptions",
        verbose_name="vendor",
    )
    start_date = models.DateField("start date")
    end_date = models.DateField("end date", null=True, blank=True)
    consumed_quantities = models.JSONField("consumed quantities", default=dict, blank=True)
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "pack subscription"
        verbose_name_plural = "pack subscriptions"
        ordering = ["-start_date"]

    def __str__(self):
        return f"{self.client} - {self.pack}"
