"""Models for the vendors app (profiles and cost agreements)."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class VendorProfile(TimeStampedModel):
    """Company details and cost agreements of a vendor principal.

    ``pricing_agreements`` maps a service title to the vendor's own price
    table for it::

        {
            "Creative Art": {"basePrice": 25, "complexity": {"Basic": 20, "Ultimate": 55}},
            "Store Creation": {"quantity": {"1-50": 1.2, "51-75": 1.0, ">101": 0.7}},
        }

    These tables are independent from the client-facing pricing tiers and may
    use different brackets for the same service.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="vendor_profile",
        verbose_name="vendor",
    )
    company_name = models.CharField("company name", max_length=255)
    website = models.URLField("website", blank=True, default="")
    email = models.EmailField("email", blank=True, default="")
    phone = models.CharField("phone", max_length=30, blank=True, default="")
    pricing_agreements = models.JSONField("pricing agreements", default=dict, blank=True)
    sla_config = models.JSONField("SLA configuration", default=dict, blank=True)
    deleted_at = models.DateTimeField("deleted at", null=True, blank=True)

    class Meta:
        verbose_name = "vendor profile"
        verbose_name_plural = "vendor profiles"
        ordering = ["company_name"]

    def __str__(self):
        return self.company_name


class VendorBundleCost(TimeStampedModel):
    """Flat amount a vendor is paid for fulfilling one bundle request."""

    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bundle_costs",
        verbose_name="vendor",
    )
    bundle = models.ForeignKey(
        "catalog.Bundle",
        on_delete=models.CASCADE,
        related_name="vendor_costs",
        verbose_name="bundle",
    )
    cost = models.DecimalField("cost", max_digits=10, decimal_places=2)

    class Meta:
        verbose_name = "vendor bundle cost"
        verbose_name_plural = "vendor bundle costs"
        unique_together = [["vendor", "bundle"]]

    def __str__(self):
        return f"{self.vendor} / {self.bundle}: {self.cost}"


class VendorPackCost(TimeStampedModel):
    """Monthly amount a vendor is paid for servicing one pack subscription."""

    vendor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="pack_costs",
        verbose_name="vendor",
    )
    pack = models.ForeignKey(
        "catalog.ServicePack",
        on_delete=models.CASCADE,
        related_name="vendor_costs",
        verbose_name="pack",
    )
    cost = models.DecimalField("cost", max_digits=10, decimal_places=2)

    class Meta:
        verbose_name = "vendor pack cost"
        verbose_name_plural = "vendor pack costs"
        unique_together = [["vendor", "pack"]]

    def __str__(self):
        return f"{self.vendor} / {self.pack}: {self.cost}"
