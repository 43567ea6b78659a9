"""Models for the catalog app (services, tiers, bundles, packs, coupons)."""
from decimal import Decimal

from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class Service(TimeStampedModel):
    """A creative service clients can order ad hoc."""

    class PricingStructure(models.TextChoices):
        SINGLE = "single", "Single price"
        COMPLEXITY = "complexity", "Complexity tiers"
        QUANTITY = "quantity", "Quantity tiers"

    class Hierarchy(models.TextChoices):
        FATHER = "father", "Standalone"
        SON = "son", "Add-on"

    title = models.CharField("title", max_length=255)
    description = models.TextField("description", blank=True, default="")
    category = models.CharField("category", max_length=100, blank=True, default="")
    base_price = models.DecimalField(
        "base price",
        max_digits=10,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    price_range = models.CharField(
        "price range",
        max_length=100,
        blank=True,
        default="",
        help_text="Display-only fallback, e.g. '$40 - $100'.",
    )
    pricing_structure = models.CharField(
        "pricing structure",
        max_length=20,
        choices=PricingStructure.choices,
        default=PricingStructure.SINGLE,
    )
    hierarchy = models.CharField(
        "hierarchy",
        max_length=10,
        choices=Hierarchy.choices,
        default=Hierarchy.FATHER,
    )
    parent_service = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="add_ons",
        verbose_name="parent service",
    )
    display_order = models.IntegerField("display order", default=999)
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "service"
        verbose_name_plural = "services"
        ordering = ["display_order", "title"]

    def __str__(self):
        return self.title


# ---------------------------------------------------------------------------
# ServicePricingTier
# ---------------------------------------------------------------------------

class ServicePricingTier(TimeStampedModel):
    """Client-facing tier of a complexity- or quantity-priced service.

    For complexity services ``price`` is the flat price of the level named by
    ``label``; for quantity services it is the unit price of the bracket
    described by ``label`` ("1-50", "101+", ">101").
    """

    service = models.ForeignKey(
        Service,
        on_delete=models.CASCADE,
        related_name="pricing_tiers",
        verbose_name="service",
    )
    label = models.CharField("label", max_length=100)
    price = models.DecimalField(
        "price",
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
    )
    sort_order = models.IntegerField("sort order", default=0)

    class Meta:
        verbose_name = "pricing tier"
        verbose_name_plural = "pricing tiers"
        ordering = ["service", "sort_order"]

    def __str__(self):
        return f"{self.service.title} - {self.label}"


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

class BundleLineItem(TimeStampedModel):
    """A task that is only sold inside bundles."""

    name = models.CharField("name", max_length=255)
    description = models.TextField("description", blank=True, default="")
    price = models.DecimalField("price", max_digits=10, decimal_places=2)
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "bundle line item"
        verbose_name_plural = "bundle line items"
        ordering = ["name"]

    def __str__(self):
        return self.name


class Bundle(TimeStampedModel):
    """A fixed collection of services and line items sold at one price."""

    name = models.CharField("name", max_length=255)
    description = models.TextField("description", blank=True, default="")
    discount_percent = models.DecimalField(
        "discount percent",
        max_digits=5,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    final_price = models.DecimalField(
        "final price",
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        help_text="Overrides the computed price when set.",
    )
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "bundle"
        verbose_name_plural = "bundles"
        ordering = ["name"]

    def __str__(self):
        return self.name


class BundleItem(models.Model):
    """A service or line item inside a bundle, with its quantity."""

    bundle = models.ForeignKey(
        Bundle,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name="bundle",
    )
    service = models.ForeignKey(
        Service,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bundle_items",
        verbose_name="service",
    )
    line_item = models.ForeignKey(
        BundleLineItem,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="bundle_items",
        verbose_name="line item",
    )
    quantity = models.PositiveIntegerField("quantity", default=1)

    class Meta:
        verbose_name = "bundle item"
        verbose_name_plural = "bundle items"

    def __str__(self):
        target = self.service or self.line_item
        return f"{self.quantity} x {target}"


# ---------------------------------------------------------------------------
# Service packs
# ---------------------------------------------------------------------------

class ServicePack(TimeStampedModel):
    """Monthly subscription pack with a fixed allotment of services."""

    name = models.CharField("name", max_length=255)
    description = models.TextField("description", blank=True, default="")
    price = models.DecimalField("monthly price", max_digits=10, decimal_places=2)
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "service pack"
        verbose_name_plural = "service packs"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ServicePackItem(models.Model):
    pack = models.ForeignKey(
        ServicePack,
        on_delete=models.CASCADE,
        related_name="items",
        verbose_name="pack",
    )
    service = models.ForeignKey(
        Service,
        on_delete=models.PROTECT,
        related_name="pack_items",
        verbose_name="service",
    )
    quantity = models.PositiveIntegerField("monthly quantity")

    class Meta:
        verbose_name = "pack item"
        verbose_name_plural = "pack items"

    def __str__(self):
        return f"{self.quantity} x {self.service}"


# ---------------------------------------------------------------------------
# DiscountCoupon
# ---------------------------------------------------------------------------

class DiscountCoupon(TimeStampedModel):
    """Coupon code redeemable on ad-hoc requests and/or bundles."""

    class DiscountType(models.TextChoices):
        PERCENTAGE = "percentage", "Percentage"
        AMOUNT = "amount", "Fixed amount"

    class Scope(models.TextChoices):
        ALL = "all", "All"
        NONE = "none", "None"
        SPECIFIC = "specific", "Specific"

    code = models.CharField("code", max_length=50, unique=True)
    is_active = models.BooleanField("active", default=True)
    discount_type = models.CharField(
        "discount type",
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.PERCENTAGE,
    )
    discount_value = models.DecimalField("discount value", max_digits=10, decimal_places=2)
    service_scope = models.CharField(
        "ad-hoc services",
        max_length=10,
        choices=Scope.choices,
        default=Scope.ALL,
    )
    service = models.ForeignKey(
        Service,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="coupons",
        verbose_name="service",
    )
    bundle_scope = models.CharField(
        "bundles",
        max_length=10,
        choices=Scope.choices,
        default=Scope.ALL,
    )
    bundle = models.ForeignKey(
        Bundle,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="coupons",
        verbose_name="bundle",
    )
    client = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="coupons",
        verbose_name="restricted to client",
    )
    max_uses = models.PositiveIntegerField("max uses", default=1)
    current_uses = models.PositiveIntegerField("current uses", default=0)
    valid_from = models.DateField("valid from", null=True, blank=True)
    valid_to = models.DateField("valid to", null=True, blank=True)

    class Meta:
        verbose_name = "discount coupon"
        verbose_name_plural = "discount coupons"
        ordering = ["code"]

    def __str__(self):
        return self.code
