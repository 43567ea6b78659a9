import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("title", models.CharField(max_length=255, verbose_name="title")),
                ("description", models.TextField(blank=True, default="", verbose_name="description")),
                ("category", models.CharField(blank=True, default="", max_length=100, verbose_name="category")),
                (
                    "base_price",
                    models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10, verbose_name="base price"),
                ),
                (
                    "price_range",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Display-only fallback, e.g. '$40 - $100'.",
                        max_length=100,
                        verbose_name="price range",
                    ),
                ),
                (
                    "pricing_structure",
                    models.CharField(
                        choices=[
                            ("single", "Single price"),
                            ("complexity", "Complexity tiers"),
                            ("quantity", "Quantity tiers"),
                        ],
                        default="single",
                        max_length=20,
                        verbose_name="pricing structure",
                    ),
                ),
                (
                    "hierarchy",
                    models.CharField(
                        choices=[("father", "Standalone"), ("son", "Add-on")],
                        default="father",
                        max_length=10,
                        verbose_name="hierarchy",
                    ),
                ),
                ("display_order", models.IntegerField(default=999, verbose_name="display order")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                (
                    "parent_service",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="add_ons",
                        to="catalog.service",
                        verbose_name="parent service",
                    ),
                ),
            ],
            options={
                "verbose_name": "service",
                "verbose_name_plural": "services",
                "ordering": ["display_order", "title"],
            },
        ),
        migrations.CreateModel(
            name="ServicePricingTier",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("label", models.CharField(max_length=100, verbose_name="label")),
                (
                    "price",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="price"),
                ),
                ("sort_order", models.IntegerField(default=0, verbose_name="sort order")),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pricing_tiers",
                        to="catalog.service",
                        verbose_name="service",
                    ),
                ),
            ],
            options={
                "verbose_name": "pricing tier",
                "verbose_name_plural": "pricing tiers",
                "ordering": ["service", "sort_order"],
            },
        ),
        migrations.CreateModel(
            name="BundleLineItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("description", models.TextField(blank=True, default="", verbose_name="description")),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="price")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
            ],
            options={
                "verbose_name": "bundle line item",
                "verbose_name_plural": "bundle line items",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Bundle",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("description", models.TextField(blank=True, default="", verbose_name="description")),
                (
                    "discount_percent",
                    models.DecimalField(
                        decimal_places=2, default=Decimal("0.00"), max_digits=5, verbose_name="discount percent"
                    ),
                ),
                (
                    "final_price",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Overrides the computed price when set.",
                        max_digits=10,
                        null=True,
                        verbose_name="final price",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
            ],
            options={
                "verbose_name": "bundle",
                "verbose_name_plural": "bundles",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="BundleItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(default=1, verbose_name="quantity")),
                (
                    "bundle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="catalog.bundle",
                        verbose_name="bundle",
                    ),
                ),
                (
                    "line_item",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bundle_items",
                        to="catalog.bundlelineitem",
                        verbose_name="line item",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bundle_items",
                        to="catalog.service",
                        verbose_name="service",
                    ),
                ),
            ],
            options={
                "verbose_name": "bundle item",
                "verbose_name_plural": "bundle items",
            },
        ),
        migrations.CreateModel(
            name="ServicePack",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("name", models.CharField(max_length=255, verbose_name="name")),
                ("description", models.TextField(blank=True, default="", verbose_name="description")),
                ("price", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="monthly price")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
            ],
            options={
                "verbose_name": "service pack",
                "verbose_name_plural": "service packs",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="ServicePackItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity", models.PositiveIntegerField(verbose_name="monthly quantity")),
                (
                    "pack",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="catalog.servicepack",
                        verbose_name="pack",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pack_items",
                        to="catalog.service",
                        verbose_name="service",
                    ),
                ),
            ],
            options={
                "verbose_name": "pack item",
                "verbose_name_plural": "pack items",
            },
        ),
        migrations.CreateModel(
            name="DiscountCoupon",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("code", models.CharField(max_length=50, unique=True, verbose_name="code")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                (
                    "discount_type",
                    models.CharField(
                        choices=[("percentage", "Percentage"), ("amount", "Fixed amount")],
                        default="percentage",
                        max_length=20,
                        verbose_name="discount type",
                    ),
                ),
                ("discount_value", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="discount value")),
                (
                    "service_scope",
                    models.CharField(
                        choices=[("all", "All"), ("none", "None"), ("specific", "Specific")],
                        default="all",
                        max_length=10,
                        verbose_name="ad-hoc services",
                    ),
                ),
                (
                    "bundle_scope",
                    models.CharField(
                        choices=[("all", "All"), ("none", "None"), ("specific", "Specific")],
                        default="all",
                        max_length=10,
                        verbose_name="bundles",
                    ),
                ),
                ("max_uses", models.PositiveIntegerField(default=1, verbose_name="max uses")),
                ("current_uses", models.PositiveIntegerField(default=0, verbose_name="current uses")),
                ("valid_from", models.DateField(blank=True, null=True, verbose_name="valid from")),
                ("valid_to", models.DateField(blank=True, null=True, verbose_name="valid to")),
                (
                    "bundle",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coupons",
                        to="catalog.bundle",
                        verbose_name="bundle",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coupons",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="restricted to client",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="coupons",
                        to="catalog.service",
                        verbose_name="service",
                    ),
                ),
            ],
            options={
                "verbose_name": "discount coupon",
                "verbose_name_plural": "discount coupons",
                "ordering": ["code"],
            },
        ),
    ]
