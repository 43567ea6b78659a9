import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="VendorProfile",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("company_name", models.CharField(max_length=255, verbose_name="company name")),
                ("website", models.URLField(blank=True, default="", verbose_name="website")),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="email")),
                ("phone", models.CharField(blank=True, default="", max_length=30, verbose_name="phone")),
                ("pricing_agreements", models.JSONField(blank=True, default=dict, verbose_name="pricing agreements")),
                ("sla_config", models.JSONField(blank=True, default=dict, verbose_name="SLA configuration")),
                ("deleted_at", models.DateTimeField(blank=True, null=True, verbose_name="deleted at")),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_profile",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="vendor",
                    ),
                ),
            ],
            options={
                "verbose_name": "vendor profile",
                "verbose_name_plural": "vendor profiles",
                "ordering": ["company_name"],
            },
        ),
        migrations.CreateModel(
            name="VendorBundleCost",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("cost", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="cost")),
                (
                    "bundle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_costs",
                        to="catalog.bundle",
                        verbose_name="bundle",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="bundle_costs",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="vendor",
                    ),
                ),
            ],
            options={
                "verbose_name": "vendor bundle cost",
                "verbose_name_plural": "vendor bundle costs",
                "unique_together": {("vendor", "bundle")},
            },
        ),
        migrations.CreateModel(
            name="VendorPackCost",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("cost", models.DecimalField(decimal_places=2, max_digits=10, verbose_name="cost")),
                (
                    "pack",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vendor_costs",
                        to="catalog.servicepack",
                        verbose_name="pack",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pack_costs",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="vendor",
                    ),
                ),
            ],
            options={
                "verbose_name": "vendor pack cost",
                "verbose_name_plural": "vendor pack costs",
                "unique_together": {("vendor", "pack")},
            },
        ),
    ]
