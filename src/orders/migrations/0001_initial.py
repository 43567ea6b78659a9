import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

STATUS_CHOICES = [
    ("pending", "Pending"),
    ("in-progress", "In Progress"),
    ("delivered", "Delivered"),
    ("change-request", "Change Request"),
    ("canceled", "Canceled"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ServiceRequest",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("assigned_at", models.DateTimeField(blank=True, null=True, verbose_name="assigned at")),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES, db_index=True, default="pending", max_length=20, verbose_name="status"
                    ),
                ),
                ("order_number", models.CharField(blank=True, default="", max_length=50, verbose_name="order number")),
                ("form_data", models.JSONField(blank=True, default=dict, verbose_name="form data")),
                (
                    "final_price",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True, verbose_name="final price"),
                ),
                ("due_date", models.DateTimeField(blank=True, null=True, verbose_name="due date")),
                ("delivered_at", models.DateTimeField(blank=True, null=True, verbose_name="delivered at")),
                (
                    "assignee",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_requests",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="assignee",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="service_requests",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="client",
                    ),
                ),
                (
                    "coupon",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="service_requests",
                        to="catalog.discountcoupon",
                        verbose_name="coupon",
                    ),
                ),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="requests",
                        to="catalog.service",
                        verbose_name="service",
                    ),
                ),
            ],
            options={
                "verbose_name": "service request",
                "verbose_name_plural": "service requests",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="BundleRequest",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                (
                    "status",
                    models.CharField(
                        choices=STATUS_CHOICES, db_index=True, default="pending", max_length=20, verbose_name="status"
                    ),
                ),
                ("form_data", models.JSONField(blank=True, default=dict, verbose_name="form data")),
                (
                    "assignee",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="assigned_bundle_requests",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="assignee",
                    ),
                ),
                (
                    "bundle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="requests",
                        to="catalog.bundle",
                        verbose_name="bundle",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bundle_requests",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="client",
                    ),
                ),
            ],
            options={
                "verbose_name": "bundle request",
                "verbose_name_plural": "bundle requests",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ClientPackSubscription",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("start_date", models.DateField(verbose_name="start date")),
                ("end_date", models.DateField(blank=True, null=True, verbose_name="end date")),
                ("consumed_quantities", models.JSONField(blank=True, default=dict, verbose_name="consumed quantities")),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="pack_subscriptions",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="client",
                    ),
                ),
                (
                    "pack",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="subscriptions",
                        to="catalog.servicepack",
                        verbose_name="pack",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="serviced_subscriptions",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="vendor",
                    ),
                ),
            ],
            options={
                "verbose_name": "pack subscription",
                "verbose_name_plural": "pack subscriptions",
                "ordering": ["-start_date"],
            },
        ),
    ]
