import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import accounts.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "email",
                    models.EmailField(
                        error_messages={"unique": "A user with this email address already exists."},
                        max_length=254,
                        unique=True,
                        verbose_name="email address",
                    ),
                ),
                ("username", models.CharField(max_length=150, verbose_name="username")),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("admin", "Admin"),
                            ("internal_designer", "Internal designer"),
                            ("vendor", "Vendor"),
                            ("vendor_designer", "Vendor designer"),
                            ("client", "Client"),
                        ],
                        db_index=True,
                        default="client",
                        max_length=20,
                        verbose_name="role",
                    ),
                ),
                (
                    "tripod_discount_tier",
                    models.CharField(
                        choices=[
                            ("none", "No discount"),
                            ("power_level", "Tri-POD Power Level Client (10%)"),
                            ("oms_subscription", "OMS Subscription (15%)"),
                            ("enterprise", "Enterprise (20%)"),
                        ],
                        default="none",
                        max_length=20,
                        verbose_name="Tri-POD discount tier",
                    ),
                ),
                (
                    "payment_method",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("pay_as_you_go", "Pay as you go"),
                            ("monthly_payment", "Monthly payment"),
                            ("deduct_from_royalties", "Deduct from royalties"),
                        ],
                        default="",
                        max_length=30,
                        verbose_name="payment method",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="active")),
                ("is_staff", models.BooleanField(default=False, verbose_name="staff status")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
                (
                    "vendor",
                    models.ForeignKey(
                        blank=True,
                        limit_choices_to={"role": "vendor"},
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="team_members",
                        to="accounts.user",
                        verbose_name="parent vendor",
                    ),
                ),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "ordering": ["username"],
            },
            managers=[
                ("objects", accounts.models.UserManager()),
            ],
        ),
    ]
