import uuid

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("An email address is required.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("username", email.split("@")[0])
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Marketplace principal.

    Role hierarchy: admin > internal_designer > vendor > vendor_designer > client.
    A vendor designer belongs to exactly one vendor through ``vendor``; the
    discount tier only matters for clients.
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        INTERNAL_DESIGNER = "internal_designer", "Internal designer"
        VENDOR = "vendor", "Vendor"
        VENDOR_DESIGNER = "vendor_designer", "Vendor designer"
        CLIENT = "client", "Client"

    class DiscountTier(models.TextChoices):
        NONE = "none", "No discount"
        POWER_LEVEL = "power_level", "Tri-POD Power Level Client (10%)"
        OMS_SUBSCRIPTION = "oms_subscription", "OMS Subscription (15%)"
        ENTERPRISE = "enterprise", "Enterprise (20%)"

    class PaymentMethod(models.TextChoices):
        PAY_AS_YOU_GO = "pay_as_you_go", "Pay as you go"
        MONTHLY_PAYMENT = "monthly_payment", "Monthly payment"
        DEDUCT_FROM_ROYALTIES = "deduct_from_royalties", "Deduct from royalties"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "email address",
        unique=True,
        error_messages={
            "unique": "A user with this email address already exists.",
        },
    )
    username = models.CharField("username", max_length=150)
    role = models.CharField(
        "role",
        max_length=20,
        choices=Role.choices,
        default=Role.CLIENT,
        db_index=True,
    )
    vendor = models.ForeignKey(
        "self",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="team_members",
        verbose_name="parent vendor",
        limit_choices_to={"role": "vendor"},
    )
    tripod_discount_tier = models.CharField(
        "Tri-POD discount tier",
        max_length=20,
        choices=DiscountTier.choices,
        default=DiscountTier.NONE,
    )
    payment_method = models.CharField(
        "payment method",
        max_length=30,
        choices=PaymentMethod.choices,
        blank=True,
        default="",
    )
    is_active = models.BooleanField("active", default=True, db_index=True)
    is_staff = models.BooleanField("staff status", default=False)
    date_joined = models.DateTimeField("date joined", default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["username"]

    def __str__(self):
        return self.username or self.email

    # ------------------------------------------------------------------
    # Role helper properties
    # ------------------------------------------------------------------

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    @property
    def is_vendor(self):
        return self.role == self.Role.VENDOR

    @property
    def is_vendor_designer(self):
        return self.role == self.Role.VENDOR_DESIGNER

    @property
    def is_client(self):
        return self.role == self.Role.CLIENT

    @property
    def vendor_account_id(self):
        """Id of the vendor this user works for, or ``None``."""
        if self.is_vendor:
            return self.pk
        if self.is_vendor_designer:
            return self.vendor_id
        return None
