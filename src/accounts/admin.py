from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for the custom User model."""

    # ------------------------------------------------------------------
    # List view
    # ------------------------------------------------------------------
    list_display = (
        "email",
        "username",
        "role",
        "vendor",
        "tripod_discount_tier",
        "is_active",
        "date_joined",
    )
    list_filter = ("role", "tripod_discount_tier", "is_active", "is_staff")
    search_fields = ("email", "username")
    ordering = ("username",)
    list_select_related = ("vendor",)

    # ------------------------------------------------------------------
    # Detail / edit view
    # ------------------------------------------------------------------
    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        (
            "Role and vendor",
            {"fields": ("role", "vendor")},
        ),
        (
            "Billing",
            {"fields": ("tripod_discount_tier", "payment_method")},
        ),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (
            "Important dates",
            {"fields": ("last_login", "date_joined")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "username",
                    "role",
                    "vendor",
                    "password1",
                    "password2",
                ),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")
