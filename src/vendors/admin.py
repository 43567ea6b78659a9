"""Admin configuration for the vendors app."""
from django.contrib import admin

from .models import VendorBundleCost, VendorPackCost, VendorProfile


@admin.register(VendorProfile)
class VendorProfileAdmin(admin.ModelAdmin):
    list_display = ("company_name", "user", "email", "phone", "deleted_at", "created_at")
    list_filter = ("deleted_at",)
    search_fields = ("company_name", "user__email", "user__username")
    readonly_fields = ("id", "created_at", "updated_at")
    list_select_related = ("user",)


@admin.register(VendorBundleCost)
class VendorBundleCostAdmin(admin.ModelAdmin):
    list_display = ("vendor", "bundle", "cost", "updated_at")
    search_fields = ("vendor__username", "bundle__name")
    list_select_related = ("vendor", "bundle")


@admin.register(VendorPackCost)
class VendorPackCostAdmin(admin.ModelAdmin):
    list_display = ("vendor", "pack", "cost", "updated_at")
    search_fields = ("vendor__username", "pack__name")
    list_select_related = ("vendor", "pack")
