"""Admin configuration for the catalog app."""
from django.contrib import admin

from .models import (
    Bundle,
    BundleItem,
    BundleLineItem,
    DiscountCoupon,
    Service,
    ServicePack,
    ServicePackItem,
    ServicePricingTier,
)


# ---------------------------------------------------------------------------
# Inlines
# ---------------------------------------------------------------------------

class ServicePricingTierInline(admin.TabularInline):
    model = ServicePricingTier
    extra = 1
    fields = ("label", "price", "sort_order")
    ordering = ("sort_order",)


class BundleItemInline(admin.TabularInline):
    model = BundleItem
    extra = 1
    fields = ("service", "line_item", "quantity")


class ServicePackItemInline(admin.TabularInline):
    model = ServicePackItem
    extra = 1
    fields = ("service", "quantity")


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "category",
        "pricing_structure",
        "base_price",
        "hierarchy",
        "display_order",
        "is_active",
    )
    list_filter = ("is_active", "pricing_structure", "hierarchy")
    search_fields = ("title", "category")
    list_editable = ("is_active",)
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [ServicePricingTierInline]
    list_per_page = 50
    fieldsets = (
        (None, {
            "fields": ("title", "description", "category"),
        }),
        ("Pricing", {
            "fields": ("pricing_structure", "base_price", "price_range"),
        }),
        ("Hierarchy", {
            "fields": ("hierarchy", "parent_service", "display_order"),
        }),
        ("Status", {
            "fields": ("is_active",),
        }),
        ("Metadata", {
            "classes": ("collapse",),
            "fields": ("id", "created_at", "updated_at"),
        }),
    )


# ---------------------------------------------------------------------------
# Bundles & packs
# ---------------------------------------------------------------------------

@admin.register(BundleLineItem)
class BundleLineItemAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name",)


@admin.register(Bundle)
class BundleAdmin(admin.ModelAdmin):
    list_display = ("name", "discount_percent", "final_price", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name",)
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [BundleItemInline]


@admin.register(ServicePack)
class ServicePackAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name",)
    readonly_fields = ("id", "created_at", "updated_at")
    inlines = [ServicePackItemInline]


# ---------------------------------------------------------------------------
# DiscountCoupon
# ---------------------------------------------------------------------------

@admin.register(DiscountCoupon)
class DiscountCouponAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "discount_type",
        "discount_value",
        "service_scope",
        "bundle_scope",
        "client",
        "current_uses",
        "max_uses",
        "valid_from",
        "valid_to",
        "is_active",
    )
    list_filter = ("is_active", "discount_type", "service_scope", "bundle_scope")
    search_fields = ("code",)
    list_select_related = ("client", "service", "bundle")
