"""Admin configuration for the orders app."""
from django.contrib import admin

from .models import BundleRequest, ClientPackSubscription, ServiceRequest


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    list_display = ("__str__", "client", "service", "assignee", "status", "final_price", "created_at")
    list_filter = ("status", "service")
    search_fields = ("id", "order_number", "client__username", "service__title")
    readonly_fields = ("id", "created_at", "updated_at")
    list_select_related = ("client", "service", "assignee")
    date_hierarchy = "created_at"


@admin.register(BundleRequest)
class BundleRequestAdmin(admin.ModelAdmin):
    list_display = ("__str__", "client", "bundle", "assignee", "status", "created_at")
    list_filter = ("status", "bundle")
    search_fields = ("id", "client__username", "bundle__name")
    readonly_fields = ("id", "created_at", "updated_at")
    list_select_related = ("client", "bundle", "assignee")
    date_hierarchy = "created_at"


@admin.register(ClientPackSubscription)
class ClientPackSubscriptionAdmin(admin.ModelAdmin):
    list_display = ("client", "pack", "vendor", "start_date", "end_date", "is_active")
    list_filter = ("is_active", "pack")
    search_fields = ("client__username", "pack__name")
    list_select_related = ("client", "pack", "vendor")
