from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    can_delete = False
    readonly_fields = ("product", "quantity", "unit_price")


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "status", "city", "created_at")
    list_filter = ("status",)
    search_fields = ("customer__full_name", "customer__email", "city", "postal_code")
    list_select_related = ("customer",)
    readonly_fields = ("created_at",)
    inlines = [OrderItemInline]

    def has_delete_permission(self, request, obj=None) -> bool:
        return False
