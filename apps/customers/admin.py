from django.contrib import admin

from .models import Customer, TaxProfile


class TaxProfileInline(admin.StackedInline):
    model = TaxProfile
    can_delete = False
    extra = 0


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("id", "full_name", "email", "is_active", "registered_at")
    list_filter = ("is_active",)
    search_fields = ("full_name", "email")
    readonly_fields = ("registered_at",)
    inlines = [TaxProfileInline]


@admin.register(TaxProfile)
class TaxProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "tax_id", "city", "postal_code")
    search_fields = ("tax_id", "customer__full_name", "customer__email")
    list_select_related = ("customer",)
