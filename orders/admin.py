from django.contrib import admin

from .models import Order


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Заказы магазина"""
    list_display = ('id', 'customer_name', 'phone', 'total', 'user', 'created_at')
    list_filter = ('created_at',)
    search_fields = ('customer_name', 'phone', 'email', 'user__email')
    readonly_fields = ('id', 'total', 'items', 'created_at')
    ordering = ('-created_at',)
