from django.contrib import admin
from django.db.models import Count

from .models import Color, ProductVariant


@admin.register(Color)
class ColorAdmin(admin.ModelAdmin):
    list_display = ('name', 'value', 'variant_count', 'created_at')
    search_fields = ('name', 'value')

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_variant_count=Count('variants'))

    @admin.display(ordering='_variant_count', description='Variants')
    def variant_count(self, obj):
        return obj._variant_count


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    fields = ('size', 'color', 'stock', 'sku', 'display_order')
    extra = 0
    ordering = ('display_order', 'size')
