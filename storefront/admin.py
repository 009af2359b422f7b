from django.contrib import admin

from productcolors.admin import ProductVariantInline

from .models import Product
from .services.catalog import next_display_order, slugify_name, unique_slug


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ('name', 'category', 'price', 'compare_price', 'featured', 'display_order', 'created_at')
    list_filter = ('category', 'featured')
    search_fields = ('name', 'slug')
    readonly_fields = ('slug', 'created_at', 'updated_at')
    ordering = ('-display_order', '-created_at')
    inlines = [ProductVariantInline]

    def save_model(self, request, obj, form, change):
        # Новый товар: slug из названия и место в начале списка
        if not change:
            obj.slug = unique_slug(slugify_name(obj.name))
            obj.display_order = next_display_order()
        super().save_model(request, obj, form, change)
