import uuid

from django.db import models


class Color(models.Model):
    """
    Цветовой образец: имя, значение (HEX или ключевое слово) и собственная галерея.

    `value` намеренно не уникален: одинаковые значения у разных товаров
    разводятся по отдельным строкам, чтобы не делить изображения.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    value = models.CharField(max_length=64, db_index=True, help_text='#RRGGBB или ключевое слово')
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']

    def __str__(self):
        return f'{self.name} ({self.value})'


class ProductVariant(models.Model):
    """
    Вариант товара: размер + (опционально) цвет + остаток.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey('storefront.Product', on_delete=models.CASCADE, related_name='variants')
    size = models.CharField(max_length=50, blank=True)
    color = models.ForeignKey(
        Color,
        on_delete=models.SET_NULL,
        related_name='variants',
        null=True,
        blank=True,
    )
    stock = models.PositiveIntegerField(default=0)
    sku = models.CharField(max_length=64, blank=True, verbose_name='SKU')
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['display_order', 'size']
        unique_together = (('product', 'size', 'color'),)
        indexes = [
            models.Index(fields=['product', 'display_order'], name='idx_variant_product_order'),
        ]

    def __str__(self):
        color = self.color.name if self.color_id else '—'
        return f'{self.product} [{self.size} / {color}]'
