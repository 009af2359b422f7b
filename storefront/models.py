import uuid

from django.db import models


class Product(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    compare_price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    category = models.CharField(max_length=100, blank=True, null=True)
    images = models.JSONField(default=list, blank=True)
    featured = models.BooleanField(default=False)
    # Больше = выше в списке; новые товары получают max + 1
    display_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-display_order', '-created_at']
        indexes = [
            models.Index(fields=['display_order'], name='idx_product_display_order'),
            models.Index(fields=['featured'], name='idx_product_featured'),
        ]

    def __str__(self):
        return self.name
