import uuid

from django.conf import settings
from django.db import models


class Order(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='orders',
        null=True,
        blank=True,
    )
    customer_name = models.CharField(max_length=200)
    email = models.EmailField(max_length=254, blank=True, null=True, verbose_name='Email')
    phone = models.CharField(max_length=32)
    address = models.TextField()
    comment = models.TextField(blank=True, null=True)
    total = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    # [{id, name, price, quantity, image?}] на момент оформления
    items = models.JSONField(default=list)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='idx_order_created_desc'),
            models.Index(fields=['user', '-created_at'], name='idx_order_user_created'),
        ]

    def __str__(self):
        return f'Order {self.pk} ({self.customer_name})'
