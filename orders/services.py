"""
Checkout: turn a validated cart into an `Order`.
"""
import logging
from decimal import Decimal

from .models import Order

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
RECENT_ORDERS_LIMIT = 200


def order_total(items):
    """Sum of price * quantity, rounded to cents. Prices are never taken from the client total."""
    total = sum((Decimal(item['price']) * item['quantity'] for item in items), Decimal('0'))
    return total.quantize(CENT)


def _stored_item(item):
    row = {
        'id': item['id'],
        'name': item['name'],
        'price': float(item['price']),
        'quantity': item['quantity'],
    }
    if item.get('image'):
        row['image'] = item['image']
    return row


def create_order(data, user=None):
    """
    Create an order from validated checkout data.

    Args:
        data: customer_name, email, phone, address, comment, items
        user: signed-in user or None for guest checkout
    """
    items = data['items']
    order = Order.objects.create(
        user=user if user is not None and user.is_authenticated else None,
        customer_name=data['customer_name'],
        email=data.get('email') or None,
        phone=data['phone'],
        address=data['address'],
        comment=data.get('comment') or None,
        total=order_total(items),
        items=[_stored_item(item) for item in items],
    )
    logger.info("Created order %s: %d item(s), total %s", order.pk, len(items), order.total)
    return order


def recent_orders(user):
    """Latest orders visible to `user`: all for staff, own otherwise."""
    queryset = Order.objects.order_by('-created_at')
    if user.is_staff:
        queryset = queryset.select_related('user__profile')
    else:
        queryset = queryset.filter(user=user)
    return queryset[:RECENT_ORDERS_LIMIT]
