"""
Manual display order for the product list.

Canonical order is ``display_order DESC, created_at DESC``. Moving a product
swaps its `display_order` with the neighbour in that order; nothing else is
renumbered.
"""
from __future__ import annotations

import logging

from django.core.exceptions import ValidationError
from django.db import models, transaction

from storefront.models import Product

logger = logging.getLogger(__name__)

CANONICAL_ORDER = ("-display_order", "-created_at")


class MoveDirection(models.TextChoices):
    UP = "up", "Up"
    DOWN = "down", "Down"


def next_display_order() -> int:
    """Order value that puts a new product first (max + 1, or 0 on an empty table)."""
    current = Product.objects.aggregate(max_order=models.Max("display_order"))["max_order"]
    if current is None:
        current = -1
    return current + 1


def move_product(product_id, direction: str) -> bool:
    """
    Move a product one step up or down the canonical list.

    Returns False when the product is already at that edge (nothing written).

    Raises:
        Product.DoesNotExist: unknown `product_id`.
        ValueError: unknown direction.
    """
    if direction not in MoveDirection.values:
        raise ValueError(f"Unknown direction: {direction!r}")

    try:
        current = Product.objects.only("id", "display_order").get(pk=product_id)
    except ValidationError:
        raise Product.DoesNotExist(f"Product {product_id!r} does not exist")
    rows = list(Product.objects.order_by(*CANONICAL_ORDER).values_list("id", "display_order"))
    index = next((i for i, (pk, _) in enumerate(rows) if pk == current.pk), None)
    if index is None:
        raise Product.DoesNotExist(f"Product {product_id!r} does not exist")

    target_index = index - 1 if direction == MoveDirection.UP else index + 1
    if target_index < 0 or target_index >= len(rows):
        logger.debug("Product %s already at the %s edge", product_id, direction)
        return False

    target_id, target_order = rows[target_index]
    with transaction.atomic():
        Product.objects.filter(pk=current.pk).update(display_order=target_order)
        Product.objects.filter(pk=target_id).update(display_order=current.display_order)

    logger.info(
        "Moved product %s %s: swapped display_order %s <-> %s with %s",
        current.pk,
        direction,
        current.display_order,
        target_order,
        target_id,
    )
    return True


@transaction.atomic
def resequence_display_order() -> int:
    """
    Renumber all products so canonical order becomes n-1 … 0 without ties.

    Returns the number of rows whose value changed.
    """
    rows = list(Product.objects.order_by(*CANONICAL_ORDER).values_list("id", "display_order"))
    total = len(rows)
    changed = 0
    for position, (pk, order) in enumerate(rows):
        wanted = total - 1 - position
        if order != wanted:
            Product.objects.filter(pk=pk).update(display_order=wanted)
            changed += 1
    logger.info("Resequenced display_order for %d product(s), %d changed", total, changed)
    return changed
