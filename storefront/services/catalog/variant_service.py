"""
Rewrite a product's variant rows from a submitted descriptor list.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from django.db import transaction

from productcolors.models import ProductVariant
from storefront.models import Product

from .color_service import (
    VariantDescriptor,
    apply_color_decision,
    build_color_context,
    resolve_color,
)

logger = logging.getLogger(__name__)


def _write_variants(
    product: Product,
    descriptors: Sequence[VariantDescriptor],
    *,
    is_new: bool,
    attached_color_ids: Iterable = (),
) -> List[ProductVariant]:
    attached = set(attached_color_ids)
    created: List[ProductVariant] = []
    # Позиция в списке = display_order варианта
    for position, descriptor in enumerate(descriptors):
        context = build_color_context(
            descriptor,
            product.pk,
            is_new=is_new,
            attached_color_ids=attached,
        )
        decision = resolve_color(descriptor, context, is_new=is_new)
        color_id = apply_color_decision(decision)
        created.append(
            ProductVariant.objects.create(
                product=product,
                size=descriptor.size,
                color_id=color_id,
                stock=descriptor.stock,
                display_order=position,
            )
        )
    return created


@transaction.atomic
def create_variants(product: Product, descriptors: Sequence[VariantDescriptor]) -> List[ProductVariant]:
    """
    Insert variants for a freshly created product.

    An explicit `color_id` on a descriptor takes priority over the lookup by
    colour value.
    """
    variants = _write_variants(product, descriptors, is_new=True)
    logger.info("Created %d variant(s) for product %s", len(variants), product.pk)
    return variants


@transaction.atomic
def replace_variants(product: Product, descriptors: Sequence[VariantDescriptor]) -> List[ProductVariant]:
    """
    Delete every variant of `product` and insert the submitted set.

    Runs in one transaction, so a failure part-way leaves the previous
    variants in place.
    """
    attached_color_ids = set(
        ProductVariant.objects.filter(product=product, color__isnull=False).values_list("color_id", flat=True)
    )
    deleted, _ = ProductVariant.objects.filter(product=product).delete()
    variants = _write_variants(
        product,
        descriptors,
        is_new=False,
        attached_color_ids=attached_color_ids,
    )
    logger.info(
        "Replaced variants for product %s: %d removed, %d inserted",
        product.pk,
        deleted,
        len(variants),
    )
    return variants
